"""
Command-line tools: fisnar-dxf and fisnar-ports.
"""
