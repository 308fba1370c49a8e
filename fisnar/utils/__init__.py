"""
Shared helpers: geometry and exception types.
"""
