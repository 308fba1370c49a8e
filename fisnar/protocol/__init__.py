"""
F4200N wire protocol: command encoding, reply decoding and capability types.
"""
