"""
Core conversion engine: color codec, formatters, tree converter and
format detection. No file I/O happens here outside ``writer``.
"""
