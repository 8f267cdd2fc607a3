"""HexDiff - positional binary diff backend"""

__version__ = "1.0.0"
