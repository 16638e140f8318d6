"""
signedgen — regenerate source files without losing hand-written edits.
"""

__version__ = "0.1.0"
