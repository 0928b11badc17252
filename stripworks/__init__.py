"""
Stripworks - sprite-strip slicing, timeline and pixel editing, and runtime preview.
"""

__version__ = "0.1.0"
