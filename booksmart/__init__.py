"""
BookSmart - tags skill, map-marker and quest books in their display names.
"""

__version__ = "0.3.0"
