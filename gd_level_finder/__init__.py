"""
gd-level-finder

Discord bot that searches Geometry Dash levels and filters them locally by
object counts, required object ids, exact length and difficulty.
"""

__version__ = "0.1.0"
