"""
Part Inspector
Live color and shape inspection of the central box of a camera feed.
"""

__version__ = "1.0.0"
