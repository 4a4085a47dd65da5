"""
Entity Icons - fixed-size icon derivation and serving for CMS entities.
"""

__version__ = "1.0.0"
