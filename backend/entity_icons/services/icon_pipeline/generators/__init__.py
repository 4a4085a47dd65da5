"""
Icon Pipeline Generators
"""

from .icon_generator import IconVariantGenerator

__all__ = ["IconVariantGenerator"]
