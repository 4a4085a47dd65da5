"""
Icon Pipeline Services
"""

from .size_resolver_service import IconSizeResolver
from .source_service import IconSourceResolver, ResolvedIconSource

__all__ = ["IconSizeResolver", "IconSourceResolver", "ResolvedIconSource"]
