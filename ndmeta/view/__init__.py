"""
Read-only, transform-derived views of metadata items and stores.
"""

from .item_view import MetadataItemView
from .store_view import MetadataStoreView
from .subsample_view import MetadataItemSubsampleView, MetadataStoreSubsampleView

__all__ = [
    "MetadataItemView",
    "MetadataStoreView",
    "MetadataItemSubsampleView",
    "MetadataStoreSubsampleView",
]
