"""
ndmeta - N-dimensional metadata that follows its data through views.

Metadata items (calibrations, lookup tables, provenance, free-form
attributes) are attached to axes of a dataset and collected in a
MetadataStore. Slicing, permuting, rotating, translating, inverting,
inserting axes or subsampling a store yields a read-only view whose items
are remapped to the new coordinates, with items whose axes were sliced away
dropped from enumeration.
"""

from .core.errors import (
    InvalidAxisError,
    MetadataError,
    MetadataNotFoundError,
    ReadOnlyStoreError,
)
from .core.item import (
    AbsentItem,
    ConstantItem,
    MetadataItem,
    VaryingItem,
    Viewable,
    absent,
    constant,
    item,
    varying,
)
from .core.registry import register_info
from .core.store import MetadataStore, SimpleMetadataStore
from .core.transform import AxisTransform
from .dataset import Dataset, DatasetView
from .utils.logging_config import setup_logging
from .view import (
    MetadataItemSubsampleView,
    MetadataItemView,
    MetadataStoreSubsampleView,
    MetadataStoreView,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AbsentItem",
    "AxisTransform",
    "ConstantItem",
    "Dataset",
    "DatasetView",
    "InvalidAxisError",
    "MetadataError",
    "MetadataItem",
    "MetadataItemSubsampleView",
    "MetadataItemView",
    "MetadataNotFoundError",
    "MetadataStore",
    "MetadataStoreSubsampleView",
    "MetadataStoreView",
    "ReadOnlyStoreError",
    "SimpleMetadataStore",
    "VaryingItem",
    "Viewable",
    "absent",
    "constant",
    "item",
    "register_info",
    "setup_logging",
    "varying",
]
