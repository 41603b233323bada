"""
Convenience helpers layered on the MetadataStore contract.

Store implementations only provide ``item``/``items``/``add``; lookups by
name, by axis or with a default are expressed here once for every backend.
"""

from typing import Any, List, Optional, Sequence

from .item import MetadataItem, constant, varying
from .store import MetadataStore

_MISSING = object()


def put_constant(store: MetadataStore, name: str, value: Any, *dims: int) -> MetadataItem:
    """Add a constant item sized to ``store`` and return it."""
    new_item = constant(name, value, store.num_dimensions, *dims)
    store.add(new_item)
    return new_item


def put_varying(
    store: MetadataStore,
    name: str,
    data: Any,
    *dims: int,
    varying_axes: Optional[Sequence[int]] = None,
) -> MetadataItem:
    """Add a varying item sized to ``store`` and return it."""
    new_item = varying(
        name, data, store.num_dimensions, *dims, varying_axes=varying_axes
    )
    store.add(new_item)
    return new_item


def value_of(
    store: MetadataStore,
    name: str,
    *dims: int,
    of_type: Optional[type] = None,
    default: Any = _MISSING,
) -> Any:
    """
    Look up an item and return its value.

    Without ``default`` a missing item raises MetadataNotFoundError; with it,
    the default is returned instead.
    """
    found = store.item(name, *dims, of_type=of_type)
    if default is _MISSING:
        return found.value()
    return found.value_or(default)


def items_named(store: MetadataStore, name: str) -> List[MetadataItem]:
    return [entry for entry in store.items() if entry.name == name]


def items_attached_to(store: MetadataStore, *dims: int) -> List[MetadataItem]:
    """Items attached to every axis in ``dims`` (all items when none given)."""
    return [entry for entry in store.items() if entry.is_attached_to(*dims)]


def names(store: MetadataStore) -> List[str]:
    seen = []
    for entry in store.items():
        if entry.name not in seen:
            seen.append(entry.name)
    return seen
