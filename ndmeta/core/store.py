# ndmeta/core/store.py
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .errors import ReadOnlyStoreError
from .fluent import FluentViewMixin
from .item import MetadataItem, absent, matches_type
from .registry import get_info_factory
from .transform import AxisTransform, check_axis

logger = logging.getLogger(__name__)


def item_matches(
    candidate: MetadataItem,
    name: str,
    dims: Sequence[int],
    of_type: Optional[type] = None,
) -> bool:
    """
    Check a catalog entry against a lookup.

    The name must match exactly, the item's attachment must include every
    requested axis, and its values must be of ``of_type`` (any type when
    None). A same-named item of another type simply does not match.
    """
    if not candidate.is_present or candidate.name != name:
        return False
    if not candidate.is_attached_to(*dims):
        return False
    return matches_type(candidate.value_type, of_type)


class MetadataStore(FluentViewMixin, ABC):
    """
    Abstract catalog of metadata items for an n-dimensional dataset.

    Implementations only need to provide ``num_dimensions`` and ``items()``;
    writable stores also override ``add``. Format adapters implement this
    contract by translating a container's attributes into items on demand.
    """

    @property
    @abstractmethod
    def num_dimensions(self) -> int:
        pass

    @abstractmethod
    def items(self) -> List[MetadataItem]:
        """Return every item in the catalog."""
        pass

    @property
    def is_writable(self) -> bool:
        return False

    def item(
        self, name: str, *dims: int, of_type: Optional[type] = None
    ) -> MetadataItem:
        """
        Find an item by name, attached axes and value type.

        Args:
            name: Item name.
            *dims: Axes the item must be attached to (it may be attached to
                more).
            of_type: Required value type, or None for any.

        Returns:
            The first matching item, or an absent item when nothing matches.

        Raises:
            InvalidAxisError: If a requested axis is out of range.
        """
        dims = self._check_dims(dims)
        for candidate in self.items():
            if item_matches(candidate, name, dims, of_type):
                return candidate
        return absent(name, self.num_dimensions, *dims)

    def add(self, item: MetadataItem) -> None:
        raise ReadOnlyStoreError(f"{self.__class__.__name__} is read-only")

    def info(self, kind: Any) -> Any:
        """Build the info object registered for ``kind``, bound to this store."""
        return get_info_factory(kind)(self)

    def _check_dims(self, dims: Iterable[int]) -> Tuple[int, ...]:
        return tuple(check_axis(d, self.num_dimensions) for d in dims)

    def _view_through(self, transform: AxisTransform) -> "MetadataStore":
        from ..view.store_view import MetadataStoreView

        return MetadataStoreView(self, transform)

    def _subsample_by(self, steps: Tuple[int, ...]) -> "MetadataStore":
        from ..view.subsample_view import MetadataStoreSubsampleView

        return MetadataStoreSubsampleView(self, steps)

    def __len__(self) -> int:
        return len(self.items())

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(num_dimensions={self.num_dimensions}, "
            f"items={len(self)})"
        )


class SimpleMetadataStore(MetadataStore):
    """
    In-memory root store.

    Items are keyed by ``(name, attached_axes)``: adding an item under an
    existing key replaces the earlier one in place. Writability is decided at
    construction; a read-only store can only be populated through ``items``.
    """

    def __init__(
        self,
        num_dimensions: int,
        items: Iterable[MetadataItem] = (),
        writable: bool = True,
    ):
        if num_dimensions < 0:
            raise ValueError(f"Invalid dimensionality: {num_dimensions}")
        self._num_dimensions = int(num_dimensions)
        self._items: Dict[Tuple[str, Tuple[int, ...]], MetadataItem] = {}
        for entry in items:
            self._put(entry)
        self._writable = writable

    @property
    def num_dimensions(self) -> int:
        return self._num_dimensions

    @property
    def is_writable(self) -> bool:
        return self._writable

    def items(self) -> List[MetadataItem]:
        return list(self._items.values())

    def add(self, item: MetadataItem) -> None:
        if not self._writable:
            raise ReadOnlyStoreError(
                f"{self.__class__.__name__} was created read-only"
            )
        self._put(item)

    def frozen(self) -> "SimpleMetadataStore":
        """Return a read-only copy holding the current items."""
        return SimpleMetadataStore(self._num_dimensions, self.items(), writable=False)

    def _put(self, item: MetadataItem) -> None:
        if not isinstance(item, MetadataItem):
            raise TypeError(f"Expected a MetadataItem, got {type(item).__name__}")
        if not item.is_present:
            raise ValueError(f"Cannot store absent item '{item.name}'")
        if item.num_dimensions != self._num_dimensions:
            raise ValueError(
                f"Item '{item.name}' is {item.num_dimensions}-dimensional but the "
                f"store is {self._num_dimensions}-dimensional"
            )
        key = (item.name, item.attached_axes)
        if key in self._items:
            logger.debug(
                f"Replacing metadata item '{item.name}' on axes "
                f"{list(item.attached_axes)}"
            )
        self._items[key] = item
