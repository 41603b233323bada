# ndmeta/view/store_view.py
import logging
from typing import List, Optional

from ..core.errors import InvalidAxisError, MetadataError, ReadOnlyStoreError
from ..core.item import MetadataItem, absent
from ..core.store import MetadataStore, item_matches
from ..core.transform import AxisTransform
from .item_view import MetadataItemView

logger = logging.getLogger(__name__)


class MetadataStoreView(MetadataStore):
    """
    Read-only projection of a store through an AxisTransform.

    Items are re-expressed in view coordinates as they are requested. An item
    whose attached axes have all been sliced away is hidden; items attached
    to no axis are always visible.
    """

    def __init__(self, source: MetadataStore, transform: AxisTransform):
        if transform.num_target_dimensions != source.num_dimensions:
            raise ValueError(
                f"Transform produces {transform.num_target_dimensions}-dimensional "
                f"positions but the store is {source.num_dimensions}-dimensional"
            )
        if isinstance(source, MetadataStoreView):
            transform = transform.concatenate(source.transform)
            source = source.source
        self._source = source
        self._transform = transform
        # view axis -> source axis, for translating lookups into source space
        self._inverse_mapping = transform.inverse_component_mapping()

    @property
    def source(self) -> MetadataStore:
        return self._source

    @property
    def transform(self) -> AxisTransform:
        return self._transform

    @property
    def num_dimensions(self) -> int:
        return self._transform.num_source_dimensions

    def items(self) -> List[MetadataItem]:
        views = []
        for candidate in self._source.items():
            try:
                if self._survives(candidate):
                    views.append(MetadataItemView(candidate, self._transform))
            except (MetadataError, ValueError) as e:
                logger.warning(f"Skipping metadata item {candidate!r}: {e}")
        return views

    def item(
        self, name: str, *dims: int, of_type: Optional[type] = None
    ) -> MetadataItem:
        dims = self._check_dims(dims)
        source_dims = []
        for d in dims:
            wrapped = self._inverse_mapping[d]
            if wrapped is None:
                # inserted axes carry no metadata
                return absent(name, self.num_dimensions, *dims)
            source_dims.append(wrapped)

        found = self._source.item(name, *source_dims, of_type=of_type)
        if found.is_present and not self._survives(found):
            found = next(
                (
                    candidate
                    for candidate in self._source.items()
                    if item_matches(candidate, name, source_dims, of_type)
                    and self._survives(candidate)
                ),
                None,
            )
        if found is None or not found.is_present:
            return absent(name, self.num_dimensions, *dims)
        return MetadataItemView(found, self._transform)

    def add(self, item: MetadataItem) -> None:
        raise ReadOnlyStoreError("Views on metadata are read-only")

    def _survives(self, candidate: MetadataItem) -> bool:
        attached = candidate.attached_axes
        if not attached:
            return True
        zero = self._transform.component_zero
        for axis in attached:
            if not 0 <= axis < len(zero):
                raise InvalidAxisError(
                    f"Item '{candidate.name}' is attached to axis {axis}, outside "
                    f"[0, {len(zero)})"
                )
        return any(not zero[axis] for axis in attached)
