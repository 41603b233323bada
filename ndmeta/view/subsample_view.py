# ndmeta/view/subsample_view.py
"""
Subsampled views of items and stores.

Subsampling multiplies view positions by a per-axis integer step before
delegating, which no AxisTransform can express, so it is carried as a
separate step vector. Attachment is never changed by subsampling.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

from ..core.errors import MetadataError, ReadOnlyStoreError
from ..core.item import MetadataItem, Viewable, absent
from ..core.store import MetadataStore
from ..core.transform import check_position, check_steps

logger = logging.getLogger(__name__)


class MetadataItemSubsampleView(MetadataItem):
    """Item seen through a subsampling; view position ``i`` reads ``steps * i``."""

    def __init__(self, source: MetadataItem, steps: Sequence[int]):
        steps = check_steps(steps, source.num_dimensions)
        if isinstance(source, MetadataItemSubsampleView):
            steps = tuple(a * b for a, b in zip(steps, source.steps))
            source = source.source
        self._source = source
        self._steps = steps

    @property
    def source(self) -> MetadataItem:
        return self._source

    @property
    def steps(self) -> Tuple[int, ...]:
        return self._steps

    @property
    def name(self) -> str:
        return self._source.name

    @property
    def num_dimensions(self) -> int:
        return self._source.num_dimensions

    @property
    def attached_axes(self) -> Tuple[int, ...]:
        return self._source.attached_axes

    @property
    def varying_axes(self) -> Tuple[int, ...]:
        return self._source.varying_axes

    @property
    def is_present(self) -> bool:
        return self._source.is_present

    @property
    def value_type(self):
        return self._source.value_type

    def get_at(self, position: Sequence[int]) -> Any:
        check_position(position, self.num_dimensions)
        return self._source.get_at(
            [int(p) * s for p, s in zip(position, self._steps)]
        )

    def value(self) -> Any:
        value = self._source.value()
        if not self._source.varying_axes and isinstance(value, Viewable):
            return value.view_subsample(
                tuple(self._steps[a] for a in self._source.attached_axes)
            )
        return value


class MetadataStoreSubsampleView(MetadataStore):
    """Read-only store view keeping every ``steps[d]``-th position along axis d."""

    def __init__(self, source: MetadataStore, steps: Sequence[int]):
        steps = check_steps(steps, source.num_dimensions)
        if isinstance(source, MetadataStoreSubsampleView):
            steps = tuple(a * b for a, b in zip(steps, source.steps))
            source = source.source
        self._source = source
        self._steps = steps

    @property
    def source(self) -> MetadataStore:
        return self._source

    @property
    def steps(self) -> Tuple[int, ...]:
        return self._steps

    @property
    def num_dimensions(self) -> int:
        return self._source.num_dimensions

    def items(self) -> List[MetadataItem]:
        views = []
        for candidate in self._source.items():
            try:
                views.append(MetadataItemSubsampleView(candidate, self._steps))
            except (MetadataError, ValueError) as e:
                logger.warning(f"Skipping metadata item {candidate!r}: {e}")
        return views

    def item(
        self, name: str, *dims: int, of_type: Optional[type] = None
    ) -> MetadataItem:
        dims = self._check_dims(dims)
        found = self._source.item(name, *dims, of_type=of_type)
        if not found.is_present:
            return absent(name, self.num_dimensions, *dims)
        return MetadataItemSubsampleView(found, self._steps)

    def add(self, item: MetadataItem) -> None:
        raise ReadOnlyStoreError("Subsample views on metadata are read-only")
