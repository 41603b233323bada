# ndmeta/view/item_view.py
from typing import Any, Sequence, Tuple

from ..core.item import MetadataItem, Viewable
from ..core.transform import AxisTransform


class MetadataItemView(MetadataItem):
    """
    Read-only projection of a metadata item through an AxisTransform.

    The transform maps view positions to positions of the wrapped item.
    Wrapping another item view concatenates the two transforms onto the
    innermost item, so lookups cost the same however many views are stacked.
    The wrapped item's data is referenced, never copied.
    """

    def __init__(self, source: MetadataItem, transform: AxisTransform):
        if transform.num_target_dimensions != source.num_dimensions:
            raise ValueError(
                f"Transform produces {transform.num_target_dimensions}-dimensional "
                f"positions but item '{source.name}' is "
                f"{source.num_dimensions}-dimensional"
            )
        if isinstance(source, MetadataItemView):
            transform = transform.concatenate(source.transform)
            source = source.source
        self._source = source
        self._transform = transform

    @property
    def source(self) -> MetadataItem:
        return self._source

    @property
    def transform(self) -> AxisTransform:
        return self._transform

    @property
    def name(self) -> str:
        return self._source.name

    @property
    def num_dimensions(self) -> int:
        return self._transform.num_source_dimensions

    @property
    def attached_axes(self) -> Tuple[int, ...]:
        return self._map_axes(self._source.attached_axes)

    @property
    def varying_axes(self) -> Tuple[int, ...]:
        return self._map_axes(self._source.varying_axes)

    @property
    def is_present(self) -> bool:
        return self._source.is_present

    @property
    def value_type(self):
        return self._source.value_type

    def _map_axes(self, axes: Sequence[int]) -> Tuple[int, ...]:
        # sliced axes have no view counterpart and drop out
        t = self._transform
        return tuple(
            sorted(t.component_mapping[a] for a in axes if not t.component_zero[a])
        )

    def get_at(self, position: Sequence[int], scratch=None) -> Any:
        """
        Return the value at a view position.

        Args:
            position: Coordinates in view space.
            scratch: Optional caller-owned buffer with one slot per wrapped
                dimension, reused for the mapped position.
        """
        return self._source.get_at(self._transform.apply(position, scratch))

    def value(self) -> Any:
        if self._source.varying_axes:
            return self.get_at((0,) * self.num_dimensions)
        return self._reexpress(self._source.value())

    def _reexpress(self, value: Any) -> Any:
        if isinstance(value, Viewable):
            return value.view_transform(
                self._transform.restrict(self._source.attached_axes)
            )
        return value
