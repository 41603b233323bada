"""
Fluent view operations shared by items, stores and datasets.

Each operation builds one AxisTransform (or step vector) for the current
dimensionality and hands it to ``_view_through`` / ``_subsample_by``, so a
data view and its metadata view are derived the same way.
"""

from abc import ABC, abstractmethod
from typing import Tuple

from . import transform as transforms
from .transform import AxisTransform, expand_steps


class FluentViewMixin(ABC):
    """Mixin providing slice/permute/rotate/... on anything with dimensions."""

    @property
    @abstractmethod
    def num_dimensions(self) -> int:
        pass

    @abstractmethod
    def _view_through(self, transform: AxisTransform):
        """Return a view of ``self`` through ``transform`` (view -> self)."""
        pass

    @abstractmethod
    def _subsample_by(self, steps: Tuple[int, ...]):
        """Return a view of ``self`` keeping every ``steps[d]``-th position."""
        pass

    def view(self):
        return self._view_through(transforms.identity(self.num_dimensions))

    def slice(self, d: int, pos: int):
        return self._view_through(transforms.hyper_slice(self.num_dimensions, d, pos))

    def add_dimension(self):
        return self._view_through(transforms.add_dimension(self.num_dimensions))

    def translate(self, *translation: int):
        self._check_vector(translation, "translation")
        return self._view_through(transforms.translate(*translation))

    def translate_inverse(self, *translation: int):
        self._check_vector(translation, "translation")
        return self._view_through(transforms.translate_inverse(*translation))

    def rotate(self, from_axis: int, to_axis: int):
        return self._view_through(
            transforms.rotate(self.num_dimensions, from_axis, to_axis)
        )

    def permute(self, from_axis: int, to_axis: int):
        return self._view_through(
            transforms.permute(self.num_dimensions, from_axis, to_axis)
        )

    def move_axis(self, from_axis: int, to_axis: int):
        return self._view_through(
            transforms.move_axis(self.num_dimensions, from_axis, to_axis)
        )

    def invert_axis(self, axis: int):
        return self._view_through(transforms.invert_axis(self.num_dimensions, axis))

    def subsample(self, *steps: int):
        """Subsample by per-axis steps; a short step list repeats its last entry."""
        return self._subsample_by(expand_steps(steps, self.num_dimensions))

    def _check_vector(self, values, what: str) -> None:
        if len(values) != self.num_dimensions:
            raise ValueError(
                f"Expected a {self.num_dimensions}-dimensional {what}, got "
                f"{len(values)} values"
            )
