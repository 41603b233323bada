"""
Pairing of a host array with its metadata store.

A ``Dataset`` couples a ``numpy.ndarray`` with a MetadataStore. Every fluent
view operation is applied to both halves with the same transform (or step
vector), so the data view and its metadata view never drift apart.
"""

import logging
from abc import abstractmethod
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from .core.fluent import FluentViewMixin
from .core.store import MetadataStore, SimpleMetadataStore
from .core.transform import AxisTransform, check_position, check_steps

logger = logging.getLogger(__name__)


class _DatasetBase(FluentViewMixin):
    @property
    @abstractmethod
    def store(self) -> MetadataStore:
        pass

    @property
    def num_dimensions(self) -> int:
        return self.store.num_dimensions

    @abstractmethod
    def get_at(self, position: Sequence[int]) -> Any:
        pass

    def _view_through(self, transform: AxisTransform) -> "DatasetView":
        return DatasetView(self, transform=transform)

    def _subsample_by(self, steps: Tuple[int, ...]) -> "DatasetView":
        return DatasetView(self, steps=steps)


class Dataset(_DatasetBase):
    """A numpy array and the metadata describing it."""

    def __init__(self, data, store: Optional[MetadataStore] = None):
        data = np.asarray(data)
        if store is None:
            logger.debug(f"Creating empty metadata store for {data.ndim}-D data")
            store = SimpleMetadataStore(data.ndim)
        elif store.num_dimensions != data.ndim:
            raise ValueError(
                f"Store is {store.num_dimensions}-dimensional but data has "
                f"{data.ndim} dimensions"
            )
        self._data = data
        self._store = store

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def store(self) -> MetadataStore:
        return self._store

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._data.shape

    def get_at(self, position: Sequence[int]) -> Any:
        check_position(position, self._data.ndim)
        index = tuple(int(p) for p in position)
        for d, (p, size) in enumerate(zip(index, self._data.shape)):
            if not 0 <= p < size:
                raise IndexError(
                    f"Position {list(index)} is outside the data along axis {d} "
                    f"(size {size})"
                )
        return self._data[index]


class DatasetView(_DatasetBase):
    """
    A Dataset seen through one transform or one subsampling.

    Consecutive transform views are collapsed into a single transform on the
    data side; the store side collapses through MetadataStoreView.
    """

    def __init__(
        self,
        parent: _DatasetBase,
        transform: Optional[AxisTransform] = None,
        steps: Optional[Sequence[int]] = None,
    ):
        from .view.store_view import MetadataStoreView
        from .view.subsample_view import MetadataStoreSubsampleView

        if (transform is None) == (steps is None):
            raise ValueError("Exactly one of transform or steps must be given")

        if transform is not None:
            self._store = MetadataStoreView(parent.store, transform)
            if isinstance(parent, DatasetView) and parent._transform is not None:
                transform = transform.concatenate(parent._transform)
                parent = parent._parent
            self._steps = None
        else:
            steps = check_steps(steps, parent.num_dimensions)
            self._store = MetadataStoreSubsampleView(parent.store, steps)
            self._steps = steps
        self._parent = parent
        self._transform = transform

    @property
    def store(self) -> MetadataStore:
        return self._store

    def get_at(self, position: Sequence[int]) -> Any:
        check_position(position, self.num_dimensions)
        if self._transform is not None:
            return self._parent.get_at(self._transform.apply(position))
        return self._parent.get_at([int(p) * s for p, s in zip(position, self._steps)])
