"""Exception hierarchy for metadata lookups and views.

Missing metadata is normally represented by an absent item rather than an
exception; ``MetadataNotFoundError`` is only raised when a caller forces a
value out of such an item.
"""


class MetadataError(Exception):
    """Base exception for all ndmeta failures."""


class MetadataNotFoundError(MetadataError, KeyError):
    """Raised when the value of an absent metadata item is requested."""

    def __init__(self, name, axes=()):
        self.name = name
        self.axes = tuple(axes)
        super().__init__(
            f"No metadata exists of key '{name}' attached to axes {list(self.axes)}"
        )

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class InvalidAxisError(MetadataError, IndexError):
    """Raised when an axis index lies outside [0, num_dimensions)."""


class ReadOnlyStoreError(MetadataError, TypeError):
    """Raised when writing to a view or another read-only store."""
