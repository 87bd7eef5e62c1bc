from enum import Enum
from typing import Any


class InvalidStatusError(ValueError):
    """Raised when a value is not one of the workflow statuses."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Status inválido: {value!r}")


class ReferenceStatus(str, Enum):
    """Curation workflow states."""
    PENDING = "pending"    # Initial state for every submission
    APPROVED = "approved"  # Publicly searchable
    REJECTED = "rejected"

    @classmethod
    def parse(cls, value: Any) -> "ReferenceStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidStatusError(value) from None

    @classmethod
    def values(cls):
        return [status.value for status in cls]

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        return value in cls.values()

    @classmethod
    def initial(cls) -> "ReferenceStatus":
        return cls.PENDING

    def is_publicly_visible(self) -> bool:
        return self is ReferenceStatus.APPROVED

    def can_transition(self, target: "ReferenceStatus") -> bool:
        # Curators may move a reference between any two states, including re-review.
        return isinstance(target, ReferenceStatus)
