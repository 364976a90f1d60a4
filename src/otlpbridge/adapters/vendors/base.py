"""Helpers shared by the vendor mappers."""

from collections.abc import Mapping
from typing import Any

from otlpbridge.core.errors import MappingError
from otlpbridge.core.models import Attributes


def require_mapping(record: Any, vendor: str) -> Mapping[str, Any]:
    """Return the record if it is a JSON object.

    Raises:
        MappingError: If the record is not a mapping.
    """
    if not isinstance(record, Mapping):
        raise MappingError(f"{vendor} record must be a JSON object, got {type(record).__name__}")
    return record


class AttributeBuilder:
    """Collects ordered attribute pairs, allowing duplicate keys."""

    def __init__(self) -> None:
        self._pairs: list[tuple[str, str]] = []

    def __len__(self) -> int:
        return len(self._pairs)

    def add(self, key: str, value: str) -> "AttributeBuilder":
        """Append an attribute unconditionally."""
        self._pairs.append((key, value))
        return self

    def add_non_empty(self, key: str, value: str | None) -> "AttributeBuilder":
        """Append an attribute unless the value is None or empty."""
        if value:
            self._pairs.append((key, value))
        return self

    def add_trimmed(self, key: str, value: str | None) -> "AttributeBuilder":
        """Append the trimmed value unless it is None or blank."""
        if value is not None:
            self.add_non_empty(key, value.strip())
        return self

    def build(self) -> Attributes:
        """Return the attributes as an immutable tuple of pairs."""
        return tuple(self._pairs)
