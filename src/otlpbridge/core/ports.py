"""Port interfaces for name parsing and vendor mapping.

These protocols define the contracts that rule stores and vendor mappers
must implement. The record processor depends only on these interfaces.
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from otlpbridge.core.models import ParsedName
from otlpbridge.core.outcome import Produced, Skipped


@runtime_checkable
class NameParserPort(Protocol):
    """Port for decomposing a raw metric name.

    Examples: RuleStore, ReloadableRuleStore.
    """

    def apply(self, raw_name: str | None) -> ParsedName:
        """Split a raw metric name into a base name and attributes."""
        ...


@runtime_checkable
class VendorMapperPort(Protocol):
    """Port for mapping one vendor record to the canonical model.

    Examples: NetscoutMapper, ZabbixMapper, SevOneMapper.
    """

    def map(self, record: Mapping[str, Any], topic: str) -> Produced | Skipped:
        """Map a decoded vendor record.

        Args:
            record: The decoded JSON object.
            topic: Name of the topic the record arrived on.

        Returns:
            Produced with the envelope, or Skipped if the record is dropped.

        Raises:
            MappingError: If a required field is missing or unparsable.
        """
        ...
