"""Record processor: the engine entry point used by a transport driver.

A driver (stream consumer, CLI, test harness) owns one RecordProcessor per
process and calls ``admit`` then ``process`` for every inbound record. The
processor never raises for a bad record: mapping and encoding failures turn
into the output format's empty payload so the stream keeps flowing.
"""

import json
import logging
import random
from collections.abc import Mapping
from typing import Any

from otlpbridge.adapters.vendors import Vendor, build_mapper
from otlpbridge.core.encoding import OutputFormat
from otlpbridge.core.errors import EncodingError, MappingError
from otlpbridge.core.outcome import Failed, MapOutcome, Skipped
from otlpbridge.core.ports import NameParserPort, VendorMapperPort
from otlpbridge.core.rules import RuleStore
from otlpbridge.settings import Settings

logger = logging.getLogger(__name__)

RawRecord = Mapping[str, Any] | str | bytes


def decode_record(raw: RawRecord) -> Mapping[str, Any]:
    """Decode a raw record into a JSON object.

    Raises:
        MappingError: If the payload is not valid UTF-8 JSON.
    """
    if isinstance(raw, Mapping):
        return raw
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise MappingError(f"record is not valid JSON: {exc}") from exc


def map_outcome(mapper: VendorMapperPort, raw: RawRecord, topic: str) -> MapOutcome:
    """Run a mapper and fold MappingError into a Failed outcome."""
    try:
        return mapper.map(decode_record(raw), topic)
    except MappingError as exc:
        return Failed(exc)


class RecordProcessor:
    """Maps and encodes records for one vendor and one output format.

    Instances hold no per-record state; ``process`` may be called from many
    threads at once.

    Args:
        vendor: Source of the records.
        output_format: Encoding of every emitted payload.
        rules: Name parser for rule-driven vendors. Defaults to the
            bundled rule set.
        sample_rate: Fraction of records ``admit`` lets through.
        rng: Random source for sampling. Defaults to a new random.Random.
    """

    def __init__(
        self,
        vendor: Vendor,
        output_format: OutputFormat = OutputFormat.JSON,
        rules: NameParserPort | None = None,
        sample_rate: float = 1.0,
        rng: random.Random | None = None,
    ) -> None:
        self.vendor = vendor
        self.output_format = output_format
        self.sample_rate = sample_rate
        self._rng = rng or random.Random()
        self._mapper = build_mapper(vendor, rules)
        if output_format is OutputFormat.PROTOBUF and not vendor.supports_protobuf:
            logger.warning(
                "Source %s cannot be encoded as protobuf; every record will be empty",
                vendor.label,
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "RecordProcessor":
        """Create a processor, loading name rules when the vendor needs them."""
        rules = RuleStore.load(settings.rules_file) if settings.source.uses_rules else None
        return cls(
            vendor=settings.source,
            output_format=settings.output_format,
            rules=rules,
            sample_rate=settings.sample_rate,
        )

    def admit(self) -> bool:
        """Sampling gate: True if the next record should be processed."""
        return self._rng.random() < self.sample_rate

    def outcome(self, raw: RawRecord, topic: str) -> MapOutcome:
        """Map one record without encoding it."""
        return map_outcome(self._mapper, raw, topic)

    def process(self, raw: RawRecord, topic: str) -> str | bytes | None:
        """Map and encode one record.

        Args:
            raw: Decoded JSON object, or JSON text/bytes.
            topic: Name of the topic the record arrived on.

        Returns:
            The encoded payload, None if the record was skipped, or the
            format's empty payload if mapping or encoding failed.
        """
        empty = self.output_format.empty_payload
        if self.output_format is OutputFormat.PROTOBUF and not self.vendor.supports_protobuf:
            return empty

        result = self.outcome(raw, topic)
        if isinstance(result, Skipped):
            logger.debug(
                "Skipped %s record from %s: %s", self.vendor.label, topic, result.reason
            )
            return None
        if isinstance(result, Failed):
            logger.warning(
                "Failed to map %s record from %s: %s", self.vendor.label, topic, result.error
            )
            return empty

        try:
            return self.output_format.encode(result.envelope)
        except EncodingError as exc:
            logger.warning(
                "Failed to encode %s record from %s: %s", self.vendor.label, topic, exc
            )
            return empty
