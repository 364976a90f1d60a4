"""Output encodings for resource envelopes."""

from enum import Enum

from otlpbridge.core.encoding.otlp_json import encode_json
from otlpbridge.core.encoding.otlp_proto import encode_proto
from otlpbridge.core.errors import ConfigurationError
from otlpbridge.core.models import ResourceEnvelope


class OutputFormat(Enum):
    """Process-wide output encoding."""

    JSON = "json"
    PROTOBUF = "protobuf"

    @classmethod
    def parse(cls, text: str) -> "OutputFormat":
        """Parse a format name, case-insensitively.

        Raises:
            ConfigurationError: If the name is unknown.
        """
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ConfigurationError(f"Unsupported output format: {text!r}") from None

    @property
    def empty_payload(self) -> str | bytes:
        """Sentinel emitted in place of a record that could not be encoded."""
        return "{}" if self is OutputFormat.JSON else b""

    def encode(self, envelope: ResourceEnvelope) -> str | bytes:
        """Encode an envelope in this format.

        Raises:
            EncodingError: If the envelope is malformed.
        """
        if self is OutputFormat.JSON:
            return encode_json(envelope)
        return encode_proto(envelope)


__all__ = ["OutputFormat", "encode_json", "encode_proto"]
