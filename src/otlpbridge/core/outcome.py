"""Three-way result of mapping one raw record."""

from dataclasses import dataclass

from otlpbridge.core.errors import MappingError
from otlpbridge.core.models import ResourceEnvelope


@dataclass(frozen=True)
class Produced:
    """The record was mapped to an envelope."""

    envelope: ResourceEnvelope


@dataclass(frozen=True)
class Skipped:
    """The record was intentionally dropped.

    Attributes:
        reason: Short human-readable reason, used for debug logging.
    """

    reason: str = ""


@dataclass(frozen=True)
class Failed:
    """The record could not be mapped."""

    error: MappingError


MapOutcome = Produced | Skipped | Failed
