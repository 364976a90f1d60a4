"""Structural checks shared by the JSON and protobuf encoders."""

from otlpbridge.core.errors import EncodingError
from otlpbridge.core.models import Attributes, ResourceEnvelope

_MAX_UINT64 = 2**64


def _check_attributes(pairs: Attributes, where: str) -> None:
    if not isinstance(pairs, tuple):
        raise EncodingError(f"{where}: attributes must be a tuple of pairs, got {pairs!r}")
    for pair in pairs:
        if (
            not isinstance(pair, tuple)
            or len(pair) != 2
            or not all(isinstance(part, str) for part in pair)
        ):
            raise EncodingError(f"{where}: attribute {pair!r} is not a (str, str) pair")


def validate_envelope(envelope: ResourceEnvelope) -> None:
    """Reject envelopes that cannot be rendered identically by both encoders.

    Raises:
        EncodingError: On an empty metric name, a non-numeric value, a
            timestamp outside the uint64 range, or a non-string attribute.
    """
    _check_attributes(envelope.resource_attributes, "resource")
    if not isinstance(envelope.scope_name, str) or not isinstance(
        envelope.scope_version, str
    ):
        raise EncodingError("scope name and version must be strings")
    for metric in envelope.metrics:
        if not isinstance(metric.name, str) or not metric.name:
            raise EncodingError(f"metric name must be a non-empty string: {metric.name!r}")
        if metric.unit is not None and not isinstance(metric.unit, str):
            raise EncodingError(f"{metric.name}: unit must be a string")
        for point in metric.data_points:
            if isinstance(point.value, bool) or not isinstance(point.value, (int, float)):
                raise EncodingError(f"{metric.name}: value {point.value!r} is not a number")
            timestamp = point.timestamp_nanos
            if (
                isinstance(timestamp, bool)
                or not isinstance(timestamp, int)
                or not 0 <= timestamp < _MAX_UINT64
            ):
                raise EncodingError(
                    f"{metric.name}: timestamp {timestamp!r} is not a uint64 nanosecond count"
                )
            _check_attributes(point.attributes, metric.name)
