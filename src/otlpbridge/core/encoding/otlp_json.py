"""OTLP/JSON encoder for resource envelopes."""

import json
import math
from typing import Any

from otlpbridge.core.encoding.validation import validate_envelope
from otlpbridge.core.models import Attributes, CanonicalMetric, DataPoint, ResourceEnvelope


def _attributes(pairs: Attributes) -> list[dict[str, Any]]:
    return [{"key": key, "value": {"stringValue": value}} for key, value in pairs]


def _double(value: float) -> float | str:
    # proto3 JSON spells non-finite doubles as strings
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return value


def _data_point(point: DataPoint) -> dict[str, Any]:
    obj: dict[str, Any] = {
        "asDouble": _double(point.value),
        "timeUnixNano": str(point.timestamp_nanos),
    }
    if point.attributes:
        obj["attributes"] = _attributes(point.attributes)
    return obj


def _metric(metric: CanonicalMetric) -> dict[str, Any]:
    obj: dict[str, Any] = {"name": metric.name}
    if metric.unit is not None:
        obj["unit"] = metric.unit
    obj["gauge"] = {"dataPoints": [_data_point(p) for p in metric.data_points]}
    return obj


def to_otlp_dict(envelope: ResourceEnvelope) -> dict[str, Any]:
    """Build the OTLP/JSON object tree for an envelope.

    Args:
        envelope: The envelope to render.

    Returns:
        A dict shaped like an ExportMetricsServiceRequest in OTLP/JSON,
        with a single resourceMetrics entry.

    Raises:
        EncodingError: If the envelope is malformed.
    """
    validate_envelope(envelope)
    return {
        "resourceMetrics": [
            {
                "resource": {"attributes": _attributes(envelope.resource_attributes)},
                "scopeMetrics": [
                    {
                        "scope": {
                            "name": envelope.scope_name,
                            "version": envelope.scope_version,
                        },
                        "metrics": [_metric(m) for m in envelope.metrics],
                    }
                ],
            }
        ]
    }


def encode_json(envelope: ResourceEnvelope) -> str:
    """Encode an envelope to compact OTLP/JSON text.

    ``timeUnixNano`` is written as a decimal string so 64-bit values survive
    JSON readers that use doubles.

    Raises:
        EncodingError: If the envelope is malformed.
    """
    return json.dumps(to_otlp_dict(envelope), separators=(",", ":"), allow_nan=False)
