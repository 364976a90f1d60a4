"""OTLP/protobuf encoder for resource envelopes."""

from opentelemetry.proto.collector.metrics.v1.metrics_service_pb2 import (
    ExportMetricsServiceRequest,
)
from opentelemetry.proto.common.v1.common_pb2 import (
    AnyValue,
    InstrumentationScope,
    KeyValue,
)
from opentelemetry.proto.metrics.v1.metrics_pb2 import (
    Gauge,
    Metric,
    NumberDataPoint,
    ResourceMetrics,
    ScopeMetrics,
)
from opentelemetry.proto.resource.v1.resource_pb2 import Resource

from otlpbridge.core.encoding.validation import validate_envelope
from otlpbridge.core.models import Attributes, CanonicalMetric, ResourceEnvelope


def _key_values(pairs: Attributes) -> list[KeyValue]:
    return [KeyValue(key=key, value=AnyValue(string_value=value)) for key, value in pairs]


def _metric(metric: CanonicalMetric) -> Metric:
    points = [
        NumberDataPoint(
            attributes=_key_values(p.attributes),
            time_unix_nano=p.timestamp_nanos,
            as_double=float(p.value),
        )
        for p in metric.data_points
    ]
    return Metric(
        name=metric.name,
        unit=metric.unit or "",
        gauge=Gauge(data_points=points),
    )


def to_request(envelope: ResourceEnvelope) -> ExportMetricsServiceRequest:
    """Build an ExportMetricsServiceRequest message for an envelope.

    Raises:
        EncodingError: If the envelope is malformed.
    """
    validate_envelope(envelope)
    scope_metrics = ScopeMetrics(
        scope=InstrumentationScope(
            name=envelope.scope_name, version=envelope.scope_version
        ),
        metrics=[_metric(m) for m in envelope.metrics],
    )
    resource_metrics = ResourceMetrics(
        resource=Resource(attributes=_key_values(envelope.resource_attributes)),
        scope_metrics=[scope_metrics],
    )
    return ExportMetricsServiceRequest(resource_metrics=[resource_metrics])


def encode_proto(envelope: ResourceEnvelope) -> bytes:
    """Encode an envelope to a binary OTLP ExportMetricsServiceRequest.

    Raises:
        EncodingError: If the envelope is malformed.
    """
    return to_request(envelope).SerializeToString()
