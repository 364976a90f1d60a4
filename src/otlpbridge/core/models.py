"""Core domain models for normalized metrics data."""

import re
from dataclasses import dataclass, field

# Ordered key/value pairs. Duplicate keys are kept as-is.
Attributes = tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class AttributeSpec:
    """Maps a named regex capture group to an output attribute.

    Attributes:
        name: Attribute key written to the data point.
        from_group: Name of the capture group supplying the value.
    """

    name: str
    from_group: str


@dataclass(frozen=True)
class Rule:
    """A compiled metric-name decomposition rule.

    Attributes:
        id: Rule identifier, used in log output.
        pattern: Compiled regex that must match the whole name.
        attribute_specs: Capture groups to extract, in output order.
    """

    id: str
    pattern: re.Pattern[str]
    attribute_specs: tuple[AttributeSpec, ...] = ()


@dataclass(frozen=True)
class ParsedName:
    """Result of applying a rule store to a raw metric name.

    Attributes:
        base: Value of the ``base`` capture group, or None when no rule
            matched or the matching rule has no ``base`` group.
        attributes: Extracted attributes in rule order.
    """

    base: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class DataPoint:
    """A single gauge measurement.

    Attributes:
        value: The measured value.
        timestamp_nanos: Unix timestamp in nanoseconds.
        attributes: Point attributes as ordered key/value pairs.
    """

    value: float
    timestamp_nanos: int
    attributes: Attributes = ()


@dataclass(frozen=True)
class CanonicalMetric:
    """A gauge metric and its data points.

    Attributes:
        name: Metric name (e.g., netscout.upw_in_bytes_count).
        unit: Unit string, or None when unknown.
        data_points: Ordered data points.
    """

    name: str
    unit: str | None = None
    data_points: tuple[DataPoint, ...] = ()


@dataclass(frozen=True)
class ResourceEnvelope:
    """One OTLP ResourceMetrics unit: a resource and its scoped metrics.

    Attributes:
        resource_attributes: Resource attributes as ordered key/value pairs.
        metrics: Metrics reported for the resource.
        scope_name: Instrumentation scope name.
        scope_version: Instrumentation scope version.
    """

    resource_attributes: Attributes = ()
    metrics: tuple[CanonicalMetric, ...] = ()
    scope_name: str = "kafka"
    scope_version: str = "streams"
