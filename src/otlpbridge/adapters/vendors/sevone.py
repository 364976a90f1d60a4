"""SevOne record mapper.

SevOne records hold one indicator value. The mapper produces the same
envelope for both output formats, so it is the vendor that can be emitted
as binary OTLP.
"""

import math
from collections.abc import Mapping
from typing import Any

from otlpbridge.adapters.vendors.base import AttributeBuilder, require_mapping
from otlpbridge.core.coerce import NANOS_PER_SECOND, as_float, text_of
from otlpbridge.core.errors import MappingError
from otlpbridge.core.models import CanonicalMetric, DataPoint, ResourceEnvelope
from otlpbridge.core.outcome import Produced

DEFAULT_METRIC_NAME = "sevone.metric"


def _required(record: Mapping[str, Any], key: str) -> Any:
    value = record.get(key)
    if value is None:
        raise MappingError(f"sevone record is missing {key!r}")
    return value


def _seconds(raw: Any) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, float) and math.isfinite(raw):
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            pass
    raise MappingError(f"sevone 'time' is not an integer: {raw!r}")


class SevOneMapper:
    """Maps SevOne indicator records to single-point envelopes."""

    vendor = "sevone"

    def map(self, record: Mapping[str, Any], topic: str) -> Produced:
        """Map a SevOne record.

        Raises:
            MappingError: If ``time`` or ``value`` is missing or unparsable.
        """
        record = require_mapping(record, self.vendor)
        timestamp = _seconds(_required(record, "time")) * NANOS_PER_SECOND
        raw_value = _required(record, "value")
        try:
            value = as_float(raw_value)
        except ValueError as exc:
            raise MappingError(f"sevone 'value' is not a number: {raw_value!r}") from exc

        def text(key: str) -> str:
            return text_of(record.get(key)) or ""

        cluster, plugin = text("clusterName"), text("pluginName")
        resource = (
            AttributeBuilder()
            .add("cluster.name", cluster)
            .add("plugin.name", plugin)
            .add("kafka.topic", topic)
        )
        point = (
            AttributeBuilder()
            .add("device.name", text("deviceName"))
            .add("device.ip", text("deviceIp"))
            .add("object.name", text("objectName"))
            .add("object.description", text("objectDesc"))
            .add("cluster.name", cluster)
            .add("plugin.name", plugin)
            .add("kafka.topic", topic)
        )
        metric = CanonicalMetric(
            name=text_of(record.get("indicatorName")) or DEFAULT_METRIC_NAME,
            unit=text("units"),
            data_points=(
                DataPoint(value=value, timestamp_nanos=timestamp, attributes=point.build()),
            ),
        )
        return Produced(
            ResourceEnvelope(resource_attributes=resource.build(), metrics=(metric,))
        )
