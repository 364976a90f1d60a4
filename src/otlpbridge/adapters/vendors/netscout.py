"""Netscout record mapper.

One Netscout record carries many counters; every numeric ``upw_*`` field
becomes its own gauge metric under a single resource.
"""

from collections.abc import Mapping
from typing import Any

from otlpbridge.adapters.vendors.base import AttributeBuilder, require_mapping
from otlpbridge.core.coerce import (
    calendar_nanos,
    infer_unit,
    is_number,
    now_nanos,
    saturating_float,
    text_of,
)
from otlpbridge.core.models import CanonicalMetric, DataPoint, ResourceEnvelope
from otlpbridge.core.outcome import Produced

METRIC_PREFIX = "upw_"

# (attribute key, record field), in output order
_RESOURCE_FIELDS = (
    ("device.name", "device_name"),
    ("vlan.name", "vlan_name"),
    ("client.site", "client_site_name"),
    ("application.name", "application_name"),
    ("application.group", "application_group"),
    ("app.protocol.type", "application_protocol_type_code"),
)
_POINT_FIELDS = (
    ("device.name", "device_name"),
    ("client.site", "client_site_name"),
)


def _timestamp(record: Mapping[str, Any]) -> int:
    nanos = calendar_nanos(text_of(record.get("cal_timestamp_time")))
    if nanos is None or nanos <= 0:
        return now_nanos()
    return nanos


class NetscoutMapper:
    """Maps Netscout records to one envelope with a metric per counter."""

    vendor = "netscout"

    def map(self, record: Mapping[str, Any], topic: str) -> Produced:
        """Map a Netscout record.

        Raises:
            MappingError: If the record is not a JSON object.
        """
        record = require_mapping(record, self.vendor)
        timestamp = _timestamp(record)

        resource = AttributeBuilder().add("source", self.vendor).add_trimmed("kafka.topic", topic)
        for key, field_name in _RESOURCE_FIELDS:
            resource.add_trimmed(key, text_of(record.get(field_name)))

        point_attrs = AttributeBuilder()
        for key, field_name in _POINT_FIELDS:
            point_attrs.add_trimmed(key, text_of(record.get(field_name)))
        point_attributes = point_attrs.build()

        metrics = tuple(
            CanonicalMetric(
                name=f"{self.vendor}.{field_name}",
                unit=infer_unit(field_name),
                data_points=(
                    DataPoint(
                        value=saturating_float(value),
                        timestamp_nanos=timestamp,
                        attributes=point_attributes,
                    ),
                ),
            )
            for field_name, value in record.items()
            if field_name.startswith(METRIC_PREFIX) and is_number(value)
        )

        return Produced(
            ResourceEnvelope(resource_attributes=resource.build(), metrics=metrics)
        )
