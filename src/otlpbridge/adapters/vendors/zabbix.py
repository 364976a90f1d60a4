"""Zabbix history-export record mapper.

Each record is a single item value. The free-text item name is decomposed by
the name rule store into a metric name plus attributes.
"""

from collections.abc import Mapping
from typing import Any

from otlpbridge.adapters.vendors.base import AttributeBuilder, require_mapping
from otlpbridge.core.coerce import (
    NANOS_PER_SECOND,
    as_float,
    as_int,
    now_nanos,
    text_of,
)
from otlpbridge.core.models import CanonicalMetric, DataPoint, ResourceEnvelope
from otlpbridge.core.outcome import Produced, Skipped
from otlpbridge.core.ports import NameParserPort

# Zabbix value types: 0 = numeric float, 3 = numeric unsigned.
ACCEPTED_TYPES = frozenset({0, 3})
DEFAULT_METRIC_NAME = "zabbix.metric"
TAG_PREFIX = "zbx.tag."


def _value(raw: Any) -> float:
    try:
        return as_float("0" if raw is None else raw)
    except ValueError:
        return 0.0


def _host_name(record: Mapping[str, Any]) -> str | None:
    host = record.get("host")
    if isinstance(host, Mapping):
        return text_of(host.get("name")) or text_of(host.get("host"))
    return text_of(host)


def metric_name(base: str) -> str:
    """Turn a base name into a metric name; only spaces are rewritten."""
    return base.replace(" ", "_")


class ZabbixMapper:
    """Maps Zabbix item values to single-point envelopes.

    Args:
        rules: Name parser used to split item names.
    """

    vendor = "zabbix"

    def __init__(self, rules: NameParserPort) -> None:
        self._rules = rules

    def map(self, record: Mapping[str, Any], topic: str) -> Produced | Skipped:
        """Map a Zabbix record.

        Returns:
            Skipped for value types other than float and unsigned.

        Raises:
            MappingError: If the record is not a JSON object.
        """
        record = require_mapping(record, self.vendor)
        value_type = as_int(record.get("type"), -1)
        if value_type not in ACCEPTED_TYPES:
            return Skipped(f"zabbix value type {value_type} not accepted")

        clock = as_int(record.get("clock"), now_nanos() // NANOS_PER_SECOND)
        timestamp = clock * NANOS_PER_SECOND + as_int(record.get("ns"), 0)

        raw_name = text_of(record.get("name")) or DEFAULT_METRIC_NAME
        parsed = self._rules.apply(raw_name)
        name = metric_name(parsed.base if parsed.base is not None else raw_name)

        host_name = _host_name(record)

        resource = AttributeBuilder().add_non_empty("host.name", host_name)
        resource.add("source", self.vendor).add("kafka.topic", topic)
        groups = record.get("groups")
        if isinstance(groups, list):
            for group in groups:
                resource.add("zabbix.group", text_of(group) or "")
        for key in ("itemid", "type"):
            if key in record:
                resource.add(f"zabbix.{key}", text_of(record[key]) or "")

        point = AttributeBuilder().add_non_empty("host.name", host_name)
        for key, value in parsed.attributes.items():
            point.add_non_empty(key, value)
        tags = record.get("item_tags")
        if isinstance(tags, list):
            for tag in tags:
                if not isinstance(tag, Mapping):
                    continue
                tag_name, tag_value = text_of(tag.get("tag")), text_of(tag.get("value"))
                if tag_name is not None and tag_value is not None:
                    point.add(TAG_PREFIX + tag_name, tag_value)

        metric = CanonicalMetric(
            name=name,
            data_points=(
                DataPoint(
                    value=_value(record.get("value")),
                    timestamp_nanos=timestamp,
                    attributes=point.build(),
                ),
            ),
        )
        return Produced(
            ResourceEnvelope(resource_attributes=resource.build(), metrics=(metric,))
        )
