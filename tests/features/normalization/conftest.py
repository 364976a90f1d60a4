"""BDD step definitions for record normalization features."""

import json

import pytest
from pytest_bdd import given, parsers, then, when
from tests.features.normalization.steps_helpers import (
    SAMPLE_ZABBIX_RECORD,
    NormalizationContext,
    first_point,
    json_view,
    metrics_of,
    proto_view,
)

from otlpbridge.adapters.vendors import Vendor
from otlpbridge.core.encoding import OutputFormat


@pytest.fixture
def ctx() -> NormalizationContext:
    """Fresh scenario context for each test."""
    return NormalizationContext()


# === Given Steps ===
@given(parsers.parse('a "{vendor}" processor with "{fmt}" output'))
def step_processor(ctx: NormalizationContext, vendor: str, fmt: str) -> None:
    ctx.vendor = Vendor.parse(vendor)
    ctx.output_format = OutputFormat.parse(fmt)


@given("the raw record:")
def step_raw_record(ctx: NormalizationContext, docstring: str) -> None:
    ctx.raw = docstring


@given("the sample zabbix record")
def step_sample_zabbix(ctx: NormalizationContext) -> None:
    ctx.raw = dict(SAMPLE_ZABBIX_RECORD)


@given(parsers.parse('the record field "{name}" is {value}'))
def step_record_field(ctx: NormalizationContext, name: str, value: str) -> None:
    assert isinstance(ctx.raw, dict), "field overrides need a structured record"
    ctx.raw[name] = json.loads(value)


# === When Steps ===
@when(parsers.parse('the record is processed from topic "{topic}"'))
def step_process(ctx: NormalizationContext, topic: str) -> None:
    ctx.payload = ctx.processor().process(ctx.raw, topic)


@when(
    parsers.parse(
        'the record is processed as both JSON and protobuf from topic "{topic}"'
    )
)
def step_process_both(ctx: NormalizationContext, topic: str) -> None:
    json_payload = ctx.processor(OutputFormat.JSON).process(ctx.raw, topic)
    proto_payload = ctx.processor(OutputFormat.PROTOBUF).process(ctx.raw, topic)
    assert isinstance(json_payload, str)
    assert isinstance(proto_payload, bytes)
    ctx.json_payload, ctx.proto_payload = json_payload, proto_payload


# === Then Steps ===
@then("the payload is an OTLP/JSON document")
def step_payload_is_document(ctx: NormalizationContext) -> None:
    assert isinstance(ctx.payload, str)
    ctx.document = json.loads(ctx.payload)
    assert "resourceMetrics" in ctx.document


@then(parsers.parse('the payload is exactly "{text}"'))
def step_payload_exact(ctx: NormalizationContext, text: str) -> None:
    assert ctx.payload == text


@then("the payload is empty bytes")
def step_payload_empty_bytes(ctx: NormalizationContext) -> None:
    assert ctx.payload == b""


@then("no payload is emitted")
def step_no_payload(ctx: NormalizationContext) -> None:
    assert ctx.payload is None


@then("the resource attributes are:")
def step_resource_attributes(
    ctx: NormalizationContext, datatable: list[list[str]]
) -> None:
    attributes = ctx.document["resourceMetrics"][0]["resource"]["attributes"]
    actual = [(a["key"], a["value"]["stringValue"]) for a in attributes]
    assert actual == [(row[0], row[1]) for row in datatable[1:]]


@then(parsers.parse('the scope is "{name}" version "{version}"'))
def step_scope(ctx: NormalizationContext, name: str, version: str) -> None:
    scope = ctx.document["resourceMetrics"][0]["scopeMetrics"][0]["scope"]
    assert scope == {"name": name, "version": version}


@then("the metrics are:")
def step_metrics(ctx: NormalizationContext, datatable: list[list[str]]) -> None:
    actual = [
        (m["name"], m.get("unit", ""), m["gauge"]["dataPoints"][0]["asDouble"])
        for m in metrics_of(ctx.document)
    ]
    expected = [(row[0], row[1], float(row[2])) for row in datatable[1:]]
    assert actual == expected


@then(parsers.parse('the data point timestamp is "{nanos}"'))
def step_timestamp(ctx: NormalizationContext, nanos: str) -> None:
    assert isinstance(ctx.payload, str)
    assert first_point(json.loads(ctx.payload))["timeUnixNano"] == nanos


@then(parsers.parse("the data point value is {value:g}"))
def step_value(ctx: NormalizationContext, value: float) -> None:
    assert isinstance(ctx.payload, str)
    assert first_point(json.loads(ctx.payload))["asDouble"] == value


@then("the data point attributes include:")
def step_point_attributes(
    ctx: NormalizationContext, datatable: list[list[str]]
) -> None:
    actual = {
        a["key"]: a["value"]["stringValue"]
        for a in first_point(ctx.document).get("attributes", [])
    }
    expected = {row[0]: row[1] for row in datatable[1:] if len(row) >= 2}
    for key, value in expected.items():
        assert actual.get(key) == value, f"{key}: expected {value!r}, got {actual.get(key)!r}"


@then("the protobuf payload describes the same request as the JSON payload")
def step_same_request(ctx: NormalizationContext) -> None:
    assert json_view(ctx.json_payload) == proto_view(ctx.proto_payload)
