"""Shared test fixtures for all test modules."""

from typing import Any

import pytest

from otlpbridge.core.rules import RuleStore

# === Raw Record Fixtures ===


@pytest.fixture
def sevone_record() -> dict[str, Any]:
    """A complete SevOne indicator record."""
    return {
        "time": 1700000000,
        "value": "42.0",
        "deviceName": "r1",
        "deviceIp": "10.0.0.1",
        "objectName": "eth0",
        "objectDesc": "uplink",
        "clusterName": "east",
        "pluginName": "snmp",
        "indicatorName": "if.in.octets",
        "units": "bytes",
    }


@pytest.fixture
def zabbix_record() -> dict[str, Any]:
    """A Zabbix float item value with host, groups and tags."""
    return {
        "host": {"host": "srv1", "name": "Server 1"},
        "groups": ["Linux servers", "DC1"],
        "item_tags": [{"tag": "component", "value": "network"}],
        "itemid": 4242,
        "name": "Interface eth0: Bits received",
        "clock": 1700000000,
        "ns": 500000000,
        "value": "12.5",
        "type": 0,
    }


@pytest.fixture
def netscout_record() -> dict[str, Any]:
    """A Netscout record with three counters and descriptive fields."""
    return {
        "cal_timestamp_time": "2023-11-14 22:13:20.250000 UTC",
        "device_name": " edge-01 ",
        "vlan_name": "",
        "client_site_name": "Lisbon",
        "application_name": "HTTPS",
        "application_group": None,
        "application_protocol_type_code": 6,
        "upw_in_bytes_count": 1024,
        "upw_out_packets_count": 12,
        "upw_rtt_avg": 3.5,
        "upw_enabled": True,
        "upw_label": "n/a",
        "other_count": 5,
    }


# === Rule Store Fixtures ===

TWO_RULES_YAML = """
rules:
  - id: first
    pattern: '(?P<base>Disk usage) (?P<mount>/\\S*)'
    attributes:
      - name: mount
        from_group: mount
  - id: second
    pattern: '(?P<base>Disk) (?P<kind>usage) (?P<mount>.+)'
    attributes:
      - name: kind
        from_group: kind
"""


@pytest.fixture
def two_rule_store() -> RuleStore:
    """Two rules that both match "Disk usage /var"."""
    return RuleStore.from_yaml(TWO_RULES_YAML, origin="test")


@pytest.fixture
def empty_rule_store() -> RuleStore:
    """A store with no rules."""
    return RuleStore()
