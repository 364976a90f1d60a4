"""Vendor mappers implementing VendorMapperPort."""

from enum import Enum

from otlpbridge.adapters.vendors.netscout import NetscoutMapper
from otlpbridge.adapters.vendors.sevone import SevOneMapper
from otlpbridge.adapters.vendors.zabbix import ZabbixMapper
from otlpbridge.core.errors import ConfigurationError
from otlpbridge.core.ports import NameParserPort, VendorMapperPort
from otlpbridge.core.rules import RuleStore


class Vendor(Enum):
    """Supported record sources.

    Each member carries its capabilities: ``supports_protobuf`` marks the
    vendors whose output may be requested as binary OTLP, and ``uses_rules``
    marks the vendors that decompose names with a rule store.
    """

    NETSCOUT = ("netscout", False, False)
    ZABBIX = ("zabbix", False, True)
    SEVONE = ("sevone", True, False)

    def __init__(self, label: str, supports_protobuf: bool, uses_rules: bool) -> None:
        self.label = label
        self.supports_protobuf = supports_protobuf
        self.uses_rules = uses_rules

    @classmethod
    def parse(cls, text: str) -> "Vendor":
        """Look up a vendor by name, case-insensitively.

        Raises:
            ConfigurationError: If the name is unknown.
        """
        wanted = text.strip().lower()
        for vendor in cls:
            if vendor.label == wanted:
                return vendor
        raise ConfigurationError(f"Unsupported source: {text!r}")


def build_mapper(vendor: Vendor, rules: NameParserPort | None = None) -> VendorMapperPort:
    """Create the mapper for a vendor.

    Args:
        vendor: The record source.
        rules: Name parser for vendors that use one. Defaults to the
            bundled rule set.
    """
    if vendor is Vendor.NETSCOUT:
        return NetscoutMapper()
    if vendor is Vendor.SEVONE:
        return SevOneMapper()
    return ZabbixMapper(rules if rules is not None else RuleStore.load())


__all__ = [
    "NetscoutMapper",
    "SevOneMapper",
    "Vendor",
    "ZabbixMapper",
    "build_mapper",
]
