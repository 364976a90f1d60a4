"""otlpbridge - normalize vendor monitoring records into OTLP metrics.

Example:
    ```python
    from otlpbridge import OutputFormat, RecordProcessor, Vendor

    processor = RecordProcessor(Vendor.SEVONE, OutputFormat.PROTOBUF)
    payload = processor.process(raw_json, topic="metrics.in")
    ```
"""

from otlpbridge.adapters.logging import configure_logging, get_logger
from otlpbridge.adapters.vendors import (
    NetscoutMapper,
    SevOneMapper,
    Vendor,
    ZabbixMapper,
    build_mapper,
)
from otlpbridge.core.encoding import OutputFormat, encode_json, encode_proto
from otlpbridge.core.errors import (
    ConfigLoadError,
    ConfigurationError,
    EncodingError,
    MappingError,
    OtlpBridgeError,
    RuleCompileError,
)
from otlpbridge.core.models import (
    AttributeSpec,
    CanonicalMetric,
    DataPoint,
    ParsedName,
    ResourceEnvelope,
    Rule,
)
from otlpbridge.core.outcome import Failed, MapOutcome, Produced, Skipped
from otlpbridge.core.rules import ReloadableRuleStore, ReloadResult, RuleStore
from otlpbridge.pipeline import RecordProcessor
from otlpbridge.settings import Settings

__all__ = [
    # Models
    "AttributeSpec",
    "CanonicalMetric",
    "DataPoint",
    "ParsedName",
    "ResourceEnvelope",
    "Rule",
    # Outcomes
    "Failed",
    "MapOutcome",
    "Produced",
    "Skipped",
    # Errors
    "ConfigLoadError",
    "ConfigurationError",
    "EncodingError",
    "MappingError",
    "OtlpBridgeError",
    "RuleCompileError",
    # Rules
    "ReloadResult",
    "ReloadableRuleStore",
    "RuleStore",
    # Mappers
    "NetscoutMapper",
    "SevOneMapper",
    "Vendor",
    "ZabbixMapper",
    "build_mapper",
    # Encoding
    "OutputFormat",
    "encode_json",
    "encode_proto",
    # Processing
    "RecordProcessor",
    "Settings",
    # Logging
    "configure_logging",
    "get_logger",
]
