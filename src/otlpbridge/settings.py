"""Process settings for the normalization engine."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from otlpbridge.adapters.vendors import Vendor
from otlpbridge.core.encoding import OutputFormat
from otlpbridge.core.errors import ConfigurationError

ENV_PREFIX = "OTLPBRIDGE_"

# Property names accepted by from_mapping, with the setting they feed.
_PROPERTY_KEYS = {
    "source": "source",
    "format": "output_format",
    "sample.rate": "sample_rate",
    "zabbix.rules.file": "rules_file",
    "rules.file": "rules_file",
    "log.level": "log_level",
}


@dataclass(frozen=True)
class Settings:
    """Engine settings, constant for the life of the process.

    Attributes:
        source: Which vendor's records are being consumed.
        output_format: Encoding of every emitted payload.
        sample_rate: Fraction of records admitted, in [0, 1].
        rules_file: Optional name-rule file; the bundled rules are used
            when it is unset or unreadable.
        log_level: Root log level name.
    """

    source: Vendor
    output_format: OutputFormat = OutputFormat.JSON
    sample_rate: float = 1.0
    rules_file: str | None = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        rate = self.sample_rate
        if not isinstance(rate, (int, float)) or not 0.0 <= rate <= 1.0:
            raise ConfigurationError(f"sample rate must be within [0, 1], got {rate!r}")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "Settings":
        """Build settings from a flat property mapping.

        Keys use the property-file names: ``source``, ``format``,
        ``sample.rate``, ``zabbix.rules.file`` (or ``rules.file``) and
        ``log.level``. Unknown keys are ignored.

        Raises:
            ConfigurationError: If the source is missing or any value is invalid.
        """
        fields: dict[str, Any] = {}
        for key, value in values.items():
            target = _PROPERTY_KEYS.get(key)
            if target is not None and value is not None and str(value).strip():
                fields[target] = str(value).strip()

        if "source" not in fields:
            raise ConfigurationError("Missing required configuration: source")
        source = Vendor.parse(fields["source"])
        output_format = OutputFormat.parse(fields.get("output_format", "json"))
        try:
            sample_rate = float(fields.get("sample_rate", 1.0))
        except ValueError:
            raise ConfigurationError(
                f"sample rate is not a number: {fields['sample_rate']!r}"
            ) from None
        return cls(
            source=source,
            output_format=output_format,
            sample_rate=sample_rate,
            rules_file=fields.get("rules_file"),
            log_level=fields.get("log_level", "INFO").upper(),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from ``OTLPBRIDGE_*`` environment variables.

        Reads OTLPBRIDGE_SOURCE, OTLPBRIDGE_FORMAT, OTLPBRIDGE_SAMPLE_RATE,
        OTLPBRIDGE_RULES_FILE and OTLPBRIDGE_LOG_LEVEL.

        Raises:
            ConfigurationError: If the source is missing or any value is invalid.
        """
        env = os.environ if environ is None else environ
        return cls.from_mapping(
            {
                "source": env.get(f"{ENV_PREFIX}SOURCE"),
                "format": env.get(f"{ENV_PREFIX}FORMAT"),
                "sample.rate": env.get(f"{ENV_PREFIX}SAMPLE_RATE"),
                "rules.file": env.get(f"{ENV_PREFIX}RULES_FILE"),
                "log.level": env.get(f"{ENV_PREFIX}LOG_LEVEL"),
            }
        )
