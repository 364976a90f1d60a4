"""Exception types raised by the normalization engine.

None of these are fatal to a running pipeline. Loading errors are recovered
through the rule-source fallback chain, and per-record errors are replaced by
an empty payload for that record only.
"""


class OtlpBridgeError(Exception):
    """Base class for all engine errors."""


class ConfigLoadError(OtlpBridgeError):
    """A rule source could not be read or parsed."""


class RuleCompileError(OtlpBridgeError):
    """A single rule specification is invalid."""

    def __init__(self, rule_id: str, reason: str) -> None:
        super().__init__(f"rule {rule_id!r}: {reason}")
        self.rule_id = rule_id
        self.reason = reason


class MappingError(OtlpBridgeError):
    """A raw record is missing a required field or has an unparsable one."""


class EncodingError(OtlpBridgeError):
    """An envelope cannot be rendered to an output encoding."""


class ConfigurationError(OtlpBridgeError, ValueError):
    """Process settings are missing or invalid."""
