"""Data-driven metric-name rules.

A rule store holds an ordered list of regex rules that split a free-text
metric name into a base name plus attributes. Rules are tried in order and
the first rule whose pattern matches the whole name wins.

Rule documents are YAML:

    rules:
      - id: interface-traffic
        pattern: 'Interface (?P<interface>.+?): (?P<base>Bits (?:sent|received))'
        attributes:
          - name: interface
            from_group: interface

Named groups may use either Python (?P<name>...) or the (?<name>...) form
used by Java and PCRE rule files; the latter is rewritten before compiling.
"""

import logging
import re
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from otlpbridge.core.errors import ConfigLoadError, RuleCompileError
from otlpbridge.core.models import AttributeSpec, ParsedName, Rule

logger = logging.getLogger(__name__)

DEFAULT_RULES_RESOURCE = "default_rules.yaml"

# "(?<name>" not preceded by a backslash; lookbehinds "(?<=" and "(?<!" are left alone.
_BARE_NAMED_GROUP = re.compile(r"(?<!\\)\(\?<(?=[A-Za-z_])")


def python_group_syntax(source: str) -> str:
    """Rewrite (?<name>...) named groups to Python's (?P<name>...) form."""
    return _BARE_NAMED_GROUP.sub("(?P<", source)


def _compile_rule(index: int, spec: Any) -> Rule:
    """Compile one rule entry.

    Raises:
        RuleCompileError: If the rule entry is malformed.
    """
    if not isinstance(spec, dict):
        raise RuleCompileError(f"rule-{index}", "rule entry must be a mapping")
    rule_id = str(spec.get("id") or f"rule-{index}")

    pattern_source = spec.get("pattern")
    if not isinstance(pattern_source, str) or not pattern_source:
        raise RuleCompileError(rule_id, "missing pattern")
    try:
        pattern = re.compile(python_group_syntax(pattern_source))
    except re.error as exc:
        raise RuleCompileError(rule_id, f"invalid pattern: {exc}") from exc

    raw_attrs = spec.get("attributes") or []
    if not isinstance(raw_attrs, list):
        raise RuleCompileError(rule_id, "attributes must be a list")
    attribute_specs = []
    for attr in raw_attrs:
        if not isinstance(attr, dict) or not attr.get("name") or not attr.get("from_group"):
            raise RuleCompileError(rule_id, f"invalid attribute spec: {attr!r}")
        attribute_specs.append(
            AttributeSpec(name=str(attr["name"]), from_group=str(attr["from_group"]))
        )

    return Rule(id=rule_id, pattern=pattern, attribute_specs=tuple(attribute_specs))


class RuleStore:
    """Immutable, ordered collection of name rules.

    A store is built once and only read afterwards, so one instance can be
    shared across worker threads.

    Example:
        ```python
        store = RuleStore.load("/etc/otlpbridge/rules.yaml")
        parsed = store.apply("Interface eth0: Bits received")
        ```
    """

    def __init__(self, rules: Iterable[Rule] = (), origin: str = "empty") -> None:
        self._rules: tuple[Rule, ...] = tuple(rules)
        self._origin = origin

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleStore(origin={self._origin!r}, rules={len(self._rules)})"

    @property
    def rules(self) -> tuple[Rule, ...]:
        """The rules in evaluation order."""
        return self._rules

    @property
    def origin(self) -> str:
        """Where the rules were loaded from (e.g., file:/path, bundled:...)."""
        return self._origin

    @classmethod
    def from_document(cls, document: Any, origin: str = "document") -> "RuleStore":
        """Build a store from a parsed rule document.

        Invalid rules are dropped with a warning; valid rules keep their order.

        Args:
            document: Parsed YAML/JSON document with a top-level ``rules`` list.
            origin: Description of the source, used in log output.

        Raises:
            ConfigLoadError: If the document root or ``rules`` has the wrong type.
        """
        if document is None:
            document = {}
        if not isinstance(document, dict):
            raise ConfigLoadError(f"{origin}: rule document root must be a mapping")
        specs = document.get("rules")
        if specs is None:
            logger.warning("No 'rules' key in %s; loaded 0 rules", origin)
            return cls((), origin)
        if not isinstance(specs, list):
            raise ConfigLoadError(f"{origin}: 'rules' must be a list")

        compiled: list[Rule] = []
        for index, spec in enumerate(specs):
            try:
                compiled.append(_compile_rule(index, spec))
            except RuleCompileError as exc:
                logger.warning("Dropping rule from %s: %s", origin, exc)

        logger.info("Loaded %d name rules from %s", len(compiled), origin)
        for index, rule in enumerate(compiled):
            logger.debug("  [%d] id=%s pattern=%s", index, rule.id, rule.pattern.pattern)
        return cls(compiled, origin)

    @classmethod
    def from_yaml(cls, text: str, origin: str = "yaml") -> "RuleStore":
        """Build a store from YAML text.

        Raises:
            ConfigLoadError: If the text is not valid YAML or has the wrong shape.
        """
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigLoadError(f"{origin}: invalid YAML: {exc}") from exc
        return cls.from_document(document, origin)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuleStore":
        """Build a store from a YAML file.

        Raises:
            ConfigLoadError: If the file cannot be read or parsed.
        """
        origin = f"file:{path}"
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigLoadError(f"{origin}: {exc}") from exc
        return cls.from_yaml(text, origin)

    @classmethod
    def from_bundled(cls, resource: str = DEFAULT_RULES_RESOURCE) -> "RuleStore":
        """Build a store from a rule file shipped in ``otlpbridge.rules``.

        Raises:
            ConfigLoadError: If the resource is missing or cannot be parsed.
        """
        origin = f"bundled:{resource}"
        try:
            text = resources.files("otlpbridge.rules").joinpath(resource).read_text(
                encoding="utf-8"
            )
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigLoadError(f"{origin}: {exc}") from exc
        return cls.from_yaml(text, origin)

    @classmethod
    def load(
        cls,
        path: str | Path | None = None,
        fallback: str = DEFAULT_RULES_RESOURCE,
    ) -> "RuleStore":
        """Load rules without ever failing.

        Tries the explicit file first, then the bundled fallback resource,
        and finally returns an empty store.

        Args:
            path: Optional rule file. Blank values are ignored.
            fallback: Name of the bundled resource to fall back to.
        """
        if path is not None and str(path).strip():
            try:
                return cls.from_file(path)
            except ConfigLoadError:
                logger.exception("Failed to load name rules from file %s", path)
        try:
            return cls.from_bundled(fallback)
        except ConfigLoadError:
            logger.exception("Failed to load bundled name rules %s", fallback)
        logger.error("Using an empty name rule store")
        return cls()

    def apply(self, raw_name: str | None) -> ParsedName:
        """Split a raw metric name using the first rule that fully matches.

        Args:
            raw_name: Free-text metric name.

        Returns:
            ParsedName with the ``base`` group and any participating
            attribute groups. Empty when nothing matches.
        """
        if not raw_name:
            return ParsedName()
        for rule in self._rules:
            match = rule.pattern.fullmatch(raw_name)
            if match is None:
                continue
            # groupdict() maps non-participating groups to None and
            # unknown names are simply absent.
            groups = match.groupdict()
            attributes: dict[str, str] = {}
            for spec in rule.attribute_specs:
                value = groups.get(spec.from_group)
                if value is not None:
                    attributes[spec.name] = value
            parsed = ParsedName(base=groups.get("base"), attributes=attributes)
            logger.debug(
                "Rule %s matched %r: base=%r attributes=%r",
                rule.id,
                raw_name,
                parsed.base,
                parsed.attributes,
            )
            return parsed
        logger.debug("No rule matched %r", raw_name)
        return ParsedName()


@dataclass(frozen=True)
class ReloadResult:
    """Outcome of a rule reload.

    Attributes:
        ok: True if the new rules are now active.
        rule_count: Number of active rules after the attempt.
        source: The file that was read.
        error: Failure description when ok is False.
    """

    ok: bool
    rule_count: int
    source: str
    error: str | None = None


class ReloadableRuleStore:
    """A rule store reference that can be swapped at runtime.

    ``apply`` always reads one complete snapshot; ``reload`` parses the file
    first and replaces the reference only if parsing succeeded, so a broken
    file leaves the last good rules active.
    """

    def __init__(self, path: str | Path, initial: RuleStore | None = None) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        self._store = initial if initial is not None else RuleStore.load(path)

    @property
    def current(self) -> RuleStore:
        """The active rule store snapshot."""
        return self._store

    def apply(self, raw_name: str | None) -> ParsedName:
        """Apply the active snapshot (see RuleStore.apply)."""
        return self._store.apply(raw_name)

    def reload(self) -> ReloadResult:
        """Re-read the rule file and swap it in if it parses."""
        with self._lock:
            try:
                store = RuleStore.from_file(self._path)
            except ConfigLoadError as exc:
                logger.error("Rule reload failed, keeping %r: %s", self._store, exc)
                return ReloadResult(
                    ok=False,
                    rule_count=len(self._store),
                    source=str(self._path),
                    error=str(exc),
                )
            self._store = store
            return ReloadResult(ok=True, rule_count=len(store), source=str(self._path))

