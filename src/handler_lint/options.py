"""Options schema for jsx-handler-names and config-file loading.

Options may come from `.handler-lint.yml`, `.handler-lint.json`, or a
`[tool.handler-lint]` table in `pyproject.toml`. Keys follow the ESLint
rule option names (`eventHandlerPrefix`, ...); snake_case is also accepted.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

log = logging.getLogger(__name__)

RULE_KEYS = ("jsx-handler-names", "react/jsx-handler-names")

CONFIG_FILENAMES = (".handler-lint.yml", ".handler-lint.yaml", ".handler-lint.json")

# ESLint numeric / short severities
_SEVERITY_ALIASES = {
    0: "off", 1: "warning", 2: "error",
    "off": "off", "warn": "warning", "warning": "warning", "error": "error",
}


class OptionsError(ValueError):
    """Raised when rule options or a config file are invalid."""


class HandlerNamesOptions(BaseModel):
    """Raw rule options. A prefix is a string, or `False` to disable that half of the check."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    event_handler_prefix: str | Literal[False] | None = Field(default=None, alias="eventHandlerPrefix")
    event_handler_prop_prefix: str | Literal[False] | None = Field(default=None, alias="eventHandlerPropPrefix")
    check_local_variables: bool = Field(default=False, alias="checkLocalVariables")
    check_inline_function: bool = Field(default=False, alias="checkInlineFunction")

    @model_validator(mode="after")
    def _one_prefix_enabled(self) -> "HandlerNamesOptions":
        if self.event_handler_prefix is False and self.event_handler_prop_prefix is False:
            raise ValueError("eventHandlerPrefix and eventHandlerPropPrefix cannot both be false")
        return self


class LintConfig(BaseModel):
    """Options plus the severity the host assigns to reported findings."""

    model_config = ConfigDict(extra="forbid")

    severity: Literal["off", "warning", "error"] = "warning"
    options: HandlerNamesOptions = Field(default_factory=HandlerNamesOptions)


def options_schema() -> dict[str, Any]:
    """JSON schema of the rule options object (camelCase keys)."""
    return HandlerNamesOptions.model_json_schema(by_alias=True)


def parse_options(raw: dict[str, Any] | HandlerNamesOptions | None) -> HandlerNamesOptions:
    if raw is None:
        return HandlerNamesOptions()
    if isinstance(raw, HandlerNamesOptions):
        return raw
    try:
        return HandlerNamesOptions.model_validate(raw)
    except ValidationError as exc:
        raise OptionsError(_format_errors(exc)) from exc


def parse_config(data: Any) -> LintConfig:
    """Build a LintConfig from a loaded document.

    Accepted shapes:
        {"eventHandlerPrefix": "handle", "severity": "error"}
        {"rules": {"react/jsx-handler-names": ["error", {...}]}}
        ["error", {...}]
    """
    if data is None:
        return LintConfig()

    if isinstance(data, dict) and "rules" in data:
        rules = data["rules"] or {}
        if not isinstance(rules, dict):
            raise OptionsError("'rules' must be a mapping")
        entry = next((rules[k] for k in RULE_KEYS if k in rules), None)
        return parse_config(_entry_to_mapping(entry))

    if isinstance(data, (list, str, int)):
        return parse_config(_entry_to_mapping(data))

    if not isinstance(data, dict):
        raise OptionsError(f"expected a mapping, got {type(data).__name__}")

    data = dict(data)
    severity = _normalize_severity(data.pop("severity", "warning"))
    options = parse_options(data)
    return LintConfig(severity=severity, options=options)


def load_config(path: Path) -> LintConfig:
    """Load a LintConfig from a YAML, JSON, or TOML file."""
    try:
        text = path.read_text()
    except OSError as exc:
        raise OptionsError(f"cannot read config file {path}: {exc}") from exc

    suffix = path.suffix.lower()
    try:
        if suffix in (".yml", ".yaml"):
            data = yaml.safe_load(text)
        elif suffix == ".toml":
            doc = tomllib.loads(text)
            data = doc.get("tool", {}).get("handler-lint", {}) if path.name == "pyproject.toml" else doc
        else:
            data = json.loads(text)
    except (yaml.YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise OptionsError(f"invalid config file {path}: {exc}") from exc

    log.debug("Loaded config from %s", path)
    return parse_config(data)


def find_config(start: Path) -> Path | None:
    """Search start and its parents for a config file."""
    start = start.resolve()
    for directory in (start, *start.parents):
        for name in CONFIG_FILENAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
        pyproject = directory / "pyproject.toml"
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
    return None


def _has_tool_table(pyproject: Path) -> bool:
    try:
        with open(pyproject, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        log.debug("Skipping unreadable %s", pyproject, exc_info=True)
        return False
    return "handler-lint" in data.get("tool", {})


def _entry_to_mapping(entry: Any) -> dict[str, Any]:
    """Turn an ESLint rule entry ("error" / ["error", {...}]) into a flat mapping."""
    if entry is None:
        return {}
    if isinstance(entry, (str, int)):
        return {"severity": entry}
    if isinstance(entry, list):
        if not entry:
            return {}
        mapping: dict[str, Any] = {"severity": entry[0]}
        if len(entry) > 1:
            if not isinstance(entry[1], dict):
                raise OptionsError("rule options must be a mapping")
            mapping.update(entry[1])
        return mapping
    if isinstance(entry, dict):
        return entry
    raise OptionsError(f"unsupported rule entry: {entry!r}")


def _normalize_severity(value: Any) -> str:
    if isinstance(value, str):
        value = value.lower()
    if isinstance(value, bool) or value not in _SEVERITY_ALIASES:
        raise OptionsError(f"invalid severity: {value!r}")
    return _SEVERITY_ALIASES[value]


def _format_errors(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)
