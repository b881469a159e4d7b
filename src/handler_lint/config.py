"""Resolved configuration: prefixes plus the two compiled name patterns.

Built once per run and shared read-only by every attribute check.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from handler_lint.options import HandlerNamesOptions, parse_options

DEFAULT_HANDLER_PREFIX = "handle"
DEFAULT_PROP_PREFIX = "on"


@dataclass(frozen=True)
class Configuration:
    event_handler_prefix: str | None        # None: handler names are not checked
    event_handler_prop_prefix: str | None   # None: prop keys are not checked
    check_local_variables: bool
    check_inline_function: bool
    handler_name_pattern: re.Pattern[str] | None
    prop_name_pattern: re.Pattern[str] | None


def resolve_configuration(
    options: dict[str, Any] | HandlerNamesOptions | None = None,
) -> Configuration:
    """Resolve raw options into a Configuration with compiled patterns.

    A prefix of `False` disables its pattern; a missing or empty prefix
    falls back to the default.
    """
    opts = parse_options(options)

    handler_prefix = _resolve_prefix(opts.event_handler_prefix, DEFAULT_HANDLER_PREFIX)
    prop_prefix = _resolve_prefix(opts.event_handler_prop_prefix, DEFAULT_PROP_PREFIX)

    return Configuration(
        event_handler_prefix=handler_prefix,
        event_handler_prop_prefix=prop_prefix,
        check_local_variables=opts.check_local_variables,
        check_inline_function=opts.check_inline_function,
        handler_name_pattern=build_handler_name_pattern(handler_prefix, prop_prefix),
        prop_name_pattern=build_prop_name_pattern(prop_prefix),
    )


def build_handler_name_pattern(
    handler_prefix: str | None, prop_prefix: str | None,
) -> re.Pattern[str] | None:
    """Match `props.<propPrefix>X...` or `[a.b.]<handlerPrefix>X...`."""
    if not handler_prefix:
        return None
    return re.compile(
        rf"^((props\.{re.escape(prop_prefix or '')})|((.*\.)?{re.escape(handler_prefix)}))[A-Z].*$"
    )


def build_prop_name_pattern(prop_prefix: str | None) -> re.Pattern[str] | None:
    """Match `<propPrefix>X...` or the literal `ref`."""
    if not prop_prefix:
        return None
    return re.compile(rf"^({re.escape(prop_prefix)}[A-Z].*|ref)$")


def _resolve_prefix(value: str | bool | None, default: str) -> str | None:
    if value is False:
        return None
    return value or default
