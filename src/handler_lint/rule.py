"""jsx-handler-names: enforce event handler naming conventions in JSX.

A prop named `onClick` should be bound to a function named `handleClick`.
The check runs in two phases: options are resolved into compiled patterns
once (see `handler_lint.config`), then every JSXAttribute is evaluated
against them independently.

Usage:
    checker = NamingConventionChecker({"eventHandlerPrefix": "handle"})
    for attr in attributes:
        checker.check(attr, report)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable

from handler_lint.config import Configuration, resolve_configuration
from handler_lint.nodes import (
    AttributeNode,
    ExpressionContainer,
    InlineFunction,
    enclosing_object,
)
from handler_lint.options import HandlerNamesOptions

log = logging.getLogger(__name__)

RULE_NAME = "jsx-handler-names"

DOCS_BASE_URL = "https://github.com/jsx-eslint/eslint-plugin-react/tree/master/docs/rules"

_WHITESPACE_RE = re.compile(r"\s+")
# First match only: a leading `this.` or everything up to a `::` bind operator
_QUALIFIER_RE = re.compile(r"^this\.|.*::")

Report = Callable[[AttributeNode, str], None]


def docs_url(rule_name: str) -> str:
    return f"{DOCS_BASE_URL}/{rule_name}.md"


@dataclass(frozen=True)
class RuleMeta:
    name: str
    description: str
    category: str
    recommended: bool
    url: str


META = RuleMeta(
    name=RULE_NAME,
    description="Enforce event handler naming conventions in JSX",
    category="Stylistic Issues",
    recommended=False,
    url=docs_url(RULE_NAME),
)


@dataclass(frozen=True)
class Diagnostic:
    node: AttributeNode
    message: str


def normalize_value(text: str) -> str:
    """Strip all whitespace, then a leading `this.` or a `Type::` qualifier."""
    return _QUALIFIER_RE.sub("", _WHITESPACE_RE.sub("", text), count=1)


def extract_prop(node: AttributeNode, config: Configuration) -> tuple[str, str] | None:
    """Return (propKey, propValue) for an attribute worth checking, else None.

    Attributes without an expression value are skipped. Unless
    check_local_variables is set, so are bindings with no enclosing object:
    a bare identifier, or an inline function whose body calls a bare
    function (or calls nothing at all).
    """
    if not isinstance(node.value, ExpressionContainer):
        return None
    expr = node.value.expression

    if isinstance(expr, InlineFunction):
        if not config.check_local_variables and enclosing_object(expr.callee) is None:
            return None
        if config.check_inline_function:
            if expr.callee is None:
                return None
            text = expr.callee.text
        else:
            text = expr.text
    else:
        if not config.check_local_variables and enclosing_object(expr) is None:
            return None
        text = expr.text

    return node.name, normalize_value(text)


def evaluate(node: AttributeNode, config: Configuration) -> str | None:
    """Return the diagnostic message for one attribute, or None."""
    extracted = extract_prop(node, config)
    if extracted is None:
        return None
    prop_key, prop_value = extracted

    if prop_key == "ref":
        return None

    # Tri-state: None means that half of the check is disabled
    prop_is_event_handler = _matches(config.prop_name_pattern, prop_key)
    handler_is_named_correctly = _matches(config.handler_name_pattern, prop_value)

    if prop_is_event_handler and handler_is_named_correctly is False:
        return (
            f"Handler function for {prop_key} prop key must begin with "
            f"'{config.event_handler_prefix}'"
        )
    if handler_is_named_correctly and prop_is_event_handler is False:
        return (
            f"Prop key for {prop_value} must begin with "
            f"'{config.event_handler_prop_prefix}'"
        )
    return None


def _matches(pattern: re.Pattern[str] | None, text: str) -> bool | None:
    if pattern is None:
        return None
    return pattern.match(text) is not None


class NamingConventionChecker:
    """Evaluates JSX attributes against one resolved configuration."""

    rule = RULE_NAME
    meta = META

    def __init__(
        self,
        options: dict[str, Any] | HandlerNamesOptions | Configuration | None = None,
    ) -> None:
        if isinstance(options, Configuration):
            self.config = options
        else:
            self.config = resolve_configuration(options)

    def evaluate(self, node: AttributeNode) -> Diagnostic | None:
        """Evaluate one attribute. Never raises; a failure means no diagnostic."""
        try:
            message = evaluate(node, self.config)
        except Exception:
            log.warning(
                "%s: skipping attribute %r at %d:%d",
                RULE_NAME, node.name, node.line, node.column, exc_info=True,
            )
            return None
        if message is None:
            return None
        return Diagnostic(node=node, message=message)

    def check(self, node: AttributeNode, report: Report) -> Diagnostic | None:
        """Evaluate one attribute and pass any diagnostic to report()."""
        diagnostic = self.evaluate(node)
        if diagnostic is not None:
            report(diagnostic.node, diagnostic.message)
        return diagnostic


def create(
    options: dict[str, Any] | HandlerNamesOptions | None,
    report: Report,
) -> dict[str, Callable[[AttributeNode], None]]:
    """Return a visitor table keyed by node type, bound to report()."""
    checker = NamingConventionChecker(options)

    def jsx_attribute(node: AttributeNode) -> None:
        checker.check(node, report)

    return {"JSXAttribute": jsx_attribute}
