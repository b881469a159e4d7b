"""handler-lint: JSX event handler naming convention check.

Usage:
    from handler_lint import NamingConventionChecker

    checker = NamingConventionChecker({"eventHandlerPrefix": "handle"})
    checker.check(attribute_node, report)
"""

from __future__ import annotations

__version__ = "0.1.0"

from handler_lint.config import Configuration, resolve_configuration  # noqa: E402
from handler_lint.nodes import AttributeNode  # noqa: E402
from handler_lint.options import HandlerNamesOptions, OptionsError  # noqa: E402
from handler_lint.rule import Diagnostic, NamingConventionChecker, create  # noqa: E402

__all__ = [
    "AttributeNode",
    "Configuration",
    "Diagnostic",
    "HandlerNamesOptions",
    "NamingConventionChecker",
    "OptionsError",
    "create",
    "resolve_configuration",
    "__version__",
]
