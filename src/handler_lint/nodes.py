"""JSX attribute node model.

The bound value of an attribute is one of four expression shapes. Each shape
carries only what the naming check needs: its source text and, where the
shape has one, the enclosing object or the invoked callee.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class MemberAccess:
    """`this.handleClick`, `props.onChange`, `Foo::bar`."""
    object: str          # source text of the enclosing object
    property: str
    text: str


@dataclass(frozen=True)
class BareIdentifier:
    name: str
    text: str


@dataclass(frozen=True)
class OtherExpression:
    """Calls, literals, conditionals, the empty `{}` expression, ..."""
    kind: str            # ESTree node type, "" when unknown
    text: str


@dataclass(frozen=True)
class InlineFunction:
    """Arrow function written directly as the attribute value."""
    callee: "Expression | None"   # callee of the call in the body, if any
    text: str


Expression = Union[MemberAccess, BareIdentifier, InlineFunction, OtherExpression]


@dataclass(frozen=True)
class LiteralValue:
    """String attribute value (`onClick="go()"`); holds no expression."""
    value: str


@dataclass(frozen=True)
class ExpressionContainer:
    expression: Expression


AttributeValue = Union[ExpressionContainer, LiteralValue]


@dataclass(frozen=True)
class AttributeNode:
    name: str                           # "onClick", or "ns:name" for namespaced names
    value: AttributeValue | None = None
    line: int = 0                       # 1-based, 0 when unknown
    column: int = 0                     # 1-based, 0 when unknown
    text: str = ""                      # source text of the whole attribute


def enclosing_object(expr: Expression | None) -> str | None:
    """Return the enclosing object of a member access, or None for local references."""
    if isinstance(expr, MemberAccess):
        return expr.object
    return None
