"""ESTree / Babel JSON frontend: parsed AST -> AttributeNode stream.

Source text is not parsed here. The input is an AST already serialized to
JSON by espree, @babel/parser or any ESTree-compatible parser, either bare
or wrapped in an envelope carrying the original source:

    {"filename": "Button.jsx", "source": "...", "ast": {"type": "File", ...}}

Expression text is sliced from the source when it is available (`range` or
`start`/`end` offsets) and rendered from the AST otherwise. Parsers report
offsets in UTF-16 code units over the raw file, so the source is kept with
its original line endings and sliced through its UTF-16 encoding.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

from handler_lint.nodes import (
    AttributeNode,
    BareIdentifier,
    Expression,
    ExpressionContainer,
    InlineFunction,
    LiteralValue,
    MemberAccess,
    OtherExpression,
)

log = logging.getLogger(__name__)

AST_SUFFIX = ".ast.json"

# Keys that never hold child syntax nodes
_SKIP_KEYS = {
    "loc", "range", "start", "end", "extra", "comments", "tokens",
    "leadingComments", "trailingComments", "innerComments",
}

_MEMBER_TYPES = {"MemberExpression", "OptionalMemberExpression", "JSXMemberExpression"}
_CALL_TYPES = {"CallExpression", "OptionalCallExpression", "NewExpression"}
_LITERAL_TYPES = {
    "Literal", "StringLiteral", "NumericLiteral", "BooleanLiteral",
    "NullLiteral", "BigIntLiteral", "RegExpLiteral",
}
_STRING_TYPES = {"Literal", "StringLiteral"}


@dataclass
class AstDocument:
    filename: str
    ast: dict[str, Any]
    source: str | None = None


class SourceText:
    """Source text addressed by UTF-16 code unit offsets, as JS parsers report them."""

    def __init__(self, text: str) -> None:
        self.text = text
        self._utf16 = text.encode("utf-16-le", errors="surrogatepass")

    def __len__(self) -> int:
        return len(self._utf16) // 2

    def slice(self, start: int, end: int) -> str:
        return self._utf16[2 * start:2 * end].decode("utf-16-le", errors="replace")


def as_source(source: str | SourceText | None) -> SourceText | None:
    if source is None or isinstance(source, SourceText):
        return source
    return SourceText(source)


def load_document(path: Path) -> AstDocument:
    """Read an AST JSON file, bare or enveloped.

    For a bare AST named `<file>.ast.json`, a sibling `<file>` is read as
    the source text when it exists.

    Raises:
        ValueError: if the file is not JSON or holds no AST object.
    """
    try:
        data = json.loads(path.read_text(errors="replace"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path}: invalid JSON: {exc}") from exc

    if isinstance(data, dict) and isinstance(data.get("ast"), dict):
        source = data.get("source")
        return AstDocument(
            filename=str(data.get("filename") or _source_name(path)),
            ast=data["ast"],
            source=source if isinstance(source, str) else None,
        )

    if isinstance(data, dict) and "type" in data:
        source = None
        sibling = path.with_name(_source_name(path))
        if sibling != path and sibling.is_file():
            with open(sibling, encoding="utf-8", errors="replace", newline="") as f:
                source = f.read()
        return AstDocument(filename=_source_name(path), ast=data, source=source)

    raise ValueError(f"{path}: no AST object found")


def _source_name(path: Path) -> str:
    if path.name.endswith(AST_SUFFIX):
        return path.name[: -len(AST_SUFFIX)]
    return path.name


def iter_attributes(ast: dict[str, Any], source: str | SourceText | None = None) -> Iterator[AttributeNode]:
    """Yield every JSXAttribute in the tree, in source order."""
    source = as_source(source)
    stack: list[Any] = [ast]
    while stack:
        item = stack.pop()
        if isinstance(item, list):
            stack.extend(reversed(item))
            continue
        if not isinstance(item, dict):
            continue
        if item.get("type") == "JSXAttribute":
            try:
                attr = to_attribute(item, source)
            except Exception:
                log.warning("Skipping malformed JSXAttribute at %s", _position(item), exc_info=True)
            else:
                yield attr
        children = [v for k, v in item.items() if k not in _SKIP_KEYS and isinstance(v, (dict, list))]
        stack.extend(reversed(children))


def to_attribute(node: dict[str, Any], source: str | SourceText | None = None) -> AttributeNode:
    source = as_source(source)
    line, column = _position(node)
    return AttributeNode(
        name=_attribute_name(node.get("name")),
        value=_attribute_value(node.get("value"), source),
        line=line,
        column=column,
        text=node_text(node, source),
    )


def _attribute_name(name: Any) -> str:
    if isinstance(name, str):
        return name
    if not isinstance(name, dict):
        return ""
    if name.get("type") == "JSXNamespacedName":
        return f"{_attribute_name(name.get('namespace'))}:{_attribute_name(name.get('name'))}"
    return str(name.get("name", ""))


def _attribute_value(value: Any, source: str | SourceText | None):
    if not isinstance(value, dict):
        return None
    kind = value.get("type")
    if kind == "JSXExpressionContainer":
        return ExpressionContainer(to_expression(value.get("expression"), source))
    if kind in _STRING_TYPES and isinstance(value.get("value"), str):
        return LiteralValue(value["value"])
    # JSXElement / JSXFragment values carry no expression
    return None


def to_expression(node: Any, source: str | SourceText | None = None) -> Expression:
    """Classify an ESTree expression into one of the four expression shapes."""
    source = as_source(source)
    if not isinstance(node, dict):
        return OtherExpression(kind="", text="")

    kind = node.get("type", "")
    text = node_text(node, source)

    if kind == "ArrowFunctionExpression":
        callee = _body_callee(node.get("body"))
        return InlineFunction(
            callee=to_expression(callee, source) if callee is not None else None,
            text=text,
        )
    if kind in _MEMBER_TYPES and isinstance(node.get("object"), dict):
        return MemberAccess(
            object=node_text(node["object"], source),
            property=render(node.get("property")),
            text=text,
        )
    if kind == "BindExpression" and isinstance(node.get("object"), dict):
        return MemberAccess(
            object=node_text(node["object"], source),
            property=render(node.get("callee")),
            text=text,
        )
    if kind == "Identifier":
        return BareIdentifier(name=str(node.get("name", "")), text=text)
    return OtherExpression(kind=kind, text=text)


def _body_callee(body: Any) -> dict[str, Any] | None:
    """Callee of the call an arrow function body consists of, if any.

    Handles an expression body (`() => this.go()`) and a block body whose
    sole statement is a call (`() => { this.go(); }`).
    """
    if not isinstance(body, dict):
        return None
    if body.get("type") == "BlockStatement":
        statements = body.get("body")
        if not isinstance(statements, list) or len(statements) != 1 or not isinstance(statements[0], dict):
            return None
        if statements[0].get("type") != "ExpressionStatement":
            return None
        body = statements[0].get("expression")
        if not isinstance(body, dict):
            return None
    if body.get("type") == "ChainExpression":
        body = body.get("expression")
        if not isinstance(body, dict):
            return None
    if body.get("type") in _CALL_TYPES and isinstance(body.get("callee"), dict):
        return body["callee"]
    return None


# ── Text ────────────────────────────────────────────────────────────────


def node_text(node: dict[str, Any], source: str | SourceText | None) -> str:
    """Source text of a node: a slice of source when possible, else rendered."""
    source = as_source(source)
    if source is not None:
        span = _span(node)
        if span is not None:
            start, end = span
            if 0 <= start <= end <= len(source):
                return source.slice(start, end)
    return render(node)


def _span(node: dict[str, Any]) -> tuple[int, int] | None:
    rng = node.get("range")
    if isinstance(rng, list) and len(rng) == 2 and all(isinstance(i, int) for i in rng):
        return rng[0], rng[1]
    start, end = node.get("start"), node.get("end")
    if isinstance(start, int) and isinstance(end, int):
        return start, end
    return None


def _position(node: dict[str, Any]) -> tuple[int, int]:
    loc = node.get("loc")
    if isinstance(loc, dict) and isinstance(loc.get("start"), dict):
        start = loc["start"]
        line, column = start.get("line"), start.get("column")
        if isinstance(line, int) and isinstance(column, int):
            return line, column + 1
    return 0, 0


def render(node: Any) -> str:
    """Render an expression back to compact source text."""
    if not isinstance(node, dict):
        return ""
    kind = node.get("type")

    if kind in ("Identifier", "JSXIdentifier"):
        return str(node.get("name", ""))
    if kind == "ThisExpression":
        return "this"
    if kind == "Super":
        return "super"
    if kind == "PrivateIdentifier":
        return f"#{node.get('name', '')}"
    if kind == "PrivateName":
        return f"#{render(node.get('id'))}"
    if kind in _MEMBER_TYPES:
        obj = render(node.get("object"))
        prop = render(node.get("property"))
        dot = "?." if node.get("optional") else "."
        if node.get("computed"):
            return f"{obj}{'?.' if node.get('optional') else ''}[{prop}]"
        return f"{obj}{dot}{prop}"
    if kind in _CALL_TYPES:
        args = ",".join(render(a) for a in node.get("arguments") or [])
        prefix = "new " if kind == "NewExpression" else ""
        opt = "?." if node.get("optional") else ""
        return f"{prefix}{render(node.get('callee'))}{opt}({args})"
    if kind == "ChainExpression":
        return render(node.get("expression"))
    if kind == "BindExpression":
        return f"{render(node.get('object'))}::{render(node.get('callee'))}"
    if kind == "ArrowFunctionExpression":
        params = ",".join(render(p) for p in node.get("params") or [])
        return f"({params})=>{render(node.get('body'))}"
    if kind == "BlockStatement":
        return "{" + ";".join(render(s) for s in node.get("body") or []) + "}"
    if kind == "ExpressionStatement":
        return render(node.get("expression"))
    if kind in _LITERAL_TYPES:
        return _render_literal(node)
    if kind == "JSXEmptyExpression":
        return ""
    return ""


def _render_literal(node: dict[str, Any]) -> str:
    extra = node.get("extra")
    if isinstance(extra, dict) and isinstance(extra.get("raw"), str):
        return extra["raw"]
    if isinstance(node.get("raw"), str):
        return node["raw"]
    value = node.get("value")
    if isinstance(value, str):
        return json.dumps(value)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
