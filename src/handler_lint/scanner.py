"""Run jsx-handler-names over AST files and collect a LintReport."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from handler_lint.frontend import iter_attributes, load_document
from handler_lint.models import FileResult, Finding, LintReport
from handler_lint.nodes import AttributeNode
from handler_lint.options import LintConfig
from handler_lint.rule import RULE_NAME, NamingConventionChecker
from handler_lint.utils import discover_ast_files, snippet

log = logging.getLogger(__name__)


def lint_file(
    path: Path,
    checker: NamingConventionChecker,
    *,
    severity: str = "warning",
) -> FileResult:
    """Check every JSXAttribute in one AST file.

    A file that cannot be loaded is recorded with an error and no findings.
    """
    try:
        doc = load_document(path)
    except (OSError, ValueError) as exc:
        log.warning("Skipping %s: %s", path, exc)
        return FileResult(file=str(path), error=str(exc))

    result = FileResult(file=doc.filename)

    def report(node: AttributeNode, message: str) -> None:
        result.findings.append(Finding(
            rule=RULE_NAME,
            file=doc.filename,
            line=node.line,
            column=node.column,
            message=message,
            snippet=snippet(doc.source, node.line) or node.text,
            severity=severity,
        ))

    try:
        for attr in iter_attributes(doc.ast, doc.source):
            result.attributes_checked += 1
            checker.check(attr, report)
    except Exception as exc:
        log.exception("Walking %s failed", doc.filename)
        result.error = f"walk failed: {exc}"

    log.debug("%s: %d attributes, %d findings",
              doc.filename, result.attributes_checked, len(result.findings))
    return result


def lint_paths(paths: list[Path], config: LintConfig | None = None) -> LintReport:
    """Lint every AST file under paths.

    Args:
        paths: Files or directories; directories are searched for *.ast.json.
        config: Options and severity. Defaults to the rule defaults.

    Returns:
        LintReport with one FileResult per file, in discovery order.
    """
    config = config or LintConfig()
    report = LintReport(
        created_at=datetime.now(timezone.utc).isoformat(),
        options=config.options.model_dump(by_alias=True, exclude_none=True),
    )
    if config.severity == "off":
        log.info("%s is off, nothing to check", RULE_NAME)
        return report

    checker = NamingConventionChecker(config.options)

    files: list[Path] = []
    for path in paths:
        files.extend(discover_ast_files(path))
    log.info("Linting %d AST files", len(files))

    for fpath in files:
        report.files.append(lint_file(fpath, checker, severity=config.severity))

    log.info("Lint complete: %d findings in %d files",
             report.finding_count, report.files_with_findings)
    return report
