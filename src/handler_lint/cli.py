"""CLI entry point for handler-lint."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from handler_lint import __version__
from handler_lint.models import LintReport
from handler_lint.options import (
    LintConfig,
    OptionsError,
    find_config,
    load_config,
    options_schema,
    parse_options,
)
from handler_lint.scanner import lint_paths

log = logging.getLogger(__name__)


@click.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "-c", "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    default=None,
    help="Config file (YAML, JSON or pyproject.toml). Searched from the cwd by default.",
)
@click.option("--event-handler-prefix", default=None, help="Required handler function prefix (default: handle).")
@click.option("--event-handler-prop-prefix", default=None, help="Required event prop prefix (default: on).")
@click.option("--no-handler-prefix", is_flag=True, default=False, help="Do not check handler function names.")
@click.option("--no-prop-prefix", is_flag=True, default=False, help="Do not check prop key names.")
@click.option("--check-local-variables", is_flag=True, default=False,
              help="Also check handlers bound without an enclosing object.")
@click.option("--check-inline-function", is_flag=True, default=False,
              help="Check the function called inside inline arrow handlers.")
@click.option(
    "--severity",
    type=click.Choice(["warning", "error"], case_sensitive=False),
    default=None,
    help="Severity of reported findings (default: warning, or the config file's).",
)
@click.option(
    "-f", "--format", "fmt",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "-o", "--output",
    type=click.Path(resolve_path=True),
    default=None,
    help="Output file path. Defaults to stdout.",
)
@click.option("--print-schema", is_flag=True, default=False, help="Print the options JSON schema and exit.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
@click.version_option(version=__version__)
def main(
    paths: tuple[str, ...],
    config_path: str | None,
    event_handler_prefix: str | None,
    event_handler_prop_prefix: str | None,
    no_handler_prefix: bool,
    no_prop_prefix: bool,
    check_local_variables: bool,
    check_inline_function: bool,
    severity: str | None,
    fmt: str,
    output: str | None,
    print_schema: bool,
    verbose: bool,
) -> None:
    """Check JSX event handler naming in ESTree/Babel AST files (*.ast.json)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    if print_schema:
        click.echo(json.dumps(options_schema(), indent=2))
        return
    if not paths:
        raise click.UsageError("at least one PATH is required")

    if no_handler_prefix and event_handler_prefix is not None:
        raise click.UsageError("--no-handler-prefix cannot be combined with --event-handler-prefix")
    if no_prop_prefix and event_handler_prop_prefix is not None:
        raise click.UsageError("--no-prop-prefix cannot be combined with --event-handler-prop-prefix")

    overrides: dict[str, object] = {}
    if event_handler_prefix is not None:
        overrides["eventHandlerPrefix"] = event_handler_prefix
    if event_handler_prop_prefix is not None:
        overrides["eventHandlerPropPrefix"] = event_handler_prop_prefix
    if no_handler_prefix:
        overrides["eventHandlerPrefix"] = False
    if no_prop_prefix:
        overrides["eventHandlerPropPrefix"] = False
    if check_local_variables:
        overrides["checkLocalVariables"] = True
    if check_inline_function:
        overrides["checkInlineFunction"] = True

    try:
        config = _load_config(config_path)
        merged = config.options.model_dump(by_alias=True, exclude_none=True)
        merged.update(overrides)
        config = LintConfig(
            severity=severity.lower() if severity else config.severity,
            options=parse_options(merged),
        )
    except OptionsError as exc:
        raise click.UsageError(str(exc)) from exc

    report = lint_paths([Path(p) for p in paths], config)

    if fmt == "json":
        text = json.dumps(report.model_dump(), indent=2)
    else:
        text = render_text(report)

    if output:
        Path(output).write_text(text + "\n")
        click.echo(f"Report written to {output}")
    else:
        click.echo(text)

    if report.has_errors:
        sys.exit(1)


def _load_config(config_path: str | None) -> LintConfig:
    if config_path:
        return load_config(Path(config_path))
    found = find_config(Path.cwd())
    if found is None:
        return LintConfig()
    log.info("Using config %s", found)
    return load_config(found)


def render_text(report: LintReport) -> str:
    lines: list[str] = []
    for result in report.files:
        if result.error:
            lines.append(f"{result.file}: could not be checked: {result.error}")
        for f in result.findings:
            lines.append(f"{f.file}:{f.line}:{f.column}: {f.severity} {f.message} [{f.rule}]")

    if report.finding_count:
        noun = "problem" if report.finding_count == 1 else "problems"
        lines.append(f"{report.finding_count} {noun} in {report.files_with_findings} file(s)")
    else:
        lines.append(f"No problems found ({len(report.files)} file(s) checked).")
    return "\n".join(lines)


if __name__ == "__main__":
    main()
