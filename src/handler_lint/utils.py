"""Shared utilities for handler-lint."""

from __future__ import annotations

from pathlib import Path

from handler_lint.frontend import AST_SUFFIX


def snippet(source: str | None, lineno: int, max_len: int = 160) -> str:
    """Return the source line at lineno (1-based), stripped and truncated."""
    if not source:
        return ""
    lines = source.splitlines()
    if 0 < lineno <= len(lines):
        return lines[lineno - 1].strip()[:max_len]
    return ""

# Directories to skip during file discovery
SKIP_DIRS = {
    ".git", "node_modules", "bower_components", ".next", ".nuxt",
    "coverage", ".cache", "__pycache__", ".venv", "venv", ".tox",
    ".pytest_cache",
}

# Maximum file size to read; serialized ASTs are large, but not this large
MAX_FILE_SIZE = 2 * 1024 * 1024  # 2 MB


def discover_ast_files(root: Path) -> list[Path]:
    """Walk root for *.ast.json files, skipping ignored dirs and large files.

    A file path is returned as is, whatever its name.
    """
    if root.is_file():
        return [root]
    files: list[Path] = []
    for item in sorted(root.rglob(f"*{AST_SUFFIX}")):
        if item.is_dir():
            continue
        if any(part in SKIP_DIRS for part in item.relative_to(root).parts):
            continue
        try:
            if item.stat().st_size > MAX_FILE_SIZE:
                continue
        except OSError:
            continue
        files.append(item)
    return files
