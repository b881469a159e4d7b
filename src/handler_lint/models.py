"""Pydantic models for lint reports."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, computed_field


class Finding(BaseModel):
    rule: str
    file: str
    line: int                 # 1-based, 0 when the AST carries no positions
    column: int
    message: str
    snippet: str = ""
    severity: Literal["warning", "error"] = "warning"   # assigned by the host, not the rule


class FileResult(BaseModel):
    file: str
    attributes_checked: int = 0
    findings: list[Finding] = Field(default_factory=list)
    error: str | None = None  # set when the file could not be loaded


class LintReport(BaseModel):
    created_at: str = ""
    options: dict[str, Any] = Field(default_factory=dict)
    files: list[FileResult] = Field(default_factory=list)

    @computed_field
    @property
    def finding_count(self) -> int:
        return sum(len(f.findings) for f in self.files)

    @computed_field
    @property
    def files_with_findings(self) -> int:
        return sum(1 for f in self.files if f.findings)

    @computed_field
    @property
    def error_count(self) -> int:
        """Files that could not be loaded."""
        return sum(1 for f in self.files if f.error)

    # Not serialized; the per-file lists are the canonical form.

    @property
    def findings(self) -> list[Finding]:
        return [finding for f in self.files for finding in f.findings]

    @property
    def has_errors(self) -> bool:
        """True when any finding carries severity "error"."""
        return any(f.severity == "error" for f in self.findings)
