"""Typed payload contracts for service and adapter boundaries.

These models validate operation payload shapes before they leave the
service layer so key regressions fail fast in tests.
"""

from __future__ import annotations

from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class RenderResultData(BaseModel):
    """Payload contract for ``RenderService.render_file``."""

    source: str
    title: str
    html: str
    output: str | None = None


class BuiltPage(BaseModel):
    """One rendered page."""

    source: str
    output: str
    title: str


class BuildResultData(BaseModel):
    """Payload contract for ``BuildService.build``."""

    source_dir: str
    output_dir: str
    page_count: int
    skipped_count: int
    pages: list[BuiltPage]


class CheckIssue(BaseModel):
    """One finding returned by ``CheckService.check``."""

    model_config = ConfigDict(extra="allow")

    category: Literal[
        "undefined_reference",
        "unused_reference",
        "duplicate_reference",
        "missing_target",
        "missing_title",
        "unreadable",
    ]
    severity: Literal["warning", "error"]
    path: str
    alias: str | None = None
    message: str


class CheckResultData(BaseModel):
    """Payload contract for ``CheckService.check``."""

    source_dir: str
    document_count: int
    issues: list[CheckIssue]
    count: int
    error_count: int
    warning_count: int
    healthy: bool
