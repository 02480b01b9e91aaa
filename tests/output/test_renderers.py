"""Tests for operation-specific Rich renderers."""

from mdsite.output.renderers import render_quiet, render_result
from mdsite.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _flat(output: str) -> str:
    return " ".join(output.split())


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


def _build_result() -> ServiceResult:
    return _ok(
        "build",
        source_dir="/site/articles",
        output_dir="/site/public",
        page_count=2,
        skipped_count=0,
        pages=[
            {"source": "presenters.md", "output": "presenters.html", "title": "Presenters"},
            {"source": "untitled.md", "output": "untitled.html", "title": ""},
        ],
    )


def _issue(severity: str = "warning", **extra: object) -> dict:
    issue = {
        "category": "undefined_reference",
        "severity": severity,
        "path": "decorators.md",
        "alias": "missing",
        "message": "Alias 'missing' is used but never defined",
    }
    issue.update(extra)
    return issue


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("build", "SOURCE_NOT_FOUND", "Source directory does not exist"))
        assert "ERROR" in output
        assert "build" in output
        assert "Source directory does not exist" in output

    def test_verbose_shows_detail(self) -> None:
        result = _err("render_page", "NOT_FOUND", "No such file", path="x.md")
        output = render_result(result, verbose=True)
        assert "detail" in output
        assert "path: x.md" in output

    def test_detail_hidden_by_default(self) -> None:
        result = _err("render_page", "NOT_FOUND", "No such file", path="x.md")
        assert "detail" not in render_result(result)

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="test"))


# ── Build renderer ───────────────────────────────────────────────────


class TestBuildRenderer:
    def test_summary_fields(self) -> None:
        output = render_result(_build_result())
        assert "OK" in output
        assert "page_count: 2" in _flat(output)
        assert "/site/public" in output
        assert "presenters.html" not in output

    def test_verbose_page_table(self) -> None:
        output = render_result(_build_result(), verbose=True)
        assert "presenters.html" in output
        assert "Presenters" in output
        assert "(untitled)" in output


# ── Check renderer ───────────────────────────────────────────────────


class TestCheckRenderer:
    def test_no_issues(self) -> None:
        output = render_result(_ok("check", document_count=3, issues=[], count=0))
        assert "No issues found." in output
        assert "document_count: 3" in _flat(output)

    def test_issue_table(self) -> None:
        result = _ok(
            "check",
            document_count=3,
            issues=[_issue(), _issue("error", category="unreadable", path="broken.md")],
            count=2,
            error_count=1,
            warning_count=1,
        )
        output = render_result(result)
        assert "decorators.md" in output
        assert "undefined_reference" in output
        assert "broken.md" in output
        assert "2 issues (1 errors, 1 warnings) in 3 documents" in _flat(output)


# ── Render renderer ──────────────────────────────────────────────────


class TestPageRenderer:
    def test_html_not_printed(self) -> None:
        result = _ok(
            "render_page",
            source="presenters.md",
            title="Presenters",
            html="<html>...</html>",
            output="public/presenters.html",
        )
        output = render_result(result)
        assert "presenters.md" in output
        assert "public/presenters.html" in output
        assert "<html>" not in output


class TestGenericRenderer:
    def test_unknown_op(self) -> None:
        output = render_result(_ok("something", answer=42))
        assert "OK" in output
        assert "answer: 42" in _flat(output)


# ── Quiet mode ───────────────────────────────────────────────────────


class TestQuiet:
    def test_build_lists_outputs(self) -> None:
        assert render_quiet(_build_result()) == "presenters.html\nuntitled.html"

    def test_check_lists_issues(self) -> None:
        result = _ok("check", issues=[_issue()])
        assert render_quiet(result) == "decorators.md: Alias 'missing' is used but never defined"

    def test_check_clean_is_empty(self) -> None:
        assert render_quiet(_ok("check", issues=[])) == ""

    def test_render_with_output(self) -> None:
        assert render_quiet(_ok("render_page", output="p.html")) == "p.html"

    def test_render_without_output(self) -> None:
        assert render_quiet(_ok("render_page", output=None)) == "OK: render_page"

    def test_error(self) -> None:
        output = render_quiet(_err("build", "SOURCE_NOT_FOUND", "missing"))
        assert output.startswith("ERROR: build")
        assert "missing" in output
