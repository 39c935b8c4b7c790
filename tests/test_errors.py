"""Tests for error types and BuildReport."""

from pathlib import Path

from carnet.errors import BuildReport, CarnetError, FrontMatterError


class TestFrontMatterError:
    def test_message_includes_path(self):
        err = FrontMatterError("posts/a.md", "missing title")
        assert isinstance(err, CarnetError)
        assert err.path == Path("posts/a.md")
        assert err.message == "missing title"
        assert str(err) == "posts/a.md: missing title"


class TestBuildReport:
    def test_empty(self):
        report = BuildReport()
        assert not report.has_errors
        assert report.summary() == "No errors."

    def test_add_and_filter(self):
        report = BuildReport()
        report.add_error("read", "missing title", source="a.md", error_type="front_matter_error")
        report.add_error("build", "disk full")
        assert report.has_errors
        assert [e.message for e in report.errors_for("read")] == ["missing title"]
        assert report.errors_for("publish") == []

    def test_summary(self):
        report = BuildReport()
        report.add_error("read", "missing title", source="a.md", error_type="front_matter_error")
        report.add_error("build", "disk full")
        assert report.summary().splitlines() == [
            "[read] front_matter_error (a.md): missing title",
            "[build] error: disk full",
        ]
