"""Error types and the per-run error report."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class CarnetError(Exception):
    """Base class for carnet errors."""


class FrontMatterError(CarnetError):
    """A content file whose front matter cannot be turned into a post."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        self.message = message
        super().__init__(f"{self.path}: {message}")


class ReportedError(BaseModel):
    """A single failure recorded during a run."""

    stage: str
    message: str
    source: str = ""
    error_type: str = "error"


class BuildReport(BaseModel):
    """Collects non-fatal failures so a run can finish and summarise them."""

    errors: list[ReportedError] = Field(default_factory=list)

    def add_error(
        self,
        stage: str,
        message: str,
        *,
        source: str = "",
        error_type: str = "error",
    ) -> None:
        self.errors.append(
            ReportedError(stage=stage, message=message, source=source, error_type=error_type)
        )

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def errors_for(self, stage: str) -> list[ReportedError]:
        """Return the errors recorded for one stage."""
        return [e for e in self.errors if e.stage == stage]

    def summary(self) -> str:
        """One line per error, grouped by stage in insertion order."""
        if not self.errors:
            return "No errors."
        lines: list[str] = []
        for err in self.errors:
            where = f" ({err.source})" if err.source else ""
            lines.append(f"[{err.stage}] {err.error_type}{where}: {err.message}")
        return "\n".join(lines)
