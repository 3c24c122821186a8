"""Step results and the aggregated scaffold report.

Every operation of a recipe run produces one :class:`StepResult` with a
tri-state status.  The :class:`ScaffoldReport` folds them into a single
outcome for the user.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, computed_field


class StepStatus(str, Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


class Outcome(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Individual steps
# ---------------------------------------------------------------------------


class StepResult(BaseModel):
    """Outcome of one folder, file, fetch or command step."""

    name: str = Field(..., description="Human-readable step label, e.g. 'data/repository'")
    status: StepStatus
    message: str = Field(default="")
    paths: list[Path] = Field(default_factory=list, description="Paths created or written")

    @classmethod
    def success(cls, name: str, paths: list[Path] | None = None, message: str = "") -> "StepResult":
        return cls(name=name, status=StepStatus.SUCCESS, paths=paths or [], message=message)

    @classmethod
    def skipped(cls, name: str, message: str) -> "StepResult":
        return cls(name=name, status=StepStatus.SKIPPED, message=message)

    @classmethod
    def failed(cls, name: str, message: str) -> "StepResult":
        return cls(name=name, status=StepStatus.FAILED, message=message)


class FetchResult(BaseModel):
    """Result of one remote template fetch."""

    success: bool = Field(default=True)
    url: str = Field(default="")
    written: list[Path] = Field(default_factory=list)
    error: str | None = Field(default=None, description="Error message on failure")


# ---------------------------------------------------------------------------
# Aggregated report
# ---------------------------------------------------------------------------


class ScaffoldReport(BaseModel):
    """All step results of one recipe run."""

    recipe: str
    feature_name: str
    root: Path | None = Field(default=None, description="Feature root directory, once created")
    package_name: str = Field(default="")
    steps: list[StepResult] = Field(default_factory=list)

    def add(self, step: StepResult) -> StepResult:
        self.steps.append(step)
        return step

    def count(self, status: StepStatus) -> int:
        return sum(1 for step in self.steps if step.status == status)

    @computed_field  # type: ignore[misc]
    @property
    def outcome(self) -> Outcome:
        """``success`` if every step succeeded, ``failed`` if none did, else ``partial``."""
        succeeded = self.count(StepStatus.SUCCESS)
        if succeeded == 0:
            return Outcome.FAILED
        if succeeded == len(self.steps):
            return Outcome.SUCCESS
        return Outcome.PARTIAL
