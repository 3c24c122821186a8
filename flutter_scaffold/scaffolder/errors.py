"""Exception hierarchy for the scaffolder.

Recoverable errors (conflicts, write failures, an unreadable manifest) are
caught by :class:`~flutter_scaffold.scaffolder.generator.ScaffoldGenerator`
and turned into step results.  Fetch errors never leave
:class:`~flutter_scaffold.scaffolder.fetcher.RemoteTemplateFetcher`.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every error raised by the scaffolder."""


class InvalidFeatureName(ScaffoldError):
    """Raised when a feature name normalises to an empty string."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Invalid feature name: {raw!r}")


class UnknownRecipe(ScaffoldError):
    """Raised when a recipe key is not in the recipe table."""

    def __init__(self, key: str, available: list[str]) -> None:
        self.key = key
        self.available = available
        super().__init__(
            f"Unknown recipe '{key}'. Available recipes: {', '.join(available)}"
        )


# ---------------------------------------------------------------------------
# Local filesystem errors
# ---------------------------------------------------------------------------


class DirectoryConflict(ScaffoldError):
    """The directory to create already exists under its base directory."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Directory [{self.path.name}] already exists in {self.path.parent}")


class FolderCreationError(ScaffoldError):
    """A directory could not be created (missing base, permissions, ...)."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Couldn't create {self.path.name} directory: {reason}")


class FileWriteFailure(ScaffoldError):
    """A generated file could not be written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Couldn't write {self.path}: {reason}")


class ManifestUnreadable(ScaffoldError):
    """The project manifest is missing or has no usable package name."""


# ---------------------------------------------------------------------------
# Remote template fetch errors
# ---------------------------------------------------------------------------


class FetchError(ScaffoldError):
    """Base class for failures inside the remote template fetch pipeline."""


class NetworkFailure(FetchError):
    """The archive could not be downloaded."""


class ArchiveCorrupt(FetchError):
    """The downloaded archive is not a readable zip file."""


class TemplatePathNotFound(FetchError):
    """The template sub-path does not exist inside the extracted archive."""
