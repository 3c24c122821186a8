"""Flutter Scaffold configuration.

Centralised, typed configuration for the scaffolder.  All settings use
Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_PACKAGE_NAME = "your_default_package"


class RemoteConfig(BaseModel):
    """Settings for the remote template download.

    ``repo_url``, ``branch`` and ``sub_path`` override the values a recipe
    ships with; ``None`` keeps the recipe's own value.
    """

    download_timeout: int = Field(default=60, ge=1, description="Download timeout in seconds")
    connect_timeout: float = Field(default=10.0, gt=0)
    repo_url: str | None = Field(default=None, description="e.g. https://github.com/user/repo")
    branch: str | None = Field(default=None)
    sub_path: str | None = Field(default=None, description="Template directory inside the archive")

    def overrides(self) -> dict[str, str]:
        """Return only the override fields that are set."""
        values = {"repo_url": self.repo_url, "branch": self.branch, "sub_path": self.sub_path}
        return {key: value for key, value in values.items() if value}


class Config(BaseModel):
    """Global Flutter Scaffold configuration.

    Instances are typically created once by the CLI entry point and passed
    to :class:`~flutter_scaffold.scaffolder.generator.ScaffoldGenerator`.
    """

    target_dir: Path = Field(default=Path("."), description="Directory the feature folder is created in")
    project_dir: Path | None = Field(
        default=None,
        description="Flutter project root holding the manifest. Searched upwards from target_dir if unset",
    )
    package_name: str | None = Field(default=None, description="Overrides the manifest package name")
    manifest_file: str = Field(default="pubspec.yaml")
    manifest_key: str = Field(default="name")
    default_package_name: str = Field(default=DEFAULT_PACKAGE_NAME)
    command_timeout: int = Field(default=300, ge=1, description="Post-command timeout in seconds")
    remote: RemoteConfig = Field(default_factory=RemoteConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            FLUTTER_SCAFFOLD_TARGET_DIR, FLUTTER_SCAFFOLD_PROJECT_DIR,
            FLUTTER_SCAFFOLD_PACKAGE_NAME, FLUTTER_SCAFFOLD_TIMEOUT,
            FLUTTER_SCAFFOLD_REPO_URL, FLUTTER_SCAFFOLD_BRANCH,
            FLUTTER_SCAFFOLD_SUB_PATH.
        """
        remote_kwargs: dict[str, Any] = {}
        if os.environ.get("FLUTTER_SCAFFOLD_TIMEOUT"):
            remote_kwargs["download_timeout"] = int(os.environ["FLUTTER_SCAFFOLD_TIMEOUT"])
        if os.environ.get("FLUTTER_SCAFFOLD_REPO_URL"):
            remote_kwargs["repo_url"] = os.environ["FLUTTER_SCAFFOLD_REPO_URL"]
        if os.environ.get("FLUTTER_SCAFFOLD_BRANCH"):
            remote_kwargs["branch"] = os.environ["FLUTTER_SCAFFOLD_BRANCH"]
        if os.environ.get("FLUTTER_SCAFFOLD_SUB_PATH"):
            remote_kwargs["sub_path"] = os.environ["FLUTTER_SCAFFOLD_SUB_PATH"]

        project_dir = os.environ.get("FLUTTER_SCAFFOLD_PROJECT_DIR")
        return cls(
            target_dir=Path(os.environ.get("FLUTTER_SCAFFOLD_TARGET_DIR", ".")),
            project_dir=Path(project_dir) if project_dir else None,
            package_name=os.environ.get("FLUTTER_SCAFFOLD_PACKAGE_NAME") or None,
            remote=RemoteConfig(**remote_kwargs),
        )
