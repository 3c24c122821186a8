"""Package-name lookup in a Flutter project manifest.

Only the first ``name:`` line of ``pubspec.yaml`` matters, so the manifest
is scanned line by line instead of being parsed as YAML.
"""

from __future__ import annotations

from pathlib import Path

from flutter_scaffold.config import DEFAULT_PACKAGE_NAME
from flutter_scaffold.utils import print_warning

from .errors import ManifestUnreadable


def read_package_name(
    project_dir: str | Path,
    key: str = "name",
    manifest: str = "pubspec.yaml",
) -> str:
    """Return the value of the first ``key: value`` line in the manifest.

    Raises:
        ManifestUnreadable: If the manifest is missing or unreadable, or no
            line starts with ``key:``, or the value is empty.
    """
    path = Path(project_dir) / manifest
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestUnreadable(f"Cannot read {path}: {exc}") from exc

    prefix = f"{key}:"
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped.startswith(prefix):
            continue
        value = stripped[len(prefix):].split("#", 1)[0].strip().strip("'\"")
        if not value:
            raise ManifestUnreadable(f"Empty '{key}' in {path}")
        return value

    raise ManifestUnreadable(f"No '{key}:' line in {path}")


def find_project_dir(start: str | Path, manifest: str = "pubspec.yaml") -> Path | None:
    """Walk up from *start* and return the first directory holding *manifest*."""
    current = Path(start).expanduser().resolve()
    for directory in (current, *current.parents):
        if (directory / manifest).is_file():
            return directory
    return None


def resolve_package_name(
    project_dir: str | Path | None,
    key: str = "name",
    manifest: str = "pubspec.yaml",
    default: str = DEFAULT_PACKAGE_NAME,
) -> str:
    """Like :func:`read_package_name`, but fall back to *default* with a warning."""
    if project_dir is None:
        print_warning(f"No {manifest} found; using package name '{default}'")
        return default
    try:
        return read_package_name(project_dir, key=key, manifest=manifest)
    except ManifestUnreadable as exc:
        print_warning(f"{exc}; using package name '{default}'")
        return default
