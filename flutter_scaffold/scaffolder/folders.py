"""Directory tree creation with a conflict guard."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .errors import DirectoryConflict, FolderCreationError


def create_tree(
    base_dir: str | Path,
    parent_name: str,
    child_names: Sequence[str] = (),
) -> dict[str, Path]:
    """Create ``parent_name`` under *base_dir* and each child under it.

    The returned mapping is flat: it is keyed by the parent name and by each
    child name, so a caller can reach any second-level directory without
    walking the tree again.

    The conflict check runs before anything is created, and nothing is
    touched when it fires.  The check and the creation are separate
    operations, so a concurrent process creating the same name in between
    is not detected here (``mkdir`` will then fail with
    :class:`FolderCreationError`).

    Raises:
        DirectoryConflict: An entry named ``parent_name`` already exists
            directly under *base_dir*.
        FolderCreationError: *base_dir* is missing, a name is not a single
            path component, or a ``mkdir`` failed.  Directories created
            before the failure are left in place.
    """
    base = Path(base_dir)
    for name in (parent_name, *child_names):
        if not _is_plain_name(name):
            raise FolderCreationError(base / parent_name, f"{name!r} is not a plain directory name")
    if not base.is_dir():
        raise FolderCreationError(base / parent_name, f"{base} is not a directory")

    try:
        existing = {entry.name for entry in base.iterdir()}
    except OSError as exc:
        raise FolderCreationError(base / parent_name, exc.strerror or str(exc)) from exc
    if parent_name in existing:
        raise DirectoryConflict(base / parent_name)

    created: dict[str, Path] = {}
    target = base / parent_name
    try:
        target.mkdir()
        created[parent_name] = target
        for child in child_names:
            target = created[parent_name] / child
            target.mkdir()
            created[child] = target
    except OSError as exc:
        raise FolderCreationError(target, exc.strerror or str(exc)) from exc

    return created


def _is_plain_name(name: str) -> bool:
    return bool(name) and name not in (".", "..") and "/" not in name and "\\" not in name
