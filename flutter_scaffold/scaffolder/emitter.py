"""Generated file writer.

Files are always overwritten: regenerating a stub is cheap, whereas
directories are guarded against conflicts by
:func:`~flutter_scaffold.scaffolder.folders.create_tree`.
"""

from __future__ import annotations

from pathlib import Path

from flutter_scaffold.utils import print_warning

from .errors import FileWriteFailure


class FileEmitter:
    """Writes generated text files with a fixed extension.

    Write errors never propagate.  Each one is printed as a warning and kept
    in :attr:`failures` so the caller can report it afterwards.
    """

    def __init__(self, extension: str = ".dart") -> None:
        self.extension = extension if not extension or extension.startswith(".") else f".{extension}"
        self.failures: list[FileWriteFailure] = []

    def write_file(self, directory: str | Path, base_name: str, content: str) -> Path | None:
        """Write ``content`` to ``directory/base_name<extension>``.

        Returns:
            The written path, or ``None`` if the write failed.
        """
        target = Path(directory) / f"{base_name}{self.extension}"
        return self._write(target, content.encode("utf-8"), create_parents=False)

    def write_relative(self, root: str | Path, relative_path: str | Path, content: str | bytes) -> Path | None:
        """Write ``content`` at ``root/relative_path``, creating parent directories.

        Used for template trees, where the file name already carries its
        extension.  ``bytes`` content is written unchanged.
        """
        data = content if isinstance(content, bytes) else content.encode("utf-8")
        return self._write(Path(root) / relative_path, data, create_parents=True)

    def _write(self, target: Path, data: bytes, *, create_parents: bool) -> Path | None:
        try:
            if create_parents:
                target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            failure = FileWriteFailure(target, exc.strerror or str(exc))
            self.failures.append(failure)
            print_warning(str(failure))
            return None
        return target
