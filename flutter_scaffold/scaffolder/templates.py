"""Placeholder rendering for project scaffolding.

Templates use bare ``{{identifier}}`` placeholders.  A placeholder whose key
is missing from the context renders as an empty string.  Anything that does
not match the exact ``{{identifier}}`` form is left alone, so mason-style
expressions such as ``{{name.snakeCase()}}`` pass through untouched.

The packaged stub templates live in ``flutter_scaffold/scaffolder/templates/``
and are addressed by their path relative to that directory (e.g.
``"domain/repository.dart.tmpl"``).
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path, PurePath

from .emitter import FileEmitter

# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders ``{{identifier}}`` templates from strings, files and trees."""

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)

    # -- String rendering --------------------------------------------------

    @staticmethod
    def render_string(text: str, context: Mapping[str, str]) -> str:
        """Substitute every ``{{key}}`` in *text* with ``context[key]``.

        Missing keys become ``""``; this is never an error.
        """
        return _PLACEHOLDER.sub(lambda match: str(context.get(match.group(1), "")), text)

    def render_path(self, relative_path: str | PurePath, context: Mapping[str, str]) -> Path:
        """Render each component of a relative path."""
        parts = [self.render_string(part, context) for part in PurePath(relative_path).parts]
        return Path(*parts) if parts else Path()

    # -- Packaged templates ------------------------------------------------

    def render(self, template_path: str, context: Mapping[str, str]) -> str:
        """Render a packaged template file.

        Args:
            template_path: Path relative to the template directory.
            context: Placeholder values.

        Raises:
            FileNotFoundError: If the template does not exist.
        """
        source = self.template_dir / template_path
        return self.render_string(source.read_text(encoding="utf-8"), context)

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of template paths under *prefix*."""
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*")
            if p.is_file()
        )

    # -- Tree rendering ----------------------------------------------------

    def render_tree(
        self,
        source_dir: str | Path,
        output_dir: str | Path,
        context: Mapping[str, str],
        emitter: FileEmitter | None = None,
    ) -> list[Path]:
        """Render every file under *source_dir* into *output_dir*.

        Both the relative path and the contents of each file are rendered.
        Files that are not valid UTF-8 are copied byte for byte under their
        rendered path.

        Returns:
            List of written file paths.  Files the emitter failed to write
            are left out.

        Raises:
            FileNotFoundError: If *source_dir* is not a directory.
        """
        source_root = Path(source_dir)
        if not source_root.is_dir():
            raise FileNotFoundError(source_root)

        emitter = emitter or FileEmitter()
        out_base = Path(output_dir)
        written: list[Path] = []

        for source in sorted(source_root.rglob("*")):
            if not source.is_file():
                continue
            relative = self.render_path(source.relative_to(source_root), context)

            raw = source.read_bytes()
            try:
                content: str | bytes = self.render_string(raw.decode("utf-8"), context)
            except UnicodeDecodeError:
                content = raw

            path = emitter.write_relative(out_base, relative, content)
            if path is not None:
                written.append(path)

        return written
