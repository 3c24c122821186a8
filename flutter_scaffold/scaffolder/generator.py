"""Main scaffolding orchestrator.

Takes a feature name and a :class:`~flutter_scaffold.scaffolder.recipes.Recipe`
and builds the recipe's folder tree and stub files under a target directory.

The run is best-effort.  Every folder, file, fetch and command step yields a
:class:`~flutter_scaffold.scaffolder.results.StepResult`, and a conflict or a
failure only skips the steps that depend on it.  Nothing is rolled back,
except the root of a fetch-only recipe whose fetch failed: it is removed so
the run can simply be retried.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from flutter_scaffold.config import Config
from flutter_scaffold.utils import print_warning, run_command

from .emitter import FileEmitter
from .errors import DirectoryConflict, FolderCreationError
from .fetcher import RemoteTemplateFetcher
from .folders import create_tree
from .manifest import find_project_dir, resolve_package_name
from .naming import normalize_feature_name, to_camel_case, to_pascal_case
from .recipes import FileSpec, FolderStep, Recipe, RemoteTemplate, get_recipe
from .results import ScaffoldReport, StepResult
from .templates import TemplateRenderer


class ScaffoldGenerator:
    """Runs recipes against the filesystem.

    One generator can run any number of recipes; no state is shared between
    :meth:`generate` calls apart from the configuration.
    """

    def __init__(
        self,
        config: Config | None = None,
        renderer: TemplateRenderer | None = None,
        fetcher: RemoteTemplateFetcher | None = None,
    ) -> None:
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()
        self.fetcher = fetcher or RemoteTemplateFetcher(
            renderer=self.renderer,
            timeout=self.config.remote.download_timeout,
            connect_timeout=self.config.remote.connect_timeout,
        )

    # -- Public API --------------------------------------------------------

    async def generate(
        self,
        name: str,
        recipe: Recipe | str,
        target_dir: str | Path | None = None,
        *,
        package_name: str | None = None,
        run_post_commands: bool = False,
    ) -> ScaffoldReport:
        """Scaffold one feature.

        Args:
            name: User-entered feature name, e.g. ``"Order Details"``.
            recipe: A recipe or its key.
            target_dir: Directory the feature root is created in.  Defaults
                to ``config.target_dir``.
            package_name: Dart package name used in imports.  Defaults to
                ``config.package_name``, then the project manifest.
            run_post_commands: Run the recipe's post commands afterwards.

        Returns:
            The report of every step that ran or was skipped.

        Raises:
            InvalidFeatureName: If *name* normalises to nothing.
            UnknownRecipe: If *recipe* is an unknown key.
        """
        if isinstance(recipe, str):
            recipe = get_recipe(recipe)
        feature = normalize_feature_name(name)
        target = Path(target_dir if target_dir is not None else self.config.target_dir).expanduser()

        package = package_name or self.config.package_name or self._package_from_manifest(target)
        context = self.build_context(feature, recipe, target, package)
        report = ScaffoldReport(recipe=recipe.key, feature_name=feature, package_name=package)

        root_name = context["feature_dir"]
        try:
            created = await asyncio.to_thread(create_tree, target, root_name)
        except DirectoryConflict as exc:
            print_warning(str(exc))
            report.add(StepResult.skipped(root_name, str(exc)))
            return report
        except FolderCreationError as exc:
            print_warning(str(exc))
            report.add(StepResult.failed(root_name, str(exc)))
            return report

        root = created[root_name]
        report.root = root
        report.add(StepResult.success(root_name, [root]))

        locations: dict[str, Path] = {"": root}
        emitter = FileEmitter(recipe.extension)
        for step in recipe.steps:
            await self._run_folder_step(step, locations, context, emitter, report)

        if recipe.remote is not None:
            fetched = await self._run_fetch(recipe.remote, root, context, report)
            if not fetched and not recipe.steps:
                await self._discard_root(root, root_name, report)
                return report

        if run_post_commands:
            for command in recipe.post_commands:
                await self._run_post_command(command, target, context, report)

        return report

    def build_context(
        self,
        feature: str,
        recipe: Recipe,
        target_dir: Path,
        package_name: str,
    ) -> dict[str, str]:
        """Build the placeholder values shared by every template of a run."""
        feature_dir = self.renderer.render_string(recipe.root, {"name": feature})
        return {
            "name": feature,
            "pascal_name": to_pascal_case(feature),
            "camel_name": to_camel_case(feature),
            "package_name": package_name,
            "feature_dir": feature_dir,
            "feature_path": self._import_path(target_dir / feature_dir),
        }

    # -- Context helpers ---------------------------------------------------

    def _project_dir(self, target: Path) -> Path | None:
        if self.config.project_dir is not None:
            return self.config.project_dir
        return find_project_dir(target, self.config.manifest_file)

    def _package_from_manifest(self, target: Path) -> str:
        return resolve_package_name(
            self._project_dir(target),
            key=self.config.manifest_key,
            manifest=self.config.manifest_file,
            default=self.config.default_package_name,
        )

    def _import_path(self, feature_root: Path) -> str:
        """Path of the feature root relative to the project's ``lib/``.

        Falls back to the bare feature directory name when the target is not
        inside ``lib/``.
        """
        project_dir = self._project_dir(feature_root.parent)
        if project_dir is not None:
            lib_dir = (project_dir / "lib").resolve()
            try:
                return feature_root.resolve().relative_to(lib_dir).as_posix()
            except ValueError:
                pass
        return feature_root.name

    # -- Steps -------------------------------------------------------------

    async def _run_folder_step(
        self,
        step: FolderStep,
        locations: dict[str, Path],
        context: dict[str, str],
        emitter: FileEmitter,
        report: ScaffoldReport,
    ) -> None:
        base = locations.get(step.base)
        if base is None:
            reason = f"'{step.base}' was not created"
            report.add(StepResult.skipped(step.location, reason))
            self._skip_files(step.files, context, emitter, report, reason)
            return

        try:
            created = await asyncio.to_thread(create_tree, base, step.parent, step.children)
        except DirectoryConflict as exc:
            print_warning(str(exc))
            report.add(StepResult.skipped(step.location, str(exc)))
            self._skip_files(step.files, context, emitter, report, f"'{step.location}' already existed")
            return
        except FolderCreationError as exc:
            print_warning(str(exc))
            report.add(StepResult.failed(step.location, str(exc)))
            self._skip_files(step.files, context, emitter, report, f"'{step.location}' was not created")
            return

        locations[step.location] = created[step.parent]
        for child in step.children:
            locations[f"{step.location}/{child}"] = created[child]
        report.add(StepResult.success(step.location, list(created.values())))

        for spec in step.files:
            await self._write_stub(spec, locations, context, emitter, report)

    async def _write_stub(
        self,
        spec: FileSpec,
        locations: dict[str, Path],
        context: dict[str, str],
        emitter: FileEmitter,
        report: ScaffoldReport,
    ) -> None:
        base_name = self.renderer.render_string(spec.name, context)
        label = f"{spec.directory}/{base_name}{emitter.extension}"

        directory = locations.get(spec.directory)
        if directory is None:
            report.add(StepResult.skipped(label, f"'{spec.directory}' was not created"))
            return

        try:
            content = self.renderer.render(spec.template, context)
        except OSError as exc:
            print_warning(f"Template {spec.template} unavailable: {exc}")
            report.add(StepResult.failed(label, f"Template {spec.template} unavailable"))
            return

        path = await asyncio.to_thread(emitter.write_file, directory, base_name, content)
        if path is None:
            report.add(StepResult.failed(label, str(emitter.failures[-1])))
        else:
            report.add(StepResult.success(label, [path]))

    def _skip_files(
        self,
        files: tuple[FileSpec, ...],
        context: dict[str, str],
        emitter: FileEmitter,
        report: ScaffoldReport,
        reason: str,
    ) -> None:
        for spec in files:
            base_name = self.renderer.render_string(spec.name, context)
            report.add(StepResult.skipped(f"{spec.directory}/{base_name}{emitter.extension}", reason))

    async def _run_fetch(
        self,
        remote: RemoteTemplate,
        output_dir: Path,
        context: dict[str, str],
        report: ScaffoldReport,
    ) -> bool:
        remote = remote.model_copy(update=self.config.remote.overrides())
        label = f"fetch {remote.repo_url}@{remote.branch}:{remote.sub_path}"

        result = await self.fetcher.fetch(
            remote.repo_url,
            remote.branch,
            remote.sub_path,
            output_dir,
            context,
        )
        if result.success:
            report.add(StepResult.success(label, result.written, f"{len(result.written)} files"))
            return True
        print_warning(result.error or "Failed to generate template")
        report.add(StepResult.failed(label, result.error or ""))
        return False

    async def _discard_root(self, root: Path, root_name: str, report: ScaffoldReport) -> None:
        """Remove a root that holds nothing but a failed fetch, so a retry can start clean."""
        await asyncio.to_thread(shutil.rmtree, root, True)
        report.root = None
        report.steps[0] = StepResult.skipped(root_name, f"Removed {root} after the template fetch failed")

    async def _run_post_command(
        self,
        command: str,
        cwd: Path,
        context: dict[str, str],
        report: ScaffoldReport,
    ) -> None:
        rendered = self.renderer.render_string(command, context)
        label = f"$ {rendered}"
        returncode, stdout, stderr = await run_command(
            rendered, cwd=cwd, timeout=self.config.command_timeout
        )
        if returncode == 0:
            report.add(StepResult.success(label, message=stdout.splitlines()[-1] if stdout else ""))
        else:
            message = stderr or stdout or f"exit code {returncode}"
            print_warning(f"{rendered} failed: {message}")
            report.add(StepResult.failed(label, message))
