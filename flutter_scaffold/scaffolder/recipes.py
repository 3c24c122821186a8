"""Fixed recipe table.

Each recipe is immutable data describing one feature layout: the feature
root directory, an ordered list of folder steps, the stub files written into
the created directories and, for the shared core, a remote template to fetch.

Locations are slash-separated paths relative to the feature root; ``""`` is
the root itself.  A step creates ``parent`` inside the location ``base`` and
registers ``base/parent`` plus ``base/parent/<child>`` for every child.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .errors import UnknownRecipe


class FileSpec(BaseModel):
    """A stub file written into a directory created by a folder step."""

    model_config = ConfigDict(frozen=True)

    directory: str = Field(..., description="Location of the target directory")
    name: str = Field(..., description="Base-name template, e.g. '{{name}}_repository'")
    template: str = Field(..., description="Packaged template path")


class FolderStep(BaseModel):
    """Create ``parent`` with ``children`` inside ``base``, then write ``files``."""

    model_config = ConfigDict(frozen=True)

    base: str = Field(default="")
    parent: str
    children: tuple[str, ...] = ()
    files: tuple[FileSpec, ...] = ()

    @property
    def location(self) -> str:
        return f"{self.base}/{self.parent}" if self.base else self.parent


class RemoteTemplate(BaseModel):
    """A template tree inside a GitHub branch archive."""

    model_config = ConfigDict(frozen=True)

    repo_url: str
    branch: str = "master"
    sub_path: str


class Recipe(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    description: str
    root: str = Field(default="{{name}}", description="Feature root directory template")
    default_name: str | None = Field(default=None, description="Feature name used when none is given")
    steps: tuple[FolderStep, ...] = ()
    extension: str = ".dart"
    remote: RemoteTemplate | None = None
    post_commands: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Shared building blocks
# ---------------------------------------------------------------------------

_SPLIT_DATA_STEPS = (
    FolderStep(
        parent="data",
        children=("repository", "model"),
        files=(FileSpec(directory="data/repository", name="{{name}}_repository", template="data/repository_impl.dart.tmpl"),),
    ),
    FolderStep(
        base="data",
        parent="data_source",
        children=("remote", "local"),
        files=(
            FileSpec(
                directory="data/data_source/remote",
                name="{{name}}_remote_data_source",
                template="data/remote_data_source.dart.tmpl",
            ),
            FileSpec(
                directory="data/data_source/local",
                name="{{name}}_local_data_source",
                template="data/local_data_source.dart.tmpl",
            ),
        ),
    ),
)

_DOMAIN_STEP = FolderStep(
    parent="domain",
    children=("repository", "use_case", "entity"),
    files=(FileSpec(directory="domain/repository", name="{{name}}_repository", template="domain/repository.dart.tmpl"),),
)

_CUBIT_PRESENTATION_STEPS = (
    FolderStep(
        parent="presentation",
        children=("ui", "logic"),
        files=(
            FileSpec(directory="presentation/logic", name="{{name}}_cubit", template="presentation/cubit.dart.tmpl"),
            FileSpec(directory="presentation/logic", name="{{name}}_state", template="presentation/state.dart.tmpl"),
            FileSpec(directory="presentation/ui", name="{{name}}_screen", template="presentation/screen.dart.tmpl"),
        ),
    ),
    FolderStep(
        base="presentation/ui",
        parent="widgets",
        files=(FileSpec(directory="presentation/ui/widgets", name="{{name}}_body", template="presentation/body.dart.tmpl"),),
    ),
)


# ---------------------------------------------------------------------------
# Recipes
# ---------------------------------------------------------------------------

CLEAN_ARCHITECTURE = Recipe(
    key="clean-architecture",
    description="Data/domain/presentation feature with remote and local data sources",
    steps=(*_SPLIT_DATA_STEPS, _DOMAIN_STEP, *_CUBIT_PRESENTATION_STEPS),
)

CLEAN_ARCHITECTURE_COMPACT = Recipe(
    key="clean-architecture-compact",
    description="Clean-architecture feature with a single data_source folder",
    steps=(
        FolderStep(
            parent="data",
            children=("repository", "data_source", "model"),
            files=(
                FileSpec(directory="data/repository", name="{{name}}_repository", template="data/repository_impl.dart.tmpl"),
                FileSpec(
                    directory="data/data_source",
                    name="{{name}}_remote_data_source",
                    template="data/remote_data_source.dart.tmpl",
                ),
            ),
        ),
        _DOMAIN_STEP,
        *_CUBIT_PRESENTATION_STEPS,
    ),
)

MVVM = Recipe(
    key="mvvm",
    description="Model/view/view-model feature without a domain layer",
    steps=(
        FolderStep(
            parent="data",
            children=("repository", "model"),
            files=(FileSpec(directory="data/repository", name="{{name}}_repository", template="mvvm/repository.dart.tmpl"),),
        ),
        _SPLIT_DATA_STEPS[1],
        FolderStep(
            parent="presentation",
            children=("ui", "logic"),
            files=(
                FileSpec(directory="presentation/logic", name="{{name}}_view_model", template="mvvm/view_model.dart.tmpl"),
                FileSpec(directory="presentation/ui", name="{{name}}_view", template="mvvm/view.dart.tmpl"),
            ),
        ),
        FolderStep(
            base="presentation/ui",
            parent="widgets",
            files=(FileSpec(directory="presentation/ui/widgets", name="{{name}}_body", template="presentation/body.dart.tmpl"),),
        ),
    ),
)

SCREEN_ONLY = Recipe(
    key="screen-only",
    description="Single screen with a cubit, its state and a body widget",
    root="{{name}}_screen",
    steps=(
        FolderStep(
            parent="ui",
            children=("widgets",),
            files=(
                FileSpec(directory="ui", name="{{name}}_screen", template="presentation/screen.dart.tmpl"),
                FileSpec(directory="ui/widgets", name="{{name}}_body", template="presentation/body.dart.tmpl"),
            ),
        ),
        FolderStep(
            parent="logic",
            files=(
                FileSpec(directory="logic", name="{{name}}_cubit", template="presentation/cubit.dart.tmpl"),
                FileSpec(directory="logic", name="{{name}}_state", template="presentation/state.dart.tmpl"),
            ),
        ),
    ),
)

CORE_DOWNLOAD = Recipe(
    key="core-download",
    description="Download the shared core package from its template repository",
    root="{{name}}",
    default_name="core",
    remote=RemoteTemplate(
        repo_url="https://github.com/OmarAly92/my_structure",
        branch="my_structure_mason",
        sub_path="bricks/core_brick/__brick__",
    ),
    post_commands=("dart format {{feature_dir}}",),
)

RECIPES: dict[str, Recipe] = {
    recipe.key: recipe
    for recipe in (CLEAN_ARCHITECTURE, CLEAN_ARCHITECTURE_COMPACT, MVVM, SCREEN_ONLY, CORE_DOWNLOAD)
}


def get_recipe(key: str) -> Recipe:
    """Look up a recipe by key.

    Raises:
        UnknownRecipe: If *key* is not in :data:`RECIPES`.
    """
    try:
        return RECIPES[key]
    except KeyError:
        raise UnknownRecipe(key, sorted(RECIPES)) from None
