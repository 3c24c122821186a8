"""Flutter Scaffold scaffolder -- builds feature folder trees from recipes.

Each recipe describes a fixed layout (clean architecture, MVVM, a single
screen, or the shared core fetched from a template repository).  The
generator creates the folders, renders the Dart stubs into them and reports
every step as succeeded, skipped or failed.

Quick usage::

    from flutter_scaffold.scaffolder import ScaffoldGenerator

    generator = ScaffoldGenerator()
    report = await generator.generate("Order Details", "clean-architecture", "lib/features")
    print(report.outcome)
"""

from flutter_scaffold.scaffolder.fetcher import RemoteTemplateFetcher
from flutter_scaffold.scaffolder.generator import ScaffoldGenerator
from flutter_scaffold.scaffolder.recipes import RECIPES, Recipe, get_recipe
from flutter_scaffold.scaffolder.results import Outcome, ScaffoldReport, StepResult, StepStatus
from flutter_scaffold.scaffolder.templates import TemplateRenderer

__all__ = [
    "Outcome",
    "RECIPES",
    "Recipe",
    "RemoteTemplateFetcher",
    "ScaffoldGenerator",
    "ScaffoldReport",
    "StepResult",
    "StepStatus",
    "TemplateRenderer",
    "get_recipe",
]
