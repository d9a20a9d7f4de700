"""simpledi scaffolder -- renders and writes generated TypeScript sources.

Quick usage::

    from simpledi.config import Config
    from simpledi.scaffolder import ModuleGenerator

    config = Config.discover()
    report = await ModuleGenerator(config).generate("blog-post")
    for warning in report.warnings:
        ...
"""

from simpledi.scaffolder.artifacts import ArtifactKind, RenderOptions, render_artifacts
from simpledi.scaffolder.generator import (
    CrudGenerator,
    GenerationReport,
    ModuleGenerator,
    UseCaseGenerator,
)
from simpledi.scaffolder.skeleton import SkeletonGenerator
from simpledi.scaffolder.templates import TemplateRenderer

__all__ = [
    "ArtifactKind",
    "CrudGenerator",
    "GenerationReport",
    "ModuleGenerator",
    "RenderOptions",
    "SkeletonGenerator",
    "TemplateRenderer",
    "UseCaseGenerator",
    "render_artifacts",
]
