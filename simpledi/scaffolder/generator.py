"""Generation pipelines for the ``module``, ``use-case`` and ``crud`` commands.

Every pipeline runs the same steps:

1. validate the raw name and compute its :class:`NameForms`
2. render the artifact's file set (pure, nothing written yet)
3. create the artifact directory, refusing if it already exists
4. write the files one by one
5. patch each aggregator in turn; failures become warnings
6. print a summary

There is no rollback: if a step fails midway, the files already written
stay on disk.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from pydantic import BaseModel, Field

from ..config import Config
from ..naming import NameForms, validate_name
from ..registry import (
    Registrar,
    RegistrationEdit,
    RegistrationOutcome,
    RegistrationResult,
    core_module_edit,
    crud_use_case_module_edit,
    route_edit,
    schema_export_edit,
    use_case_module_edit,
)
from ..utils import print_created, print_info, print_success, print_summary_table, print_warning
from .artifacts import ArtifactKind, RenderOptions, crud_operations, render_artifacts
from .templates import TemplateRenderer
from .writer import ensure_fresh_directory, write_artifacts

_UNOPENABLE = frozenset(
    {RegistrationOutcome.AGGREGATOR_MISSING, RegistrationOutcome.UNREADABLE_AGGREGATOR}
)


class GenerationReport(BaseModel):
    """Outcome of one generation command."""

    kind: ArtifactKind
    forms: NameForms
    directory: Path
    files: list[Path] = Field(default_factory=list)
    registrations: list[RegistrationResult] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def registered(self) -> list[RegistrationResult]:
        return [r for r in self.registrations if r.outcome.is_registered]


# ---------------------------------------------------------------------------
# Base pipeline
# ---------------------------------------------------------------------------


class ArtifactGenerator:
    """Shared pipeline; subclasses choose the family, directory and aggregators."""

    kind: ArtifactKind
    what = "entity"

    def __init__(
        self,
        config: Config,
        renderer: TemplateRenderer | None = None,
        registrar: Registrar | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.registrar = registrar or Registrar(
            match_policy=config.registration.match_policy,
            indent=config.registration.indent,
        )

    # -- Hooks ---------------------------------------------------------------

    def artifact_root(self, forms: NameForms) -> Path:
        raise NotImplementedError

    def registration_edits(self, forms: NameForms) -> list[tuple[Path, RegistrationEdit]]:
        raise NotImplementedError

    def summary(self, forms: NameForms, options: RenderOptions) -> dict[str, str]:
        raise NotImplementedError

    # -- Pipeline ------------------------------------------------------------

    def name_forms(self, raw_name: str | None) -> NameForms:
        name = validate_name(raw_name, self.what)
        return NameForms.from_raw(
            name,
            table_policy=self.config.naming.table_plural_policy,
            route_policy=self.config.naming.route_plural_policy,
        )

    async def generate(
        self, raw_name: str | None, options: RenderOptions | None = None
    ) -> GenerationReport:
        """Generate the artifact named *raw_name* and wire it into the project.

        Raises:
            InvalidArgument: If the name is missing or malformed.
            DirectoryExists: If the artifact directory is already present.
        """
        options = options or RenderOptions()
        if "core_module" not in options.model_fields_set:
            options = options.model_copy(update={"core_module": self.config.layout.core_module})
        forms = self.name_forms(raw_name)
        files = render_artifacts(self.kind, forms, options, self.renderer)
        directory = self.artifact_root(forms)

        print_summary_table(self.summary(forms, options), title=f"simpledi {self.kind.value}")

        await asyncio.to_thread(ensure_fresh_directory, directory)
        written = await write_artifacts(directory, files)
        for path in written:
            print_created(path, self.config.project_root)

        report = GenerationReport(kind=self.kind, forms=forms, directory=directory, files=written)

        skipped: set[Path] = set()
        for aggregator, edit in self.registration_edits(forms):
            # one warning per aggregator that cannot be opened
            if aggregator in skipped:
                continue
            try:
                result = await self.registrar.register(aggregator, edit)
            except OSError as exc:
                message = f"Could not update {aggregator.name}: {exc}"
                report.warnings.append(message)
                print_warning(message)
                skipped.add(aggregator)
                continue

            report.registrations.append(result)
            if result.outcome.is_registered:
                print_info(result.message)
            else:
                if result.outcome in _UNOPENABLE:
                    skipped.add(aggregator)
                report.warnings.append(result.message)
                print_warning(result.message)

        print_success(f"{self.what.capitalize()} {forms.pascal} generated")
        return report


# ---------------------------------------------------------------------------
# Concrete pipelines
# ---------------------------------------------------------------------------


class ModuleGenerator(ArtifactGenerator):
    """``simpledi module <entity>``: core entity module under ``src/core/``."""

    kind = ArtifactKind.MODULE
    what = "entity"

    def artifact_root(self, forms: NameForms) -> Path:
        return self.config.core_path / forms.kebab

    def registration_edits(self, forms: NameForms) -> list[tuple[Path, RegistrationEdit]]:
        return [
            (self.config.schema_index_path, schema_export_edit(forms, self.config)),
            (self.config.core_module_path, core_module_edit(forms, self.config)),
        ]

    def summary(self, forms: NameForms, options: RenderOptions) -> dict[str, str]:
        return {
            "Entity": forms.pascal,
            "Directory": f"{self.config.layout.source_dir}/{self.config.layout.core_dir}/{forms.kebab}",
            "Table": forms.table_name,
        }


class UseCaseGenerator(ArtifactGenerator):
    """``simpledi use-case <name>``: a single use case with its route."""

    kind = ArtifactKind.USE_CASE
    what = "use case"

    def artifact_root(self, forms: NameForms) -> Path:
        return self.config.use_case_path / forms.kebab

    def registration_edits(self, forms: NameForms) -> list[tuple[Path, RegistrationEdit]]:
        return [
            (self.config.use_case_module_path, use_case_module_edit(forms, self.config)),
            (
                self.config.main_routes_path,
                route_edit(f"{forms.camel}Routes", forms.kebab, self.config),
            ),
        ]

    def summary(self, forms: NameForms, options: RenderOptions) -> dict[str, str]:
        data = {
            "Use case": forms.pascal,
            "Directory": f"{self.config.layout.source_dir}/{self.config.layout.use_case_dir}/{forms.kebab}",
            "Route": f"/{forms.kebab}",
        }
        if options.imports:
            data["Imports"] = ", ".join(options.imports)
        return data


class CrudGenerator(ArtifactGenerator):
    """``simpledi crud <entity>``: Create/Update/Get/List/Delete use cases."""

    kind = ArtifactKind.CRUD
    what = "entity"

    def artifact_root(self, forms: NameForms) -> Path:
        return self.config.use_case_path / forms.kebab

    def registration_edits(self, forms: NameForms) -> list[tuple[Path, RegistrationEdit]]:
        edits = [
            (self.config.use_case_module_path, crud_use_case_module_edit(forms, self.config)),
        ]
        for op in crud_operations(forms):
            edits.append(
                (
                    self.config.main_routes_path,
                    route_edit(f"{op.camel}Routes", f"{forms.kebab}/{op.dir}", self.config),
                )
            )
        return edits

    def summary(self, forms: NameForms, options: RenderOptions) -> dict[str, str]:
        return {
            "Entity": forms.pascal,
            "Directory": f"{self.config.layout.source_dir}/{self.config.layout.use_case_dir}/{forms.kebab}",
            "Routes": f"/{forms.plural_kebab}",
            "Operations": ", ".join(op.pascal for op in crud_operations(forms)),
        }
