"""simpledi configuration.

Centralised, typed configuration for the generator.  All settings use
Pydantic v2 models so they are validated at construction time and can be
persisted as ``.simpledi.json`` inside a generated project, or overridden
from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from .naming import PluralPolicy

CONFIG_FILENAME = ".simpledi.json"


class LayoutConfig(BaseModel):
    """Where generated artifacts and aggregator files live.

    Every path except ``source_dir`` is relative to the source directory.
    """

    source_dir: str = Field(default="src")
    core_dir: str = Field(default="core")
    use_case_dir: str = Field(default="use-case")
    schema_index: str = Field(default="schema.ts")
    core_module: str = Field(default="core/CoreModule.ts")
    use_case_module: str = Field(default="use-case/UseCaseModule.ts")
    main_routes: str = Field(default="main.routes.ts")


class NamingConfig(BaseModel):
    """Pluralization policies for generated names."""

    table_plural_policy: PluralPolicy = Field(
        default="suffix", description="Policy for database table names"
    )
    route_plural_policy: PluralPolicy = Field(
        default="irregular", description="Policy for route paths and list use cases"
    )


class RegistrationConfig(BaseModel):
    """Knobs for patching aggregator files."""

    match_policy: Literal["substring", "word"] = Field(
        default="substring",
        description="How to detect an already registered reference",
    )
    indent: str = Field(default="    ", description="Indentation of inserted array elements")
    array_marker: str = Field(default="imports: [")
    routes_anchor: str = Field(default="export { mainRoutes }")


class Config(BaseModel):
    """Global simpledi configuration.

    Instances are created once by the CLI (usually via :meth:`discover`) and
    passed to the generators.
    """

    project_root: Path = Field(default=Path("."))
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    naming: NamingConfig = Field(default_factory=NamingConfig)
    registration: RegistrationConfig = Field(default_factory=RegistrationConfig)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def source_path(self) -> Path:
        """Root of the generated project's source tree (``src/``)."""
        return self.project_root / self.layout.source_dir

    @property
    def core_path(self) -> Path:
        """Directory holding one subdirectory per entity module."""
        return self.source_path / self.layout.core_dir

    @property
    def use_case_path(self) -> Path:
        """Directory holding one subdirectory per use case."""
        return self.source_path / self.layout.use_case_dir

    @property
    def schema_index_path(self) -> Path:
        """Central schema index re-exporting every entity schema."""
        return self.source_path / self.layout.schema_index

    @property
    def core_module_path(self) -> Path:
        """Core module aggregator."""
        return self.source_path / self.layout.core_module

    @property
    def use_case_module_path(self) -> Path:
        """Use-case module aggregator."""
        return self.source_path / self.layout.use_case_module

    @property
    def main_routes_path(self) -> Path:
        """Main route table."""
        return self.source_path / self.layout.main_routes

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        ``project_root`` is not written: a saved config always describes the
        directory it lives in.

        Args:
            path: Destination file. Defaults to ``<project_root>/.simpledi.json``.

        Returns:
            The path where the file was written.
        """
        target = path or (self.project_root / CONFIG_FILENAME)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            self.model_dump_json(indent=2, exclude={"project_root"}) + "\n",
            encoding="utf-8",
        )
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration.

        The project root is the directory containing the file.
        """
        path = Path(path)
        config = cls.model_validate_json(path.read_text(encoding="utf-8"))
        config.project_root = path.parent
        return config

    @classmethod
    def from_env(cls, project_root: Path | None = None) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SIMPLEDI_PROJECT_ROOT, SIMPLEDI_SOURCE_DIR,
            SIMPLEDI_TABLE_PLURAL_POLICY, SIMPLEDI_ROUTE_PLURAL_POLICY,
            SIMPLEDI_MATCH_POLICY.
        """
        layout_kwargs: dict[str, Any] = {}
        if os.environ.get("SIMPLEDI_SOURCE_DIR"):
            layout_kwargs["source_dir"] = os.environ["SIMPLEDI_SOURCE_DIR"]

        naming_kwargs: dict[str, Any] = {}
        if os.environ.get("SIMPLEDI_TABLE_PLURAL_POLICY"):
            naming_kwargs["table_plural_policy"] = os.environ["SIMPLEDI_TABLE_PLURAL_POLICY"]
        if os.environ.get("SIMPLEDI_ROUTE_PLURAL_POLICY"):
            naming_kwargs["route_plural_policy"] = os.environ["SIMPLEDI_ROUTE_PLURAL_POLICY"]

        registration_kwargs: dict[str, Any] = {}
        if os.environ.get("SIMPLEDI_MATCH_POLICY"):
            registration_kwargs["match_policy"] = os.environ["SIMPLEDI_MATCH_POLICY"]

        if project_root is None:
            project_root = Path(os.environ.get("SIMPLEDI_PROJECT_ROOT", "."))

        return cls(
            project_root=project_root,
            layout=LayoutConfig(**layout_kwargs),
            naming=NamingConfig(**naming_kwargs),
            registration=RegistrationConfig(**registration_kwargs),
        )

    @classmethod
    def discover(cls, project_root: Path | None = None) -> "Config":
        """Load ``.simpledi.json`` from *project_root* if present, else use the environment."""
        if project_root is None:
            project_root = Path(os.environ.get("SIMPLEDI_PROJECT_ROOT", "."))
        root = Path(project_root)
        if (root / CONFIG_FILENAME).is_file():
            return cls.load(root / CONFIG_FILENAME)
        return cls.from_env(root)
