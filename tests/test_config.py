"""Unit tests for Config and related Pydantic models (simpledi.config).

Tests cover:
- LayoutConfig / NamingConfig / RegistrationConfig defaults and validation
- Config derived paths (properties)
- save/load round trip and project_root handling
- from_env and discover
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from simpledi.config import (
    CONFIG_FILENAME,
    Config,
    LayoutConfig,
    NamingConfig,
    RegistrationConfig,
)


# ---------------------------------------------------------------------------
# Sub-models
# ---------------------------------------------------------------------------


class TestSubModels:
    @pytest.mark.unit
    def test_layout_defaults(self):
        layout = LayoutConfig()
        assert layout.source_dir == "src"
        assert layout.core_dir == "core"
        assert layout.use_case_dir == "use-case"
        assert layout.schema_index == "schema.ts"
        assert layout.core_module == "core/CoreModule.ts"
        assert layout.use_case_module == "use-case/UseCaseModule.ts"
        assert layout.main_routes == "main.routes.ts"

    @pytest.mark.unit
    def test_naming_defaults(self):
        naming = NamingConfig()
        assert naming.table_plural_policy == "suffix"
        assert naming.route_plural_policy == "irregular"

    @pytest.mark.unit
    def test_naming_rejects_unknown_policy(self):
        with pytest.raises(ValidationError):
            NamingConfig(table_plural_policy="latin")

    @pytest.mark.unit
    def test_registration_defaults(self):
        reg = RegistrationConfig()
        assert reg.match_policy == "substring"
        assert reg.indent == "    "
        assert reg.array_marker == "imports: ["
        assert reg.routes_anchor == "export { mainRoutes }"

    @pytest.mark.unit
    def test_registration_rejects_unknown_match_policy(self):
        with pytest.raises(ValidationError):
            RegistrationConfig(match_policy="fuzzy")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class TestConfigPaths:
    @pytest.mark.unit
    def test_derived_paths(self, tmp_path: Path):
        config = Config(project_root=tmp_path)
        assert config.source_path == tmp_path / "src"
        assert config.core_path == tmp_path / "src" / "core"
        assert config.use_case_path == tmp_path / "src" / "use-case"
        assert config.schema_index_path == tmp_path / "src" / "schema.ts"
        assert config.core_module_path == tmp_path / "src" / "core" / "CoreModule.ts"
        assert config.use_case_module_path == tmp_path / "src" / "use-case" / "UseCaseModule.ts"
        assert config.main_routes_path == tmp_path / "src" / "main.routes.ts"

    @pytest.mark.unit
    def test_custom_source_dir(self, tmp_path: Path):
        config = Config(project_root=tmp_path, layout=LayoutConfig(source_dir="app"))
        assert config.core_module_path == tmp_path / "app" / "core" / "CoreModule.ts"


class TestConfigPersistence:
    @pytest.mark.unit
    def test_save_writes_json_without_project_root(self, tmp_path: Path):
        config = Config(project_root=tmp_path)
        path = config.save()
        assert path == tmp_path / CONFIG_FILENAME
        data = json.loads(path.read_text(encoding="utf-8"))
        assert "project_root" not in data
        assert data["layout"]["source_dir"] == "src"

    @pytest.mark.unit
    def test_load_roots_config_at_file_directory(self, tmp_path: Path):
        original = Config(
            project_root=tmp_path,
            naming=NamingConfig(route_plural_policy="suffix"),
        )
        path = original.save()
        loaded = Config.load(path)
        assert loaded.project_root == tmp_path
        assert loaded.naming.route_plural_policy == "suffix"

    @pytest.mark.unit
    def test_load_invalid_file_raises(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text('{"naming": {"table_plural_policy": "latin"}}', encoding="utf-8")
        with pytest.raises(ValidationError):
            Config.load(path)


class TestConfigEnvironment:
    @pytest.mark.unit
    def test_from_env_defaults(self, tmp_path: Path):
        with patch.dict("os.environ", {}, clear=True):
            config = Config.from_env(tmp_path)
        assert config.project_root == tmp_path
        assert config.layout == LayoutConfig()

    @pytest.mark.unit
    def test_from_env_overrides(self, tmp_path: Path):
        env = {
            "SIMPLEDI_PROJECT_ROOT": str(tmp_path),
            "SIMPLEDI_SOURCE_DIR": "app",
            "SIMPLEDI_TABLE_PLURAL_POLICY": "irregular",
            "SIMPLEDI_ROUTE_PLURAL_POLICY": "suffix",
            "SIMPLEDI_MATCH_POLICY": "word",
        }
        with patch.dict("os.environ", env, clear=True):
            config = Config.from_env()
        assert config.project_root == tmp_path
        assert config.layout.source_dir == "app"
        assert config.naming.table_plural_policy == "irregular"
        assert config.naming.route_plural_policy == "suffix"
        assert config.registration.match_policy == "word"

    @pytest.mark.unit
    def test_from_env_invalid_policy(self, tmp_path: Path):
        with patch.dict("os.environ", {"SIMPLEDI_MATCH_POLICY": "fuzzy"}, clear=True):
            with pytest.raises(ValidationError):
                Config.from_env(tmp_path)

    @pytest.mark.unit
    def test_discover_prefers_config_file(self, tmp_path: Path):
        Config(project_root=tmp_path, layout=LayoutConfig(source_dir="lib")).save()
        with patch.dict("os.environ", {"SIMPLEDI_SOURCE_DIR": "app"}, clear=True):
            config = Config.discover(tmp_path)
        assert config.layout.source_dir == "lib"

    @pytest.mark.unit
    def test_discover_falls_back_to_environment(self, tmp_path: Path):
        with patch.dict("os.environ", {"SIMPLEDI_SOURCE_DIR": "app"}, clear=True):
            config = Config.discover(tmp_path)
        assert config.project_root == tmp_path
        assert config.layout.source_dir == "app"

    @pytest.mark.unit
    def test_discover_uses_project_root_variable(self, tmp_path: Path):
        Config(project_root=tmp_path).save()
        with patch.dict("os.environ", {"SIMPLEDI_PROJECT_ROOT": str(tmp_path)}, clear=True):
            config = Config.discover()
        assert config.project_root == tmp_path
