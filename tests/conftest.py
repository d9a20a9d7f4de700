"""Shared pytest fixtures for the simpledi test suite.

Provides reusable fixtures for:
- Synthetic aggregator file contents (core module, use-case module,
  main route table, schema index)
- A fake project tree containing those aggregators
- A ``Config`` rooted at the fake project
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from simpledi.config import Config
from simpledi.naming import NameForms


# ---------------------------------------------------------------------------
# Aggregator contents
# ---------------------------------------------------------------------------

CORE_MODULE_TS = textwrap.dedent("""\
    import { Module } from '@kanian77/simple-di';
    import { getConfigModule } from 'config/getConfigModule';
    import { getDbModule } from 'db/getDbModule';
    import { UserModule } from './user/UserModule';

    export const CoreModule = new Module({
      imports: [
        getConfigModule(),
        getDbModule(),
        UserModule,
      ],
    });
""")

USE_CASE_MODULE_TS = textwrap.dedent("""\
    import { Module } from '@kanian77/simple-di';
    import { HealthCheckModule } from './health-check/HealthCheck';

    export const UseCaseModule = new Module({
      imports: [HealthCheckModule],
    });
""")

MAIN_ROUTES_TS = textwrap.dedent("""\
    import { Hono } from 'hono';
    import {
      healthCheckRoutes,
      healthCheckRoutesPath,
    } from './use-case/health-check/healthCheckRoutes';

    const mainRoutes = new Hono();

    mainRoutes.route(healthCheckRoutesPath, healthCheckRoutes);

    export { mainRoutes };
""")

SCHEMA_INDEX_TS = 'export * from "@root/core/user/User";\n'


@pytest.fixture
def core_module_text() -> str:
    return CORE_MODULE_TS


@pytest.fixture
def use_case_module_text() -> str:
    return USE_CASE_MODULE_TS


@pytest.fixture
def main_routes_text() -> str:
    return MAIN_ROUTES_TS


@pytest.fixture
def schema_index_text() -> str:
    return SCHEMA_INDEX_TS


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary project containing the four aggregator files."""
    project_dir = tmp_path / "test-project"
    src = project_dir / "src"
    (src / "core").mkdir(parents=True)
    (src / "use-case").mkdir(parents=True)
    (src / "schema.ts").write_text(SCHEMA_INDEX_TS, encoding="utf-8")
    (src / "core" / "CoreModule.ts").write_text(CORE_MODULE_TS, encoding="utf-8")
    (src / "use-case" / "UseCaseModule.ts").write_text(USE_CASE_MODULE_TS, encoding="utf-8")
    (src / "main.routes.ts").write_text(MAIN_ROUTES_TS, encoding="utf-8")
    yield project_dir


@pytest.fixture
def project_config(tmp_project_dir: Path) -> Config:
    """Default ``Config`` rooted at the temporary project."""
    return Config(project_root=tmp_project_dir)


@pytest.fixture
def blog_post() -> NameForms:
    return NameForms.from_raw("blog-post")
