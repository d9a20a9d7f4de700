"""Registration edits for the project's well-known aggregator files.

=================  ==========================  =====================================
Aggregator         Default path (under src/)   Edit
=================  ==========================  =====================================
schema index       ``schema.ts``               append ``export * from ...``
core module        ``core/CoreModule.ts``      import + ``imports: [...]`` element
use-case module    ``use-case/UseCaseModule``  import + inline ``imports: [...]``
main route table   ``main.routes.ts``          import + ``mainRoutes.route(...)``
=================  ==========================  =====================================
"""

from __future__ import annotations

import os
from pathlib import Path

from ..config import Config
from ..naming import NameForms
from .registrar import RegistrationEdit


def relative_import(aggregator: Path, target: Path) -> str:
    """Relative module specifier from *aggregator*'s directory to *target*.

    *target* is a module path without extension.  The result always starts
    with ``./`` or ``../``.
    """
    rel = Path(os.path.relpath(target, aggregator.parent)).as_posix()
    if not rel.startswith("."):
        rel = f"./{rel}"
    return rel


def schema_export_edit(forms: NameForms, config: Config) -> RegistrationEdit:
    """Re-export the entity schema from the central schema index."""
    statement = (
        f'export * from "@root/{config.layout.core_dir}/{forms.kebab}/{forms.pascal}";'
    )
    return RegistrationEdit(reference=statement, statement=statement)


def core_module_edit(forms: NameForms, config: Config) -> RegistrationEdit:
    """Add ``<Entity>Module`` to the core module aggregator."""
    module_name = f"{forms.pascal}Module"
    target = config.core_path / forms.kebab / module_name
    specifier = relative_import(config.core_module_path, target)
    return RegistrationEdit(
        reference=module_name,
        import_line=f"import {{ {module_name} }} from '{specifier}';",
        array_marker=config.registration.array_marker,
        array_style="multiline",
    )


def use_case_module_edit(forms: NameForms, config: Config) -> RegistrationEdit:
    """Add a single use case's ``<UseCase>Module`` to the use-case aggregator."""
    module_name = f"{forms.pascal}Module"
    target = config.use_case_path / forms.kebab / forms.pascal
    specifier = relative_import(config.use_case_module_path, target)
    return RegistrationEdit(
        reference=module_name,
        import_line=f"import {{ {module_name} }} from '{specifier}';",
        array_marker=config.registration.array_marker,
        array_style="inline",
    )


def crud_use_case_module_edit(forms: NameForms, config: Config) -> RegistrationEdit:
    """Add the CRUD aggregator ``<Entity>UseCaseModule`` to the use-case aggregator."""
    module_name = f"{forms.pascal}UseCaseModule"
    target = config.use_case_path / forms.kebab / module_name
    specifier = relative_import(config.use_case_module_path, target)
    return RegistrationEdit(
        reference=module_name,
        import_line=f"import {{ {module_name} }} from '{specifier}';",
        array_marker=config.registration.array_marker,
        array_style="inline",
    )


def route_edit(routes_name: str, routes_dir: str, config: Config) -> RegistrationEdit:
    """Mount a routes file on ``mainRoutes``.

    Args:
        routes_name: Camel-case routes variable, e.g. ``blogPostRoutes``.
            The file exports ``<routes_name>`` and ``<routes_name>Path``.
        routes_dir: Directory of the routes file, relative to the use-case
            directory (``blog-post`` or ``blog-post/create-blog-post``).
        config: Project configuration.
    """
    path_name = f"{routes_name}Path"
    target = config.use_case_path / routes_dir / routes_name
    specifier = relative_import(config.main_routes_path, target)
    import_block = (
        "import {\n"
        f"  {routes_name},\n"
        f"  {path_name},\n"
        f"}} from '{specifier}';"
    )
    return RegistrationEdit(
        reference=routes_name,
        import_line=import_block,
        import_terminator="statement",
        statement=f"mainRoutes.route({path_name}, {routes_name});",
        anchor=config.registration.routes_anchor,
    )
