"""Artifact families: which files a generated entity or use case consists of.

Rendering is a pure function of the artifact kind, the entity's
:class:`~simpledi.naming.NameForms` and a few options.  Nothing here touches
the filesystem; paths in the returned mapping are POSIX paths relative to
the artifact's own root directory (``core/<kebab>/`` for a module,
``use-case/<kebab>/`` for use cases and CRUD sets).
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict, Field

from ..errors import UnsupportedArtifactKind
from ..naming import NameForms, to_camel_case, to_kebab_case, to_pascal_case, to_upper_snake_case
from .templates import TemplateRenderer


class ArtifactKind(str, Enum):
    MODULE = "module"
    USE_CASE = "use_case"
    CRUD = "crud"
    E2E_TEST = "e2e_test"


class RenderOptions(BaseModel):
    """Per-command rendering options."""

    imports: list[str] = Field(
        default_factory=list,
        description="Sibling modules the use case's DI module imports, in order",
    )
    emit_e2e: bool | None = Field(
        default=None,
        description="Emit the use-case e2e stub; None means only when imports are given",
    )
    core_module: str = Field(
        default="core/CoreModule.ts",
        description="Core aggregator, relative to the source directory",
    )

    @property
    def include_e2e(self) -> bool:
        if self.emit_e2e is None:
            return bool(self.imports)
        return self.emit_e2e


class SiblingModule(BaseModel):
    """A DI module imported by a generated use case."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: str


class CrudOperation(BaseModel):
    """One of the five operations of a CRUD set, with its derived names."""

    model_config = ConfigDict(frozen=True)

    verb: str
    pascal: str
    camel: str
    upper_snake: str
    dir: str
    route_path: str
    has_input: bool = False
    uses_interface: bool = True
    payload: str
    success_message: str
    failure_message: str


# ---------------------------------------------------------------------------
# Name derivation
# ---------------------------------------------------------------------------

_MODULE_SUFFIX = "Module"


def sibling_module(raw: str, core_module: str = "core/CoreModule.ts") -> SiblingModule:
    """Map a sibling name from the command line to its module and import path.

    ``user`` -> ``UserModule`` from ``@root/core/user/UserModule``.  A name
    that already ends in ``Module`` is kept verbatim:
    ``ConfigModule`` -> ``ConfigModule`` from ``@root/core/config/ConfigModule``.
    The core aggregator itself resolves to *core_module*, so ``CoreModule``
    comes from ``@root/core/CoreModule``.
    """
    name = raw.strip()
    core = PurePosixPath(core_module).with_suffix("")
    if name == core.name:
        return SiblingModule(name=name, path=f"@root/{core.as_posix()}")
    if name.endswith(_MODULE_SUFFIX) and len(name) > len(_MODULE_SUFFIX):
        stem = name[: -len(_MODULE_SUFFIX)]
        return SiblingModule(name=name, path=f"@root/core/{to_kebab_case(stem)}/{name}")
    pascal = to_pascal_case(name)
    module_name = f"{pascal}{_MODULE_SUFFIX}"
    return SiblingModule(
        name=module_name, path=f"@root/core/{to_kebab_case(name)}/{module_name}"
    )


def crud_operations(forms: NameForms) -> list[CrudOperation]:
    """The Create, Update, Get, List and Delete operations for *forms*."""
    entity = forms.pascal
    collection_path = f"/{forms.plural_kebab}"
    item_path = f"{collection_path}/:id"

    def _op(verb: str, pascal: str, dir_name: str, route_path: str, **extra) -> CrudOperation:
        return CrudOperation(
            verb=verb,
            pascal=pascal,
            camel=to_camel_case(pascal),
            upper_snake=to_upper_snake_case(pascal),
            dir=dir_name,
            route_path=route_path,
            **extra,
        )

    return [
        _op(
            "create",
            f"Create{entity}",
            f"create-{forms.kebab}",
            collection_path,
            has_input=True,
            payload=f"{entity}Interface",
            success_message=f"{entity} created successfully",
            failure_message=f"Failed to create {entity}",
        ),
        _op(
            "update",
            f"Update{entity}",
            f"update-{forms.kebab}",
            item_path,
            has_input=True,
            payload=f"{entity}Interface",
            success_message=f"{entity} updated successfully",
            failure_message=f"Failed to update {entity}",
        ),
        _op(
            "get",
            f"Get{entity}",
            f"get-{forms.kebab}",
            item_path,
            payload=f"{entity}Interface",
            success_message=f"{entity} retrieved successfully",
            failure_message=f"Failed to get {entity}",
        ),
        _op(
            "list",
            f"List{forms.plural_pascal}",
            f"list-{forms.plural_kebab}",
            collection_path,
            payload=f"{entity}Interface[]",
            success_message=f"{forms.plural_pascal} retrieved successfully",
            failure_message=f"Failed to list {forms.plural_pascal}",
        ),
        _op(
            "delete",
            f"Delete{entity}",
            f"delete-{forms.kebab}",
            item_path,
            uses_interface=False,
            payload="{ id: string; deleted: boolean; softDelete: boolean }",
            success_message=f"{entity} deleted successfully",
            failure_message=f"Failed to delete {entity}",
        ),
    ]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

# (template, output path); output paths are format strings over NameForms.
_MODULE_FILES: list[tuple[str, str]] = [
    ("module/baseZodSchema.ts.j2", "baseZod{pascal}Schema.ts"),
    ("module/Entity.ts.j2", "{pascal}.ts"),
    ("module/IRepository.ts.j2", "I{pascal}Repository.ts"),
    ("module/Repository.ts.j2", "{pascal}Repository.ts"),
    ("module/RepositoryModule.ts.j2", "{pascal}RepositoryModule.ts"),
    ("module/IService.ts.j2", "I{pascal}Service.ts"),
    ("module/Service.ts.j2", "{pascal}Service.ts"),
    ("module/ServiceModule.ts.j2", "{pascal}ServiceModule.ts"),
    ("module/Module.ts.j2", "{pascal}Module.ts"),
    ("module/Repository.spec.ts.j2", "{pascal}Repository.spec.ts"),
]

_USE_CASE_FILES: list[tuple[str, str]] = [
    ("use_case/Success.ts.j2", "outputs/{pascal}Success.ts"),
    ("use_case/Failure.ts.j2", "outputs/{pascal}Failure.ts"),
    ("use_case/UseCase.ts.j2", "{pascal}.ts"),
    ("use_case/Routes.ts.j2", "{camel}Routes.ts"),
]

_E2E_FILE = ("use_case/UseCase.e2e.spec.ts.j2", "{pascal}.e2e.spec.ts")


def _render_family(
    renderer: TemplateRenderer,
    files: list[tuple[str, str]],
    context: dict,
) -> dict[str, str]:
    return {
        output.format(**context): renderer.render(template, context)
        for template, output in files
    }


def _render_crud(renderer: TemplateRenderer, context: dict, forms: NameForms) -> dict[str, str]:
    operations = crud_operations(forms)
    rendered: dict[str, str] = {}

    for op in operations:
        op_context = {**context, "op": op.model_dump()}
        prefix = op.dir
        if op.has_input:
            rendered[f"{prefix}/inputs/{op.pascal}Input.ts"] = renderer.render(
                f"crud/inputs/{op.verb}.ts.j2", op_context
            )
        rendered[f"{prefix}/outputs/{op.pascal}Success.ts"] = renderer.render(
            "crud/Success.ts.j2", op_context
        )
        rendered[f"{prefix}/outputs/{op.pascal}Failure.ts"] = renderer.render(
            "crud/Failure.ts.j2", op_context
        )
        rendered[f"{prefix}/{op.pascal}.ts"] = renderer.render("crud/UseCase.ts.j2", op_context)
        rendered[f"{prefix}/{op.camel}Routes.ts"] = renderer.render(
            f"crud/routes/{op.verb}.ts.j2", op_context
        )
        rendered[f"{prefix}/{op.pascal}.e2e.spec.ts"] = renderer.render(
            f"crud/e2e/{op.verb}.ts.j2", op_context
        )

    aggregator_context = {**context, "operations": [op.model_dump() for op in operations]}
    rendered[f"{forms.pascal}UseCaseModule.ts"] = renderer.render(
        "crud/UseCaseModule.ts.j2", aggregator_context
    )
    return rendered


def render_artifacts(
    kind: ArtifactKind | str,
    forms: NameForms,
    extra: RenderOptions | None = None,
    renderer: TemplateRenderer | None = None,
) -> dict[str, str]:
    """Render the file set of one artifact.

    Args:
        kind: Artifact family to render.
        forms: Name forms of the entity or use case.
        extra: Rendering options (sibling imports, e2e stub toggle).
        renderer: Template renderer; a default one is created when omitted.

    Returns:
        Mapping of path (relative to the artifact root) to file content,
        in write order.

    Raises:
        UnsupportedArtifactKind: If *kind* is not a known family.
    """
    try:
        kind = ArtifactKind(kind)
    except ValueError:
        raise UnsupportedArtifactKind(kind) from None

    options = extra or RenderOptions()
    renderer = renderer or TemplateRenderer()
    context = forms.as_context()
    context["modules"] = [
        sibling_module(name, options.core_module).model_dump() for name in options.imports
    ]

    if kind is ArtifactKind.MODULE:
        return _render_family(renderer, _MODULE_FILES, context)
    if kind is ArtifactKind.USE_CASE:
        files = list(_USE_CASE_FILES)
        if options.include_e2e:
            files.append(_E2E_FILE)
        return _render_family(renderer, files, context)
    if kind is ArtifactKind.CRUD:
        return _render_crud(renderer, context, forms)
    return _render_family(renderer, [_E2E_FILE], context)
