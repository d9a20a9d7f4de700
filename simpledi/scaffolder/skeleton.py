"""Project skeleton generation for ``simpledi new``."""

from __future__ import annotations

import asyncio
from pathlib import Path

from .. import __version__
from ..config import Config
from ..naming import NameForms, validate_name
from ..utils import print_created, print_info, print_success
from .artifacts import ArtifactKind, render_artifacts
from .templates import TemplateRenderer
from .writer import ensure_fresh_directory, write_artifacts

# Rendered explicitly: dotfiles do not survive package-data globbing.
_ENV_TEMPLATE = "skeleton/env.development.j2"
_ENV_FILENAME = ".env.development"

# Core module every new project starts with; the auth middleware depends on it.
_DEFAULT_ENTITY = "user"


class SkeletonGenerator:
    """Creates a new project directory from the bundled skeleton tree.

    The tree contains the aggregator files (core module, use-case module,
    main route table, schema index) that later ``module``/``use-case``/
    ``crud`` commands patch.
    """

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    async def generate(self, project_name: str | None, parent_dir: str | Path = ".") -> Path:
        """Generate the project *project_name* inside *parent_dir*.

        Returns:
            Path to the new project root.

        Raises:
            InvalidArgument: If the project name is missing or malformed.
            DirectoryExists: If ``<parent_dir>/<project_name>`` exists.
        """
        name = validate_name(project_name, "project")
        target = Path(parent_dir) / name
        print_info(f"Generating skeleton in: {target}")

        await asyncio.to_thread(ensure_fresh_directory, target)

        context = {
            **NameForms.from_raw(name).as_context(),
            "project_name": name,
            "version": __version__,
        }

        written = await self.renderer.render_tree(
            "skeleton", target, context, skip_patterns=[Path(_ENV_TEMPLATE).name]
        )
        written.append(
            await self.renderer.render_to_file(_ENV_TEMPLATE, target / _ENV_FILENAME, context)
        )

        config = Config(project_root=target)
        user_forms = NameForms.from_raw(
            _DEFAULT_ENTITY,
            table_policy=config.naming.table_plural_policy,
            route_policy=config.naming.route_plural_policy,
        )
        user_files = render_artifacts(ArtifactKind.MODULE, user_forms, renderer=self.renderer)
        written.extend(await write_artifacts(config.core_path / user_forms.kebab, user_files))

        written.append(await asyncio.to_thread(config.save))

        for path in written:
            print_created(path, target)

        print_success("Skeleton generation complete!")
        print_info("Next steps:")
        print_info(f"  cd {name}")
        print_info("  bun install")
        print_info("  bun run dev")
        return target
