"""Command-line entry point: ``simpledi <command> <name> [options]``."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import NoReturn

from pydantic import ValidationError

from . import __version__
from .config import Config
from .errors import InvalidArgument, SimpleDIError
from .scaffolder.artifacts import RenderOptions
from .scaffolder.generator import CrudGenerator, ModuleGenerator, UseCaseGenerator
from .scaffolder.skeleton import SkeletonGenerator
from .utils import console, parse_name_list, print_error

IMPORTS_PREFIX = "imports="


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors exit with status 1 and an ``Error:`` line."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        print_error(message)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="simpledi",
        description="simpledi -- simple-di app generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  simpledi new my-app\n"
            "  simpledi module blog-post\n"
            "  simpledi use-case publish-post imports=user,blog-post\n"
            "  simpledi crud product\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"simpledi {__version__}")
    parser.add_argument(
        "--project-dir", "-C",
        default=None,
        help="Project directory (default: current directory)",
    )

    sub = parser.add_subparsers(dest="command", parser_class=_ArgumentParser)

    new = sub.add_parser("new", help="Create a new simple-di project")
    new.add_argument("name", nargs="?", help="Project name")

    module = sub.add_parser("module", help="Generate an entity module in the current project")
    module.add_argument("name", nargs="?", help="Entity name, e.g. blog-post")

    use_case = sub.add_parser("use-case", help="Generate a use case with its route")
    use_case.add_argument("name", nargs="?", help="Use case name, e.g. publish-post")
    use_case.add_argument(
        "extras",
        nargs="*",
        metavar="imports=mod1,mod2",
        help="Modules the use case's DI module imports",
    )
    use_case.add_argument(
        "--imports",
        default=None,
        help="Comma-separated modules the use case's DI module imports",
    )

    crud = sub.add_parser("crud", help="Generate Create/Update/Get/List/Delete use cases")
    crud.add_argument("name", nargs="?", help="Entity name, e.g. product")

    return parser


def parse_use_case_imports(extras: list[str], option: str | None) -> list[str]:
    """Collect sibling module names from ``imports=`` tokens and ``--imports``.

    Raises:
        InvalidArgument: For a positional token that is not ``imports=...``.
    """
    names: list[str] = []
    for token in extras:
        if not token.startswith(IMPORTS_PREFIX):
            raise InvalidArgument(f"Unexpected argument {token!r} (expected imports=mod1,mod2)")
        names.extend(parse_name_list(token[len(IMPORTS_PREFIX):]))
    names.extend(parse_name_list(option))
    return names


async def run(args: argparse.Namespace) -> None:
    project_dir = Path(args.project_dir) if args.project_dir else None

    if args.command == "new":
        await SkeletonGenerator().generate(args.name, project_dir or Path("."))
        return

    config = Config.discover(project_dir)
    if args.command == "module":
        await ModuleGenerator(config).generate(args.name)
    elif args.command == "use-case":
        imports = parse_use_case_imports(args.extras, args.imports)
        await UseCaseGenerator(config).generate(args.name, RenderOptions(imports=imports))
    elif args.command == "crud":
        await CrudGenerator(config).generate(args.name)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``simpledi`` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        asyncio.run(run(args))
    except (SimpleDIError, ValidationError, OSError) as exc:
        print_error(str(exc))
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("[yellow]Interrupted[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    main()
