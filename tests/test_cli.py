"""Unit tests for the command-line interface (simpledi.cli).

Tests cover:
- build_parser subcommands and options
- parse_use_case_imports
- main() exit codes for usage errors, fatal errors and success
"""

from __future__ import annotations

from pathlib import Path

import pytest

from simpledi import __version__
from simpledi.cli import build_parser, main, parse_use_case_imports
from simpledi.errors import InvalidArgument


def _flat(text: str) -> str:
    """Collapse console wrapping so assertions can match whole phrases."""
    return " ".join(text.split())


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class TestBuildParser:
    @pytest.mark.unit
    def test_module_command(self):
        args = build_parser().parse_args(["module", "blog-post"])
        assert args.command == "module"
        assert args.name == "blog-post"
        assert args.project_dir is None

    @pytest.mark.unit
    def test_name_is_optional_at_parse_time(self):
        args = build_parser().parse_args(["crud"])
        assert args.command == "crud"
        assert args.name is None

    @pytest.mark.unit
    def test_use_case_extras_and_option(self):
        args = build_parser().parse_args(
            ["-C", "app", "use-case", "publish-post", "imports=user,blog-post", "--imports", "CoreModule"]
        )
        assert args.project_dir == "app"
        assert args.extras == ["imports=user,blog-post"]
        assert args.imports == "CoreModule"

    @pytest.mark.unit
    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert f"simpledi {__version__}" in capsys.readouterr().out


class TestParseUseCaseImports:
    @pytest.mark.unit
    def test_positional_token(self):
        assert parse_use_case_imports(["imports=CoreModule,ConfigModule"], None) == [
            "CoreModule",
            "ConfigModule",
        ]

    @pytest.mark.unit
    def test_option_and_tokens_are_combined(self):
        assert parse_use_case_imports(["imports=user"], "blog-post, tag") == [
            "user",
            "blog-post",
            "tag",
        ]

    @pytest.mark.unit
    def test_empty(self):
        assert parse_use_case_imports([], None) == []
        assert parse_use_case_imports(["imports="], "") == []

    @pytest.mark.unit
    def test_unexpected_token(self):
        with pytest.raises(InvalidArgument, match="Unexpected argument 'user'"):
            parse_use_case_imports(["user"], None)


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------


class TestMainExitCodes:
    @pytest.mark.unit
    def test_no_command(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1
        assert "usage:" in capsys.readouterr().out

    @pytest.mark.unit
    def test_unknown_command(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["controller", "x"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    @pytest.mark.unit
    def test_missing_entity_name(self, capsys, tmp_project_dir: Path):
        with pytest.raises(SystemExit) as exc_info:
            main(["-C", str(tmp_project_dir), "module"])
        assert exc_info.value.code == 1
        assert "Entity name is required" in _flat(capsys.readouterr().err)

    @pytest.mark.unit
    def test_missing_project_name(self, capsys, tmp_path: Path):
        with pytest.raises(SystemExit) as exc_info:
            main(["-C", str(tmp_path), "new"])
        assert exc_info.value.code == 1
        assert "Project name is required" in _flat(capsys.readouterr().err)

    @pytest.mark.unit
    def test_bad_use_case_argument(self, capsys, tmp_project_dir: Path):
        with pytest.raises(SystemExit) as exc_info:
            main(["-C", str(tmp_project_dir), "use-case", "publish-post", "user"])
        assert exc_info.value.code == 1
        assert "Unexpected argument" in _flat(capsys.readouterr().err)
        assert not (tmp_project_dir / "src" / "use-case" / "publish-post").exists()

    @pytest.mark.unit
    def test_existing_directory(self, capsys, tmp_project_dir: Path):
        (tmp_project_dir / "src" / "core" / "blog-post").mkdir()
        with pytest.raises(SystemExit) as exc_info:
            main(["-C", str(tmp_project_dir), "module", "blog-post"])
        assert exc_info.value.code == 1
        assert "already exists" in _flat(capsys.readouterr().err)


class TestMainSuccess:
    @pytest.mark.unit
    def test_module(self, tmp_project_dir: Path):
        main(["-C", str(tmp_project_dir), "module", "blog-post"])
        assert (tmp_project_dir / "src" / "core" / "blog-post" / "BlogPostModule.ts").is_file()

    @pytest.mark.unit
    def test_use_case_with_imports(self, tmp_project_dir: Path):
        main(["-C", str(tmp_project_dir), "use-case", "publish-post", "imports=CoreModule,ConfigModule"])
        content = (tmp_project_dir / "src" / "use-case" / "publish-post" / "PublishPost.ts").read_text(
            encoding="utf-8"
        )
        assert "imports: [CoreModule, ConfigModule]," in content

    @pytest.mark.unit
    def test_missing_aggregator_still_succeeds(self, tmp_path: Path, capsys):
        main(["-C", str(tmp_path), "crud", "product"])
        assert (tmp_path / "src" / "use-case" / "product" / "ProductUseCaseModule.ts").is_file()
        assert "Warning:" in capsys.readouterr().out

    @pytest.mark.unit
    def test_undecodable_aggregator_is_a_warning(self, tmp_project_dir: Path, capsys):
        schema = tmp_project_dir / "src" / "schema.ts"
        schema.write_bytes(b'export * from "@root/core/user/User";\n// caf\xe9\n')

        main(["-C", str(tmp_project_dir), "module", "blog-post"])

        out = _flat(capsys.readouterr().out)
        assert "Could not read schema.ts as UTF-8" in out
        core = (tmp_project_dir / "src" / "core" / "CoreModule.ts").read_text(encoding="utf-8")
        assert "import { BlogPostModule } from './blog-post/BlogPostModule';" in core
        assert schema.read_bytes().endswith(b"caf\xe9\n")
