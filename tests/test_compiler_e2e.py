"""End-to-end tests: source text or files through to rendered strings.

Tests verify:
- The reference compile scenarios
- Multi-file tables compiled from disk and from memory
- Error propagation and logging from the compile driver
- Rendering through Localizer after a full compile
"""

import logging
from pathlib import Path

import pytest

from loctable import (
    CompileError,
    Localizer,
    MemorySourceLoader,
    PathSourceLoader,
    SourceLoadError,
    compile_file,
    compile_source,
    compile_table,
)
from loctable.assembly import Assembler
from loctable.diagnostics import DiagnosticCode, LexicalError, SemanticError


def _code(exc_info: pytest.ExceptionInfo[CompileError]) -> DiagnosticCode:
    assert exc_info.value.diagnostic is not None
    return exc_info.value.diagnostic.code


class TestReferenceScenarios:
    """Canonical compile outcomes."""

    def test_single_key_single_locale(self) -> None:
        """One key, one locale, zero arguments, template 'hi'."""
        artifact = compile_source('!locales en\ngreet:\n en "hi"')
        assert artifact.keys == ("greet",)
        assert artifact.locales.names == ("en",)
        spec = artifact.accessor("greet")
        assert spec.parameters == ()
        assert [t.template for t in spec.templates] == ["hi"]

    def test_named_argument_two_locales(self) -> None:
        """One named argument shared by two templates."""
        artifact = compile_source('!locales en se\ngreet:\n en "Hi {name}!"\n se "Hej {name}!"')
        spec = artifact.accessor("greet")
        assert spec.parameter_names == ("name",)
        assert [t.template for t in spec.templates] == ["Hi {name}!", "Hej {name}!"]

    def test_missing_locale_cites_it(self) -> None:
        """A key lacking 'b' fails naming 'b'."""
        with pytest.raises(SemanticError) as exc_info:
            compile_source('!locales a b\ngreet:\n a "x"')
        assert _code(exc_info) == DiagnosticCode.MISSING_LOCALE
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.locale == "b"

    def test_positional_renaming(self) -> None:
        """{0}{1}{3} gives parameters arg0, arg1, arg3."""
        artifact = compile_source('!locales en\nk:\n en "{0}{1}{3}"')
        spec = artifact.accessor("k")
        assert [p.placeholder for p in spec.parameters] == ["0", "1", "3"]
        assert spec.parameter_names == ("arg0", "arg1", "arg3")

    @pytest.mark.parametrize(
        "source",
        ["", "# only a comment", 'greet:\n en "hi"', '# about\ngreet:\n en "hi"\n se "hej"'],
    )
    def test_no_locales(self, source: str) -> None:
        """Omitting '!locales' is NO_LOCALES whatever else is present."""
        with pytest.raises(SemanticError) as exc_info:
            compile_source(source)
        assert _code(exc_info) == DiagnosticCode.NO_LOCALES


class TestMultiSource:
    """Tables split over several sources."""

    def test_memory_loader(self, include_loader: MemorySourceLoader) -> None:
        """Entries merge across included files."""
        artifact = compile_source(
            include_loader.load("strings/main.txt"),
            source_id="strings/main.txt",
            loader=include_loader,
        )
        ui = Localizer(artifact)
        assert ui.greet() == "Hi"
        assert ui.bye.format("se") == "Hej då"

    def test_compile_file(self, tmp_path: Path) -> None:
        """Files on disk resolve includes relative to the including file."""
        (tmp_path / "shared").mkdir()
        (tmp_path / "main.txt").write_text(
            '!locales en se\n!include shared/common.txt\ngreet:\n en "Hi {name}!"\n',
            encoding="utf-8",
        )
        (tmp_path / "shared" / "common.txt").write_text(
            'greet:\n se "Hej {name}!"\n', encoding="utf-8"
        )
        artifact = compile_file(tmp_path / "main.txt")
        ui = Localizer(artifact, artifact.create_store("se"))
        assert ui.greet(name="Ada") == "Hej Ada!"

    def test_compile_file_with_root_guard(self, tmp_path: Path) -> None:
        """Includes escaping root_dir fail to load."""
        root = tmp_path / "root"
        root.mkdir()
        (tmp_path / "outside.txt").write_text('k:\n en "x"', encoding="utf-8")
        (root / "main.txt").write_text("!locales en\n!include ../outside.txt", encoding="utf-8")
        with pytest.raises(SourceLoadError) as exc_info:
            compile_file(root / "main.txt", loader=PathSourceLoader(root_dir=str(root)))
        assert "Path traversal" in str(exc_info.value)

    def test_compile_file_missing(self, tmp_path: Path) -> None:
        """A missing root file is SourceLoadError."""
        with pytest.raises(SourceLoadError):
            compile_file(tmp_path / "absent.txt")

    def test_duplicate_entry_across_files(self) -> None:
        """Re-declaring a (key, locale) pair in another file fails."""
        loader = MemorySourceLoader({"a": '!locales en\n!include b\nk:\n en "1"', "b": 'k:\n en "2"'})
        with pytest.raises(SemanticError) as exc_info:
            compile_source(loader.load("a"), source_id="a", loader=loader)
        assert _code(exc_info) == DiagnosticCode.DUPLICATE_ENTRY


class TestDriver:
    """Compile driver behavior."""

    def test_compile_table(self) -> None:
        """compile_table runs validation and emission only."""
        table = Assembler().assemble('!locales en\nk:\n en "x"')
        assert compile_table(table).keys == ("k",)

    def test_size_limit(self) -> None:
        """Oversized sources are rejected before lexing."""
        with pytest.raises(LexicalError) as exc_info:
            compile_source("# " + "x" * 100, max_source_size=10)
        assert _code(exc_info) == DiagnosticCode.SOURCE_TOO_LARGE

    def test_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Failed compiles log at ERROR before raising."""
        with (
            caplog.at_level(logging.ERROR, logger="loctable.compiler"),
            pytest.raises(CompileError),
        ):
            compile_source('!locales en\n"x"', source_id="bad.txt")
        assert "bad.txt" in caplog.text

    def test_success_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Successful compiles log a summary at INFO."""
        with caplog.at_level(logging.INFO, logger="loctable.compiler"):
            compile_source('!locales en\nk:\n en "x"', source_id="ok.txt")
        assert "ok.txt: 1 keys, 1 locales" in caplog.text

    def test_fixture_table(self, greeting_source: str) -> None:
        """The shared fixture compiles and renders in both locales."""
        ui = Localizer(compile_source(greeting_source))
        assert ui.items(2) == "2 items"
        ui.set_locale("se")
        assert ui.items(2) == "2 saker"
        assert ui.greet.comment == " Greeting shown on start # Locale notes\n- *se*:  informal\n"


class TestErrorSources:
    """Every compile error names a source."""

    @pytest.mark.parametrize(
        ("body", "code"),
        [
            ('k:\n a "x"', DiagnosticCode.MISSING_LOCALE),
            ('k:\n a "{x}"\n b "{y}"', DiagnosticCode.ARGUMENT_MISMATCH),
            ('k:\n a "{"\n b "x"', DiagnosticCode.NESTED_BRACE),
            ('k:\n a "{arg0}{0}"\n b "{arg0}{0}"', DiagnosticCode.PARAMETER_COLLISION),
        ],
    )
    def test_semantic_errors_name_root(self, body: str, code: DiagnosticCode) -> None:
        """Validation and emission errors in the root name the root source."""
        with pytest.raises(SemanticError) as exc_info:
            compile_source("!locales a b\n" + body, source_id="main.txt")
        assert _code(exc_info) == code
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.source == "main.txt"

    def test_no_locales_names_root(self) -> None:
        """Table-wide errors fall back to the root source."""
        with pytest.raises(SemanticError) as exc_info:
            compile_source("# empty", source_id="main.txt")
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.source == "main.txt"

    def test_placeholder_error_in_include(self) -> None:
        """A bad template in an included file names that file, not the root."""
        loader = MemorySourceLoader(
            {
                "main.txt": '!locales en se\n!include part.txt\ngreet:\n en "Hi {name}"',
                "part.txt": 'greet:\n se "Hej {name"',
            }
        )
        with pytest.raises(SemanticError) as exc_info:
            compile_source(loader.load("main.txt"), source_id="main.txt", loader=loader)
        assert _code(exc_info) == DiagnosticCode.NESTED_BRACE
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.source == "part.txt"
        assert "--> part.txt" in str(exc_info.value)

    def test_collision_in_include(self, tmp_path: Path) -> None:
        """Keys first declared in an include are attributed to it on disk too."""
        (tmp_path / "main.txt").write_text("!locales en\n!include extra.txt", encoding="utf-8")
        (tmp_path / "extra.txt").write_text('k:\n en "{arg0}{0}"', encoding="utf-8")
        with pytest.raises(SemanticError) as exc_info:
            compile_file(tmp_path / "main.txt")
        assert _code(exc_info) == DiagnosticCode.PARAMETER_COLLISION
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.source == str((tmp_path / "extra.txt").resolve())
