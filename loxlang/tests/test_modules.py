"""
Tests for module imports in Lox
"""
from pathlib import Path

import pytest

from loxlang.exceptions import ModuleResolutionError
from loxlang.modules import find_module, module_name, module_root
from loxlang.tests.utils import messages, run_source


UTILS_SOURCE = (
    "var MAGIC = 40;\n"
    "MAGIC = MAGIC + 2;\n"
    "fun add(a, b) { return a + b; }\n"
    "var base = 10;\n"
    "fun plus(n) { return base + n; }\n"
    "class Point { init(x) { this.x = x; } }\n"
)


@pytest.fixture
def utils_root(tmp_path: Path) -> Path:
    (tmp_path / "utils.lox").write_text(UTILS_SOURCE)
    return tmp_path


def output(capsys) -> list[str]:
    return capsys.readouterr().out.strip().splitlines()


def test_basic_import(utils_root: Path, capsys):
    """
    Test that a basic import works correctly.
    """
    source = (
        'import "utils.lox";\n'
        "print utils.add(1, 2);\n"
        "print utils.MAGIC;\n"
        "print utils;\n"
    )
    interpreter = run_source(source, module_root=utils_root)
    assert messages(interpreter) == []
    assert output(capsys) == ["3", "42", "<module utils>"]


def test_import_with_alias(utils_root: Path, capsys):
    run_source('import "utils.lox" as u;\nprint u.add(2, 3);', module_root=utils_root)
    assert output(capsys) == ["5"]


def test_import_inside_block_and_function(utils_root: Path, capsys):
    """
    Test that an import without an alias binds the module in the local
    scope it appears in.
    """
    source = (
        '{ import "utils.lox"; print utils.MAGIC; }\n'
        'fun magic() { import "utils.lox"; return utils.MAGIC; }\n'
        "print magic();\n"
        "{\n"
        '  var utils = "outer";\n'
        '  { import "utils.lox"; print utils.add(1, 1); }\n'
        "  print utils;\n"
        "}\n"
    )
    interpreter = run_source(source, module_root=utils_root)
    assert messages(interpreter) == []
    assert output(capsys) == ["42", "42", "2", "outer"]


def test_module_functions_read_module_globals(utils_root: Path, capsys):
    """
    Test that a module's functions see the module's globals, not the
    importer's.
    """
    source = 'var base = 1000;\nimport "utils.lox";\nprint utils.plus(5);'
    run_source(source, module_root=utils_root)
    assert output(capsys) == ["15"]


def test_classes_from_modules(utils_root: Path, capsys):
    run_source('import "utils.lox";\nvar p = utils.Point(3);\nprint p.x;', module_root=utils_root)
    assert output(capsys) == ["3"]


def test_modules_are_read_only(utils_root: Path):
    interpreter = run_source('import "utils.lox";\nutils.MAGIC = 1;', module_root=utils_root)
    assert messages(interpreter) == ["Imported modules are read-only."]


def test_undefined_module_member(utils_root: Path):
    interpreter = run_source('import "utils.lox";\nprint utils.nothing;', module_root=utils_root)
    assert messages(interpreter) == ["Undefined variable 'nothing'."]


def test_missing_module(tmp_path: Path):
    interpreter = run_source('import "nope.lox";', module_root=tmp_path)
    assert messages(interpreter) == ["Can't find 'nope.lox'."]
    assert interpreter.reporter.diagnostics[0].kind == "runtime"


def test_ambiguous_module(tmp_path: Path, capsys):
    for sub in ("a", "b"):
        (tmp_path / sub).mkdir()
        (tmp_path / sub / "utils.lox").write_text(f'var WHERE = "{sub}";')

    interpreter = run_source('import "utils.lox";', module_root=tmp_path)
    assert messages(interpreter) == ["2 modules named 'utils.lox' found."]

    run_source('import "b/utils.lox";\nprint utils.WHERE;', module_root=tmp_path)
    assert output(capsys) == ["b"]


def test_build_output_directories_are_skipped(tmp_path: Path):
    (tmp_path / "target").mkdir()
    (tmp_path / "target" / "utils.lox").write_text("var A = 1;")
    (tmp_path / ".hidden").mkdir()
    (tmp_path / ".hidden" / "utils.lox").write_text("var A = 1;")

    with pytest.raises(ModuleResolutionError):
        find_module("utils.lox", tmp_path)


def test_syntax_error_in_module(tmp_path: Path):
    (tmp_path / "bad.lox").write_text("var = ;")
    interpreter = run_source('import "bad.lox";', module_root=tmp_path)
    assert messages(interpreter) == ["Expect identifier after 'var'.", "Error accessing module 'bad.lox'."]


def test_runtime_error_in_module_propagates(tmp_path: Path, capsys):
    (tmp_path / "boom.lox").write_text('print "loading";\nprint 1 / 0;')
    interpreter = run_source('import "boom.lox";\nprint "after";', module_root=tmp_path)
    assert messages(interpreter) == ["Division by zero."]
    assert interpreter.reporter.diagnostics[0].line == 2
    assert output(capsys) == ["loading"]


def test_loxpath_sets_module_root(utils_root: Path, monkeypatch, capsys):
    monkeypatch.setenv("LOXPATH", str(utils_root))
    assert module_root() == utils_root
    run_source('import "utils.lox";\nprint utils.MAGIC;')
    assert output(capsys) == ["42"]


def test_module_name_is_file_stem():
    assert module_name("utils.lox") == "utils"
    assert module_name("lib/math.lox") == "math"
