"""Command line tests."""

import io
import json

from doxygen_generator.cli import main


def test_generate(tmp_path, capsys):
    source = tmp_path / "math.h"
    source.write_text("#pragma once\n\nint add(int a, int b);\n")

    assert main(["generate", str(source), "--line", "3"]) == 0

    out = capsys.readouterr().out
    assert " * @param[in] a $2\n" in out
    assert " * @returns $4\n" in out


def test_generate_json_with_options(tmp_path, capsys):
    source = tmp_path / "math.h"
    source.write_text("int add(int a, int b);\n")

    code = main(
        ["generate", str(source), "--line", "1", "--json", "-o", "brief=true", "-o", "param_dir=false"]
    )
    assert code == 0

    data = json.loads(capsys.readouterr().out)
    assert data["declaration"] == "add"
    assert data["anchor"]["kind"] == "insert"
    assert data["snippet"].startswith("/**\n * @brief $1\n")
    assert " * @param a $2\n" in data["snippet"]


def test_generate_invalid_option(tmp_path, capsys):
    source = tmp_path / "math.h"
    source.write_text("int add(int a, int b);\n")

    assert main(["generate", str(source), "--line", "1", "-o", "colour=red"]) == 2
    assert "Invalid style option colour" in capsys.readouterr().err


def test_generate_missing_file(tmp_path, capsys):
    assert main(["generate", str(tmp_path / "missing.h"), "--line", "1"]) == 2
    assert "missing.h" in capsys.readouterr().err


def test_reflow_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(" * a b\n * c\n"))
    assert main(["reflow"]) == 0
    assert capsys.readouterr().out == " * a b c\n"


def test_tags(capsys):
    assert main(["tags"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert "@brief" in out
    assert "@retval <value>" in out
