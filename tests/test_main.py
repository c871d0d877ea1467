import logging
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

from argot import ParseResult
from argot.__main__ import (
    bootstrap,
    find_argot_config,
    get_fallback_program,
    main,
)

PIZZA_YAML = """\
name: pizza
version: 1.0.0
commands:
  - spec: "order.o <name>"
    description: Order a pizza
    options:
      - spec: "--cheese.c"
        help: Add cheese
"""


@pytest.fixture(autouse=True)
def fake_home(monkeypatch, tmp_path):
    """Redirect Path.home() and the working directory to temporary directories."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.chdir(work)
    monkeypatch.delenv("ARGOT_CONFIG", raising=False)
    monkeypatch.setattr(sys, "path", list(sys.path))
    return home


@pytest.fixture(autouse=True)
def restore_logging():
    argot_logger = logging.getLogger("argot")
    handlers = list(argot_logger.handlers)
    level, propagate = argot_logger.level, argot_logger.propagate
    yield
    argot_logger.handlers[:] = handlers
    argot_logger.setLevel(level)
    argot_logger.propagate = propagate


def test_find_argot_config():
    assert find_argot_config() is None
    config_file = Path("argot.yaml").resolve()
    config_file.touch()
    assert find_argot_config() == config_file


def test_find_hidden_toml_config():
    config_file = Path(".argot.toml").resolve()
    config_file.touch()
    assert find_argot_config() == config_file


def test_find_config_from_environment(monkeypatch, tmp_path):
    Path("argot.yaml").touch()
    config_file = tmp_path / "custom.yaml"
    config_file.touch()
    monkeypatch.setenv("ARGOT_CONFIG", str(config_file))
    assert find_argot_config() == config_file


def test_bootstrap():
    config_file = Path("argot.yaml").resolve()
    config_file.touch()
    assert bootstrap() == config_file
    assert str(config_file.parent) in sys.path


def test_bootstrap_no_config():
    sys_path_before = list(sys.path)
    assert bootstrap() is None
    assert sys.path == sys_path_before


def test_bootstrap_with_global_config(fake_home):
    config_file = fake_home / ".config" / "argot" / "argot.yaml"
    config_file.parent.mkdir(parents=True)
    config_file.touch()
    assert bootstrap() == config_file
    assert str(config_file.parent) in sys.path


def test_main_with_config(capsys):
    Path("argot.yaml").write_text(PIZZA_YAML)
    result = main(["order", "Marco", "-c"])
    assert isinstance(result, ParseResult)
    assert result["cheese"] is True
    assert '"Marco"' in capsys.readouterr().out


def test_main_with_config_validation_error(capsys):
    Path("argot.yaml").write_text(PIZZA_YAML)
    with pytest.raises(SystemExit) as exc_info:
        main(["order"])
    assert exc_info.value.code == 1
    assert "name" in capsys.readouterr().out


def test_main_with_invalid_config(capsys):
    Path("argot.yaml").write_text("version: 1.0.0\n")
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 1
    assert "Could not load" in capsys.readouterr().out


def test_main_fallback_prints_help(capsys):
    assert main([]) is None
    output = capsys.readouterr().out
    assert "check, c" in output
    assert "ARGOT_CONFIG" in output


def test_main_fallback_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0
    assert "argot" in capsys.readouterr().out


def test_check_command(tmp_path, capsys):
    config_file = tmp_path / "pizza.yaml"
    config_file.write_text(PIZZA_YAML)
    main(["check", str(config_file)])
    output = capsys.readouterr().out
    assert "valid" in output
    assert "order, o" in output


def test_check_command_missing_file(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main(["c", str(tmp_path / "missing.yaml")])
    assert exc_info.value.code == 1


def test_fallback_program():
    program = get_fallback_program()
    assert program.name == "argot"
    assert program.get_command("c") is program.get_command("check")


def test_shell_command(tmp_path, monkeypatch, capsys):
    config_file = tmp_path / "pizza.yaml"
    config_file.write_text(PIZZA_YAML)
    session = SimpleNamespace(lines=["order Marco -c"])

    def prompt(message, completer=None):
        if not session.lines:
            raise EOFError
        return session.lines.pop(0)

    session.prompt = prompt
    monkeypatch.setattr("argot.program.PromptSession", lambda: session)
    main(["shell", str(config_file)])
    output = capsys.readouterr().out
    assert '"Marco"' in output
    assert '"cheese": true' in output
