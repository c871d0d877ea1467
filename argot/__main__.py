"""
Argot CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import os
import sys
from pathlib import Path
from typing import Any

from argot.config import loader
from argot.console import console
from argot.exceptions import ArgotError
from argot.program import Program
from argot.result import ParseResult
from argot.themes import OneColors
from argot.utils import setup_logging


def find_argot_config() -> Path | None:
    candidates = [
        Path(os.environ["ARGOT_CONFIG"]) if os.environ.get("ARGOT_CONFIG") else None,
        Path.cwd() / "argot.yaml",
        Path.cwd() / "argot.toml",
        Path.cwd() / ".argot.yaml",
        Path.cwd() / ".argot.toml",
        Path.home() / ".config" / "argot" / "argot.yaml",
        Path.home() / ".config" / "argot" / "argot.toml",
    ]
    return next((p for p in candidates if p is not None and p.exists()), None)


def bootstrap() -> Path | None:
    config_path = find_argot_config()
    if config_path and str(config_path.parent) not in sys.path:
        sys.path.insert(0, str(config_path.parent))
    return config_path


def load_program(path: Path) -> Program:
    try:
        return loader(path)
    except (ArgotError, ValueError, TypeError, FileNotFoundError) as error:
        console.print(f"[{OneColors.DARK_RED}]❌ Could not load '{path}':[/] {error}")
        sys.exit(1)


def check_definition(result: ParseResult) -> None:
    """Validate a definition file and print the program it describes."""
    program = load_program(Path(result["path"]))
    console.print(f"[{OneColors.GREEN_b}]✔ {result['path']} is valid[/]\n")
    program.print_help()


def open_shell(result: ParseResult) -> None:
    """Load a definition file and run its commands from an interactive prompt."""
    program = load_program(Path(result["path"]))
    program.interact(on_result=print_result)


def get_fallback_program() -> Program:
    """Program used when no definition file is found."""
    program = Program(
        name="argot",
        description="Parse command lines against an argot.yaml or argot.toml definition.",
        epilog="Set ARGOT_CONFIG or place argot.yaml in the current directory.",
    )
    program.command("check.c <path>", "Validate a definition file").action(
        check_definition
    ).example("argot check ./argot.yaml", "Validate and show the program help")
    program.command("shell.sh <path>", "Run commands from a definition interactively").action(
        open_shell
    )
    program.root.action(lambda _: program.print_help())
    return program


def print_result(result: Any) -> None:
    if isinstance(result, ParseResult):
        console.print_json(data=result.as_dict(), default=str)
    elif result is not None:
        console.print(result)


def main(argv: list[str] | None = None) -> Any:
    setup_logging()
    bootstrap_path = bootstrap()
    if not bootstrap_path:
        program = get_fallback_program()
    else:
        program = load_program(bootstrap_path)

    result = program.run(sys.argv[1:] if argv is None else argv)
    print_result(result)
    return result


if __name__ == "__main__":
    main()
