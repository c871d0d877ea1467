# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Builds an Argot `Program` from a YAML or TOML definition file.

Example (YAML):

    name: pizza
    version: 1.0.0
    description: Order pizza from the command line
    epilog: Copyright 2025
    commands:
      - spec: "order.o <name> --tries [tries:number:2]"
        description: Order a pizza
        action: pizza.actions.order
        options:
          - spec: "--size, -s <size>"
            help: Pizza size
            choices: [small, medium, large]
            default: medium
          - spec: "--cheese.c"
            help: Add cheese
        when:
          - option: cheese
            requires: [size]
        min_options: 1
        examples:
          - usage: order Marco --size large
            description: A large pizza for Marco
"""
from __future__ import annotations

import importlib
import sys
from pathlib import Path
from typing import Any, Callable

import toml
import yaml
from pydantic import BaseModel, Field, field_validator

from argot.command import Command
from argot.console import console
from argot.logger import logger
from argot.program import Program
from argot.themes import OneColors
from argot.value_type import ValueType


def import_action(dotted_path: str) -> Callable[..., Any]:
    """Dynamically imports a callable from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        console.print(f"[{OneColors.DARK_RED}]❌ Invalid action path:[/] {dotted_path}")
        sys.exit(1)
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        console.print(
            f"[{OneColors.DARK_RED}]❌ Could not import '{dotted_path}': {error}[/]\n"
            f"[{OneColors.COMMENT_GREY}]Ensure the module is installed and discoverable "
            "via PYTHONPATH."
        )
        sys.exit(1)
    try:
        action = getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        console.print(
            f"[{OneColors.DARK_RED}]❌ Module '{module_path}' has no attribute "
            f"'{attr}': {error}[/]"
        )
        sys.exit(1)
    if not callable(action):
        console.print(f"[{OneColors.DARK_RED}]❌ '{dotted_path}' is not callable[/]")
        sys.exit(1)
    return action


class RawOption(BaseModel):
    """Raw option model for Argot configuration."""

    spec: str
    help: str = ""
    default: Any = None
    choices: list[Any] | None = None
    required: bool = False
    type: ValueType | None = None
    depends_on: list[str] = Field(default_factory=list)

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, value: Any) -> ValueType | None:
        if value is None or isinstance(value, ValueType):
            return value
        return ValueType(value)


class RawWhen(BaseModel):
    option: str
    requires: list[str]
    converse: bool = False

    @field_validator("requires", mode="before")
    @classmethod
    def validate_requires(cls, value: Any) -> list[str]:
        return [value] if isinstance(value, str) else value


class RawExample(BaseModel):
    usage: str
    description: str = ""


class RawCommand(BaseModel):
    """Raw command model for Argot configuration."""

    spec: str = ""
    description: str = ""
    aliases: list[str] = Field(default_factory=list)
    action: str | None = None
    options: list[RawOption] = Field(default_factory=list)
    defaults: dict[str, Any] = Field(default_factory=dict)
    demand: list[str] = Field(default_factory=list)
    when: list[RawWhen] = Field(default_factory=list)
    min_options: int | None = None
    max_options: int | None = None
    min_arguments: int | None = None
    max_arguments: int | None = None
    exclusive_bounds: bool = False
    examples: list[RawExample] = Field(default_factory=list)

    def apply(self, command: Command) -> Command:
        """Apply everything after the spec string to a registered command."""
        for raw_option in self.options:
            command.add_option(
                raw_option.spec,
                raw_option.help,
                default=raw_option.default,
                choices=raw_option.choices,
                required=raw_option.required,
                value_type=raw_option.type,
                depends_on=raw_option.depends_on or None,
            )
        for name, value in self.defaults.items():
            command.default(name, value)
        if self.demand:
            command.demand(*self.demand)
        for rule in self.when:
            command.when(rule.option, rule.requires, converse=rule.converse)
        if self.min_options is not None:
            command.min_options(self.min_options, self.exclusive_bounds)
        if self.max_options is not None:
            command.max_options(self.max_options, self.exclusive_bounds)
        if self.min_arguments is not None:
            command.min_arguments(self.min_arguments, self.exclusive_bounds)
        if self.max_arguments is not None:
            command.max_arguments(self.max_arguments, self.exclusive_bounds)
        for example in self.examples:
            command.example(example.usage, example.description)
        if self.action:
            command.action(import_action(self.action))
        return command


class ProgramConfig(BaseModel):
    """Argot program configuration model."""

    name: str
    version: str = ""
    description: str = ""
    license: str = ""
    epilog: str = ""
    strict: bool = False
    default_command: RawCommand | None = None
    commands: list[RawCommand] = Field(default_factory=list)

    @field_validator("version", mode="before")
    @classmethod
    def validate_version(cls, value: Any) -> str:
        return "" if value is None else str(value)

    def to_program(self) -> Program:
        program = Program(
            name=self.name,
            version=self.version,
            description=self.description,
            license=self.license,
            epilog=self.epilog,
            strict=self.strict,
        )
        if self.default_command is not None:
            root = program.command(self.default_command.spec, self.default_command.description)
            if root is not program.root:
                raise ValueError("default_command spec must not start with a command name")
            self.default_command.apply(root)
        for raw_command in self.commands:
            if not raw_command.spec:
                raise ValueError("Each command needs a non-empty spec")
            command = program.command(
                raw_command.spec, raw_command.description, aliases=raw_command.aliases
            )
            raw_command.apply(command)
        return program


def loader(file_path: Path | str) -> Program:
    """
    Load an Argot program definition from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the definition file.

    Returns:
        Program: The configured program.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file format is unsupported or the content is invalid.
        SchemaError: If a spec string or option definition is invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(config_file)
        elif suffix == ".toml":
            raw_config = toml.load(config_file)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    if not isinstance(raw_config, dict):
        raise ValueError(
            "Configuration file must contain a dictionary describing the program.\n"
            "Example:\n"
            "name: 'pizza'\n"
            "commands:\n"
            "  - spec: 'order.o <name>'\n"
            "    description: 'Order a pizza'"
        )

    logger.debug("Loading program definition from '%s'", path)
    return ProgramConfig(**raw_config).to_program()
