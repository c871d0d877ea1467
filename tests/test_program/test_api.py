import pytest

from argot import add_option, parse, register_command, register_program, set_default
from argot.exceptions import CommandAlreadyExistsError, InvalidChoiceError, SchemaError
from argot.option import Option, Positional


@pytest.fixture
def program():
    program = register_program("pizza", "1.0.0", description="Order pizza")
    order = register_command(program, "order.o <name>", "Order a pizza")
    add_option(order, "--size, -s <size>", "Pizza size", choices=["small", "large"])
    add_option(order, "--cheese.c", "Add cheese")
    return program


def test_register_program_defaults():
    program = register_program("pizza", "1.0.0")
    assert program.description == ""
    assert program.license == ""
    assert program.epilog == ""
    assert program.commands == {}


def test_add_option_returns_schema(program):
    order = program.get_command("order")
    assert isinstance(add_option(order, "--crust <crust>"), Option)
    assert isinstance(add_option(order, "[notes]"), Positional)


def test_parse(program):
    result = parse(program, ["o", "Marco", "-c", "--size", "large"])
    assert result.command == "order"
    assert result.values["size"] == "large"
    assert result.values["cheese"] is True


def test_set_default(program):
    order = program.get_command("order")
    set_default(order, "size", "small")
    assert parse(program, ["order", "Marco"])["size"] == "small"
    with pytest.raises(SchemaError):
        set_default(order, "size", "huge")


def test_parse_error(program):
    with pytest.raises(InvalidChoiceError):
        parse(program, ["order", "Marco", "--size", "huge"])


def test_register_duplicate_command(program):
    with pytest.raises(CommandAlreadyExistsError):
        register_command(program, "order")
