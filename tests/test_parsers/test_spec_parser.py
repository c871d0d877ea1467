import pytest

from argot.exceptions import SchemaError
from argot.spec_parser import (
    FlagSpec,
    Placeholder,
    parse_command_spec,
    parse_option_spec,
    parse_placeholder,
)
from argot.value_type import ValueType


def test_option_with_short_alias():
    spec = parse_option_spec("--size, -s <size>")
    assert isinstance(spec, FlagSpec)
    assert spec.name == "size"
    assert spec.flags == ("--size", "-s")
    assert spec.placeholder == Placeholder(name="size")
    assert not spec.is_boolean


def test_short_flag_first_is_reordered():
    spec = parse_option_spec("-s | --size <size>")
    assert spec.flags == ("--size", "-s")
    assert spec.name == "size"


def test_bare_flag_is_boolean():
    spec = parse_option_spec("--cheese.c")
    assert spec.flags == ("--cheese", "-c")
    assert spec.is_boolean


def test_dashes_become_underscores():
    spec = parse_option_spec("--dry-run")
    assert spec.name == "dry_run"
    assert spec.flags == ("--dry-run",)


def test_typed_placeholder_with_default():
    spec = parse_option_spec("--tries [tries:number:2]")
    assert spec.placeholder.value_type == ValueType.NUMBER
    assert spec.placeholder.default == "2"
    assert spec.placeholder.required is False


def test_single_placeholder_is_positional():
    spec = parse_option_spec("<name:number:35>")
    assert isinstance(spec, Placeholder)
    assert spec.name == "name"
    assert spec.value_type == ValueType.NUMBER
    assert spec.default == "35"
    assert spec.required is True


@pytest.mark.parametrize("text", ["[files...]", "[files:string...]", "[files...:string]"])
def test_variadic_placeholder(text):
    placeholder = parse_placeholder(text)
    assert placeholder.name == "files"
    assert placeholder.variadic
    assert not placeholder.required


def test_placeholder_help_text():
    placeholder = parse_placeholder("<when:date::Delivery time>")
    assert placeholder.value_type == ValueType.DATE
    assert placeholder.default is None
    assert placeholder.help == "Delivery time"


@pytest.mark.parametrize(
    "spec",
    [
        "",
        "size",
        "--size <a> <b>",
        "--size <size> --sauce",
        "-sz",
        "--size <size:bogus>",
        "--size <size",
        "--tags <tags...>",
        "--",
        "--bad!name",
    ],
)
def test_invalid_option_specs(spec):
    with pytest.raises(SchemaError):
        parse_option_spec(spec)


def test_command_spec():
    spec = parse_command_spec("order.o <name> --tries [tries:number:2]")
    assert spec.name == "order"
    assert spec.aliases == ("o",)
    assert [positional.name for positional in spec.positionals] == ["name"]
    (tries,) = spec.options
    assert tries.flags == ("--tries",)
    assert tries.placeholder.value_type == ValueType.NUMBER


def test_command_spec_boolean_and_value_options():
    spec = parse_command_spec("deliver --express.e --address <address> [note]")
    assert [option.name for option in spec.options] == ["express", "address"]
    assert spec.options[0].is_boolean
    assert spec.options[1].placeholder.name == "address"
    assert [positional.name for positional in spec.positionals] == ["note"]


def test_command_spec_without_name_targets_default_command():
    spec = parse_command_spec("<file> --verbose")
    assert spec.name is None
    assert spec.positionals[0].name == "file"


def test_command_spec_rejects_two_variadics():
    with pytest.raises(SchemaError):
        parse_command_spec("copy [sources...] [targets...]")


def test_command_spec_rejects_bare_words():
    with pytest.raises(SchemaError):
        parse_command_spec("order name")


def test_placeholder_help_may_contain_spaces():
    spec = parse_command_spec("order <name:string::Who the pizza is for> --size <size::medium:Pizza size>")
    assert spec.positionals[0].help == "Who the pizza is for"
    assert spec.options[0].placeholder.default == "medium"
    assert spec.options[0].placeholder.help == "Pizza size"
