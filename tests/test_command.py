import pytest

from argot.command import Command, CountBound
from argot.exceptions import SchemaError
from argot.option import Option, Positional
from argot.value_type import ValueType


@pytest.fixture
def command():
    return (
        Command("order", aliases=["o"], description="Order a pizza", program_name="pizza")
        .arg("<name>")
        .option("--size, -s <size>", "Pizza size", choices=["small", "medium", "large"])
        .option("--cheese.c", "Add cheese")
        .option("--tries [tries:number:2]", "Delivery attempts")
    )


def test_option_schema(command):
    size = command.get_option("size")
    assert isinstance(size, Option)
    assert size.flags == ("--size", "-s")
    assert size.aliases == ("-s",)
    assert size.value_type == ValueType.STRING
    assert size.choices == ("small", "medium", "large")
    assert size.required is False
    assert size.expects_value


def test_boolean_option_defaults_to_false(command):
    cheese = command.get_option("cheese")
    assert cheese.is_boolean
    assert cheese.default is False
    assert not cheese.expects_value


def test_typed_default_is_coerced(command):
    tries = command.get_option("tries")
    assert tries.default == 2
    assert tries.value_required is False


def test_add_option_with_placeholder_registers_positional():
    command = Command("greet")
    positional = command.add_option("<age:number:35>")
    assert isinstance(positional, Positional)
    assert positional.default == 35
    assert command.positionals == (positional,)


def test_resolve_flag(command):
    assert command.resolve_flag("-s") == (command.get_option("size"), False)
    assert command.resolve_flag("--no-cheese") == (command.get_option("cheese"), True)
    assert command.resolve_flag("--no-size") == (None, False)
    assert command.resolve_flag("--bogus") == (None, False)


def test_help_flags(command):
    assert command.is_help_flag("--help")
    assert command.is_help_flag("-h")
    command.option("--height, -h <height:number>")
    assert not command.is_help_flag("-h")


@pytest.mark.parametrize(
    "spec, kwargs",
    [
        ("--sauce, -s <sauce>", {}),
        ("--help", {}),
        ("--count <count:number>", {"default": "abc"}),
        ("--crust <crust>", {"choices": ["thin"], "default": "thick"}),
        ("--crust <crust:number>", {"choices": ["thin"]}),
        ("--crust <crust>", {"choices": "thin"}),
        ("--extra", {"choices": ["a"]}),
        ("--extra", {"required": True}),
        ("--cheese-again.c", {}),
        ("--no-cheese", {}),
        ("<size>", {}),
        ("[help]", {}),
    ],
)
def test_invalid_options(command, spec, kwargs):
    with pytest.raises(SchemaError):
        command.option(spec, **kwargs)


def test_required_positional_after_optional():
    command = Command("copy").arg("[source]")
    with pytest.raises(SchemaError):
        command.arg("<target>")


def test_positional_after_variadic():
    command = Command("copy").arg("[sources...]")
    with pytest.raises(SchemaError):
        command.arg("[target]")


def test_bare_name_arg_is_required():
    command = Command("greet").arg("who", "Person to greet")
    (who,) = command.positionals
    assert who.required
    assert who.help == "Person to greet"


def test_variadic_default_is_a_list():
    command = Command("sum").arg("[numbers...:number]", default=["1", 2])
    assert command.get_positional("numbers").default == [1, 2]
    command.default("numbers", "5")
    assert command.get_positional("numbers").default == [5]


def test_default_by_name_or_flag(command):
    command.default("size", "large")
    assert command.get_option("size").default == "large"
    command.default("-s", "small")
    assert command.get_option("size").default == "small"
    with pytest.raises(SchemaError):
        command.default("size", "huge")
    with pytest.raises(SchemaError):
        command.default("bogus", "x")


def test_demand(command):
    command.demand("--size")
    assert command.get_option("size").required
    with pytest.raises(SchemaError):
        command.demand("cheese")


def test_when(command):
    command.when("cheese", "size", converse=True)
    assert command.get_option("cheese").depends_on == ("size",)
    assert command.get_option("size").depends_on == ("cheese",)
    with pytest.raises(SchemaError):
        command.when("cheese", "cheese")
    with pytest.raises(SchemaError):
        command.when("cheese", "bogus")
    with pytest.raises(SchemaError):
        command.when("name", "size")


@pytest.mark.parametrize("count", [-1, 1.5, True, "2"])
def test_invalid_bounds(command, count):
    with pytest.raises(SchemaError):
        command.min_options(count)


def test_count_bound():
    inclusive = CountBound(2)
    exclusive = CountBound(2, exclusive=True)
    assert inclusive.allows_min(2) and not exclusive.allows_min(2)
    assert inclusive.allows_max(2) and not exclusive.allows_max(2)
    assert exclusive.allows_min(3) and exclusive.allows_max(1)


def test_aliases_and_examples(command):
    command.alias("ord.or", "o").example("order Marco -c", "Cheese pizza")
    assert command.aliases == ["o", "ord", "or"]
    assert command.examples[0].description == "Cheese pizza"
    with pytest.raises(SchemaError):
        command.example("   ")
    with pytest.raises(SchemaError):
        command.alias("-x")


def test_action_must_be_callable(command):
    with pytest.raises(SchemaError):
        command.action("not callable")
    assert command.action(print).callback is print


def test_usage(command):
    assert command.usage() == "pizza order [options] <name>"
    command.demand("size")
    assert command.usage("pz", show_name=False) == "pz --size {small,medium,large} [options] <name>"


def test_suggest_flags(command):
    assert command.suggest_next(["--s"]) == ["--size"]
    assert "--help" in command.suggest_next(["--h"])


def test_suggest_choices(command):
    assert command.suggest_next(["--size"], cursor_at_end_of_token=True) == [
        "large",
        "medium",
        "small",
    ]
    assert command.suggest_next(["--size", "me"]) == ["medium"]


def test_suggest_skips_consumed_flags(command):
    suggestions = command.suggest_next(["-c"], cursor_at_end_of_token=True)
    assert "--cheese" not in suggestions
    assert "-c" not in suggestions
    assert "--size" in suggestions
