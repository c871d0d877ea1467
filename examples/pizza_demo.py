from argot import ParseResult, Program
from argot.console import console


def order(result: ParseResult) -> str:
    toppings = [name for name in ("cheese", "pepperoni") if result[name]]
    console.print(
        f"Ordering a [bold]{result['size']}[/] pizza for {result['name']} "
        f"with {', '.join(toppings) or 'no toppings'} "
        f"({result['tries']} tries)"
    )
    return result["name"]


program = (
    Program()
    .set_name("pizza")
    .set_version("1.0.0")
    .set_description("Order pizza from the command line")
    .set_license("MIT")
    .set_epilog("Copyright 2025 rtj.dev LLC")
)

(
    program.command("order.o <name> --tries [tries:number:2]", "Order a pizza")
    .option(
        "--size, -s <size>",
        "Pizza size",
        choices=["small", "medium", "large"],
        default="medium",
    )
    .option("--cheese.c", "Add cheese")
    .option("--pepperoni.p", "Add pepperoni")
    .when("pepperoni", "cheese")
    .max_options(4)
    .example("pizza order Marco -cp --size large", "A large cheese and pepperoni pizza")
    .action(order)
)

if __name__ == "__main__":
    program.run()
