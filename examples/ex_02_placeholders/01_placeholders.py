"""Placeholders: arguments the container does not inject.

Placeholder values come from ``resolve_args`` keyed by item name, or from the
``"common"`` bag offered to every factory. With ``as_factory=True`` the
container hands back a bound factory whose placeholders are filled per call.
"""

from __future__ import annotations

from factory_di import Container, declare


@declare(inject=["greeting", "name*", "punctuation*?"])
def make_message(greeting: str, name: str, punctuation: str = "!") -> str:
    return f"{greeting}, {name}{punctuation}"


def main() -> None:
    container = Container(register_source=__file__, skip_trace_errors=True)
    container.register("greeting", "Hello")
    container.register("message", make_message)

    print(container.resolve("message", {"message": {"name": "Ada"}}))  # => Hello, Ada!
    print(container.resolve("message", {"common": {"name": "Bob", "punctuation": "?"}}))  # => Hello, Bob?

    resolve_args = {"common": {"name": "common"}, "message": {"name": "specific"}}
    print(container.resolve("message", resolve_args))  # => Hello, specific!

    message_factory = container.resolve("message", as_factory=True)
    print(message_factory("Grace"))  # => Hello, Grace!
    print(message_factory(name="Linus", punctuation="."))  # => Hello, Linus.


if __name__ == "__main__":
    main()
