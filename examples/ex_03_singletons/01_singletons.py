"""Singletons and plain values.

Factories declared with ``singleton=True`` (or registered with
``force_singleton=True``) run once; later resolves return the cached value
until ``clear_singletons()`` is called. Non-callable values are registered as
singletons that return the value itself.
"""

from __future__ import annotations

from itertools import count

from factory_di import Container, declare

_connection_ids = count(1)


@declare(inject=["dsn"], singleton=True)
def make_connection(dsn: str) -> dict[str, object]:
    return {"id": next(_connection_ids), "dsn": dsn}


def make_request_id() -> int:
    return next(_connection_ids)


def main() -> None:
    container = Container(register_source=__file__, skip_trace_errors=True)
    container.register("dsn", "sqlite:///app.db")
    container.register("connection", make_connection)
    container.register("request_id", make_request_id)

    first = container.resolve("connection")
    second = container.resolve("connection")
    print(f"same_connection={first is second}")  # => same_connection=True
    print(f"connection={first['id']} {first['dsn']}")  # => connection=1 sqlite:///app.db

    print(f"request_ids={container.resolve('request_id')},{container.resolve('request_id')}")  # => request_ids=2,3

    container.clear_singletons()
    third = container.resolve("connection")
    print(f"after_clear={third['id']} same={third is first}")  # => after_clear=4 same=False


if __name__ == "__main__":
    main()
