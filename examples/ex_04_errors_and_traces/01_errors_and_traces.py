"""Errors and resolution traces.

Every ``FactoryDIError`` carries the resolution history that led to it.
``str(error)`` renders the message followed by one ``at``/``registered in``
block per visited item, newest first.
"""

from __future__ import annotations

from factory_di import Container, FactoryDIError, declare


@declare(inject=["repository"], filename="service.py")
def make_service(repository: object) -> object:
    return repository


@declare(inject=["database"], filename="repository.py")
def make_repository(database: object) -> object:
    return database


@declare(inject=["ping"], filename="ping.py")
def make_ping(pong: object) -> object:
    return pong


@declare(inject=["ping"], filename="pong.py")
def make_pong(ping: object) -> object:
    return ping


def main() -> None:
    container = Container(register_source="registry.py")
    container.register("service", make_service)
    container.register("repository", make_repository)
    container.register("ping", make_pong)

    try:
        container.resolve("service")
    except FactoryDIError as error:
        print(f"error={type(error).__name__}")  # => error=FactoryDINotRegisteredError
        print(error.message)  # => FactoryDI Resolve Error: The item 'database' has not been registered.
        trace_lines = error.trace.strip().splitlines()
        print(trace_lines[0].strip())  # => at database (?)
        print(trace_lines[2].strip())  # => at repository (repository.py)
        print(trace_lines[3].strip())  # => registered in [registry.py]

    try:
        container.resolve("ping")
    except FactoryDIError as error:
        print(f"error={type(error).__name__}")  # => error=FactoryDICyclicDependencyError
        print(f"path={'>'.join(record.name for record in error.history)}")  # => path=ping>ping

    try:
        container.register("", make_ping)
    except FactoryDIError as error:
        print(error.message)  # => FactoryDI Register Error: No item name given.


if __name__ == "__main__":
    main()
