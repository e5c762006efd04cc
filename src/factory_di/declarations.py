from factory_di._internal.declarations import (
    INFER,
    FactoryDeclaration,
    InjectionRequest,
    PlaceholderArgument,
    declare,
    get_declaration,
)

__all__ = [
    "INFER",
    "FactoryDeclaration",
    "InjectionRequest",
    "PlaceholderArgument",
    "declare",
    "get_declaration",
]
