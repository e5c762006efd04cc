from factory_di.container import Container
from factory_di.declarations import (
    INFER,
    FactoryDeclaration,
    InjectionRequest,
    PlaceholderArgument,
    declare,
)
from factory_di.exceptions import (
    FactoryDICyclicDependencyError,
    FactoryDIError,
    FactoryDIInvalidInjectError,
    FactoryDIInvalidItemNameError,
    FactoryDIInvalidRegistrationError,
    FactoryDIMissingRegisterSourceError,
    FactoryDINotRegisteredError,
    FactoryDIParameterCountError,
    FactoryDIPlaceholderMissingError,
    FactoryDIResolveError,
)
from factory_di.settings import FactoryDISettings

__all__ = [
    "INFER",
    "Container",
    "FactoryDICyclicDependencyError",
    "FactoryDIError",
    "FactoryDIInvalidInjectError",
    "FactoryDIInvalidItemNameError",
    "FactoryDIInvalidRegistrationError",
    "FactoryDIMissingRegisterSourceError",
    "FactoryDINotRegisteredError",
    "FactoryDIParameterCountError",
    "FactoryDIPlaceholderMissingError",
    "FactoryDIResolveError",
    "FactoryDISettings",
    "FactoryDeclaration",
    "InjectionRequest",
    "PlaceholderArgument",
    "declare",
]
