"""Plugin resolution for validators and choice processors.

Spec documents refer to plugins by a class identifier string. The factory
turns that identifier into a capability object:

- a registered alias (built-in validators register themselves here)
- a ``"package.module:attr"`` import path
- a dotted ``"package.module.Attr"`` import path

Classes are instantiated with no arguments; any other callable is
returned as-is so plain functions can act as processors.
"""

import importlib
import logging
from typing import Any, Callable, Protocol, runtime_checkable

from .errors import FactoryError

logger = logging.getLogger(__name__)


@runtime_checkable
class Processor(Protocol):
    """Produces a value (for choice lists: a ':'-delimited string)."""

    def process(self, value: str | None) -> str: ...


@runtime_checkable
class Validator(Protocol):
    """Checks a field value against a parameter map."""

    def validate(self, value: str, parameters: dict[str, str]) -> bool: ...


class ObjectFactory:
    """Resolve class identifiers to plugin instances."""

    def __init__(self, aliases: dict[str, Any] | None = None):
        self._aliases: dict[str, Any] = dict(aliases or {})

    def register(self, identifier: str, target: Any) -> None:
        """Register a class or callable under a short identifier."""
        self._aliases[identifier] = target

    def is_registered(self, identifier: str) -> bool:
        return identifier in self._aliases

    def create(self, identifier: str) -> Any:
        """Create the capability for an identifier.

        Raises:
            FactoryError: If the identifier is empty, cannot be imported,
                or the target cannot be instantiated.
        """
        if not identifier:
            raise FactoryError("Empty class identifier")

        target = self._aliases.get(identifier)
        if target is None:
            target = self._import(identifier)

        if isinstance(target, type):
            try:
                return target()
            except Exception as e:
                raise FactoryError(f"Cannot instantiate {identifier!r}: {e}") from e
        if callable(target):
            return target
        raise FactoryError(f"{identifier!r} is neither a class nor a callable")

    @staticmethod
    def _import(identifier: str) -> Any:
        if ":" in identifier:
            module_name, _, attr = identifier.partition(":")
        else:
            module_name, _, attr = identifier.rpartition(".")
        if not module_name or not attr:
            raise FactoryError(f"Cannot resolve class identifier {identifier!r}")
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise FactoryError(f"Cannot import {module_name!r}: {e}") from e
        try:
            obj: Any = module
            for part in attr.split("."):
                obj = getattr(obj, part)
        except AttributeError as e:
            raise FactoryError(f"{module_name!r} has no attribute {attr!r}") from e
        return obj


def run_processor(capability: Any, value: str | None = None) -> str:
    """Invoke a processor capability and return its string result."""
    if isinstance(capability, Processor):
        result = capability.process(value)
    elif callable(capability):
        result = capability() if value is None else capability(value)
    else:
        raise FactoryError(f"{capability!r} is not a processor")
    return "" if result is None else str(result)


class FieldValidator:
    """Binding of a validator class identifier to its parameters and message."""

    def __init__(
        self,
        class_name: str,
        parameters: dict[str, str] | None,
        message: str | None,
        factory: ObjectFactory,
    ):
        self.class_name = class_name
        self.parameters = parameters or {}
        self.message = message
        self.factory = factory

    def create(self) -> Validator:
        """Create the validator.

        Raises:
            FactoryError: If the class cannot be resolved or does not
                implement ``validate``.
        """
        validator = self.factory.create(self.class_name)
        if isinstance(validator, Validator):
            return validator
        if callable(validator):
            return _CallableValidator(validator)
        raise FactoryError(f"{self.class_name!r} does not implement validate()")

    def is_valid(self, value: str | list[str]) -> bool:
        """Validate a value; plugin failures count as invalid."""
        try:
            return bool(self.create().validate(value, self.parameters))
        except Exception as e:
            logger.warning("Validator %s failed: %s", self.class_name, e)
            return False

    def __repr__(self) -> str:
        return f"FieldValidator({self.class_name!r}, {self.parameters!r})"


class _CallableValidator:
    def __init__(self, func: Callable[..., Any]):
        self._func = func

    def validate(self, value, parameters):
        return self._func(value, parameters)
