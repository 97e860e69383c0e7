"""Built-in field validators and ``validator`` element binding.

A field may declare validators::

    <validator class="RegularExpressionValidator" txt="Digits only">
      <param name="pattern" value="[0-9]+"/>
    </validator>

``class`` is resolved through the ObjectFactory, so short aliases for the
built-ins below work alongside ``module:Class`` import paths.
"""

import logging
import re

from ..core.factory import FieldValidator, ObjectFactory
from ..core.tree import SpecNode

logger = logging.getLogger(__name__)


class NotEmptyValidator:
    """Value must be non-blank."""

    def validate(self, value, parameters):
        values = value if isinstance(value, list) else [value]
        return all(v is not None and v.strip() != "" for v in values)


class RegularExpressionValidator:
    """Value must fully match the ``pattern`` parameter."""

    def validate(self, value, parameters):
        pattern = parameters.get("pattern")
        if pattern is None:
            logger.warning("RegularExpressionValidator without a 'pattern' param")
            return False
        values = value if isinstance(value, list) else [value]
        return all(re.fullmatch(pattern, v or "") is not None for v in values)


class LengthValidator:
    """Value length must lie within the ``min``/``max`` parameters."""

    def validate(self, value, parameters):
        low = int(parameters.get("min", 0))
        high = parameters.get("max")
        values = value if isinstance(value, list) else [value]
        for v in values:
            length = len(v or "")
            if length < low or (high is not None and length > int(high)):
                return False
        return True


class PasswordEqualityValidator:
    """All password components must be identical."""

    def validate(self, value, parameters):
        values = value if isinstance(value, list) else [value]
        return len(set(values)) <= 1


BUILTIN_VALIDATORS = {
    "NotEmptyValidator": NotEmptyValidator,
    "RegularExpressionValidator": RegularExpressionValidator,
    "LengthValidator": LengthValidator,
    "PasswordEqualityValidator": PasswordEqualityValidator,
}


def default_factory() -> ObjectFactory:
    """An ObjectFactory with the built-in validators registered."""
    return ObjectFactory(BUILTIN_VALIDATORS)


def read_validators(field: SpecNode, factory: ObjectFactory) -> list[FieldValidator]:
    """Bind every ``validator`` child of a field node."""
    validators = []
    for element in field.children_named("validator"):
        class_name = element.get("class")
        if not class_name:
            logger.warning("Ignoring validator without 'class' on %s", field)
            continue
        parameters = {
            param.get("name", ""): param.get("value", "")
            for param in element.children_named("param")
            if param.get("name")
        }
        validators.append(
            FieldValidator(class_name, parameters, element.get("txt"), factory)
        )
    return validators
