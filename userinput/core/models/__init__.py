"""Field descriptor models."""

from .field import (
    AnyField,
    Choice,
    DIVIDER_FIELD,
    FieldDescriptor,
    FieldKind,
    PasswordField,
    SPACE_FIELD,
    CHOICE_KINDS,
    SIMPLE_KINDS,
    TEXT_KINDS,
)

__all__ = [
    "AnyField",
    "Choice",
    "DIVIDER_FIELD",
    "FieldDescriptor",
    "FieldKind",
    "PasswordField",
    "SPACE_FIELD",
    "CHOICE_KINDS",
    "SIMPLE_KINDS",
    "TEXT_KINDS",
]
