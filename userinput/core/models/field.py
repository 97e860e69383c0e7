"""Field descriptor models for userinput panels.

A panel spec compiles into an ordered list of field descriptors. Each
descriptor is one collectible or decorative unit:

- Decorative: staticText, title, divider, space (no variable)
- Free text: text, file, dir, rule (rule compiles to a text descriptor)
- Choice-bearing: combo, radio, check
- Composite: password (ordered text sub-descriptors sharing one variable)

Descriptors are rebuilt on every engine pass and discarded afterwards;
only the variable store outlives a pass.
"""

from enum import Enum
from typing import Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field

from ..factory import FieldValidator


TRUE = "true"


class Expander(Protocol):
    def expand(self, text: str) -> str: ...


# =============================================================================
# Field kinds
# =============================================================================


class FieldKind(str, Enum):
    STATIC_TEXT = "staticText"
    TITLE = "title"
    DIVIDER = "divider"
    SPACE = "space"
    TEXT = "text"
    FILE = "file"
    DIR = "dir"
    RULE = "rule"
    COMBO = "combo"
    RADIO = "radio"
    CHECK = "check"
    PASSWORD = "password"


SIMPLE_KINDS = frozenset(
    {FieldKind.STATIC_TEXT, FieldKind.TITLE, FieldKind.DIVIDER, FieldKind.SPACE}
)
TEXT_KINDS = frozenset({FieldKind.TEXT, FieldKind.FILE, FieldKind.DIR, FieldKind.RULE})
CHOICE_KINDS = frozenset({FieldKind.COMBO, FieldKind.RADIO})


# =============================================================================
# Choice
# =============================================================================


class Choice(BaseModel):
    """One selectable option: display text, stored value and raw 'set' marker."""

    model_config = ConfigDict(frozen=True)

    text: str | None = None
    value: str | None = None
    set: str | None = Field(
        default=None, description="Raw 'is selected' marker, before substitution"
    )

    def is_selected(self, substitutor: Expander | None = None) -> bool:
        """Check whether the marker expands to "true" (case-insensitive)."""
        if self.set is None:
            return False
        marker = self.set
        if marker and substitutor is not None:
            marker = substitutor.expand(marker)
        return marker.lower() == TRUE


# =============================================================================
# Field descriptors
# =============================================================================


class FieldDescriptor(BaseModel):
    """A compiled field.

    ``selected_index`` is the only mutable state; the engine resets it to -1
    before recomputing a selection so nothing leaks between passes.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    kind: FieldKind
    variable: str | None = None
    default_value: str | None = None
    choices: list[Choice] = Field(default_factory=list)
    display_text: str | None = None
    selected_index: int = -1
    validators: list[FieldValidator] = Field(default_factory=list)
    conditionid: str | None = None
    processor: str | None = Field(
        default=None, description="Class identifier run over the entered value"
    )

    @property
    def label(self) -> str:
        """Prompt label of the first choice, or empty string."""
        if self.choices and self.choices[0].text:
            return self.choices[0].text
        return ""


class PasswordField(BaseModel):
    """Multi-step password field: one text sub-descriptor per component."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: Literal[FieldKind.PASSWORD] = FieldKind.PASSWORD
    variable: str | None = None
    display_text: str | None = None
    inputs: list[FieldDescriptor] = Field(default_factory=list)
    validators: list[FieldValidator] = Field(default_factory=list)
    conditionid: str | None = None
    processor: str | None = Field(
        default=None, description="Class identifier run over the confirmed value"
    )

    @property
    def default_value(self) -> str | None:
        return self.inputs[0].default_value if self.inputs else None


AnyField = FieldDescriptor | PasswordField


class _SentinelField(FieldDescriptor):
    model_config = ConfigDict(frozen=True)


# Shared immutable sentinels; they carry no variable and no state.
SPACE_FIELD = _SentinelField(kind=FieldKind.SPACE, display_text="", selected_index=0)
DIVIDER_FIELD = _SentinelField(
    kind=FieldKind.DIVIDER, display_text="-" * 42, selected_index=0
)
