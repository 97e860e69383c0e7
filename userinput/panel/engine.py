"""Collection engine: drives a panel's fields against the variable store.

One engine call is one pass. Every pass recompiles the panel from its
spec node (applicability gates, then the specification reader) and then
runs in one of three modes:

- Interactive: prompt for each field in order, then ask the end-of-panel
  question. Once a field fails, the remaining fields are not prompted.
- ApplyProperties: copy matching entries of a property map into the store.
- GenerateTemplate: write an empty ``name=`` line per variable.
"""

import logging
from dataclasses import dataclass
from typing import IO, Iterable, Mapping

from ..config import UserInputConfig, get_config
from ..core.conditions import ConditionEvaluator
from ..core.errors import FactoryError
from ..core.factory import ObjectFactory, run_processor
from ..core.models import (
    AnyField,
    Choice,
    CHOICE_KINDS,
    FieldDescriptor,
    FieldKind,
    PasswordField,
    SIMPLE_KINDS,
    TEXT_KINDS,
)
from ..core.store import VariableStore, VariableSubstitutor
from ..core.tree import SpecNode
from .applicability import Applicability
from .console import EndAction, PanelConsole
from .properties import write_template
from .reader import SpecificationReader
from .validators import default_factory

logger = logging.getLogger(__name__)

CANCEL = -1


# =============================================================================
# Modes
# =============================================================================


@dataclass(frozen=True)
class Interactive:
    console: PanelConsole


@dataclass(frozen=True)
class ApplyProperties:
    properties: Mapping[str, str]


@dataclass(frozen=True)
class GenerateTemplate:
    sink: IO[str]


Mode = Interactive | ApplyProperties | GenerateTemplate


# =============================================================================
# Engine
# =============================================================================


class CollectionEngine:
    """Collects values for one panel into a shared VariableStore.

    Args:
        panel: The panel spec node
        store: Variable store, mutated in place
        selected_packs: Names of packs selected for installation
        factory: Resolves processors and validators
        conditions: Evaluates field ``conditionid`` gates
        config: Console/default settings (global config if omitted)
        platform_family: Overrides the detected OS family
    """

    def __init__(
        self,
        panel: SpecNode,
        store: VariableStore,
        *,
        selected_packs: Iterable[str] | None = None,
        factory: ObjectFactory | None = None,
        conditions: ConditionEvaluator | None = None,
        config: UserInputConfig | None = None,
        platform_family: str | None = None,
    ):
        self.panel = panel
        self.store = store
        self.config = config or get_config()
        self.selected_packs = list(
            selected_packs if selected_packs is not None else self.config.defaults.packs
        )
        self.factory = factory or default_factory()
        self.conditions = conditions
        self.platform_family = platform_family or self.config.defaults.platform or None
        self.substitutor = VariableSubstitutor(store)

    # ── Compilation ──

    def collect(self) -> list[AnyField] | None:
        """Compile the panel's applicable fields.

        Returns:
            Fresh descriptors in document order, or None if the panel is
            not applicable to the selected packs / running OS.
        """
        applicability = Applicability(
            self.selected_packs,
            self.platform_family,
            self.conditions,
            self.store,
        )
        reader = SpecificationReader(
            self.substitutor,
            self.factory,
            special_separator=self.config.defaults.special_separator,
        )
        fields = reader.read_fields(self.panel, applicability)
        if fields is None:
            logger.info("Panel %s not applicable, skipping", self.panel.get("id", ""))
        return fields

    # ── Entry points ──

    def run(self, mode: Mode) -> bool:
        if isinstance(mode, Interactive):
            return self.run_console(mode.console)
        if isinstance(mode, ApplyProperties):
            return self.run_from_properties(mode.properties)
        if isinstance(mode, GenerateTemplate):
            return self.run_generate_properties(mode.sink)
        raise TypeError(f"Unknown collection mode: {mode!r}")

    def run_from_properties(self, properties: Mapping[str, str]) -> bool:
        """Write every property that names a field variable into the store."""
        for field in self.collect() or []:
            if field.variable and field.variable in properties:
                self.store.set(field.variable, properties[field.variable])
        return True

    def run_generate_properties(self, sink: IO[str]) -> bool:
        """Write ``name=`` for every field variable, in compiled order."""
        fields = self.collect() or []
        write_template((f.variable for f in fields if f.variable), sink)
        return True

    def run_console(self, console: PanelConsole) -> bool:
        """Run the panel interactively.

        Field failures only suppress the remaining fields; the end-of-panel
        question is always asked and its answer is the result.
        """
        fields = self.collect()
        if fields is None:
            return True
        while True:
            if not self.process_fields(fields, console):
                logger.debug("Panel %s: a field failed", self.panel.get("id", ""))
            action = console.prompt_end_panel()
            if action is EndAction.REDISPLAY:
                fields = self.collect() or []
                continue
            return action is EndAction.CONTINUE

    def process_fields(self, fields: list[AnyField], console: PanelConsole) -> bool:
        """Process fields in order until one fails.

        Fields after the first failure are not processed at all.
        """
        status = True
        for field in fields:
            if not status:
                logger.debug("Not prompting %s after earlier failure", field.kind.value)
                continue
            status = self.process_field(field, console)
        return status

    def process_field(self, field: AnyField, console: PanelConsole) -> bool:
        if isinstance(field, PasswordField):
            return self.process_password_field(field, console)
        if field.kind in TEXT_KINDS:
            return self.process_text_field(field, console)
        if field.kind in CHOICE_KINDS:
            return self.process_choice_field(field, console)
        if field.kind is FieldKind.CHECK:
            return self.process_check_field(field, console)
        if field.kind in SIMPLE_KINDS:
            return self.process_simple_field(field, console)
        logger.warning("No console handler for %s field", field.kind.value)
        return False

    # ── Per-kind procedures ──

    def process_simple_field(self, field: FieldDescriptor, console: PanelConsole) -> bool:
        console.println(self.substitutor.expand(field.display_text))
        return True

    def process_text_field(
        self,
        field: FieldDescriptor,
        console: PanelConsole,
        *,
        hidden: bool = False,
    ) -> bool:
        value = self._read_text(field, console, hidden=hidden)
        if value is None:
            return False
        self.store.set(field.variable, value)
        return True

    def _read_text(
        self, field: FieldDescriptor, console: PanelConsole, *, hidden: bool = False
    ) -> str | None:
        """Prompt for a text value, re-prompting while validators reject it."""
        if not field.variable:
            logger.warning("Text field without a variable")
            return None
        if not field.choices:
            logger.warning("No 'spec' element defined in %s field", field.kind.value)
            return None

        current = self.store.get(field.variable)
        if current is None:
            current = field.default_value or ""
        if current:
            current = self.substitutor.expand(current)

        shown = "*" * len(current) if hidden and current else current
        while True:
            if hidden and self.config.console.hide_passwords:
                answer = console.prompt_password(f"{field.label} [{shown}] ")
            else:
                answer = console.prompt(f"{field.label} [{shown}] ")
            if answer is None:
                return None
            value = answer.strip() or current
            failed = _first_failure(field.validators, value)
            if failed is None:
                return self._process_value(field.processor, value)
            console.println(failed.message or f"Invalid value for {field.variable}")

    def process_choice_field(self, field: FieldDescriptor, console: PanelConsole) -> bool:
        """Combo and radio fields."""
        if not field.variable:
            logger.warning("%s field without a variable", field.kind.value)
            return False
        compiled = field.selected_index
        field.selected_index = -1

        if field.display_text:
            console.println(self.substitutor.expand(field.display_text))
        if not field.choices:
            logger.warning("No 'spec' element defined in %s field", field.kind.value)
            return False

        current = self.store.get(field.variable)
        if current is not None:
            # A stored value wins over any spec-declared selection
            field.selected_index = _index_of_value(field.choices, current)
        else:
            field.selected_index = compiled

        marker = self.config.console.selected_marker
        for i, choice in enumerate(field.choices):
            mark = marker if field.selected_index == i else " "
            console.println(f"{i}  [{mark}] {choice.text or ''}")

        value = console.prompt_int(
            "input selection:", 0, len(field.choices) - 1, field.selected_index, CANCEL
        )
        if value == CANCEL:
            return False
        field.selected_index = value
        self.store.set(field.variable, field.choices[value].value or "")
        return True

    def process_check_field(self, field: FieldDescriptor, console: PanelConsole) -> bool:
        if not field.variable:
            logger.warning("Check field without a variable")
            return False
        if not field.choices:
            logger.warning("No 'spec' element defined in check field")
            return False

        current = self.store.get(field.variable) or ""
        field.selected_index = _index_of_value(field.choices, current)
        if field.selected_index == -1:
            default_set = Choice(set=field.default_value).is_selected(self.substitutor)
            field.selected_index = 1 if default_set else 0

        true_choice = field.choices[-1]
        mark = self.config.console.selected_marker if field.selected_index == 1 else " "
        console.println(f"  [{mark}] {true_choice.text or ''}")

        value = console.prompt_int(
            "input 1 to select, 0 to deselect:", 0, 1, field.selected_index, CANCEL
        )
        if value == CANCEL:
            return False
        field.selected_index = value
        self.store.set(field.variable, field.choices[value].value or "")
        return True

    def process_password_field(self, field: PasswordField, console: PanelConsole) -> bool:
        """Prompt each component in order; the first failure fails the field."""
        if field.display_text:
            console.println(self.substitutor.expand(field.display_text))
        while True:
            values = []
            for component in field.inputs:
                value = self._read_text(component, console, hidden=True)
                if value is None:
                    return False
                self.store.set(component.variable, value)
                values.append(value)
            if not values:
                return False

            failed = _first_failure(field.validators, values)
            if failed is None:
                if field.processor:
                    self.store.set(
                        field.variable, self._process_value(field.processor, values[0])
                    )
                return True
            console.println(failed.message or f"Invalid value for {field.variable}")

    def _process_value(self, class_name: str | None, value: str) -> str:
        """Pass an entered value through the field's processor.

        Processor failures are logged and the entered value is kept.
        """
        if not class_name:
            return value
        try:
            return run_processor(self.factory.create(class_name), value)
        except FactoryError as e:
            logger.warning("Cannot create value processor %s: %s", class_name, e)
        except Exception as e:
            logger.warning("Value processor %s failed: %s", class_name, e)
        return value


def _index_of_value(choices: list[Choice], value: str) -> int:
    """Index of the first choice whose non-empty value equals ``value``."""
    for i, choice in enumerate(choices):
        if choice.value and choice.value == value:
            return i
    return -1


def _first_failure(validators, value):
    for validator in validators:
        if not validator.is_valid(value):
            return validator
    return None
