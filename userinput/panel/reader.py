"""Compile panel spec field nodes into field descriptors.

Each ``field`` node has a ``type`` attribute selecting its kind and
usually a ``spec`` child carrying the kind-specific details. Compilation
may expand variables and invoke choice processors, but never touches the
variable store directly.

Configuration defects raise FieldConfigurationError; ``read_fields``
logs those and skips the field so the rest of the panel still compiles.
"""

import logging

from ..core.errors import FactoryError, FieldConfigurationError, LayoutError
from ..core.factory import ObjectFactory, run_processor
from ..core.models import (
    AnyField,
    Choice,
    DIVIDER_FIELD,
    FieldDescriptor,
    FieldKind,
    PasswordField,
    SPACE_FIELD,
)
from ..core.store import VariableSubstitutor
from ..core.tree import SpecNode
from .applicability import Applicability
from .layout import reconstruct
from .validators import default_factory, read_validators

logger = logging.getLogger(__name__)

FIELD = "field"
SPEC = "spec"
DESCRIPTION = "description"
CHOICE = "choice"
PWD = "pwd"
TXT = "txt"
SET = "set"
VALUE = "value"
VARIABLE = "variable"
TYPE = "type"
PROCESSOR = "processor"
LAYOUT = "layout"
RESULT_FORMAT = "resultFormat"
SPECIAL_SEPARATOR = "specialSeparator"


class SpecificationReader:
    """Compiles one field node at a time.

    Args:
        substitutor: Expands ``${var}`` references in defaults and markers
        factory: Resolves processor and validator class identifiers
        special_separator: Fallback separator for rule fields whose spec
            asks for ``specialSeparator`` without naming one
    """

    def __init__(
        self,
        substitutor: VariableSubstitutor,
        factory: ObjectFactory | None = None,
        special_separator: str = "",
    ):
        self.substitutor = substitutor
        self.factory = factory or default_factory()
        self.special_separator = special_separator
        self._compilers = {
            FieldKind.TITLE: self._compile_static,
            FieldKind.STATIC_TEXT: self._compile_static,
            FieldKind.TEXT: self._compile_text,
            FieldKind.FILE: self._compile_text,
            FieldKind.DIR: self._compile_text,
            FieldKind.RULE: self._compile_rule,
            FieldKind.COMBO: self._compile_choice,
            FieldKind.RADIO: self._compile_choice,
            FieldKind.CHECK: self._compile_check,
            FieldKind.SPACE: lambda node, kind: SPACE_FIELD,
            FieldKind.DIVIDER: lambda node, kind: DIVIDER_FIELD,
            FieldKind.PASSWORD: self._compile_password,
        }

    def read_fields(
        self, panel: SpecNode, applicability: Applicability
    ) -> list[AnyField] | None:
        """Compile every applicable field of a panel, in document order.

        Returns:
            The descriptors, or None if the panel itself is not applicable.
        """
        if not applicability.panel_included(panel):
            return None

        fields: list[AnyField] = []
        for node in panel.children_named(FIELD):
            if not applicability.field_included(node):
                continue
            try:
                fields.append(self.compile(node))
            except FieldConfigurationError as e:
                logger.warning("Skipping field %s: %s", node, e)
        return fields

    def compile(self, node: SpecNode) -> AnyField:
        """Compile a single field node.

        Raises:
            FieldConfigurationError: For unknown kinds or a password without
                ``pwd`` children.
        """
        raw_type = node.get(TYPE)
        try:
            kind = FieldKind(raw_type)
        except ValueError:
            raise FieldConfigurationError(
                f"{raw_type} field collection not implemented", field_type=raw_type
            )
        return self._compilers[kind](node, kind)

    # ── Per-kind compilers ──

    def _compile_static(self, node: SpecNode, kind: FieldKind) -> FieldDescriptor:
        return FieldDescriptor(
            kind=kind,
            variable=node.get(VARIABLE),
            display_text=_text(node),
            selected_index=0,
        )

    def _compile_text(self, node: SpecNode, kind: FieldKind) -> FieldDescriptor:
        spec = node.first_child(SPEC)
        choices: list[Choice] = []
        default = None
        if spec is None:
            logger.warning("No 'spec' element defined in %s field %s", kind.value, node)
        else:
            default = spec.get(SET)
            choices.append(Choice(text=spec.get(TXT), value=None, set=default))
        return FieldDescriptor(
            kind=kind,
            variable=node.get(VARIABLE),
            default_value=default,
            choices=choices,
            display_text=self._description(node),
            selected_index=0,
            validators=read_validators(node, self.factory),
            conditionid=node.get("conditionid"),
            processor=_processor_class(spec),
        )

    def _compile_rule(self, node: SpecNode, kind: FieldKind) -> FieldDescriptor:
        descriptor = self._compile_text(node, FieldKind.TEXT)
        spec = node.first_child(SPEC)
        if spec is None:
            return descriptor

        default = spec.get(SET)
        layout = spec.get(LAYOUT)
        if default is not None and layout is not None:
            try:
                default = reconstruct(
                    layout,
                    default,
                    spec.get(RESULT_FORMAT),
                    spec.get(SPECIAL_SEPARATOR, self.special_separator),
                )
            except LayoutError as e:
                # No choices: the field fails when prompted but stays collectible
                logger.warning("Invalid layout in rule field %s: %s", node, e)
                return descriptor.model_copy(
                    update={"default_value": None, "choices": []}
                )
        return descriptor.model_copy(
            update={
                "default_value": default,
                "choices": [Choice(text=spec.get(TXT), value=None, set=default)],
            }
        )

    def _compile_choice(self, node: SpecNode, kind: FieldKind) -> FieldDescriptor:
        spec = node.first_child(SPEC)
        choices: list[Choice] = []
        selection = -1
        if spec is None:
            logger.warning("No 'spec' element defined in %s field %s", kind.value, node)

        for element in spec.children_named(CHOICE) if spec is not None else []:
            processor = element.get(PROCESSOR)
            if processor:
                marker = self.substitutor.expand(element.get(SET, ""))
                for token in self._process_choices(processor):
                    is_set = token == marker
                    if is_set:
                        selection = len(choices)
                    choices.append(
                        Choice(text=token, value=token, set="true" if is_set else None)
                    )
            else:
                choice = Choice(
                    text=element.get(TXT), value=element.get(VALUE), set=element.get(SET)
                )
                if choice.is_selected(self.substitutor):
                    selection = len(choices)
                choices.append(choice)

        if len(choices) == 1:
            selection = 0

        return FieldDescriptor(
            kind=kind,
            variable=node.get(VARIABLE),
            choices=choices,
            display_text=self._description(node),
            selected_index=selection,
            conditionid=node.get("conditionid"),
        )

    def _process_choices(self, class_name: str) -> list[str]:
        """Run a choice processor and split its ':'-delimited output.

        Failures are logged and produce no choices.
        """
        try:
            values = run_processor(self.factory.create(class_name))
        except FactoryError as e:
            logger.warning("Cannot create choice processor %s: %s", class_name, e)
            return []
        except Exception as e:
            logger.warning("Choice processor %s failed: %s", class_name, e)
            return []
        return [token for token in values.split(":") if token]

    def _compile_check(self, node: SpecNode, kind: FieldKind) -> FieldDescriptor:
        spec = node.first_child(SPEC)
        choices: list[Choice] = []
        default = None
        selection = 0
        if spec is None:
            logger.warning("No 'spec' element defined in check field %s", node)
        else:
            label = spec.get(TXT)
            default = spec.get(SET)
            choices = [
                Choice(text=label, value=spec.get("false")),
                Choice(text=label, value=spec.get("true")),
            ]
            if Choice(set=default).is_selected(self.substitutor):
                selection = 1
        return FieldDescriptor(
            kind=kind,
            variable=node.get(VARIABLE),
            default_value=default,
            choices=choices,
            display_text=self._description(node),
            selected_index=selection,
            conditionid=node.get("conditionid"),
        )

    def _compile_password(self, node: SpecNode, kind: FieldKind) -> PasswordField:
        spec = node.first_child(SPEC)
        pwds = spec.children_named(PWD) if spec is not None else []
        if not pwds:
            raise FieldConfigurationError(
                "No pwd specified in the spec for type password", field_type=kind.value
            )
        variable = node.get(VARIABLE)
        inputs = [
            FieldDescriptor(
                kind=FieldKind.TEXT,
                variable=variable,
                default_value=pwd.get(SET),
                choices=[Choice(text=pwd.get(TXT), value=None, set=pwd.get(SET))],
                selected_index=0,
            )
            for pwd in pwds
        ]
        return PasswordField(
            variable=variable,
            display_text=self._description(node),
            inputs=inputs,
            validators=read_validators(node, self.factory),
            conditionid=node.get("conditionid"),
            processor=_processor_class(spec),
        )

    @staticmethod
    def _description(node: SpecNode) -> str | None:
        description = node.first_child(DESCRIPTION)
        return _text(description) if description is not None else None


def _text(node: SpecNode) -> str | None:
    return node.get(TXT, node.text)


def _processor_class(spec: SpecNode | None) -> str | None:
    """Class identifier of the ``spec``'s ``processor`` child, if any."""
    element = spec.first_child(PROCESSOR) if spec is not None else None
    return element.get("class") if element is not None else None
