"""Pack, OS and condition gates for panels and fields.

A panel or field node may carry gate children::

    <createForPack name="Docs"/>
    <os family="unix"/>

and a field may carry a ``conditionid`` attribute. The panel root is
gated on packs and OS only; each field is gated on all three.
"""

import logging
from typing import Iterable, Mapping

from ..core.conditions import ConditionEvaluator
from ..core.platform import current_family, family_matches
from ..core.tree import SpecNode

logger = logging.getLogger(__name__)

PACK_GATE = "createForPack"
OS_GATE = "os"
CONDITION_ATTRIBUTE = "conditionid"


class Applicability:
    """Decides whether a panel or field node is included in a pass."""

    def __init__(
        self,
        selected_packs: Iterable[str] = (),
        platform_family: str | None = None,
        conditions: ConditionEvaluator | None = None,
        variables: Mapping[str, str] | None = None,
    ):
        self.selected_packs = list(selected_packs)
        self.platform_family = platform_family or current_family()
        self.conditions = conditions
        self.variables = variables if variables is not None else {}

    def packs_match(self, required: list[str]) -> bool:
        """True if no packs are required or any selected pack is required."""
        if not required:
            return True
        return any(selected in required for selected in self.selected_packs)

    def os_matches(self, families: list[str | None]) -> bool:
        """True if no OS gate is given or any gate matches the running family."""
        if not families:
            return True
        return any(family_matches(family, self.platform_family) for family in families)

    def condition_holds(self, condition_id: str | None) -> bool:
        if condition_id is None:
            return True
        if self.conditions is None:
            logger.warning(
                "Condition %r referenced but no condition evaluator configured",
                condition_id,
            )
            return False
        return self.conditions.is_condition_true(condition_id, self.variables)

    def included(
        self,
        packs: list[str],
        families: list[str | None],
        condition_id: str | None = None,
    ) -> bool:
        return (
            self.packs_match(packs)
            and self.os_matches(families)
            and self.condition_holds(condition_id)
        )

    def panel_included(self, panel: SpecNode) -> bool:
        """Root-level gate: packs and OS, no condition."""
        return self.included(_pack_names(panel), _os_families(panel))

    def field_included(self, field: SpecNode) -> bool:
        return self.included(
            _pack_names(field),
            _os_families(field),
            field.get(CONDITION_ATTRIBUTE),
        )


def _pack_names(node: SpecNode) -> list[str]:
    return [gate.get("name", "") for gate in node.children_named(PACK_GATE)]


def _os_families(node: SpecNode) -> list[str | None]:
    return [gate.get("family") for gate in node.children_named(OS_GATE)]
