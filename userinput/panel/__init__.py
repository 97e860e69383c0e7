"""User input panels: compile a panel spec and collect its values.

Example:
    from userinput.panel import PanelConsole, load_panel
    from userinput.core.store import VariableStore

    loaded = load_panel("install.xml", panel_id="database")
    store = VariableStore({"INSTALL_PATH": "/opt/app"})
    engine = loaded.engine(store, selected_packs=["Core"])
    engine.run_console(PanelConsole())
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ..core.conditions import RuleRegistry
from ..core.factory import ObjectFactory
from ..core.store import VariableStore
from ..core.tree import SpecNode, find_conditions, find_panel, load_spec
from .applicability import Applicability
from .console import EndAction, PanelConsole
from .engine import (
    ApplyProperties,
    CollectionEngine,
    GenerateTemplate,
    Interactive,
    Mode,
)
from .layout import reconstruct
from .reader import SpecificationReader
from .validators import default_factory


@dataclass
class LoadedPanel:
    """A panel node together with the conditions declared in its document."""

    panel: SpecNode
    conditions: RuleRegistry = field(default_factory=RuleRegistry)
    source: Path | None = None

    def engine(
        self,
        store: VariableStore,
        *,
        selected_packs: Iterable[str] | None = None,
        factory: ObjectFactory | None = None,
        **kwargs,
    ) -> CollectionEngine:
        return CollectionEngine(
            self.panel,
            store,
            selected_packs=selected_packs,
            factory=factory or default_factory(),
            conditions=self.conditions,
            **kwargs,
        )


def load_panel(path: Path | str, panel_id: str | None = None) -> LoadedPanel:
    """Load a spec document and select one of its panels.

    Raises:
        SpecError: If the file cannot be parsed or has no such panel.
    """
    root = load_spec(path)
    panel = find_panel(root, panel_id)
    conditions = RuleRegistry()
    for node in find_conditions(root, panel):
        conditions = conditions.merged(RuleRegistry.from_node(node))
    return LoadedPanel(panel=panel, conditions=conditions, source=Path(path))


__all__ = [
    "Applicability",
    "ApplyProperties",
    "CollectionEngine",
    "EndAction",
    "GenerateTemplate",
    "Interactive",
    "LoadedPanel",
    "Mode",
    "PanelConsole",
    "SpecificationReader",
    "default_factory",
    "load_panel",
    "reconstruct",
]
