"""userinput: declarative installer input panels for the console.

Compiles a panel spec (XML or YAML) into field descriptors and collects
values for them interactively, from a property file, or emits an empty
property template.
"""

__version__ = "0.1.0"

from .core.store import VariableStore, VariableSubstitutor
from .core.tree import SpecNode, load_spec
from .panel import (
    CollectionEngine,
    LoadedPanel,
    PanelConsole,
    load_panel,
)

__all__ = [
    "__version__",
    "CollectionEngine",
    "LoadedPanel",
    "PanelConsole",
    "SpecNode",
    "VariableStore",
    "VariableSubstitutor",
    "load_panel",
    "load_spec",
]
