"""Read-only document tree for panel specs, with YAML and XML loaders.

Panel specs are generic trees of named nodes carrying string attributes
and ordered children. Both on-disk formats load into the same SpecNode:

XML (one node per element, attributes as-is)::

    <panel id="db">
      <field type="text" variable="db.host">
        <spec txt="Host" set="localhost"/>
      </field>
    </panel>

YAML (scalar values are attributes, a mapping value is one child named by
its key, a list value is several children named by its key; scalar list
items become children with a ``name`` attribute)::

    id: db
    field:
      - type: text
        variable: db.host
        spec: {txt: Host, set: localhost}
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .errors import SpecError


class SpecNode(BaseModel):
    """A named element with attributes and ordered children."""

    model_config = ConfigDict(frozen=True)

    name: str
    attributes: dict[str, str] = Field(default_factory=dict)
    children: list["SpecNode"] = Field(default_factory=list)
    text: str | None = None

    def get(self, attribute: str, default: str | None = None) -> str | None:
        """Attribute lookup with optional default."""
        return self.attributes.get(attribute, default)

    def first_child(self, name: str) -> "SpecNode | None":
        for child in self.children:
            if child.name == name:
                return child
        return None

    def children_named(self, name: str) -> list["SpecNode"]:
        """All children with the given name, in document order."""
        return [child for child in self.children if child.name == name]

    def __str__(self) -> str:
        attrs = " ".join(f'{k}="{v}"' for k, v in self.attributes.items())
        return f"<{self.name}{' ' + attrs if attrs else ''}>"


# =============================================================================
# YAML
# =============================================================================


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


def node_from_data(name: str, data: Any) -> SpecNode:
    """Build a SpecNode from parsed YAML/JSON data."""
    if not isinstance(data, dict):
        return SpecNode(name=name, attributes={"name": _scalar(data)})

    attributes: dict[str, str] = {}
    children: list[SpecNode] = []
    for key, value in data.items():
        key = str(key)
        if isinstance(value, dict):
            children.append(node_from_data(key, value))
        elif isinstance(value, list):
            children.extend(node_from_data(key, item) for item in value)
        else:
            attributes[key] = _scalar(value)
    return SpecNode(name=name, attributes=attributes, children=children)


def load_yaml_tree(path: Path | str, root_name: str = "userInput") -> SpecNode:
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise SpecError(f"Cannot read spec {path}: {e}") from e
    if not isinstance(data, dict):
        raise SpecError(f"Spec {path} must contain a mapping at the top level")
    return node_from_data(root_name, data)


# =============================================================================
# XML
# =============================================================================


def node_from_element(element: ET.Element) -> SpecNode:
    text = (element.text or "").strip() or None
    return SpecNode(
        name=element.tag,
        attributes=dict(element.attrib),
        children=[node_from_element(child) for child in element],
        text=text,
    )


def load_xml_tree(path: Path | str) -> SpecNode:
    path = Path(path)
    try:
        root = ET.parse(path).getroot()
    except (OSError, ET.ParseError) as e:
        raise SpecError(f"Cannot read spec {path}: {e}") from e
    return node_from_element(root)


def load_spec(path: Path | str) -> SpecNode:
    """Load a spec document, choosing the parser from the file suffix."""
    path = Path(path)
    if not path.exists():
        raise SpecError(f"Spec file not found: {path}")
    if path.suffix.lower() in (".yaml", ".yml", ".json"):
        return load_yaml_tree(path)
    return load_xml_tree(path)


def find_panel(root: SpecNode, panel_id: str | None = None) -> SpecNode:
    """Select a panel node from a loaded document.

    The document may itself be a panel, or a container of ``panel``
    children. Without an id the first panel is used.

    Raises:
        SpecError: If no matching panel exists.
    """
    if root.name == "panel" and (panel_id is None or root.get("id") == panel_id):
        return root
    panels = root.children_named("panel")
    if not panels:
        if panel_id is None and root.children_named("field"):
            return root
        raise SpecError("Spec document contains no panel")
    if panel_id is None:
        return panels[0]
    for panel in panels:
        if panel.get("id") == panel_id:
            return panel
    raise SpecError(f"No panel with id {panel_id!r}")


def find_conditions(root: SpecNode, panel: SpecNode) -> list[SpecNode]:
    """Return ``conditions`` nodes from the document root and the panel."""
    nodes = root.children_named("conditions")
    if panel is not root:
        nodes += panel.children_named("conditions")
    return nodes
