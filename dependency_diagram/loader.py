"""Build dependency diagrams from YAML graph descriptions."""

from pathlib import Path
from typing import Any

import structlog
import yaml

from dependency_diagram.diagram import DependencyDiagram
from dependency_diagram.models import LinkType

logger = structlog.get_logger()


def _parse_kind(value: Any) -> LinkType:
    if value is None:
        return LinkType.DEPENDENCY
    try:
        return LinkType(str(value).lower())
    except ValueError:
        raise ValueError(f"Unknown link kind: {value}") from None


def _section(data: dict[str, Any], name: str) -> list[dict[str, Any]]:
    items = data.get(name) or []
    if not isinstance(items, list):
        raise ValueError(f"'{name}' must be a list")
    for item in items:
        if not isinstance(item, dict):
            raise ValueError(f"Entries of '{name}' must be mappings, got: {item!r}")
    return items


def _require(item: dict[str, Any], key: str, section: str) -> str:
    if item.get(key) is None:
        raise ValueError(f"Entry in '{section}' is missing '{key}': {item!r}")
    return str(item[key])


def build_diagram(data: dict[str, Any]) -> DependencyDiagram:
    """Build a diagram from a parsed graph description.

    Sections are applied in order: links, colors, filter_links, clear_labels.

    Args:
        data: Mapping with any of the sections above

    Returns:
        The populated diagram

    Raises:
        ValueError: If the description is malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Graph description must be a mapping")

    diagram = DependencyDiagram()

    for item in _section(data, "links"):
        label = item.get("label")
        diagram.link(
            _require(item, "from", "links"),
            _require(item, "to", "links"),
            None if label is None else str(label),
            _parse_kind(item.get("kind")),
        )

    for item in _section(data, "colors"):
        diagram.set_color_where_name_matches(
            _require(item, "pattern", "colors"), _require(item, "color", "colors")
        )

    for item in _section(data, "filter_links"):
        diagram.filter_out_links(_require(item, "from", "filter_links"), _require(item, "label", "filter_links"))

    for item in _section(data, "clear_labels"):
        diagram.clear_link_labels_where_name_matches(
            _require(item, "from", "clear_labels"), _require(item, "label", "clear_labels")
        )

    logger.debug(
        "Diagram built",
        entities=len(diagram.entities),
        relationships=len(diagram.relationships),
    )
    return diagram


def load_diagram(path: str | Path) -> DependencyDiagram:
    """Load a diagram from a YAML graph description file.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not valid YAML or the description is malformed
    """
    path = Path(path)
    logger.info("Loading graph description", path=str(path))
    with open(path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse {path}: {e}") from e
    return build_diagram(data or {})
