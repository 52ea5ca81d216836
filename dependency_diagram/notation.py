"""yUML notation encoding for dependency diagrams."""

from typing import TYPE_CHECKING

from dependency_diagram.models import Entity, LinkType, Relationship

if TYPE_CHECKING:
    from dependency_diagram.diagram import DependencyDiagram

SEPARATOR = ", "


def render_entity(entity: Entity) -> str:
    """Render an entity as '[name]' or '[name{bg:color}]'."""
    if entity.color is not None:
        return f"[{entity.name}{{bg:{entity.color}}}]"
    return f"[{entity.name}]"


def render_relationship(relationship: Relationship) -> str:
    """Render the arrow of a relationship, prefixed by its label."""
    arrow = "-.->" if relationship.kind is LinkType.DEPENDENCY_DASHED else "->"
    if relationship.label is not None:
        return relationship.label + arrow
    return arrow


def encode(diagram: "DependencyDiagram") -> str:
    """Encode every relationship of a diagram into a yUML string.

    Each edge is written as source, arrow and target followed by ", ",
    including the last one. Entities without outgoing relationships are
    not written at all, so a diagram without edges encodes to "".
    """
    parts: list[str] = []
    for entity in diagram.entities:
        for relationship in entity.outgoing:
            parts.append(render_entity(entity))
            parts.append(render_relationship(relationship))
            parts.append(render_entity(relationship.target))
            parts.append(SEPARATOR)
    return "".join(parts)
