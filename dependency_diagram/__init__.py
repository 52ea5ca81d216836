"""Build dependency graphs and render them as yUML diagrams."""

from dependency_diagram.diagram import DependencyDiagram
from dependency_diagram.models import Entity, LinkType, Relationship
from dependency_diagram.notation import encode
from dependency_diagram.renderer import Renderer, Style, YumlRenderer

__all__ = [
    "DependencyDiagram",
    "Entity",
    "LinkType",
    "Relationship",
    "Renderer",
    "Style",
    "YumlRenderer",
    "encode",
]
