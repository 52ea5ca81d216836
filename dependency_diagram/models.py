"""Data models for dependency diagrams."""

from dataclasses import dataclass, field
from enum import Enum


class LinkType(Enum):
    """Kind of arrow drawn for a relationship."""

    DEPENDENCY = "dependency"
    DEPENDENCY_DASHED = "dependency_dashed"


@dataclass(eq=False)
class Entity:
    """Represents a named node in a diagram.

    Entities compare by identity: a diagram holds at most one entity per name.
    """

    name: str
    color: str | None = None
    outgoing: list["Relationship"] = field(default_factory=list, repr=False)
    incoming: list["Relationship"] = field(default_factory=list, repr=False)

    def add_outgoing(self, relationship: "Relationship") -> None:
        self.outgoing.append(relationship)

    def add_incoming(self, relationship: "Relationship") -> None:
        self.incoming.append(relationship)


@dataclass(eq=False)
class Relationship:
    """Represents a directed edge between two entities."""

    label: str | None
    kind: LinkType
    source: Entity
    target: Entity

    def detach(self) -> None:
        """Remove this relationship from both of its endpoints."""
        if self in self.source.outgoing:
            self.source.outgoing.remove(self)
        if self in self.target.incoming:
            self.target.incoming.remove(self)
