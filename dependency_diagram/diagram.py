"""In-memory dependency graph with regex-driven bulk mutation."""

import re
from collections.abc import Iterator
from pathlib import Path

import structlog

from dependency_diagram.models import Entity, LinkType, Relationship
from dependency_diagram.notation import encode
from dependency_diagram.renderer import Renderer, YumlRenderer

logger = structlog.get_logger()

Pattern = str | re.Pattern[str]


def _compile(pattern: Pattern) -> re.Pattern[str]:
    return pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)


def normalize_name(name: str | None) -> str:
    """Strip the notation's reserved bracket delimiters from an entity name.

    Raises:
        ValueError: If name is None
    """
    if name is None:
        raise ValueError("Entity name is required")
    return name.replace("[", "").replace("]", "")


class DependencyDiagram:
    """A directed graph of entities and relationships that encodes to yUML.

    Entities and relationships are kept in insertion order, which fixes the
    order of the encoded notation. Instances are not thread safe.
    """

    def __init__(self) -> None:
        self._entities: dict[str, Entity] = {}
        self._relationships: dict[tuple[str, str, str | None], Relationship] = {}
        self._keys: dict[Relationship, tuple[str, str, str | None]] = {}

    @property
    def entities(self) -> list[Entity]:
        return list(self._entities.values())

    @property
    def relationships(self) -> list[Relationship]:
        return list(self._relationships.values())

    def get(self, name: str) -> Entity | None:
        """Look up an entity without creating it."""
        return self._entities.get(normalize_name(name))

    def get_or_create(self, name: str | None) -> Entity:
        """Return the entity registered under name, creating it if needed.

        Args:
            name: Entity name; '[' and ']' are removed before lookup

        Returns:
            The single entity for the normalized name
        """
        key = normalize_name(name)
        entity = self._entities.get(key)
        if entity is None:
            entity = Entity(name=key)
            self._entities[key] = entity
            logger.debug("Created entity", name=key)
        return entity

    def link(
        self,
        source: str,
        target: str,
        label: str | None = None,
        kind: LinkType = LinkType.DEPENDENCY,
    ) -> Relationship:
        """Return the relationship for (source, target, label), creating it if needed.

        The lookup key uses the names exactly as given; only the entities
        themselves are resolved through get_or_create.
        """
        key = (source, target, label)
        relationship = self._relationships.get(key)
        if relationship is not None:
            return relationship

        source_entity = self.get_or_create(source)
        target_entity = self.get_or_create(target)
        relationship = Relationship(label=label, kind=kind, source=source_entity, target=target_entity)
        source_entity.add_outgoing(relationship)
        target_entity.add_incoming(relationship)
        self._relationships[key] = relationship
        self._keys[relationship] = key
        logger.debug(
            "Created relationship",
            source=source_entity.name,
            target=target_entity.name,
            label=label,
            kind=kind.value,
        )
        return relationship

    def _entities_matching(self, pattern: Pattern) -> Iterator[Entity]:
        regex = _compile(pattern)
        for entity in list(self._entities.values()):
            if regex.search(entity.name):
                yield entity

    def _outgoing_matching(self, source_pattern: Pattern, label_pattern: Pattern) -> Iterator[Relationship]:
        label_regex = _compile(label_pattern)
        for entity in self._entities_matching(source_pattern):
            # Callers may detach while we iterate, so walk a copy.
            for relationship in list(entity.outgoing):
                if label_regex.search(relationship.label or ""):
                    yield relationship

    def set_color_where_name_matches(self, pattern: Pattern, color: str) -> None:
        """Set the background color of every entity whose name matches pattern."""
        count = 0
        for entity in self._entities_matching(pattern):
            entity.color = color
            count += 1
        logger.debug("Colored entities", pattern=str(pattern), color=color, count=count)

    def filter_out_links(self, source_pattern: Pattern, label_pattern: Pattern) -> None:
        """Remove outgoing relationships with a matching label from matching entities."""
        count = 0
        for relationship in self._outgoing_matching(source_pattern, label_pattern):
            relationship.detach()
            self._forget(relationship)
            count += 1
        logger.debug("Filtered out relationships", source_pattern=str(source_pattern), count=count)

    def clear_link_labels_where_name_matches(self, source_pattern: Pattern, label_pattern: Pattern) -> None:
        """Blank the label of matching outgoing relationships, keeping the edges."""
        count = 0
        for relationship in self._outgoing_matching(source_pattern, label_pattern):
            relationship.label = ""
            count += 1
        logger.debug("Cleared relationship labels", source_pattern=str(source_pattern), count=count)

    def _forget(self, relationship: Relationship) -> None:
        key = self._keys.pop(relationship, None)
        if key is not None:
            del self._relationships[key]

    def to_yuml_string(self) -> str:
        return encode(self)

    def generate(self, path: str | Path, style: str = "plain", renderer: Renderer | None = None) -> int:
        """Render the diagram through a remote renderer and save the image.

        Args:
            path: Destination file
            style: Renderer style token, e.g. "plain" or "scruffy"
            renderer: Renderer to use (defaults to a YumlRenderer)

        Returns:
            Number of bytes written
        """
        if renderer is None:
            renderer = YumlRenderer()
        return renderer.render_to_file(self.to_yuml_string(), style, path)

    def generate_plain(self, path: str | Path, renderer: Renderer | None = None) -> int:
        return self.generate(path, "plain", renderer)

    def generate_scruffy(self, path: str | Path, renderer: Renderer | None = None) -> int:
        return self.generate(path, "scruffy", renderer)
