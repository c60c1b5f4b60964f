"""
Normalizes client-supplied manager and supplier lists.
"""

from typing import Any, Iterable, Mapping

from trade_composer.core.logging import get_logger
from trade_composer.core.models import Entity, EntityInput, EntityKind
from trade_composer.core.taxonomy import PATH_SEPARATOR

log = get_logger(__name__)

# Stands in for the path separator inside entity names
SEPARATOR_REPLACEMENT = "-"


class EntityResolver:
    """
    Turns raw entity input into ordered, clean Entity tuples.

    Blank names are dropped, names are trimmed, and an exact duplicate name
    keeps only its first occurrence. Names become label paths, so a path
    separator inside a name is replaced.
    """

    def __init__(self):
        self.warnings: list[str] = []

    def resolve(
        self,
        raw_entities: Iterable[Entity | EntityInput | Mapping[str, Any] | str] | None,
        kind: EntityKind,
    ) -> tuple[Entity, ...]:
        resolved: list[Entity] = []
        seen: set[str] = set()

        for raw in raw_entities or ():
            entity = self._coerce(raw)
            name = entity.name.strip()
            if not name:
                continue
            if PATH_SEPARATOR in name:
                renamed = name.replace(PATH_SEPARATOR, SEPARATOR_REPLACEMENT)
                self.warnings.append(
                    f"{kind.value.capitalize()} name '{name}' contains '{PATH_SEPARATOR}', renamed to '{renamed}'"
                )
                log.warning("entity_name_renamed", kind=kind.value, name=name, renamed=renamed)
                name = renamed
            if name in seen:
                self.warnings.append(f"Duplicate {kind.value} '{name}' ignored")
                log.warning("duplicate_entity", kind=kind.value, name=name)
                continue
            seen.add(name)

            if kind == EntityKind.SUPPLIER:
                domains = (d.strip().lower() for d in entity.domains)
                entity = Entity(name=name, domains=tuple(dict.fromkeys(d for d in domains if d)))
            else:
                email = entity.email.strip() if entity.email else None
                entity = Entity(name=name, email=email or None)
            resolved.append(entity)

        return tuple(resolved)

    def _coerce(self, raw: Entity | EntityInput | Mapping[str, Any] | str | None) -> Entity:
        if isinstance(raw, Entity):
            return raw
        if isinstance(raw, EntityInput):
            return raw.to_entity()
        return EntityInput.model_validate(raw).to_entity()


def resolve_entities(raw_entities, kind: EntityKind) -> tuple[Entity, ...]:
    """Resolve without keeping warnings."""
    return EntityResolver().resolve(raw_entities, kind)
