"""
Pure operations over label forests.

Nothing here logs or reads settings; callers collect the returned warnings.
"""

from dataclasses import replace
from typing import Iterable, Iterator, Mapping, Sequence

from trade_composer.core.models import (
    Entity,
    EntityKind,
    LabelExtension,
    LabelNode,
    Taxonomy,
)

PATH_SEPARATOR = "/"


def _index(labels: Sequence[LabelNode], name: str) -> int | None:
    for i, node in enumerate(labels):
        if node.name == name:
            return i
    return None


def insert_before(order: list[str], name: str, anchors: Iterable[str | None]) -> None:
    """Insert name in front of the first anchor present in order, else append it."""
    for anchor in anchors:
        if anchor and anchor in order:
            order.insert(order.index(anchor), name)
            return
    order.append(name)


def extend_taxonomy(
    base: Taxonomy,
    extensions: Iterable[tuple[str, LabelExtension]],
    default_anchor: str | None = None,
) -> tuple[Taxonomy, list[str]]:
    """
    Apply trade extensions to a base taxonomy, in the given order.

    Overrides replace a top-level category's subtree (last write wins).
    Additions accumulate; a name that already exists keeps its first owner.

    Returns:
        The extended taxonomy and the warnings produced along the way
    """
    labels = list(base.labels)
    order = list(base.root_order)
    owners = {node.name: "the base taxonomy" for node in labels}
    warnings: list[str] = []

    for trade, extension in extensions:
        for target, override in extension.overrides.items():
            idx = _index(labels, target)
            if idx is None:
                warnings.append(f"{trade}: override target '{target}' is not a top-level category, ignored")
                continue
            labels[idx] = override.apply(labels[idx])

        for node in extension.additions:
            if node.name in owners:
                warnings.append(
                    f"{trade}: category '{node.name}' already added by {owners[node.name]}, dropped"
                )
                continue
            owners[node.name] = trade
            labels.append(node)
            insert_before(order, node.name, (extension.anchor, default_anchor))

    return Taxonomy(labels=labels, root_order=order), warnings


def order_roots(
    labels: Sequence[LabelNode], root_order: Sequence[str]
) -> tuple[tuple[LabelNode, ...], tuple[str, ...], list[str]]:
    """
    Arrange top-level labels by root order.

    Roots the order does not mention are appended in tree order with a
    warning; order entries with no matching root are dropped.
    """
    by_name: dict[str, LabelNode] = {}
    for node in labels:
        by_name.setdefault(node.name, node)

    ordered = [name for name in dict.fromkeys(root_order) if name in by_name]
    warnings = []
    for name in by_name:
        if name not in ordered:
            warnings.append(f"category '{name}' has no position in the root order, appended")
            ordered.append(name)

    return tuple(by_name[name] for name in ordered), tuple(ordered), warnings


def resolve_slots(
    labels: Sequence[LabelNode],
    entities: Mapping[EntityKind, Sequence[Entity]],
    parent: tuple[str, ...] = (),
) -> tuple[tuple[LabelNode, ...], list[str]]:
    """
    Replace slot nodes with leaves named after the matching entity.

    A slot with no entity at its index is pruned. A resolved name that
    collides with a sibling is pruned too, with a warning.
    """
    taken = {node.name for node in labels if not node.is_slot}
    resolved: list[LabelNode] = []
    warnings: list[str] = []

    for node in labels:
        name = node.name
        if node.is_slot:
            pool = entities.get(node.slot.kind, ())
            if node.slot.index > len(pool):
                continue
            name = pool[node.slot.index - 1].name
            if name in taken:
                warnings.append(
                    f"{join_path(parent + (name,))}: {node.slot.kind.value} name collides "
                    f"with an existing label, slot {node.slot.placeholder} pruned"
                )
                continue
            taken.add(name)

        children, child_warnings = resolve_slots(node.children, entities, parent + (name,))
        warnings.extend(child_warnings)
        if node.is_slot:
            resolved.append(replace(node, name=name, slot=None, children=children))
        else:
            resolved.append(node.with_children(children))

    return tuple(resolved), warnings


def join_path(parts: Iterable[str]) -> str:
    return PATH_SEPARATOR.join(parts)


def iter_paths(labels: Iterable[LabelNode], parent: tuple[str, ...] = ()) -> Iterator[tuple[str, ...]]:
    """Pre-order walk yielding the full path of every node."""
    for node in labels:
        path = parent + (node.name,)
        yield path
        yield from iter_paths(node.children, path)


def label_paths(labels: Iterable[LabelNode]) -> list[str]:
    """Every label path in pre-order, parents first."""
    return [join_path(path) for path in iter_paths(labels)]


def provisioning_order(labels: Iterable[LabelNode]) -> tuple[str, ...]:
    """Duplicate-free pre-order walk; every parent precedes its children."""
    return tuple(dict.fromkeys(label_paths(labels)))


def iter_nodes(labels: Iterable[LabelNode]) -> Iterator[LabelNode]:
    for node in labels:
        yield node
        yield from iter_nodes(node.children)
