"""
Label taxonomy composer.

Builds a client's label tree from the universal taxonomy, the extensions of
the client's trades and the client's managers and suppliers, then derives
the order in which the labels must be created.
"""

import re
from typing import Any, Iterable, Mapping

from trade_composer.core.logging import get_logger
from trade_composer.core.models import ComposedTaxonomy, EntityKind
from trade_composer.core.taxonomy import (
    extend_taxonomy,
    order_roots,
    provisioning_order,
    resolve_slots,
)
from trade_composer.services.entities import EntityResolver
from trade_composer.services.merger import SchemaMerger
from trade_composer.trades.registry import SchemaRegistry, default_registry

log = get_logger(__name__)


class LabelTaxonomyComposer:
    """Composes per-client label taxonomies from an immutable registry."""

    def __init__(self, registry: SchemaRegistry | None = None):
        self.registry = registry or default_registry()
        self._merger = SchemaMerger(self.registry)

    def compose(
        self,
        trade_types: Iterable[str],
        managers: Iterable[Any] = (),
        suppliers: Iterable[Any] = (),
    ) -> ComposedTaxonomy:
        """
        Compose the label taxonomy for one client.

        Args:
            trade_types: Trade-type names, in priority order
            managers: Manager entities (or raw dicts) in slot order
            suppliers: Supplier entities (or raw dicts) in slot order

        Returns:
            ComposedTaxonomy with every slot resolved or pruned
        """
        trades, warnings = self._merger.resolve(trade_types)
        if not trades:
            warnings.append("No trade type could be resolved, using the base taxonomy")

        resolver = EntityResolver()
        entities = {
            EntityKind.MANAGER: resolver.resolve(managers, EntityKind.MANAGER),
            EntityKind.SUPPLIER: resolver.resolve(suppliers, EntityKind.SUPPLIER),
        }
        warnings.extend(resolver.warnings)

        extended, extension_warnings = extend_taxonomy(
            self.registry.base_taxonomy,
            [(t.name, t.extension) for t in trades],
            self.registry.default_anchor,
        )
        labels, root_order, order_warnings = order_roots(extended.labels, extended.root_order)
        labels, slot_warnings = resolve_slots(labels, entities)

        for warning in (*extension_warnings, *order_warnings, *slot_warnings):
            log.warning("taxonomy_composition_issue", issue=warning)
        warnings.extend(extension_warnings + order_warnings + slot_warnings)

        composed = ComposedTaxonomy(
            labels=labels,
            root_order=root_order,
            provisioning_order=provisioning_order(labels),
            warnings=tuple(dict.fromkeys(warnings)),
        )
        log.info(
            "taxonomy_composed",
            trades=[t.name for t in trades],
            categories=len(composed.labels),
            labels=len(composed.provisioning_order),
        )
        return composed


def label_variable_name(path: str) -> str:
    """'BANKING/e-Transfer' -> 'LABEL_BANKING_E_TRANSFER'."""
    return "LABEL_" + re.sub(r"[^A-Z0-9]+", "_", path.upper()).strip("_")


def label_variables(composed: ComposedTaxonomy, label_ids: Mapping[str, str]) -> dict[str, str]:
    """
    Map provisioned label ids to environment variable names.

    Args:
        composed: Composed taxonomy
        label_ids: Provider label id per label path, as returned by provisioning

    Returns:
        Dict of LABEL_* variable name to label id, in provisioning order
    """
    variables: dict[str, str] = {}
    for path in composed.provisioning_order:
        label_id = label_ids.get(path)
        if label_id is None:
            log.debug("label_id_missing", path=path)
            continue
        variables.setdefault(label_variable_name(path), label_id)
    return variables
