"""
Read-only integrity checks over a composed taxonomy.
"""

from collections import Counter

from trade_composer.core.logging import get_logger
from trade_composer.core.models import ComposedTaxonomy, ValidationReport
from trade_composer.core.taxonomy import PATH_SEPARATOR, iter_nodes, join_path, label_paths

log = get_logger(__name__)


class TaxonomyValidator:
    """
    Checks that a composed taxonomy can be provisioned as is.

    Errors: labels missing from the provisioning order or vice versa,
    repeated entries, children ordered before their parents or with no
    provisioned parent at all, duplicate labels and leftover slots.
    Warnings: one intent routed to several top-level categories.
    """

    def validate(self, composed: ComposedTaxonomy) -> ValidationReport:
        errors: list[str] = []
        warnings: list[str] = []

        tree_paths = label_paths(composed.labels)
        order = list(composed.provisioning_order)

        for path, count in Counter(tree_paths).items():
            if count > 1:
                errors.append(f"Label '{path}' appears {count} times in the taxonomy")

        order_set = set(order)
        for path in dict.fromkeys(tree_paths):
            if path not in order_set:
                errors.append(f"Label '{path}' is missing from the provisioning order")

        tree_set = set(tree_paths)
        for path, count in Counter(order).items():
            if path not in tree_set:
                errors.append(f"Provisioning entry '{path}' has no label in the taxonomy")
            if count > 1:
                errors.append(f"Provisioning entry '{path}' is listed {count} times")

        position: dict[str, int] = {}
        for index, path in enumerate(order):
            position.setdefault(path, index)
        for path, index in position.items():
            parts = path.split(PATH_SEPARATOR)
            for depth in range(1, len(parts)):
                ancestor = join_path(parts[:depth])
                if ancestor not in position:
                    errors.append(f"Provisioning entry '{path}' has no provisioned parent '{ancestor}'")
                elif position[ancestor] > index:
                    errors.append(f"Provisioning entry '{path}' comes before its parent '{ancestor}'")

        for node in iter_nodes(composed.labels):
            if node.is_slot:
                errors.append(f"Unresolved slot '{node.name}' left in the taxonomy")

        categories_by_intent: dict[str, list[str]] = {}
        for node in composed.labels:
            if node.intent:
                categories_by_intent.setdefault(node.intent, []).append(node.name)
        for intent, categories in categories_by_intent.items():
            if len(categories) > 1:
                warnings.append(f"Intent '{intent}' is shared by {', '.join(categories)}")

        report = ValidationReport(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))
        if errors:
            log.warning("taxonomy_invalid", errors=len(errors), warnings=len(warnings))
        else:
            log.debug("taxonomy_valid", warnings=len(warnings))
        return report


def validate_taxonomy(composed: ComposedTaxonomy) -> ValidationReport:
    return TaxonomyValidator().validate(composed)
