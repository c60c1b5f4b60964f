"""Unit tests for taxonomy composition."""

import pytest

from trade_composer.core.models import (
    Entity,
    EntityKind,
    LabelExtension,
    LabelOverride,
    Taxonomy,
    label,
    slot_labels,
)
from trade_composer.core.taxonomy import (
    extend_taxonomy,
    insert_before,
    order_roots,
    provisioning_order,
    resolve_slots,
)
from trade_composer.services.taxonomy import (
    LabelTaxonomyComposer,
    label_variable_name,
    label_variables,
)
from trade_composer.services.validator import validate_taxonomy
from trade_composer.trades.registry import default_registry


@pytest.fixture
def taxonomy_composer(registry) -> LabelTaxonomyComposer:
    return LabelTaxonomyComposer(registry)


def child_names(node) -> list[str]:
    return [child.name for child in node.children]


class TestInsertBefore:
    """Tests for insert_before."""

    def test_first_present_anchor_wins(self):
        """Test the first anchor found in the order is used."""
        order = ["A", "B", "C"]
        insert_before(order, "X", ("MISSING", "C"))
        assert order == ["A", "B", "X", "C"]

    def test_appends_without_anchor(self):
        """Test the name is appended when no anchor is present."""
        order = ["A", "B"]
        insert_before(order, "X", (None, "MISSING"))
        assert order == ["A", "B", "X"]


class TestExtendTaxonomy:
    """Tests for extend_taxonomy."""

    def test_override_replaces_subtree(self, synthetic_taxonomy):
        """Test an override replaces a category's children and keeps its intent."""
        extension = LabelExtension(overrides={"SALES": LabelOverride(children=(label("Bids"),))})
        extended, warnings = extend_taxonomy(synthetic_taxonomy, [("T", extension)])

        sales = extended.get("SALES")
        assert child_names(sales) == ["Bids"]
        assert sales.intent == "ai.sales_inquiry"
        assert warnings == []

    def test_override_unknown_target(self, synthetic_taxonomy):
        """Test overriding a missing category is ignored with a warning."""
        extension = LabelExtension(overrides={"NOPE": LabelOverride()})
        extended, warnings = extend_taxonomy(synthetic_taxonomy, [("T", extension)])

        assert extended == synthetic_taxonomy
        assert warnings == ["T: override target 'NOPE' is not a top-level category, ignored"]

    def test_addition_uses_default_anchor(self, synthetic_taxonomy):
        """Test an addition without an anchor goes in front of the default anchor."""
        extension = LabelExtension(additions=(label("SERVICE"),))
        extended, _ = extend_taxonomy(synthetic_taxonomy, [("T", extension)], default_anchor="MISC")

        assert extended.root_order[-2:] == ("SERVICE", "MISC")

    def test_addition_appended_without_any_anchor(self, synthetic_taxonomy):
        """Test an addition is appended when neither anchor exists."""
        extension = LabelExtension(additions=(label("SERVICE"),), anchor="NOPE")
        extended, _ = extend_taxonomy(synthetic_taxonomy, [("T", extension)])

        assert extended.root_order[-1] == "SERVICE"

    def test_addition_of_base_category_dropped(self, synthetic_taxonomy):
        """Test adding a name the base already has keeps the base category."""
        extension = LabelExtension(additions=(label("SALES", label("Other")),))
        extended, warnings = extend_taxonomy(synthetic_taxonomy, [("T", extension)])

        assert child_names(extended.get("SALES")) == ["Quotes"]
        assert warnings == ["T: category 'SALES' already added by the base taxonomy, dropped"]

    def test_base_is_not_mutated(self, synthetic_taxonomy):
        """Test extending leaves the base taxonomy untouched."""
        before = synthetic_taxonomy.root_order
        extend_taxonomy(synthetic_taxonomy, [("T", LabelExtension(additions=(label("NEW"),)))])
        assert synthetic_taxonomy.root_order == before


class TestOrderRoots:
    """Tests for order_roots."""

    def test_unlisted_root_appended(self):
        """Test a root missing from the order is appended with a warning."""
        labels = (label("B"), label("A"), label("C"))
        ordered, order, warnings = order_roots(labels, ("A", "B", "GONE"))

        assert order == ("A", "B", "C")
        assert [n.name for n in ordered] == ["A", "B", "C"]
        assert warnings == ["category 'C' has no position in the root order, appended"]


class TestResolveSlots:
    """Tests for resolve_slots."""

    def test_slots_filled_in_order_and_pruned(self):
        """Test slot k takes the k-th entity and surplus slots are pruned."""
        labels = (label("MANAGER", label("Unassigned"), *slot_labels(EntityKind.MANAGER, 5)),)
        managers = (Entity(name="Alice"), Entity(name="Bob"))
        resolved, warnings = resolve_slots(labels, {EntityKind.MANAGER: managers})

        assert child_names(resolved[0]) == ["Unassigned", "Alice", "Bob"]
        assert not any(child.is_slot for child in resolved[0].children)
        assert warnings == []

    def test_no_entities_prunes_every_slot(self):
        """Test every slot is pruned when no entities are given."""
        labels = (label("SUPPLIERS", *slot_labels(EntityKind.SUPPLIER, 3)),)
        resolved, _ = resolve_slots(labels, {})

        assert resolved[0].children == ()

    def test_nested_slots(self):
        """Test slots below the second level are resolved too."""
        labels = (label("A", label("B", *slot_labels(EntityKind.SUPPLIER, 2))),)
        resolved, _ = resolve_slots(labels, {EntityKind.SUPPLIER: (Entity(name="Acme"),)})

        assert provisioning_order(resolved) == ("A", "A/B", "A/B/Acme")

    def test_name_collision_pruned(self):
        """Test an entity named like a sibling label is pruned with a warning."""
        labels = (label("MANAGER", label("Unassigned"), *slot_labels(EntityKind.MANAGER, 2)),)
        managers = (Entity(name="Unassigned"), Entity(name="Bob"))
        resolved, warnings = resolve_slots(labels, {EntityKind.MANAGER: managers})

        assert child_names(resolved[0]) == ["Unassigned", "Bob"]
        assert len(warnings) == 1
        assert "MANAGER/Unassigned" in warnings[0]
        assert "{{Manager1}}" in warnings[0]

    def test_placeholder_like_entity_name_stays_plain(self):
        """Test an entity named like a placeholder resolves to a plain label."""
        from trade_composer.core.models import ComposedTaxonomy
        from trade_composer.services.validator import validate_taxonomy

        labels = (label("MANAGER", *slot_labels(EntityKind.MANAGER, 2)),)
        managers = (Entity(name="{{Manager2}}"), Entity(name="Bob"))
        resolved, warnings = resolve_slots(labels, {EntityKind.MANAGER: managers})

        assert child_names(resolved[0]) == ["{{Manager2}}", "Bob"]
        assert not any(child.is_slot for child in resolved[0].children)
        assert warnings == []

        report = validate_taxonomy(
            ComposedTaxonomy(labels=resolved, root_order=("MANAGER",), provisioning_order=provisioning_order(resolved))
        )
        assert report.is_valid


class TestProvisioningOrder:
    """Tests for provisioning_order."""

    def test_parents_before_children(self):
        """Test a pre-order walk lists each parent before its children."""
        labels = (label("A", label("A1", label("A1x")), label("A2")), label("B"))
        assert provisioning_order(labels) == ("A", "A/A1", "A/A1/A1x", "A/A2", "B")

    def test_same_leaf_name_under_different_parents(self):
        """Test equal leaf names under different parents stay distinct."""
        labels = (label("SUPPORT", label("General")), label("MISC", label("General")))
        assert provisioning_order(labels) == ("SUPPORT", "SUPPORT/General", "MISC", "MISC/General")


class TestLabelTaxonomyComposer:
    """Tests for LabelTaxonomyComposer.compose."""

    def test_root_order_with_anchors(self, taxonomy_composer):
        """Test additions land in front of their trade's anchor."""
        composed = taxonomy_composer.compose(["Alpha", "Beta"])

        assert composed.root_order == (
            "BANKING",
            "MANAGER",
            "WARRANTY",
            "SALES",
            "SUPPLIERS",
            "PROJECTS",
            "SUPPORT",
            "URGENT",
            "MISC",
        )
        assert tuple(node.name for node in composed.labels) == composed.root_order

    def test_override_last_write_wins(self, taxonomy_composer):
        """Test the later trade's override of the same category wins."""
        composed = taxonomy_composer.compose(["Alpha", "Beta"])
        assert child_names(composed.get("SALES")) == ["Bids"]

    def test_duplicate_addition_first_wins(self, taxonomy_composer):
        """Test the first trade to add a category keeps it and a warning is raised."""
        composed = taxonomy_composer.compose(["Alpha", "Beta"])

        assert child_names(composed.get("PROJECTS")) == ["Active Jobs"]
        assert "Beta: category 'PROJECTS' already added by Alpha, dropped" in composed.warnings

    def test_slots_resolved_from_entities(self, taxonomy_composer, managers, suppliers):
        """Test two managers fill two of five slots and the rest are pruned."""
        composed = taxonomy_composer.compose(["Alpha"], managers=managers, suppliers=suppliers)

        assert child_names(composed.get("MANAGER")) == ["Unassigned", "Alice", "Bob"]
        assert child_names(composed.get("SUPPLIERS")) == ["Acme Supply"]
        assert "MANAGER/Bob" in composed.provisioning_order

    def test_raw_entity_input(self, taxonomy_composer):
        """Test raw dicts are resolved before slots are filled."""
        composed = taxonomy_composer.compose(
            ["Alpha"], managers=[{"name": " Alice "}, {"name": "Alice"}], suppliers=[]
        )

        assert child_names(composed.get("MANAGER")) == ["Unassigned", "Alice"]
        assert "Duplicate manager 'Alice' ignored" in composed.warnings

    def test_provisioning_order_complete(self, taxonomy_composer, managers, suppliers):
        """Test the composed taxonomy passes every integrity check."""
        composed = taxonomy_composer.compose(["Alpha", "Beta"], managers=managers, suppliers=suppliers)
        report = validate_taxonomy(composed)

        assert report.is_valid
        assert report.errors == ()

    def test_full_provisioning_order(self, taxonomy_composer, managers, suppliers):
        """Test the exact provisioning order of a two-trade client."""
        composed = taxonomy_composer.compose(["Alpha", "Beta"], managers=managers, suppliers=suppliers)

        assert composed.provisioning_order == (
            "BANKING",
            "BANKING/Invoice",
            "BANKING/Receipts",
            "MANAGER",
            "MANAGER/Unassigned",
            "MANAGER/Alice",
            "MANAGER/Bob",
            "WARRANTY",
            "WARRANTY/Claims",
            "SALES",
            "SALES/Bids",
            "SUPPLIERS",
            "SUPPLIERS/Acme Supply",
            "PROJECTS",
            "PROJECTS/Active Jobs",
            "SUPPORT",
            "SUPPORT/General",
            "URGENT",
            "URGENT/Emergency",
            "MISC",
            "MISC/General",
        )

    def test_addition_without_anchor(self, taxonomy_composer):
        """Test a trade without an anchor adds in front of MISC."""
        composed = taxonomy_composer.compose(["Gamma"])
        assert composed.root_order[-2:] == ("SERVICE", "MISC")

    def test_unknown_trades_use_base_taxonomy(self, taxonomy_composer, synthetic_taxonomy):
        """Test the base taxonomy is used when no trade resolves."""
        composed = taxonomy_composer.compose(["Nope"])

        assert composed.root_order == synthetic_taxonomy.root_order
        assert composed.warnings[:2] == (
            "Unknown trade type 'Nope' skipped",
            "No trade type could be resolved, using the base taxonomy",
        )

    def test_deterministic(self, taxonomy_composer, managers, suppliers):
        """Test identical inputs give identical output."""
        first = taxonomy_composer.compose(["Beta", "Alpha"], managers, suppliers)
        second = taxonomy_composer.compose(["Beta", "Alpha"], managers, suppliers)
        assert first == second

    def test_to_dict(self, taxonomy_composer):
        """Test the serialised shape."""
        data = taxonomy_composer.compose(["Alpha"]).to_dict()

        assert data["provisioningOrder"][0] == "BANKING"
        assert data["labels"][0]["name"] == "BANKING"


class TestProductionComposition:
    """Scenario tests against the production registry."""

    def test_electrician_hvac_is_valid(self):
        """Test a production two-trade taxonomy passes integrity checks."""
        composer = LabelTaxonomyComposer(default_registry())
        composed = composer.compose(
            ["Electrician", "HVAC"],
            managers=[{"name": "Alice"}, {"name": "Bob"}],
            suppliers=[{"name": "Acme Supply", "domains": ["acme.com"]}],
        )
        report = validate_taxonomy(composed)

        assert report.errors == ()
        assert child_names(composed.get("MANAGER"))[-2:] == ["Alice", "Bob"]
        assert "SUPPLIERS/Acme Supply" in composed.provisioning_order
        assert not any("{{" in path for path in composed.provisioning_order)

    def test_every_trade_composes_cleanly(self):
        """Test each production trade alone composes without errors."""
        registry = default_registry()
        composer = LabelTaxonomyComposer(registry)
        for name in registry.trade_names:
            report = validate_taxonomy(composer.compose([name]))
            assert report.errors == (), name


class TestLabelVariables:
    """Tests for label variable naming."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("BANKING", "LABEL_BANKING"),
            ("BANKING/e-Transfer", "LABEL_BANKING_E_TRANSFER"),
            ("GOOGLE REVIEW", "LABEL_GOOGLE_REVIEW"),
            ("SUPPORT/Appointment Scheduling", "LABEL_SUPPORT_APPOINTMENT_SCHEDULING"),
        ],
    )
    def test_label_variable_name(self, path, expected):
        """Test label paths become upper-case variable names."""
        assert label_variable_name(path) == expected

    def test_label_variables(self, taxonomy_composer):
        """Test provisioned ids map to variables in provisioning order."""
        composed = taxonomy_composer.compose(["Alpha"])
        variables = label_variables(
            composed, {"BANKING/Invoice": "Label_2", "BANKING": "Label_1", "UNKNOWN": "Label_9"}
        )

        assert list(variables.items()) == [
            ("LABEL_BANKING", "Label_1"),
            ("LABEL_BANKING_INVOICE", "Label_2"),
        ]


def test_taxonomy_is_immutable(synthetic_taxonomy):
    """Test composed structures are frozen."""
    with pytest.raises(AttributeError):
        synthetic_taxonomy.root_order = ()
    assert isinstance(synthetic_taxonomy, Taxonomy)
