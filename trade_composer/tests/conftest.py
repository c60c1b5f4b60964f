"""
Shared pytest fixtures for trade_composer tests.
"""

import copy

import pytest

from trade_composer.core.models import (
    BusinessFacts,
    Entity,
    EntityKind,
    LabelExtension,
    LabelOverride,
    PromptFacts,
    Taxonomy,
    label,
    slot_labels,
)
from trade_composer.services.template import TemplateComposer
from trade_composer.trades.base import BaseTrade
from trade_composer.trades.registry import SchemaRegistry

BASE_BEHAVIOR = {
    "voiceProfile": {
        "tone": "Friendly",
        "formalityLevel": "medium",
        "allowPricingInReplies": False,
    },
    "behaviorGoals": ["Be helpful"],
    "autoReplyPolicy": {
        "enabledCategories": ["Support"],
        "minConfidence": 0.75,
        "excludedDomains": [],
    },
    "followUpGuidelines": {"preferredPhrasing": ["Following up"]},
    "upsellGuidelines": {"enabled": False, "triggerCategories": [], "text": ""},
    "categoryOverrides": {},
    "signature": {
        "closingText": "Thanks!",
        "signatureBlock": "The {{BUSINESS_NAME}} Team",
    },
}


def make_behavior(**sections) -> dict:
    """Base behavior with top-level sections replaced or updated."""
    behavior = copy.deepcopy(BASE_BEHAVIOR)
    for key, value in sections.items():
        if isinstance(value, dict) and isinstance(behavior.get(key), dict):
            behavior[key].update(value)
        else:
            behavior[key] = value
    return behavior


class SyntheticTrade(BaseTrade):
    """Trade built from test data instead of a production module."""

    def __init__(self, name, behavior=None, extension=None, aliases=(), facts=None):
        self.name = name
        self.aliases = tuple(aliases)
        self._behavior = behavior if behavior is not None else make_behavior()
        self._extension = extension or LabelExtension()
        self._facts = facts or PromptFacts()

    def behavior(self):
        return copy.deepcopy(self._behavior)

    def label_extension(self):
        return self._extension

    def prompt_facts(self):
        return self._facts


SYNTHETIC_TAXONOMY = Taxonomy(
    labels=(
        label("BANKING", label("Invoice"), label("Receipts"), intent="ai.financial_transaction"),
        label(
            "MANAGER",
            label("Unassigned"),
            *slot_labels(EntityKind.MANAGER, 5),
            intent="ai.internal_routing",
        ),
        label("SALES", label("Quotes"), intent="ai.sales_inquiry"),
        label("SUPPLIERS", *slot_labels(EntityKind.SUPPLIER, 3), intent="ai.vendor_communication"),
        label("SUPPORT", label("General"), intent="ai.support_ticket"),
        label("URGENT", label("Emergency"), intent="ai.emergency_request", critical=True),
        label("MISC", label("General"), intent="ai.general"),
    ),
    root_order=("BANKING", "MANAGER", "SALES", "SUPPLIERS", "SUPPORT", "URGENT", "MISC"),
)


@pytest.fixture
def synthetic_taxonomy() -> Taxonomy:
    return SYNTHETIC_TAXONOMY


@pytest.fixture
def alpha_trade() -> SyntheticTrade:
    """Casual trade adding PROJECTS in front of SUPPORT."""
    return SyntheticTrade(
        "Alpha",
        aliases=("Alpha Services",),
        behavior=make_behavior(
            voiceProfile={"tone": "Friendly and helpful", "formalityLevel": "casual"},
            behaviorGoals=["Answer quickly", "Book visits"],
            autoReplyPolicy={
                "enabledCategories": ["Sales"],
                "minConfidence": 0.75,
                "excludedDomains": ["alpha.example"],
            },
            followUpGuidelines={"preferredPhrasing": ["Following up", "Any questions?"]},
            upsellGuidelines={"enabled": False, "triggerCategories": [], "text": "Alpha upsell"},
            categoryOverrides={"URGENT": {"priorityLevel": 2, "customLanguage": ["Call us now"]}},
        ),
        extension=LabelExtension(
            overrides={"SALES": LabelOverride(children=(label("New Leads"), label("Quotes")))},
            additions=(label("PROJECTS", label("Active Jobs"), intent="ai.project_management"),),
            anchor="SUPPORT",
        ),
        facts=PromptFacts(
            primary_product_service="alpha services",
            inquiry_types=("Alpha Inquiry", "Shared Inquiry"),
        ),
    )


@pytest.fixture
def beta_trade() -> SyntheticTrade:
    """Professional trade adding PROJECTS and WARRANTY in front of SALES."""
    return SyntheticTrade(
        "Beta",
        behavior=make_behavior(
            voiceProfile={
                "tone": "Professional, precise and helpful",
                "formalityLevel": "professional",
                "allowPricingInReplies": True,
            },
            behaviorGoals=["Book visits", "Quote accurately"],
            autoReplyPolicy={
                "enabledCategories": ["Support", "Sales"],
                "minConfidence": 0.8,
                "excludedDomains": ["beta.example"],
            },
            followUpGuidelines={"preferredPhrasing": ["Checking in", "Following up"]},
            upsellGuidelines={"enabled": True, "triggerCategories": ["Support"], "text": "Beta upsell"},
            categoryOverrides={
                "URGENT": {"priorityLevel": 1, "customLanguage": ["Call us now", "We are on our way"]},
                "SALES": {"priorityLevel": 3, "customLanguage": ["Ask for a quote"]},
            },
            signature={"closingText": "Regards", "signatureBlock": "Beta Block"},
        ),
        extension=LabelExtension(
            overrides={"SALES": LabelOverride(children=(label("Bids"),))},
            additions=(
                label("PROJECTS", label("Site Work"), intent="ai.project_management"),
                label("WARRANTY", label("Claims"), intent="ai.warranty_claim"),
            ),
            anchor="SALES",
        ),
        facts=PromptFacts(
            primary_product_service="beta services",
            inquiry_types=("Shared Inquiry", "Beta Inquiry"),
        ),
    )


@pytest.fixture
def gamma_trade() -> SyntheticTrade:
    """Trade with no anchor whose addition reuses the support intent."""
    return SyntheticTrade(
        "Gamma",
        behavior=make_behavior(voiceProfile={"tone": "Calm", "formalityLevel": "medium"}),
        extension=LabelExtension(
            additions=(label("SERVICE", label("Repairs"), intent="ai.support_ticket"),),
        ),
    )


@pytest.fixture
def registry(alpha_trade, beta_trade, gamma_trade, synthetic_taxonomy) -> SchemaRegistry:
    """Registry over the synthetic trades and taxonomy."""
    return SchemaRegistry.from_trades(
        [alpha_trade, beta_trade, gamma_trade],
        base_behavior=make_behavior(),
        base_taxonomy=synthetic_taxonomy,
        default_anchor="MISC",
    )


@pytest.fixture
def managers() -> list[Entity]:
    return [
        Entity(name="Alice", email="alice@example.com"),
        Entity(name="Bob", email="bob@example.com"),
    ]


@pytest.fixture
def suppliers() -> list[Entity]:
    return [Entity(name="Acme Supply", domains=("acme.com",))]


@pytest.fixture
def business_facts() -> BusinessFacts:
    return BusinessFacts(
        name="Sparky Co",
        phone="(403) 555-0100",
        website_url="https://sparky.example",
        service_areas=("Calgary", "Airdrie"),
        timezone="America/Edmonton",
        links={"booking": "/book"},
    )


@pytest.fixture
def composer() -> TemplateComposer:
    return TemplateComposer(strict=False)


@pytest.fixture
def strict_composer() -> TemplateComposer:
    return TemplateComposer(strict=True)
