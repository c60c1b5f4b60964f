"""
Electrician trade definition.
"""

from trade_composer.core.models import LabelExtension, LabelOverride, PromptFacts, label
from trade_composer.trades.base import BaseTrade
from trade_composer.trades.base_template import BLUE, manager_labels, supplier_labels
from trade_composer.trades.registry import register_trade


@register_trade
class Electrician(BaseTrade):
    name = "Electrician"

    def behavior(self):
        return {
            "voiceProfile": {
                "tone": "Safety-focused, knowledgeable and reassuring",
                "formalityLevel": "professional",
                "allowPricingInReplies": False,
            },
            "behaviorGoals": [
                "Prioritize safety and flag any hazard that needs immediate attention",
                "Collect panel, circuit and permit details before scheduling",
                "Explain code compliance requirements in plain language",
            ],
            "autoReplyPolicy": {
                "enabledCategories": ["Sales", "Support", "Urgent"],
                "minConfidence": 0.75,
                "excludedDomains": ["noreply.com"],
            },
            "followUpGuidelines": {
                "preferredPhrasing": [
                    "Just checking in on your electrical project",
                    "Let us know if you have any questions",
                ],
            },
            "upsellGuidelines": {
                "enabled": True,
                "triggerCategories": ["Support"],
                "text": "While we're on site, we can also check your panel and install surge protection.",
            },
            "categoryOverrides": {
                "Urgent": {
                    "priorityLevel": 1,
                    "customLanguage": [
                        "If you smell burning or see sparks, shut off the breaker and call us right away.",
                    ],
                },
                "Sales": {
                    "priorityLevel": 3,
                    "customLanguage": ["We can provide a detailed quote after a quick site visit."],
                },
            },
            "signature": {
                "closingText": "Stay safe!",
                "signatureBlock": "Best regards,\nThe {{BUSINESS_NAME}} Team\nLicensed Electricians\n{{BUSINESS_PHONE}}",
            },
        }

    def label_extension(self):
        return LabelExtension(
            overrides={
                "MANAGER": LabelOverride(children=manager_labels("Unassigned", "Escalations")),
                "SUPPLIERS": LabelOverride(children=supplier_labels("Eaton", "Schneider Electric")),
                "URGENT": LabelOverride(
                    children=(
                        label("Power Outage"),
                        label("Burning Smell"),
                        label("Sparking Outlet"),
                        label("Other"),
                    )
                ),
            },
            additions=(
                label(
                    "SERVICE",
                    label("Emergency Repairs", label("Power Outage"), label("Breaker Trip")),
                    label("Wiring", label("Rewiring Projects"), label("Panel Upgrades")),
                    label("Lighting", label("Interior Lighting"), label("LED Upgrades")),
                    label("Installations", label("EV Chargers"), label("Generators")),
                    color=BLUE,
                    intent="ai.service_request",
                    critical=True,
                ),
            ),
        )

    def prompt_facts(self):
        return PromptFacts(
            primary_product_service="electrical services",
            primary_product_category="electrical components",
            inquiry_types=(
                "Service Job Inquiry (repairs / installations)",
                "New Electrical Work Inquiry",
                "Parts & Accessories Inquiry",
                "Technical Help / Troubleshooting",
            ),
            tech_prep_tips="(like ensuring the panel is accessible)",
            delivery_prep_actions="(access to electrical panel, circuit requirements)",
            partner_support="(like plumbers for related plumbing work)",
            technical_specs="amperage, voltage, or circuit requirements",
            upsell_opportunities="(like surge protectors, smart switches, or maintenance plans)",
            upsell_language=(
                '"If you need any surge protectors, smart switches, or electrical supplies, '
                'let us know. We can bring those along!"'
            ),
            product_details="brand, model, and approximate age",
            new_client_info_required=(
                "Full name",
                "Address (with city)",
                "Panel brand and approx. age",
                "Access details",
                "Problem description",
            ),
        )
