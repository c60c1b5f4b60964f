"""
Landscaping trade definition.
"""

from trade_composer.core.models import LabelExtension, LabelOverride, PromptFacts, label
from trade_composer.trades.base import BaseTrade
from trade_composer.trades.base_template import BLUE, PURPLE
from trade_composer.trades.registry import register_trade


@register_trade
class Landscaping(BaseTrade):
    name = "Landscaping"

    def behavior(self):
        return {
            "voiceProfile": {
                "tone": "Friendly, creative and seasonal",
                "formalityLevel": "casual",
                "allowPricingInReplies": True,
            },
            "behaviorGoals": [
                "Book site visits for design and installation work",
                "Sign customers up for recurring seasonal maintenance",
                "Collect property size and access details",
            ],
            "autoReplyPolicy": {
                "enabledCategories": ["Sales", "Support"],
                "minConfidence": 0.75,
                "excludedDomains": [],
            },
            "followUpGuidelines": {
                "preferredPhrasing": [
                    "Just following up on your yard project",
                    "Let us know if you have any questions",
                ],
            },
            "upsellGuidelines": {
                "enabled": True,
                "triggerCategories": ["Sales", "Support"],
                "text": "Ask about our seasonal cleanup and irrigation packages.",
            },
            "categoryOverrides": {
                "Sales": {
                    "priorityLevel": 2,
                    "customLanguage": ["Spring bookings fill fast, so reserve your spot early."],
                },
            },
            "signature": {
                "closingText": "See you outside!",
                "signatureBlock": "Cheers,\nThe {{BUSINESS_NAME}} Crew\n{{BUSINESS_PHONE}}",
            },
        }

    def label_extension(self):
        return LabelExtension(
            overrides={
                "SALES": LabelOverride(
                    children=(
                        label("Design Consultations"),
                        label("Quote Requests"),
                        label("Maintenance Contracts"),
                    )
                ),
            },
            additions=(
                label(
                    "PROJECTS",
                    label("Active Jobs"),
                    label("Pending Start"),
                    label("Completed Jobs"),
                    label("Hardscape Installations"),
                    color=BLUE,
                    intent="ai.project_management",
                    critical=True,
                ),
                label(
                    "MAINTENANCE",
                    label("Lawn Care"),
                    label("Tree Trimming"),
                    label("Irrigation Services"),
                    label("Snow Removal"),
                    color=PURPLE,
                    intent="ai.maintenance_task",
                ),
                label(
                    "ESTIMATES",
                    label("Pending Estimates"),
                    label("Approved Estimates"),
                    label("Revisions"),
                    color=PURPLE,
                    intent="ai.estimate_request",
                ),
            ),
            anchor="SUPPORT",
        )

    def prompt_facts(self):
        return PromptFacts(
            primary_product_service="landscaping and outdoor services",
            primary_product_category="landscaping materials",
            inquiry_types=(
                "Service Job Inquiry (maintenance / installations)",
                "New Landscape Design Inquiry",
                "Plants & Materials Inquiry",
                "Technical Help / Troubleshooting",
            ),
            tech_prep_tips="(like ensuring the area is accessible)",
            delivery_prep_actions="(access to property, soil conditions)",
            partner_support="(like irrigation specialists)",
            technical_specs="soil conditions, drainage, or irrigation requirements",
            upsell_opportunities="(like plants, irrigation, or maintenance services)",
            upsell_language=(
                '"If you need any plants, irrigation supplies, or maintenance services, '
                'let us know. We can include those!"'
            ),
            product_details="size, type, and current condition",
            new_client_info_required=(
                "Full name",
                "Address (with city)",
                "Property size and type",
                "Access details",
                "Desired services",
            ),
        )
