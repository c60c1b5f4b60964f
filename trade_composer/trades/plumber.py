"""
Plumber trade definition.
"""

from trade_composer.core.models import LabelExtension, LabelOverride, PromptFacts, label
from trade_composer.trades.base import BaseTrade
from trade_composer.trades.base_template import BLUE, supplier_labels
from trade_composer.trades.registry import register_trade


@register_trade
class Plumber(BaseTrade):
    name = "Plumber"
    aliases = ("Plumbing",)

    def behavior(self):
        return {
            "voiceProfile": {
                "tone": "Calm, practical and direct",
                "formalityLevel": "casual",
                "allowPricingInReplies": False,
            },
            "behaviorGoals": [
                "Help customers stop active leaks before the technician arrives",
                "Collect fixture brand, location and shut-off access",
                "Book repairs into the earliest available window",
            ],
            "autoReplyPolicy": {
                "enabledCategories": ["Support", "Urgent"],
                "minConfidence": 0.78,
                "excludedDomains": [],
            },
            "followUpGuidelines": {
                "preferredPhrasing": [
                    "Just checking the repair is holding up",
                    "Let us know if you have any questions",
                ],
            },
            "upsellGuidelines": {
                "enabled": False,
                "triggerCategories": [],
                "text": "",
            },
            "categoryOverrides": {
                "Urgent": {
                    "priorityLevel": 1,
                    "customLanguage": ["Turn off the main water valve if water is still running."],
                },
            },
            "signature": {
                "closingText": "Thanks for calling us!",
                "signatureBlock": "Cheers,\nThe {{BUSINESS_NAME}} Team\n{{BUSINESS_PHONE}}",
            },
        }

    def label_extension(self):
        return LabelExtension(
            overrides={
                "SUPPLIERS": LabelOverride(children=supplier_labels("Ferguson", "Moen")),
                "URGENT": LabelOverride(
                    children=(
                        label("Burst Pipe"),
                        label("Flooding"),
                        label("No Hot Water"),
                        label("Sewer Backup"),
                    )
                ),
            },
            additions=(
                label(
                    "SERVICE",
                    label("Leak Repairs"),
                    label("Drain Cleaning"),
                    label("Water Heaters"),
                    label("Fixture Installs"),
                    color=BLUE,
                    intent="ai.service_request",
                    critical=True,
                ),
            ),
        )

    def prompt_facts(self):
        return PromptFacts(
            primary_product_service="plumbing services",
            primary_product_category="plumbing fixtures",
            inquiry_types=(
                "Service Job Inquiry (repairs / installations)",
                "New Fixture Inquiry",
                "Parts & Accessories Inquiry",
                "Technical Help / Troubleshooting",
            ),
            tech_prep_tips="(like ensuring water is turned off)",
            delivery_prep_actions="(access to plumbing lines, shut-off locations)",
            partner_support="(like electricians for electrical work)",
            technical_specs="pipe sizes, water pressure, or installation requirements",
            upsell_opportunities="(like fixtures, water treatment, or maintenance plans)",
            upsell_language=(
                '"If you need any fixtures, water treatment, or maintenance supplies, '
                'let us know. We can bring those along!"'
            ),
            product_details="brand, model, and approximate age",
            new_client_info_required=(
                "Full name",
                "Address (with city)",
                "Fixture brand and approx. age",
                "Access details",
                "Problem description",
            ),
        )
