"""
Pools & Spas trade definition, shared by hot tub and sauna businesses.
"""

from trade_composer.core.models import LabelExtension, LabelOverride, PromptFacts, label
from trade_composer.trades.base import BaseTrade
from trade_composer.trades.base_template import supplier_labels
from trade_composer.trades.registry import register_trade


@register_trade
class PoolsSpas(BaseTrade):
    name = "Pools & Spas"
    aliases = ("Pools", "Hot tub & Spa", "Sauna & Icebath")

    def behavior(self):
        return {
            "voiceProfile": {
                "tone": "Warm, upbeat and expert",
                "formalityLevel": "casual",
                "allowPricingInReplies": True,
            },
            "behaviorGoals": [
                "Turn new spa inquiries into showroom visits or wet tests",
                "Help owners with water chemistry and error codes",
                "Schedule service visits with the right parts on the truck",
            ],
            "autoReplyPolicy": {
                "enabledCategories": ["Sales", "Support", "Urgent"],
                "minConfidence": 0.75,
                "excludedDomains": ["noreply.com"],
            },
            "followUpGuidelines": {
                "preferredPhrasing": [
                    "Just following up on your hot tub",
                    "Let us know if you have any questions",
                    "Happy soaking!",
                ],
            },
            "upsellGuidelines": {
                "enabled": True,
                "triggerCategories": ["Support", "Sales"],
                "text": "If you need any filters, chemicals or test strips, the tech can bring them out.",
            },
            "categoryOverrides": {
                "Urgent": {
                    "priorityLevel": 2,
                    "customLanguage": ["Turn off power to the spa at the breaker until we arrive."],
                },
                "Sales": {
                    "priorityLevel": 2,
                    "customLanguage": ["Come try a wet test at our showroom!"],
                },
            },
            "signature": {
                "closingText": "Thanks so much for supporting our small business!",
                "signatureBlock": "Best regards,\nThe {{BUSINESS_NAME}} Team\n{{BUSINESS_PHONE}}",
            },
        }

    def label_extension(self):
        return LabelExtension(
            overrides={
                "SALES": LabelOverride(
                    children=(
                        label("New Spa Sales"),
                        label("Accessory Sales"),
                        label("Consultations"),
                        label("Quote Requests"),
                    ),
                    description="Hot tub, spa and accessory sales",
                ),
                "SUPPORT": LabelOverride(
                    children=(
                        label("Appointment Scheduling"),
                        label("General"),
                        label("Technical Support"),
                        label("Parts And Chemicals"),
                    ),
                ),
                "SUPPLIERS": LabelOverride(children=supplier_labels("AquaSpaPoolSupply", "StrongSpas")),
            },
        )

    def prompt_facts(self):
        return PromptFacts(
            primary_product_service="hot tubs and spas",
            primary_product_category="spas",
            inquiry_types=(
                "Service Job Inquiry (repairs / site inspections)",
                "New Spa Inquiry (shopping for a new hot tub)",
                "Chemicals & Parts Inquiry (supplies or replacement parts)",
                "Technical Help / Troubleshooting (error codes, leaks, water chemistry)",
            ),
            tech_prep_tips="(like ensuring the tub is full and accessible)",
            delivery_prep_actions="(gate width, electrical readiness, access path)",
            partner_support="(like electricians for spa electrical work)",
            technical_specs="amperage, clearance, or installation requirements",
            upsell_opportunities="(like filters, chemicals, or accessories)",
            upsell_language=(
                '"If you need any filters, chemicals, or test strips, let us know. '
                'We can have the tech bring those out with them!"'
            ),
            product_details="brand, model, and approximate year",
            new_client_info_required=(
                "Full name",
                "Address (with city)",
                "Spa brand and approx. year",
                "Access details",
                "Problem description and any error codes",
            ),
        )
