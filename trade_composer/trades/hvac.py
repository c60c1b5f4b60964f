"""
HVAC trade definition.
"""

from trade_composer.core.models import LabelExtension, LabelOverride, PromptFacts, label
from trade_composer.trades.base import BaseTrade
from trade_composer.trades.base_template import BLUE, PURPLE, manager_labels, supplier_labels
from trade_composer.trades.registry import register_trade


@register_trade
class HVAC(BaseTrade):
    name = "HVAC"

    def behavior(self):
        return {
            "voiceProfile": {
                "tone": "Friendly, responsive and comfort-focused",
                "formalityLevel": "medium",
                "allowPricingInReplies": True,
            },
            "behaviorGoals": [
                "Restore heating or cooling as quickly as possible",
                "Recommend seasonal maintenance plans where appropriate",
                "Collect system brand, age and symptoms before dispatch",
            ],
            "autoReplyPolicy": {
                "enabledCategories": ["Sales", "Support", "Urgent", "Service"],
                "minConfidence": 0.8,
                "excludedDomains": ["mailer-daemon.com"],
            },
            "followUpGuidelines": {
                "preferredPhrasing": [
                    "Just following up to make sure your system is running well",
                    "Let us know if you have any questions",
                    "Would you like to book your next tune-up?",
                ],
            },
            "upsellGuidelines": {
                "enabled": True,
                "triggerCategories": ["Service", "Support"],
                "text": "Ask us about our maintenance plans and filter delivery.",
            },
            "categoryOverrides": {
                "Urgent": {
                    "priorityLevel": 1,
                    "customLanguage": [
                        "If you smell gas, leave the building and call your gas utility first.",
                    ],
                },
                "Service": {
                    "priorityLevel": 2,
                    "customLanguage": ["We'll confirm a technician window within one business day."],
                },
            },
            "signature": {
                "closingText": "Stay comfortable!",
                "signatureBlock": "Best regards,\nThe {{BUSINESS_NAME}} Team\n{{BUSINESS_PHONE}}",
            },
        }

    def label_extension(self):
        return LabelExtension(
            overrides={
                "MANAGER": LabelOverride(children=manager_labels("Unassigned", "Escalations", "Dispatch")),
                "SALES": LabelOverride(
                    children=(
                        label("New System Quotes"),
                        label("Consultations"),
                        label("Maintenance Plans"),
                        label("Ductless Quotes"),
                    )
                ),
                "SUPPLIERS": LabelOverride(children=supplier_labels("Lennox", "Carrier", "Trane")),
                "URGENT": LabelOverride(
                    children=(
                        label("No Heat"),
                        label("No Cooling"),
                        label("Carbon Monoxide Alert"),
                        label("Water Leak"),
                    )
                ),
            },
            additions=(
                label(
                    "SERVICE",
                    label("Emergency Heating", label("Furnace No Heat"), label("Boiler Failure")),
                    label("Emergency Cooling", label("AC Not Cooling"), label("Compressor Failure")),
                    label("Seasonal Maintenance", label("Spring Tune-up"), label("Fall Inspection")),
                    label("New Installations", label("Heat Pump"), label("Ductless Mini Split")),
                    color=BLUE,
                    intent="ai.service_request",
                    critical=True,
                ),
                label(
                    "WARRANTY",
                    label("Claims"),
                    label("Pending Review"),
                    label("Approved"),
                    label("Denied"),
                    color=PURPLE,
                    intent="ai.warranty_claim",
                    critical=True,
                ),
            ),
            anchor="SALES",
        )

    def prompt_facts(self):
        return PromptFacts(
            primary_product_service="HVAC systems",
            primary_product_category="HVAC equipment",
            inquiry_types=(
                "Service Job Inquiry (repairs / maintenance)",
                "New System Inquiry (shopping for HVAC equipment)",
                "Parts & Accessories Inquiry",
                "Technical Help / Troubleshooting",
            ),
            tech_prep_tips="(like ensuring the system is accessible and powered off)",
            delivery_prep_actions="(access to installation area, electrical requirements)",
            partner_support="(like electricians for electrical connections)",
            technical_specs="BTU requirements, ductwork, or electrical specifications",
            upsell_opportunities="(like filters, thermostats, or maintenance plans)",
            upsell_language=(
                '"If you need any filters, thermostats, or maintenance supplies, '
                'let us know. We can bring those along!"'
            ),
            product_details="brand, model, and approximate age",
            new_client_info_required=(
                "Full name",
                "Address (with city)",
                "System brand and approx. age",
                "Access details",
                "Problem description and any error codes",
            ),
        )
