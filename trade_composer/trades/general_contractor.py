"""
General Contractor trade definition.
"""

from trade_composer.core.models import LabelExtension, LabelOverride, PromptFacts, label
from trade_composer.trades.base import BaseTrade
from trade_composer.trades.base_template import (
    BLUE,
    PURPLE,
    RED,
    manager_labels,
    supplier_labels,
)
from trade_composer.trades.registry import register_trade


@register_trade
class GeneralContractor(BaseTrade):
    name = "General Contractor"
    aliases = ("General Construction",)

    def behavior(self):
        return {
            "voiceProfile": {
                "tone": "Organized, dependable and professional",
                "formalityLevel": "professional",
                "allowPricingInReplies": False,
            },
            "behaviorGoals": [
                "Qualify project scope, timeline and budget early",
                "Keep clients updated on permits and site progress",
                "Coordinate subcontractors and material deliveries",
            ],
            "autoReplyPolicy": {
                "enabledCategories": ["Sales", "Support"],
                "minConfidence": 0.8,
                "excludedDomains": [],
            },
            "followUpGuidelines": {
                "preferredPhrasing": [
                    "Following up on your project estimate",
                    "Let us know if you have any questions",
                ],
            },
            "upsellGuidelines": {
                "enabled": True,
                "triggerCategories": ["Sales"],
                "text": "We can also handle finishing work so your project stays with one crew.",
            },
            "categoryOverrides": {
                "Urgent": {
                    "priorityLevel": 1,
                    "customLanguage": ["Keep everyone clear of the affected area until our crew arrives."],
                },
            },
            "signature": {
                "closingText": "We look forward to building with you.",
                "signatureBlock": "Regards,\n{{BUSINESS_NAME}}\n{{BUSINESS_PHONE}}\n{{WEBSITE_URL}}",
            },
        }

    def label_extension(self):
        return LabelExtension(
            overrides={
                "MANAGER": LabelOverride(
                    children=manager_labels("Unassigned", "Escalations", "Project Oversight")
                ),
                "SALES": LabelOverride(
                    children=(
                        label("New Leads"),
                        label("Quote Follow-ups"),
                        label("Project Bids"),
                        label("Consultations"),
                    )
                ),
                "SUPPLIERS": LabelOverride(
                    children=supplier_labels("Building Materials", "Concrete Supplier")
                ),
            },
            additions=(
                label(
                    "PROJECTS",
                    label("Active Projects"),
                    label("Pending Approval"),
                    label("Completed Projects"),
                    label("Change Orders"),
                    color=BLUE,
                    intent="ai.project_management",
                    critical=True,
                ),
                label(
                    "PERMITS",
                    label("Permit Requests"),
                    label("Inspections"),
                    label("City Correspondence"),
                    color=PURPLE,
                    intent="ai.permit_and_compliance",
                ),
                label(
                    "SAFETY",
                    label("Incident Reports"),
                    label("Safety Meetings"),
                    label("Worksite Hazards"),
                    color=RED,
                    intent="ai.safety_alert",
                    critical=True,
                ),
            ),
            anchor="SUPPORT",
        )

    def prompt_facts(self):
        return PromptFacts(
            primary_product_service="construction and renovation services",
            primary_product_category="construction materials",
            inquiry_types=(
                "Project Inquiry (renovations / construction)",
                "New Build Inquiry",
                "Materials & Supplies Inquiry",
                "Technical Help / Troubleshooting",
            ),
            tech_prep_tips="(like ensuring the work area is accessible)",
            delivery_prep_actions="(access to work area, material delivery location)",
            partner_support="(like electricians, plumbers, and other trades)",
            technical_specs="dimensions, materials, or structural requirements",
            upsell_opportunities="(like materials, fixtures, or additional services)",
            upsell_language=(
                '"If you need any materials, fixtures, or additional services, '
                'let us know. We can include those in the project!"'
            ),
            product_details="dimensions, materials, and current condition",
            new_client_info_required=(
                "Full name",
                "Address (with city)",
                "Project type and scope",
                "Access details",
                "Timeline and budget",
            ),
        )
