"""
Roofing trade definition.
"""

from trade_composer.core.models import LabelExtension, LabelOverride, label
from trade_composer.trades.base import BaseTrade
from trade_composer.trades.base_template import BLUE, PURPLE
from trade_composer.trades.registry import register_trade


@register_trade
class Roofing(BaseTrade):
    name = "Roofing"
    aliases = ("Roofing Contractor",)

    def behavior(self):
        return {
            "voiceProfile": {
                "tone": "Reassuring, honest and weather-aware",
                "formalityLevel": "medium",
                "allowPricingInReplies": False,
            },
            "behaviorGoals": [
                "Book inspections quickly after storm damage",
                "Guide homeowners through insurance claims",
                "Collect roof age, material and photos of the damage",
            ],
            "autoReplyPolicy": {
                "enabledCategories": ["Sales", "Support", "Urgent"],
                "minConfidence": 0.8,
                "excludedDomains": [],
            },
            "followUpGuidelines": {
                "preferredPhrasing": [
                    "Following up on your roof inspection",
                    "Let us know if you have any questions",
                ],
            },
            "upsellGuidelines": {
                "enabled": True,
                "triggerCategories": ["Support"],
                "text": "We can also clean and repair your gutters during the same visit.",
            },
            "categoryOverrides": {
                "Urgent": {
                    "priorityLevel": 1,
                    "customLanguage": ["We can tarp active leaks the same day."],
                },
            },
            "signature": {
                "closingText": "Thanks for trusting us with your roof.",
                "signatureBlock": "Best regards,\nThe {{BUSINESS_NAME}} Team\n{{BUSINESS_PHONE}}",
            },
        }

    def label_extension(self):
        return LabelExtension(
            overrides={
                "URGENT": LabelOverride(
                    children=(
                        label("Active Leaks"),
                        label("Storm Damage"),
                        label("Other"),
                    )
                ),
            },
            additions=(
                label(
                    "INSPECTIONS",
                    label("Initial Inspections"),
                    label("Post-Repair Inspections"),
                    label("Drone Reports"),
                    color=PURPLE,
                    intent="ai.site_inspection",
                ),
                label(
                    "PROJECTS",
                    label("Active Jobs"),
                    label("Shingle Installations"),
                    label("Metal Roofing"),
                    label("Gutter Work"),
                    color=BLUE,
                    intent="ai.project_management",
                    critical=True,
                ),
                label(
                    "INSURANCE",
                    label("New Claims"),
                    label("In Progress"),
                    label("Adjuster Communication"),
                    color=PURPLE,
                    intent="ai.claim_management",
                ),
            ),
            anchor="SUPPORT",
        )
