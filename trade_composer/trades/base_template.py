"""
Universal base template.

The fallback behavior schema used when no requested trade resolves, and the
taxonomy every trade extends. Manager and supplier placeholders are slot
nodes filled from the client's entity lists at composition time.
"""

from trade_composer.core.models import EntityKind, LabelColor, Taxonomy, label, slot_labels

MANAGER_SLOTS = 5
SUPPLIER_SLOTS = 10

GREEN = LabelColor("#16a766")
DARK_GREEN = LabelColor("#0b804b")
YELLOW = LabelColor("#fad165", "#000000")
ORANGE = LabelColor("#ffad47", "#000000")
BLUE = LabelColor("#4a86e8")
LIGHT_BLUE = LabelColor("#6d9eeb")
RED = LabelColor("#fb4c2f")
GREY = LabelColor("#999999")
MINT = LabelColor("#43d692", "#000000")
PINK = LabelColor("#e07798")
PURPLE = LabelColor("#a479e2")

BASE_BEHAVIOR = {
    "voiceProfile": {
        "tone": "Friendly, professional, and helpful",
        "formalityLevel": "medium",
        "allowPricingInReplies": False,
    },
    "behaviorGoals": [
        "Acknowledge every inquiry promptly and set clear expectations",
        "Gather the details needed to schedule service or prepare a quote",
        "Route urgent issues to the on-call team without delay",
    ],
    "autoReplyPolicy": {
        "enabledCategories": ["Sales", "Support", "Urgent"],
        "minConfidence": 0.75,
        "excludedDomains": [],
    },
    "followUpGuidelines": {
        "preferredPhrasing": [
            "Just following up on your request",
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
            "customLanguage": ["We understand this is urgent and are prioritizing your request."],
        },
    },
    "signature": {
        "closingText": "Thanks for reaching out!",
        "signatureBlock": "Best regards,\nThe {{BUSINESS_NAME}} Team\n{{BUSINESS_PHONE}}",
    },
}

BASE_ROOT_ORDER = (
    "BANKING",
    "FORMSUB",
    "GOOGLE REVIEW",
    "MANAGER",
    "SALES",
    "SUPPLIERS",
    "SUPPORT",
    "URGENT",
    "MISC",
    "PHONE",
    "PROMO",
    "RECRUITMENT",
    "SOCIALMEDIA",
)

BASE_LABELS = (
    label(
        "BANKING",
        label("BankAlert"),
        label("e-Transfer", label("Transfer Sent"), label("Transfer Received")),
        label("Invoice"),
        label("Payment Confirmation"),
        label("Receipts", label("Payment Received"), label("Payment Sent")),
        label("Refund"),
        color=GREEN,
        intent="ai.financial_transaction",
        critical=True,
        description="Invoices, payments, bank alerts and receipts",
    ),
    label(
        "FORMSUB",
        label("New Submission"),
        label("Work Order Forms"),
        color=DARK_GREEN,
        intent="ai.form_submission",
        description="Website contact, inquiry and work order forms",
    ),
    label(
        "GOOGLE REVIEW",
        color=YELLOW,
        intent="ai.customer_feedback",
        description="Google Business reviews and review notifications",
    ),
    label(
        "MANAGER",
        label("Unassigned"),
        *slot_labels(EntityKind.MANAGER, MANAGER_SLOTS),
        color=ORANGE,
        intent="ai.internal_routing",
        description="Emails needing a manager's attention or not yet assigned",
    ),
    label(
        "SALES",
        label("Quotes"),
        label("Consultations"),
        label("Follow-ups"),
        color=GREEN,
        intent="ai.sales_inquiry",
        description="Sales inquiries, quotes and consultations",
    ),
    label(
        "SUPPLIERS",
        *slot_labels(EntityKind.SUPPLIER, SUPPLIER_SLOTS),
        color=ORANGE,
        intent="ai.vendor_communication",
        description="Supplier and vendor orders, invoices and updates",
    ),
    label(
        "SUPPORT",
        label("Appointment Scheduling"),
        label("General"),
        label("Technical Support"),
        color=BLUE,
        intent="ai.support_ticket",
        description="Customer support, service requests and technical help",
    ),
    label(
        "URGENT",
        label("Emergency Repairs"),
        label("Safety Issues"),
        label("System Outages"),
        label("Other"),
        color=RED,
        intent="ai.emergency_request",
        critical=True,
        description="Emergencies and time-sensitive requests",
    ),
    label(
        "MISC",
        label("General"),
        label("Personal"),
        color=GREY,
        intent="ai.general",
        description="General correspondence",
    ),
    label(
        "PHONE",
        label("Incoming Calls"),
        label("Voicemails"),
        color=LIGHT_BLUE,
        intent="ai.call_log",
        description="Call logs and voicemail notifications",
    ),
    label(
        "PROMO",
        label("Social Media"),
        label("Special Offers"),
        color=MINT,
        intent="ai.marketing",
        description="Marketing campaigns and promotions",
    ),
    label(
        "RECRUITMENT",
        label("Job Applications"),
        label("Interviews"),
        label("New Hires"),
        color=PINK,
        intent="ai.hr",
        description="Job applications, interviews and hiring",
    ),
    label(
        "SOCIALMEDIA",
        label("Facebook"),
        label("Instagram"),
        label("Google My Business"),
        label("LinkedIn"),
        color=ORANGE,
        intent="ai.social_engagement",
        description="Social platform messages, comments and mentions",
    ),
)

BASE_TAXONOMY = Taxonomy(labels=BASE_LABELS, root_order=BASE_ROOT_ORDER)


def manager_labels(*fixed: str):
    """MANAGER children: fixed routing labels followed by the manager slots."""
    return tuple(label(name) for name in fixed) + slot_labels(EntityKind.MANAGER, MANAGER_SLOTS)


def supplier_labels(*fixed: str):
    """SUPPLIERS children: well-known suppliers followed by the supplier slots."""
    return tuple(label(name) for name in fixed) + slot_labels(EntityKind.SUPPLIER, SUPPLIER_SLOTS)
