"""
Reply prompt composition.

Maps a merge result, the client's business facts and entity lists onto the
placeholder names used by the reply prompt template, then renders it.
"""

from typing import Any, Sequence

from trade_composer.core.logging import get_logger
from trade_composer.core.models import (
    BusinessFacts,
    Entity,
    MergeResult,
    RenderedTemplate,
)
from trade_composer.prompts.reply import REPLY_PROMPT
from trade_composer.services.template import (
    Template,
    TemplateComposer,
    TemplateContext,
    parse_template,
)

log = get_logger(__name__)

BUSINESS_DEFAULTS = {
    "BUSINESS_NAME": "Business",
    "BUSINESS_PHONE": "(555) 555-5555",
    "WEBSITE_URL": "https://example.com",
    "BUSINESS_TYPE": "General Services",
    "SERVICE_AREAS": "our local service area",
    "OPERATING_HOURS": "Monday-Friday 8AM-5PM",
    "RESPONSE_TIME": "24 hours",
    "TIMEZONE": "UTC/GMT -6",
    "MANAGER_NAME": "the team",
}

_REPLY_TEMPLATE = parse_template(REPLY_PROMPT)


def business_scalars(facts: BusinessFacts) -> dict[str, Any]:
    """Scalar placeholder values taken from business facts."""
    scalars: dict[str, Any] = dict(facts.extra)
    scalars.update(
        {
            "BUSINESS_NAME": facts.name,
            "BUSINESS_PHONE": facts.phone,
            "AFTER_HOURS_PHONE": facts.after_hours_phone,
            "WEBSITE_URL": facts.website_url,
            "EMAIL_DOMAIN": facts.email_domain,
            "CURRENCY": facts.currency,
            "TIMEZONE": facts.timezone,
            "SERVICE_AREAS": facts.service_areas,
            "OPERATING_HOURS": facts.operating_hours,
            "RESPONSE_TIME": facts.response_time,
            "PRICING_INFO": facts.pricing_info,
            "PAYMENT_OPTIONS": facts.payment_options,
            "UPCOMING_HOLIDAYS": facts.upcoming_holidays,
        }
    )
    website = (facts.website_url or "").rstrip("/")
    for key, path in facts.links.items():
        if not path:
            continue
        link = f"{website}{path}" if website and path.startswith("/") else path
        scalars[f"{key.upper()}_LINK"] = link
    return scalars


def signature_context(facts: BusinessFacts) -> TemplateContext:
    """Context for rendering a schema's signature block."""
    return TemplateContext(scalars=business_scalars(facts), defaults=BUSINESS_DEFAULTS)


class ReplyPromptBuilder:
    """Builds the reply assistant prompt for one client."""

    def __init__(self, composer: TemplateComposer | None = None):
        self.composer = composer or TemplateComposer()

    def build_context(
        self,
        merge_result: MergeResult,
        facts: BusinessFacts | None = None,
        managers: Sequence[Entity] = (),
        suppliers: Sequence[Entity] = (),
        now: str | None = None,
    ) -> tuple[TemplateContext, tuple[str, ...]]:
        """
        Map composition inputs onto template placeholder names.

        Args:
            merge_result: Output of the schema merger
            facts: Client business facts
            managers: Resolved managers, in order
            suppliers: Resolved suppliers, in order
            now: Caller-supplied current date/time; omitted from the context when None

        Returns:
            Tuple of (context, warnings from rendering the signature block)
        """
        facts = facts or BusinessFacts()
        schema = merge_result.schema
        prompt_facts = merge_result.prompt_facts

        signature = self.composer.render(schema.signature.signature_block, signature_context(facts))

        scalars = business_scalars(facts)
        scalars.update(
            {
                "BUSINESS_TYPE": " + ".join(merge_result.resolved_trades) or None,
                "MANAGER_NAME": managers[0].name if managers else None,
                "VOICE_TONE": schema.voice_profile.tone,
                "FORMALITY_LEVEL": schema.voice_profile.formality_level.value,
                "ALLOW_PRICING": schema.voice_profile.allow_pricing_in_replies,
                "MIN_CONFIDENCE": schema.auto_reply_policy.min_confidence,
                "UPSELL_ENABLED": schema.upsell_guidelines.enabled,
                "UPSELL_TEXT": schema.upsell_guidelines.text,
                "CLOSING_TEXT": schema.signature.closing_text,
                "SIGNATURE_BLOCK": signature.text,
                "PRIMARY_PRODUCT_SERVICE": prompt_facts.primary_product_service,
                "PRIMARY_PRODUCT_CATEGORY": prompt_facts.primary_product_category,
                "TECH_PREP_TIPS": prompt_facts.tech_prep_tips,
                "DELIVERY_PREP_ACTIONS": prompt_facts.delivery_prep_actions,
                "PARTNER_SUPPORT": prompt_facts.partner_support,
                "TECHNICAL_SPECS": prompt_facts.technical_specs,
                "UPSELL_OPPORTUNITIES": prompt_facts.upsell_opportunities,
                "UPSELL_LANGUAGE": prompt_facts.upsell_language,
                "PRODUCT_DETAILS": prompt_facts.product_details,
            }
        )
        if now is not None:
            scalars["CURRENT_DATE_TIME"] = now

        lists = {
            "managers": tuple(managers),
            "suppliers": tuple(suppliers),
            "behavior_goals": schema.behavior_goals,
            "preferred_phrasing": schema.follow_up_guidelines.preferred_phrasing,
            "inquiry_types": prompt_facts.inquiry_types,
            "new_client_info": prompt_facts.new_client_info_required,
            "service_areas": facts.service_areas,
            "upcoming_holidays": facts.upcoming_holidays,
            "category_overrides": tuple(
                {
                    "category": category,
                    "priority": override.priority_level,
                    "language": override.custom_language,
                }
                for category, override in schema.category_overrides.items()
            ),
        }

        context = TemplateContext(scalars=scalars, lists=lists, defaults=BUSINESS_DEFAULTS)
        return context, signature.warnings

    def build(
        self,
        merge_result: MergeResult,
        facts: BusinessFacts | None = None,
        managers: Sequence[Entity] = (),
        suppliers: Sequence[Entity] = (),
        template: Template | str | None = None,
        now: str | None = None,
    ) -> RenderedTemplate:
        """
        Render the reply prompt.

        Args:
            template: Template text or parsed template (defaults to REPLY_PROMPT)

        Returns:
            RenderedTemplate with the prompt text
        """
        context, signature_warnings = self.build_context(merge_result, facts, managers, suppliers, now)
        rendered = self.composer.render(template if template is not None else _REPLY_TEMPLATE, context)
        log.debug(
            "reply_prompt_built",
            trades=list(merge_result.resolved_trades),
            length=len(rendered.text),
            unresolved=list(rendered.unresolved),
        )
        if not signature_warnings:
            return rendered
        return RenderedTemplate(
            text=rendered.text,
            unresolved=rendered.unresolved,
            warnings=tuple(dict.fromkeys(signature_warnings + rendered.warnings)),
        )
