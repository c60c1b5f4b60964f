"""
Flattened behavior configuration for workflow deployment.

Exposes a merged schema as BEHAVIOR_* placeholder values and builds
category-specific reply instructions.
"""

import json
from dataclasses import dataclass, field
from typing import Mapping

from trade_composer.core.models import BusinessFacts, CategoryOverride, TradeSchema
from trade_composer.services.prompt import signature_context
from trade_composer.services.template import TemplateComposer, TemplateContext


@dataclass(frozen=True)
class BehaviorConfig:
    voice_tone: str
    formality_level: str
    allow_pricing: bool
    upsell_text: str
    follow_up_text: str
    behavior_goals: tuple[str, ...]
    closing_text: str
    signature_template: str
    category_overrides: Mapping[str, CategoryOverride] = field(default_factory=dict)
    reply_prompt: str = ""

    @classmethod
    def from_schema(
        cls,
        schema: TradeSchema,
        facts: BusinessFacts | None = None,
        composer: TemplateComposer | None = None,
        reply_prompt: str = "",
    ) -> "BehaviorConfig":
        """Flatten a schema, rendering its signature block against the business facts."""
        composer = composer or TemplateComposer()
        signature = composer.render(
            schema.signature.signature_block, signature_context(facts or BusinessFacts())
        )
        upsell = schema.upsell_guidelines
        return cls(
            voice_tone=schema.voice_profile.tone,
            formality_level=schema.voice_profile.formality_level.value,
            allow_pricing=schema.voice_profile.allow_pricing_in_replies,
            upsell_text=upsell.text if upsell.enabled else "",
            follow_up_text="\n".join(schema.follow_up_guidelines.preferred_phrasing),
            behavior_goals=schema.behavior_goals,
            closing_text=schema.signature.closing_text,
            signature_template=signature.text,
            category_overrides=dict(schema.category_overrides),
            reply_prompt=reply_prompt,
        )


def behavior_placeholders(config: BehaviorConfig) -> dict[str, str]:
    """BEHAVIOR_* placeholder values, ready to use as template scalars."""
    return {
        "BEHAVIOR_VOICE_TONE": config.voice_tone,
        "BEHAVIOR_FORMALITY": config.formality_level,
        "BEHAVIOR_ALLOW_PRICING": "true" if config.allow_pricing else "false",
        "BEHAVIOR_UPSELL_TEXT": config.upsell_text,
        "BEHAVIOR_FOLLOWUP_TEXT": config.follow_up_text,
        "BEHAVIOR_GOALS": "\n".join(f"{i}. {goal}" for i, goal in enumerate(config.behavior_goals, start=1)),
        "BEHAVIOR_REPLY_PROMPT": config.reply_prompt,
        "BEHAVIOR_CATEGORY_OVERRIDES": json.dumps(
            {category: override.to_dict() for category, override in config.category_overrides.items()}
        ),
        "BEHAVIOR_SIGNATURE_TEMPLATE": config.signature_template,
    }


def behavior_context(config: BehaviorConfig) -> TemplateContext:
    return TemplateContext(scalars=behavior_placeholders(config))


def category_instructions(category: str, config: BehaviorConfig) -> str:
    """
    Reply instructions for one email category.

    Falls back to the plain reply prompt when the category has no override.
    """
    override = config.category_overrides.get(category)
    if override is None:
        return config.reply_prompt

    lines = [f"Replying to {category} email:", "", f"Use {config.voice_tone} tone."]
    if override.custom_language:
        lines += ["", "Include these elements:"]
        lines += [f"- {phrase}" for phrase in override.custom_language]
    lines += ["", f"Priority: {override.priority_level}", "", config.reply_prompt]
    return "\n".join(lines)
