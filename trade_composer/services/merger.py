"""
Schema merger.

Folds the base schemas of a client's trades into one schema. The first
resolved trade is the primary one; fields that cannot be combined come
from it.
"""

import re
from dataclasses import replace
from typing import Iterable, Sequence

from trade_composer.config import settings
from trade_composer.core.logging import get_logger
from trade_composer.core.models import (
    AutoReplyPolicy,
    CategoryOverride,
    FollowUpGuidelines,
    MergeResult,
    PromptFacts,
    Signature,
    TradeSchema,
    UpsellGuidelines,
    VoiceProfile,
)
from trade_composer.core.taxonomy import extend_taxonomy
from trade_composer.trades.registry import RegisteredTrade, SchemaRegistry, default_registry

log = get_logger(__name__)

_TONE_SEPARATOR = re.compile(r",|\s+and\s+", re.IGNORECASE)


def _ordered_union(groups: Iterable[Iterable[str]]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(item for group in groups for item in group))


def merge_voice_profiles(
    profiles: Sequence[VoiceProfile], trade_names: Sequence[str], max_traits: int
) -> VoiceProfile:
    tokens = []
    for profile in profiles:
        for token in _TONE_SEPARATOR.split(profile.tone.lower()):
            token = token.strip()
            if token:
                tokens.append(token)
    traits = list(dict.fromkeys(tokens))[:max_traits]

    # max() keeps the first of equally formal profiles
    most_formal = max(profiles, key=lambda p: p.formality_level.rank)

    return VoiceProfile(
        tone=f"{', '.join(traits)} with multi-service expertise ({' + '.join(trade_names)})",
        formality_level=most_formal.formality_level,
        allow_pricing_in_replies=any(p.allow_pricing_in_replies for p in profiles),
    )


def merge_goals(schemas: Sequence[TradeSchema], trade_names: Sequence[str]) -> tuple[str, ...]:
    goals = _ordered_union(s.behavior_goals for s in schemas)
    coordination = (
        f"Coordinate between {', '.join(trade_names)} services when customer needs span multiple areas"
    )
    return tuple(dict.fromkeys(goals + (coordination,)))


def merge_auto_reply(schemas: Sequence[TradeSchema], floor: float) -> AutoReplyPolicy:
    policies = [s.auto_reply_policy for s in schemas]
    return AutoReplyPolicy(
        enabled_categories=_ordered_union(p.enabled_categories for p in policies),
        min_confidence=max([floor] + [p.min_confidence for p in policies]),
        excluded_domains=policies[0].excluded_domains,
    )


def merge_upsell(schemas: Sequence[TradeSchema], trade_names: Sequence[str]) -> UpsellGuidelines:
    upsells = [s.upsell_guidelines for s in schemas]
    return UpsellGuidelines(
        enabled=any(u.enabled for u in upsells),
        trigger_categories=_ordered_union(u.trigger_categories for u in upsells),
        text=(
            f"We offer {', '.join(trade_names)} services. While we're addressing your "
            f"{trade_names[0].lower()} needs, we can also help with related services "
            f"to save you time and money."
        ),
    )


def merge_category_overrides(schemas: Sequence[TradeSchema]) -> dict[str, CategoryOverride]:
    """Union custom language per category; the lowest priority level wins."""
    merged: dict[str, CategoryOverride] = {}
    for schema in schemas:
        for category, override in schema.category_overrides.items():
            existing = merged.get(category)
            if existing is None:
                merged[category] = override
                continue
            merged[category] = CategoryOverride(
                priority_level=min(existing.priority_level, override.priority_level),
                custom_language=_ordered_union([existing.custom_language, override.custom_language]),
            )
    return merged


def merge_signatures(schemas: Sequence[TradeSchema], trade_names: Sequence[str]) -> Signature:
    more = " and more" if len(trade_names) > 2 else ""
    return Signature(
        closing_text=f"Thanks for choosing us for your {' and '.join(trade_names[:2])}{more} needs!",
        signature_block=schemas[0].signature.signature_block,
    )


def merge_prompt_facts(trades: Sequence[RegisteredTrade]) -> PromptFacts:
    """The primary trade's vocabulary, with inquiry types from every trade."""
    primary = trades[0].prompt_facts
    if len(trades) == 1:
        return primary
    return replace(
        primary, inquiry_types=_ordered_union(t.prompt_facts.inquiry_types for t in trades)
    )


def validate_schema(schema: TradeSchema) -> list[str]:
    """
    Structural issues of a schema, empty when it is usable.

    Returns:
        Human-readable issue strings
    """
    issues = []
    if not schema.voice_profile.tone:
        issues.append("Missing voiceProfile.tone")
    if schema.voice_profile.formality_level is None:
        issues.append("Missing voiceProfile.formalityLevel")
    if not schema.behavior_goals:
        issues.append("No behavior goals defined")
    if not schema.signature.signature_block:
        issues.append("Missing signature.signatureBlock")
    return issues


class SchemaMerger:
    """
    Merges trade schemas.

    Unknown trade types are skipped with a warning. With no resolvable
    trade the registry's base template is returned; with exactly one, that
    trade's schema is returned as is.
    """

    def __init__(self, registry: SchemaRegistry | None = None):
        self.registry = registry or default_registry()

    def resolve(self, trade_types: Iterable[str]) -> tuple[list[RegisteredTrade], list[str]]:
        """
        Resolve trade-type names in order, dropping unknown and repeated ones.

        Returns:
            Resolved trades and warnings for the names that were dropped
        """
        resolved: list[RegisteredTrade] = []
        warnings: list[str] = []
        for trade_type in trade_types:
            trade = self.registry.get(trade_type)
            if trade is None:
                warnings.append(f"Unknown trade type '{trade_type}' skipped")
                log.warning("trade_type_unresolved", trade_type=trade_type)
                continue
            if any(t.name == trade.name for t in resolved):
                log.debug("trade_type_repeated", trade_type=trade_type, trade=trade.name)
                continue
            resolved.append(trade)
        return resolved, warnings

    def merge(self, trade_types: Iterable[str]) -> MergeResult:
        """
        Merge the schemas of the given trade types.

        Args:
            trade_types: Trade-type names, primary first

        Returns:
            MergeResult with the merged schema, the trades used and any warnings
        """
        trade_types = list(trade_types)
        trades, warnings = self.resolve(trade_types)

        if not trades:
            warnings.append("No trade type could be resolved, using the base template")
            log.warning("merge_fallback", requested=trade_types)
            return MergeResult(
                schema=self.registry.base_schema,
                resolved_trades=(),
                prompt_facts=self.registry.base_prompt_facts,
                warnings=tuple(warnings),
            )

        names = tuple(t.name for t in trades)
        if len(trades) == 1:
            log.debug("merge_single_trade", trade=names[0])
            return MergeResult(
                schema=trades[0].schema,
                resolved_trades=names,
                prompt_facts=trades[0].prompt_facts,
                warnings=tuple(warnings),
            )

        schemas = [t.schema for t in trades]
        taxonomy, taxonomy_warnings = extend_taxonomy(
            self.registry.base_taxonomy,
            [(t.name, t.extension) for t in trades],
            self.registry.default_anchor,
        )
        warnings.extend(taxonomy_warnings)

        schema = TradeSchema(
            trade_types=names,
            voice_profile=merge_voice_profiles(
                [s.voice_profile for s in schemas], names, settings.max_tone_traits
            ),
            behavior_goals=merge_goals(schemas, names),
            auto_reply_policy=merge_auto_reply(schemas, settings.min_confidence_floor),
            follow_up_guidelines=FollowUpGuidelines(
                preferred_phrasing=_ordered_union(
                    s.follow_up_guidelines.preferred_phrasing for s in schemas
                )[: settings.max_follow_up_phrases]
            ),
            upsell_guidelines=merge_upsell(schemas, names),
            category_overrides=merge_category_overrides(schemas),
            signature=merge_signatures(schemas, names),
            label_taxonomy=taxonomy,
        )

        log.info("schemas_merged", trades=list(names), warnings=len(warnings))
        return MergeResult(
            schema=schema,
            resolved_trades=names,
            prompt_facts=merge_prompt_facts(trades),
            warnings=tuple(warnings),
        )
