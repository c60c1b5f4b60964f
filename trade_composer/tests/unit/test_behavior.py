"""Unit tests for flattened behavior configuration."""

import json

import pytest

from trade_composer.services.behavior import (
    BehaviorConfig,
    behavior_context,
    behavior_placeholders,
    category_instructions,
)
from trade_composer.services.merger import SchemaMerger


@pytest.fixture
def config(registry, business_facts) -> BehaviorConfig:
    merged = SchemaMerger(registry).merge(["Alpha", "Beta"])
    return BehaviorConfig.from_schema(merged.schema, business_facts, reply_prompt="Reply politely.")


class TestBehaviorConfig:
    """Tests for BehaviorConfig.from_schema."""

    def test_flattened_fields(self, config):
        """Test schema sections are flattened into text fields."""
        assert config.formality_level == "professional"
        assert config.allow_pricing is True
        assert config.follow_up_text == "Following up\nAny questions?\nChecking in"
        assert config.signature_template == "The Sparky Co Team"

    def test_disabled_upsell_has_no_text(self, registry):
        """Test upsell text is empty when upsell is disabled."""
        schema = registry.get("Alpha").schema
        assert BehaviorConfig.from_schema(schema).upsell_text == ""


class TestBehaviorPlaceholders:
    """Tests for behavior_placeholders."""

    def test_placeholder_values(self, config):
        """Test BEHAVIOR_* values are rendered as text."""
        values = behavior_placeholders(config)

        assert values["BEHAVIOR_ALLOW_PRICING"] == "true"
        assert values["BEHAVIOR_FORMALITY"] == "professional"
        assert values["BEHAVIOR_GOALS"].startswith("1. Answer quickly\n2. Book visits\n")
        assert values["BEHAVIOR_REPLY_PROMPT"] == "Reply politely."

    def test_category_overrides_json(self, config):
        """Test category overrides are exposed as JSON."""
        overrides = json.loads(behavior_placeholders(config)["BEHAVIOR_CATEGORY_OVERRIDES"])

        assert overrides["URGENT"] == {
            "priorityLevel": 1,
            "customLanguage": ["Call us now", "We are on our way"],
        }

    def test_behavior_context_renders(self, config, composer):
        """Test placeholders render through the template composer."""
        result = composer.render("{{BEHAVIOR_FORMALITY}}/{{BEHAVIOR_ALLOW_PRICING}}", behavior_context(config))
        assert result.text == "professional/true"


class TestCategoryInstructions:
    """Tests for category_instructions."""

    def test_override_instructions(self, config):
        """Test an overridden category gets tone, language and priority."""
        text = category_instructions("URGENT", config)

        assert text == "\n".join(
            [
                "Replying to URGENT email:",
                "",
                f"Use {config.voice_tone} tone.",
                "",
                "Include these elements:",
                "- Call us now",
                "- We are on our way",
                "",
                "Priority: 1",
                "",
                "Reply politely.",
            ]
        )

    def test_category_without_override(self, config):
        """Test a category with no override uses the plain reply prompt."""
        assert category_instructions("MISC", config) == "Reply politely."
