"""Unit tests for the client profile processor."""

import json

import pytest
from pydantic import ValidationError

from trade_composer.core.models import ClientProfile, ProfileRequest
from trade_composer.processors import BaseProcessor, ProfileProcessor
from trade_composer.processors.profile import main


@pytest.fixture
def processor(registry, composer) -> ProfileProcessor:
    return ProfileProcessor(registry, composer)


@pytest.fixture
def profile_data() -> dict:
    return {
        "business_types": ["Alpha", "Beta"],
        "managers": [
            {"name": "Alice", "email": "alice@example.com"},
            {"name": "Bob", "email": "bob@example.com"},
        ],
        "suppliers": [{"name": "Acme Supply", "domains": ["ACME.com"]}],
        "business": {
            "businessName": "Sparky Co",
            "businessPhone": "(403) 555-0100",
            "websiteUrl": "https://sparky.example",
            "serviceAreas": ["Calgary", "Airdrie"],
        },
        "now": "2026-01-05 09:00",
    }


class TestProfileProcessor:
    """Tests for ProfileProcessor.process."""

    def test_is_processor(self, processor):
        """Test the processor implements BaseProcessor."""
        assert isinstance(processor, BaseProcessor)

    def test_base_processor_is_abstract(self):
        """Test BaseProcessor cannot be instantiated."""
        with pytest.raises(TypeError):
            BaseProcessor()

    def test_process_dict(self, processor, profile_data):
        """Test a raw profile dict composes every artifact."""
        profile = processor.process(profile_data)

        assert isinstance(profile, ClientProfile)
        assert profile.trade_types == ("Alpha", "Beta")
        assert profile.validation.is_valid
        assert "- Business: Sparky Co" in profile.reply_prompt
        assert [m.name for m in profile.managers] == ["Alice", "Bob"]
        assert profile.suppliers[0].domains == ("acme.com",)
        assert "MANAGER/Bob" in profile.taxonomy.provisioning_order
        assert "SUPPLIERS/Acme Supply" in profile.taxonomy.provisioning_order

    def test_process_request(self, processor, managers, suppliers, business_facts):
        """Test a ProfileRequest is accepted as is."""
        request = ProfileRequest(
            trade_types=("Alpha",), managers=managers, suppliers=suppliers, business=business_facts
        )
        profile = processor.process(request)

        assert profile.schema.trade_types == ("Alpha",)
        assert profile.warnings == ()

    def test_warnings_collected_once(self, processor):
        """Test a warning raised by several stages is reported once."""
        profile = processor.process(
            {"business_types": ["Nope", "Alpha"], "managers": [{"name": "Alice"}, {"name": "Alice"}]}
        )

        assert profile.warnings.count("Unknown trade type 'Nope' skipped") == 1
        assert profile.warnings.count("Duplicate manager 'Alice' ignored") == 1

    def test_stage_warnings_in_order(self, processor, profile_data):
        """Test merge warnings come through with taxonomy warnings."""
        profile = processor.process(profile_data)
        assert "Beta: category 'PROJECTS' already added by Alpha, dropped" in profile.warnings

    def test_legacy_business_type(self, processor):
        """Test the legacy single business_type field is accepted."""
        profile = processor.process({"business_type": "Beta"})
        assert profile.trade_types == ("Beta",)

    def test_fallback_profile(self, processor):
        """Test a client with no known trade still gets a valid profile."""
        profile = processor.process({"business_types": ["Nope"], "business": {"businessName": "Odd Jobs"}})

        assert profile.trade_types == ()
        assert profile.validation.is_valid
        assert "Odd Jobs" in profile.reply_prompt

    def test_to_dict(self, processor, profile_data):
        """Test the serialised profile shape."""
        data = processor.process(profile_data).to_dict()

        assert data["tradeTypes"] == ["Alpha", "Beta"]
        assert data["validation"]["isValid"] is True
        assert data["schema"]["autoReplyPolicy"]["minConfidence"] == 0.8
        assert data["managers"][0] == {"name": "Alice", "email": "alice@example.com", "domains": []}
        assert data["behavior"]["BEHAVIOR_FORMALITY"] == "professional"

    def test_behavior_placeholders(self, processor, profile_data):
        """Test the profile carries BEHAVIOR_* values for the merged schema."""
        profile = processor.process(profile_data)

        assert profile.behavior["BEHAVIOR_ALLOW_PRICING"] == "true"
        assert profile.behavior["BEHAVIOR_REPLY_PROMPT"] == profile.reply_prompt
        assert profile.behavior["BEHAVIOR_SIGNATURE_TEMPLATE"] == "The Sparky Co Team"

    def test_invalid_dict_rejected(self, processor):
        """Test a malformed raw profile raises before any stage runs."""
        with pytest.raises(ValidationError):
            processor.process({"business_types": ["Alpha"], "managers": [{"name": "Alice", "email": 123}]})


class TestProductionProfile:
    """End-to-end scenario against the production registry."""

    def test_hvac_electrician_profile(self):
        """Test a production multi-trade client composes a clean, valid profile."""
        profile = ProfileProcessor().process(
            {
                "business_types": ["HVAC", "Electrician"],
                "managers": [{"name": "Dana", "email": "dana@coolair.example"}],
                "suppliers": [{"name": "Wolseley", "domains": ["wolseley.ca"]}],
                "business": {"businessName": "Cool Air"},
                "now": "2026-01-05 09:00",
            }
        )

        assert profile.trade_types == ("HVAC", "Electrician")
        assert profile.validation.errors == ()
        assert "{{" not in profile.reply_prompt
        assert "<<<" not in profile.reply_prompt
        assert "Cool Air" in profile.reply_prompt
        assert "MANAGER/Dana" in profile.taxonomy.provisioning_order

    def test_separator_in_entity_names(self):
        """Test names containing '/' still give a parent-first provisioning order."""
        profile = ProfileProcessor().process(
            {
                "business_types": ["Electrician"],
                "managers": [{"name": "Sales/East"}],
                "suppliers": [{"name": "A/B Supply"}],
            }
        )
        order = profile.taxonomy.provisioning_order

        assert "MANAGER/Sales-East" in order
        assert "SUPPLIERS/A-B Supply" in order
        for index, path in enumerate(order):
            parent = path.rpartition("/")[0]
            assert not parent or parent in order[:index]
        assert profile.validation.is_valid


class TestMain:
    """Tests for the command-line entry point."""

    def test_writes_profile_json(self, tmp_path):
        """Test a profile file is composed and written as JSON."""
        source = tmp_path / "profile.json"
        output = tmp_path / "composed.json"
        source.write_text(json.dumps({"business_types": ["Plumber"], "managers": [{"name": "Sam"}]}))

        exit_code = main([str(source), "--output", str(output), "--log-level", "WARNING"])
        data = json.loads(output.read_text())

        assert exit_code == 0
        assert data["tradeTypes"] == ["Plumber"]
        assert "MANAGER/Sam" in data["taxonomy"]["provisioningOrder"]

    def test_rejects_invalid_profile(self, tmp_path):
        """Test a profile that fails validation exits with status 2 and writes nothing."""
        source = tmp_path / "profile.json"
        output = tmp_path / "composed.json"
        source.write_text(json.dumps({"business_types": ["Plumber"], "managers": [{"name": "Sam", "email": 123}]}))

        exit_code = main([str(source), "--output", str(output), "--log-level", "ERROR"])

        assert exit_code == 2
        assert not output.exists()
