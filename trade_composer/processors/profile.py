"""
Client profile processor.

Runs the whole composition pipeline for one client: entity resolution,
schema merge, reply prompt, label taxonomy and integrity validation.
"""

from typing import Any, Mapping

from pydantic import ValidationError

from trade_composer.core.logging import bind_context, clear_context, get_logger
from trade_composer.core.models import ClientProfile, EntityKind, ProfileRequest
from trade_composer.processors.base import BaseProcessor
from trade_composer.services.behavior import BehaviorConfig, behavior_placeholders
from trade_composer.services.entities import EntityResolver
from trade_composer.services.merger import SchemaMerger
from trade_composer.services.prompt import ReplyPromptBuilder
from trade_composer.services.taxonomy import LabelTaxonomyComposer
from trade_composer.services.template import TemplateComposer
from trade_composer.services.validator import TaxonomyValidator
from trade_composer.trades.registry import SchemaRegistry, default_registry

log = get_logger(__name__)


class ProfileProcessor(BaseProcessor):
    """
    Composes a client's reply prompt and label taxonomy.

    Stateless between calls; one instance can serve concurrent requests.
    """

    def __init__(
        self,
        registry: SchemaRegistry | None = None,
        composer: TemplateComposer | None = None,
    ):
        self.registry = registry or default_registry()
        self.merger = SchemaMerger(self.registry)
        self.prompt_builder = ReplyPromptBuilder(composer or TemplateComposer())
        self.taxonomy_composer = LabelTaxonomyComposer(self.registry)
        self.validator = TaxonomyValidator()

    def process(self, request: ProfileRequest | Mapping[str, Any]) -> ClientProfile:
        """
        Compose every artifact for one client.

        Args:
            request: ProfileRequest, or a raw profile dict

        Returns:
            ClientProfile; warnings from every stage are collected, in order

        Raises:
            ValidationError: If a raw profile dict does not match ProfileRequest
        """
        if not isinstance(request, ProfileRequest):
            request = ProfileRequest.model_validate(request)

        try:
            bind_context(trade_types=list(request.trade_types))
            return self._compose(request)
        finally:
            clear_context()

    def _compose(self, request: ProfileRequest) -> ClientProfile:
        resolver = EntityResolver()
        managers = resolver.resolve(request.managers, EntityKind.MANAGER)
        suppliers = resolver.resolve(request.suppliers, EntityKind.SUPPLIER)

        merged = self.merger.merge(request.trade_types)
        prompt = self.prompt_builder.build(
            merged,
            request.business,
            managers,
            suppliers,
            template=request.template,
            now=request.now,
        )
        taxonomy = self.taxonomy_composer.compose(request.trade_types, managers, suppliers)
        validation = self.validator.validate(taxonomy)
        behavior = BehaviorConfig.from_schema(
            merged.schema, request.business, self.prompt_builder.composer, reply_prompt=prompt.text
        )

        warnings = tuple(
            dict.fromkeys(
                [*resolver.warnings, *merged.warnings, *prompt.warnings, *taxonomy.warnings]
            )
        )
        log.info(
            "client_profile_composed",
            trades=list(merged.resolved_trades),
            managers=len(managers),
            suppliers=len(suppliers),
            labels=len(taxonomy.provisioning_order),
            valid=validation.is_valid,
            warnings=len(warnings),
        )
        return ClientProfile(
            trade_types=merged.resolved_trades,
            schema=merged.schema,
            reply_prompt=prompt.text,
            taxonomy=taxonomy,
            validation=validation,
            managers=managers,
            suppliers=suppliers,
            warnings=warnings,
            behavior=behavior_placeholders(behavior),
        )


def main(argv: list[str] | None = None) -> int:
    """Compose a client profile from a JSON onboarding profile file."""
    import argparse
    import json

    from trade_composer.core.logging import configure_logging

    parser = argparse.ArgumentParser(description="Compose a client's reply prompt and label taxonomy")
    parser.add_argument("profile", help="Path to the onboarding profile JSON file")
    parser.add_argument(
        "--output",
        default=None,
        help="Write the composed profile JSON here instead of stdout",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Report every stripped placeholder as a warning",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    args = parser.parse_args(argv)

    configure_logging(log_level=args.log_level)

    with open(args.profile, encoding="utf-8") as f:
        data = json.load(f)

    try:
        request = ProfileRequest.model_validate(data)
    except ValidationError as e:
        log.error("client_profile_rejected", path=args.profile, errors=[err["msg"] for err in e.errors()])
        return 2

    processor = ProfileProcessor(composer=TemplateComposer(strict=args.strict))
    profile = processor.process(request)
    payload = json.dumps(profile.to_dict(), indent=2)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(payload)
    else:
        print(payload)

    if not profile.validation.is_valid:
        log.error("client_profile_invalid", errors=list(profile.validation.errors))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
