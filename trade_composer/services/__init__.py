"""Composition services."""

from .behavior import BehaviorConfig, behavior_placeholders, category_instructions
from .entities import EntityResolver
from .merger import SchemaMerger, validate_schema
from .prompt import ReplyPromptBuilder
from .taxonomy import LabelTaxonomyComposer, label_variables
from .template import TemplateComposer, TemplateContext, TemplateSyntaxError, parse_template
from .validator import TaxonomyValidator

__all__ = [
    "BehaviorConfig",
    "behavior_placeholders",
    "category_instructions",
    "EntityResolver",
    "SchemaMerger",
    "validate_schema",
    "ReplyPromptBuilder",
    "LabelTaxonomyComposer",
    "label_variables",
    "TemplateComposer",
    "TemplateContext",
    "TemplateSyntaxError",
    "parse_template",
    "TaxonomyValidator",
]
