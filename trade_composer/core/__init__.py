"""Core models, logging and tree operations."""

from .logging import bind_context, clear_context, configure_logging, get_logger
from .models import (
    BusinessFacts,
    ClientProfile,
    ComposedTaxonomy,
    Entity,
    EntityInput,
    EntityKind,
    Formality,
    LabelExtension,
    LabelNode,
    LabelOverride,
    MalformedSchemaError,
    MergeResult,
    ProfileRequest,
    PromptFacts,
    RenderedTemplate,
    Taxonomy,
    TradeSchema,
    ValidationReport,
)

__all__ = [
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "BusinessFacts",
    "ClientProfile",
    "ComposedTaxonomy",
    "Entity",
    "EntityInput",
    "EntityKind",
    "Formality",
    "LabelExtension",
    "LabelNode",
    "LabelOverride",
    "MalformedSchemaError",
    "MergeResult",
    "ProfileRequest",
    "PromptFacts",
    "RenderedTemplate",
    "Taxonomy",
    "TradeSchema",
    "ValidationReport",
]
