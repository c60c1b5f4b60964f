"""
Trade registry.

Trades register themselves with @register_trade at import time. A
SchemaRegistry is then built once from the registered trades: every
behavior definition is parsed and validated up front, so malformed static
data fails before any client is composed.
"""

from dataclasses import dataclass, replace
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Iterable, Type

from trade_composer.config import settings
from trade_composer.core.logging import get_logger
from trade_composer.core.models import (
    LabelExtension,
    PromptFacts,
    Taxonomy,
    TradeSchema,
)
from trade_composer.core.taxonomy import extend_taxonomy
from trade_composer.trades.base import BaseTrade
from trade_composer.trades.base_template import BASE_BEHAVIOR, BASE_TAXONOMY

log = get_logger(__name__)

BASE_TEMPLATE_NAME = "Base Template"

# Global trade registry
_trades: list[BaseTrade] = []


def register_trade(trade_class: Type[BaseTrade]) -> Type[BaseTrade]:
    """
    Decorator to register a trade class.

    Usage:
        @register_trade
        class HVAC(BaseTrade):
            name = "HVAC"
            ...
    """
    trade = trade_class()
    for key in (trade.name, *trade.aliases):
        for existing in _trades:
            if existing.matches(key):
                raise ValueError(f"Trade key '{key}' already registered by {existing.name}")
    _trades.append(trade)
    log.debug("trade_registered", trade=trade.name, aliases=list(trade.aliases))
    return trade_class


def get_registered_trades() -> list[BaseTrade]:
    """Get all registered trades."""
    return _trades.copy()


def clear_trades() -> None:
    """Clear all registered trades (for testing)."""
    _trades.clear()


@dataclass(frozen=True)
class RegisteredTrade:
    """A trade after its behavior definition has been parsed."""

    name: str
    aliases: tuple[str, ...]
    schema: TradeSchema
    extension: LabelExtension
    prompt_facts: PromptFacts


class SchemaRegistry:
    """
    Immutable lookup from trade-type name (or alias) to its parsed schema.

    Safe to share between concurrent compositions; nothing mutates it after
    construction.
    """

    def __init__(
        self,
        base_schema: TradeSchema,
        trades: Iterable[RegisteredTrade],
        default_anchor: str | None = None,
        base_prompt_facts: PromptFacts | None = None,
    ):
        self._base_schema = base_schema
        self._base_prompt_facts = base_prompt_facts or PromptFacts()
        self._default_anchor = default_anchor
        self._trades = tuple(trades)

        index: dict[str, RegisteredTrade] = {}
        for trade in self._trades:
            for key in (trade.name, *trade.aliases):
                if key in index:
                    raise ValueError(f"Trade key '{key}' used by both {index[key].name} and {trade.name}")
                index[key] = trade
        self._index = MappingProxyType(index)

    @classmethod
    def from_trades(
        cls,
        trades: Iterable[BaseTrade],
        base_behavior: dict[str, Any] | None = None,
        base_taxonomy: Taxonomy | None = None,
        default_anchor: str | None = None,
    ) -> "SchemaRegistry":
        """
        Parse and validate trade definitions into a registry.

        Args:
            trades: Trade definitions, in registration order
            base_behavior: Fallback behavior definition (defaults to the universal template)
            base_taxonomy: Taxonomy every trade extends (defaults to the universal taxonomy)
            default_anchor: Anchor for additions of trades that declare none

        Raises:
            MalformedSchemaError: If any behavior definition is malformed
        """
        base_taxonomy = base_taxonomy or BASE_TAXONOMY
        if default_anchor is None:
            default_anchor = settings.default_anchor

        base_schema = TradeSchema.from_dict(
            base_behavior or BASE_BEHAVIOR,
            trade=BASE_TEMPLATE_NAME,
            label_taxonomy=base_taxonomy,
        )
        # The fallback schema names no trade
        base_schema = replace(base_schema, trade_types=())

        registered = []
        for trade in trades:
            extension = trade.label_extension()
            taxonomy, warnings = extend_taxonomy(base_taxonomy, [(trade.name, extension)], default_anchor)
            for warning in warnings:
                log.warning("trade_extension_issue", trade=trade.name, issue=warning)
            registered.append(
                RegisteredTrade(
                    name=trade.name,
                    aliases=tuple(trade.aliases),
                    schema=TradeSchema.from_dict(trade.behavior(), trade=trade.name, label_taxonomy=taxonomy),
                    extension=extension,
                    prompt_facts=trade.prompt_facts(),
                )
            )

        log.info("schema_registry_built", trades=[t.name for t in registered])
        return cls(base_schema, registered, default_anchor=default_anchor)

    def get(self, trade_type: str) -> RegisteredTrade | None:
        """Look up a trade by exact name or alias."""
        return self._index.get(trade_type)

    def __contains__(self, trade_type: object) -> bool:
        return trade_type in self._index

    def __len__(self) -> int:
        return len(self._trades)

    @property
    def base_schema(self) -> TradeSchema:
        return self._base_schema

    @property
    def base_taxonomy(self) -> Taxonomy:
        return self._base_schema.label_taxonomy

    @property
    def base_prompt_facts(self) -> PromptFacts:
        return self._base_prompt_facts

    @property
    def default_anchor(self) -> str | None:
        return self._default_anchor

    @property
    def trade_names(self) -> tuple[str, ...]:
        return tuple(trade.name for trade in self._trades)


@lru_cache(maxsize=1)
def default_registry() -> SchemaRegistry:
    """The production registry, built once per process."""
    import trade_composer.trades  # noqa: F401  registers the production trades

    return SchemaRegistry.from_trades(get_registered_trades())
