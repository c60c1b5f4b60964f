"""
Trade definitions.

Importing this package registers every production trade.
"""

from .base import BaseTrade
from .registry import (
    RegisteredTrade,
    SchemaRegistry,
    clear_trades,
    default_registry,
    get_registered_trades,
    register_trade,
)

# Import trades to trigger registration
from . import electrician  # noqa: F401
from . import hvac  # noqa: F401
from . import plumber  # noqa: F401
from . import pools_spas  # noqa: F401
from . import general_contractor  # noqa: F401
from . import landscaping  # noqa: F401
from . import roofing  # noqa: F401

__all__ = [
    "BaseTrade",
    "RegisteredTrade",
    "SchemaRegistry",
    "clear_trades",
    "default_registry",
    "get_registered_trades",
    "register_trade",
]
