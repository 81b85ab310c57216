"""Relay transport module."""

from .client import INostrClient
from .pool import RelayPool
from .relay import NostrRelay
from .relay_info import fetch_relay_info, supports_search

__all__ = [
    "INostrClient",
    "NostrRelay",
    "RelayPool",
    "fetch_relay_info",
    "supports_search",
]
