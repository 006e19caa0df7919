"""Partner Registry - read-only lookup of partner shared secrets.

Invariants:
    - Lookups are case-sensitive exact-key matches
    - The in-memory registry is immutable after construction
    - Registry contents are never logged

Design Decisions:
    - Protocol over ABC: the authenticator depends on lookup() only, so a secret
      store can back it later without changing the authenticator
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Protocol

from transaction_api.core.errors import PartnerRegistryError


class PartnerRegistry(Protocol):
    """Contract for partner secret lookup - implemented by shell or in-memory."""
    def lookup(self, partner_key: str) -> str | None: ...


class InMemoryPartnerRegistry:
    """Fixed partner registry loaded once at process start."""

    def __init__(self, partners: Mapping[str, str]):
        for key, secret in partners.items():
            if not isinstance(key, str) or not key:
                raise PartnerRegistryError("partner keys must be non-empty strings")
            if not isinstance(secret, str) or not secret:
                raise PartnerRegistryError(f"partner '{key}' has an empty secret")
        self._partners = MappingProxyType(dict(partners))

    def lookup(self, partner_key: str) -> str | None:
        return self._partners.get(partner_key)

    def __len__(self) -> int:
        return len(self._partners)
