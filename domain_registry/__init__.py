"""
domain_registry — fee-gated registry of per-caller domain names.

Public surface:

- is_valid_domain(candidate) -> bool
    Grammar check applied to every registration.
- DomainRegistry(owner, *, fee=None, ledger=None, address=None, events=None)
    register / get_my_domains / update_registration_fee / withdraw.
- Registration, CallEnv, EventLog, DomainRegistered, FeeUpdated, Ledger
- RegistryError and its subclasses InsufficientFee, InvalidDomain,
  NotOwner, TransferFailed.
"""

from __future__ import annotations

from .context import CallEnv
from .errors import (
    InsufficientFee,
    InvalidDomain,
    NotOwner,
    RegistryError,
    TransferFailed,
)
from .events import DomainRegistered, Event, EventLog, FeeUpdated
from .registry import DomainRegistry, Registration
from .treasury import Ledger, LedgerError
from .validate import MAX_DOMAIN_LENGTH, is_valid_domain

__version__ = "0.1.0"


__all__ = [
    "__version__",
    "is_valid_domain",
    "MAX_DOMAIN_LENGTH",
    "DomainRegistry",
    "Registration",
    "CallEnv",
    "Event",
    "EventLog",
    "DomainRegistered",
    "FeeUpdated",
    "Ledger",
    "LedgerError",
    "RegistryError",
    "InsufficientFee",
    "InvalidDomain",
    "NotOwner",
    "TransferFailed",
]
