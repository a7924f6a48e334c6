"""
domain_registry.registry — fee-gated, per-caller domain registrations.

Each caller pays at least the current fee to record a validated name together
with the host-supplied timestamp. Callers list their own names in the order they
registered them. The owner (fixed at construction) may change the fee and
withdraw everything the registry has collected.

There is no uniqueness check: two callers may hold the same name,
and one caller may register the same name more than once.

State changes and reads share one re-entrant lock, and events are emitted
before the lock is released, so every call observes a fully settled registry.

Usage
-----
    reg = DomainRegistry(owner=b"\\x01" * 20)
    reg.register("example.com", reg.fee, caller=b"\\x02" * 20, timestamp=1_700_000_000)
    reg.get_my_domains(b"\\x02" * 20)          # ["example.com"]
    reg.update_registration_fee(0, caller=b"\\x01" * 20)
    reg.withdraw(caller=b"\\x01" * 20)         # amount moved to the owner
"""

from __future__ import annotations

import hashlib
import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, DefaultDict, Dict, List, Optional

from .config import load_config
from .context import CallEnv, ContextError, require_uint, to_address, to_hex
from .errors import InsufficientFee, InvalidDomain, NotOwner, TransferFailed
from .events import DomainRegistered, EventLog, FeeUpdated
from .treasury import Ledger, LedgerError, Transfer
from .validate import is_valid_domain

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Registration:
    name: str
    registered_at: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "registered_at": self.registered_at}


def _derive_address(owner: bytes) -> bytes:
    # Stand-in for a deployment address when the host does not supply one.
    return hashlib.sha3_256(b"domain-registry:" + owner).digest()[:20]


class DomainRegistry:
    def __init__(
        self,
        owner: bytes,
        *,
        fee: Optional[int] = None,
        ledger: Optional[Transfer] = None,
        address: Optional[bytes] = None,
        events: Optional[EventLog] = None,
    ) -> None:
        self._owner = to_address(owner)
        self._fee = require_uint("fee", load_config().default_fee if fee is None else fee)
        self._ledger: Transfer = ledger if ledger is not None else Ledger()
        self._address = to_address(address) if address is not None else _derive_address(self._owner)
        if self._address == self._owner:
            raise ContextError("registry address must differ from the owner address")
        self.events = events if events is not None else EventLog()

        self._lock = threading.RLock()
        self._by_caller: DefaultDict[bytes, List[Registration]] = defaultdict(list)
        self._all: List[Registration] = []

        log.info(
            "registry deployed at %s owner=%s fee=%d",
            to_hex(self._address),
            to_hex(self._owner),
            self._fee,
        )

    # ---------------------------- read-only views ---------------------------

    @property
    def owner(self) -> bytes:
        return self._owner

    @property
    def address(self) -> bytes:
        return self._address

    @property
    def fee(self) -> int:
        with self._lock:
            return self._fee

    @property
    def total_registered(self) -> int:
        with self._lock:
            return len(self._all)

    def balance(self) -> int:
        return self._ledger.balance(self._address)

    def get_my_domains(self, caller: bytes) -> List[str]:
        """Names registered by `caller`, oldest first."""
        key = to_address(caller)
        with self._lock:
            return [r.name for r in self._by_caller.get(key, ())]

    def registrations_of(self, caller: bytes) -> List[Registration]:
        key = to_address(caller)
        with self._lock:
            return list(self._by_caller.get(key, ()))

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "address": to_hex(self._address),
                "owner": to_hex(self._owner),
                "fee": self._fee,
                "balance": self.balance(),
                "total_registered": len(self._all),
                "registrations": {
                    to_hex(caller): [r.to_dict() for r in regs]
                    for caller, regs in self._by_caller.items()
                },
            }

    # ------------------------------- mutators -------------------------------

    def register(self, name: str, paid_amount: int, caller: bytes, timestamp: int) -> Registration:
        """
        Record `name` for `caller` if `paid_amount` covers the fee and the name
        is well formed. Overpayment is kept; there is no refund.

        Raises InsufficientFee or InvalidDomain without touching state.
        Emits DomainRegistered on success.
        """
        caller = to_address(caller)
        paid_amount = require_uint("paid_amount", paid_amount)
        timestamp = require_uint("timestamp", timestamp)

        with self._lock:
            if paid_amount < self._fee:
                log.info("register rejected: paid %d < fee %d", paid_amount, self._fee)
                raise InsufficientFee(context={"paid": paid_amount, "fee": self._fee})
            if not is_valid_domain(name):
                log.info("register rejected: invalid domain %r", name)
                raise InvalidDomain(context={"domain": name})

            self._ledger.credit(self._address, paid_amount)
            record = Registration(name=name, registered_at=timestamp)
            self._by_caller[caller].append(record)
            self._all.append(record)
            total = len(self._all)

            log.info("registered %s for %s (total=%d)", name, to_hex(caller), total)
            self.events.emit(
                DomainRegistered(
                    controller=caller,
                    domain=name,
                    timestamp=timestamp,
                    total_registered=total,
                )
            )
            return record

    def register_with(self, env: CallEnv, name: str) -> Registration:
        return self.register(name, env.value, env.sender, env.timestamp)

    def update_registration_fee(self, new_fee: int, caller: bytes) -> None:
        caller = to_address(caller)
        new_fee = require_uint("new_fee", new_fee)

        with self._lock:
            self._require_owner(caller, "update_registration_fee")
            old = self._fee
            self._fee = new_fee
            log.info("registration fee %d -> %d", old, new_fee)
            self.events.emit(FeeUpdated(new_fee=new_fee))

    def withdraw(self, caller: bytes) -> int:
        """
        Move the registry's entire balance to the owner and return the amount.

        Raises NotOwner for anyone else, TransferFailed if the ledger refuses.
        """
        caller = to_address(caller)

        with self._lock:
            self._require_owner(caller, "withdraw")
            amount = self._ledger.balance(self._address)
            try:
                self._ledger.transfer(self._address, self._owner, amount)
            except LedgerError as exc:
                log.warning("withdraw of %d failed: %s", amount, exc)
                raise TransferFailed(context={"amount": amount, "reason": str(exc)}) from exc
            log.info("withdrew %d to owner %s", amount, to_hex(self._owner))
            return amount

    # ------------------------------- internal -------------------------------

    def _require_owner(self, caller: bytes, action: str) -> None:
        if caller != self._owner:
            log.info("%s rejected: %s is not the owner", action, to_hex(caller))
            raise NotOwner(context={"caller": to_hex(caller), "action": action})


__all__ = ["DomainRegistry", "Registration"]
