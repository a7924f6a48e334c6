"""
domain_registry.treasury — in-memory balance ledger for local runs.

Real deployments move funds through the host's own accounting; the registry
only needs the three calls in the `Transfer` protocol. `Ledger` is the
simulation-grade implementation used by default, by the CLI and by tests:

- balance(addr) -> int
- credit(addr, amount)               # host/testing helper
- debit(addr, amount)                # host/testing helper
- transfer(frm, to, amount)          # atomic debit + credit

Amounts are non-negative ints capped at 256 bits, addresses are non-empty bytes.
"""

from __future__ import annotations

import threading
from typing import Dict, Protocol

MAX_BALANCE_BITS = 256


class LedgerError(Exception):
    """Malformed input or insufficient funds."""


class Transfer(Protocol):
    """
    Balance primitive the registry is built on.

    Implementations must signal every refused or failed movement of funds by
    raising `LedgerError` (or a subclass) and leave balances unchanged when
    they do. The registry reports those as `TransferFailed`; any other
    exception propagates unchanged.
    """

    def balance(self, addr: bytes) -> int: ...

    def credit(self, addr: bytes, amount: int) -> None: ...

    def transfer(self, frm: bytes, to: bytes, amount: int) -> None: ...


# ------------------------------ Addr & Amount ------------------------------ #


def _check_addr(addr: bytes) -> bytes:
    if not isinstance(addr, (bytes, bytearray)):
        raise LedgerError("address must be bytes")
    if len(addr) == 0:
        raise LedgerError("address must be non-empty")
    return bytes(addr)


def _check_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise LedgerError("amount must be int")
    if amount < 0:
        raise LedgerError("amount must be non-negative")
    if amount.bit_length() > MAX_BALANCE_BITS:
        raise LedgerError(f"amount exceeds {MAX_BALANCE_BITS}-bit limit")


def _add_checked(a: int, b: int) -> int:
    c = a + b
    if c.bit_length() > MAX_BALANCE_BITS:
        raise LedgerError("balance overflow")
    return c


# --------------------------------- Ledger ---------------------------------- #


class Ledger:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._balances: Dict[bytes, int] = {}

    def balance(self, addr: bytes) -> int:
        baddr = _check_addr(addr)
        with self._lock:
            return self._balances.get(baddr, 0)

    def credit(self, addr: bytes, amount: int) -> None:
        baddr = _check_addr(addr)
        _check_amount(amount)
        with self._lock:
            cur = self._balances.get(baddr, 0)
            self._balances[baddr] = _add_checked(cur, amount)

    def debit(self, addr: bytes, amount: int) -> None:
        baddr = _check_addr(addr)
        _check_amount(amount)
        with self._lock:
            cur = self._balances.get(baddr, 0)
            if amount > cur:
                raise LedgerError("insufficient balance")
            self._balances[baddr] = cur - amount

    def transfer(self, frm: bytes, to: bytes, amount: int) -> None:
        """
        Debit `frm` and credit `to` by `amount`. Nothing changes on failure.
        """
        bfrm = _check_addr(frm)
        bto = _check_addr(to)
        _check_amount(amount)

        if amount == 0:
            return

        with self._lock:
            cur_from = self._balances.get(bfrm, 0)
            if amount > cur_from:
                raise LedgerError("insufficient balance")
            if bto == bfrm:
                return
            new_to = _add_checked(self._balances.get(bto, 0), amount)
            self._balances[bfrm] = cur_from - amount
            self._balances[bto] = new_to

    def snapshot(self) -> Dict[bytes, int]:
        with self._lock:
            return dict(self._balances)


__all__ = ["Ledger", "LedgerError", "Transfer", "MAX_BALANCE_BITS"]
