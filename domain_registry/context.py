"""
domain_registry.context — per-call environment supplied by the host.

The registry never reads identity, payment or time from ambient sources; the
embedding host hands them in with every call. `CallEnv` bundles the three
values a registration needs and validates them strictly.

Design notes
------------
- Addresses are raw bytes. Hex strings (with or without "0x") are accepted
  by the helpers and normalized to bytes.
- Numeric fields must be non-negative ints of at most 256 bits (bool is rejected).
- `timestamp` is whatever the host considers "now" (block time, epoch
  seconds, ...); the registry stores it verbatim.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Union

MAX_UINT_BITS = 256


class ContextError(ValueError):
    """Validation or coercion failure for CallEnv fields."""


def _strip_0x(s: str) -> str:
    return s[2:] if s.startswith(("0x", "0X")) else s


def to_bytes(value: Union[bytes, bytearray, memoryview, str]) -> bytes:
    """
    Coerce `value` to bytes.
    - If str, interpret as hex (with or without '0x'); odd-length hex is rejected.
    - If a bytes-like object, copy to immutable bytes.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        h = _strip_0x(value.strip())
        if len(h) % 2 != 0:
            raise ContextError(f"hex string must have even length, got {len(h)}")
        try:
            return bytes.fromhex(h)
        except ValueError as e:
            raise ContextError(f"invalid hex string: {value!r}") from e
    raise ContextError(f"cannot convert type {type(value).__name__} to bytes")


def to_hex(b: Union[bytes, bytearray, memoryview]) -> str:
    """Encode bytes as 0x-prefixed lowercase hex."""
    return "0x" + bytes(b).hex()


def to_address(value: Union[bytes, bytearray, memoryview, str]) -> bytes:
    """Like `to_bytes`, but an empty address is an error."""
    addr = to_bytes(value)
    if not addr:
        raise ContextError("address must be non-empty")
    return addr


def require_uint(name: str, v: Any) -> int:
    if isinstance(v, bool) or not isinstance(v, int):
        raise ContextError(f"{name} must be int, got {type(v).__name__}")
    if v < 0:
        raise ContextError(f"{name} must be non-negative, got {v}")
    if v.bit_length() > MAX_UINT_BITS:
        raise ContextError(f"{name} exceeds {MAX_UINT_BITS}-bit limit")
    return v


@dataclass(frozen=True)
class CallEnv:
    """
    Host-provided context for a single registry call.

    Fields
    ------
    sender:     Calling identity as raw bytes.
    value:      Payment attached to the call (native units).
    timestamp:  Host clock reading recorded on registration.
    """

    sender: bytes
    value: int = 0
    timestamp: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "sender", to_address(self.sender))
        object.__setattr__(self, "value", require_uint("value", self.value))
        object.__setattr__(self, "timestamp", require_uint("timestamp", self.timestamp))

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CallEnv":
        if "sender" not in d:
            raise ContextError("sender is required")
        return cls(
            sender=to_address(d["sender"]),
            value=require_uint("value", d.get("value", 0)),
            timestamp=require_uint("timestamp", d.get("timestamp", 0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["sender"] = to_hex(self.sender)
        return d


__all__ = [
    "ContextError",
    "CallEnv",
    "to_bytes",
    "to_hex",
    "to_address",
    "require_uint",
    "MAX_UINT_BITS",
]
