from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Mapping, Optional


@dataclass(eq=False)
class RegistryError(Exception):
    """
    Structured error raised by the domain registry.

    Supported call patterns:

        RegistryError()                      # class defaults
        RegistryError("message")
        RegistryError("message", context={...})

    Attributes:
        code: short machine-readable code string
        message: human-readable message (matches the on-chain revert reason)
        context: optional extra fields for debugging / receipts
    """

    default_code: ClassVar[str] = "registry_error"
    default_message: ClassVar[str] = "registry error"

    code: str
    message: str
    context: Dict[str, Any]

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        msg = self.default_message if message is None else str(message)
        super().__init__(msg)
        object.__setattr__(self, "code", code or self.default_code)
        object.__setattr__(self, "message", msg)
        object.__setattr__(self, "context", dict(context or {}))

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": dict(self.context),
        }


class InsufficientFee(RegistryError):
    """Payment attached to a registration is below the current fee."""

    default_code = "insufficient_fee"
    default_message = "Insufficient fee"


class InvalidDomain(RegistryError):
    """Candidate name was rejected by the validator."""

    default_code = "invalid_domain"
    default_message = "Invalid domain"


class NotOwner(RegistryError):
    """Admin operation attempted by someone other than the owner."""

    default_code = "not_owner"
    default_message = "Only the owner can call this function"


class TransferFailed(RegistryError):
    """The balance transfer backing a withdrawal reported failure."""

    default_code = "transfer_failed"
    default_message = "Transfer failed"


__all__ = [
    "RegistryError",
    "InsufficientFee",
    "InvalidDomain",
    "NotOwner",
    "TransferFailed",
]
