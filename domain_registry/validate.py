"""
domain_registry.validate — grammar check for registrable domain names.

A name is accepted only when all of the following hold:

* 1 to 253 characters long;
* exactly one "." separator, which is neither the first nor the last character;
* only ASCII letters, ASCII digits, "-" and the separator appear;
* the first character, the last character and the characters on either side of
  the separator are not "-" (so neither label starts or ends with a hyphen).

Hyphens inside a label are fine ("my-site.com" is valid). The check is a single
left-to-right scan that stops at the first violation and never raises.

    >>> is_valid_domain("example.com")
    True
    >>> is_valid_domain("example..com")
    False
"""

from __future__ import annotations

import string
from typing import Any, FrozenSet

MAX_DOMAIN_LENGTH = 253
SEPARATOR = "."
HYPHEN = "-"

_LABEL_CHARS: FrozenSet[str] = frozenset(string.ascii_letters + string.digits + HYPHEN)
_ALLOWED_CHARS: FrozenSet[str] = _LABEL_CHARS | {SEPARATOR}


def is_valid_domain(candidate: Any) -> bool:
    if not isinstance(candidate, str):
        return False

    n = len(candidate)
    if n == 0 or n > MAX_DOMAIN_LENGTH:
        return False

    seen_separator = False
    last = n - 1
    for i, ch in enumerate(candidate):
        if ch not in _ALLOWED_CHARS:
            return False

        if ch == SEPARATOR:
            if seen_separator:
                return False
            seen_separator = True

        at_boundary = (
            i == 0
            or i == last
            or candidate[i - 1] == SEPARATOR
            or candidate[i + 1] == SEPARATOR
        )
        if at_boundary and (ch == HYPHEN or ch == SEPARATOR):
            return False

    return seen_separator


__all__ = ["is_valid_domain", "MAX_DOMAIN_LENGTH", "SEPARATOR"]
