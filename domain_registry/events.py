from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, fields
from typing import Any, Callable, ClassVar, Dict, List, Sequence

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Event:
    """
    Base class for registry events.

    Subclasses declare their payload as dataclass fields and set `name`.
    Canonical receipt form:

        name: "0x" + hex-encoded event name bytes
        args: sequence of {"k", "t", "v"} dicts
              t="b" => bytes encoded as 0x-prefixed hex
              t="s" => str
              t="i" => integer
              t="z" => boolean
    """

    name: ClassVar[bytes] = b""

    def args(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_receipt(self) -> Dict[str, Any]:
        enc_args: List[Dict[str, Any]] = []
        for k, v in self.args().items():
            if isinstance(v, (bytes, bytearray)):
                enc_args.append({"k": k, "t": "b", "v": "0x" + bytes(v).hex()})
            elif isinstance(v, str):
                enc_args.append({"k": k, "t": "s", "v": v})
            elif isinstance(v, bool):
                # bool is a subclass of int, so check it before int.
                enc_args.append({"k": k, "t": "z", "v": v})
            elif isinstance(v, int):
                enc_args.append({"k": k, "t": "i", "v": int(v)})
            else:
                raise TypeError(f"unsupported event arg type {type(v).__name__} for {k!r}")
        return {"name": "0x" + self.name.hex(), "args": enc_args}


@dataclass(frozen=True)
class DomainRegistered(Event):
    name: ClassVar[bytes] = b"DomainRegistered"

    controller: bytes
    domain: str
    timestamp: int
    total_registered: int


@dataclass(frozen=True)
class FeeUpdated(Event):
    name: ClassVar[bytes] = b"FeeUpdated"

    new_fee: int


Observer = Callable[[Event], None]


class EventLog:
    """
    Ordered record of emitted events plus observer fan-out.

    Observers are called synchronously in subscription order. One that raises
    is logged and skipped; the event stays in the log and later observers
    still see it.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._events: List[Event] = []
        self._observers: List[Observer] = []

    def subscribe(self, observer: Observer) -> None:
        with self._lock:
            if observer not in self._observers:
                self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        with self._lock:
            try:
                self._observers.remove(observer)
            except ValueError:
                pass

    def emit(self, event: Event) -> None:
        with self._lock:
            self._events.append(event)
            observers = tuple(self._observers)
        log.debug("event %s %r", event.name.decode(), event.args())
        for observer in observers:
            try:
                observer(event)
            except Exception:
                log.exception("event observer %r failed on %s", observer, event.name.decode())

    def events(self) -> List[Event]:
        with self._lock:
            return list(self._events)

    def for_receipt(self) -> List[Dict[str, Any]]:
        return [ev.to_receipt() for ev in self.events()]

    def drain(self) -> Sequence[Event]:
        """Return all logged events and clear the log."""
        with self._lock:
            out = tuple(self._events)
            self._events.clear()
        return out

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


__all__ = [
    "Event",
    "DomainRegistered",
    "FeeUpdated",
    "EventLog",
    "Observer",
]
