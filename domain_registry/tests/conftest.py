from __future__ import annotations

import logging
from typing import List

import pytest

from domain_registry.config import load_config
from domain_registry.events import Event
from domain_registry.registry import DomainRegistry
from domain_registry.treasury import Ledger

FEE = 5 * 10**15

OWNER = b"\x01" * 20
ALICE = b"\xa1" * 20
BOB = b"\xb0" * 20


@pytest.fixture(autouse=True)
def _fresh_config_and_logging():
    """
    Config is cached per process and the CLI installs a stderr handler bound to
    the runner's captured stream; reset both around every test.
    """
    load_config.cache_clear()
    yield
    load_config.cache_clear()
    logger = logging.getLogger("domain_registry")
    for h in list(logger.handlers):
        logger.removeHandler(h)


@pytest.fixture()
def ledger() -> Ledger:
    return Ledger()


@pytest.fixture()
def registry(ledger: Ledger) -> DomainRegistry:
    return DomainRegistry(OWNER, fee=FEE, ledger=ledger)


@pytest.fixture()
def seen(registry: DomainRegistry) -> List[Event]:
    """Events delivered to an external observer of `registry`."""
    out: List[Event] = []
    registry.events.subscribe(out.append)
    return out
