from __future__ import annotations

"""
domain_registry.cli
-------------------

Local tooling for the domain registry. Nothing here talks to a network; the
`simulate` command runs a scripted sequence of calls against a fresh in-memory
registry and prints what happened.

Examples
--------
# Check candidate names
domain-registry validate example.com my-site.org bad..name

# Replay a call script (JSON list) and print the report
domain-registry simulate calls.json --owner 0x0101010101010101010101010101010101010101

# Show effective configuration
domain-registry config

Call script format
------------------
[
  {"op": "register", "sender": "0x02..", "name": "example.com", "value": 5000000000000000, "timestamp": 1},
  {"op": "get_my_domains", "sender": "0x02.."},
  {"op": "update_registration_fee", "sender": "0x01..", "fee": 0},
  {"op": "withdraw", "sender": "0x01.."}
]
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import typer

from .config import load_config
from .context import CallEnv, ContextError, require_uint, to_address
from .errors import RegistryError
from .logging import setup_logging
from .registry import DomainRegistry
from .validate import is_valid_domain

log = logging.getLogger(__name__)

DEFAULT_OWNER = "0x" + "01" * 20

app = typer.Typer(
    name="domain-registry",
    add_completion=False,
    no_args_is_help=True,
    help="Validate domain names and simulate registry calls locally.",
)


# -------------------- call dispatch --------------------


def _op_register(reg: DomainRegistry, call: Dict[str, Any]) -> Any:
    env = CallEnv.from_dict(call)
    return reg.register_with(env, str(call.get("name", ""))).to_dict()


def _op_get_my_domains(reg: DomainRegistry, call: Dict[str, Any]) -> Any:
    return reg.get_my_domains(to_address(call["sender"]))


def _op_update_fee(reg: DomainRegistry, call: Dict[str, Any]) -> Any:
    reg.update_registration_fee(require_uint("fee", call.get("fee")), to_address(call["sender"]))
    return None


def _op_withdraw(reg: DomainRegistry, call: Dict[str, Any]) -> Any:
    return reg.withdraw(to_address(call["sender"]))


_OPS: Dict[str, Callable[[DomainRegistry, Dict[str, Any]], Any]] = {
    "register": _op_register,
    "get_my_domains": _op_get_my_domains,
    "update_registration_fee": _op_update_fee,
    "withdraw": _op_withdraw,
}


def run_script(reg: DomainRegistry, calls: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Execute `calls` in order. Each entry yields {"op", "ok", "result"} or
    {"op", "ok": False, "error": {...}}; a failing call does not stop the run.
    """
    out: List[Dict[str, Any]] = []
    for i, call in enumerate(calls):
        op = call.get("op") if isinstance(call, dict) else None
        handler = _OPS.get(op) if isinstance(op, str) else None
        if handler is None:
            out.append({"op": op, "ok": False, "error": {"code": "bad_call", "message": f"unknown op at index {i}"}})
            continue
        try:
            result = handler(reg, call)
        except RegistryError as e:
            out.append({"op": op, "ok": False, "error": e.to_dict()})
        except (ContextError, KeyError) as e:
            out.append({"op": op, "ok": False, "error": {"code": "bad_call", "message": f"index {i}: {e}"}})
        else:
            out.append({"op": op, "ok": True, "result": result})
    return out


def _load_script(path: Path) -> List[Dict[str, Any]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        typer.echo(f"[simulate] cannot read {path}: {e}", err=True)
        raise typer.Exit(2)
    if not isinstance(data, list):
        typer.echo(f"[simulate] {path}: expected a JSON list of calls", err=True)
        raise typer.Exit(2)
    return data


# -------------------- commands --------------------


@app.callback()
def _main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override DOMAIN_REGISTRY_LOG_LEVEL."),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="plain or json."),
) -> None:
    setup_logging(log_level, log_format)


@app.command("validate")
def validate_cmd(
    names: List[str] = typer.Argument(..., help="Candidate domain names."),
    json_out: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """
    Check each NAME against the registration grammar. Exit 1 if any is invalid.
    """
    results = {n: is_valid_domain(n) for n in names}
    if json_out:
        typer.echo(json.dumps(results, indent=2, ensure_ascii=False))
    else:
        for n, ok in results.items():
            typer.echo(f"{'valid' if ok else 'invalid'}\t{n}")
    if not all(results.values()):
        raise typer.Exit(1)


@app.command("simulate")
def simulate_cmd(
    script: Path = typer.Argument(..., help="JSON file with a list of calls."),
    owner: str = typer.Option(DEFAULT_OWNER, "--owner", help="Owner address (hex)."),
    fee: Optional[int] = typer.Option(None, "--fee", min=0, help="Initial fee (defaults to config)."),
    strict: bool = typer.Option(False, "--strict", help="Exit 1 if any call failed."),
) -> None:
    """
    Replay SCRIPT against a fresh registry and print a JSON report.
    """
    calls = _load_script(script)
    try:
        reg = DomainRegistry(to_address(owner), fee=fee)
    except ContextError as e:
        typer.echo(f"[simulate] bad --owner: {e}", err=True)
        raise typer.Exit(2)

    results = run_script(reg, calls)
    ok = all(r["ok"] for r in results)
    log.info("simulated %d calls (%d failed)", len(results), sum(1 for r in results if not r["ok"]))

    report = {
        "ok": ok,
        "calls": results,
        "events": reg.events.for_receipt(),
        "state": reg.snapshot(),
    }
    typer.echo(json.dumps(report, indent=2, ensure_ascii=False))
    if strict and not ok:
        raise typer.Exit(1)


@app.command("config")
def config_cmd() -> None:
    """Print the effective configuration as JSON."""
    typer.echo(json.dumps(load_config().as_dict(), indent=2, sort_keys=True))


def main() -> None:  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
