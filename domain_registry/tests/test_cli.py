from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from domain_registry.cli import app

runner = CliRunner()

# Keep registry INFO logs off the captured output so stdout parses as JSON.
QUIET = ["--log-level", "ERROR"]

OWNER_HEX = "0x" + "01" * 20
ALICE_HEX = "0x" + "a1" * 20
FEE = 5 * 10**15


def _write(tmp_path: Path, calls: object) -> Path:
    p = tmp_path / "calls.json"
    p.write_text(json.dumps(calls), encoding="utf-8")
    return p


def test_validate_all_good() -> None:
    r = runner.invoke(app, QUIET + ["validate", "example.com", "my-site.org"])
    assert r.exit_code == 0, r.output
    assert "valid\texample.com" in r.output
    assert "invalid" not in r.output


def test_validate_reports_bad_names_and_fails() -> None:
    r = runner.invoke(app, QUIET + ["validate", "--json", "example.com", "bad..name"])
    assert r.exit_code == 1
    assert json.loads(r.stdout) == {"example.com": True, "bad..name": False}


def test_simulate_full_flow(tmp_path: Path) -> None:
    script = _write(
        tmp_path,
        [
            {"op": "register", "sender": ALICE_HEX, "name": "example.com", "value": FEE, "timestamp": 1},
            {"op": "register", "sender": ALICE_HEX, "name": "example..com", "value": FEE, "timestamp": 2},
            {"op": "get_my_domains", "sender": ALICE_HEX},
            {"op": "update_registration_fee", "sender": ALICE_HEX, "fee": 1},
            {"op": "update_registration_fee", "sender": OWNER_HEX, "fee": 1},
            {"op": "withdraw", "sender": OWNER_HEX},
        ],
    )
    r = runner.invoke(app, QUIET + ["simulate", str(script), "--owner", OWNER_HEX, "--fee", str(FEE)])
    assert r.exit_code == 0, r.output
    report = json.loads(r.stdout)

    assert report["ok"] is False
    calls = report["calls"]
    assert calls[0] == {"op": "register", "ok": True, "result": {"name": "example.com", "registered_at": 1}}
    assert calls[1]["error"]["code"] == "invalid_domain"
    assert calls[2]["result"] == ["example.com"]
    assert calls[3]["error"]["code"] == "not_owner"
    assert calls[4] == {"op": "update_registration_fee", "ok": True, "result": None}
    assert calls[5] == {"op": "withdraw", "ok": True, "result": FEE}

    names = [bytes.fromhex(e["name"][2:]) for e in report["events"]]
    assert names == [b"DomainRegistered", b"FeeUpdated"]

    state = report["state"]
    assert state["fee"] == 1
    assert state["balance"] == 0
    assert state["total_registered"] == 1


def test_simulate_strict_and_bad_calls(tmp_path: Path) -> None:
    script = _write(tmp_path, [{"op": "teleport"}, {"op": "withdraw"}])
    r = runner.invoke(app, QUIET + ["simulate", str(script), "--strict"])
    assert r.exit_code == 1
    report = json.loads(r.stdout)
    assert [c["error"]["code"] for c in report["calls"]] == ["bad_call", "bad_call"]


def test_simulate_rejects_non_list_script(tmp_path: Path) -> None:
    script = _write(tmp_path, {"op": "withdraw"})
    r = runner.invoke(app, QUIET + ["simulate", str(script)])
    assert r.exit_code == 2


def test_config_command(monkeypatch) -> None:
    monkeypatch.setenv("DOMAIN_REGISTRY_DEFAULT_FEE", "7")
    r = runner.invoke(app, QUIET + ["config"])
    assert r.exit_code == 0
    assert json.loads(r.stdout)["default_fee"] == 7
