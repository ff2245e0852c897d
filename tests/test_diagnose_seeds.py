import importlib.util
import json
import os

import pytest

SCRIPT = os.path.join(os.path.dirname(__file__), "..", "scripts", "diagnose_seeds.py")


@pytest.fixture(scope="module")
def diagnose():
    spec = importlib.util.spec_from_file_location("diagnose_seeds", SCRIPT)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def test_reports_success(diagnose, capsys):
    assert diagnose.main(["42"]) == 0
    result = json.loads(capsys.readouterr().out)["results"][0]
    assert result["ok"] is True
    assert result["seed"] == "42" and result["size"] == 32
    assert set(result["summary"]) >= {"base", "objective", "undiscovered_caves"}


def test_run_for_seed_failure_shape(diagnose, monkeypatch):
    from app.mapgen import pipeline

    monkeypatch.setattr(pipeline.Mapgen, "generate", lambda self: self._fail("no_base_site", {}, 0.0))
    result = diagnose.run_for_seed("9", 16)
    assert result == {"seed": "9", "size": 16, "ok": False, "failure_reason": "no_base_site"}
