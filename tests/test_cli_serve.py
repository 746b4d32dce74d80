# =============================================
# File: tests/test_cli_serve.py
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import pytest

import ttl_lru_service.cli.serve as serve_mod

def test_serve_builds_app_and_runs_uvicorn(monkeypatch):
    calls = {}

    def _fake_run(app, host, port, log_level):
        calls.update(app=app, host=host, port=port, log_level=log_level)

    monkeypatch.setattr(serve_mod.uvicorn, "run", _fake_run)
    serve_mod.main(["--host", "127.0.0.1", "--port", "9099", "--capacity", "5", "--log-level", "warning"])

    assert calls["host"] == "127.0.0.1"
    assert calls["port"] == 9099
    assert calls["log_level"] == "warning"
    assert calls["app"].state.store.capacity == 5

def test_serve_rejects_zero_capacity(monkeypatch):
    monkeypatch.setattr(serve_mod.uvicorn, "run", lambda *a, **k: pytest.fail("should not start"))
    with pytest.raises(SystemExit) as exc:
        serve_mod.main(["--capacity", "0"])
    assert exc.value.code == 2

def test_bad_env_capacity_is_overridden_by_flag(monkeypatch):
    monkeypatch.setenv("CACHE_CAPACITY", "0")
    calls = {}
    monkeypatch.setattr(serve_mod.uvicorn, "run", lambda app, **kw: calls.update(app=app))

    serve_mod.main(["--capacity", "5"])
    assert calls["app"].state.store.capacity == 5

def test_bad_env_capacity_exits_cleanly(monkeypatch, capsys):
    monkeypatch.setenv("CACHE_CAPACITY", "0")
    monkeypatch.setattr(serve_mod.uvicorn, "run", lambda *a, **k: pytest.fail("should not start"))
    with pytest.raises(SystemExit) as exc:
        serve_mod.main([])
    assert exc.value.code == 2
    assert "[ERROR]" in capsys.readouterr().err
