import json

import pytest

from conftest import FakeSession, league_routes, make_response
from ffpreviews.api import sleeper
from ffpreviews.cli.generate_previews import main
from ffpreviews.report import pipeline


@pytest.fixture
def sleeper_env(config, monkeypatch):
    monkeypatch.setenv("SLEEPER_LEAGUE_ID", config.league_id)
    monkeypatch.setenv("SLEEPER_BASE_URL", config.sleeper_base_url)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("PREVIEWS_OUTPUT", raising=False)


def _serve(monkeypatch, routes):
    session = FakeSession(routes)
    monkeypatch.setattr(pipeline, "make_session", lambda: session)
    return session


def test_success_prints_summary_and_exits_zero(config, sleeper_env, monkeypatch, capsys, tmp_path):
    session = _serve(monkeypatch, league_routes(config))
    out = tmp_path / "site" / "previews.json"
    assert main(["--output", str(out)]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["meta"]["week"] == 5
    assert summary["meta"]["league_name"] == "Dynasty Degens"
    assert summary["entries"] == {"managers": 5, "games": 2, "previews": 0}
    assert summary["paths"]["previews"] == str(out)
    assert json.loads(out.read_text(encoding="utf-8")) == {}
    assert session.closed


def test_league_id_flag_overrides_env(config, sleeper_env, monkeypatch, tmp_path):
    monkeypatch.setenv("SLEEPER_LEAGUE_ID", "someone-else")
    session = _serve(monkeypatch, league_routes(config))
    assert main(["--league-id", config.league_id, "--output", str(tmp_path / "p.json")]) == 0
    assert sleeper.league_url(config.sleeper_base_url, config.league_id) in session.get_calls


def test_aggregation_failure_logs_and_exits_one(config, sleeper_env, monkeypatch, caplog, tmp_path):
    rosters = sleeper.rosters_url(config.sleeper_base_url, config.league_id)
    _serve(monkeypatch, league_routes(config, **{rosters: make_response({"error": "gone"})}))
    out = tmp_path / "previews.json"
    with caplog.at_level("ERROR"):
        assert main(["--output", str(out)]) == 1
    assert any("Error generating previews" in r.getMessage() for r in caplog.records)
    assert not out.exists()


def test_unwritable_output_logs_and_exits_one(config, sleeper_env, monkeypatch, caplog, tmp_path):
    _serve(monkeypatch, league_routes(config))
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")
    with caplog.at_level("ERROR"):
        assert main(["--output", str(blocker / "previews.json")]) == 1
    assert any("Could not write previews" in r.getMessage() for r in caplog.records)


def test_missing_league_id_exits_two(monkeypatch, capsys):
    monkeypatch.delenv("SLEEPER_LEAGUE_ID", raising=False)
    assert main([]) == 2
    assert "league id" in capsys.readouterr().err
