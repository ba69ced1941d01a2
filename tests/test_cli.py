import json
import logging

import pytest
from typer.testing import CliRunner

from pow_box.cli import main as cli_main
from pow_box.core.config import AppSettings
from pow_box.core.domain.trytes import Trytes
from pow_box.core.errors import RemoteJobError

from tests.helpers import BRANCH, TRUNK

runner = CliRunner()


@pytest.fixture
def fake_attach(monkeypatch):
    calls = []

    async def _attach(settings, trunk, branch, trytes, min_weight_magnitude):
        calls.append(
            {
                "api_key": settings.api_key,
                "poll_interval_ms": settings.poll_interval_ms,
                "trunk": str(trunk),
                "branch": str(branch),
                "trytes": [str(t) for t in trytes],
                "mwm": min_weight_magnitude,
            }
        )
        return [Trytes.from_string("RESULT" + str(t)) for t in trytes]

    monkeypatch.setattr(cli_main, "_attach", _attach)
    return calls


def test_attach_prints_json(fake_attach):
    result = runner.invoke(
        cli_main.app,
        [
            "attach",
            "--trunk", TRUNK,
            "--branch", BRANCH,
            "--mwm", "9",
            "--api-key", "key",
            "--poll-interval-ms", "500",
            "--json",
            "ABC",
            "XYZ",
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.output.strip().splitlines()[-1]) == ["RESULTABC", "RESULTXYZ"]
    assert fake_attach == [
        {
            "api_key": "key",
            "poll_interval_ms": 500,
            "trunk": TRUNK,
            "branch": BRANCH,
            "trytes": ["ABC", "XYZ"],
            "mwm": 9,
        }
    ]


def test_attach_prints_table(fake_attach):
    result = runner.invoke(cli_main.app, ["attach", "--trunk", TRUNK, "--branch", BRANCH, "--api-key", "key", "ABC"])

    assert result.exit_code == 0, result.output
    assert "Proof of Work" in result.output
    assert "RESULTABC" in result.output
    assert fake_attach[0]["mwm"] == 14


def test_attach_rejects_invalid_hash(fake_attach):
    result = runner.invoke(cli_main.app, ["attach", "--trunk", "SHORT", "--branch", BRANCH, "--api-key", "key", "ABC"])

    assert result.exit_code == 1
    assert "Data error" in result.output
    assert fake_attach == []


def test_attach_reports_remote_error(monkeypatch):
    async def _attach(*args):
        raise RemoteJobError("overloaded", {"jobId": "abc"})

    monkeypatch.setattr(cli_main, "_attach", _attach)
    result = runner.invoke(cli_main.app, ["attach", "--trunk", TRUNK, "--branch", BRANCH, "--api-key", "key", "ABC"])

    assert result.exit_code == 1
    assert "overloaded" in result.output


def test_attach_reports_invalid_settings(fake_attach):
    result = runner.invoke(
        cli_main.app,
        ["attach", "--trunk", TRUNK, "--branch", BRANCH, "--api-key", "key", "--poll-interval-ms", "0", "ABC"],
    )

    assert result.exit_code == 1
    assert fake_attach == []


def test_doctor_setup_writes_user_env(monkeypatch, tmp_path):
    monkeypatch.setattr("pow_box.core.config.sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    result = runner.invoke(cli_main.app, ["doctor", "setup"], input="https://box.local/api\nsecret\n")

    assert result.exit_code == 0, result.output
    content = (tmp_path / "pow-box" / ".env").read_text(encoding="utf-8")
    assert "POW_BOX_API_KEY=secret" in content
    assert "POW_BOX_BASE_URL=https://box.local/api" in content


@pytest.fixture
def broken_user_env(monkeypatch, tmp_path):
    monkeypatch.setattr("pow_box.core.config.sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.delenv("POW_BOX_POLL_INTERVAL_MS", raising=False)
    env_file = tmp_path / "pow-box" / ".env"
    env_file.parent.mkdir(parents=True)
    env_file.write_text("POW_BOX_POLL_INTERVAL_MS=0\n", encoding="utf-8")
    # env_file is resolved when the settings class is defined; point it at the fixture's file.
    monkeypatch.setitem(AppSettings.model_config, "env_file", (str(env_file),))
    return env_file


def test_doctor_setup_repairs_invalid_user_env(broken_user_env):
    result = runner.invoke(cli_main.app, ["doctor", "setup"], input="https://box.local/api\nsecret\n")

    assert result.exit_code == 0, result.output
    content = broken_user_env.read_text(encoding="utf-8")
    assert "POW_BOX_API_KEY=secret" in content
    assert "POW_BOX_BASE_URL=https://box.local/api" in content


def test_doctor_run_reports_invalid_user_env(broken_user_env):
    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 1
    assert "doctor setup" in result.output


def test_unknown_log_level_falls_back_to_warning(monkeypatch, fake_attach):
    monkeypatch.setenv("POW_BOX_LOG_LEVEL", "LOUD")

    result = runner.invoke(cli_main.app, ["attach", "--trunk", TRUNK, "--branch", BRANCH, "--api-key", "key", "ABC"])

    assert result.exit_code == 0, result.output
    assert logging.getLogger().level == logging.WARNING
