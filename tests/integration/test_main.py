"""Integration tests for the action entry point."""

import io
import json
from pathlib import Path

import pytest
from conftest import GH_HOST, FakeApis, envelope, make_deployment

from pages_await.config import Settings, get_settings
from pages_await.core.actions import ActionsRuntime
from pages_await.core.exceptions import ConfigurationError
from pages_await.main import main, watch
from pages_await.models import RunOutcome


@pytest.fixture
def action_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Minimal Actions environment; returns the outputs file path."""
    monkeypatch.chdir(tmp_path)
    event_file = tmp_path / "event.json"
    event_file.write_text(json.dumps({"head_commit": {"url": "https://github.com/acme/site/commit/abc123"}}))
    output_file = tmp_path / "github_output"

    for name, value in {
        "INPUT_APITOKEN": "cf-token",
        "INPUT_ACCOUNTID": "acc-1",
        "INPUT_PROJECT": "my-site",
        "INPUT_GITHUBTOKEN": "gh-token",
        "INPUT_COMMITHASH": "abc123",
        "INPUT_SLACKWEBHOOK": "",
        "GITHUB_REPOSITORY": "acme/site",
        "GITHUB_ACTOR": "octocat",
        "GITHUB_EVENT_PATH": str(event_file),
        "GITHUB_OUTPUT": str(output_file),
        "PAGES_AWAIT_POLL_INTERVAL": "0.001",
    }.items():
        monkeypatch.setenv(name, value)
    for name in ("INPUT_ACCOUNTEMAIL", "INPUT_APIKEY"):
        monkeypatch.delenv(name, raising=False)

    get_settings.cache_clear()
    yield output_file
    get_settings.cache_clear()


class TestWatch:
    """Tests for watch()."""

    @pytest.mark.asyncio
    async def test_full_run(self, action_env: Path, apis: FakeApis):
        apis.queue(
            envelope(make_deployment(stage="queued", status="active")),
            envelope(make_deployment(stage="deploy", status="success")),
        )
        actions = ActionsRuntime(stream=io.StringIO())

        outcome = await watch(Settings(), actions, transport=apis.transport)

        assert outcome is RunOutcome.SUCCEEDED
        assert action_env.read_text().splitlines() == [
            "id=dep-1",
            "environment=production",
            "url=https://prod.example",
            "alias=https://prod.example",
            "success=true",
        ]
        assert len(apis.calls(GH_HOST, "/deployments")) == 1
        assert len(apis.calls(GH_HOST, "/statuses")) == 1

    @pytest.mark.asyncio
    async def test_config_error_before_polling(
        self, action_env: Path, apis: FakeApis, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("INPUT_APITOKEN", "")
        actions = ActionsRuntime(stream=io.StringIO())

        with pytest.raises(ConfigurationError):
            await watch(Settings(), actions, transport=apis.transport)

        assert apis.requests == []


class TestMain:
    """Tests for main()."""

    def test_missing_auth_exits_non_zero(
        self,
        action_env: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ):
        monkeypatch.setenv("INPUT_APITOKEN", "")

        assert main() == 1
        assert "::error::Please specify authentication details!" in capsys.readouterr().out

    def test_invalid_settings_exit_non_zero(
        self,
        action_env: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ):
        monkeypatch.setenv("PAGES_AWAIT_POLL_INTERVAL", "-1")

        assert main() == 1
        assert "::error::Invalid configuration" in capsys.readouterr().out
