"""Coding agent command tests."""

from __future__ import annotations
import json
from collections.abc import Callable
from uuid import UUID
import httpx
import pytest
import respx
from typer.testing import CliRunner
from quome.cli.commands import agent
from quome.cli.main import app
from quome.errors import ApiError, InvalidInputError
from quome.state import PersistedConfig


AGENT_URL = "http://api.test/api/v1/agents/quome-coder"
THREAD_ID = UUID("88888888-8888-8888-8888-888888888888")
APP_UUID = UUID("22222222-2222-2222-2222-222222222222")
THREAD_URL = f"{AGENT_URL}/{THREAD_ID}"


@pytest.fixture(autouse=True)
def no_poll_delay(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(agent, "POLL_INTERVAL", 0)


def _started() -> dict[str, str]:
    return {"thread_id": str(THREAD_ID), "status": "started", "message": "Queued"}


def _state(**overrides: object) -> dict[str, object]:
    state: dict[str, object] = {
        "thread_id": str(THREAD_ID),
        "is_working": True,
        "phase": "building",
        "status": "Writing code",
        "messages": [],
    }
    state.update(overrides)
    return state


def test_start_no_watch_sends_options(
    runner: CliRunner,
    env: dict[str, str],
    logged_in: Callable[..., PersistedConfig],
) -> None:
    logged_in(org=False)
    with respx.mock(assert_all_called=True) as router:
        route = router.post(f"{AGENT_URL}/start").mock(
            return_value=httpx.Response(200, json=_started())
        )
        result = runner.invoke(
            app,
            [
                "agent",
                "start",
                "a todo app",
                "--name",
                "todo",
                "--github",
                "--backend",
                "fastapi",
                "--database",
                "postgresql",
                "--no-watch",
            ],
            env=env,
        )

    assert result.exit_code == 0, result.output
    assert str(THREAD_ID) in result.output
    assert "quome agent state" in result.output
    body = json.loads(route.calls[0].request.content)
    assert body == {
        "prompt": "a todo app",
        "project_name": "todo",
        "include_github": True,
        "parallel_mode": False,
        "accessibility_target": "AA",
        "tech_stack": {"backend": {"stack": "fastapi"}, "database": "postgresql"},
    }
    assert route.calls[0].request.headers["Authorization"] == "Bearer stored-token"


def test_start_rejects_unknown_accessibility_target(
    runner: CliRunner,
    env: dict[str, str],
    logged_in: Callable[..., PersistedConfig],
) -> None:
    logged_in(org=False)

    result = runner.invoke(
        app, ["agent", "start", "app", "--accessibility", "AAAA"], env=env
    )

    assert isinstance(result.exception, InvalidInputError)


def test_start_watches_until_deployed(
    runner: CliRunner,
    env: dict[str, str],
    logged_in: Callable[..., PersistedConfig],
) -> None:
    logged_in(org=False)
    first = _state(messages=[{"type": "assistant", "content": "Planning [stage 1]"}])
    done = _state(
        is_working=False,
        phase="deployed",
        app_uuid=str(APP_UUID),
        app_context={"name": "todo"},
        deployment={"url": "https://todo.quome.app", "status": "deployed"},
        messages=[
            {"type": "assistant", "content": "Planning [stage 1]"},
            {"type": "user", "content": "ignored"},
            {"type": "assistant", "content": "Deployed"},
        ],
        files={"main.py": "print()"},
    )
    with respx.mock(assert_all_called=True) as router:
        router.post(f"{AGENT_URL}/start").mock(
            return_value=httpx.Response(200, json=_started())
        )
        state_route = router.get(f"{THREAD_URL}/state").mock(
            side_effect=[
                httpx.Response(200, json=first),
                httpx.Response(200, json=done),
            ]
        )
        result = runner.invoke(
            app, ["agent", "start", "a todo app", "--name", "todo"], env=env
        )

    assert result.exit_code == 0, result.output
    assert state_route.call_count == 2
    assert result.output.count("Planning [stage 1]") == 1
    assert "AI: Deployed" in result.output
    assert "ignored" not in result.output
    assert "Your app is live!" in result.output
    assert "https://todo.quome.app" in result.output
    assert "1 files generated" in result.output


def test_state_watch_reports_failed_build(
    runner: CliRunner,
    env: dict[str, str],
    logged_in: Callable[..., PersistedConfig],
) -> None:
    logged_in(org=False)
    failed = _state(is_working=False, phase="failed", status="Tests [x] failed")
    with respx.mock(assert_all_called=True) as router:
        router.get(f"{THREAD_URL}/state").mock(
            return_value=httpx.Response(200, json=failed)
        )
        result = runner.invoke(
            app, ["agent", "state", str(THREAD_ID), "--watch"], env=env
        )

    assert result.exit_code == 0, result.output
    assert "Build failed" in result.output
    assert "Tests [x] failed" in result.output


def test_state_json(
    runner: CliRunner,
    env: dict[str, str],
    logged_in: Callable[..., PersistedConfig],
) -> None:
    logged_in(org=False)
    with respx.mock(assert_all_called=True) as router:
        router.get(f"{THREAD_URL}/state").mock(
            return_value=httpx.Response(200, json=_state())
        )
        result = runner.invoke(
            app, ["agent", "state", str(THREAD_ID), "--json"], env=env
        )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["thread_id"] == str(THREAD_ID)
    assert payload["phase"] == "building"


def test_state_rejects_malformed_thread_id(
    runner: CliRunner,
    env: dict[str, str],
    logged_in: Callable[..., PersistedConfig],
) -> None:
    logged_in(org=False)

    result = runner.invoke(app, ["agent", "state", "not-a-uuid"], env=env)

    assert isinstance(result.exception, InvalidInputError)


def test_prompt_sends_follow_up(
    runner: CliRunner,
    env: dict[str, str],
    logged_in: Callable[..., PersistedConfig],
) -> None:
    logged_in(org=False)
    with respx.mock(assert_all_called=True) as router:
        route = router.post(f"{THREAD_URL}/prompt").mock(
            return_value=httpx.Response(
                200, json={"success": True, "message": "Queued"}
            )
        )
        result = runner.invoke(
            app, ["agent", "prompt", str(THREAD_ID), "add dark mode"], env=env
        )

    assert result.exit_code == 0, result.output
    assert "Prompt sent" in result.output
    assert json.loads(route.calls[0].request.content) == {"prompt": "add dark mode"}


def test_prompt_rejected_by_agent_is_an_error(
    runner: CliRunner,
    env: dict[str, str],
    logged_in: Callable[..., PersistedConfig],
) -> None:
    logged_in(org=False)
    with respx.mock(assert_all_called=True) as router:
        router.post(f"{THREAD_URL}/prompt").mock(
            return_value=httpx.Response(
                200, json={"success": False, "message": "Agent is busy"}
            )
        )
        result = runner.invoke(
            app, ["agent", "prompt", str(THREAD_ID), "more"], env=env
        )

    assert isinstance(result.exception, ApiError)
    assert result.exception.detail == "Agent is busy"


def test_stop_with_force(
    runner: CliRunner,
    env: dict[str, str],
    logged_in: Callable[..., PersistedConfig],
) -> None:
    logged_in(org=False)
    with respx.mock(assert_all_called=True) as router:
        route = router.post(f"{THREAD_URL}/stop").mock(
            return_value=httpx.Response(
                200, json={"success": True, "message": "Stopped"}
            )
        )
        result = runner.invoke(
            app, ["agent", "stop", str(THREAD_ID), "--force"], env=env
        )

    assert result.exit_code == 0, result.output
    assert "Workflow stopped" in result.output
    assert route.calls[0].request.content == b"{}"


def test_pull_prints_state(
    runner: CliRunner,
    env: dict[str, str],
    logged_in: Callable[..., PersistedConfig],
) -> None:
    logged_in(org=False)
    pulled = {
        "success": True,
        "message": "Synced",
        "state": _state(app_context={"name": "todo[beta]"}),
    }
    with respx.mock(assert_all_called=True) as router:
        router.get(f"{THREAD_URL}/pull").mock(
            return_value=httpx.Response(200, json=pulled)
        )
        result = runner.invoke(app, ["agent", "pull", str(THREAD_ID)], env=env)

    assert result.exit_code == 0, result.output
    assert "Pulled latest changes" in result.output
    assert "todo[beta]" in result.output
    assert "Workflow State" in result.output
