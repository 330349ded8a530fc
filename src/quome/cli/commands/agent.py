"""Coding agent commands.

``start`` and ``state --watch`` poll the workflow state with blocking GETs
until the agent finishes, printing new assistant messages as they arrive.
"""

from __future__ import annotations
import time
from typing import Annotated
from uuid import UUID
import typer
from rich.console import Console
from rich.markup import escape
from quome import api
from quome.api.models import (
    AgentState,
    ColorPreferences,
    SendPromptRequest,
    StackConfig,
    StartAgentRequest,
    TechStack,
)
from quome.cli.options import ForceOption, JsonOption
from quome.cli.render import render_json, render_kv_section, render_success
from quome.cli.utils import confirm_or_abort, get_state
from quome.context import parse_uuid
from quome.errors import ApiError, InvalidInputError
from quome.http import Transport


agent_app = typer.Typer(help="Build applications with the Quome coding agent.")

POLL_INTERVAL = 2.0
ACCESSIBILITY_TARGETS = ("A", "AA", "AAA")
_FINISHED_PHASES = {"deployed", "complete", "failed"}

ThreadArgument = Annotated[str, typer.Argument(help="Workflow thread ID.")]
WatchOption = Annotated[
    bool, typer.Option("--watch", "-w", help="Follow progress until the agent stops.")
]


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else f"{text[:limit]}..."


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def is_finished(agent: AgentState) -> bool:
    """Return whether a watched workflow has reached a final state."""
    if agent.deployment is not None and agent.deployment.status == "deployed":
        return True
    return not agent.is_working and agent.phase in _FINISHED_PHASES


def _progress_line(agent: AgentState) -> str:
    parts: list[str] = []
    progress = agent.progress
    if progress is not None and progress.percentage is not None:
        parts.append(f"{progress.percentage:.0f}%")
        if progress.current_stage is not None and progress.total_stages is not None:
            parts.append(f"stage {progress.current_stage}/{progress.total_stages}")
    if agent.phase:
        parts.append(agent.phase.upper())
    if agent.status:
        parts.append(_truncate(agent.status, 50))
    return escape("  ".join(parts) or "Waiting for the agent...")


def watch_agent(
    console: Console,
    transport: Transport,
    thread_id: UUID,
    *,
    app_name: str,
    prompt: str = "",
) -> AgentState:
    """Poll the workflow until it finishes and return the final state."""
    console.print(f"[bold cyan]Building: {escape(app_name)}[/]")
    if prompt:
        console.print(escape(_truncate(prompt, 60)), style="dim")
    seen = 0
    with console.status("Waiting for the agent...") as status:
        while True:
            agent = api.get_agent_state(transport, thread_id)
            status.update(_progress_line(agent))
            for message in agent.messages[seen:]:
                if message.type == "assistant" and message.content:
                    text = escape(_truncate(message.content, 70))
                    console.print(f"[bold green]AI:[/] {text}")
            seen = len(agent.messages)
            if is_finished(agent):
                return agent
            time.sleep(POLL_INTERVAL)


def _render_outcome(console: Console, agent: AgentState) -> None:
    if agent.phase == "failed":
        console.print("[bold red]Build failed[/]")
        if agent.status:
            console.print(agent.status, style="dim", markup=False)
        return

    pairs: list[tuple[str, str]] = []
    if agent.deployment is not None and agent.deployment.url:
        pairs.append(("URL", agent.deployment.url))
    if agent.app_context is not None and agent.app_context.name:
        pairs.append(("App Name", agent.app_context.name))
    if agent.app_uuid is not None:
        pairs.append(("App ID", str(agent.app_uuid)))
    if agent.github_repo_created and agent.github_repo_url:
        pairs.append(("GitHub", agent.github_repo_url))
    if agent.files:
        pairs.append(("Files", f"{len(agent.files)} files generated"))
    if agent.tests_ran:
        passed = agent.tests_passed or 0
        failed = agent.tests_failed or 0
        pairs.append(("Tests", f"{passed} passed, {failed} failed"))
    render_kv_section(console, title="Your app is live!", pairs=pairs)
    console.print(
        "Run 'quome agent prompt <thread-id> \"your changes\"' to iterate.",
        style="dim",
        markup=False,
    )


def _render_state(console: Console, agent: AgentState) -> None:
    pairs = [
        ("Thread ID", str(agent.thread_id)),
        ("Working", _yes_no(agent.is_working)),
    ]
    if agent.status:
        pairs.append(("Status", agent.status))
    if agent.phase:
        pairs.append(("Phase", agent.phase))
    progress = agent.progress
    if progress is not None and progress.percentage is not None:
        pairs.append(
            (
                "Progress",
                f"{progress.percentage:.0f}% (stage {progress.current_stage or 0}"
                f"/{progress.total_stages or 0})",
            )
        )
    if agent.app_context is not None:
        if agent.app_context.name:
            pairs.append(("Application", agent.app_context.name))
        if agent.app_context.goal:
            pairs.append(("Goal", agent.app_context.goal))
    if agent.deployment is not None:
        if agent.deployment.url:
            pairs.append(("Deployment URL", agent.deployment.url))
        if agent.deployment.status:
            pairs.append(("Deployment status", agent.deployment.status))
    container = agent.container_info
    if container is not None:
        if container.frontend_url:
            pairs.append(("Frontend preview", container.frontend_url))
        if container.backend_url:
            pairs.append(("Backend preview", container.backend_url))
        if container.is_healthy is not None:
            pairs.append(("Healthy", _yes_no(container.is_healthy)))
    if agent.github_repo_created and agent.github_repo_url:
        pairs.append(("GitHub", agent.github_repo_url))
    if agent.tests_ran:
        pairs.append(
            (
                "Tests",
                f"{agent.tests_passed or 0} passed, {agent.tests_failed or 0} failed "
                f"({agent.tests_ran} total)",
            )
        )
    if agent.files:
        pairs.append(("Files", f"{len(agent.files)} files generated"))
    render_kv_section(console, title="Workflow State", pairs=pairs)

    recent = [message for message in agent.messages if message.content][-3:]
    for message in recent:
        console.print(
            f"[bold]{escape(message.type)}:[/] "
            f"{escape(_truncate(message.content or '', 100))}"
        )


def _stack(stack: str | None, language: str | None) -> StackConfig | None:
    if stack is None and language is None:
        return None
    return StackConfig(stack=stack, language=language)


@agent_app.command("start")
def start(
    ctx: typer.Context,
    prompt: Annotated[str, typer.Argument(help="Description of the app to build.")],
    name: Annotated[
        str | None, typer.Option("--name", help="Project name (generated if omitted).")
    ] = None,
    github: Annotated[
        bool, typer.Option("--github", help="Create a GitHub repository.")
    ] = False,
    parallel: Annotated[
        bool, typer.Option("--parallel", help="Run build stages in parallel.")
    ] = False,
    accessibility: Annotated[
        str, typer.Option("--accessibility", help="WCAG target: A, AA or AAA.")
    ] = "AA",
    backend: Annotated[
        str | None, typer.Option("--backend", help="Backend stack, e.g. fastapi.")
    ] = None,
    backend_lang: Annotated[
        str | None, typer.Option("--backend-lang", help="Backend language.")
    ] = None,
    frontend: Annotated[
        str | None, typer.Option("--frontend", help="Frontend stack, e.g. react.")
    ] = None,
    frontend_lang: Annotated[
        str | None, typer.Option("--frontend-lang", help="Frontend language.")
    ] = None,
    database: Annotated[
        str | None, typer.Option("--database", help="Database, e.g. postgresql.")
    ] = None,
    primary_color: Annotated[
        str | None, typer.Option("--primary-color", help="Primary color hex code.")
    ] = None,
    secondary_color: Annotated[
        str | None, typer.Option("--secondary-color", help="Secondary color hex code.")
    ] = None,
    no_watch: Annotated[
        bool, typer.Option("--no-watch", help="Return right after starting.")
    ] = False,
    json_output: JsonOption = False,
) -> None:
    """Start a new app building workflow."""
    state = get_state(ctx)
    target = accessibility.upper()
    if target not in ACCESSIBILITY_TARGETS:
        raise InvalidInputError("--accessibility must be A, AA or AAA")

    backend_stack = _stack(backend, backend_lang)
    frontend_stack = _stack(frontend, frontend_lang)
    tech_stack = None
    if backend_stack or frontend_stack or database:
        tech_stack = TechStack(
            backend=backend_stack, frontend=frontend_stack, database=database
        )
    colors = None
    if primary_color or secondary_color:
        colors = ColorPreferences(
            primary_color=primary_color, secondary_color=secondary_color
        )
    request = StartAgentRequest(
        prompt=prompt,
        project_name=name,
        include_github=github,
        parallel_mode=parallel,
        accessibility_target=target,
        tech_stack=tech_stack,
        color_preferences=colors,
    )

    token = state.resolver().resolve_token()
    with state.transport(token) as transport:
        started = api.start_agent(transport, request)
        if json_output:
            render_json(state.console, started)
            return
        if no_watch:
            render_kv_section(
                state.console,
                title="Started AI workflow",
                pairs=[
                    ("Thread ID", str(started.thread_id)),
                    ("Status", started.status),
                    ("Message", started.message),
                ],
            )
            state.console.print(
                "Use 'quome agent state <thread-id>' to check progress.",
                style="dim",
                markup=False,
            )
            return
        final = watch_agent(
            state.console,
            transport,
            started.thread_id,
            app_name=name or "your app",
            prompt=prompt,
        )
    _render_outcome(state.console, final)


@agent_app.command("prompt")
def prompt(
    ctx: typer.Context,
    thread_id: ThreadArgument,
    text: Annotated[str, typer.Argument(help="Follow-up instruction.")],
    watch: WatchOption = False,
    json_output: JsonOption = False,
) -> None:
    """Send a follow-up prompt to an active workflow."""
    state = get_state(ctx)
    parsed_id = parse_uuid(thread_id, label="thread ID")
    token = state.resolver().resolve_token()
    with state.transport(token) as transport:
        response = api.send_agent_prompt(
            transport, parsed_id, SendPromptRequest(prompt=text)
        )
        if json_output:
            render_json(state.console, response)
            return
        if not response.success:
            raise ApiError(response.message)
        render_success(state.console, f"Prompt sent. {response.message}")
        if not watch:
            return
        final = watch_agent(
            state.console, transport, parsed_id, app_name="your app", prompt=text
        )
    _render_outcome(state.console, final)


@agent_app.command("state")
def show_state(
    ctx: typer.Context,
    thread_id: ThreadArgument,
    watch: WatchOption = False,
    json_output: JsonOption = False,
) -> None:
    """Show the current state of a workflow."""
    state = get_state(ctx)
    parsed_id = parse_uuid(thread_id, label="thread ID")
    token = state.resolver().resolve_token()
    with state.transport(token) as transport:
        agent = api.get_agent_state(transport, parsed_id)
        if not watch:
            if json_output:
                render_json(state.console, agent)
            else:
                _render_state(state.console, agent)
            return
        app_name = "your app"
        if agent.app_context is not None and agent.app_context.name:
            app_name = agent.app_context.name
        final = watch_agent(state.console, transport, parsed_id, app_name=app_name)
    _render_outcome(state.console, final)


@agent_app.command("stop")
def stop(
    ctx: typer.Context,
    thread_id: ThreadArgument,
    force: ForceOption = False,
    json_output: JsonOption = False,
) -> None:
    """Stop an active workflow."""
    state = get_state(ctx)
    parsed_id = parse_uuid(thread_id, label="thread ID")
    token = state.resolver().resolve_token()
    confirm_or_abort(f"Stop workflow {parsed_id}?", force=force)
    with state.transport(token) as transport:
        response = api.stop_agent(transport, parsed_id)

    if json_output:
        render_json(state.console, response)
        return
    if not response.success:
        raise ApiError(response.message)
    render_success(state.console, f"Workflow stopped. {response.message}")


@agent_app.command("pull")
def pull(
    ctx: typer.Context,
    thread_id: ThreadArgument,
    json_output: JsonOption = False,
) -> None:
    """Pull the latest changes of a workflow."""
    state = get_state(ctx)
    parsed_id = parse_uuid(thread_id, label="thread ID")
    token = state.resolver().resolve_token()
    with state.transport(token) as transport:
        response = api.pull_agent(transport, parsed_id)

    if json_output:
        render_json(state.console, response)
        return
    if not response.success:
        raise ApiError(response.message)
    render_success(state.console, f"Pulled latest changes. {response.message}")
    if response.state is not None:
        _render_state(state.console, response.state)


__all__ = ["agent_app", "is_finished", "watch_agent"]
