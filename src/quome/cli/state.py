"""Runtime state shared across CLI commands."""

from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass, field
from rich.console import Console
from quome.context import ContextResolver, ResolvedContext
from quome.http import Transport
from quome.state import ConfigStore, PersistedConfig


@dataclass(slots=True)
class CLIState:
    """Object stored on :class:`typer.Context` for command access.

    The persisted config is read on first use and at most once per process.
    """

    store: ConfigStore
    cwd_key: str
    api_url: str
    timeout: float
    env: Mapping[str, str]
    console: Console
    _config: PersistedConfig | None = field(default=None, repr=False)

    @property
    def config(self) -> PersistedConfig:
        """Return the persisted config, loading it on first access."""
        if self._config is None:
            self._config = self.store.load()
        return self._config

    def save_config(self) -> None:
        """Persist the in-memory config."""
        self.store.save(self.config)

    def resolver(self) -> ContextResolver:
        """Return a resolver over the persisted config and environment."""
        return ContextResolver(self.config, cwd_key=self.cwd_key, env=self.env)

    def transport(self, token: str | None) -> Transport:
        """Return a transport bound to ``token`` and the resolved API URL."""
        return Transport(token, base_url=self.api_url, timeout=self.timeout)

    def resolve(
        self,
        *,
        org: str | None = None,
        app: str | None = None,
        require_app: bool = False,
    ) -> ResolvedContext:
        """Resolve token, organization and, optionally, application."""
        return self.resolver().resolve(org=org, app=app, require_app=require_app)


__all__ = ["CLIState"]
