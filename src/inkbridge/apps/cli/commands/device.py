"""Device identity, registration and raw request commands."""

from __future__ import annotations

import json
import os
import traceback
from dataclasses import dataclass
from functools import wraps
from pathlib import Path
from typing import Optional

import typer

from inkbridge.domain import BridgeRequestError, HttpMethod
from inkbridge.services.bridge import InkBridge
from inkbridge.services.logging import mask_secret, setup_logging
from inkbridge.services.settings import BridgeSettings, base_dir, build_store, load_settings

app = typer.Typer(help="InkBridge device client: identity, registration and backend calls.", no_args_is_help=True)


@dataclass
class _Options:
    root: Path
    settings: BridgeSettings


def _run_safe(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception:
            if os.getenv("INKBRIDGE_CLI_DEBUG") == "1":
                traceback.print_exc()
            raise

    return wrapper


@app.callback()
def main(
    ctx: typer.Context,
    base: Optional[Path] = typer.Option(None, "--base-dir", help="Directory holding settings and credentials."),
    store: Optional[str] = typer.Option(None, "--store", help="Credential backend: file, keyring or memory."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level."),
):
    root = (base or base_dir()).expanduser()
    try:
        settings = load_settings(root)
        if store:
            settings.store = store
        if log_level:
            settings.log_level = log_level
        settings.validate()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    setup_logging(settings.log_level, json_output=settings.log_json, logfile=root / "logs" / "inkbridge.log")
    ctx.obj = _Options(root=root, settings=settings)


def _bridge(ctx: typer.Context, *, reset: bool = False) -> InkBridge:
    opts: _Options = ctx.obj
    store = build_store(opts.settings, root=opts.root)
    store.init()
    bridge = InkBridge(reset_device=reset, settings=opts.settings, store=store)
    bridge.load_config()
    return bridge


def _print_status(bridge: InkBridge, opts: _Options) -> None:
    typer.echo(f"device id:     {bridge.device_id or '-'}")
    typer.echo(f"uid:           {bridge.uid or '-'}")
    typer.echo(f"friendly name: {bridge.friendly_id}")
    typer.echo(f"api key:       {mask_secret(bridge.api_key)}")
    typer.echo(f"api url:       {bridge.api_url}")
    typer.echo(f"state:         {bridge.registration_state}")
    typer.echo(f"store:         {opts.settings.store}")


@app.command("status")
@_run_safe
def cmd_status(ctx: typer.Context):
    """Show persisted identity and registration state without touching the network."""
    bridge = _bridge(ctx)
    _print_status(bridge, ctx.obj)


@app.command("begin")
@_run_safe
def cmd_begin(
    ctx: typer.Context,
    reset: bool = typer.Option(False, "--reset", help="Factory reset before bootstrapping."),
):
    """Run the bootstrap sequence (identity, then registration when needed)."""
    bridge = _bridge(ctx, reset=reset)
    ok = bridge.begin()
    _print_status(bridge, ctx.obj)
    if not ok:
        typer.secho(f"bootstrap failed: {bridge.last_error} {bridge.last_error_reason}".rstrip(), fg=typer.colors.RED)
        raise typer.Exit(1)


@app.command("register")
@_run_safe
def cmd_register(ctx: typer.Context):
    """Force the /setup handshake for the stored device id."""
    bridge = _bridge(ctx)
    if not bridge.device_id:
        typer.secho("no device id yet; run 'inkbridge begin' first", fg=typer.colors.RED)
        raise typer.Exit(1)
    if not bridge.register_device():
        typer.secho(f"registration failed: {bridge.last_error} {bridge.last_error_reason}".rstrip(), fg=typer.colors.RED)
        raise typer.Exit(1)
    typer.echo(f"registered as {bridge.friendly_id}")


@app.command("set-api-key")
@_run_safe
def cmd_set_api_key(ctx: typer.Context, key: str):
    """Store an API key obtained out of band."""
    if not key:
        raise typer.BadParameter("key must not be empty")
    bridge = _bridge(ctx)
    bridge.set_api_key(key)
    typer.echo(f"api key saved: {mask_secret(key)}")


@app.command("set-api-url")
@_run_safe
def cmd_set_api_url(ctx: typer.Context, url: str):
    """Point the device at an alternate backend deployment."""
    if not url:
        raise typer.BadParameter("url must not be empty")
    bridge = _bridge(ctx)
    bridge.set_api_url(url)
    typer.echo(f"api url saved: {url}")


@app.command("reset")
@_run_safe
def cmd_reset(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
):
    """Erase every persisted record (irreversible)."""
    if not yes:
        typer.confirm("Erase device identity and credentials?", abort=True)
    bridge = _bridge(ctx)
    bridge.factory_reset()
    typer.echo("device configuration erased")


@app.command("call")
@_run_safe
def cmd_call(
    ctx: typer.Context,
    endpoint: str,
    method: str = typer.Option("GET", "--method", "-X", help="GET or POST."),
    data: Optional[str] = typer.Option(None, "--data", "-d", help="JSON object merged into the POST body."),
):
    """Send one request with the stored identity and print the JSON reply."""
    try:
        verb = HttpMethod(method.upper())
    except ValueError as exc:
        raise typer.BadParameter("method must be GET or POST") from exc
    fields = {}
    if data:
        try:
            fields = json.loads(data)
        except ValueError as exc:
            raise typer.BadParameter(f"--data is not valid JSON: {exc}") from exc
        if not isinstance(fields, dict):
            raise typer.BadParameter("--data must be a JSON object")
    bridge = _bridge(ctx)
    if verb is HttpMethod.POST:
        response = bridge.post(endpoint, fields)
    else:
        response = bridge.request(endpoint, verb)
    try:
        response.raise_for_outcome()
    except BridgeRequestError as exc:
        typer.secho(f"request failed: {exc}", fg=typer.colors.RED)
        if exc.payload is not None:
            typer.echo(json.dumps(exc.payload, ensure_ascii=False, indent=2))
        raise typer.Exit(1)
    typer.echo(json.dumps(response.data, ensure_ascii=False, indent=2))


__all__ = ["app"]
