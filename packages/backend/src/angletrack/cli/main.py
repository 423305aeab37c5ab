"""AngleTrack CLI — run the server and talk to it.

Usage:
    angletrack serve                              # Run the API with uvicorn
    angletrack signup "Ada" ada@example.com       # Create an account (prompts for password)
    angletrack login ada@example.com              # Print a bearer token
    angletrack angles                             # List your measurements
    angletrack submit angle=172.5 side=left       # Record a measurement
    angletrack goal                               # Show your goal
    angletrack goal 180                           # Set your goal
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import json
import os
import sys
from typing import Optional

import click
import httpx

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:8080"


def _api_url() -> str:
    return os.environ.get("ANGLETRACK_API_URL", DEFAULT_API_URL).rstrip("/")


def _client() -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the AngleTrack backend."""
    return httpx.AsyncClient(base_url=_api_url(), timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _auth_headers(token: Optional[str]) -> dict[str, str]:
    tok = token or os.environ.get("ANGLETRACK_TOKEN")
    if not tok:
        click.secho(
            "Error: --token required (or set ANGLETRACK_TOKEN env var)",
            fg="red",
            err=True,
        )
        sys.exit(1)
    return {"Authorization": f"Bearer {tok}"}


def _pretty_json(data: dict | list) -> str:
    return json.dumps(data, indent=2, default=str)


def _fail(r: httpx.Response) -> None:
    """Print the API error and exit non-zero."""
    try:
        detail = r.json().get("detail", r.text)
    except ValueError:
        detail = r.text
    click.secho(f"Error ({r.status_code}): {detail}", fg="red", err=True)
    sys.exit(1)


def _parse_fields(pairs: tuple[str, ...]) -> dict:
    """key=value pairs → dict, with JSON-decoded values where possible."""
    fields = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(f"expected key=value, got {pair!r}")
        key, raw = pair.split("=", 1)
        try:
            fields[key] = json.loads(raw)
        except ValueError:
            fields[key] = raw
    return fields


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version="0.1.0", prog_name="angletrack")
def main():
    """AngleTrack — body-angle tracking backend."""


@main.command()
@click.option("--host", default=None, help="Bind host (default from settings)")
@click.option("--port", default=None, type=int, help="Bind port (default from settings)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server."""
    import uvicorn

    from angletrack.config import Settings

    settings = Settings()
    uvicorn.run(
        "angletrack.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@main.command()
@click.argument("name")
@click.argument("email")
@click.password_option()
def signup(name: str, email: str, password: str):
    """Create an account."""
    _run(_signup_impl(name, email, password))


async def _signup_impl(name: str, email: str, password: str):
    async with _client() as c:
        r = await c.post(
            "/auth/signup",
            json={"name": name, "email": email, "password": password},
        )
        if r.status_code != 201:
            _fail(r)
        click.secho(f"Registered {r.json()['user']['email']}", fg="green")


@main.command()
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True)
def login(email: str, password: str):
    """Log in and print a bearer token."""
    _run(_login_impl(email, password))


async def _login_impl(email: str, password: str):
    async with _client() as c:
        r = await c.post("/auth/login", json={"email": email, "password": password})
        if r.status_code != 200:
            _fail(r)
        click.echo(r.json()["token"])


@main.command()
@click.option("--token", help="Bearer token (or set ANGLETRACK_TOKEN)")
@click.option("--json", "as_json", is_flag=True, help="Raw JSON output")
def angles(token: Optional[str], as_json: bool):
    """List your angle measurements."""
    _run(_angles_impl(token, as_json))


async def _angles_impl(token: Optional[str], as_json: bool):
    headers = _auth_headers(token)
    async with _client() as c:
        r = await c.get("/angles", headers=headers)
        if r.status_code != 200:
            _fail(r)
        records = r.json()

    if as_json:
        click.echo(_pretty_json(records))
        return
    if not records:
        click.echo("No measurements yet.")
        return

    click.secho(f"Measurements ({len(records)}):", bold=True)
    for rec in records:
        fields = ", ".join(
            f"{k}={v}" for k, v in rec.items() if k not in ("owner_email", "timestamp")
        )
        click.echo(f"  {rec.get('timestamp', '—')[:19]}  {fields}")


@main.command()
@click.argument("fields", nargs=-1, required=True)
@click.option("--token", help="Bearer token (or set ANGLETRACK_TOKEN)")
def submit(fields: tuple[str, ...], token: Optional[str]):
    """Record a measurement from key=value pairs."""
    payload = _parse_fields(fields)
    _run(_submit_impl(payload, token))


async def _submit_impl(payload: dict, token: Optional[str]):
    headers = _auth_headers(token)
    async with _client() as c:
        r = await c.post("/angles", json=payload, headers=headers)
        if r.status_code != 201:
            _fail(r)
        click.echo(_pretty_json(r.json()["record"]))


@main.command()
@click.argument("value", required=False, type=float)
@click.option("--token", help="Bearer token (or set ANGLETRACK_TOKEN)")
def goal(value: Optional[float], token: Optional[str]):
    """Show your goal, or set it when VALUE is given."""
    _run(_goal_impl(value, token))


async def _goal_impl(value: Optional[float], token: Optional[str]):
    headers = _auth_headers(token)
    async with _client() as c:
        if value is None:
            r = await c.get("/goal", headers=headers)
        else:
            r = await c.put("/goal", json={"goal": value}, headers=headers)
        if r.status_code != 200:
            _fail(r)
        click.echo(f"Goal: {r.json()['goal']:g}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
