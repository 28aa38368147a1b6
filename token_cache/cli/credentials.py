"""CLI commands for inspecting and managing cached tokens.

This module provides the ``token-cache credentials`` command group.

Commands:
    - get: Show a cached token (masked by default)
    - set: Store a token
    - delete: Remove a token
    - key: Print the composite key a triple maps to
    - status: Show which backend would be selected

Example:
    $ token-cache credentials set acct.example.com alice ID_TOKEN
    $ token-cache credentials get acct.example.com alice ID_TOKEN
    $ token-cache credentials status
"""

import sys

import click

from token_cache.config import CacheSettings
from token_cache.enums import BackendKind
from token_cache.exceptions import ConfigurationError, CredentialError, TokenCacheError
from token_cache.keyring_backend import KeyringBackend
from token_cache.keys import build_key
from token_cache.manager import CredentialManager


def _settings(ctx: click.Context, backend: str | None) -> CacheSettings:
    settings = (ctx.obj or {}).get("settings")
    if settings is None:
        try:
            settings = CacheSettings.from_env()
        except ConfigurationError as e:
            _fail(e)
    if backend:
        settings = settings.model_copy(update={"backend": BackendKind(backend)})
    return settings


def _mask(value: str) -> str:
    if len(value) > 8:
        return value[:4] + "*" * (len(value) - 8) + value[-4:]
    return "*" * len(value)


def _fail(e: TokenCacheError) -> None:
    click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
    suggestion = getattr(e, "suggestion", None)
    if suggestion:
        click.echo(click.style(f"Suggestion: {suggestion}", fg="yellow"), err=True)
    sys.exit(1)


backend_option = click.option(
    "--backend",
    type=click.Choice([kind.value for kind in BackendKind]),
    default=None,
    help="Override the configured backend",
)


@click.group(name="credentials")
def credentials_group():
    """Manage cached authentication tokens.

    Tokens are addressed by HOST, USER and CRED_TYPE (e.g. ID_TOKEN,
    MFA_TOKEN).

    Examples:

        token-cache credentials set acct.example.com alice ID_TOKEN

        token-cache credentials get acct.example.com alice ID_TOKEN --show-value

        token-cache credentials delete acct.example.com alice ID_TOKEN
    """
    pass


@credentials_group.command(name="get")
@click.argument("host")
@click.argument("user")
@click.argument("cred_type")
@click.option("--show-value", is_flag=True, help="Show full token value (default: masked)")
@backend_option
@click.pass_context
def get_credential(ctx: click.Context, host: str, user: str, cred_type: str, show_value: bool, backend: str | None):
    """Show a cached token."""
    try:
        manager = CredentialManager(settings=_settings(ctx, backend))
        value = manager.read(host, user, cred_type)
    except CredentialError as e:
        _fail(e)
        return

    if value is None:
        click.echo(click.style("Credential not found", fg="yellow"))
        sys.exit(1)

    if show_value:
        click.echo(f"Value: {value}")
    else:
        click.echo(f"Value: {_mask(value)}")
        click.echo(click.style("Use --show-value to display full token", fg="yellow"))


@credentials_group.command(name="set")
@click.argument("host")
@click.argument("user")
@click.argument("cred_type")
@click.option(
    "--value",
    prompt=True,
    hide_input=True,
    help="Token value (will prompt if not provided)",
)
@backend_option
@click.pass_context
def set_credential(ctx: click.Context, host: str, user: str, cred_type: str, value: str, backend: str | None):
    """Store a token."""
    try:
        manager = CredentialManager(settings=_settings(ctx, backend))
        manager.write(host, user, cred_type, value)
    except CredentialError as e:
        _fail(e)
        return

    click.echo(f"Stored in {manager.backend_name}: {host}/{user}/{cred_type}")
    click.echo(click.style("Credential stored successfully", fg="green"))


@credentials_group.command(name="delete")
@click.argument("host")
@click.argument("user")
@click.argument("cred_type")
@backend_option
@click.confirmation_option(prompt="Are you sure you want to delete this credential?")
@click.pass_context
def delete_credential(ctx: click.Context, host: str, user: str, cred_type: str, backend: str | None):
    """Remove a token."""
    try:
        manager = CredentialManager(settings=_settings(ctx, backend))
        manager.remove(host, user, cred_type)
    except CredentialError as e:
        _fail(e)
        return

    click.echo(click.style("Credential deleted successfully", fg="green"))


@credentials_group.command(name="key")
@click.argument("host")
@click.argument("user")
@click.argument("cred_type")
@click.pass_context
def show_key(ctx: click.Context, host: str, user: str, cred_type: str):
    """Print the composite key used by keyring and custom stores."""
    settings = _settings(ctx, None)
    click.echo(build_key(host, user, cred_type, settings.driver_id, settings.legacy_key_format))


@credentials_group.command(name="status")
@backend_option
@click.pass_context
def status(ctx: click.Context, backend: str | None):
    """Show which backend this process would use."""
    settings = _settings(ctx, backend)
    click.echo(click.style("Token cache backend", bold=True))
    click.echo(f"Mode: {settings.backend.value}")

    try:
        manager = CredentialManager(settings=settings)
    except CredentialError as e:
        _fail(e)
        return

    click.echo("Selected: ", nl=False)
    click.echo(click.style(manager.backend_name, fg="green"))
    if manager.backend_name == "local_file":
        click.echo(f"File: {settings.credential_file}")
    else:
        click.echo(f"Keyring service: {settings.keyring_service}")
    if isinstance(manager.backend, KeyringBackend):
        click.echo(f"Keyring reachable: {'yes' if manager.backend.available else 'no'}")
