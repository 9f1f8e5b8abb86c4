import json
from pathlib import Path

import httpx
import typer
from rich.console import Console

from app_jwt.config import get_settings
from app_jwt.errors import AppJWTError
from app_jwt.github import GitHubAppAuth
from app_jwt.issuer import TokenIssuer, decode_token, load_public_key

app = typer.Typer(
    name="app-jwt",
    help="Issue GitHub App JWTs for CI pipelines",
    no_args_is_help=True,
    add_completion=False,
)
# stdout carries the token only
console = Console(stderr=True)


def _fail(message: str) -> typer.Exit:
    console.print(f"[red]{message}[/red]")
    return typer.Exit(1)


@app.command()
def issue(
    key_path: Path | None = typer.Option(None, "--key-path", "-k", help="PEM private key (default: $GITHUB_PRIVATE_KEY_PATH)"),
    app_id: str | None = typer.Option(None, "--app-id", "-a", help="GitHub App ID (default: $GITHUB_APP_ID)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print claim details to stderr"),
):
    """Sign a short-lived JWT and print it."""
    try:
        settings = get_settings(github_private_key_path=key_path, github_app_id=app_id)
        token = TokenIssuer(settings).issue()
    except AppJWTError as e:
        raise _fail(str(e))

    if verbose:
        console.print(
            f"[dim]iss={settings.github_app_id} skew={settings.jwt_clock_skew}s "
            f"lifetime={settings.jwt_lifetime}s[/dim]"
        )
    typer.echo(token)


@app.command()
def decode(
    token: str = typer.Argument(..., help="Compact JWT"),
    public_key: Path | None = typer.Option(None, "--public-key", "-p", help="PEM public key to verify the signature"),
):
    """Print the header and claims of a token."""
    try:
        key = load_public_key(public_key) if public_key else None
        header, claims = decode_token(token, key)
    except AppJWTError as e:
        raise _fail(str(e))

    if key is None:
        console.print("[yellow]Signature not verified[/yellow]")
    typer.echo(json.dumps({"header": header, "claims": claims}, indent=2))


@app.command("installation-token")
def installation_token(
    installation_id: int = typer.Option(..., "--installation-id", "-i", help="App installation ID"),
    key_path: Path | None = typer.Option(None, "--key-path", "-k", help="PEM private key (default: $GITHUB_PRIVATE_KEY_PATH)"),
    app_id: str | None = typer.Option(None, "--app-id", "-a", help="GitHub App ID (default: $GITHUB_APP_ID)"),
):
    """Exchange an App JWT for an installation access token."""
    try:
        settings = get_settings(github_private_key_path=key_path, github_app_id=app_id)
        auth = GitHubAppAuth(TokenIssuer(settings), settings.github_api_url)
        token = auth.get_installation_token(installation_id)
    except AppJWTError as e:
        raise _fail(str(e))
    except httpx.HTTPStatusError as e:
        raise _fail(f"GitHub error {e.response.status_code} for installation {installation_id}")
    except httpx.HTTPError as e:
        raise _fail(f"Request to GitHub failed: {e}")

    typer.echo(token)


def main():
    app()


if __name__ == "__main__":
    main()
