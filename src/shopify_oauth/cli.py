"""CLI interface for shopify-oauth."""

import asyncio
import json
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from shopify_oauth.config import ShopifyConfig, config_from_settings, get_settings
from shopify_oauth.exceptions import AuthenticationError, ConfigurationError
from shopify_oauth.logging import setup_logging

app = typer.Typer(
    name="shopify-oauth",
    help="Shopify OAuth login helper",
)
console = Console()


def _run_async(coro):
    """Run async coroutine in sync context."""
    return asyncio.run(coro)


def _load_config(shop: Optional[str], scope: Optional[str] = None) -> ShopifyConfig:
    settings = get_settings()
    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        format_style=settings.log_format,
    )
    try:
        return config_from_settings(settings, shop=shop, scope=scope)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)


@app.command("authorize-url")
def authorize_url(
    shop: Optional[str] = typer.Option(None, "--shop", "-s", help="Shop name or hostname"),
    scope: Optional[str] = typer.Option(
        None, "--scope", help="Comma-separated access scopes (default: SHOPIFY_SCOPE)"
    ),
    state: Optional[str] = typer.Option(None, "--state", help="CSRF state to embed"),
):
    """Print the URL that starts the OAuth login for a shop."""
    from shopify_oauth.strategies.shopify import ShopifyStrategy

    strategy = ShopifyStrategy(_load_config(shop, scope))
    console.print(strategy.authorization_url(state=state), soft_wrap=True)


@app.command()
def endpoints(
    shop: Optional[str] = typer.Option(None, "--shop", "-s", help="Shop name or hostname"),
):
    """Show the endpoints derived for a shop."""
    config = _load_config(shop)

    table = Table(title=f"Endpoints for {config.shop}")
    table.add_column("Endpoint", style="cyan")
    table.add_column("URL")
    table.add_row("authorization", config.authorization_url)
    table.add_row("token", config.token_url)
    table.add_row("profile", config.profile_url)
    console.print(table)


@app.command()
def profile(
    token: str = typer.Option(..., "--token", "-t", help="Shop access token"),
    shop: Optional[str] = typer.Option(None, "--shop", "-s", help="Shop name or hostname"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw profile JSON"),
):
    """Fetch and display the profile of a shop."""
    from shopify_oauth.strategies.shopify import ShopifyStrategy

    settings = get_settings()
    strategy = ShopifyStrategy(_load_config(shop), timeout=settings.http_timeout)

    try:
        result = _run_async(strategy.fetch_profile(token))
    except AuthenticationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(result.json_data))
        return

    lines = [f"[bold]{key}:[/bold] {value}" for key, value in result.public_dict().items() if value is not None]
    console.print(Panel.fit("\n".join(lines), title=f"Shopify: {result.name or result.url}"))


if __name__ == "__main__":
    app()
