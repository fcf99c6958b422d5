#!/usr/bin/env python3
"""
SRT Command Line Interface

Query transfer restrictions and dry-run a guarded transfer against an
in-memory token built from config.toml.

Usage:
    srt codes
    srt detect <sender> <recipient> <amount>
    srt message <code>
    srt transfer <recipient> <amount> [--config FILE]
"""

import json
import sys
from typing import Optional

import click

from srt.address import is_valid_address
from srt.config import load_config
from srt.constants import SRT_VERSION
from srt.exceptions import ConfigurationError, SRTException
from srt.logger import LogManager
from srt.tokens import (
    RestrictedToken,
    detect_transfer_restriction,
    message_for_transfer_restriction,
)
from srt.tokens.restrictions import RestrictionEngine


def _require_address(value: str, label: str) -> str:
    if not is_valid_address(value):
        raise click.BadParameter(f"not a valid address: {value}", param_hint=label)
    return value


@click.group()
@click.version_option(version=SRT_VERSION, prog_name="srt")
def cli():
    """Simple Restricted Token command line interface.

    Every transfer is screened by the restriction rules before any balance
    moves.
    """
    pass


@cli.command("codes")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def codes_cmd(as_json: bool):
    """List restriction codes and their messages."""
    codes = RestrictionEngine().codes()
    if as_json:
        click.echo(json.dumps({str(c): m for c, m in codes.items()}, indent=2))
        return
    for code, message in codes.items():
        click.echo(f"{code:>3}  {message}")


@cli.command("detect")
@click.argument("sender")
@click.argument("recipient")
@click.argument("amount", type=click.IntRange(min=0))
def detect_cmd(sender: str, recipient: str, amount: int):
    """Show the restriction code a transfer would produce.

    Example:

        srt detect 0xAbC... 0x0000000000000000000000000000000000000000 100
    """
    _require_address(sender, "SENDER")
    _require_address(recipient, "RECIPIENT")
    code = detect_transfer_restriction(sender, recipient, amount)
    click.echo(f"{code} {message_for_transfer_restriction(code)}")


@cli.command("message")
@click.argument("code")
def message_cmd(code: str):
    """Show the message for a restriction code."""
    try:
        value = int(code)
    except ValueError:
        value = code
    click.echo(message_for_transfer_restriction(value))


@cli.command("transfer")
@click.argument("recipient")
@click.argument("amount", type=click.IntRange(min=0))
@click.option(
    "--config", "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to config.toml (default: $SRT_CONFIG or ./config.toml)",
)
def transfer_cmd(recipient: str, amount: int, config_path: Optional[str]):
    """Dry-run a guarded transfer from the configured deployer.

    Builds an in-memory token from the config and prints the outcome with
    the resulting balances. Exits 1 if the transfer is restricted or rejected.
    """
    _require_address(recipient, "RECIPIENT")
    try:
        cfg = load_config(config_path)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    LogManager().set_level(cfg.logging.level)

    try:
        token = RestrictedToken(
            name=cfg.token.name,
            symbol=cfg.token.symbol,
            initial_supply=cfg.token.initial_supply,
            deployer=cfg.token.deployer,
            decimals=cfg.token.decimals,
        )
    except SRTException as e:
        raise click.ClickException(str(e))

    outcome = token.try_transfer(token.deployer, recipient, amount)
    result = outcome.to_dict()
    result["balances"] = {
        token.deployer: str(token.balance_of(token.deployer)),
        recipient: str(token.balance_of(recipient)),
    }
    click.echo(json.dumps(result, indent=2))
    if not outcome.ok:
        sys.exit(1)


def main():
    cli()


if __name__ == "__main__":
    main()
