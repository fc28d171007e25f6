#!/usr/bin/python3
import click

from xchain.errors import XChainError
from xchain.ledger import normalize_ledger
from xchain.options import ledger_option


@click.command(name="normalize-ledger")
@ledger_option
def cli(ledger_filepath):
    """Normalize ledger file"""
    try:
        normalize_ledger(ledger_filepath)
    except XChainError as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    cli()
