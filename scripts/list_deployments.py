#!/usr/bin/python3
from typing import Optional

import click

from xchain.constants import DEPLOYED_AT_KEY, NETWORK_NAME_KEY
from xchain.errors import XChainError
from xchain.ledger import DeploymentLedger, load_ledger
from xchain.options import chain_id_option, ledger_option


def _display_ledger(ledger: DeploymentLedger, chain_id: Optional[int] = None) -> None:
    """Display ledger records grouped by chain ID."""
    for record_chain_id in sorted(ledger):
        if chain_id and chain_id != record_chain_id:
            continue
        record = ledger[record_chain_id]
        network_name = record.get(NETWORK_NAME_KEY, "unknown network")
        click.secho(f"\n{network_name} (chain ID {record_chain_id})", fg="green")
        if DEPLOYED_AT_KEY in record:
            click.secho(f"    deployed at {record[DEPLOYED_AT_KEY]}", fg="yellow")

        fields = [k for k in record if k not in (NETWORK_NAME_KEY, DEPLOYED_AT_KEY)]
        for index, field in enumerate(fields, start=1):
            click.secho(f"        {index}. {field} {record[field]}", fg="cyan")


@click.command(name="list-deployments")
@ledger_option
@chain_id_option
def cli(ledger_filepath, chain_id):
    """List all deployments in the ledger. Optionally filter by chain ID."""
    try:
        ledger = load_ledger(ledger_filepath)
    except XChainError as e:
        raise click.ClickException(str(e)) from e
    if not ledger:
        click.echo(f"No deployments recorded in {ledger_filepath}.")
        return
    if chain_id and chain_id not in ledger:
        click.echo(f"No deployments recorded for chain ID {chain_id}.")
        return
    _display_ledger(ledger, chain_id)


if __name__ == "__main__":
    cli()
