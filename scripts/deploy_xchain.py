#!/usr/bin/python3
import click

from xchain.deployer import Deployer
from xchain.errors import XChainError
from xchain.options import artifacts_dir_option, ledger_option, registry_option
from xchain.orchestrator import Orchestrator
from xchain.utils import get_private_key


@click.command(name="deploy-xchain")
@registry_option
@artifacts_dir_option
@ledger_option
def cli(registry_filepath, artifacts_dir, ledger_filepath):
    """Deploy CrossChainSender on a source chain and CrossChainReceiver on a target chain."""
    try:
        deployer = Deployer(private_key=get_private_key())
        orchestrator = Orchestrator(
            deployer=deployer,
            registry_filepath=registry_filepath,
            artifacts_dir=artifacts_dir,
            ledger_filepath=ledger_filepath,
        )
        orchestrator.run()
    except XChainError as e:
        raise click.ClickException(str(e)) from e
    click.secho("\nDeployment complete!", fg="green")


if __name__ == "__main__":
    cli()
