from datetime import datetime, timezone
from enum import IntEnum
from pathlib import Path
from typing import Callable, List, NamedTuple, Optional

import click
from eth_typing import ChecksumAddress

from xchain.artifacts import load_artifact
from xchain.constants import RECEIVER_CONTRACT, SENDER_CONTRACT, Role
from xchain.deployer import Deployer
from xchain.ledger import (
    DeploymentLedger,
    deployment_record,
    load_ledger,
    merge_record,
    save_ledger,
)
from xchain.networks import NetworkConfig, load_networks
from xchain.selection import Prompt, select_network

Clock = Callable[[], datetime]


class Stage(IntEnum):
    START = 0
    NETWORKS_SELECTED = 1
    SENDER_DEPLOYED = 2
    RECEIVER_DEPLOYED = 3
    LEDGER_PERSISTED = 4
    DONE = 5
    FAILED = 6


class Deployment(NamedTuple):
    contract_name: str
    network: NetworkConfig
    address: ChecksumAddress
    deployed_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Orchestrator:
    """
    Deploys the sender on a source network and the receiver on a target
    network, then records both addresses in the ledger.

    The ledger is written once, after both deployments are mined; a run that
    fails earlier leaves it untouched.
    """

    def __init__(
        self,
        deployer: Deployer,
        registry_filepath: Path,
        artifacts_dir: Path,
        ledger_filepath: Path,
        prompt: Optional[Prompt] = None,
        clock: Optional[Clock] = None,
    ):
        self.deployer = deployer
        self.registry_filepath = Path(registry_filepath)
        self.artifacts_dir = Path(artifacts_dir)
        self.ledger_filepath = Path(ledger_filepath)
        self.prompt = prompt
        self.clock = clock or _utcnow
        self.stage = Stage.START
        self.deployments: List[Deployment] = list()

    def _print_deployment_info(self) -> None:
        print(
            f"Account: {self.deployer.address}",
            f"Registry: {self.registry_filepath}",
            f"Artifacts: {self.artifacts_dir}",
            f"Ledger: {self.ledger_filepath}",
            sep="\n",
        )

    def _deploy(self, contract_name: str, network: NetworkConfig, artifact) -> Deployment:
        address = self.deployer.deploy(network, artifact, network.constructor_args())
        deployment = Deployment(
            contract_name=contract_name,
            network=network,
            address=address,
            deployed_at=self.clock(),
        )
        click.secho(
            f"{contract_name} deployed on {network.description} at: {address}", fg="green"
        )
        self.deployments.append(deployment)
        return deployment

    def _record(self) -> DeploymentLedger:
        ledger = load_ledger(self.ledger_filepath)
        for deployment in self.deployments:
            partial_record = deployment_record(
                network=deployment.network,
                contract_name=deployment.contract_name,
                address=deployment.address,
                deployed_at=deployment.deployed_at,
            )
            ledger = merge_record(ledger, deployment.network.chain_id, partial_record)
        save_ledger(ledger, self.ledger_filepath)
        print(f"(i) Ledger written to {self.ledger_filepath}!")
        return ledger

    def _report_unrecorded(self) -> None:
        click.secho(
            "\n! Contracts were deployed but could not be recorded in the ledger. "
            "Record these addresses manually:",
            fg="red",
            err=True,
        )
        for deployment in self.deployments:
            click.secho(
                f"\t{deployment.contract_name} on {deployment.network.description} "
                f"(chain ID {deployment.network.chain_id}): {deployment.address}",
                fg="red",
                err=True,
            )

    def _run(self) -> DeploymentLedger:
        self._print_deployment_info()
        networks = load_networks(self.registry_filepath)
        sender_artifact = load_artifact(SENDER_CONTRACT, self.artifacts_dir)
        receiver_artifact = load_artifact(RECEIVER_CONTRACT, self.artifacts_dir)

        source = select_network(networks, Role.SOURCE, prompt=self.prompt)
        target = select_network(networks, Role.TARGET, prompt=self.prompt)
        if source.chain_id == target.chain_id:
            click.secho(
                f"Source and target are both {source.description}; "
                "both contracts will be deployed there.",
                fg="yellow",
            )
        self.stage = Stage.NETWORKS_SELECTED

        self._deploy(SENDER_CONTRACT, source, sender_artifact)
        self.stage = Stage.SENDER_DEPLOYED

        self._deploy(RECEIVER_CONTRACT, target, receiver_artifact)
        self.stage = Stage.RECEIVER_DEPLOYED

        ledger = self._record()
        self.stage = Stage.LEDGER_PERSISTED
        return ledger

    def run(self) -> DeploymentLedger:
        try:
            ledger = self._run()
        except Exception:
            self.stage = Stage.FAILED
            # nothing from this run reaches the ledger once any step fails
            if self.deployments:
                self._report_unrecorded()
            raise
        self.stage = Stage.DONE
        return ledger
