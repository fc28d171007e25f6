from collections import OrderedDict
from typing import Any, Callable, Optional, Sequence

import click
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address
from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware

from xchain.artifacts import BuildArtifact
from xchain.constants import ZERO_ADDRESS
from xchain.errors import ConfigError, DeploymentError
from xchain.networks import NetworkConfig

Connect = Callable[[str], Web3]


def http_connect(rpc: str) -> Web3:
    """Opens an HTTP connection to a network's RPC endpoint."""
    w3 = Web3(Web3.HTTPProvider(rpc))
    # BSC, Polygon and friends put more than 32 bytes in extraData
    w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return w3


def _resolve_params(artifact: BuildArtifact, constructor_args: Sequence[Any]) -> OrderedDict:
    """Pairs constructor arguments with their ABI input names."""
    inputs = artifact.constructor_inputs()
    if len(inputs) != len(constructor_args):
        raise ValueError(
            f"{artifact.name} constructor takes {len(inputs)} arguments, "
            f"{len(constructor_args)} given"
        )
    resolved_params = OrderedDict()
    for index, (abi_input, value) in enumerate(zip(inputs, constructor_args)):
        name = abi_input.get("name") or f"arg{index}"
        resolved_params[name] = value
    return resolved_params


def _print_resolution(resolved_params: OrderedDict, contract_name: str) -> None:
    if len(resolved_params) == 0:
        print(f"\n(i) No constructor parameters for {contract_name}")
        return

    print(f"\nConstructor parameters for {contract_name}")
    for name, resolved_value in resolved_params.items():
        print(f"\t{name}={resolved_value}")
        if resolved_value == ZERO_ADDRESS:
            click.secho(f"\tWARNING: {name} is the zero address", fg="yellow")


class Deployer:
    """
    Deploys build artifacts to any network in the registry with a single signing key.

    The key and the way connections are opened are passed in explicitly;
    nothing is read from the environment once a deployment is under way.
    """

    def __init__(
        self,
        private_key: str,
        connect: Optional[Connect] = None,
        timeout: Optional[float] = None,
    ):
        try:
            self._account: LocalAccount = Account.from_key(private_key)
        except Exception as e:
            raise ConfigError(f"Invalid deployer private key: {e}") from e
        self._connect = connect or http_connect
        self.timeout = timeout

    @property
    def address(self) -> ChecksumAddress:
        return self._account.address

    def _check_network(self, w3: Web3, network: NetworkConfig) -> None:
        if not w3.is_connected():
            raise ConnectionError(f"cannot reach RPC endpoint {network.rpc}")
        chain_id = w3.eth.chain_id
        if chain_id != network.chain_id:
            raise ValueError(
                f"chain ID of {network.rpc} ({chain_id}) does not match "
                f"the registry ({network.chain_id})"
            )

    def _transact(self, w3: Web3, network: NetworkConfig, artifact: BuildArtifact, args) -> str:
        """Signs and submits the contract-creation transaction, returns its hash."""
        factory = w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        transaction = factory.constructor(*args).build_transaction(
            {
                "from": self.address,
                "nonce": w3.eth.get_transaction_count(self.address, "pending"),
                "chainId": network.chain_id,
            }
        )
        signed = self._account.sign_transaction(transaction)
        tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
        return w3.to_hex(tx_hash)

    def deploy(
        self, network: NetworkConfig, artifact: BuildArtifact, constructor_args: Sequence[Any]
    ) -> ChecksumAddress:
        """
        Deploys the artifact and blocks until the deployment is mined.
        Returns the checksum address of the new contract.
        """
        try:
            resolved_params = _resolve_params(artifact, constructor_args)
        except ValueError as e:
            raise DeploymentError(network, artifact.name, e) from e
        _print_resolution(resolved_params, artifact.name)

        print(f"\nDeploying {artifact.name} on {network.description} (chain ID {network.chain_id})")
        tx_hash = None
        try:
            w3 = self._connect(network.rpc)
            self._check_network(w3, network)
            tx_hash = self._transact(w3, network, artifact, list(resolved_params.values()))
            print(f"(i) Transaction sent: {tx_hash}")
            receipt = w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.timeout)
        except Exception as e:
            raise DeploymentError(network, artifact.name, e, tx_hash=tx_hash) from e

        if receipt["status"] != 1:
            raise DeploymentError(network, artifact.name, "contract creation reverted", tx_hash)
        return to_checksum_address(receipt["contractAddress"])
