from pathlib import Path
from typing import List, NamedTuple, Tuple

import yaml
from eth_typing import ChecksumAddress
from eth_utils import is_address, to_checksum_address

from xchain.errors import ConfigError
from xchain.utils import _load_document

ChainId = int

CHAINS_KEY = "chains"
REQUIRED_KEYS = ("description", "chainId", "rpc", "tokenBridge", "wormholeRelayer", "wormhole")
ADDRESS_KEYS = ("tokenBridge", "wormholeRelayer", "wormhole")


class NetworkConfig(NamedTuple):
    """A network the contracts can be deployed to, as listed in the registry."""

    description: str
    chain_id: ChainId
    rpc: str
    token_bridge: ChecksumAddress
    wormhole_relayer: ChecksumAddress
    wormhole: ChecksumAddress

    def constructor_args(self) -> Tuple[ChecksumAddress, ...]:
        """Constructor arguments shared by the sender and receiver contracts."""
        return self.wormhole_relayer, self.token_bridge, self.wormhole


def _parse_chain_id(value, where: str) -> ChainId:
    if isinstance(value, bool):
        raise ConfigError(f"{where}: chainId must be an integer, got {value!r}")
    try:
        chain_id = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{where}: chainId must be an integer, got {value!r}")
    if isinstance(value, float) and value != chain_id:
        raise ConfigError(f"{where}: chainId must be an integer, got {value!r}")
    if chain_id < 1:
        raise ConfigError(f"{where}: chainId must be positive, got {chain_id}")
    return chain_id


def _parse_address(value, key: str, where: str) -> ChecksumAddress:
    if not isinstance(value, str) or not is_address(value):
        raise ConfigError(f"{where}: {key} is not a valid address: {value!r}")
    return to_checksum_address(value)


def _parse_network(data, where: str) -> NetworkConfig:
    if not isinstance(data, dict):
        raise ConfigError(f"{where}: expected a mapping, got {type(data).__name__}")

    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise ConfigError(f"{where}: missing {', '.join(missing)}")

    for key in ("description", "rpc"):
        value = data[key]
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"{where}: {key} must be a non-empty string")

    addresses = {key: _parse_address(data[key], key, where) for key in ADDRESS_KEYS}
    return NetworkConfig(
        description=data["description"],
        chain_id=_parse_chain_id(data["chainId"], where),
        rpc=data["rpc"],
        token_bridge=addresses["tokenBridge"],
        wormhole_relayer=addresses["wormholeRelayer"],
        wormhole=addresses["wormhole"],
    )


def load_networks(filepath: Path) -> List[NetworkConfig]:
    """
    Reads the network registry, preserving the order of its entries.
    That order is what the operator sees, so it is also the selection key.
    """
    try:
        data = _load_document(filepath)
    except FileNotFoundError:
        raise ConfigError(f"No network registry found at {filepath}.")
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read network registry at {filepath}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get(CHAINS_KEY), list):
        raise ConfigError(f"Network registry at {filepath} is missing a '{CHAINS_KEY}' list.")
    if not data[CHAINS_KEY]:
        raise ConfigError(f"Network registry at {filepath} lists no chains.")

    networks = list()
    seen = dict()
    for index, entry in enumerate(data[CHAINS_KEY]):
        where = f"{filepath} chains[{index}]"
        network = _parse_network(entry, where)
        if network.chain_id in seen:
            raise ConfigError(
                f"{where}: chainId {network.chain_id} is already used by "
                f"'{seen[network.chain_id]}'"
            )
        seen[network.chain_id] = network.description
        networks.append(network)
    return networks
