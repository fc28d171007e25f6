import json
from datetime import datetime, timezone

import pytest
from eth_utils import to_checksum_address

from xchain.artifacts import get_artifact_filepath
from xchain.constants import RECEIVER_CONTRACT, SENDER_CONTRACT
from xchain.errors import DeploymentError

# Common constants
# well-known development key; never holds real funds
DEPLOYER_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEPLOYER_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

SENDER_ADDRESS = to_checksum_address("0x" + "aa" * 20)
RECEIVER_ADDRESS = to_checksum_address("0x" + "bb" * 20)
OTHER_ADDRESS = to_checksum_address("0x" + "cc" * 20)

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
T1 = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
T2 = datetime(2024, 5, 1, 12, 5, 30, 250000, tzinfo=timezone.utc)

CONSTRUCTOR_ABI = {
    "type": "constructor",
    "stateMutability": "nonpayable",
    "inputs": [
        {"name": "_wormholeRelayer", "type": "address", "internalType": "address"},
        {"name": "_tokenBridge", "type": "address", "internalType": "address"},
        {"name": "_wormhole", "type": "address", "internalType": "address"},
    ],
}

CHAINS = [
    {
        "description": "Alpha",
        "chainId": 1,
        "rpc": "http://alpha.invalid:8545",
        "tokenBridge": "0x1111111111111111111111111111111111111111",
        "wormholeRelayer": "0x2222222222222222222222222222222222222222",
        "wormhole": "0x3333333333333333333333333333333333333333",
    },
    {
        "description": "Beta",
        "chainId": 2,
        "rpc": "http://beta.invalid:8545",
        "tokenBridge": "0x4444444444444444444444444444444444444444",
        "wormholeRelayer": "0x5555555555555555555555555555555555555555",
        "wormhole": "0x6666666666666666666666666666666666666666",
    },
]


# Utility functions
def write_json(filepath, data):
    filepath.parent.mkdir(parents=True, exist_ok=True)
    filepath.write_text(json.dumps(data, indent=2))
    return filepath


def make_artifact_data(bytecode="0x6080604052348015600e575f80fd5b50"):
    return {
        "abi": [CONSTRUCTOR_ABI, {"type": "function", "name": "ping", "inputs": []}],
        "bytecode": {"object": bytecode, "sourceMap": "", "linkReferences": {}},
    }


def scripted_prompt(*answers):
    """Returns a prompt that answers with the given ordinals, in order."""
    remaining = list(answers)
    asked = list()

    def prompt(role):
        asked.append(role)
        return remaining.pop(0)

    prompt.asked = asked
    return prompt


class FakeDeployer:
    """Stands in for the web3-backed Deployer; returns scripted addresses or failures."""

    address = DEPLOYER_ADDRESS

    def __init__(self, *results):
        self.results = list(results)
        self.calls = list()

    def deploy(self, network, artifact, constructor_args):
        self.calls.append((network, artifact, tuple(constructor_args)))
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise DeploymentError(network, artifact.name, result)
        return result


class FakeClock:
    def __init__(self, *moments):
        self.moments = list(moments)

    def __call__(self):
        return self.moments.pop(0)


# Fixtures
@pytest.fixture
def chains():
    return [dict(chain) for chain in CHAINS]


@pytest.fixture
def registry_filepath(tmp_path, chains):
    return write_json(tmp_path / "deploy-config" / "config.json", {"chains": chains})


@pytest.fixture
def artifacts_dir(tmp_path):
    artifacts_dir = tmp_path / "out"
    for name in (SENDER_CONTRACT, RECEIVER_CONTRACT):
        write_json(get_artifact_filepath(name, artifacts_dir), make_artifact_data())
    return artifacts_dir


@pytest.fixture
def ledger_filepath(tmp_path):
    return tmp_path / "deploy-config" / "contracts.json"
