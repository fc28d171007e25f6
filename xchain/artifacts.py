from pathlib import Path
from typing import NamedTuple

from eth_typing import ABI
from eth_utils import is_hex

from xchain.errors import ConfigError
from xchain.utils import _load_json


class BuildArtifact(NamedTuple):
    """Compiler output needed to create a contract: its ABI and creation bytecode."""

    name: str
    abi: ABI
    bytecode: str

    def constructor_inputs(self) -> list:
        for entry in self.abi:
            if entry.get("type") == "constructor":
                return list(entry.get("inputs", []))
        return list()


def get_artifact_filepath(name: str, artifacts_dir: Path) -> Path:
    """Returns the forge build output path of a contract."""
    return Path(artifacts_dir) / f"{name}.sol" / f"{name}.json"


def _get_bytecode(data: dict, filepath: Path) -> str:
    bytecode = data.get("bytecode")
    # forge nests the creation code under "object"
    if isinstance(bytecode, dict):
        bytecode = bytecode.get("object")
    if not isinstance(bytecode, str):
        raise ConfigError(f"Artifact {filepath} has no bytecode.")

    bytecode = bytecode.strip()
    if not bytecode.startswith("0x"):
        bytecode = f"0x{bytecode}"
    if len(bytecode) <= 2 or not is_hex(bytecode):
        raise ConfigError(f"Artifact {filepath} has empty or invalid bytecode.")
    return bytecode


def load_artifact(name: str, artifacts_dir: Path) -> BuildArtifact:
    filepath = get_artifact_filepath(name, artifacts_dir)
    try:
        data = _load_json(filepath)
    except FileNotFoundError:
        raise ConfigError(f"No build artifact for {name} at {filepath}. Is the project compiled?")
    except (OSError, ValueError) as e:
        raise ConfigError(f"Cannot read build artifact {filepath}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Artifact {filepath} is not a JSON object.")
    abi = data.get("abi")
    if not isinstance(abi, list) or not all(isinstance(entry, dict) for entry in abi):
        raise ConfigError(f"Artifact {filepath} has no valid ABI.")

    return BuildArtifact(name=name, abi=abi, bytecode=_get_bytecode(data, filepath))
