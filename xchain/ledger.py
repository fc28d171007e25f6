import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from eth_typing import ChecksumAddress

from xchain.constants import (
    DEPLOYED_AT_KEY,
    LEDGER_ADDRESS_KEYS,
    NETWORK_NAME_KEY,
    STANDARD_LEDGER_JSON_FORMAT,
)
from xchain.errors import LedgerCorruptError, PersistenceError
from xchain.networks import ChainId, NetworkConfig

# Records are plain mappings; fields this tool does not know about are
# carried through load, merge and save unchanged.
DeploymentRecord = Dict[str, Any]
DeploymentLedger = Dict[ChainId, DeploymentRecord]


def format_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision, e.g. 2024-05-01T12:00:00.000Z"""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def deployment_record(
    network: NetworkConfig,
    contract_name: str,
    address: ChecksumAddress,
    deployed_at: datetime,
) -> DeploymentRecord:
    """Returns the partial record describing one deployment."""
    try:
        address_key = LEDGER_ADDRESS_KEYS[contract_name]
    except KeyError:
        raise ValueError(f"No ledger field for contract '{contract_name}'")
    return {
        NETWORK_NAME_KEY: network.description,
        address_key: address,
        DEPLOYED_AT_KEY: format_timestamp(deployed_at),
    }


def _parse_chain_id(key: str, filepath: Path) -> ChainId:
    try:
        chain_id = int(key)
    except ValueError:
        raise LedgerCorruptError(f"Ledger {filepath} has a non-numeric chain ID key '{key}'.")
    if str(chain_id) != key.strip():
        raise LedgerCorruptError(f"Ledger {filepath} has a malformed chain ID key '{key}'.")
    return chain_id


def load_ledger(filepath: Path) -> DeploymentLedger:
    """
    Reads the deployment ledger. A missing file is an empty ledger.
    """
    if not filepath.exists():
        return dict()

    try:
        with open(filepath, "r") as file:
            text = file.read()
    except OSError as e:
        raise PersistenceError(f"Cannot read ledger at {filepath}: {e}") from e

    try:
        data = json.loads(text)
    except ValueError as e:
        raise LedgerCorruptError(f"Ledger {filepath} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise LedgerCorruptError(f"Ledger {filepath} must contain a JSON object.")

    ledger = dict()
    for key, record in data.items():
        chain_id = _parse_chain_id(key, filepath)
        if chain_id in ledger:
            raise LedgerCorruptError(f"Ledger {filepath} lists chain ID {chain_id} twice.")
        if not isinstance(record, dict):
            raise LedgerCorruptError(
                f"Ledger {filepath} entry for chain ID {chain_id} is not an object."
            )
        ledger[chain_id] = record
    return ledger


def merge_record(
    ledger: DeploymentLedger, chain_id: ChainId, partial_record: DeploymentRecord
) -> DeploymentLedger:
    """
    Returns a new ledger with the partial record overlaid on the chain's record.

    Only the fields present in the partial record are replaced; any other
    fields of that record, and the records of every other chain, are kept.
    The input ledger is not modified.
    """
    merged = dict(ledger)
    record = dict(ledger.get(chain_id, {}))
    record.update(partial_record)
    merged[chain_id] = record
    return merged


def save_ledger(ledger: DeploymentLedger, filepath: Path) -> Path:
    """Writes the whole ledger, replacing the previous file in one step."""
    data = {str(chain_id): ledger[chain_id] for chain_id in sorted(ledger)}
    try:
        text = json.dumps(data, **STANDARD_LEDGER_JSON_FORMAT) + "\n"
    except (TypeError, ValueError) as e:
        raise PersistenceError(f"Cannot serialize ledger: {e}") from e

    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_filepath = tempfile.mkstemp(
            dir=filepath.parent, prefix=f".{filepath.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w") as file:
                file.write(text)
            # mkstemp creates owner-only files
            os.chmod(temp_filepath, 0o644)
            os.replace(temp_filepath, filepath)
        except BaseException:
            os.unlink(temp_filepath)
            raise
    except OSError as e:
        raise PersistenceError(f"Cannot write ledger to {filepath}: {e}") from e
    return filepath


def normalize_ledger(filepath: Path) -> Path:
    """Rewrites an existing ledger in canonical form."""
    if not filepath.exists():
        raise PersistenceError(f"No ledger found at {filepath}.")
    ledger = load_ledger(filepath)
    save_ledger(ledger, filepath)
    print(f"Successfully normalized ledger at {filepath}.")
    return filepath
