from enum import Enum
from pathlib import Path

#
# Filesystem
#

DEPLOY_CONFIG_DIR = Path("deploy-config")
REGISTRY_FILEPATH = DEPLOY_CONFIG_DIR / "config.json"
LEDGER_FILEPATH = DEPLOY_CONFIG_DIR / "contracts.json"
ARTIFACTS_DIR = Path("out")

YAML_SUFFIXES = (".yml", ".yaml")

# layout of the ledger file
STANDARD_LEDGER_JSON_FORMAT = {"indent": 2, "separators": (",", ": ")}

#
# Credentials
#

PRIVATE_KEY_ENVVAR = "PRIVATE_KEY"

#
# Contracts
#

SENDER_CONTRACT = "CrossChainSender"
RECEIVER_CONTRACT = "CrossChainReceiver"

ZERO_ADDRESS = "0x" + "0" * 40

#
# Ledger record fields
#

NETWORK_NAME_KEY = "networkName"
SENDER_ADDRESS_KEY = "senderAddress"
RECEIVER_ADDRESS_KEY = "receiverAddress"
DEPLOYED_AT_KEY = "deployedAt"

LEDGER_ADDRESS_KEYS = {
    SENDER_CONTRACT: SENDER_ADDRESS_KEY,
    RECEIVER_CONTRACT: RECEIVER_ADDRESS_KEY,
}


class Role(Enum):
    SOURCE = "source"
    TARGET = "target"
