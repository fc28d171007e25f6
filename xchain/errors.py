class XChainError(Exception):
    """Base class for every failure that aborts a cross-chain deployment run."""


class ConfigError(XChainError, ValueError):
    pass


class SelectionError(XChainError, ValueError):
    pass


class DeploymentError(XChainError):
    """
    Raised when a contract-creation transaction could not be completed.

    Carries the network and contract involved, the transaction hash if one
    was submitted, and the underlying cause.
    """

    def __init__(self, network, contract_name: str, cause, tx_hash: str = None):
        self.network = network
        self.contract_name = contract_name
        self.cause = cause
        self.tx_hash = tx_hash
        message = f"Failed to deploy {contract_name} on {network.description} ({cause})"
        if tx_hash:
            message += f"; transaction {tx_hash} may still be mined, check it before retrying"
        super().__init__(message)


class LedgerCorruptError(XChainError, ValueError):
    pass


class PersistenceError(XChainError, OSError):
    pass
