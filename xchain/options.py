from pathlib import Path

import click

from xchain.constants import ARTIFACTS_DIR, LEDGER_FILEPATH, REGISTRY_FILEPATH

registry_option = click.option(
    "--registry",
    "-r",
    "registry_filepath",
    help="Filepath of the network registry (JSON or YAML)",
    type=click.Path(dir_okay=False, path_type=Path),
    default=REGISTRY_FILEPATH,
    show_default=True,
)

artifacts_dir_option = click.option(
    "--artifacts-dir",
    "-a",
    help="Directory holding the compiled contract artifacts",
    type=click.Path(file_okay=False, path_type=Path),
    default=ARTIFACTS_DIR,
    show_default=True,
)

ledger_option = click.option(
    "--ledger",
    "-l",
    "ledger_filepath",
    help="Filepath of the deployment ledger",
    type=click.Path(dir_okay=False, path_type=Path),
    default=LEDGER_FILEPATH,
    show_default=True,
)

chain_id_option = click.option(
    "--chain-id",
    "-c",
    help="Only show deployments on this chain",
    type=click.IntRange(min=1),
    required=False,
)
