from typing import Callable, List, Optional

import click

from xchain.constants import Role
from xchain.errors import SelectionError
from xchain.networks import NetworkConfig

Prompt = Callable[[Role], int]


def resolve_network(networks: List[NetworkConfig], ordinal: int) -> NetworkConfig:
    """Maps a 1-based menu ordinal to the network listed at that position."""
    if not 1 <= ordinal <= len(networks):
        raise SelectionError(
            f"Invalid selection {ordinal}: choose a number between 1 and {len(networks)}."
        )
    return networks[ordinal - 1]


def display_networks(networks: List[NetworkConfig], role: Role) -> None:
    click.echo(f"\nSelect the {role.value.upper()} chain:")
    for index, network in enumerate(networks, start=1):
        click.echo(f"{index}: {network.description}")


def prompt_ordinal(role: Role) -> int:
    # click re-asks until the answer parses as an integer
    return click.prompt(f"\nEnter the number for the {role.value.upper()} chain", type=int)


def select_network(
    networks: List[NetworkConfig], role: Role, prompt: Optional[Prompt] = None
) -> NetworkConfig:
    """Shows the network menu for a role and resolves the operator's answer."""
    prompt = prompt or prompt_ordinal
    display_networks(networks, role)
    ordinal = prompt(role)
    try:
        network = resolve_network(networks, ordinal)
    except SelectionError as e:
        raise SelectionError(f"{role.value.capitalize()} chain: {e}") from e
    click.echo(
        f"{role.value.capitalize()} chain: {network.description} (chain ID {network.chain_id})"
    )
    return network
