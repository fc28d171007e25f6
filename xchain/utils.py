import json
import os
from pathlib import Path

import yaml
from dotenv import find_dotenv, load_dotenv

from xchain.constants import PRIVATE_KEY_ENVVAR, YAML_SUFFIXES
from xchain.errors import ConfigError


def _load_yaml(filepath: Path) -> dict:
    """Loads a YAML file."""
    with open(filepath, "r") as file:
        return yaml.safe_load(file)


def _load_json(filepath: Path) -> dict:
    """Loads a JSON file."""
    with open(filepath, "r") as file:
        return json.load(file)


def _load_document(filepath: Path):
    """Loads a JSON file, or a YAML file when the suffix says so."""
    if filepath.suffix.lower() in YAML_SUFFIXES:
        return _load_yaml(filepath)
    return _load_json(filepath)


def get_private_key(dotenv_path: Path = None) -> str:
    """
    Returns the deployer's private key from the environment.
    Variables already set in the environment take precedence over the .env file.
    """
    load_dotenv(dotenv_path=dotenv_path or find_dotenv(usecwd=True), override=False)
    private_key = os.environ.get(PRIVATE_KEY_ENVVAR, "").strip()
    if not private_key:
        raise ConfigError(f"{PRIVATE_KEY_ENVVAR} is not set.")
    return private_key
