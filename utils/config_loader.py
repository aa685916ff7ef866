"""
Config Loader
Reads config/deploy_config.json and fills in defaults
"""

import copy
import json
import os
from typing import Dict, Optional
from loguru import logger
from dotenv import load_dotenv

from blockchain.errors import DeploymentError

load_dotenv()


DEFAULT_CONFIG_PATH = "config/deploy_config.json"

DEFAULT_CONFIG = {
    'contract_name': 'MultiSigEHR',
    'artifacts_dir': 'artifacts',
    'network': {
        'name': 'localhost',
        'rpc_url_env': 'DEPLOY_RPC_URL',
        'default_rpc_url': 'http://127.0.0.1:8545',
        'chain_id': None
    },
    'gas_settings': {
        'gas_limit_buffer': 1.2,
        'default_gas_limit': 3000000
    },
    'confirmation': {
        'timeout_seconds': None,
        'poll_latency': 0.5
    },
    'logging': {
        'level': 'INFO',
        'log_file': None
    }
}


class ConfigError(DeploymentError):
    """Deployment configuration missing or malformed"""


def _merge(defaults: Dict, overrides: Dict) -> Dict:
    merged = copy.deepcopy(defaults)

    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value

    return merged


def load_deploy_config(config_path: Optional[str] = None) -> Dict:
    """
    Load deployment configuration

    Args:
        config_path: JSON file (None = DEPLOY_CONFIG_PATH or config/deploy_config.json)

    Returns:
        Config dict with defaults for missing keys
    """
    explicit = config_path is not None or bool(os.getenv('DEPLOY_CONFIG_PATH'))
    config_path = config_path or os.getenv('DEPLOY_CONFIG_PATH') or DEFAULT_CONFIG_PATH

    if not os.path.exists(config_path):
        if explicit:
            raise ConfigError(f"Config file not found: {config_path}")

        logger.warning(f"{config_path} not found, using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_path, 'r') as f:
            overrides = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}", cause=e) from e

    if not isinstance(overrides, dict):
        raise ConfigError(f"Invalid config file {config_path}: expected a JSON object")

    return _merge(DEFAULT_CONFIG, overrides)
