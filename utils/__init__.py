"""
Utilities Package
Configuration, RPC connection and logging for the deploy script
"""

from .config_loader import load_deploy_config, ConfigError, DEFAULT_CONFIG
from .rpc_manager import RPCManager
from .logging_setup import configure_logging

__all__ = [
    'load_deploy_config',
    'ConfigError',
    'DEFAULT_CONFIG',
    'RPCManager',
    'configure_logging'
]
