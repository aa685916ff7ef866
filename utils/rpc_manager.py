"""
RPC Manager
Builds the Web3 connection to the deployment network
"""

import os
from typing import Dict, Optional
from web3 import Web3
from loguru import logger
from dotenv import load_dotenv

load_dotenv()


class RPCManager:
    """
    Single-endpoint RPC connection

    URL from the env var named by `rpc_url_env`, else `default_rpc_url`
    """

    def __init__(self, network_config: Dict):
        """
        Initialize RPC Manager

        Args:
            network_config: `network` section of the deploy config
        """
        self.network_name = network_config.get('name', 'unknown')
        self.rpc_url = self._resolve_url(network_config)
        self.w3: Optional[Web3] = None

        logger.info(f"RPC Manager initialized for {self.network_name}: {self.rpc_url}")

    @staticmethod
    def _resolve_url(network_config: Dict) -> str:
        env_name = network_config.get('rpc_url_env')
        url = os.getenv(env_name) if env_name else None
        return url or network_config.get('default_rpc_url', 'http://127.0.0.1:8545')

    def get_web3(self) -> Web3:
        """
        Get Web3 instance (created on first use, no request sent)

        Returns:
            Web3 instance
        """
        if self.w3 is None:
            self.w3 = Web3(Web3.HTTPProvider(self.rpc_url))
        return self.w3

    def is_connected(self) -> bool:
        """Check the endpoint answers"""
        try:
            return self.get_web3().is_connected()
        except Exception as e:
            logger.error(f"Error connecting to {self.rpc_url}: {e}")
            return False
