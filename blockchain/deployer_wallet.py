"""
Deployer Wallet
Resolves the account that pays for and signs the creation transaction
"""

import os
from typing import Dict, Optional
from decimal import Decimal
from web3 import Web3
from eth_account import Account
from loguru import logger
from dotenv import load_dotenv

from .errors import SubmissionError

load_dotenv()


class DeployerWallet:
    """
    Deployer account:
    - Local key (DEPLOYER_PRIVATE_KEY): transactions signed here
    - No key: first unlocked account of the node (local dev chains)
    """

    def __init__(self, private_key: Optional[str] = None):
        """
        Initialize deployer wallet

        Args:
            private_key: Hex private key (None = use node-managed account)
        """
        self.account = Account.from_key(private_key) if private_key else None

        if self.account:
            logger.info(f"Deployer wallet: {self.account.address} (local key)")
        else:
            logger.info("No DEPLOYER_PRIVATE_KEY set - using node-managed account")

    @classmethod
    def from_env(cls) -> "DeployerWallet":
        """Build wallet from DEPLOYER_PRIVATE_KEY"""
        return cls(os.getenv('DEPLOYER_PRIVATE_KEY') or None)

    @property
    def signs_locally(self) -> bool:
        return self.account is not None

    def get_sender(self, w3: Web3) -> str:
        """
        Get the address deploying the contract

        Args:
            w3: Web3 instance

        Returns:
            Checksummed sender address
        """
        if self.account:
            return self.account.address

        accounts = w3.eth.accounts
        if not accounts:
            raise SubmissionError(
                "Node exposes no unlocked accounts; set DEPLOYER_PRIVATE_KEY"
            )

        return Web3.to_checksum_address(accounts[0])

    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction with the local key

        Args:
            transaction: Transaction dict

        Returns:
            Signed transaction
        """
        if not self.account:
            raise ValueError("Wallet has no local key to sign with")

        try:
            return self.account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise

    def get_balance(self, w3: Web3, address: str) -> Decimal:
        """Get native balance of `address` in ether units"""
        balance_wei = w3.eth.get_balance(address)
        return Decimal(str(w3.from_wei(balance_wei, 'ether')))
