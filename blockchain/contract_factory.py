"""
Contract Factory
Submits contract-creation transactions and waits for them to be mined
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, Optional, TYPE_CHECKING
from web3 import Web3
from web3.exceptions import TimeExhausted
from loguru import logger

from .deployer_wallet import DeployerWallet
from .errors import ConfirmationError, DeploymentError, SubmissionError

if TYPE_CHECKING:
    from .artifact_resolver import ContractArtifact


DEFAULT_GAS_LIMIT = 3000000
DEFAULT_GAS_LIMIT_BUFFER = 1.2


def apply_gas_buffer(gas_estimate: int, buffer: float = DEFAULT_GAS_LIMIT_BUFFER) -> int:
    """Gas limit with safety margin (never below the estimate)"""
    return max(int(round(gas_estimate * buffer)), gas_estimate)


@dataclass(frozen=True)
class DeployedContract:
    """Contract confirmed on chain"""
    address: str
    tx_hash: str
    block_number: int
    gas_used: int
    contract: Any = None


class PendingDeployment:
    """
    Creation transaction accepted by the node, not yet confirmed
    """

    def __init__(
        self,
        w3: Web3,
        artifact: "ContractArtifact",
        tx_hash: str,
        sender: str,
        confirmation: Optional[Dict] = None
    ):
        self.w3 = w3
        self.artifact = artifact
        self.tx_hash = tx_hash
        self.sender = sender
        self.confirmation = confirmation or {}

    async def wait_for_deployment(self) -> DeployedContract:
        """
        Wait until the creation transaction is mined

        Returns:
            DeployedContract with checksummed address
        """
        try:
            return await asyncio.to_thread(self._wait)
        except DeploymentError:
            raise
        except Exception as e:
            logger.error(f"Error waiting for deployment {self.tx_hash}: {e}")
            raise ConfirmationError(
                f"Deployment transaction {self.tx_hash} was not confirmed: {e}",
                cause=e
            ) from e

    def _wait(self) -> DeployedContract:
        logger.info(f"Waiting for confirmation of {self.tx_hash}...")

        wait_kwargs = {}
        if self.confirmation.get('timeout_seconds') is not None:
            wait_kwargs['timeout'] = self.confirmation['timeout_seconds']
        if self.confirmation.get('poll_latency') is not None:
            wait_kwargs['poll_latency'] = self.confirmation['poll_latency']

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(self.tx_hash, **wait_kwargs)
        except TimeExhausted as e:
            raise ConfirmationError(
                f"Deployment transaction {self.tx_hash} not mined in time", cause=e
            ) from e

        if receipt['status'] != 1:
            raise ConfirmationError(f"Deployment transaction {self.tx_hash} reverted")

        contract_address = receipt.get('contractAddress')
        if not contract_address:
            raise ConfirmationError(
                f"Receipt for {self.tx_hash} has no contract address"
            )

        contract_address = Web3.to_checksum_address(contract_address)

        code = self.w3.eth.get_code(contract_address)
        if not code:
            raise ConfirmationError(f"No contract code at {contract_address}")

        logger.success(f"{self.artifact.contract_name} mined in block {receipt['blockNumber']}")
        logger.info(f"Gas used: {receipt['gasUsed']}")

        return DeployedContract(
            address=contract_address,
            tx_hash=self.tx_hash,
            block_number=receipt['blockNumber'],
            gas_used=receipt['gasUsed'],
            contract=self.w3.eth.contract(address=contract_address, abi=self.artifact.abi)
        )


class ContractFactory:
    """
    Deploys one compiled contract without constructor arguments
    """

    def __init__(
        self,
        w3: Web3,
        artifact: "ContractArtifact",
        wallet: DeployerWallet,
        gas_settings: Optional[Dict] = None,
        chain_id: Optional[int] = None,
        confirmation: Optional[Dict] = None
    ):
        """
        Initialize Contract Factory

        Args:
            w3: Web3 instance
            artifact: Compiled contract
            wallet: Deployer wallet
            gas_settings: gas_limit_buffer / default_gas_limit
            chain_id: Chain id for signed transactions (None = ask node)
            confirmation: timeout_seconds / poll_latency for the receipt waiter
        """
        self.w3 = w3
        self.artifact = artifact
        self.wallet = wallet
        self.chain_id = chain_id
        self.confirmation = confirmation or {}

        gas_settings = gas_settings or {}
        self.gas_limit_buffer = gas_settings.get('gas_limit_buffer', DEFAULT_GAS_LIMIT_BUFFER)
        self.default_gas_limit = gas_settings.get('default_gas_limit', DEFAULT_GAS_LIMIT)

    async def deploy(self) -> PendingDeployment:
        """
        Submit the creation transaction

        Returns:
            PendingDeployment for the broadcast transaction
        """
        try:
            return await asyncio.to_thread(self._submit)
        except DeploymentError:
            raise
        except Exception as e:
            logger.error(f"Error deploying {self.artifact.contract_name}: {e}")
            raise SubmissionError(
                f"Could not submit {self.artifact.contract_name} deployment: {e}",
                cause=e
            ) from e

    def _submit(self) -> PendingDeployment:
        if not self.w3.is_connected():
            raise SubmissionError("Failed to connect to network")

        sender = self.wallet.get_sender(self.w3)
        logger.info(f"Deploying {self.artifact.contract_name} from: {sender}")
        logger.info(f"Account balance: {self.wallet.get_balance(self.w3, sender)}")

        Contract = self.w3.eth.contract(abi=self.artifact.abi, bytecode=self.artifact.bytecode)
        gas_limit = self._estimate_gas_limit(Contract, sender)

        if self.wallet.signs_locally:
            tx_hash = self._send_signed(Contract, sender, gas_limit)
        else:
            tx_hash = Contract.constructor().transact({
                'from': sender,
                'gas': gas_limit
            })

        tx_hash = Web3.to_hex(tx_hash)
        logger.info(f"Transaction sent: {tx_hash}")

        return PendingDeployment(
            self.w3,
            self.artifact,
            tx_hash,
            sender,
            confirmation=self.confirmation
        )

    def _estimate_gas_limit(self, Contract, sender: str) -> int:
        try:
            gas_estimate = Contract.constructor().estimate_gas({'from': sender})
            gas_limit = apply_gas_buffer(gas_estimate, self.gas_limit_buffer)
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            gas_limit = self.default_gas_limit

        logger.info(f"Gas limit: {gas_limit}")
        return gas_limit

    def _send_signed(self, Contract, sender: str, gas_limit: int):
        nonce = self.w3.eth.get_transaction_count(sender, 'pending')
        gas_price = self.w3.eth.gas_price
        chain_id = self.chain_id if self.chain_id is not None else self.w3.eth.chain_id

        logger.info(f"Gas price: {self.w3.from_wei(gas_price, 'gwei')} gwei")

        transaction = Contract.constructor().build_transaction({
            'from': sender,
            'nonce': nonce,
            'gas': gas_limit,
            'gasPrice': gas_price,
            'chainId': chain_id
        })

        logger.info("Signing transaction...")
        signed_tx = self.wallet.sign_transaction(transaction)

        logger.info("Sending deployment transaction...")
        return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
