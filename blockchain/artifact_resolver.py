"""
Artifact Resolver
Locates compiled Hardhat artifacts and turns them into contract factories
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional
from web3 import Web3
from loguru import logger

from .contract_factory import ContractFactory
from .deployer_wallet import DeployerWallet
from .errors import ArtifactNotFoundError


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract: bytecode + ABI"""
    contract_name: str
    source_name: str
    abi: List[Dict]
    bytecode: str

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.source_name}:{self.contract_name}"


class ArtifactResolver:
    """
    Resolves contract names against `<artifacts_dir>/**/<Name>.json`

    Accepts bare names (`MultiSigEHR`) or fully qualified names
    (`contracts/MultiSigEHR.sol:MultiSigEHR`)
    """

    def __init__(
        self,
        w3: Web3,
        wallet: DeployerWallet,
        artifacts_dir: str = "artifacts",
        gas_settings: Optional[Dict] = None,
        chain_id: Optional[int] = None,
        confirmation: Optional[Dict] = None
    ):
        """
        Initialize Artifact Resolver

        Args:
            w3: Web3 instance
            wallet: Deployer wallet handed to every factory
            artifacts_dir: Hardhat artifacts root
            gas_settings: Gas limit buffer / default limit
            chain_id: Chain id for locally signed transactions (None = ask node)
            confirmation: Receipt waiter settings handed to every factory
        """
        self.w3 = w3
        self.wallet = wallet
        self.artifacts_dir = Path(artifacts_dir)
        self.gas_settings = gas_settings or {}
        self.chain_id = chain_id
        self.confirmation = confirmation or {}

    def get_factory(self, name: str) -> ContractFactory:
        """
        Get a factory for the named contract

        Args:
            name: Bare or fully qualified contract name

        Returns:
            ContractFactory ready to deploy
        """
        artifact = self.load_artifact(name)

        logger.info(f"Resolved artifact {artifact.fully_qualified_name}")

        return ContractFactory(
            self.w3,
            artifact,
            self.wallet,
            gas_settings=self.gas_settings,
            chain_id=self.chain_id,
            confirmation=self.confirmation
        )

    def load_artifact(self, name: str) -> ContractArtifact:
        """Find, read and validate the artifact for `name`"""
        if ':' in name:
            source_name, contract_name = name.rsplit(':', 1)
        else:
            source_name, contract_name = None, name

        candidates = self._find_candidates(contract_name)

        # Hardhat writes `<artifacts_dir>/<sourceName>/<Name>.json`
        if source_name is not None:
            candidates = [
                path for path in candidates
                if path.parent.relative_to(self.artifacts_dir).as_posix() == source_name
            ]

        artifacts = [self._read_artifact(path) for path in candidates]
        artifacts = [a for a in artifacts if a.contract_name == contract_name]

        if source_name is not None:
            artifacts = [a for a in artifacts if a.source_name == source_name]

        if not artifacts:
            raise ArtifactNotFoundError(
                f"Artifact for contract \"{name}\" not found in {self.artifacts_dir}. "
                "Run 'npx hardhat compile' first"
            )

        if len(artifacts) > 1:
            names = ', '.join(sorted(a.fully_qualified_name for a in artifacts))
            raise ArtifactNotFoundError(
                f"Multiple artifacts for contract \"{name}\": {names}. "
                "Use a fully qualified name"
            )

        artifact = artifacts[0]
        self._check_deployable(artifact)
        return artifact

    def _find_candidates(self, contract_name: str) -> List[Path]:
        if not self.artifacts_dir.is_dir():
            return []

        return sorted(
            path for path in self.artifacts_dir.rglob(f"{contract_name}.json")
            if path.is_file()
            and not path.name.endswith(".dbg.json")
            and path.relative_to(self.artifacts_dir).parts[0] != "build-info"
        )

    def _read_artifact(self, path: Path) -> ContractArtifact:
        try:
            with open(path, 'r') as f:
                contract_json = json.load(f)

            return ContractArtifact(
                contract_name=contract_json['contractName'],
                source_name=contract_json['sourceName'],
                abi=contract_json['abi'],
                bytecode=contract_json['bytecode']
            )

        except (OSError, ValueError, KeyError) as e:
            raise ArtifactNotFoundError(
                f"Unreadable contract artifact {path}: {e}", cause=e
            ) from e

    def _check_deployable(self, artifact: ContractArtifact):
        bytecode = artifact.bytecode or ''

        if bytecode in ('', '0x'):
            raise ArtifactNotFoundError(
                f"{artifact.fully_qualified_name} has no bytecode "
                "(interface or abstract contract) and cannot be deployed"
            )

        if '__$' in bytecode:
            raise ArtifactNotFoundError(
                f"{artifact.fully_qualified_name} has unlinked library references"
            )
