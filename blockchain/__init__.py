"""
Blockchain Interaction Package
Handles artifact resolution, contract-creation transactions and confirmation
"""

from .errors import DeploymentError, ArtifactNotFoundError, SubmissionError, ConfirmationError
from .deployer_wallet import DeployerWallet
from .contract_factory import ContractFactory, PendingDeployment, DeployedContract
from .artifact_resolver import ArtifactResolver, ContractArtifact

__all__ = [
    'DeploymentError',
    'ArtifactNotFoundError',
    'SubmissionError',
    'ConfirmationError',
    'DeployerWallet',
    'ContractFactory',
    'PendingDeployment',
    'DeployedContract',
    'ArtifactResolver',
    'ContractArtifact'
]
