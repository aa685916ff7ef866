"""
Deployment Runner
Resolve artifact -> submit creation transaction -> wait for confirmation
"""

import sys
from dataclasses import dataclass
from typing import Optional, TextIO
from loguru import logger

from blockchain.errors import DeploymentError


SUCCESS_LINE = "✅ Contract deployed at: {address}"


@dataclass(frozen=True)
class DeploymentResult:
    """Address of the confirmed contract"""
    contract_address: str

    def __post_init__(self):
        if not self.contract_address:
            raise ValueError("contract_address must be non-empty")


@dataclass(frozen=True)
class DeploymentOutcome:
    """Either a result or the error that stopped the run"""
    result: Optional[DeploymentResult] = None
    error: Optional[DeploymentError] = None

    @classmethod
    def success(cls, result: DeploymentResult) -> "DeploymentOutcome":
        return cls(result=result)

    @classmethod
    def failure(cls, error: DeploymentError) -> "DeploymentOutcome":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None and self.result is not None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


class DeploymentRunner:
    """
    One-shot deployment of a single contract

    Fail-fast: the first error ends the run, nothing is retried.
    """

    def __init__(self, resolver, contract_name: str):
        """
        Initialize Deployment Runner

        Args:
            resolver: Object with get_factory(name) -> ContractFactory
            contract_name: Artifact to deploy
        """
        self.resolver = resolver
        self.contract_name = contract_name

    async def run(self) -> DeploymentOutcome:
        """
        Deploy the contract once

        Returns:
            DeploymentOutcome holding the address or the error
        """
        try:
            factory = self.resolver.get_factory(self.contract_name)
            pending = await factory.deploy()
            deployed = await pending.wait_for_deployment()

            result = DeploymentResult(contract_address=deployed.address)
            logger.success(f"{self.contract_name} deployed at {result.contract_address}")
            return DeploymentOutcome.success(result)

        except DeploymentError as e:
            logger.error(f"Deployment of {self.contract_name} failed: {e}")
            return DeploymentOutcome.failure(e)
        except Exception as e:
            logger.error(f"Deployment of {self.contract_name} failed: {e}")
            return DeploymentOutcome.failure(DeploymentError(str(e), cause=e))


def report_outcome(
    outcome: DeploymentOutcome,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None
) -> int:
    """
    Print the outcome and map it to a process exit code

    Args:
        outcome: Result of DeploymentRunner.run()
        stdout: Stream for the success line (default sys.stdout)
        stderr: Stream for the error (default sys.stderr)

    Returns:
        0 on success, 1 on failure
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    if outcome.ok:
        print(SUCCESS_LINE.format(address=outcome.result.contract_address), file=stdout)
    else:
        print(outcome.error, file=stderr)

    return outcome.exit_code
