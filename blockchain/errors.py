"""
Deployment Errors
Typed failures raised by the artifact resolver, submitter and waiter
"""

from typing import Optional


class DeploymentError(Exception):
    """
    Base error for a failed deployment run

    Wraps the underlying library exception (if any) in `cause`
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self):
        return self.message


class ArtifactNotFoundError(DeploymentError):
    """Named contract is not compiled or its artifact is unusable"""


class SubmissionError(DeploymentError):
    """Creation transaction could not be broadcast"""


class ConfirmationError(DeploymentError):
    """Transaction was broadcast but reverted, dropped or never confirmed"""
