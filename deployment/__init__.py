"""
Deployment Package
One-shot contract deployment and exit-code reporting
"""

from .runner import DeploymentRunner, DeploymentResult, DeploymentOutcome, report_outcome

__all__ = ['DeploymentRunner', 'DeploymentResult', 'DeploymentOutcome', 'report_outcome']
