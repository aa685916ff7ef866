"""
Contract Deployment - Main Entry Point
Deploys the configured contract (MultiSigEHR) and prints its address
"""

import asyncio
import sys
from typing import Optional
from loguru import logger

from blockchain import ArtifactResolver, DeployerWallet, DeploymentError
from deployment import DeploymentRunner, DeploymentOutcome, report_outcome
from utils import RPCManager, configure_logging, load_deploy_config


def build_runner(config: dict) -> DeploymentRunner:
    """Wire resolver, wallet and RPC connection from config"""
    rpc_manager = RPCManager(config['network'])
    w3 = rpc_manager.get_web3()

    resolver = ArtifactResolver(
        w3,
        DeployerWallet.from_env(),
        artifacts_dir=config['artifacts_dir'],
        gas_settings=config['gas_settings'],
        chain_id=config['network'].get('chain_id'),
        confirmation=config['confirmation']
    )

    return DeploymentRunner(resolver, config['contract_name'])


async def main(config_path: Optional[str] = None) -> int:
    """
    Run one deployment

    Returns:
        Process exit code
    """
    try:
        config = load_deploy_config(config_path)
        configure_logging(**config['logging'])

        logger.info("=" * 70)
        logger.info(f"Deploying {config['contract_name']} to {config['network']['name']}")
        logger.info("=" * 70)

        runner = build_runner(config)
    except DeploymentError as e:
        return report_outcome(DeploymentOutcome.failure(e))
    except Exception as e:
        return report_outcome(DeploymentOutcome.failure(DeploymentError(str(e), cause=e)))

    outcome = await runner.run()
    return report_outcome(outcome)


def cli():
    """Console script entry"""
    try:
        exit_code = asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    cli()
