"""
Unit Tests for Hardhat artifact resolution
"""

import json
import pytest
from unittest.mock import Mock

from blockchain.artifact_resolver import ArtifactResolver
from blockchain.contract_factory import ContractFactory
from blockchain.errors import ArtifactNotFoundError


ABI = [{"inputs": [], "stateMutability": "nonpayable", "type": "constructor"}]
BYTECODE = "0x6080604052348015600f57600080fd5b50603f80601d6000396000f3fe"


def write_artifact(root, source_name, contract_name, bytecode=BYTECODE, abi=ABI):
    """Write artifact the way `npx hardhat compile` lays it out"""
    directory = root / "artifacts" / source_name
    directory.mkdir(parents=True, exist_ok=True)

    artifact = {
        "_format": "hh-sol-artifact-1",
        "contractName": contract_name,
        "sourceName": source_name,
        "abi": abi,
        "bytecode": bytecode,
        "deployedBytecode": bytecode,
        "linkReferences": {},
        "deployedLinkReferences": {}
    }
    (directory / f"{contract_name}.json").write_text(json.dumps(artifact))
    (directory / f"{contract_name}.dbg.json").write_text(
        json.dumps({"_format": "hh-sol-dbg-1", "buildInfo": "../../build-info/x.json"})
    )
    return directory / f"{contract_name}.json"


@pytest.fixture
def resolver(tmp_path):
    return ArtifactResolver(
        Mock(),
        Mock(),
        artifacts_dir=str(tmp_path / "artifacts"),
        gas_settings={'gas_limit_buffer': 1.5},
        chain_id=31337,
        confirmation={'timeout_seconds': 60}
    )


class TestArtifactResolver:
    """Test ArtifactResolver"""

    def test_get_factory(self, tmp_path, resolver):
        """Bare name resolves to a configured factory"""
        write_artifact(tmp_path, "contracts/MultiSigEHR.sol", "MultiSigEHR")

        factory = resolver.get_factory("MultiSigEHR")

        assert isinstance(factory, ContractFactory)
        assert factory.artifact.contract_name == "MultiSigEHR"
        assert factory.artifact.abi == ABI
        assert factory.artifact.bytecode == BYTECODE
        assert factory.gas_limit_buffer == 1.5
        assert factory.chain_id == 31337
        assert factory.confirmation == {'timeout_seconds': 60}

    def test_nested_source(self, tmp_path, resolver):
        write_artifact(tmp_path, "contracts/ehr/MultiSigEHR.sol", "MultiSigEHR")

        artifact = resolver.load_artifact("MultiSigEHR")

        assert artifact.fully_qualified_name == "contracts/ehr/MultiSigEHR.sol:MultiSigEHR"

    def test_missing_artifact(self, resolver):
        """No artifacts directory at all"""
        with pytest.raises(ArtifactNotFoundError) as exc_info:
            resolver.get_factory("MultiSigEHR")

        assert "npx hardhat compile" in str(exc_info.value)

    def test_missing_contract(self, tmp_path, resolver):
        write_artifact(tmp_path, "contracts/Other.sol", "Other")

        with pytest.raises(ArtifactNotFoundError):
            resolver.get_factory("MultiSigEHR")

    def test_ambiguous_name(self, tmp_path, resolver):
        """Same contract name in two sources needs a fully qualified name"""
        write_artifact(tmp_path, "contracts/a/MultiSigEHR.sol", "MultiSigEHR")
        write_artifact(tmp_path, "contracts/b/MultiSigEHR.sol", "MultiSigEHR")

        with pytest.raises(ArtifactNotFoundError) as exc_info:
            resolver.get_factory("MultiSigEHR")

        message = str(exc_info.value)
        assert "contracts/a/MultiSigEHR.sol:MultiSigEHR" in message
        assert "contracts/b/MultiSigEHR.sol:MultiSigEHR" in message

    def test_fully_qualified_name(self, tmp_path, resolver):
        write_artifact(tmp_path, "contracts/a/MultiSigEHR.sol", "MultiSigEHR")
        write_artifact(tmp_path, "contracts/b/MultiSigEHR.sol", "MultiSigEHR")

        factory = resolver.get_factory("contracts/b/MultiSigEHR.sol:MultiSigEHR")

        assert factory.artifact.source_name == "contracts/b/MultiSigEHR.sol"

    def test_npm_source(self, tmp_path, resolver):
        """Artifacts compiled from node_modules live outside artifacts/contracts"""
        source = "@openzeppelin/contracts/governance/TimelockController.sol"
        write_artifact(tmp_path, source, "TimelockController")

        factory = resolver.get_factory(f"{source}:TimelockController")

        assert factory.artifact.source_name == source
        assert resolver.get_factory("TimelockController").artifact.source_name == source

    def test_custom_sources_dir(self, tmp_path, resolver):
        write_artifact(tmp_path, "src/MultiSigEHR.sol", "MultiSigEHR")

        artifact = resolver.load_artifact("MultiSigEHR")

        assert artifact.fully_qualified_name == "src/MultiSigEHR.sol:MultiSigEHR"

    def test_corrupt_sibling_ignored_for_qualified_name(self, tmp_path, resolver):
        """Only the artifact of the requested source is read"""
        broken = write_artifact(tmp_path, "contracts/a/MultiSigEHR.sol", "MultiSigEHR")
        broken.write_text("{not json")
        write_artifact(tmp_path, "contracts/b/MultiSigEHR.sol", "MultiSigEHR")

        factory = resolver.get_factory("contracts/b/MultiSigEHR.sol:MultiSigEHR")

        assert factory.artifact.source_name == "contracts/b/MultiSigEHR.sol"

    def test_build_info_skipped(self, tmp_path, resolver):
        build_info = tmp_path / "artifacts" / "build-info"
        build_info.mkdir(parents=True)
        (build_info / "MultiSigEHR.json").write_text("{not json")
        write_artifact(tmp_path, "contracts/MultiSigEHR.sol", "MultiSigEHR")

        artifact = resolver.load_artifact("MultiSigEHR")

        assert artifact.source_name == "contracts/MultiSigEHR.sol"

    def test_fully_qualified_wrong_source(self, tmp_path, resolver):
        write_artifact(tmp_path, "contracts/MultiSigEHR.sol", "MultiSigEHR")

        with pytest.raises(ArtifactNotFoundError):
            resolver.get_factory("contracts/Other.sol:MultiSigEHR")

    def test_abstract_contract(self, tmp_path, resolver):
        """Interfaces compile to empty bytecode"""
        write_artifact(tmp_path, "contracts/IEHR.sol", "IEHR", bytecode="0x")

        with pytest.raises(ArtifactNotFoundError) as exc_info:
            resolver.get_factory("IEHR")

        assert "cannot be deployed" in str(exc_info.value)

    def test_unlinked_library(self, tmp_path, resolver):
        bytecode = "0x6080__$d5a3f1e9c6b0a8d6f4e2c0b9a7d5e3f1c2$__6040"
        write_artifact(tmp_path, "contracts/MultiSigEHR.sol", "MultiSigEHR", bytecode=bytecode)

        with pytest.raises(ArtifactNotFoundError) as exc_info:
            resolver.get_factory("MultiSigEHR")

        assert "unlinked" in str(exc_info.value)

    def test_corrupt_artifact(self, tmp_path, resolver):
        path = write_artifact(tmp_path, "contracts/MultiSigEHR.sol", "MultiSigEHR")
        path.write_text("{not json")

        with pytest.raises(ArtifactNotFoundError) as exc_info:
            resolver.get_factory("MultiSigEHR")

        assert exc_info.value.cause is not None

    def test_artifact_missing_keys(self, tmp_path, resolver):
        path = write_artifact(tmp_path, "contracts/MultiSigEHR.sol", "MultiSigEHR")
        path.write_text(json.dumps({"contractName": "MultiSigEHR"}))

        with pytest.raises(ArtifactNotFoundError):
            resolver.get_factory("MultiSigEHR")


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
