"""
Test Configuration
==================

Pytest fixtures for the ZK insurance verifier tests.
"""

import os
from pathlib import Path

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "testing"

from shared.zk.extractor import ArtifactExtractor  # noqa: E402
from shared.zk.prover import InsuranceProver  # noqa: E402
from shared.zk.workspace import WorkspaceManager  # noqa: E402
from tests.fakes import MAIN_NR, NARGO_TOML, WITNESS_RELPATH, FakeRunner  # noqa: E402


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A circuit template directory with Nargo.toml and src/main.nr."""
    circuit = tmp_path / "noir-circuit"
    (circuit / "src").mkdir(parents=True)
    (circuit / "Nargo.toml").write_text(NARGO_TOML, encoding="utf-8")
    (circuit / "src" / "main.nr").write_text(MAIN_NR, encoding="utf-8")
    return circuit


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Parent directory for workspaces, so tests can check for leftovers."""
    root = tmp_path / "workspaces"
    root.mkdir()
    return root


@pytest.fixture
def results_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "results"
    directory.mkdir()
    return directory


@pytest.fixture
def workspace_manager(template_dir: Path, workspace_root: Path) -> WorkspaceManager:
    return WorkspaceManager(template_dir, root=workspace_root)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_prover(workspace_manager: WorkspaceManager):
    """Factory for provers wired to a given fake toolchain."""

    def _make(runner: FakeRunner) -> InsuranceProver:
        return InsuranceProver(
            workspaces=workspace_manager,
            runner=runner,
            extractor=ArtifactExtractor(WITNESS_RELPATH),
        )

    return _make


@pytest.fixture
def prover(make_prover, fake_runner: FakeRunner) -> InsuranceProver:
    """Prover wired to a fake toolchain that always succeeds."""
    return make_prover(fake_runner)
