"""
Unit tests for proof workspaces.
"""

from pathlib import Path

import pytest

from shared.zk.errors import WorkspaceError
from shared.zk.workspace import PROVER_CONFIG_NAME, WorkspaceManager
from tests.fakes import MAIN_NR, NARGO_TOML


class TestWorkspaceManager:
    """Tests for WorkspaceManager."""

    def test_create_is_unique(self, workspace_manager: WorkspaceManager, workspace_root: Path) -> None:
        """Each create gets a fresh directory under the root."""
        first = workspace_manager.create()
        second = workspace_manager.create()

        assert first.path != second.path
        assert first.token != second.token
        assert first.path.parent == workspace_root
        assert first.path.is_dir() and second.path.is_dir()

    def test_populate_copies_template(self, workspace_manager: WorkspaceManager) -> None:
        """Nargo.toml and src/main.nr are copied in."""
        workspace = workspace_manager.create()
        workspace_manager.populate(workspace)

        assert (workspace.path / "Nargo.toml").read_text() == NARGO_TOML
        assert (workspace.path / "src" / "main.nr").read_text() == MAIN_NR

    def test_populate_missing_template_dir(self, tmp_path: Path, workspace_root: Path) -> None:
        """A missing template directory is a WorkspaceError."""
        manager = WorkspaceManager(tmp_path / "does-not-exist", root=workspace_root)
        workspace = manager.create()

        with pytest.raises(WorkspaceError, match="circuit template not found"):
            manager.populate(workspace)

    def test_populate_missing_template_file(self, workspace_manager: WorkspaceManager, template_dir: Path) -> None:
        """A template without Nargo.toml is a WorkspaceError."""
        (template_dir / "Nargo.toml").unlink()
        workspace = workspace_manager.create()

        with pytest.raises(WorkspaceError, match="Nargo.toml"):
            workspace_manager.populate(workspace)

    def test_create_fails_when_root_is_a_file(self, template_dir: Path, tmp_path: Path) -> None:
        """An unusable root is a WorkspaceError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        manager = WorkspaceManager(template_dir, root=blocker)

        with pytest.raises(WorkspaceError):
            manager.create()

    def test_write_config(self, workspace_manager: WorkspaceManager) -> None:
        """Prover.toml is written at the workspace root."""
        workspace = workspace_manager.create()

        path = workspace_manager.write_config(workspace, 'age = "15"\n')

        assert path == workspace.path / PROVER_CONFIG_NAME
        assert path.read_text() == 'age = "15"\n'

    def test_destroy_removes_generated_files(self, workspace_manager: WorkspaceManager) -> None:
        """Build output is removed along with the workspace."""
        workspace = workspace_manager.create()
        workspace_manager.populate(workspace)
        (workspace.path / "target").mkdir()
        (workspace.path / "target" / "insurance_verifier.gz").write_bytes(b"\x1f\x8b")

        workspace_manager.destroy(workspace)

        assert not workspace.path.exists()

    def test_destroy_is_idempotent(self, workspace_manager: WorkspaceManager) -> None:
        """Destroying twice is harmless."""
        workspace = workspace_manager.create()
        workspace_manager.destroy(workspace)
        workspace_manager.destroy(workspace)

        assert not workspace.path.exists()


class TestScopedWorkspace:
    """Tests for the scoped workspace context manager."""

    def test_scoped_yields_populated_workspace(self, workspace_manager: WorkspaceManager) -> None:
        """The scoped workspace is ready to compile."""
        with workspace_manager.scoped() as workspace:
            assert (workspace.path / "src" / "main.nr").is_file()
        assert not workspace.path.exists()

    def test_scoped_cleans_up_on_error(self, workspace_manager: WorkspaceManager, workspace_root: Path) -> None:
        """An exception inside the block still removes the workspace."""
        with pytest.raises(RuntimeError):
            with workspace_manager.scoped() as workspace:
                (workspace.path / "target").mkdir()
                raise RuntimeError("compile crashed")

        assert list(workspace_root.iterdir()) == []

    def test_scoped_cleans_up_when_populate_fails(
        self, workspace_manager: WorkspaceManager, template_dir: Path, workspace_root: Path
    ) -> None:
        """A half-built workspace is removed too."""
        (template_dir / "src" / "main.nr").unlink()

        with pytest.raises(WorkspaceError):
            with workspace_manager.scoped():
                pass

        assert list(workspace_root.iterdir()) == []
