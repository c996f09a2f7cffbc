"""
Proof Workspaces
================

Each proof attempt gets its own temporary copy of the circuit so that
concurrent attempts never see each other's Prover.toml or witness.

Version: 0.1.0
"""

import os
import secrets
import shutil
import tempfile
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from shared.logging import get_logger
from shared.zk.errors import WorkspaceError


logger = get_logger(__name__)

# Template files copied verbatim into every workspace
TEMPLATE_FILES = (Path("Nargo.toml"), Path("src") / "main.nr")

PROVER_CONFIG_NAME = "Prover.toml"


@dataclass(frozen=True)
class Workspace:
    """An exclusively owned directory for one proof attempt."""

    path: Path
    token: str

    @property
    def config_path(self) -> Path:
        return self.path / PROVER_CONFIG_NAME

    def resolve(self, relative: str | Path) -> Path:
        return self.path / relative


class WorkspaceManager:
    """
    Creates, populates and destroys proof workspaces.

    Usage:
        manager = WorkspaceManager(template_dir=Path("/app/noir-circuit"))

        with manager.scoped() as workspace:
            manager.write_config(workspace, prover_toml)
            ...
    """

    def __init__(self, template_dir: Path, root: Path | None = None) -> None:
        self.template_dir = Path(template_dir)
        self.root = Path(root) if root else None

    def create(self) -> Workspace:
        """Allocate a new, uniquely named workspace directory."""
        token = secrets.token_hex(8)
        prefix = f"zkins_{os.getpid()}_{int(time.time())}_{token}_"

        try:
            if self.root is not None:
                self.root.mkdir(parents=True, exist_ok=True)
            path = Path(tempfile.mkdtemp(prefix=prefix, dir=self.root))
        except OSError as e:
            raise WorkspaceError(f"cannot create workspace directory: {e}", self.root) from e

        logger.debug("workspace_created", path=str(path))
        return Workspace(path=path, token=token)

    def populate(self, workspace: Workspace) -> None:
        """Copy the circuit template into the workspace."""
        if not self.template_dir.is_dir():
            raise WorkspaceError(
                f"circuit template not found: {self.template_dir}",
                self.template_dir,
            )

        for relative in TEMPLATE_FILES:
            source = self.template_dir / relative
            target = workspace.resolve(relative)
            if not source.is_file():
                raise WorkspaceError(f"circuit template file missing: {source}", source)
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(source, target)
            except OSError as e:
                raise WorkspaceError(f"cannot copy {relative}: {e}", source) from e

    def write_config(self, workspace: Workspace, text: str) -> Path:
        """Write the rendered Prover.toml into the workspace root."""
        try:
            workspace.config_path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise WorkspaceError(f"cannot write {PROVER_CONFIG_NAME}: {e}", workspace.path) from e
        return workspace.config_path

    def destroy(self, workspace: Workspace) -> None:
        """Remove the workspace and everything generated inside it."""
        try:
            shutil.rmtree(workspace.path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(
                "workspace_cleanup_failed",
                path=str(workspace.path),
                error=str(e),
            )
        else:
            logger.debug("workspace_removed", path=str(workspace.path))

    @contextmanager
    def scoped(self) -> Iterator[Workspace]:
        """
        Create and populate a workspace, removing it on every exit path.

        Raises:
            WorkspaceError: If the workspace cannot be prepared
        """
        workspace = self.create()
        try:
            self.populate(workspace)
            yield workspace
        finally:
            self.destroy(workspace)
