"""
Proof Pipeline Errors
=====================

Every failure the pipeline can report. Anything raised after input
parsing is converted into a failed ProofResult; only InvalidInput ends a
session before a proof attempt starts.

Version: 0.1.0
"""

from pathlib import Path

from shared.zk.models import ProofPhase


class ProverError(Exception):
    """Base class for proof pipeline errors."""


class InvalidInput(ProverError):
    """A line from the peer is not an unsigned integer."""

    def __init__(self, field: str, raw: str) -> None:
        self.field = field
        self.raw = raw
        super().__init__(f"Invalid {field} input: {raw!r}")


class WorkspaceError(ProverError):
    """The ephemeral workspace could not be created or populated."""

    def __init__(self, detail: str, path: Path | None = None) -> None:
        self.detail = detail
        self.path = path
        super().__init__(f"Internal error preparing proof workspace: {detail}")


class ToolError(ProverError):
    """Base class for failures of the external toolchain."""

    def __init__(self, phase: ProofPhase, message: str) -> None:
        self.phase = phase
        super().__init__(message)


class CompileFailed(ToolError):
    """`nargo compile` exited with a nonzero status."""

    def __init__(self, diagnostic: str) -> None:
        self.diagnostic = diagnostic
        super().__init__(ProofPhase.COMPILE, f"Circuit compilation failed: {diagnostic}")


class ExecuteFailed(ToolError):
    """`nargo execute` exited with a nonzero status.

    The circuit enforces the policy ranges while generating the witness,
    so this is the usual outcome for out-of-range inputs.
    """

    def __init__(self, diagnostic: str) -> None:
        self.diagnostic = diagnostic
        super().__init__(
            ProofPhase.EXECUTE,
            f"Circuit execution failed. Likely the inputs don't satisfy the constraints: {diagnostic}",
        )


class ToolTimeout(ToolError):
    """The tool did not finish within its time budget and was killed."""

    def __init__(self, phase: ProofPhase, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(phase, f"Circuit {phase.value} timed out after {timeout:g} seconds")


class ToolUnavailable(ToolError):
    """The toolchain binary could not be started."""

    def __init__(self, phase: ProofPhase, detail: str) -> None:
        self.detail = detail
        super().__init__(phase, f"Proof toolchain unavailable: {detail}")


class ArtifactError(ProverError):
    """Base class for witness artifact failures."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)


class ArtifactMissing(ArtifactError):
    """Execute reported success but left no witness behind."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Witness artifact missing after successful execution: {path}")


class ArtifactUnreadable(ArtifactError):
    """The witness exists but could not be read."""

    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path, f"Witness artifact unreadable: {detail}")
