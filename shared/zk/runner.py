"""
Noir Toolchain Runner
=====================

Invokes `nargo compile` and `nargo execute` inside a workspace.

The runner only reports what the tool did; turning a failed outcome into
CompileFailed or ExecuteFailed is the prover's job. Tests substitute a
ToolRunner that never starts a process.

Version: 0.1.0
"""

import asyncio
import time
from abc import ABC, abstractmethod

from shared.logging import get_logger
from shared.zk.errors import ToolTimeout, ToolUnavailable
from shared.zk.models import ProofPhase, ToolOutcome
from shared.zk.workspace import Workspace


logger = get_logger(__name__)


class ToolRunner(ABC):
    """Abstract interface to the circuit toolchain."""

    @abstractmethod
    async def compile(self, workspace: Workspace) -> ToolOutcome:
        """Compile the circuit in the workspace."""
        ...

    @abstractmethod
    async def execute(self, workspace: Workspace) -> ToolOutcome:
        """Execute the compiled circuit and write the witness."""
        ...


class NargoRunner(ToolRunner):
    """
    Runs the nargo binary as a subprocess, one process per phase.

    Usage:
        runner = NargoRunner(binary="nargo", compile_timeout=120, execute_timeout=120)
        outcome = await runner.compile(workspace)
    """

    def __init__(
        self,
        binary: str = "nargo",
        compile_timeout: float = 120.0,
        execute_timeout: float = 120.0,
    ) -> None:
        self.binary = binary
        self.timeouts = {
            ProofPhase.COMPILE: compile_timeout,
            ProofPhase.EXECUTE: execute_timeout,
        }

    async def compile(self, workspace: Workspace) -> ToolOutcome:
        return await self._run(ProofPhase.COMPILE, workspace)

    async def execute(self, workspace: Workspace) -> ToolOutcome:
        return await self._run(ProofPhase.EXECUTE, workspace)

    async def _run(self, phase: ProofPhase, workspace: Workspace) -> ToolOutcome:
        """
        Run `<binary> <phase>` with the workspace as working directory.

        Raises:
            ToolTimeout: If the process outlives its timeout
            ToolUnavailable: If the binary cannot be started
        """
        timeout = self.timeouts[phase]
        start_time = time.monotonic()

        try:
            process = await asyncio.create_subprocess_exec(
                self.binary,
                phase.value,
                cwd=workspace.path,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error("nargo_unavailable", binary=self.binary, phase=phase.value, error=str(e))
            raise ToolUnavailable(phase, f"cannot run {self.binary!r}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except TimeoutError:
            await self._kill(process)
            logger.error("nargo_timed_out", phase=phase.value, timeout=timeout)
            raise ToolTimeout(phase, timeout) from None
        except asyncio.CancelledError:
            await self._kill(process)
            raise

        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        outcome = ToolOutcome(
            succeeded=process.returncode == 0,
            diagnostic=stderr.decode("utf-8", errors="replace"),
            output=stdout.decode("utf-8", errors="replace"),
            returncode=process.returncode,
        )

        if outcome.succeeded:
            logger.info("nargo_finished", phase=phase.value, elapsed_ms=elapsed_ms)
        else:
            logger.warning(
                f"nargo_{phase.value}_failed",
                returncode=process.returncode,
                stderr_bytes=len(stderr),
                elapsed_ms=elapsed_ms,
            )
        return outcome

    @staticmethod
    async def _kill(process: asyncio.subprocess.Process) -> None:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
        await process.wait()
