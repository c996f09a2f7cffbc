"""
Insurance Eligibility Prover
============================

Drives one proof attempt end to end:

    workspace -> Prover.toml -> nargo compile -> nargo execute -> witness

Every attempt runs in its own workspace which is removed afterwards,
whatever the outcome. Failures inside the pipeline never escape as
exceptions; they become a ProofResult with success=False and a message
naming the phase that failed.

Version: 0.1.0
"""

import time
from pathlib import Path

from shared.config import ProverSettings
from shared.logging import get_logger
from shared.zk import templater
from shared.zk.errors import CompileFailed, ExecuteFailed, ProverError, ToolError
from shared.zk.extractor import ArtifactExtractor
from shared.zk.models import DEFAULT_POLICY_BOUNDS, PolicyBounds, ProofRequest, ProofResult
from shared.zk.runner import NargoRunner, ToolRunner
from shared.zk.workspace import Workspace, WorkspaceManager


logger = get_logger(__name__)


class InsuranceProver:
    """
    Proof generator for the insurance eligibility circuit.

    Usage:
        prover = InsuranceProver.from_settings(settings.prover)

        result = await prover.generate_proof(ProofRequest(age=15, bmi_scaled=220))
        if result.success:
            print(result.proof)
    """

    def __init__(
        self,
        workspaces: WorkspaceManager,
        runner: ToolRunner,
        extractor: ArtifactExtractor,
        bounds: PolicyBounds = DEFAULT_POLICY_BOUNDS,
    ) -> None:
        self.workspaces = workspaces
        self.runner = runner
        self.extractor = extractor
        self.bounds = bounds

    @classmethod
    def from_settings(
        cls,
        config: ProverSettings,
        runner: ToolRunner | None = None,
    ) -> "InsuranceProver":
        """
        Build a prover from configuration.

        The circuit directory is resolved here, once, and shared by every
        attempt made through this prover.
        """
        template_dir = config.resolve_circuit_dir()
        if not template_dir.exists():
            logger.warning("circuit_template_dir_not_found", path=str(template_dir))

        return cls(
            workspaces=WorkspaceManager(template_dir, root=config.workspace_root),
            runner=runner
            or NargoRunner(
                binary=config.nargo_binary,
                compile_timeout=config.compile_timeout_seconds,
                execute_timeout=config.execute_timeout_seconds,
            ),
            extractor=ArtifactExtractor(config.witness_relpath),
        )

    @property
    def template_dir(self) -> Path:
        return self.workspaces.template_dir

    async def generate_proof(self, request: ProofRequest) -> ProofResult:
        """
        Run one proof attempt.

        Args:
            request: Private inputs supplied by the peer

        Returns:
            ProofResult, successful or carrying the failing phase's message
        """
        start_time = time.monotonic()
        try:
            with self.workspaces.scoped() as workspace:
                proof = await self._run_pipeline(workspace, request)
        except ProverError as e:
            logger.warning(
                "proof_generation_failed",
                error_type=type(e).__name__,
                phase=e.phase.value if isinstance(e, ToolError) else None,
            )
            return ProofResult.failure(str(e), self.bounds)

        proving_time_ms = int((time.monotonic() - start_time) * 1000)
        logger.info("zk_proof_generated", proving_time_ms=proving_time_ms)
        return self.extractor.assemble(proof, self.bounds)

    async def _run_pipeline(self, workspace: Workspace, request: ProofRequest) -> str:
        """Compile, execute and extract, strictly in that order."""
        self.workspaces.write_config(workspace, templater.render(request, self.bounds))

        compiled = await self.runner.compile(workspace)
        if not compiled.succeeded:
            raise CompileFailed(compiled.diagnostic)

        executed = await self.runner.execute(workspace)
        if not executed.succeeded:
            raise ExecuteFailed(executed.diagnostic)

        return self.extractor.extract(workspace)
