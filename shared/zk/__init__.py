"""
ZK Proof Pipeline
=================

Noir-based proof generation for insurance eligibility.

Usage:
    from shared.zk import InsuranceProver, ProofRequest

    prover = InsuranceProver.from_settings(settings.prover)
    result = await prover.generate_proof(ProofRequest(age=15, bmi_scaled=220))

Version: 0.1.0
"""

from shared.zk.errors import (
    ArtifactMissing,
    ArtifactUnreadable,
    CompileFailed,
    ExecuteFailed,
    InvalidInput,
    ProverError,
    ToolTimeout,
    ToolUnavailable,
    WorkspaceError,
)
from shared.zk.extractor import ArtifactExtractor, placeholder_verification_key
from shared.zk.models import (
    DEFAULT_POLICY_BOUNDS,
    PolicyBounds,
    ProofPhase,
    ProofRequest,
    ProofResult,
    ToolOutcome,
)
from shared.zk.prover import InsuranceProver
from shared.zk.runner import NargoRunner, ToolRunner
from shared.zk.workspace import Workspace, WorkspaceManager


__all__ = [
    # Pipeline
    "InsuranceProver",
    "WorkspaceManager",
    "Workspace",
    "ToolRunner",
    "NargoRunner",
    "ArtifactExtractor",
    "placeholder_verification_key",
    # Models
    "PolicyBounds",
    "DEFAULT_POLICY_BOUNDS",
    "ProofRequest",
    "ProofResult",
    "ProofPhase",
    "ToolOutcome",
    # Errors
    "ProverError",
    "InvalidInput",
    "WorkspaceError",
    "CompileFailed",
    "ExecuteFailed",
    "ToolTimeout",
    "ToolUnavailable",
    "ArtifactMissing",
    "ArtifactUnreadable",
]
