"""
Witness Artifact Extraction
===========================

Reads the witness nargo leaves in the workspace and packages it as the
transport-safe `proof` field of a ProofResult.

Version: 0.1.0
"""

import base64
from datetime import UTC, datetime
from pathlib import Path

from shared.zk.errors import ArtifactMissing, ArtifactUnreadable
from shared.zk.models import PolicyBounds, ProofResult
from shared.zk.workspace import Workspace


SUCCESS_MESSAGE = "Proof generated successfully! The user is eligible for insurance discount."


def placeholder_verification_key(now: datetime | None = None) -> str:
    """
    Stand-in verification key.

    nargo only produces a witness; a real key needs a proving backend such
    as Barretenberg. The value is a label plus a unix timestamp and carries
    no cryptographic meaning.
    """
    now = now or datetime.now(UTC)
    return f"witness_verification_placeholder_{int(now.timestamp())}"


class ArtifactExtractor:
    """Reads and encodes the witness produced by `nargo execute`."""

    def __init__(self, witness_relpath: str | Path) -> None:
        self.witness_relpath = Path(witness_relpath)

    def extract(self, workspace: Workspace) -> str:
        """
        Return the witness as standard base64 text.

        Raises:
            ArtifactMissing: If the witness file does not exist
            ArtifactUnreadable: If the witness cannot be read
        """
        path = workspace.resolve(self.witness_relpath)
        try:
            data = path.read_bytes()
        except FileNotFoundError as e:
            raise ArtifactMissing(self.witness_relpath) from e
        except OSError as e:
            raise ArtifactUnreadable(self.witness_relpath, str(e)) from e

        return base64.b64encode(data).decode("ascii")

    def assemble(self, proof: str, bounds: PolicyBounds) -> ProofResult:
        """Build the successful result for an encoded witness."""
        return ProofResult(
            proof=proof,
            verification_key=placeholder_verification_key(),
            public_inputs=bounds.model_copy(),
            success=True,
            message=SUCCESS_MESSAGE,
        )
