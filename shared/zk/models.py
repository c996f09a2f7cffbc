"""
ZK Proof Data Models
====================

Pydantic models for the insurance eligibility proof pipeline.

Version: 0.1.0
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field


# Inputs are parsed as unsigned 32-bit integers
U32_MAX = 2**32 - 1


class ProofPhase(str, Enum):
    """Phases of the external toolchain."""

    COMPILE = "compile"
    EXECUTE = "execute"


class PolicyBounds(BaseModel):
    """
    Public constraint parameters of the eligibility circuit.

    BMI values are scaled by 10 so the circuit works on integers.
    """

    min_age: int = Field(default=10, ge=0)
    max_age: int = Field(default=25, ge=0)
    min_bmi_scaled: int = Field(default=185, ge=0)
    max_bmi_scaled: int = Field(default=249, ge=0)

    @property
    def min_bmi(self) -> float:
        return self.min_bmi_scaled / 10

    @property
    def max_bmi(self) -> float:
        return self.max_bmi_scaled / 10


DEFAULT_POLICY_BOUNDS = PolicyBounds()


class ProofRequest(BaseModel):
    """Private inputs for one proof attempt."""

    age: int = Field(..., ge=0, le=U32_MAX)
    bmi_scaled: int = Field(..., ge=0, le=U32_MAX, description="BMI multiplied by 10")


class ProofResult(BaseModel):
    """
    Outcome of one proof attempt.

    Always fully populated: on failure `proof` and `verification_key` are
    empty and `message` carries the diagnostic.
    """

    proof: str = ""
    verification_key: str = ""
    public_inputs: PolicyBounds = Field(default_factory=PolicyBounds)
    success: bool = False
    message: str = ""

    @classmethod
    def failure(cls, message: str, bounds: PolicyBounds = DEFAULT_POLICY_BOUNDS) -> "ProofResult":
        """Build a failed result carrying only the diagnostic."""
        return cls(
            proof="",
            verification_key="",
            public_inputs=bounds.model_copy(),
            success=False,
            message=message,
        )

    def to_json(self) -> str:
        """Pretty-printed JSON, as sent to the peer and persisted."""
        return self.model_dump_json(indent=2)


@dataclass(frozen=True)
class ToolOutcome:
    """Result of a single external tool invocation."""

    succeeded: bool
    diagnostic: str = ""
    output: str = ""
    returncode: int | None = None
