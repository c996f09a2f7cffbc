"""
Prover.toml rendering.

Noir reads circuit inputs from Prover.toml with every scalar written as
a quoted decimal string.
"""

from shared.zk.models import PolicyBounds, ProofRequest


def _quoted(value: int) -> str:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"expected unsigned integer, got {value!r}")
    return f'"{value}"'


def render(request: ProofRequest, bounds: PolicyBounds) -> str:
    """Render the circuit inputs for one attempt."""
    # Key names are the circuit's parameter names
    entries = [
        ("age", request.age),
        ("bmi", request.bmi_scaled),
        ("min_age", bounds.min_age),
        ("max_age", bounds.max_age),
        ("min_bmi", bounds.min_bmi_scaled),
        ("max_bmi", bounds.max_bmi_scaled),
    ]
    return "".join(f"{key} = {_quoted(value)}\n" for key, value in entries)
