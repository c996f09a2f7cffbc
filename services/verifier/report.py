"""
Proof Report
============

Human-readable rendering of a ProofResult for the line protocol, and
persistence of successful results.

Version: 0.1.0
"""

import time
from pathlib import Path

from shared.logging import get_logger
from shared.zk.models import ProofResult


logger = get_logger(__name__)

PROOF_PREVIEW_CHARS = 50


def render_report(result: ProofResult) -> str:
    """Render the full report block sent to the peer after a proof attempt."""
    bounds = result.public_inputs
    parts = [
        "\n=== PROOF RESPONSE ===\n",
        f"Success: {str(result.success).lower()}\n",
        f"Message: {result.message}\n",
    ]

    if result.proof:
        parts.append(f"\nProof (Base64): {result.proof[:PROOF_PREVIEW_CHARS]}...\n")

    parts.append(
        f"\nAge Range: {bounds.min_age} - {bounds.max_age}\n"
        f"BMI Range: {bounds.min_bmi:.1f} - {bounds.max_bmi:.1f}\n"
    )
    parts.append(f"\nFull JSON Response:\n{result.to_json()}\n")
    return "".join(parts)


def save_result(result: ProofResult, directory: Path, timestamp: int | None = None) -> Path:
    """
    Persist a result as proof_<unix_timestamp>.json.

    Files are created exclusively. When another session already claimed the
    name within the same second, a counter suffix is appended.

    Raises:
        OSError: If the file cannot be written
    """
    timestamp = int(time.time()) if timestamp is None else timestamp
    directory.mkdir(parents=True, exist_ok=True)
    payload = result.to_json()

    counter = 0
    while True:
        suffix = f"_{counter}" if counter else ""
        path = directory / f"proof_{timestamp}{suffix}.json"
        try:
            with open(path, "x", encoding="utf-8") as f:
                f.write(payload)
        except FileExistsError:
            counter += 1
            continue

        logger.info("proof_saved", path=str(path))
        return path
