"""
Verifier Session
================

One TCP connection, one proof attempt.

    AWAITING_AGE -> AWAITING_BMI -> PROVING -> REPORTING -> CLOSED

Each field is asked for exactly once; a line that is not an unsigned
integer ends the session before any workspace is created. Once both
inputs are parsed the session always reports a result, successful or not.

Version: 0.1.0
"""

import asyncio
import re
from enum import Enum
from pathlib import Path

from services.verifier.report import render_report, save_result
from shared.logging import get_logger
from shared.zk.errors import InvalidInput
from shared.zk.models import U32_MAX, ProofRequest, ProofResult
from shared.zk.prover import InsuranceProver


logger = get_logger(__name__)

BANNER = "ZK Insurance Verifier Server\n============================\n"
AGE_PROMPT = "Enter age (10-25): "
BMI_PROMPT = "Enter BMI multiplied by 10 (185-249): "
GENERATING = "Generating proof...\n"
CLOSING = "\nConnection will close. Thanks for using ZK Insurance Verifier!\n"

_UNSIGNED = re.compile(r"\+?[0-9]+")


class SessionState(str, Enum):
    """Protocol states of a session."""

    AWAITING_AGE = "awaiting_age"
    AWAITING_BMI = "awaiting_bmi"
    PROVING = "proving"
    REPORTING = "reporting"
    CLOSED = "closed"


def parse_unsigned(field: str, text: str) -> int:
    """
    Parse one trimmed line as an unsigned 32-bit decimal.

    Raises:
        InvalidInput: If the text is not a decimal in range
    """
    value = text.strip()
    if not _UNSIGNED.fullmatch(value) or int(value) > U32_MAX:
        raise InvalidInput(field, value)
    return int(value)


class SessionHandler:
    """
    Runs the line protocol for a single connection.

    Usage:
        handler = SessionHandler(reader, writer, prover, results_dir=Path("."))
        result = await handler.run()
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        prover: InsuranceProver,
        results_dir: Path,
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.prover = prover
        self.results_dir = Path(results_dir)

        self.state = SessionState.AWAITING_AGE
        self.result: ProofResult | None = None
        self.saved_path: Path | None = None

    async def run(self) -> ProofResult | None:
        """
        Drive the session to completion and close the connection.

        Returns:
            The proof result, or None if the session ended during input

        Raises:
            ConnectionError: If the socket fails mid-session
        """
        try:
            await self._send(BANNER)
            age = await self._prompt(AGE_PROMPT, "age")

            self.state = SessionState.AWAITING_BMI
            bmi_scaled = await self._prompt(BMI_PROMPT, "BMI")

            self.state = SessionState.PROVING
            await self._send(GENERATING)
            self.result = await self.prover.generate_proof(
                ProofRequest(age=age, bmi_scaled=bmi_scaled)
            )

            self.state = SessionState.REPORTING
            await self._report(self.result)
            await self._send(CLOSING)

        except InvalidInput as e:
            logger.warning("invalid_input", field=e.field, state=self.state.value)
            await self._send(f"{e}\n")

        finally:
            self.state = SessionState.CLOSED
            await self._close()

        return self.result

    async def _prompt(self, prompt: str, field: str) -> int:
        await self._send(prompt)
        try:
            line = await self.reader.readline()
        except ValueError:
            # StreamReader raises ValueError when the line exceeds its limit
            raise InvalidInput(field, "<line too long>") from None
        return parse_unsigned(field, line.decode("utf-8", errors="replace"))

    async def _report(self, result: ProofResult) -> None:
        await self._send(render_report(result))
        if not result.success:
            return

        try:
            self.saved_path = save_result(result, self.results_dir)
        except OSError as e:
            logger.error("proof_save_failed", error=str(e))
            await self._send(f"Failed to save proof: {e}\n")
        else:
            await self._send(f"Proof saved to: {self.saved_path}\n")

    async def _send(self, text: str) -> None:
        self.writer.write(text.encode("utf-8"))
        await self.writer.drain()

    async def _close(self) -> None:
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except (ConnectionError, OSError) as e:
            logger.debug("connection_close_error", error=str(e))
