"""
Verifier TCP Server
===================

Accepts connections and runs an independent SessionHandler for each.

Version: 0.1.0
"""

import asyncio
import secrets
from pathlib import Path

from services.verifier.session import SessionHandler
from shared.logging import bind_context, clear_context, get_logger
from shared.zk.prover import InsuranceProver


logger = get_logger(__name__)


class ProofServer:
    """
    Line-protocol server for insurance eligibility proofs.

    Usage:
        server = ProofServer(prover, host="0.0.0.0", port=8080, results_dir=Path("."))
        await server.serve_forever()
    """

    def __init__(
        self,
        prover: InsuranceProver,
        host: str = "0.0.0.0",
        port: int = 8080,
        results_dir: Path = Path("."),
    ) -> None:
        self.prover = prover
        self.host = host
        self.port = port
        self.results_dir = Path(results_dir)
        self._server: asyncio.Server | None = None

    async def start(self) -> asyncio.Server:
        """Bind the listening socket. Port 0 picks an ephemeral port."""
        server = await asyncio.start_server(self._handle, self.host, self.port)
        self._server = server
        self.port = server.sockets[0].getsockname()[1]

        logger.info(
            "verifier_listening",
            host=self.host,
            port=self.port,
            circuit_dir=str(self.prover.template_dir),
            connect_hint=f"nc 127.0.0.1 {self.port}",
        )
        return server

    async def serve_forever(self) -> None:
        server = self._server or await self.start()
        async with server:
            await server.serve_forever()

    async def close(self) -> None:
        if self._server is None:
            return
        self._server.close()
        await self._server.wait_closed()
        logger.info("verifier_stopped")

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        """Run one session. Errors stay inside this connection's task."""
        peername = writer.get_extra_info("peername")
        peer = f"{peername[0]}:{peername[1]}" if peername else "unknown"
        bind_context(peer=peer, session_id=secrets.token_hex(4))

        logger.info("session_started")
        handler = SessionHandler(reader, writer, self.prover, self.results_dir)
        try:
            result = await handler.run()
        except (ConnectionError, OSError) as e:
            logger.warning("session_connection_error", error=str(e))
        except Exception as e:
            logger.exception("session_failed", error=str(e))
        else:
            logger.info(
                "session_finished",
                success=result.success if result else None,
                saved_to=str(handler.saved_path) if handler.saved_path else None,
            )
        finally:
            clear_context()
