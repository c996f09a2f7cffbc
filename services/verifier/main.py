"""
Verifier Service - Entry Point
==============================

Usage:
    python -m services.verifier.main [--port PORT] [--host HOST]

Then connect with `nc 127.0.0.1 8080` or `telnet 127.0.0.1 8080`.

Version: 0.1.0
"""

import argparse
import asyncio

from services.verifier.server import ProofServer
from shared.config import settings
from shared.logging import get_logger, setup_logging
from shared.zk.prover import InsuranceProver


logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="ZK Insurance Verifier TCP server")
    parser.add_argument(
        "--port", "-p", type=int, default=settings.server.port,
        help=f"TCP port to listen on (default: {settings.server.port})",
    )
    parser.add_argument(
        "--host", type=str, default=settings.server.host,
        help=f"Interface to bind (default: {settings.server.host})",
    )
    return parser.parse_args(argv)


async def serve(host: str, port: int) -> None:
    prover = InsuranceProver.from_settings(settings.prover)
    server = ProofServer(prover, host=host, port=port, results_dir=settings.server.results_dir)
    try:
        await server.serve_forever()
    finally:
        await server.close()


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    setup_logging(
        log_level=settings.log_level.value,
        json_logs=settings.is_production,
        service_name="zk-insurance-verifier",
    )
    logger.info(
        "verifier_service_starting",
        environment=settings.environment.value,
        port=args.port,
    )

    try:
        asyncio.run(serve(args.host, args.port))
    except KeyboardInterrupt:
        logger.info("verifier_service_interrupted")


if __name__ == "__main__":
    main()
