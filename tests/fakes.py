"""
Test doubles for the proof pipeline and the line protocol.
"""

import asyncio
from pathlib import Path

from shared.zk.models import ToolOutcome
from shared.zk.runner import ToolRunner
from shared.zk.workspace import Workspace


WITNESS_RELPATH = Path("target") / "insurance_verifier.gz"
FIXED_WITNESS = bytes(range(256)) * 2

NARGO_TOML = """[package]
name = "insurance_verifier"
type = "bin"
authors = [""]

[dependencies]
"""

MAIN_NR = """fn main(age: u32, bmi: u32, min_age: pub u32, max_age: pub u32, min_bmi: pub u32, max_bmi: pub u32) {
    assert(age >= min_age);
    assert(age <= max_age);
    assert(bmi >= min_bmi);
    assert(bmi <= max_bmi);
}
"""


class FakeRunner(ToolRunner):
    """
    Records calls instead of running nargo.

    On a successful execute it writes a witness into the workspace: either
    FIXED_WITNESS or, with echo_config, the workspace's own Prover.toml so
    tests can tell which request produced which proof.
    """

    def __init__(
        self,
        compile_ok: bool = True,
        execute_ok: bool = True,
        write_witness: bool = True,
        echo_config: bool = False,
        delay: float = 0.0,
        compile_diagnostic: str = "error: expected type Field, found bool",
        execute_diagnostic: str = "error: Failed constraint: age >= min_age",
    ) -> None:
        self.compile_ok = compile_ok
        self.execute_ok = execute_ok
        self.write_witness = write_witness
        self.echo_config = echo_config
        self.delay = delay
        self.compile_diagnostic = compile_diagnostic
        self.execute_diagnostic = execute_diagnostic

        self.calls: list[str] = []
        self.workspaces: list[Path] = []
        self.configs: list[str] = []

    async def compile(self, workspace: Workspace) -> ToolOutcome:
        self.calls.append("compile")
        self.workspaces.append(workspace.path)
        self.configs.append(workspace.config_path.read_text(encoding="utf-8"))
        if self.delay:
            await asyncio.sleep(self.delay)
        if not self.compile_ok:
            return ToolOutcome(succeeded=False, diagnostic=self.compile_diagnostic, returncode=1)
        return ToolOutcome(succeeded=True, output="Compiled", returncode=0)

    async def execute(self, workspace: Workspace) -> ToolOutcome:
        self.calls.append("execute")
        if self.delay:
            await asyncio.sleep(self.delay)
        if not self.execute_ok:
            return ToolOutcome(succeeded=False, diagnostic=self.execute_diagnostic, returncode=1)

        if self.write_witness:
            witness = workspace.resolve(WITNESS_RELPATH)
            witness.parent.mkdir(parents=True, exist_ok=True)
            if self.echo_config:
                witness.write_bytes(workspace.config_path.read_bytes())
            else:
                witness.write_bytes(FIXED_WITNESS)
        return ToolOutcome(succeeded=True, output="Circuit witness successfully solved", returncode=0)


class FakeWriter:
    """Collects what a session writes to its peer."""

    def __init__(self, peername: tuple[str, int] = ("127.0.0.1", 50312)) -> None:
        self.peername = peername
        self.buffer = bytearray()
        self.closed = False
        self.drains = 0

    def write(self, data: bytes) -> None:
        if self.closed:
            raise ConnectionResetError("write on closed transport")
        self.buffer.extend(data)

    async def drain(self) -> None:
        self.drains += 1

    def close(self) -> None:
        self.closed = True

    async def wait_closed(self) -> None:
        return None

    def get_extra_info(self, name: str, default=None):
        if name == "peername":
            return self.peername
        return default

    @property
    def text(self) -> str:
        return self.buffer.decode("utf-8")


def make_reader(*lines: str, eof: bool = True) -> asyncio.StreamReader:
    """Build a StreamReader pre-loaded with peer input. Call inside a running loop."""
    reader = asyncio.StreamReader()
    for line in lines:
        reader.feed_data(line.encode("utf-8"))
    if eof:
        reader.feed_eof()
    return reader
