"""
Command execution for the convention probes.

This module provides the process-runner contract the convention engines
consume, a subprocess-backed implementation of it, and ``RunResult``, the
"output or nothing" value every probe is reduced to.
"""

import io
import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, List, Optional, TextIO

import psutil

logger = logging.getLogger(__name__)


class RunFailedException(Exception):
    """
    Raised by a ProcessRunner when a command could not be run successfully.

    Covers a missing executable, a non-zero exit status and I/O errors. The
    underlying error, if any, is chained as ``__cause__``.
    """


class ProcessSpec:
    """The command line and output sink of a single process run."""

    def __init__(self):
        self.command: List[str] = []
        self.output: Optional[TextIO] = None

    def command_line(self, *args) -> None:
        self.command = [str(arg) for arg in args]

    def standard_output(self, sink: TextIO) -> None:
        self.output = sink


class ProcessRunner(ABC):
    """
    Runs external commands on behalf of the convention engines.

    Implementations raise ``RunFailedException``, and nothing else, when the
    command cannot be run or exits unsuccessfully.
    """

    @abstractmethod
    def run(self, configurer: Callable[[ProcessSpec], None]) -> None:
        """
        Run the process described by ``configurer``.

        Args:
            configurer: Called with a fresh ProcessSpec to set the command line
                and the sink that receives standard output.

        Raises:
            RunFailedException: If the process could not be run or failed.
        """
        pass


class SubprocessProcessRunner(ProcessRunner):
    """ProcessRunner backed by ``subprocess.Popen``."""

    def __init__(self, working_dir: Optional[Path] = None, timeout: Optional[float] = None):
        """
        Args:
            working_dir: Directory to run commands in, typically the root of
                the project being built. Defaults to the current directory.
            timeout: Seconds a command may run before it and its children are
                killed and the run fails. None waits indefinitely.
        """
        self.working_dir = working_dir
        self.timeout = timeout

    def run(self, configurer: Callable[[ProcessSpec], None]) -> None:
        spec = ProcessSpec()
        configurer(spec)
        if not spec.command:
            raise RunFailedException("No command line was configured")

        command_str = " ".join(spec.command)
        logger.debug(f"Executing command: '{command_str}' in '{self.working_dir or '.'}'")
        try:
            process = subprocess.Popen(
                spec.command,
                cwd=self.working_dir,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            raise RunFailedException(f"Command not found: {spec.command[0]}") from e
        except OSError as e:
            raise RunFailedException(f"Command '{command_str}' could not be run: {e}") from e

        try:
            stdout, stderr = process.communicate(timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            terminate_process_tree(process.pid, command_str)
            process.communicate()
            raise RunFailedException(f"Command '{command_str}' timed out after {self.timeout}s") from e

        if process.returncode != 0:
            raise RunFailedException(
                f"Command '{command_str}' exited with status {process.returncode}: {(stderr or '').strip()}"
            )
        if spec.output is not None:
            spec.output.write(stdout)


def terminate_process_tree(pid: int, name: str) -> None:
    """Kill a process and all of its children.

    Probes are read-only, so there is no graceful phase: everything is killed
    at once and reaped.
    """
    try:
        parent = psutil.Process(pid)
        processes = [parent] + parent.children(recursive=True)
    except psutil.NoSuchProcess:
        logger.debug(f"Process {name} (PID: {pid}) already terminated")
        return

    for process in processes:
        try:
            process.kill()
        except psutil.NoSuchProcess:
            continue
        except psutil.AccessDenied:
            logger.warning(f"Access denied killing PID {process.pid} of {name}")

    _, still_alive = psutil.wait_procs(processes, timeout=5.0)
    if still_alive:
        logger.warning(f"{len(still_alive)} processes of {name} still alive after kill")


class RunResult:
    """
    Outcome of a probe: trimmed, non-empty standard output, or nothing.

    A failed run and a run that printed nothing are indistinguishable.
    """

    def __init__(self, standard_output: Optional[str] = None):
        self._standard_output = standard_output

    @classmethod
    def empty(cls) -> "RunResult":
        return cls()

    @classmethod
    def of(cls, standard_output: str) -> "RunResult":
        return cls(standard_output)

    @property
    def output(self) -> Optional[str]:
        return self._standard_output or None

    def standard_out(self, consumer: Callable[[str], None]) -> None:
        """Call ``consumer`` with the output, only if there is any."""
        if self._standard_output:
            consumer(self._standard_output)


def run(process_runner: ProcessRunner, *command_line) -> RunResult:
    """
    Run a probe command and capture its trimmed standard output.

    A ``RunFailedException`` is reduced to an empty result; any other exception
    is a contract violation by the runner and propagates.
    """
    standard_output = io.StringIO()

    def configure(spec: ProcessSpec) -> None:
        spec.command_line(*command_line)
        spec.standard_output(standard_output)

    try:
        process_runner.run(configure)
    except RunFailedException as e:
        logger.debug(f"Probe '{' '.join(map(str, command_line))}' produced no data: {e}")
        return RunResult.empty()
    return RunResult.of(standard_output.getvalue().strip())
