"""Blocking subprocess execution with streamed output"""

import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from ..api.exceptions import ToolchainMissingError
from ..models.result import ProcessResult

OutputSink = Callable[[str], None]


def stdout_sink(line: str) -> None:
    """Write a line straight to the terminal"""
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


class ProcessRunner:
    """Run the automation tool and wait for it

    Every output line (stdout and stderr merged) goes to ``sink`` as it
    arrives and is kept for the failure report. Runs are never retried.
    """

    def __init__(self, sink: Optional[OutputSink] = None):
        self.sink = sink or stdout_sink
        self.logger = logging.getLogger(self.__class__.__name__)

    def invoke(self,
               tool_path: str,
               lane_name: str,
               env_vars: Optional[Dict[str, str]] = None,
               cwd: Optional[Union[str, Path]] = None) -> ProcessResult:
        """Run ``tool_path lane_name`` to completion

        Args:
            tool_path: Executable to run
            lane_name: Lane passed as the only argument
            env_vars: Variables added to the current environment
            cwd: Working directory

        Returns:
            ProcessResult with exit code and captured lines

        Raises:
            ToolchainMissingError: If the executable cannot be started
        """
        env = os.environ.copy()
        env.update(env_vars or {})

        cmd = [tool_path, lane_name]
        self.logger.debug(f"Running {' '.join(cmd)} in {cwd or os.getcwd()}")

        try:
            process = subprocess.Popen(
                cmd,
                cwd=cwd,
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                bufsize=1,
                errors='replace'
            )
        except (FileNotFoundError, PermissionError) as e:
            raise ToolchainMissingError(tool_path, hint=f"could not start {tool_path}: {e}")

        output = []
        try:
            for line in process.stdout:
                line = line.rstrip("\n")
                output.append(line)
                self.sink(line)
        except KeyboardInterrupt:
            # The child got the same signal; let it finish its own shutdown.
            process.wait()
            raise
        finally:
            process.stdout.close()

        exit_code = process.wait()
        self.logger.debug(f"{tool_path} {lane_name} exited with {exit_code}")

        return ProcessResult(exit_code=exit_code, output=output)
