import shutil
import subprocess
from typing import List, Optional


class CommandRunner:
    def __init__(self, owner, timeout: float = 5.0):
        self.logger = owner.logger
        self.timeout = timeout

    def query(self, cmd: List[str]) -> Optional[str]:
        """
        Run a short-lived command synchronously and return its stripped stdout.
        Returns None when the program is missing, times out, exits non-zero
        or prints nothing.
        """
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            self.logger.debug(f"Command not available: {cmd[0]}")
            return None
        except subprocess.TimeoutExpired:
            self.logger.warning(
                f"Command timed out after {self.timeout} seconds: {' '.join(cmd)}"
            )
            return None
        except (OSError, subprocess.SubprocessError) as e:
            self.logger.error(f"Error running command: {' '.join(cmd)}: {e}")
            return None
        if result.returncode != 0:
            self.logger.debug(
                f"Command {' '.join(cmd)} exited with {result.returncode}: {result.stderr.strip()}"
            )
            return None
        output = result.stdout.strip()
        return output or None

    def find_program(self, name: str) -> Optional[str]:
        """Return the absolute path of an executable found on PATH, if any."""
        return shutil.which(name)
