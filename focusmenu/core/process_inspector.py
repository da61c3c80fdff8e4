import os
from typing import List, Optional, Tuple
from focusmenu.core.models import ProcessFacts, UNKNOWN_PROCESS

PROC_ROOT = "/proc"


def parse_cmdline(raw: bytes) -> Tuple[str, ...]:
    """Split a NUL-separated cmdline record into decoded arguments."""
    if not raw:
        return ()
    return tuple(os.fsdecode(arg) for arg in raw.rstrip(b"\0").split(b"\0"))


def program_basename(raw: bytes) -> str:
    """
    Base filename of the first argument of a cmdline record, or "" when the
    record holds no usable program path.
    """
    first = raw.split(b"\0", 1)[0]
    if not first:
        return ""
    stripped = first.rstrip(b"/")
    if not stripped:
        return "/"
    return os.fsdecode(os.path.basename(stripped))


class ProcessInspector:
    """
    Reads command-line records from the process table.

    Every failure degrades to a sentinel: get_process_name() answers
    "unknown", read_cmdline() answers None and scans skip the entry.
    """

    def __init__(self, owner, proc_root: Optional[str] = None):
        """
        Args:
            owner: Object exposing `logger` and `get_config(key_path, default)`.
            proc_root: Process table root. Defaults to the configured value or /proc.
        """
        self.logger = owner.logger
        if proc_root is None:
            proc_root = owner.get_config(["processes", "proc_root"], PROC_ROOT)
        self.proc_root = proc_root or PROC_ROOT

    def _cmdline_path(self, pid) -> str:
        return os.path.join(self.proc_root, str(pid), "cmdline")

    def read_cmdline(self, pid: Optional[int]) -> Optional[bytes]:
        """
        Read the raw cmdline record of a process.
        Args:
            pid (Optional[int]): The process id.
        Returns:
            Optional[bytes]: The record, possibly empty, or None when it cannot be read.
        """
        if not isinstance(pid, int) or pid <= 0:
            return None
        try:
            with open(self._cmdline_path(pid), "rb") as f:
                return f.read()
        except FileNotFoundError:
            self.logger.debug(f"Process {pid} vanished during scan.")
            return None
        except OSError as e:
            self.logger.debug(f"Failed to read cmdline of process {pid}: {e}")
            return None

    def get_process_name(self, pid: Optional[int]) -> str:
        """
        Return the executable basename of a process, or "unknown".
        """
        raw = self.read_cmdline(pid)
        if not raw:
            return UNKNOWN_PROCESS
        return program_basename(raw) or UNKNOWN_PROCESS

    def get_process_facts(self, pid: Optional[int]) -> Optional[ProcessFacts]:
        raw = self.read_cmdline(pid)
        if not raw:
            return None
        return ProcessFacts(
            pid=pid,
            command_line=parse_cmdline(raw),
            basename=program_basename(raw) or UNKNOWN_PROCESS,
            raw_cmdline=raw,
        )

    def scan_all_processes(self) -> List[ProcessFacts]:
        """
        Enumerate every process with a non-empty command line.

        Kernel threads (empty records), non-numeric entries and processes that
        cannot be read are skipped without aborting the scan.
        Returns:
            List[ProcessFacts]: One record per readable process, in pid order.
        """
        try:
            entries = os.listdir(self.proc_root)
        except OSError as e:
            self.logger.warning(f"Could not open process table {self.proc_root}: {e}")
            return []
        pids = sorted(
            int(entry) for entry in entries if entry.isascii() and entry.isdigit()
        )
        processes = []
        for pid in pids:
            facts = self.get_process_facts(pid)
            if facts is not None:
                processes.append(facts)
        self.logger.debug(
            f"Scanned {len(pids)} process entries, {len(processes)} readable."
        )
        return processes
