"""Run git queries via subprocess."""

import subprocess
from pathlib import Path
from typing import Optional, Sequence, Union

from ..deadline import Deadline, unbounded
from ..exceptions import DeadlineExceeded, VcsError, VcsErrorKind
from ..logging_config import get_logger
from .base import VersionControl, classify_failure

logger = get_logger(__name__)


class GitClient(VersionControl):
    """Blocking git queries bounded by a run-wide deadline."""

    def __init__(
        self,
        repo_path: Union[str, Path] = ".",
        deadline: Optional[Deadline] = None,
        git_executable: str = "git",
    ):
        self.repo_path = str(Path(repo_path).resolve())
        self.deadline = deadline or unbounded()
        self.git_executable = git_executable

    @staticmethod
    def diff_args(revspec: str) -> list[str]:
        return ["diff", "--name-only", "-z", revspec]

    @staticmethod
    def numstat_args(since: Optional[str] = None) -> list[str]:
        """``git log`` arguments; without ``since`` the whole of HEAD is read."""
        if since:
            return ["log", f"--since={since}", "--numstat", "-z", "--format=tformat:"]
        return ["log", "--numstat", "-z", "--format=tformat:", "HEAD"]

    def diff_name_only(self, revspec: str) -> str:
        return self.run(self.diff_args(revspec))

    def log_numstat(self, since: Optional[str] = None) -> str:
        return self.run(self.numstat_args(since))

    def command_line(self, args: Sequence[str]) -> list[str]:
        # -z output keeps paths verbatim; quotepath covers anything printed without it
        return [self.git_executable, "-C", self.repo_path, "-c", "core.quotepath=false", *args]

    def run(self, args: Sequence[str]) -> str:
        """Run ``git -C <repo> <args>`` and return stdout.

        Raises:
            VcsError: git is missing or exited non-zero
            DeadlineExceeded: the deadline fired before or during the call
        """
        operation = "git " + " ".join(args)
        timeout = self.deadline.timeout_for(operation)
        cmd = self.command_line(args)
        logger.debug("Running: %s", operation)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
            )
        except FileNotFoundError as e:
            raise VcsError(VcsErrorKind.UNAVAILABLE, args, stderr=str(e))
        except subprocess.TimeoutExpired:
            raise DeadlineExceeded(operation, self.deadline.timeout_seconds)

        if result.returncode != 0:
            raise VcsError(
                classify_failure(result.stderr),
                args,
                stderr=result.stderr,
                returncode=result.returncode,
            )
        return result.stdout
