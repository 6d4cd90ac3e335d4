"""Local git implementation backed by the git executable."""

import asyncio
import logging
import time

from automerge_action.errors import GitError
from automerge_action.git.base import BaseVersionControl, ExecResult

logger = logging.getLogger(__name__)

# Identity used for rewritten commits; CI runners usually have no git config
DEFAULT_USER_NAME = "github-actions[bot]"
DEFAULT_USER_EMAIL = "41898282+github-actions[bot]@users.noreply.github.com"


class LocalGit(BaseVersionControl):
    """Runs git commands as subprocesses on the local machine."""

    def __init__(
        self,
        git_binary: str = "git",
        user_name: str = DEFAULT_USER_NAME,
        user_email: str = DEFAULT_USER_EMAIL,
        remote: str = "origin",
    ):
        """
        Initialize local git backend.

        Args:
            git_binary: Path or name of the git executable
            user_name: Committer name used when rewriting commits
            user_email: Committer email used when rewriting commits
            remote: Name of the remote created by clone
        """
        self.git_binary = git_binary
        self.user_name = user_name
        self.user_email = user_email
        self.remote = remote

    def _remote_ref(self, ref: str) -> str:
        return f"refs/remotes/{self.remote}/{ref}"

    async def clone(self, url: str, directory: str, ref: str, depth: int) -> None:
        await self.exec(
            [
                "clone",
                "--quiet",
                "--no-tags",
                "--single-branch",
                "--branch",
                ref,
                "--depth",
                str(depth),
                url,
                directory,
            ]
        )

    async def fetch(self, directory: str, ref: str) -> None:
        await self.exec(
            ["fetch", "--quiet", self.remote, f"{ref}:{self._remote_ref(ref)}"],
            cwd=directory,
        )

    async def fetch_since(self, directory: str, ref: str, since: str) -> None:
        await self.exec(
            [
                "fetch",
                "--quiet",
                f"--shallow-since={since}",
                self.remote,
                f"{ref}:{self._remote_ref(ref)}",
            ],
            cwd=directory,
        )

    async def head(self, directory: str) -> str:
        result = await self.exec(["rev-parse", "HEAD"], cwd=directory)
        return result.stdout.strip()

    async def sha(self, directory: str, ref: str) -> str:
        result = await self.exec(["rev-parse", self._remote_ref(ref)], cwd=directory)
        return result.stdout.strip()

    async def rebase(self, directory: str, onto: str) -> None:
        await self.exec(["rebase", "--quiet", onto], cwd=directory)

    async def push(self, directory: str, force: bool, ref: str) -> None:
        args = ["push", "--quiet"]
        if force:
            args.append("--force")
        args += [self.remote, ref]
        await self.exec(args, cwd=directory)

    async def exec(self, args: list[str], cwd: str | None = None) -> ExecResult:
        """
        Run a git command.

        Args:
            args: Arguments after the git executable
            cwd: Working directory

        Returns:
            ExecResult with stdout, stderr, and return code

        Raises:
            GitError: If git exits with a non-zero status
        """
        command = [self.git_binary]
        if self.user_name:
            command += ["-c", f"user.name={self.user_name}"]
        if self.user_email:
            command += ["-c", f"user.email={self.user_email}"]
        command += args

        logger.debug("Running git %s", args[0])
        start_time = time.time()

        proc = await asyncio.create_subprocess_exec(
            *command,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await proc.communicate()

        result = ExecResult(
            stdout=stdout.decode() if stdout else "",
            stderr=stderr.decode() if stderr else "",
            return_code=proc.returncode,
            duration_sec=time.time() - start_time,
        )
        logger.debug("git %s exited with %s after %.2fs", args[0], result.return_code, result.duration_sec)
        if result.return_code != 0:
            raise GitError(args, result.return_code, result.stderr)
        return result
