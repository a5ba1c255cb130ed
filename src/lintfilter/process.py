# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run external linters without a shell."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional, arguments are passed as a list and
# ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from pathlib import Path


class SubprocessExecutionError(RuntimeError):
    """A linter exited with a status its caller does not treat as a report."""

    def __init__(self, completed: subprocess.CompletedProcess[str]) -> None:
        command = [str(part) for part in completed.args]
        detail = (completed.stderr or "").strip() or "<no stderr>"
        super().__init__(f"{' '.join(command)} exited with status {completed.returncode}: {detail}")
        self.command = tuple(command)
        self.returncode = completed.returncode
        self.stdout = completed.stdout
        self.stderr = completed.stderr


def resolve_executable(command: Sequence[str]) -> list[str]:
    """Return ``command`` with its program replaced by an absolute path.

    Raises:
        ValueError: If ``command`` is empty.
        FileNotFoundError: If the program is not on ``PATH``.
    """

    if not command:
        raise ValueError("cannot run an empty command")
    program, *arguments = command
    if Path(program).is_absolute():
        return [program, *arguments]
    located = shutil.which(program)
    if located is None:
        raise FileNotFoundError(f"'{program}' is not installed or not on PATH")
    return [located, *arguments]


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    input_text: str | None = None,
    accepted_returncodes: Sequence[int] = (0,),
) -> subprocess.CompletedProcess[str]:
    """Run ``args`` and capture its text output.

    Args:
        args: Program and arguments.
        cwd: Working directory for the child.
        env: Replacement environment, ``None`` inherits ours.
        input_text: Text fed to the child's stdin; stdin is closed otherwise.
        accepted_returncodes: Exit statuses returned to the caller.

    Returns:
        subprocess.CompletedProcess[str]: The finished process.

    Raises:
        FileNotFoundError: If the program cannot be found.
        SubprocessExecutionError: If the exit status is not accepted.
    """

    # Bandit: the argument list is built from validated options, no shell expansion.
    completed = subprocess.run(  # nosec B603
        resolve_executable(args),
        cwd=cwd,
        env=None if env is None else dict(env),
        input=input_text,
        stdin=None if input_text is not None else subprocess.DEVNULL,
        capture_output=True,
        text=True,
        check=False,
    )
    if completed.returncode not in accepted_returncodes:
        raise SubprocessExecutionError(completed)
    return completed


__all__ = ["SubprocessExecutionError", "resolve_executable", "run_command"]
