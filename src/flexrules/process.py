# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run a located tool once and capture what it prints."""

from __future__ import annotations

import subprocess  # nosec B404 - argument lists only, never ``shell=True``
from collections.abc import Sequence
from subprocess import CompletedProcess
from typing import Final

TIMEOUT_RETURNCODE: Final[int] = 124
NOT_FOUND_RETURNCODE: Final[int] = 127


def _decode(raw: bytes | str | None) -> str:
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    return raw.decode("utf-8", errors="replace")


def capture_output(command: Sequence[str], *, timeout: float | None = None) -> CompletedProcess[str]:
    """Run ``command`` with stdin closed and return both decoded streams.

    Output is decoded as UTF-8 with undecodable bytes replaced, so a tool
    printing binary noise still yields a result. A timeout is reported as exit
    status ``124`` and a launch error as ``127``, each with the reason in
    stderr; neither raises.

    Args:
        command: Absolute executable path followed by its arguments.
        timeout: Optional timeout in seconds.

    Returns:
        CompletedProcess: Exit status with text ``stdout`` and ``stderr``.
    """

    args = list(command)
    if not args:
        raise ValueError("command requires at least one argument")
    try:
        completed = subprocess.run(  # nosec B603 - argument list, no shell
            args,
            check=False,
            capture_output=True,
            stdin=subprocess.DEVNULL,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        stderr = _decode(exc.stderr)
        reason = f"Command timed out after {timeout:.1f}s"
        return CompletedProcess(
            args=args,
            returncode=TIMEOUT_RETURNCODE,
            stdout=_decode(exc.stdout),
            stderr=f"{stderr}\n{reason}" if stderr else reason,
        )
    except OSError as exc:
        return CompletedProcess(args=args, returncode=NOT_FOUND_RETURNCODE, stdout="", stderr=str(exc))
    return CompletedProcess(
        args=args,
        returncode=completed.returncode,
        stdout=_decode(completed.stdout),
        stderr=_decode(completed.stderr),
    )


__all__ = ["NOT_FOUND_RETURNCODE", "TIMEOUT_RETURNCODE", "capture_output"]
