"""Clipboard access through the platform's command-line tools."""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
import subprocess
import sys
from typing import Sequence

logger = logging.getLogger("codespark")


class ClipboardUnavailableError(RuntimeError):
    pass


def detect_clipboard_command() -> list[str] | None:
    """Return the copy command for this platform, or ``None`` if none is installed."""
    if sys.platform == "darwin":
        candidates: Sequence[list[str]] = (["pbcopy"],)
    elif sys.platform.startswith("win"):
        candidates = (["clip"],)
    else:
        candidates = []
        if os.environ.get("WAYLAND_DISPLAY"):
            candidates.append(["wl-copy"])
        candidates.extend((["xclip", "-selection", "clipboard"], ["xsel", "--clipboard", "--input"]))

    for command in candidates:
        if shutil.which(command[0]):
            return list(command)
    return None


class SubprocessClipboard:
    """Pipe text into ``pbcopy``/``clip``/``wl-copy``/``xclip``/``xsel``."""

    def __init__(self, command: Sequence[str] | None = None, *, timeout: float = 5.0) -> None:
        self.command = list(command) if command else None
        self.timeout = timeout

    async def copy_text(self, text: str) -> None:
        command = self.command or detect_clipboard_command()
        if not command:
            raise ClipboardUnavailableError("no clipboard tool found on PATH")

        logger.debug("Copying %d characters with %s", len(text), command[0])
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._run_sync, command, text)

    def _run_sync(self, command: list[str], text: str) -> None:
        subprocess.run(
            command,
            input=text.encode("utf-8"),
            check=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            timeout=self.timeout,
        )


__all__ = ["ClipboardUnavailableError", "SubprocessClipboard", "detect_clipboard_command"]
