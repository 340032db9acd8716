"""Run shell commands and session actions in the background."""

from __future__ import annotations

import subprocess
import threading


class CommandError(RuntimeError):
    """Raised when a shell command cannot be started."""


def _spawn(script: str, error_message: str) -> subprocess.Popen:
    try:
        process = subprocess.Popen(["bash", "-c", script])
    except OSError as exc:
        raise CommandError(error_message) from exc
    threading.Thread(target=process.wait, daemon=True).start()
    return process


def execute_command(command: str) -> subprocess.Popen:
    """Start ``command`` through bash and reap it in the background."""
    return _spawn(command, f"Failed to execute command {command}")


def suspend() -> subprocess.Popen:
    """Suspend the machine."""
    return _spawn("systemctl suspend", "Failed to execute command.")


def shutdown() -> subprocess.Popen:
    """Power the machine off immediately."""
    return _spawn("shutdown now", "Failed to execute command.")


def reboot() -> subprocess.Popen:
    """Reboot the machine."""
    return _spawn("systemctl reboot", "Failed to execute command.")


def logout() -> subprocess.Popen:
    """End every session of the current user."""
    return _spawn("loginctl kill-user $(whoami)", "Failed to execute command.")