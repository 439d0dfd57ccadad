"""Run shell commands as root through one long-lived privileged shell."""

from root_shell.session import (
    END_OF_COMMAND,
    PrivilegeCheckError,
    RootShell,
    RootShellError,
    SessionClosedError,
    ShellIOError,
    SpawnError,
    open_session,
    open_session_from_config,
    open_session_with
)
from root_shell.utils import Config, setup_logging

__all__ = [
    "Config",
    "END_OF_COMMAND",
    "PrivilegeCheckError",
    "RootShell",
    "RootShellError",
    "SessionClosedError",
    "ShellIOError",
    "SpawnError",
    "open_session",
    "open_session_from_config",
    "open_session_with",
    "setup_logging"
]
