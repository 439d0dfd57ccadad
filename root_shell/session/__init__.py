"""Session related functionality."""

from root_shell.session.command_executor import CommandExecutor
from root_shell.session.constants import END_OF_COMMAND
from root_shell.session.errors import (
    PrivilegeCheckError,
    RootShellError,
    SessionClosedError,
    ShellIOError,
    SpawnError
)
from root_shell.session.session import (
    RootShell,
    open_session,
    open_session_from_config,
    open_session_with
)
from root_shell.session.settings import SessionSettings

__all__ = [
    "CommandExecutor",
    "END_OF_COMMAND",
    "PrivilegeCheckError",
    "RootShell",
    "RootShellError",
    "SessionClosedError",
    "SessionSettings",
    "ShellIOError",
    "SpawnError",
    "open_session",
    "open_session_from_config",
    "open_session_with"
]
