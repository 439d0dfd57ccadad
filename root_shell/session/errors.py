"""Errors raised by root shell sessions.

Every error is recoverable: opening a session, running a command or
terminating a session reports a failure by raising one of these, never by
exiting the calling program.
"""

class RootShellError(Exception):
    """Base class for all root shell errors"""


class SpawnError(RootShellError):
    """The provider or the shell could not be launched"""


class PrivilegeCheckError(RootShellError):
    """The shell was launched but does not run as root

    Raised when the user declines or cancels the authorization prompt, when
    the provider exits before answering, or when it grants another identity.
    """


class ShellIOError(RootShellError):
    """Reading from or writing to the shell pipes failed"""


class SessionClosedError(ShellIOError):
    """A command was sent to a session that has already been terminated"""
