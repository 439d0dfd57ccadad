import logging
import psutil
import shutil
import subprocess

from typing import Dict, Optional

from root_shell.session.command_executor import CommandExecutor
from root_shell.session.constants import (
    DEFAULT_PROVIDER,
    DEFAULT_SHELL,
    EXIT_COMMAND,
    IDENTITY_COMMAND,
    ROOT_USER
)
from root_shell.session.errors import (
    PrivilegeCheckError,
    SessionClosedError,
    ShellIOError,
    SpawnError
)
from root_shell.session.settings import SessionSettings
from root_shell.utils.config import Config

class RootShell:
    """A shell that keeps running with root privileges

    The shell is started once through a privilege escalation provider
    (pkexec by default), so the user authorizes it a single time and every
    command sent afterwards runs as root. Construction only succeeds when
    the shell reports itself as root.

    The shell is told to exit and is reaped exactly once, whichever comes
    first of terminate(), leaving a `with` block or garbage collection.
    Commands must be sent one at a time; the session is not thread safe.
    """

    def __init__(self, provider: str = DEFAULT_PROVIDER, shell: str = DEFAULT_SHELL):
        """Launch the shell and verify it runs as root

        Args:
            provider: Executable that escalates privileges, e.g. pkexec
            shell: Shell executable passed to the provider as its argument

        Raises:
            SpawnError: provider or shell could not be launched
            PrivilegeCheckError: the shell does not run as root
        """
        self.provider = provider
        self.shell = shell
        self.process: Optional[subprocess.Popen] = None
        self.command_executor: Optional[CommandExecutor] = None
        self.ps_process: Optional[psutil.Process] = None
        self.ps_children: Dict[int, psutil.Process] = {}

        self._spawn()

        try:
            self._verify_privileges()
        except Exception:
            self._dispose()
            raise

        logging.info(f"Opened root shell {self.pid} via {self.provider} {self.shell}")

    def __enter__(self) -> "RootShell":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        # Do not mask an exception that is already propagating
        self._dispose(raise_errors=exc_type is None)
        return False

    def __del__(self):
        self._dispose()

    @property
    def pid(self) -> Optional[int]:
        """Process ID of the provider, None once the session is terminated"""
        return self.process.pid if self.process else None

    def is_alive(self) -> bool:
        """Check whether the shell process is still running

        Uses Popen.poll(), which reaps the shell if it has exited.
        """
        return self.process is not None and self.process.poll() is None

    def execute(self, command: str) -> str:
        """Run a command in the root shell

        Blocks until the command has finished; there is no timeout.

        Args:
            command: The command to execute, forwarded verbatim to the shell

        Returns:
            The command's standard output, trimmed

        Raises:
            SessionClosedError: the session has been terminated
            ShellIOError: the shell pipes failed or the shell died
        """
        if self.process is None:
            raise SessionClosedError("Root shell session has already been terminated")

        logging.debug(f"Executing command: {command}")
        return self.command_executor.execute(command)

    def terminate(self) -> None:
        """Tell the shell to exit and wait for it

        Calling it again after the session is terminated does nothing.

        Raises:
            ShellIOError: the exit command could not be written; the process
                has still been reaped
        """
        self._dispose(raise_errors=True)

    def get_resource_usage(self) -> Dict[str, float]:
        """Get CPU and memory usage of the shell and its children

        CPU usage is measured since the previous call. The shell is sampled
        once when it starts, and child processes from their first call on,
        so a child reports 0.0 the first time it is seen.

        Returns:
            Dict with cpu_percent and memory_mb
        """
        if self.process is None:
            return {"cpu_percent": 0.0, "memory_mb": 0.0}

        if self.ps_process is None:
            self.ps_process = self._track_process(self.process.pid)
            if self.ps_process is None:
                return {"cpu_percent": 0.0, "memory_mb": 0.0}

        try:
            cpu_percent = self.ps_process.cpu_percent(interval=None)
            memory_mb = self.ps_process.memory_info().rss / (1024 * 1024)

            children = {}
            for child in self.ps_process.children(recursive=True):
                tracked = self.ps_children.get(child.pid)
                if tracked is None or tracked != child:  # new child or reused pid
                    tracked = child
                children[child.pid] = tracked

                try:
                    cpu_percent += tracked.cpu_percent(interval=None)
                    memory_mb += tracked.memory_info().rss / (1024 * 1024)
                except (psutil.NoSuchProcess, psutil.AccessDenied):
                    pass

            self.ps_children = children

            return {
                "cpu_percent": cpu_percent,
                "memory_mb": memory_mb
            }
        except (psutil.Error, OSError) as e:
            logging.error(f"Error getting resource usage: {e}")

        return {
            "cpu_percent": 0.0,
            "memory_mb": 0.0
        }

    def _track_process(self, pid: int) -> Optional[psutil.Process]:
        """Start measuring CPU usage of a process

        Args:
            pid: Process ID to track

        Returns:
            The psutil process, None if it cannot be inspected
        """
        try:
            ps_process = psutil.Process(pid)
            ps_process.cpu_percent(interval=None)  # the first sample is always 0.0
            return ps_process
        except psutil.Error as e:
            logging.debug(f"Cannot inspect process {pid}: {e}")
            return None

    def _spawn(self) -> None:
        """Start the provider with the shell as its only argument"""
        if shutil.which(self.shell) is None:
            raise SpawnError(f"Shell '{self.shell}' is not a runnable program")

        try:
            self.process = subprocess.Popen(
                [self.provider, self.shell],
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=None
            )
        except (OSError, ValueError) as e:
            raise SpawnError(f"Failed to launch '{self.provider} {self.shell}': {e}") from e

        self.command_executor = CommandExecutor(self.process.stdin, self.process.stdout)
        self.ps_process = self._track_process(self.process.pid)

    def _verify_privileges(self) -> None:
        """Make sure the shell runs as root"""
        try:
            user = self.command_executor.execute(IDENTITY_COMMAND)
        except ShellIOError as e:
            raise PrivilegeCheckError(
                f"Privilege escalation through '{self.provider}' was denied or cancelled"
            ) from e

        if user != ROOT_USER:
            raise PrivilegeCheckError(f"Shell runs as '{user}' instead of '{ROOT_USER}'")

    def _dispose(self, raise_errors: bool = False) -> None:
        """Exit the shell and reap it, at most once per session

        Args:
            raise_errors: Raise a failed exit write instead of logging it
        """
        process = getattr(self, "process", None)
        if process is None:
            return

        # Disposed from here on, whatever fails below
        self.process = None
        write_error = None

        if process.poll() is None:
            try:
                self.command_executor.write_line(EXIT_COMMAND)
            except ShellIOError as e:
                write_error = e

        try:
            process.stdin.close()
        except OSError as e:
            logging.debug(f"Error closing stdin of root shell {process.pid}: {e}")

        try:
            process.wait()
        except OSError as e:
            logging.warning(f"Failed to reap root shell {process.pid}: {e}")

        process.stdout.close()
        self.command_executor = None
        self.ps_process = None
        self.ps_children = {}

        logging.info(f"Root shell {process.pid} exited with code {process.returncode}")

        if write_error is not None:
            if raise_errors:
                raise write_error
            logging.error(f"Failed to send exit to root shell {process.pid}: {write_error}")


def open_session() -> RootShell:
    """Open a root shell using pkexec and sh

    Returns:
        A session verified to run as root
    """
    return RootShell(DEFAULT_PROVIDER, DEFAULT_SHELL)


def open_session_with(provider: str, shell: str) -> RootShell:
    """Open a root shell with any provider and shell

    Providers that cannot ask for a password interactively, such as sudo
    without cached credentials, are the caller's responsibility.

    Args:
        provider: Executable that escalates privileges
        shell: Shell executable passed to the provider

    Returns:
        A session verified to run as root
    """
    return RootShell(provider, shell)


def open_session_from_config(config: Config) -> RootShell:
    """Open a root shell with the provider and shell from configuration

    Args:
        config: Config instance

    Returns:
        A session verified to run as root
    """
    settings = SessionSettings.from_config(config)
    return RootShell(settings.provider, settings.shell)
