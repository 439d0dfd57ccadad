import logging

from typing import IO, List

from root_shell.session.constants import END_OF_COMMAND, ENCODING, LINE_ENDING
from root_shell.session.errors import ShellIOError

class CommandExecutor:
    """Sends commands to a shell and collects their output

    The pipes carry no length prefix. After every command the shell is told
    to echo END_OF_COMMAND, and since it runs its input lines one after
    another, the marker shows up on stdout only once the command's own
    output has been written. Everything read before the marker line belongs
    to the command.

    A command whose output contains END_OF_COMMAND ends its response early,
    and the remainder is returned by the next call instead.
    """

    def __init__(self, stdin: IO[bytes], stdout: IO[bytes]):
        """Initialize the command executor

        Args:
            stdin: Write end of the shell's standard input
            stdout: Read end of the shell's standard output
        """
        self.stdin = stdin
        self.stdout = stdout

    def execute(self, command: str) -> str:
        """Run a command in the shell and wait for its output

        Args:
            command: The command to execute, forwarded verbatim

        Returns:
            The command output without the marker and surrounding whitespace
        """
        self.write_line(command)
        self.write_line(f"echo {END_OF_COMMAND}")

        return self._read_response()

    def write_line(self, line: str) -> None:
        """Write a single line to the shell and flush it

        Args:
            line: The line to write, without a line ending
        """
        try:
            self.stdin.write(f"{line}{LINE_ENDING}".encode(ENCODING))
            self.stdin.flush()
        except (OSError, ValueError) as e:
            raise ShellIOError(f"Failed to write to the shell: {e}") from e

    def _read_response(self) -> str:
        """Read stdout up to and including the line holding the marker

        Returns:
            The accumulated output with the marker removed and trimmed
        """
        output: List[str] = []

        while True:
            try:
                line = self.stdout.readline()
            except (OSError, ValueError) as e:
                raise ShellIOError(f"Failed to read from the shell: {e}") from e

            if not line:  # EOF
                raise ShellIOError("Shell closed its output before the command finished")

            line_str = line.decode(ENCODING, errors="replace")
            output.append(line_str)

            if END_OF_COMMAND in line_str:
                break

        logging.debug(f"Read {len(output)} line(s) from the shell")

        return "".join(output).replace(END_OF_COMMAND, "").strip()
