"""Constants shared by every root shell session."""

# Echoed after each command; its appearance on stdout ends the response.
# Output that itself contains this text ends the response early.
END_OF_COMMAND = "~end-of-command~"

DEFAULT_PROVIDER = "pkexec"
DEFAULT_SHELL = "sh"

IDENTITY_COMMAND = "whoami"
ROOT_USER = "root"
EXIT_COMMAND = "exit"

ENCODING = "utf-8"
LINE_ENDING = "\n"
