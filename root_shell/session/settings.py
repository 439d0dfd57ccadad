from pydantic import BaseModel

from root_shell.session.constants import DEFAULT_PROVIDER, DEFAULT_SHELL
from root_shell.utils.config import Config

class SessionSettings(BaseModel):
    """Provider and shell used to open a root shell"""
    provider: str = DEFAULT_PROVIDER
    shell: str = DEFAULT_SHELL

    @classmethod
    def from_config(cls, config: Config) -> "SessionSettings":
        """Build settings from the session category of a Config

        Args:
            config: Config instance

        Returns:
            The validated settings, defaults filled in
        """
        return cls(
            provider=config.get_setting("session", "provider", DEFAULT_PROVIDER),
            shell=config.get_setting("session", "shell", DEFAULT_SHELL)
        )
