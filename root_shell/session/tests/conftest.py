import pytest
import yaml

from unittest.mock import mock_open, patch

from root_shell.utils.config import Config

@pytest.fixture
def session_config():
    """Factory fixture to create Config instances from a dict"""
    def _create_config(config_data):
        with patch("builtins.open", mock_open(read_data=yaml.dump(config_data))):
            with patch("os.path.exists", return_value=True):
                return Config()
    return _create_config
