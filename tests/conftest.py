import os
import pytest
import shutil
import sys

project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

@pytest.fixture
def stand_in_provider():
    """A provider that runs the shell without changing identity"""
    provider = shutil.which("env")
    if provider is None:
        pytest.skip("env is not available")
    return provider
