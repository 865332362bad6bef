import pytest

from schemer.interpreter import Interpreter, new_root_environment
from schemer.types.environment import Environment


@pytest.fixture
def env() -> Environment:
    """Fresh root environment with every native procedure registered."""
    return new_root_environment()


@pytest.fixture
def interp() -> Interpreter:
    """Interpreter without the prelude, so only native procedures are bound."""
    return Interpreter(prelude=None)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    # Keep the developer's shell configuration out of the test run
    for var in ("SCHEMER_LOAD_PATH", "SCHEMER_PRELUDE_PATH", "SCHEMER_RECURSION_LIMIT", "SCHEMER_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
