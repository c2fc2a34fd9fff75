import pytest

from irl.interpreter import Interpreter

# Every test that asks for an interpreter runs twice:
# 1) in debug mode, where the program is evaluated exactly as parsed ["debug"]
# 2) in release mode, where the optimizing rewrite pass runs first ["release"]
# The two runs must agree, which keeps the optimizer honest.


@pytest.fixture(params=["debug", "release"])
def mode(request):
    return request.param


@pytest.fixture
def interp(mode):
    """Fresh interpreter with builtins loaded."""
    return Interpreter(mode=mode)
