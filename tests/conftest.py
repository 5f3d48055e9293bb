import pytest

from minilisp.builtin.env_builtin import register
from minilisp.evaluation.evaluator import evaluate
from minilisp.reader.parser import read_all
from minilisp.types.environment import Environment


@pytest.fixture
def env():
    """Fresh environment with the standard library loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def run(env):
    """Evaluate every form in a source string against `env`; return the last value."""

    def _run(source: str):
        result = None
        for expr in read_all(source):
            result = evaluate(expr, env)
        return result

    return _run
