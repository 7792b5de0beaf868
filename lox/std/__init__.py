import time
from typing import Any, List

from lox.callables import NativeFunction
from lox.environment import Environment


def std_clock(interpreter, args: List[Any]) -> Any:
    return time.time()


NATIVES = (
    NativeFunction('clock', 0, std_clock),
)


def populate_globals(env: Environment) -> Environment:
    """Define every native function in the given (global) environment."""
    for native in NATIVES:
        env.define(native.name, native)
    return env
