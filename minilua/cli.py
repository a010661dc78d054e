"""Command that runs a small call through the interpreter and reports it."""

from __future__ import annotations

from . import auxlib
from .state import LuaState


def add_op(state: LuaState) -> int:
    """Add the two integers on top of the stack and push the sum."""
    left = auxlib.to_integer(state, -2)
    right = auxlib.to_integer(state, -1)
    auxlib.push_integer(state, left + right)
    return 1


def lua_call_example() -> int:
    """Call ``add_op`` with 5 and 3 in protected mode and print the outcome."""
    state = auxlib.new_state()
    try:
        auxlib.push_cfunction(state, add_op)
        auxlib.push_integer(state, 5)
        auxlib.push_integer(state, 3)
        auxlib.pcall(state, 2, 1)

        result = auxlib.to_integer(state, -1)
        print(f"result is {result}")
        auxlib.pop(state)

        print(f"final stack size {auxlib.stack_size(state)}")
    finally:
        auxlib.close(state)
    return result


def main(argv: list[str] | None = None) -> int:
    lua_call_example()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())