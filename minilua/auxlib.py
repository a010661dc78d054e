"""Convenience functions for driving a :class:`LuaState` from host code."""

from __future__ import annotations

from typing import Any

from .objects import ObjectType
from .state import CFunction, LuaState


def new_state() -> LuaState:
    """Create a fresh interpreter state."""
    return LuaState()


def close(state: LuaState) -> None:
    """Release everything the state holds."""
    state.close()


def push_integer(state: LuaState, integer: int) -> None:
    state.push_integer(integer)


def push_number(state: LuaState, number: float) -> None:
    state.push_number(number)


def push_lightuserdata(state: LuaState, userdata: Any) -> None:
    state.push_lightuserdata(userdata)


def push_nil(state: LuaState) -> None:
    state.push_nil()


def push_cfunction(state: LuaState, f: CFunction) -> None:
    state.push_cfunction(f)


def push_boolean(state: LuaState, boolean: bool) -> None:
    state.push_boolean(boolean)


def pcall(state: LuaState, narg: int, nresults: int) -> int:
    """Call the function below the top ``narg`` arguments in protected mode.

    Returns the status code; on error the status is left on the stack.
    """
    func = state.top - (narg + 1)
    return state.pcall(lambda: state.call(func, nresults), state.top)


def check_integer(state: LuaState, idx: int) -> bool:
    """True if the value at ``idx`` is an integer."""
    return state.to_integer(idx) is not None


def to_integer(state: LuaState, idx: int) -> int:
    """The integer at ``idx``, or 0 when the value is not an integer."""
    value = state.to_integer(idx)
    return 0 if value is None else value


def to_number(state: LuaState, idx: int) -> float:
    """The number at ``idx``, or 0.0 when the value is not a number."""
    value = state.to_number(idx)
    return 0.0 if value is None else value


def to_userdata(state: LuaState, idx: int) -> Any:
    """The light userdata at ``idx``, or None for any other kind of value."""
    slot = state.stack[state._index2addr(idx)]
    return slot.value if slot.tt == ObjectType.LIGHTUSERDATA else None


def to_boolean(state: LuaState, idx: int) -> bool:
    return state.to_boolean(idx)


def is_nil(state: LuaState, idx: int) -> bool:
    return state.is_nil(idx)


def pop(state: LuaState) -> None:
    state.pop()


def stack_size(state: LuaState) -> int:
    return state.stack_size()