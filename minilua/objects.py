"""Core value types, type tags, status codes and limits of the interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Status codes returned by protected calls."""

    OK = 0
    ERRERR = 1
    ERRMEM = 2
    ERRRUN = 3


class ObjectType(IntEnum):
    """Basic object types."""

    NUMBER = 1
    LIGHTUSERDATA = 2
    BOOLEAN = 3
    STRING = 4
    NIL = 5
    TABLE = 6
    FUNCTION = 7
    THREAD = 8
    NONE = 9


# Variant tags: the basic type in the low nibble, the variant above it.
LUA_NUMINT = ObjectType.NUMBER | (0 << 4)
LUA_NUMFLT = ObjectType.NUMBER | (1 << 4)

LUA_TLCL = ObjectType.FUNCTION | (0 << 4)
LUA_TLCF = ObjectType.FUNCTION | (1 << 4)
LUA_TCCL = ObjectType.FUNCTION | (2 << 4)

LUA_LNGSTR = ObjectType.STRING | (0 << 4)
LUA_SHRSTR = ObjectType.STRING | (1 << 4)

# Stack limits.
LUA_MINSTACK = 20
LUA_STACKSIZE = 2 * LUA_MINSTACK
LUA_EXTRASTACK = 5
LUA_MAXSTACK = 15000
LUA_ERRORSTACK = 200
LUA_MULRET = -1
LUA_MAXCALLS = 200
LUA_EXTRASPACE = 8


class LuaError(Exception):
    """Raised to unwind to the nearest protected call."""

    def __init__(self, status: int, message: str | None = None) -> None:
        self.status = int(status)
        super().__init__(message or f"lua error with status {self.status}")


def lua_error(message: str) -> None:
    """Print an interpreter error message."""
    print(f"LUA ERROR:{message}")


@dataclass
class TValue:
    """A tagged value living in a stack slot."""

    value: Any = None
    tt: int = ObjectType.NIL

    def set_nil(self) -> None:
        """Make this slot nil."""
        self.value = None
        self.tt = ObjectType.NIL

    def set_from(self, other: TValue) -> None:
        """Copy tag and value from another slot."""
        self.tt = other.tt
        self.value = other.value