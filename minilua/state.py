"""The interpreter state: value stack, call chain and protected calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from .objects import (
    LUA_EXTRASPACE,
    LUA_EXTRASTACK,
    LUA_MAXCALLS,
    LUA_MAXSTACK,
    LUA_MINSTACK,
    LUA_MULRET,
    LUA_NUMFLT,
    LUA_NUMINT,
    LUA_STACKSIZE,
    LUA_TLCF,
    ErrorCode,
    LuaError,
    ObjectType,
    TValue,
)

CFunction = Callable[["LuaState"], int]


@dataclass(eq=False)
class CallInfo:
    """Information about one active function call; positions are stack indices."""

    func: int = 0
    top: int = 0
    nresults: int = 0
    callstatus: int = ErrorCode.OK
    next: CallInfo | None = field(default=None, repr=False)
    previous: CallInfo | None = field(default=None, repr=False)


class LuaState:
    """A thread of execution with its own value stack."""

    def __init__(self) -> None:
        self.capacity = LUA_STACKSIZE
        self.stack: list[TValue] = [TValue() for _ in range(self.capacity)]
        self.stack_last = self.capacity - LUA_EXTRASPACE
        self.status = ErrorCode.OK
        self.errorfunc = 0
        self.ncalls = 0
        # Slot 0 holds the (absent) function of the base call.
        self.top = 1
        self.base_ci = CallInfo(func=0, top=LUA_MINSTACK)
        self.ci = self.base_ci

    # context management -------------------------------------------------

    def __enter__(self) -> LuaState:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release the call chain and the stack."""
        ci = self.base_ci
        while ci.next is not None:
            nxt = ci.next
            ci.next = None
            ci = nxt
        self.ci = self.base_ci
        self.stack = []
        self.stack_last = 0
        self.top = 0
        self.capacity = 0

    # stack management ---------------------------------------------------

    def check_stack(self, need: int) -> None:
        """Make sure ``need`` more slots fit below the stack limit."""
        if self.top + need > self.stack_last:
            self.grow_stack(need)

    def grow_stack(self, size: int) -> None:
        """Enlarge the stack to hold at least ``size`` more slots."""
        if self.capacity > LUA_MAXSTACK:
            self.throw(ErrorCode.ERRERR)
        new_size = max(self.capacity * 2, self.top + size + LUA_EXTRASTACK)
        self.stack.extend(TValue() for _ in range(new_size - len(self.stack)))
        self.capacity = new_size
        self.stack_last = new_size - LUA_EXTRASPACE

    def _increase_top(self) -> None:
        if self.top + 1 > self.stack_last:
            raise OverflowError("stack overflow")
        self.top += 1

    def _push(self, value: Any, tt: int) -> None:
        if self.top + 1 > self.stack_last:
            raise OverflowError("stack overflow")
        slot = self.stack[self.top]
        slot.value = value
        slot.tt = tt
        self._increase_top()

    def _index2addr(self, idx: int) -> int:
        if idx >= 0:
            addr = self.ci.func + idx
            if addr >= self.ci.top:
                raise IndexError(f"stack index {idx} out of range")
            return addr
        addr = self.top + idx
        if addr <= self.ci.func:
            raise IndexError(f"stack index {idx} out of range")
        return addr

    def set_top(self, idx: int) -> None:
        """Set the stack top relative to the current function, filling with nil."""
        func = self.ci.func
        if idx >= 0:
            if idx > self.stack_last - (func + 1):
                raise IndexError(f"stack index {idx} out of range")
            new_top = func + 1 + idx
            while self.top < new_top:
                self.stack[self.top].set_nil()
                self.top += 1
            self.top = new_top
        else:
            if self.top + idx <= func:
                raise IndexError(f"stack index {idx} out of range")
            self.top += idx

    def stack_size(self) -> int:
        """Number of values above the current function."""
        return self.top - (self.ci.func + 1)

    def pop(self) -> None:
        """Remove the topmost value."""
        self.set_top(-1)

    # pushing ------------------------------------------------------------

    def push_cfunction(self, f: CFunction) -> None:
        self._push(f, LUA_TLCF)

    def push_integer(self, integer: int) -> None:
        self._push(int(integer), LUA_NUMINT)

    def push_number(self, number: float) -> None:
        self._push(float(number), LUA_NUMFLT)

    def push_boolean(self, b: bool) -> None:
        self._push(bool(b), ObjectType.BOOLEAN)

    def push_nil(self) -> None:
        self._push(None, ObjectType.NIL)

    def push_lightuserdata(self, p: Any) -> None:
        self._push(p, ObjectType.LIGHTUSERDATA)

    # reading ------------------------------------------------------------

    def to_integer(self, idx: int) -> int | None:
        """The integer at ``idx``, or None if the slot holds no integer."""
        slot = self.stack[self._index2addr(idx)]
        return slot.value if slot.tt == LUA_NUMINT else None

    def to_number(self, idx: int) -> float | None:
        """The number at ``idx`` as a float, or None if it is not a number."""
        slot = self.stack[self._index2addr(idx)]
        if slot.tt in (LUA_NUMINT, LUA_NUMFLT):
            return float(slot.value)
        return None

    def to_boolean(self, idx: int) -> bool:
        """False for nil and false, True for everything else."""
        slot = self.stack[self._index2addr(idx)]
        if slot.tt == ObjectType.NIL:
            return False
        return not (slot.tt == ObjectType.BOOLEAN and slot.value is False)

    def is_nil(self, idx: int) -> bool:
        return self.stack[self._index2addr(idx)].tt == ObjectType.NIL

    # calls --------------------------------------------------------------

    def throw(self, error: int) -> None:
        """Unwind to the nearest protected call with status ``error``."""
        raise LuaError(error)

    def run_protected(self, func: Callable[[], Any]) -> int:
        """Run ``func``, returning the status of any error it throws."""
        old_calls = self.ncalls
        status = ErrorCode.OK
        try:
            func()
        except LuaError as exc:
            status = exc.status
        self.ncalls = old_calls
        return status

    def _next_ci(self, func: int, nresults: int) -> CallInfo:
        new_ci = CallInfo(
            func=func,
            top=self.top + LUA_MINSTACK,
            nresults=nresults,
            previous=self.ci,
        )
        self.ci.next = new_ci
        self.ci = new_ci
        return new_ci

    def precall(self, func: int, nresults: int) -> bool:
        """Run a C function at ``func`` directly; False for other callees."""
        slot = self.stack[func]
        if slot.tt != LUA_TLCF:
            return False
        f = slot.value
        self._next_ci(func, nresults)
        n = f(self)
        if self.ci.func + n >= self.ci.top:
            raise IndexError("C function returned too many results")
        self.postcall(self.top - n, n)
        return True

    def _move(self, dest: int, src: int) -> None:
        self.stack[dest].set_from(self.stack[src])
        self.stack[src].set_nil()

    def postcall(self, first_result: int, nresults: int) -> int:
        """Move results into place and return to the calling frame."""
        func = self.ci.func
        nwant = self.ci.nresults
        if nwant == 0:
            self.top = func
        elif nwant == 1:
            if nresults == 0:
                self.stack[first_result].set_nil()
            self._move(func, first_result)
            self.top = func + 1
        elif nwant == LUA_MULRET:
            nres = self.top - first_result
            for i in range(nres):
                self._move(func + i, first_result + i)
            self.top = func + nres
        elif nwant > nresults:
            for i in range(nwant):
                if i < nresults:
                    self._move(func + i, first_result + i)
                else:
                    self.stack[func + i].tt = ObjectType.NIL
            self.top = func + nwant
        else:
            for i in range(nresults):
                if i < nwant:
                    self._move(func + i, first_result + i)
                else:
                    self.stack[func + i].set_nil()
            self.top = func + nresults

        previous = self.ci.previous
        self.ci.previous = None
        self.ci = previous if previous is not None else self.base_ci
        self.ci.next = None
        return ErrorCode.OK

    def call(self, func: int, nresults: int) -> int:
        """Call the function at stack index ``func``."""
        self.ncalls += 1
        if self.ncalls > LUA_MAXCALLS:
            self.throw(ErrorCode.ERRERR)
        self.precall(func, nresults)
        self.ncalls -= 1
        return ErrorCode.OK

    def _reset_unused_stack(self, old_top: int) -> None:
        for slot in self.stack[old_top:self.top]:
            slot.set_nil()

    def pcall(self, func: Callable[[], Any], oldtop: int) -> int:
        """Run ``func`` protected; on error restore the stack and push the status."""
        old_ci = self.ci
        old_errorfunc = self.errorfunc
        status = self.run_protected(func)
        if status != ErrorCode.OK:
            self._reset_unused_stack(oldtop)
            self.ci = old_ci
            old_ci.next = None
            self.top = oldtop
            self.push_integer(status)
        self.errorfunc = old_errorfunc
        return status