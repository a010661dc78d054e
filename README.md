# minilua

`minilua` is the core of a small Lua-style virtual machine. It provides:

- a value stack holding nil, booleans, integers, floats, light userdata and
  C-style functions (plain Python callables that take the state and return
  the number of results they pushed);
- call frames (`minilua.state.CallInfo`) with Lua's result-count rules:
  a fixed number of results, padded with nil or truncated, or all results
  (`LUA_MULRET`);
- protected calls that catch a `minilua.objects.LuaError` raised inside a
  call, restore the stack and push the error status as an integer.

## Installation

```
pip install .
```

## Using the library

The `minilua.auxlib` module offers the auxiliary API as plain functions:

```python
from minilua import auxlib

def add(state):
    left = auxlib.to_integer(state, -2)
    right = auxlib.to_integer(state, -1)
    auxlib.push_integer(state, left + right)
    return 1

state = auxlib.new_state()
auxlib.push_cfunction(state, add)
auxlib.push_integer(state, 5)
auxlib.push_integer(state, 3)
status = auxlib.pcall(state, 2, 1)     # 0 (ErrorCode.OK)
print(auxlib.to_integer(state, -1))    # 8
auxlib.pop(state)
print(auxlib.stack_size(state))        # 0
auxlib.close(state)
```

Other functions in `auxlib`: `push_number`, `push_boolean`, `push_nil`,
`push_lightuserdata`, `check_integer`, `to_number`, `to_boolean`,
`to_userdata` and `is_nil`. `to_integer` and `to_number` return `0` and
`0.0` when the slot does not hold a value of that kind.

`minilua.state.LuaState` can also be used directly, and as a context manager
that closes the state on exit:

```python
from minilua.state import LuaState

with LuaState() as state:
    state.push_boolean(True)
    print(state.to_boolean(-1))   # True
    print(state.to_integer(-1))   # None: not an integer
```

Negative stack indices count from the top (`-1` is the top value); positive
indices count from the current function's slot. An index outside the current
frame raises `IndexError`.

### Limits and errors

- The stack starts with room for a few dozen values; pushing past its limit
  raises `OverflowError`. `LuaState.check_stack(n)` grows the stack so that
  `n` more values fit.
- `LuaState.throw(status)` raises `LuaError`; `LuaState.pcall` and
  `auxlib.pcall` turn it into a returned status (`minilua.objects.ErrorCode`).
- Nesting calls deeper than `LUA_MAXCALLS` (200) throws `ErrorCode.ERRERR`.

## Command line

```
minilua
```

runs a short demonstration: it calls an adding function with 5 and 3 through
a protected call and prints

```
result is 8
final stack size 0
```

## What it does not do

`minilua` has no parser, compiler or bytecode interpreter: it cannot run Lua
source code. Only Python callables pushed with `push_cfunction` can be
called; calling any other value does nothing. There are no strings, tables,
coroutines or garbage collector.