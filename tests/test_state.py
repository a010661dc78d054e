import pytest

from minilua.objects import (
    LUA_MAXSTACK,
    LUA_MULRET,
    LUA_STACKSIZE,
    ErrorCode,
    LuaError,
)
from minilua.state import LuaState


def _add(state):
    left = state.to_integer(-2)
    right = state.to_integer(-1)
    state.push_integer(left + right)
    return 1


def _call(state, fn, args, nresults):
    state.push_cfunction(fn)
    for a in args:
        state.push_integer(a)
    func = state.top - (len(args) + 1)
    oldtop = state.top
    return state.pcall(lambda: state.call(func, nresults), oldtop)


def test_new_state_is_empty():
    state = LuaState()
    assert state.stack_size() == 0
    assert state.ci is state.base_ci


def test_push_and_read_integers():
    state = LuaState()
    state.push_integer(5)
    state.push_integer(3)
    assert state.stack_size() == 2
    assert state.to_integer(-1) == 3
    assert state.to_integer(-2) == 5
    assert state.to_integer(1) == 5


def test_to_integer_of_non_integer_is_none():
    state = LuaState()
    state.push_number(2.5)
    state.push_nil()
    assert state.to_integer(-2) is None
    assert state.to_integer(-1) is None


def test_to_number_accepts_both_number_kinds():
    state = LuaState()
    state.push_integer(7)
    state.push_number(2.5)
    state.push_boolean(True)
    assert state.to_number(-3) == 7.0
    assert state.to_number(-2) == 2.5
    assert state.to_number(-1) is None


def test_to_boolean_and_is_nil():
    state = LuaState()
    state.push_nil()
    state.push_boolean(False)
    state.push_boolean(True)
    state.push_integer(0)
    assert state.to_boolean(-4) is False
    assert state.to_boolean(-3) is False
    assert state.to_boolean(-2) is True
    assert state.to_boolean(-1) is True
    assert state.is_nil(-4) is True
    assert state.is_nil(-1) is False


def test_lightuserdata_round_trip():
    state = LuaState()
    marker = object()
    state.push_lightuserdata(marker)
    assert state.stack[state.top - 1].value is marker
    assert state.to_boolean(-1) is True


def test_pop_and_set_top():
    state = LuaState()
    state.push_integer(1)
    state.push_integer(2)
    state.pop()
    assert state.stack_size() == 1
    assert state.to_integer(-1) == 1
    state.set_top(3)
    assert state.stack_size() == 3
    assert state.is_nil(-1) and state.is_nil(-2)
    state.set_top(0)
    assert state.stack_size() == 0


def test_bad_indices_raise():
    state = LuaState()
    with pytest.raises(IndexError):
        state.to_integer(-1)
    with pytest.raises(IndexError):
        state.pop()
    with pytest.raises(IndexError):
        state.is_nil(state.base_ci.top)


def test_push_past_limit_overflows():
    state = LuaState()
    for i in range(state.stack_last - state.top):
        state.push_integer(i)
    with pytest.raises(OverflowError):
        state.push_integer(0)


def test_grow_stack_doubles_then_fails_past_max():
    state = LuaState()
    state.grow_stack(1)
    assert state.capacity == 2 * LUA_STACKSIZE
    with pytest.raises(LuaError) as info:
        while True:
            state.grow_stack(1)
    assert info.value.status == ErrorCode.ERRERR
    assert state.capacity > LUA_MAXSTACK


def test_call_c_function_single_result():
    state = LuaState()
    status = _call(state, _add, [5, 3], 1)
    assert status == ErrorCode.OK
    assert state.to_integer(-1) == 8
    assert state.stack_size() == 1
    state.pop()
    assert state.stack_size() == 0
    assert state.ci is state.base_ci


def test_call_with_no_results_wanted():
    state = LuaState()
    assert _call(state, _add, [1, 2], 0) == ErrorCode.OK
    assert state.stack_size() == 0


def test_call_with_one_wanted_and_none_returned_gives_nil():
    state = LuaState()
    assert _call(state, lambda s: 0, [], 1) == ErrorCode.OK
    assert state.stack_size() == 1
    assert state.is_nil(-1)


def _two_values(state):
    state.push_integer(10)
    state.push_integer(20)
    return 2


def test_call_multret_keeps_all_results():
    state = LuaState()
    assert _call(state, _two_values, [], LUA_MULRET) == ErrorCode.OK
    assert state.stack_size() == 2
    assert state.to_integer(-2) == 10
    assert state.to_integer(-1) == 20


def test_call_wanting_more_than_returned_pads_with_nil():
    state = LuaState()
    assert _call(state, _add, [4, 4], 3) == ErrorCode.OK
    assert state.stack_size() == 3
    assert state.to_integer(1) == 8
    assert state.is_nil(2) and state.is_nil(3)


def test_call_wanting_fewer_than_returned():
    state = LuaState()
    assert _call(state, _two_values, [], 1) == ErrorCode.OK
    assert state.stack_size() == 1
    assert state.to_integer(-1) == 10


def test_pcall_error_restores_stack_and_pushes_status():
    state = LuaState()

    def failing(s):
        s.push_integer(99)
        s.throw(ErrorCode.ERRRUN)
        return 0

    state.push_cfunction(failing)
    func = state.top - 1
    oldtop = state.top
    status = state.pcall(lambda: state.call(func, 1), oldtop)
    assert status == ErrorCode.ERRRUN
    assert state.ci is state.base_ci
    assert state.ci.next is None
    assert state.top == oldtop + 1
    assert state.to_integer(-1) == ErrorCode.ERRRUN
    assert state.ncalls == 0


def test_run_protected_reports_status():
    state = LuaState()
    assert state.run_protected(lambda: None) == ErrorCode.OK

    def boom():
        state.throw(ErrorCode.ERRMEM)

    assert state.run_protected(boom) == ErrorCode.ERRMEM


def test_throw_unprotected_raises():
    state = LuaState()
    with pytest.raises(LuaError) as info:
        state.throw(ErrorCode.ERRRUN)
    assert info.value.status == ErrorCode.ERRRUN


def test_call_depth_limit():
    state = LuaState()
    state.push_cfunction(_add)
    state.ncalls = 200
    with pytest.raises(LuaError):
        state.call(state.top - 1, 0)


def test_precall_of_non_function_does_nothing():
    state = LuaState()
    state.push_integer(1)
    assert state.precall(state.top - 1, 1) is False
    assert state.stack_size() == 1
    assert state.call(state.top - 1, 1) == ErrorCode.OK
    assert state.to_integer(-1) == 1


def test_context_manager_closes():
    with LuaState() as state:
        state.push_integer(1)
        assert state.stack_size() == 1
    assert state.stack == []
    assert state.capacity == 0