from minilua import auxlib
from minilua.cli import add_op, lua_call_example, main


def test_add_op_pushes_sum():
    state = auxlib.new_state()
    auxlib.push_integer(state, 5)
    auxlib.push_integer(state, 3)
    assert add_op(state) == 1
    assert auxlib.stack_size(state) == 3
    assert auxlib.to_integer(state, -1) == 5 + 3


def test_lua_call_example_output(capsys):
    result = lua_call_example()
    out = capsys.readouterr().out
    assert result == 8
    assert out == "result is 8\nfinal stack size 0\n"


def test_main_returns_zero(capsys):
    assert main() == 0
    assert "final stack size 0" in capsys.readouterr().out


def test_main_accepts_argv(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out.startswith("result is ")