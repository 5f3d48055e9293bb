import pytest

from minilisp.errors import FrameUnderflowError, MiniLispUnboundSymbol, StackUnderflowError
from minilisp.types.atom import Ident, Nil, Number, Quote
from minilisp.types.environment import Environment
from minilisp.types.function import Lib
from minilisp.types.sexpr import AtomExpr


def test_lookup_unbound():
    env = Environment()
    with pytest.raises(MiniLispUnboundSymbol) as excinfo:
        env.lookup_var("x")
    assert excinfo.value.name == "x"
    assert str(excinfo.value) == "name 'x' was not defined"


def test_inner_frame_shadows_outer():
    env = Environment()
    env.bind_var("x", Number(1))
    env.push_frame()
    env.bind_var("x", Number(2))
    assert env.lookup_var("x") == Number(2)
    env.pop_frame()
    assert env.lookup_var("x") == Number(1)


def test_outer_bindings_visible_from_inner_frame():
    env = Environment()
    env.bind_var("y", Number(5))
    with env.frame():
        assert env.lookup_var("y") == Number(5)
        assert env.is_bound("y")


def test_frame_context_pops_on_error():
    env = Environment()
    with pytest.raises(ValueError):
        with env.frame():
            env.bind_var("tmp", Nil)
            raise ValueError("boom")
    assert env.depth == 1
    assert not env.is_bound("tmp")


def test_global_frame_cannot_be_popped():
    env = Environment()
    with pytest.raises(FrameUnderflowError):
        env.pop_frame()


def test_unwind_frames_keeps_global():
    env = Environment()
    env.push_frame()
    env.push_frame()
    env.unwind_frames(0)
    assert env.depth == 1


def test_update_binds_globally():
    env = Environment()
    env.push_frame()
    env.update({"a": Number(1)})
    env.pop_frame()
    assert env.lookup_var("a") == Number(1)


def test_stack_is_lifo():
    env = Environment()
    env.push_stack(Number(1))
    env.push_stack(Number(2))
    assert env.stack_depth == 2
    assert env.pop_stack() == Number(2)
    assert env.pop_stack() == Number(1)
    with pytest.raises(StackUnderflowError):
        env.pop_stack()


def test_pop_args_keeps_push_order():
    env = Environment()
    for i in range(4):
        env.push_stack(Number(i))
    assert env.pop_args(3) == [Number(1), Number(2), Number(3)]
    assert env.pop_args(0) == []
    assert env.stack_depth == 1


def test_pop_args_underflow_leaves_stack_untouched():
    env = Environment()
    env.push_stack(Number(1))
    with pytest.raises(StackUnderflowError):
        env.pop_args(2)
    assert env.stack_depth == 1


def test_truncate_stack():
    env = Environment()
    for i in range(3):
        env.push_stack(Number(i))
    env.truncate_stack(1)
    assert env.stack == [Number(0)]


def test_register_external_fun():
    env = Environment()
    routine = lambda e, args: Nil
    fun = env.register_external_fun("noop", 1, routine, lazy=[0])
    assert isinstance(fun, Lib)
    assert env.lookup_var("noop") is fun
    assert fun.arity == 1
    assert fun.is_lazy(0)
    assert not fun.is_lazy(1)


def test_true_value():
    assert Environment().true_value == Quote(AtomExpr(Ident("t")))
    assert Environment(true_name="T").true_value == Quote(AtomExpr(Ident("T")))


def test_str_lists_frames():
    env = Environment()
    env.bind_var("a", Number(1))
    env.push_frame()
    env.bind_var("b", Number(2))
    assert str(env) == "{a: 1} -> {b: 2} stack=0"
