from typing import Any

import pytest

from typeweave import Action, Closure, augment
from typeweave.runtime import ClosureBackedAction, as_action


class Target:
    def __init__(self):
        self.calls = []


def test_action_of_and_call():
    target = Target()
    action = Action.of(lambda t: t.calls.append("action"))
    action(target)
    assert target.calls == ["action"]


def test_closure_with_parameter_receives_target():
    target = Target()
    closure = Closure(lambda t: t.calls.append("closure"))
    ClosureBackedAction(closure).execute(target)
    assert target.calls == ["closure"]


def test_closure_without_parameter_uses_delegate():
    target = Target()
    closure = Closure(lambda: closure.delegate.calls.append("delegate"))

    rehydrated = closure.rehydrate(target)
    assert rehydrated.delegate is target
    assert closure.delegate is None

    ClosureBackedAction(closure).execute(target)
    assert target.calls == ["delegate"]
    assert closure.delegate is None


def test_nested_closures_see_their_own_delegate():
    outer_target, inner_target = Target(), Target()
    inner = Closure(lambda: inner.delegate.calls.append("inner"))

    def outer_body():
        ClosureBackedAction(inner).execute(inner_target)
        outer.delegate.calls.append("outer")

    outer = Closure(outer_body)
    ClosureBackedAction(outer).execute(outer_target)
    assert outer_target.calls == ["outer"]
    assert inner_target.calls == ["inner"]


def test_closure_without_parameter_configures_augmented_type():
    class Recorder:
        def __init__(self):
            self.log = []

        def conf(self, action: Action[Any]) -> None:
            action.execute(self)

    recorder = augment(Recorder).constructors[0].instantiate(None, None)
    block = Closure(lambda: block.delegate.log.append("z"))
    recorder.conf(block)
    assert recorder.log == ["z"]


def test_closure_arity():
    assert Closure(lambda: None).maximum_number_of_parameters == 0
    assert Closure(lambda a: None).maximum_number_of_parameters == 1
    assert Closure(lambda *a: None).maximum_number_of_parameters is None
    with pytest.raises(TypeError, match="requires a callable"):
        Closure("not callable")


def test_closure_backed_action_equality():
    closure = Closure(lambda t: None)
    assert ClosureBackedAction(closure) == ClosureBackedAction(closure)
    assert ClosureBackedAction(closure) != ClosureBackedAction(Closure(lambda t: None))
    assert len({ClosureBackedAction(closure), ClosureBackedAction(closure)}) == 1


def test_as_action():
    action = Action.of(lambda t: None)
    assert as_action(action) is action
    assert isinstance(as_action(Closure(lambda: None)), ClosureBackedAction)
    assert isinstance(as_action(lambda t: None), Action)
    with pytest.raises(TypeError, match="configuration action"):
        as_action(42)
