import pytest

from plugin_runtime.core.callbacks import CallbackHandle, python_command_trampoline
from plugin_runtime.core.dispatcher import Dispatcher
from plugin_runtime.core.registry import CommandSpec


def _register(registry, name, min_args, max_args, fn):
    spec = CommandSpec(
        name=name,
        min_args=min_args,
        max_args=max_args,
        usage=f"{name} usage",
        short_help="",
        long_help="",
        callback=CallbackHandle(fn, trampoline=python_command_trampoline, plugin="p1"),
        plugin="p1",
    )
    return registry.register_command(spec)


def test_echo_scenario(registry):
    calls = []
    _register(registry, "echo", 1, 1, lambda args: calls.append(args))
    dispatcher = Dispatcher(registry)

    res = dispatcher.dispatch("echo", [])
    assert res.found and not res.invoked
    assert res.usage == "echo usage"
    assert calls == []

    res = dispatcher.dispatch("echo", ["hi"])
    assert res.invoked and res.usage is None
    assert calls == [["hi"]]


@pytest.mark.parametrize(
    "min_args,max_args,count,ok",
    [
        (0, 0, 0, True),
        (0, 0, 1, False),
        (1, 3, 0, False),
        (1, 3, 1, True),
        (1, 3, 3, True),
        (1, 3, 4, False),
        (2, -1, 1, False),
        (2, -1, 2, True),
        (2, -1, 50, True),
    ],
)
def test_arity_gate(registry, min_args, max_args, count, ok):
    calls = []
    _register(registry, "/cmd", min_args, max_args, lambda args: calls.append(list(args)))
    argv = [f"a{i}" for i in range(count)]

    res = Dispatcher(registry).dispatch("/cmd", argv)

    if ok:
        assert res.invoked
        assert calls == [argv]
    else:
        assert not res.invoked
        assert res.usage == "/cmd usage"
        assert calls == []


def test_unknown_command_left_to_caller(registry):
    res = Dispatcher(registry).dispatch("/nope", ["x"])
    assert not res.found and not res.invoked
    assert res.usage is None


def test_continue_signal_passed_through(registry):
    _register(registry, "/stop", 0, 0, lambda args: False)
    _register(registry, "/go", 0, 0, lambda args: None)
    dispatcher = Dispatcher(registry)

    assert dispatcher.dispatch("/stop", []).keep_running is False
    assert dispatcher.dispatch("/go", []).keep_running is True


def test_foreign_trampoline_result_unmodified(registry):
    sentinel = object()

    class Adapter:
        plugin = "lua"

        def invoke(self, *args):
            return sentinel

    registry.register_command(CommandSpec("/lua", 0, -1, "", "", "", Adapter(), "lua"))
    assert Dispatcher(registry).dispatch("/lua", ["x"]).keep_running is sentinel


def test_callback_error_isolated(registry, caplog):
    def boom(args):
        raise RuntimeError("bad plugin")

    _register(registry, "/boom", 0, 0, boom)
    res = Dispatcher(registry).dispatch("/boom", [])

    assert res.invoked
    assert res.error == "bad plugin"
    assert res.keep_running is True
    assert any("/boom" in r.getMessage() for r in caplog.records if r.levelname == "ERROR")


def test_removed_command_not_invoked(registry):
    calls = []
    _register(registry, "/gone", 0, 0, lambda args: calls.append(args))
    registry.remove_command("/gone")
    res = Dispatcher(registry).dispatch("/gone", [])
    assert not res.found
    assert calls == []
