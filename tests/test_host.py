import pytest

from plugin_runtime.host import Host
from plugin_runtime.settings import Settings

from conftest import FakeClock, console_text, feed


def test_unknown_command_reported_by_host(host):
    assert host.process_input("/nope a b") is True
    assert console_text(host) == ["Unknown command: /nope"]


def test_plain_text_in_console_is_not_a_command(host):
    host.process_input("hello")
    host.process_input("   ")
    assert console_text(host) == ["Unknown command: hello"]


def test_quit_stops_host(host):
    assert host.process_input("/quit") is False
    assert host.running is False


def test_command_can_request_shutdown(host):
    host.plugin_api("p").register_command("/bye", 0, 0, "/bye", "", "", lambda args: False)
    assert host.process_input("/bye") is False
    assert host.running is False


def test_command_failure_shown_and_host_keeps_running(host):
    def boom(args):
        raise KeyError("missing")

    host.plugin_api("p").register_command("/boom", 0, -1, "/boom", "", "", boom)
    assert host.process_input("/boom x y") is True
    assert console_text(host)[-1].startswith("Command /boom failed:")
    assert host.windows.console.lines[-1].attrs.colour == "red"


def test_quoted_arguments_count_as_one(host):
    calls = []
    host.plugin_api("p").register_command("/say", 1, 1, "/say <text>", "", "", lambda args: calls.append(args))
    host.process_input('/say "hello world"')
    assert calls == [["hello world"]]


def test_help_lists_plugin_commands(host):
    api = host.plugin_api("p")
    api.register_command("/zeta", 0, 0, "/zeta", "Last one", "", lambda args: None)
    api.register_command("/alpha", 0, 0, "/alpha", "First one", "", lambda args: None)

    host.process_input("/help")
    text = console_text(host)
    assert text[0] == "Plugin commands"
    rows = [line for line in text if line.startswith("/")]
    assert rows[0].startswith("/alpha") and "First one" in rows[0]
    assert rows[1].startswith("/zeta") and "Last one" in rows[1]


def test_help_for_single_command(host):
    host.plugin_api("p").register_command(
        "/echo", 1, 1, "/echo <text>", "Echo text", "Writes the text back.", lambda args: None
    )
    host.process_input("/help echo")
    text = console_text(host)
    assert "Usage: /echo <text>" in text
    assert "Writes the text back." in text

    host.process_input("/help missing")
    assert console_text(host)[-1] == "No such command: /missing"


def test_help_without_commands(host):
    host.process_input("/help")
    assert console_text(host) == ["No plugin commands registered."]


def test_help_screen_from_ui_file(tmp_path, clock):
    ui_yaml = tmp_path / "ui.yml"
    ui_yaml.write_text(
        """
snippets:
  footer:
    - paragraph: "See the manual."

screens:
  help:
    blocks:
      - header: "Extensions"
      - table: command_rows
      - include: footer
""",
        encoding="utf-8",
    )
    host = Host(Settings(_env_file=None, UI_PATH=str(ui_yaml)), clock=clock)
    host.plugin_api("p").register_command("/x", 0, 0, "/x", "Does x", "", lambda args: None)
    host.process_input("/help")
    text = console_text(host)
    assert text[0] == "Extensions"
    assert "/x  Does x" in text
    assert text[-1] == "See the manual."


def test_unload_plugin_releases_everything(host, clock):
    api = host.plugin_api("p")
    fired = []
    api.register_command("/x", 0, 0, "/x", "", "", lambda args: None)
    api.register_timed(lambda: fired.append(1), 1)
    api.register_autocomplete("/x", ["a"])
    api.win_create("pane")

    report = host.unload_plugin("p")

    assert report.commands == ["/x"] and report.timed == 1
    assert host.windows.get_by_tag("pane") is None
    assert host.complete("/x a") is None
    clock.advance(5)
    host.tick()
    assert fired == []
    host.process_input("/x")
    assert console_text(host)[-1] == "Unknown command: /x"
    assert host.plugins() == []


def test_shutdown_clears_registry(host):
    api = host.plugin_api("p")
    api.register_command("/x", 0, 0, "/x", "", "", lambda args: None)
    api.win_create("pane")
    host.shutdown()
    assert host.registry.commands() == []
    assert host.registry.window_tags() == []
    assert host.windows.get_by_tag("pane") is None
    assert host.running is False


def test_tick_registering_new_timer_from_callback(host, clock):
    api = host.plugin_api("p")
    spawned = []

    def spawn():
        if not spawned:
            api.register_timed(lambda: spawned.append("child"), 1)
            spawned.append("parent")

    api.register_timed(spawn, 1)
    clock.advance(1)
    host.tick()
    assert spawned == ["parent"]
    clock.advance(1)
    host.tick()
    assert spawned == ["parent", "child"]


@pytest.mark.asyncio
async def test_run_consumes_lines_until_quit():
    clock = FakeClock()
    host = Host(Settings(_env_file=None, TICK_INTERVAL_SEC=0.01), clock=clock)
    calls = []
    host.plugin_api("p").register_command("/note", 1, -1, "/note <text>", "", "", lambda args: calls.append(args))

    await host.run(feed(["/note a", "/note b c", "/quit", "/note never"]))

    assert calls == [["a"], ["b", "c"]]
    assert host.running is False


@pytest.mark.asyncio
async def test_run_ticks_timers_while_waiting_for_input():
    import asyncio

    clock = FakeClock()
    host = Host(Settings(_env_file=None, TICK_INTERVAL_SEC=0.01), clock=clock)
    fired = []
    host.plugin_api("p").register_timed(lambda: fired.append(clock()), 1)

    async def slow_lines():
        clock.advance(1)
        await asyncio.sleep(0.1)
        yield "/quit"

    await host.run(slow_lines())
    assert fired == [1]


@pytest.mark.asyncio
async def test_run_stops_after_window_handler_sends_quit():
    clock = FakeClock()
    host = Host(Settings(_env_file=None, TICK_INTERVAL_SEC=0.01), clock=clock)
    api = host.plugin_api("p")
    calls = []
    api.register_command("/note", 1, -1, "/note <text>", "", "", lambda args: calls.append(args))
    api.win_create("pane", lambda tag, line: api.send_line("/quit"))
    api.win_focus("pane")

    await host.run(feed(["bye", "/note never"]))

    assert host.running is False
    assert calls == []


@pytest.mark.asyncio
async def test_run_stops_when_timed_task_sends_quit():
    import asyncio

    clock = FakeClock()
    host = Host(Settings(_env_file=None, TICK_INTERVAL_SEC=0.01), clock=clock)
    api = host.plugin_api("p")
    api.register_timed(lambda: api.send_line("/quit"), 1)
    clock.advance(1)
    never = asyncio.Event()

    async def idle_lines():
        await never.wait()
        yield "/help"

    await asyncio.wait_for(host.run(idle_lines()), timeout=2)
    assert host.running is False


@pytest.mark.asyncio
async def test_run_logs_failed_ticker_and_returns(caplog, monkeypatch):
    import asyncio

    host = Host(Settings(_env_file=None, TICK_INTERVAL_SEC=0.01), clock=FakeClock())

    def broken_tick(now=None):
        raise RuntimeError("clock gone")

    monkeypatch.setattr(host, "tick", broken_tick)

    async def slow_lines():
        await asyncio.sleep(0.1)
        yield "/quit"

    with caplog.at_level("ERROR"):
        await host.run(slow_lines())
    assert host.running is False
    assert "Background task failed" in caplog.text
