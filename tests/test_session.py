from unittest.mock import MagicMock

from navshell.commands import Output, OutputKind, TransientBufferMessage
from navshell.fs import WorkingDirectory
from navshell.session import Session, SessionState


def test_initial_state(session):
    assert session.state is SessionState.IDLE
    assert session.cwd.is_root
    assert session.buffer == ""
    assert session.history == []


def test_state_transitions(session, scheduler):
    session.set_buffer("pw", "d")
    assert session.state is SessionState.AWAITING_INPUT

    token = session.begin_execution()
    assert session.state is SessionState.EXECUTING
    assert session.is_current(token)
    session.end_execution()

    session.clear_buffer()
    session.show(Output.text("hi"))
    assert session.state is SessionState.OUTPUT_VISIBLE
    scheduler.advance(5.0)
    assert session.state is SessionState.IDLE


def test_replacing_output_cancels_previous_timer(session, scheduler):
    session.show(Output.text("first"))
    scheduler.advance(4.0)
    session.show(Output.text("second"))
    scheduler.advance(4.0)

    assert session.output.payload == "second"
    scheduler.advance(1.0)
    assert session.output is None


def test_loading_output_never_expires(session, scheduler):
    session.show(Output.loading())
    scheduler.advance(600)
    assert session.output.kind is OutputKind.LOADING


def test_explicit_timeout_and_custom_defaults(scheduler):
    session = Session.create(scheduler, timeouts={OutputKind.TEXT: 1.0})
    session.show(Output.text("quick"))
    scheduler.advance(1.0)
    assert session.output is None

    session.show(Output.listing(["a"], timeout=0.5))
    scheduler.advance(0.5)
    assert session.output is None


def test_show_none_clears_panel(session, scheduler):
    session.show(Output.text("hi"))
    session.show(Output.none())
    assert session.output is None
    assert scheduler.live() == []


def test_dismiss_cancels_timer(session, scheduler):
    session.show(Output.help(["a", "b"]))
    session.dismiss()
    assert session.output is None
    assert scheduler.live() == []


def test_flash_buffer_resets_after_duration(session, scheduler):
    session.flash_buffer(TransientBufferMessage("cd: no such directory: x", 2.0))
    assert session.buffer == "cd: no such directory: x"
    assert session.state is SessionState.IDLE

    scheduler.advance(2.0)
    assert session.transient is None
    assert session.buffer == ""


def test_typing_ends_transient_early(session, scheduler):
    message = TransientBufferMessage("oops", 2.0)
    session.flash_buffer(message)
    session.set_buffer("l")

    assert session.transient is None
    assert session.buffer == "l"
    scheduler.advance(2.0)
    assert session.buffer == "l"


def test_recent_history_order_and_skip(session):
    for line in ("a", "b", "c", "history"):
        session.record(line)

    assert session.recent_history(10, skip_last=1) == ["c", "b", "a"]
    assert session.recent_history(2) == ["history", "c"]
    assert session.recent_history(0) == []


def test_stale_token(session):
    first = session.begin_execution()
    session.end_execution()
    second = session.begin_execution()
    session.end_execution()

    assert not session.is_current(first)
    assert session.is_current(second)


def test_change_directory(session):
    session.change_directory(WorkingDirectory.of("blogs"))
    assert session.cwd.path == "/blogs"


def test_start_task_cancels_previous(session):
    first = MagicMock(active=True)
    second = MagicMock(active=True)
    session.start_task(first)
    session.start_task(second)

    first.cancel.assert_called_once_with()
    assert session.task is second

    session.release_task(first)
    assert session.task is second
    session.release_task(second)
    assert session.task is None


def test_listeners_are_notified_and_failures_contained(session):
    seen = []
    session.subscribe(lambda s: seen.append(s.buffer))
    session.subscribe(MagicMock(side_effect=RuntimeError("listener broke")))

    session.set_buffer("ls")
    assert seen == ["ls"]


def test_dispose_cancels_everything(scheduler):
    session = Session.create(scheduler)
    task = MagicMock(active=True)
    session.start_task(task)
    session.show(Output.text("bye"))
    session.flash_buffer(TransientBufferMessage("x"))
    token = session.begin_execution()

    session.dispose()

    assert scheduler.live() == []
    task.cancel.assert_called_once_with()
    assert session.output is None
    assert not session.is_current(token)
    session.show(Output.text("ignored"))
    assert session.output is None
