import threading
from unittest.mock import MagicMock

import pytest

from navshell.commands import Command, CommandRegistry, CommandResult, Navigate, Output, OutputKind
from navshell.config import build_config
from navshell.errors import RecordIndexError
from navshell.fs import WorkingDirectory
from navshell.interface import Interpreter
from navshell.plugins.appearance.entrypoint import BUILT_IN_ARTS
from navshell.session import SessionState


# ---------------- cd ----------------

def test_cd_into_section_navigates(run, session, services):
    result = run("cd projects")

    assert session.cwd.path == "/projects"
    assert services.router.paths == ["/projects"]
    assert result.output.kind is OutputKind.NONE
    assert result.effects == (Navigate("/projects"),)


def test_cd_is_case_insensitive_and_ignores_trailing_slash(run, session):
    run("CD PROJECTS")
    assert session.cwd.path == "/projects"

    run("cd /blogs/")
    assert session.cwd.path == "/blogs"


def test_cd_dotdot_returns_to_root(run, session, services):
    run("cd gallery")
    run("cd ..")

    assert session.cwd.is_root
    assert services.router.paths == ["/gallery", "/"]


def test_cd_without_argument_at_root_is_a_no_op(run, session, services):
    run("cd")
    assert session.cwd.is_root
    assert services.router.paths == []


def test_section_shortcut_behaves_like_cd(run, session, services):
    run("cd blogs")
    run("gallery")

    assert session.cwd.path == "/gallery"
    assert services.router.paths[-1] == "/gallery"


def test_cd_nonexistent_flashes_message_in_buffer(run, session, scheduler, services):
    run("cd projects")
    result = run("cd nowhere")

    assert session.cwd.path == "/projects"
    assert result.output is None
    assert session.transient is not None
    assert session.buffer == "cd: no such directory: nowhere"
    assert services.router.paths == ["/projects"]

    scheduler.advance(1.9)
    assert session.buffer == "cd: no such directory: nowhere"
    scheduler.advance(0.2)
    assert session.transient is None
    assert session.buffer == ""


def test_cd_nested_title_waits_for_index_then_navigates(run, session, executor, services, directory):
    result = run("cd blogs/Python Tips")

    assert result.output.kind is OutputKind.LOADING
    assert session.output.kind is OutputKind.LOADING
    assert session.cwd.is_root

    executor.run_pending()

    blogs = directory.dynamic_for("blogs")
    expected_route = "/blogs/" + blogs.find("Python Tips").ident
    assert session.cwd.path == "/blogs/Python Tips"
    assert session.cwd.route == expected_route == "/blogs/p2"
    assert services.router.paths == ["/blogs/p2"]
    assert session.output is None


def test_cd_by_title_inside_dynamic_section(run, session, executor, services):
    run("cd blogs")
    executor.run_pending()
    run("cd hello world")

    assert session.cwd.path == "/blogs/Hello World"
    assert services.router.paths == ["/blogs", "/blogs/p1"]


def test_cd_dotdot_from_title_returns_to_section(run, session, executor, services):
    run("cd blogs")
    executor.run_pending()
    run("cd Hello World")
    assert session.cwd.path == "/blogs/Hello World"

    result = run("cd ..")

    assert session.cwd.path == "/blogs"
    assert result.effects == (Navigate("/blogs"),)
    assert services.router.paths == ["/blogs", "/blogs/p1", "/blogs"]


def test_cd_missing_title_after_fetch_clears_loading_and_flashes(run, session, executor):
    run("cd blogs/Missing Post")
    executor.run_pending()

    assert session.output is None
    assert session.buffer == "cd: no such directory: blogs/Missing Post"
    assert session.cwd.is_root


# ---------------- ls ----------------

def test_ls_at_root_is_deterministic(run, session, scheduler):
    first = run("ls")
    second = run("ls")

    expected = ["about-me/", "projects/", "blogs/", "contact-us/", "gallery/", "github/"]
    assert first.output.kind is OutputKind.LIST
    assert first.output.payload == expected
    assert second.output.payload == expected

    scheduler.advance(7.9)
    assert session.output is not None
    scheduler.advance(0.2)
    assert session.output is None


def test_ls_in_unloaded_dynamic_section_shows_loading_then_titles(run, session, executor):
    run("cd blogs")
    result = run("ls")

    assert result.output.kind is OutputKind.LOADING
    executor.run_pending()

    assert executor.submitted == 1
    assert session.output.kind is OutputKind.LIST
    assert session.output.payload == ["Hello World", "Python Tips", "python internals"]


def test_ls_reports_fetch_failure(make_interpreter, session, executor):
    failing = MagicMock()
    failing.fetch_titled_records.side_effect = RecordIndexError("index offline")
    interpreter = make_interpreter(index=failing)

    interpreter.execute("cd blogs", session)
    interpreter.execute("ls", session)
    executor.run_pending()

    assert session.output.kind is OutputKind.ERROR
    assert "index offline" in session.output.payload
    assert failing.fetch_titled_records.call_count == 1


def test_ls_in_static_section_is_empty(run):
    run("cd about-me")
    assert run("ls").output.payload == []


def test_stale_fetch_result_does_not_replace_newer_output(run, session, executor):
    run("cd blogs")
    run("ls")
    run("pwd")
    executor.run_pending()

    assert session.output.kind is OutputKind.TEXT
    assert session.output.payload == "/blogs"


# ---------------- history / dispatch ----------------

def test_history_lists_most_recent_first(run):
    for line in ("pwd", "ls", "date"):
        run(line)

    result = run("history")
    assert result.output.kind is OutputKind.LIST
    assert result.output.payload == ["date", "ls", "pwd"]


def test_history_shows_only_last_ten(run, session):
    for i in range(15):
        run(f"echo {i}")

    payload = run("history").output.payload
    assert len(payload) == 10
    assert payload[0] == "echo 14"
    assert payload[-1] == "echo 5"
    assert len(session.history) == 16


def test_blank_lines_are_not_recorded(run, session):
    result = run("   ")
    assert result.command is None
    assert session.history == []


def test_unknown_command_is_silent_but_recorded(run, session):
    run("pwd")
    before = session.output
    result = run("frobnicate now")

    assert result.output is None
    assert session.output is before
    assert session.history == ["pwd", "frobnicate now"]
    assert session.buffer == ""


def test_unknown_command_error_can_be_enabled(make_interpreter, session):
    interpreter = make_interpreter(UNKNOWN_COMMAND_ERROR=True)
    result = interpreter.execute("pwdd", session)

    assert result.output.kind is OutputKind.ERROR
    assert "command not found: pwdd" in result.output.payload
    assert "pwd" in result.output.payload.split("Did you mean:")[1]


def test_handler_exception_becomes_error_output(services, directory, session):
    def _boom(ctx, argument):
        raise RuntimeError("kaput")

    registry = CommandRegistry()
    registry.register(Command("boom", "explodes", "boom", _boom))
    interpreter = Interpreter(registry, directory, services, build_config())

    result = interpreter.execute("boom", session)
    assert result.output.kind is OutputKind.ERROR
    assert result.output.payload == "boom: kaput"
    assert session.state is SessionState.OUTPUT_VISIBLE


def test_late_delivery_during_execution_is_applied_after_result(services, directory, session):
    def _fast(ctx, argument):
        ctx.deliver(CommandResult(output=None, cwd=None))
        ctx.deliver(CommandResult(Output.text("done")))
        return CommandResult(Output.loading())

    registry = CommandRegistry()
    registry.register(Command("fast", "", "", _fast))
    interpreter = Interpreter(registry, directory, services, build_config())

    interpreter.execute("fast", session)
    assert session.output.payload == "done"


def test_interpreter_freezes_registry(interpreter):
    assert interpreter.registry.frozen


# ---------------- info ----------------

def test_whoami_date_echo_pwd(run, make_interpreter, session):
    assert run("whoami").output.payload == "Visitor"
    assert run("date").output.payload == "Mon Jan 15 2024 10:30:00"
    assert run("echo   Hello   World ").output.payload == "Hello   World"
    assert run("echo").output.payload == ""
    assert run("pwd").output.payload == "/"

    no_date = make_interpreter(SHOW_DATE=False)
    assert no_date.execute("date", session).output.kind is OutputKind.ERROR


def test_text_output_expires_after_five_seconds(run, session, scheduler):
    run("whoami")
    scheduler.advance(4.9)
    assert session.state is SessionState.OUTPUT_VISIBLE
    scheduler.advance(0.2)
    assert session.state is SessionState.IDLE


def test_help_lists_categories_and_single_command(run):
    overview = run("help").output
    assert overview.kind is OutputKind.HELP
    text = "\n".join(overview.payload)
    assert "navigation" in text
    assert "cd" in text
    assert "gallery" in text

    detail = run("help cd").output.payload
    assert "usage: cd blogs/<title>" in detail

    assert run("help nope").output.kind is OutputKind.ERROR


def test_clear_and_exit(run, session):
    run("whoami")
    run("clear")
    assert session.output is None

    result = run("exit")
    assert result.closed
    assert session.output is None


# ---------------- contact ----------------

def test_resume_absent_and_present(run, make_interpreter, session, services):
    assert run("resume").output.payload == "Resume not available"

    configured = make_interpreter(RESUME_URL="https://example.com/cv.pdf")
    result = configured.execute("resume", session)
    assert result.output.kind is OutputKind.SUCCESS
    assert services.opener.urls == ["https://example.com/cv.pdf"]


def test_email_copies_to_clipboard(make_interpreter, session, services):
    interpreter = make_interpreter(EMAIL="me@example.com")
    result = interpreter.execute("email", session)

    assert result.output.kind is OutputKind.SUCCESS
    assert services.clipboard.text == "me@example.com"


def test_email_clipboard_failure_shows_address(make_interpreter, session, services):
    services.clipboard = MagicMock()
    services.clipboard.write_text.return_value = False
    interpreter = make_interpreter(EMAIL="me@example.com")

    result = interpreter.execute("email", session)
    assert result.output.kind is OutputKind.TEXT
    assert "me@example.com" in result.output.payload


def test_email_and_socials_fall_back_when_unconfigured(run):
    assert run("email").output.kind is OutputKind.TEXT
    assert run("socials").output.kind is OutputKind.TEXT


def test_socials_lists_visible_links(make_interpreter, session):
    socials = (
        '[{"name": "github", "url": "https://github.com/me"},'
        ' {"name": "old", "url": "https://old.example", "isHidden": true}]'
    )
    interpreter = make_interpreter(SOCIALS=socials)

    result = interpreter.execute("socials", session)
    assert result.output.kind is OutputKind.LIST
    assert result.output.payload == ["github: https://github.com/me"]


# ---------------- appearance ----------------

def test_theme_typed_with_tab_completion(interpreter, session, services, scheduler):
    for ch in "the":
        interpreter.type_text(session, ch)
    assert session.suggestion == "me"

    assert interpreter.press_tab(session) == "theme"
    interpreter.type_text(session, " dark")
    result = interpreter.press_enter(session)

    assert services.theme.set_calls == ["dark"]
    assert result.output.kind is OutputKind.SUCCESS
    scheduler.advance(2.9)
    assert session.output is not None
    scheduler.advance(0.2)
    assert session.output is None


def test_theme_report_and_invalid_value(run, services):
    assert run("theme").output.payload == "Current theme: light"

    result = run("theme purple")
    assert result.output.kind is OutputKind.ERROR
    assert services.theme.set_calls == []

    run("theme LIGHT")
    assert services.theme.set_calls == ["light"]


def test_ascii_renders_an_art_piece(run):
    result = run("ascii")
    assert result.output.kind is OutputKind.ASCII
    assert result.output.payload in {art.art for art in BUILT_IN_ARTS}


def test_disco_runs_then_restores_theme_and_fires_effect(run, session, services, scheduler):
    run("disco")
    assert session.task is not None and session.task.active

    scheduler.advance(1.0)
    assert services.theme.preview is not None
    assert len(services.theme.previews) > 1

    scheduler.advance(2.0)
    assert services.effects.triggered == ["confetti"]
    assert services.theme.preview is None
    assert services.theme.set_calls == ["light"]
    assert session.task is None


def test_new_command_cancels_disco_without_effect(run, session, services, scheduler):
    run("disco")
    scheduler.advance(1.0)
    run("pwd")

    assert session.task is None
    assert services.theme.preview is None
    assert services.theme.set_calls == ["light"]
    scheduler.advance(5.0)
    assert services.effects.triggered == []


def test_disco_never_runs_twice(run, services, scheduler):
    run("disco")
    run("disco")
    scheduler.advance(3.5)

    assert services.effects.triggered == ["confetti"]


def test_reboot_reloads_after_delay_even_if_interrupted(run, services, scheduler):
    result = run("reboot")
    assert result.output.kind is OutputKind.WARNING
    assert result.output.payload == "Rebooting..."

    scheduler.advance(1.4)
    assert services.reloader.count == 0
    run("pwd")
    scheduler.advance(0.2)
    assert services.reloader.count == 1


# ---------------- keystrokes ----------------

def test_typing_cd_into_dynamic_parent_prefetches_titles(interpreter, session, executor):
    interpreter.set_input(session, "cd blogs/")
    assert executor.submitted == 1
    assert session.suggestion == ""

    executor.run_pending()
    assert session.suggestion == "Hello World"

    interpreter.type_text(session, "py")
    assert session.suggestion == "thon Tips"


def test_late_titles_update_suggestion_while_holding_session_lock(interpreter, session, executor, monkeypatch):
    held = []
    set_buffer = session.set_buffer

    def checking_set_buffer(text, suggestion=""):
        outcome = []

        def try_lock():
            acquired = session.lock.acquire(blocking=False)
            if acquired:
                session.lock.release()
            outcome.append(acquired)

        worker = threading.Thread(target=try_lock)
        worker.start()
        worker.join()
        held.append(not outcome[0])
        set_buffer(text, suggestion)

    interpreter.set_input(session, "cd blogs/")
    monkeypatch.setattr(session, "set_buffer", checking_set_buffer)
    executor.run_pending()

    assert held == [True]
    assert session.buffer == "cd blogs/"
    assert session.suggestion == "Hello World"


def test_only_index_commands_prefetch_inside_dynamic_section(interpreter, session, executor):
    session.change_directory(WorkingDirectory.of("blogs"))

    interpreter.set_input(session, "echo hi")
    interpreter.set_input(session, "pwd")
    assert executor.submitted == 0

    interpreter.set_input(session, "ls")
    assert executor.submitted == 1


def test_typing_over_transient_message_starts_fresh_line(interpreter, session):
    interpreter.execute("cd nowhere", session)
    assert session.transient is not None

    interpreter.type_text(session, "l")
    assert session.transient is None
    assert session.buffer == "l"


def test_enter_on_transient_message_submits_nothing(interpreter, session):
    interpreter.execute("cd nowhere", session)
    result = interpreter.press_enter(session)

    assert result.command is None
    assert session.history == ["cd nowhere"]


@pytest.mark.parametrize("typed, expected", [("pr", "ojects"), ("projects", ""), ("cd", "")])
def test_suggestions_through_interpreter(interpreter, session, typed, expected):
    interpreter.set_input(session, typed)
    assert session.suggestion == expected
