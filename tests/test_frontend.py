import logging
from logging.handlers import RotatingFileHandler
from unittest.mock import MagicMock

from navshell.boot import boot_sequence
from navshell.commands import Output
from navshell.config import build_config
from navshell.fs import IndexState
from navshell.interface.cli import BaseCLI, prompt_parts, render_output
from navshell.ui import ColorizingStreamHandler, format_columns, init_logger, paint, strip_ansi


def test_plain_cli_runs_until_exit(interpreter, session, monkeypatch, capsys):
    lines = iter(["pwd", "cd nowhere", "cd projects", "pwd", "exit", "whoami"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

    with BaseCLI(interpreter, session, lambda: {}) as cli:
        cli.run()

    out = capsys.readouterr().out.splitlines()
    assert out == ["/", "cd: no such directory: nowhere", "/projects"]
    assert session.history == ["pwd", "cd nowhere", "cd projects", "pwd", "exit"]


def test_plain_cli_stops_on_eof(interpreter, session, monkeypatch):
    def _eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", _eof)
    BaseCLI(interpreter, session, lambda: {}).run()
    assert session.history == []


def test_prompt_parts_follow_display_config(interpreter, make_interpreter, session):
    text = "".join(part for _, part in prompt_parts(session, interpreter))
    assert text == "➜ ~/ git:(main) "

    plain = make_interpreter(SHOW_GIT_BRANCH=False, PROMPT_SYMBOL="$")
    assert "".join(part for _, part in prompt_parts(session, plain)) == "$ ~/ "


def test_render_output_colours_by_kind():
    palette = {"error": "#FF0000", "text": "#FFFFFF"}
    lines = render_output(Output.error("bad"), palette)
    assert lines[0] != "bad"
    assert strip_ansi(lines[0]) == "bad"
    assert render_output(None, palette) == []
    assert render_output(Output.none(), palette) == []


def test_paint_leaves_unknown_roles_plain():
    assert paint("x", {}, "accent") == "x"


def test_format_columns_aligns_without_trailing_spaces():
    assert format_columns([("cd", "Change directory"), ("history", "Recent")], indent=2) == [
        "  cd       Change directory",
        "  history  Recent",
    ]
    assert format_columns([]) == []


def test_init_logger_does_not_duplicate_handlers(tmp_path):
    logfile = tmp_path / "logs" / "test.log"
    logger = init_logger("navshell.test-logger", level="DEBUG", logfile=logfile)
    init_logger("navshell.test-logger", level=logging.INFO, logfile=logfile)

    assert sum(isinstance(h, ColorizingStreamHandler) for h in logger.handlers) == 1
    assert sum(isinstance(h, RotatingFileHandler) for h in logger.handlers) == 1
    assert logger.level == logging.INFO
    assert logfile.parent.is_dir()

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_boot_sequence_wires_interpreter(capsys):
    state = boot_sequence(build_config({"SITE_URL": ""}))
    try:
        assert state.loaded_count == len(state.interpreter.registry)
        assert state.interpreter.registry.frozen
        assert "projects" in state.interpreter.registry
        result = state.interpreter.execute("whoami", state.session)
        assert result.output.payload == "Visitor"
    finally:
        state.shutdown()
        for handler in list(state.logger.handlers):
            state.logger.removeHandler(handler)
        state.logger.propagate = True

    out = capsys.readouterr().out
    assert "[  OK  ] Boot complete" in out


def test_boot_leaves_record_index_unfetched(monkeypatch):
    index = MagicMock()
    index.fetch_titled_records.return_value = []
    monkeypatch.setattr("navshell.boot.boot._record_index", lambda config: index)
    state = boot_sequence(build_config({"SITE_URL": "https://example.com"}), quiet=True)
    try:
        blogs = state.interpreter.directory.dynamic_for("blogs")
        assert blogs.state is IndexState.NOT_LOADED
        index.fetch_titled_records.assert_not_called()
    finally:
        state.shutdown()
        for handler in list(state.logger.handlers):
            state.logger.removeHandler(handler)
        state.logger.propagate = True
