"""
Pytest configuration and shared fixtures.

Time and background work are driven by hand: ManualScheduler replaces the
threading timers and DeferredExecutor holds index fetches until
`run_pending()` is called.
"""

import random
from concurrent.futures import Executor, Future
from datetime import datetime

import pytest

from navshell.commands import REGISTRY
from navshell.config import build_config
from navshell.fs import DirectoryModel, DynamicDirectory
from navshell.interface import Interpreter, Services, build_registry, load_commands
from navshell.services import MemoryClipboard, StaticRecordIndex, TitledRecord
from navshell.session import Session

RECORDS = (
    TitledRecord("p1", "Hello World"),
    TitledRecord("p2", "Python Tips"),
    TitledRecord("p3", "python internals"),
)

FIXED_NOW = datetime(2024, 1, 15, 10, 30, 0)


class _ManualHandle:
    def __init__(self, due, seq, callback):
        self.due = due
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose clock only moves when a test calls advance()."""

    def __init__(self):
        self.now = 0.0
        self._seq = 0
        self._pending = []

    def call_later(self, delay, callback):
        self._seq += 1
        handle = _ManualHandle(self.now + delay, self._seq, callback)
        self._pending.append(handle)
        return handle

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [h for h in self._pending if not h.cancelled and h.due <= target + 1e-9]
            if not due:
                break
            handle = min(due, key=lambda h: (h.due, h.seq))
            self._pending.remove(handle)
            self.now = max(self.now, handle.due)
            handle.callback()
        self.now = target

    def live(self):
        return [h for h in self._pending if not h.cancelled]

    def shutdown(self):
        for handle in self._pending:
            handle.cancel()


class DeferredExecutor(Executor):
    """Executor that queues work until run_pending()."""

    def __init__(self):
        self.pending = []
        self.submitted = 0

    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        self.pending.append((future, fn, args, kwargs))
        self.submitted += 1
        return future

    def run_pending(self):
        while self.pending:
            future, fn, args, kwargs = self.pending.pop(0)
            if not future.set_running_or_notify_cancel():
                continue
            try:
                result = fn(*args, **kwargs)
            except Exception as exc:
                future.set_exception(exc)
            else:
                future.set_result(result)


class RecordingRouter:
    def __init__(self):
        self.paths = []

    def navigate(self, path):
        self.paths.append(path)


class FakeTheme:
    def __init__(self, variant="light"):
        self.variant = variant
        self.set_calls = []
        self.previews = []
        self.preview = None

    def get_current_variant(self):
        return self.variant

    def set_variant(self, variant):
        self.set_calls.append(variant)
        self.variant = variant
        self.preview = None

    def preview_variant(self, colors):
        self.previews.append(colors)
        self.preview = colors


class RecordingEffects:
    def __init__(self):
        self.triggered = []

    def trigger(self, name):
        self.triggered.append(name)


class RecordingReloader:
    def __init__(self):
        self.count = 0

    def reload_application(self):
        self.count += 1


class RecordingOpener:
    def __init__(self):
        self.urls = []

    def open(self, url):
        self.urls.append(url)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def executor():
    return DeferredExecutor()


@pytest.fixture
def record_index():
    return StaticRecordIndex(RECORDS)


@pytest.fixture
def services():
    return Services(
        router=RecordingRouter(),
        clipboard=MemoryClipboard(),
        theme=FakeTheme(),
        effects=RecordingEffects(),
        reloader=RecordingReloader(),
        opener=RecordingOpener(),
        disco_palettes=({"text": "#FF00FF"}, {"text": "#00FFFF"}),
    )


@pytest.fixture(scope="session")
def plugin_registry():
    load_commands()
    return REGISTRY


@pytest.fixture
def make_directory(executor):
    def _make(config, index):
        dynamic = [DynamicDirectory(config.dynamic_section, index, executor)] if config.dynamic_section else []
        return DirectoryModel(config.sections, dynamic)
    return _make


@pytest.fixture
def make_interpreter(plugin_registry, services, record_index, make_directory):
    """Build an interpreter; keyword arguments are configuration overrides."""

    def _make(index=None, **overrides):
        config = build_config(overrides)
        directory = make_directory(config, index or record_index)
        return Interpreter(
            build_registry(config.sections, plugin_registry),
            directory,
            services,
            config,
            clock=lambda: FIXED_NOW,
            rng=random.Random(7),
        )

    return _make


@pytest.fixture
def interpreter(make_interpreter):
    return make_interpreter()


@pytest.fixture
def directory(interpreter):
    return interpreter.directory


@pytest.fixture
def session(scheduler):
    session = Session.create(scheduler)
    yield session
    session.dispose()


@pytest.fixture
def run(interpreter, session):
    def _run(line):
        return interpreter.execute(line, session)
    return _run
