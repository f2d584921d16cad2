"""Tests for the capture session."""

import asyncio

from vozruta.capture.base import CaptureError
from vozruta.capture.session import CaptureSession, CaptureState


class FakeBackend:
    """Backend replaying scripted results."""

    def __init__(self, results=(), partials=(), available=True, permitted=True, stop_error=None):
        self.results = list(results)
        self.partials = list(partials)
        self.available = available
        self.permitted = permitted
        self.stop_error = stop_error
        self.started = 0
        self.stopped = 0
        self.locales = []

    def is_available(self):
        return self.available

    def request_permission(self):
        return self.permitted

    async def start(self, locale, on_partial):
        self.started += 1
        self.locales.append(locale)
        for partial in self.partials:
            on_partial(partial)
        result = self.results.pop(0) if self.results else ""
        if isinstance(result, Exception):
            raise result
        return result

    async def stop(self):
        self.stopped += 1
        if self.stop_error is not None:
            raise self.stop_error


class HangingBackend(FakeBackend):
    """Backend that listens until it is cancelled."""

    async def start(self, locale, on_partial):
        self.started += 1
        for partial in self.partials:
            on_partial(partial)
        await asyncio.Event().wait()


def test_final_transcript():
    backend = FakeBackend(results=["Maria viaje a Saenz 30000"])
    session = CaptureSession(backend, locale="es-AR")

    assert asyncio.run(session.listen()) == "Maria viaje a Saenz 30000"
    assert backend.locales == ["es-AR"]
    assert backend.stopped == 1
    assert session.state.get() == CaptureState.IDLE


def test_empty_final_falls_back_to_partial():
    backend = FakeBackend(results=[""], partials=["Maria", "Maria viaje"])
    session = CaptureSession(backend)

    assert asyncio.run(session.listen()) == "Maria viaje"
    assert backend.started == 1


def test_empty_capture_is_retried_once():
    backend = FakeBackend(results=["", "Juan a Retiro"])
    session = CaptureSession(backend)

    assert asyncio.run(session.listen()) == "Juan a Retiro"
    assert backend.started == 2


def test_gives_up_after_retry():
    backend = FakeBackend(results=["", "", "too late"])
    session = CaptureSession(backend)

    assert asyncio.run(session.listen()) == ""
    assert backend.started == 2


def test_unavailable_or_denied():
    assert asyncio.run(CaptureSession(FakeBackend(available=False)).listen()) == ""

    denied = FakeBackend(results=["hola"], permitted=False)
    assert asyncio.run(CaptureSession(denied).listen()) == ""
    assert denied.started == 0


def test_backend_error_ends_with_partial():
    backend = FakeBackend(results=[CaptureError("mic lost")], partials=["Ana a Pil"])
    session = CaptureSession(backend)

    assert asyncio.run(session.listen()) == "Ana a Pil"
    assert backend.stopped == 1


def test_release_errors_are_not_raised():
    backend = FakeBackend(results=["hola"], stop_error=RuntimeError("busy"))
    session = CaptureSession(backend)

    assert asyncio.run(session.listen()) == "hola"
    assert session.state.get() == CaptureState.IDLE


def test_stop_resolves_with_partial():
    backend = HangingBackend(partials=["Pedro a Moreno"])
    session = CaptureSession(backend)
    states = []
    session.state.subscribe(states.append)

    async def scenario():
        task = asyncio.create_task(session.listen())
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert session.is_listening
        await session.stop()
        return await task

    assert asyncio.run(scenario()) == "Pedro a Moreno"
    assert backend.stopped == 1
    assert states == [CaptureState.LISTENING, CaptureState.IDLE]


def test_stop_with_value():
    backend = HangingBackend(partials=["Ped"])
    session = CaptureSession(backend)

    async def scenario():
        task = asyncio.create_task(session.listen())
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        await session.stop("Pedro a Moreno 2000")
        return await task

    assert asyncio.run(scenario()) == "Pedro a Moreno 2000"


def test_stop_when_idle_is_harmless():
    backend = FakeBackend()
    session = CaptureSession(backend)

    asyncio.run(session.stop())

    assert backend.stopped == 0
    assert session.state.get() == CaptureState.IDLE


def test_prompt_backend_reads_typed_sentence(monkeypatch):
    import click
    from vozruta.capture.prompt import PromptCaptureBackend

    monkeypatch.setattr(click, "prompt", lambda *args, **kwargs: "Ana a Pilar 4000")
    session = CaptureSession(PromptCaptureBackend())

    assert asyncio.run(session.listen()) == "Ana a Pilar 4000"


def test_prompt_backend_closed_input(monkeypatch):
    import click
    from vozruta.capture.prompt import PromptCaptureBackend

    def closed(*args, **kwargs):
        raise click.Abort()

    monkeypatch.setattr(click, "prompt", closed)
    session = CaptureSession(PromptCaptureBackend())

    assert asyncio.run(session.listen()) == ""


class RestartBackend(FakeBackend):
    """First capture hangs after a partial result, later ones answer at once."""

    def __init__(self, session_state=None):
        super().__init__()
        self.session_state = session_state
        self.stopped_before_start = []
        self.state_at_start = []

    async def start(self, locale, on_partial):
        self.started += 1
        self.stopped_before_start.append(self.stopped)
        if self.session_state is not None:
            self.state_at_start.append(self.session_state.get())
        if self.started == 1:
            on_partial("Pedro a Mor")
            await asyncio.Event().wait()
        return "Juan a Retiro 3000"


def test_second_listen_stops_the_first():
    backend = RestartBackend()
    session = CaptureSession(backend)
    backend.session_state = session.state
    states = []
    session.state.subscribe(states.append)

    async def scenario():
        first = asyncio.create_task(session.listen())
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        second = asyncio.create_task(session.listen())
        return await asyncio.gather(first, second, return_exceptions=True)

    first_result, second_result = asyncio.run(scenario())

    assert first_result == "Pedro a Mor"
    assert second_result == "Juan a Retiro 3000"
    # The first capture was released before the second one started
    assert backend.stopped_before_start == [0, 1]
    assert backend.state_at_start == [CaptureState.LISTENING, CaptureState.LISTENING]
    assert backend.stopped == 2
    assert states == [
        CaptureState.LISTENING,
        CaptureState.IDLE,
        CaptureState.LISTENING,
        CaptureState.IDLE,
    ]
    assert session.state.get() == CaptureState.IDLE
