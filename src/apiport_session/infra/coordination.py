from __future__ import annotations

import asyncio
import threading
from typing import Awaitable, Callable, TypeVar

from dependency_injector.resources import Resource

from ..core.domain.exceptions import ContextClosedError


T = TypeVar("T")


class EventLoopContext:
    """Coordination context backed by a single asyncio event loop.

    Either bound to an existing loop, or started on a dedicated daemon thread
    with ``start()``. Work submitted from any other loop is marshalled onto
    it; work submitted from the loop itself runs inline.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None, *, name: str = "apiport-ui") -> None:
        self._loop = loop
        self._name = name
        self._thread: threading.Thread | None = None
        self._stopped = False

    @classmethod
    def current(cls) -> "EventLoopContext":
        """Bind to the running loop. Must be called from inside a coroutine."""
        return cls(asyncio.get_running_loop())

    @property
    def loop(self) -> asyncio.AbstractEventLoop | None:
        return self._loop

    @property
    def is_running(self) -> bool:
        return not self._stopped and self._loop is not None and not self._loop.is_closed()

    def start(self) -> "EventLoopContext":
        if self._loop is not None:
            return self
        loop = asyncio.new_event_loop()
        ready = threading.Event()

        def _run() -> None:
            asyncio.set_event_loop(loop)
            loop.call_soon(ready.set)
            loop.run_forever()

        self._loop = loop
        self._thread = threading.Thread(target=_run, name=self._name, daemon=True)
        self._thread.start()
        ready.wait()
        return self

    def stop(self) -> None:
        """Stop the dedicated loop if this context owns one."""
        self._stopped = True
        if self._thread is None or self._loop is None:
            return
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join()
        self._loop.close()
        self._thread = None

    async def run_on(self, step: Callable[[], Awaitable[T]]) -> T:
        if not self.is_running:
            raise ContextClosedError()
        loop = self._loop
        assert loop is not None

        if asyncio.get_running_loop() is loop:
            return await step()

        async def _call() -> T:
            return await step()

        future = asyncio.run_coroutine_threadsafe(_call(), loop)
        return await asyncio.wrap_future(future)


class CoordinationContextResource(Resource):
    """Owns a dedicated coordination context for the container's lifetime."""

    def init(self, *, name: str = "apiport-ui") -> EventLoopContext:
        return EventLoopContext(name=name).start()

    def shutdown(self, resource: EventLoopContext) -> None:
        resource.stop()
