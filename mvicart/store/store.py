"""
Store - single-writer Intent-State-Effect container.

A store owns one durable state snapshot and one stream of one-shot effects.
Intents are queued and processed by a single worker task in submission
order, so every state write happens on that task:

    submit(intent) -> queue -> middlewares -> handler(intent, scope)
                                               |- scope.update_state(new)
                                               |- scope.emit(effect)

Concrete stores are configuration (initial state + handler + middlewares),
see mvicart.cart.service.create_cart_store.
"""

import asyncio
from typing import Any, AsyncIterator, Awaitable, Callable, Generic, Optional, Sequence, TypeVar

from mvicart.errors import StoreNotStartedError
from mvicart.logging import get_logger

from .middleware import Middleware, apply_middlewares

logger = get_logger(__name__)

IntentT = TypeVar("IntentT")
StateT = TypeVar("StateT")
EffectT = TypeVar("EffectT")

# Marks the end of an observer stream
_CLOSED = object()


class StoreScope(Generic[StateT, EffectT]):
    """What an intent handler may read and write while processing an intent."""

    def __init__(self, store: "Store[Any, StateT, EffectT]"):
        self._store = store

    @property
    def state(self) -> StateT:
        """Latest state snapshot."""
        return self._store.state

    def update_state(self, new_state: StateT) -> None:
        """Replace the state snapshot and notify state observers."""
        self._store._set_state(new_state)

    def emit(self, effect: EffectT) -> None:
        """Deliver a one-shot effect to the effect observers attached now."""
        self._store._emit(effect)


Handler = Callable[[IntentT, StoreScope[StateT, EffectT]], Awaitable[None]]


class Store(Generic[IntentT, StateT, EffectT]):
    """
    Intent-State-Effect container.

    Features:
    - Fire-and-forget submit() from the loop or from other threads
    - Ordered, single-writer processing on one worker task
    - State observers get the latest snapshot on attach, then every change
    - Effect observers get only effects emitted while they are attached
    - close() cancels in-flight work and discards late results
    """

    def __init__(
        self,
        initial_state: StateT,
        handler: Handler,
        middlewares: Sequence[Middleware] = (),
        name: str = "store",
    ):
        self.name = name
        self._state = initial_state
        self._handler = handler
        self._middlewares = tuple(middlewares)
        self._scope: StoreScope[StateT, EffectT] = StoreScope(self)

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._queue: Optional[asyncio.Queue] = None
        self._worker: Optional[asyncio.Task] = None
        self._closed = False

        self._state_callbacks: list[Callable[[StateT], Any]] = []
        self._effect_callbacks: list[Callable[[EffectT], Any]] = []
        self._state_queues: set[asyncio.Queue] = set()
        self._effect_queues: set[asyncio.Queue] = set()

    def __repr__(self) -> str:
        return f"<Store {self.name} closed={self._closed}>"

    @property
    def state(self) -> StateT:
        """Latest state snapshot."""
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Bind the store to the running loop and start the worker task."""
        if self._worker is not None or self._closed:
            return

        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._worker = self._loop.create_task(self._run(), name=f"{self.name}-worker")
        logger.debug(f"[{self.name}] worker started")

    async def idle(self) -> None:
        """Wait until every intent submitted so far has been processed."""
        if self._queue is None:
            return
        await self._queue.join()

    async def close(self) -> None:
        """
        Tear the store down.

        Cancels the worker (and any fetch it is awaiting), ends the async
        observer streams and drops callbacks. Safe to call more than once.
        """
        if self._closed:
            return
        self._closed = True

        worker = self._worker
        if worker is not None and worker is not asyncio.current_task():
            worker.cancel()
            try:
                await worker
            except asyncio.CancelledError:
                pass

        # Unblock idle() waiters for intents that will never run
        if self._queue is not None:
            while not self._queue.empty():
                self._queue.get_nowait()
                self._queue.task_done()

        for queue in [*self._state_queues, *self._effect_queues]:
            queue.put_nowait(_CLOSED)
        self._state_queues.clear()
        self._effect_queues.clear()
        self._state_callbacks.clear()
        self._effect_callbacks.clear()

        logger.debug(f"[{self.name}] closed")

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def submit(self, intent: IntentT) -> None:
        """
        Queue an intent for processing. Returns immediately.

        From inside a running loop the worker is started on demand. From
        another thread the store must already be started.
        """
        if self._closed:
            logger.debug(f"[{self.name}] dropping {type(intent).__name__}: store closed")
            return

        try:
            running_loop = asyncio.get_running_loop()
        except RuntimeError:
            running_loop = None

        if self._worker is None:
            if running_loop is None:
                raise StoreNotStartedError()
            self.start()

        if running_loop is self._loop:
            self._enqueue(intent)
            return

        try:
            self._loop.call_soon_threadsafe(self._enqueue, intent)
        except RuntimeError as e:
            # Loop already closed by its owner
            logger.warning(f"[{self.name}] dropping {type(intent).__name__}: {e}")

    def _enqueue(self, intent: IntentT) -> None:
        if self._closed:
            logger.debug(f"[{self.name}] dropping {type(intent).__name__}: store closed")
            return
        self._queue.put_nowait(intent)

    async def _run(self) -> None:
        # close() from inside a handler cannot cancel this task
        while not self._closed:
            intent = await self._queue.get()
            try:
                await self._process(intent)
            finally:
                self._queue.task_done()

    async def _process(self, intent: IntentT) -> None:
        intent_name = type(intent).__name__
        try:
            processed = apply_middlewares(self._middlewares, intent, self._state)
            if processed is None:
                logger.debug(f"[{self.name}] {intent_name} discarded by middleware")
                return

            logger.debug(f"[{self.name}] handling {type(processed).__name__}")
            await self._handler(processed, self._scope)
        except Exception as e:
            # Keep the worker alive for the next intent
            logger.error(f"[{self.name}] failed to process {intent_name}: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def _set_state(self, new_state: StateT) -> None:
        if self._closed:
            logger.debug(f"[{self.name}] discarding state update after close")
            return
        if new_state == self._state:
            return

        self._state = new_state
        for queue in list(self._state_queues):
            queue.put_nowait(new_state)
        for callback in list(self._state_callbacks):
            self._notify(callback, new_state)

    def subscribe_state(self, callback: Callable[[StateT], Any]) -> Callable[[], None]:
        """
        Observe state snapshots.

        The callback is invoked right away with the latest snapshot and then
        with every new one.

        Returns:
            Function detaching the callback
        """
        self._notify(callback, self._state)
        if self._closed:
            return lambda: None

        self._state_callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._state_callbacks:
                self._state_callbacks.remove(callback)

        return unsubscribe

    async def states(self) -> AsyncIterator[StateT]:
        """Yield the latest snapshot, then each new one until the store closes."""
        queue: asyncio.Queue = asyncio.Queue()
        queue.put_nowait(self._state)
        if self._closed:
            queue.put_nowait(_CLOSED)
        else:
            self._state_queues.add(queue)

        try:
            while True:
                value = await queue.get()
                if value is _CLOSED:
                    return
                yield value
        finally:
            self._state_queues.discard(queue)

    # ------------------------------------------------------------------
    # Effects
    # ------------------------------------------------------------------

    def _emit(self, effect: EffectT) -> None:
        if self._closed:
            logger.debug(f"[{self.name}] discarding {type(effect).__name__} after close")
            return

        for queue in list(self._effect_queues):
            queue.put_nowait(effect)
        for callback in list(self._effect_callbacks):
            self._notify(callback, effect)

    def subscribe_effects(self, callback: Callable[[EffectT], Any]) -> Callable[[], None]:
        """
        Observe effects emitted from now on. Earlier effects are not replayed.

        Returns:
            Function detaching the callback
        """
        if self._closed:
            return lambda: None

        self._effect_callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._effect_callbacks:
                self._effect_callbacks.remove(callback)

        return unsubscribe

    async def effects(self) -> AsyncIterator[EffectT]:
        """Yield effects emitted after iteration starts, until the store closes."""
        if self._closed:
            return

        queue: asyncio.Queue = asyncio.Queue()
        self._effect_queues.add(queue)
        try:
            while True:
                value = await queue.get()
                if value is _CLOSED:
                    return
                yield value
        finally:
            self._effect_queues.discard(queue)

    def _notify(self, callback: Callable[[Any], Any], value: Any) -> None:
        try:
            callback(value)
        except Exception as e:
            logger.warning(f"[{self.name}] observer {callback!r} failed: {e}", exc_info=True)
