"""
Observable state container.

Holds the current snapshot, applies updater functions to it and notifies
subscribers after each applied update. Updates issued inside ``batch()``
are queued and applied in call order when the outermost batch closes,
each updater receiving the result of the one before it.
"""
import logging
from contextlib import contextmanager
from typing import Callable, Generic, Iterator, List, Optional, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")
Updater = Callable[[T], T]
Listener = Callable[[T], None]


class Store(Generic[T]):
    """
    Single-owner container for an immutable snapshot.

    Updaters must return a new snapshot, or the same object to signal that
    nothing changed; in the latter case subscribers are not notified.
    """

    def __init__(self, initial: T) -> None:
        self._state = initial
        self._listeners: List[Listener] = []
        self._queue: List[Updater] = []
        # Queue length at entry of each open batch, outermost first
        self._marks: List[int] = []

    def get(self) -> T:
        """Get the latest committed snapshot."""
        return self._state

    def pending(self) -> T:
        """Get the snapshot that the queued updaters would produce."""
        state = self._state
        for updater in self._queue:
            state = updater(state)
        return state

    def set(self, state: T) -> None:
        """Replace the snapshot outright."""
        self.update(lambda _: state)

    def update(self, updater: Updater) -> None:
        """
        Apply ``updater`` to the current snapshot.

        Inside a batch the updater is queued instead.
        """
        if self._marks:
            self._queue.append(updater)
            return
        self._apply(updater)

    def _apply(self, updater: Updater) -> None:
        previous = self._state
        state = updater(previous)
        if state is previous:
            return
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def _flush(self) -> None:
        """
        Apply every queued updater in order.

        An error from an updater or listener does not stop the remaining
        updaters; the first one is re-raised once the queue is drained.
        """
        error: Optional[Exception] = None
        while self._queue:
            updater = self._queue.pop(0)
            try:
                self._apply(updater)
            except Exception as exc:
                logger.debug("Queued update failed: %r", exc)
                if error is None:
                    error = exc
        if error is not None:
            raise error

    @contextmanager
    def batch(self) -> Iterator["Store[T]"]:
        """
        Queue updates until the outermost batch exits.

        If the body of a batch raises, the updates queued inside that batch
        (including any nested batches) are discarded; updates queued by
        enclosing batches before it are kept.
        """
        mark = len(self._queue)
        self._marks.append(mark)
        try:
            yield self
        except BaseException:
            self._marks.pop()
            logger.debug("Discarding %d queued updates", len(self._queue) - mark)
            del self._queue[mark:]
            raise
        self._marks.pop()
        if not self._marks:
            self._flush()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with each new snapshot.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
