"""
Handler registry for tile and bomb callbacks.

Tiles and bombs carry opaque handler tokens instead of callables. The
rendering side owns a HandlerRegistry that maps each token back to the
function to call, keeping the state snapshots free of executable
references.
"""
import itertools
import logging
from typing import Callable, Dict, NewType, Optional


logger = logging.getLogger(__name__)

HandlerId = NewType("HandlerId", str)
Handler = Callable[[str], None]


class HandlerRegistry:
    """
    Maps handler tokens to callables taking a tile id.

    Tokens are unique per registry and never reused after unregistering.
    """

    def __init__(self, prefix: str = "handler") -> None:
        self._prefix = prefix
        self._handlers: Dict[HandlerId, Handler] = {}
        self._counter = itertools.count(1)

    def register(self, handler: Handler, name: Optional[str] = None) -> HandlerId:
        """
        Store a handler and return the token that refers to it.

        Args:
            handler: Callable invoked with a tile id.
            name: Optional readable label folded into the token.

        Returns:
            A new HandlerId.
        """
        label = name or getattr(handler, "__name__", self._prefix)
        token = HandlerId(f"{label}#{next(self._counter)}")
        self._handlers[token] = handler
        logger.debug("Registered handler %s", token)
        return token

    def resolve(self, token: Optional[HandlerId]) -> Optional[Handler]:
        """Get the handler for a token, or None if unknown."""
        if token is None:
            return None
        return self._handlers.get(token)

    def invoke(self, token: HandlerId, tile_id: str) -> None:
        """
        Call the handler behind ``token`` with ``tile_id``.

        Raises:
            KeyError: If the token is not registered.
        """
        handler = self._handlers.get(token)
        if handler is None:
            raise KeyError(f"Unknown handler token: {token}")
        handler(tile_id)

    def unregister(self, token: HandlerId) -> bool:
        """Remove a handler. Returns False if it was not registered."""
        if self._handlers.pop(token, None) is None:
            return False
        logger.debug("Unregistered handler %s", token)
        return True

    def __contains__(self, token: object) -> bool:
        return token in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
