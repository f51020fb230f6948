"""Named-event publish/subscribe used by every gate."""

from collections.abc import Callable
from typing import Any

Handler = Callable[..., Any]


class _OnceHandler:
    """Adapter installed by ``Notifier.once``; removes itself before forwarding."""

    __slots__ = ("notifier", "event", "handler", "fired")

    def __init__(self, notifier: "Notifier", event: str, handler: Handler):
        self.notifier = notifier
        self.event = event
        self.handler = handler
        self.fired = False

    def __call__(self, *args: Any) -> Any:
        # An outer emission's snapshot may still reach us after a nested one fired.
        if self.fired:
            return None
        self.fired = True
        self.notifier.off(self.event, self)
        return self.handler(*args)

    def __repr__(self) -> str:
        return f"<once {self.event!r} -> {self.handler!r}>"


class Notifier:
    """
    Minimal synchronous event emitter.

    Subscribers are kept per event name in registration order. An event name
    with no subscribers is absent from ``subscribers``.

    Example:
        ```python
        notifier = Notifier()
        notifier.on("open", lambda: print("opened"))
        notifier.emit("open")
        ```
    """

    subscribers: dict[str, list[Handler]]

    def __init__(self) -> None:
        self.subscribers = {}

    def on(self, event: str, handler: Handler, prepend: bool = False) -> "Notifier":
        """
        Subscribe ``handler`` to ``event``. Duplicates are kept.

        With ``prepend`` the handler runs before the ones already registered.
        """
        handlers = self.subscribers.setdefault(event, [])
        if prepend:
            handlers.insert(0, handler)
        else:
            handlers.append(handler)
        return self

    def once(self, event: str, handler: Handler) -> "Notifier":
        """Subscribe ``handler`` to the next emission of ``event`` only."""
        return self.on(event, _OnceHandler(self, event, handler))

    def off(self, event: str, handler: Handler | None = None) -> "Notifier":
        """
        Remove subscribers for ``event``.

        Without ``handler`` every subscriber of the event is dropped. With a
        handler, the first registration that is that handler (or a ``once``
        adapter wrapping it) is removed.
        """
        handlers = self.subscribers.get(event)
        if handlers is None:
            return self

        if handler is None:
            del self.subscribers[event]
            return self

        for index, registered in enumerate(handlers):
            if registered is handler or (
                isinstance(registered, _OnceHandler) and registered.handler is handler
            ):
                del handlers[index]
                break

        if not handlers:
            del self.subscribers[event]
        return self

    def emit(self, event: str, *args: Any) -> "Notifier":
        """Invoke every current subscriber of ``event`` with ``args``."""
        handlers = self.subscribers.get(event)
        if handlers:
            # Snapshot: handlers may unsubscribe themselves while running.
            for handler in list(handlers):
                handler(*args)
        return self

    def listeners(self, event: str) -> tuple[Handler, ...]:
        """Return the subscribers currently registered for ``event``."""
        return tuple(self.subscribers.get(event, ()))
