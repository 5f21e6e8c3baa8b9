"""
Listener registry through which XMLStreamer hands out stream notifications.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)


class EventSource:
    """Keeps the listeners of a stream and delivers notifications to them

    Two kinds of listeners exist: listeners bound to one notification name, called as listener(*args), and
    catch-all listeners such as a streamer's sink, called as listener(event_name, *args). For each
    notification the named listeners run first, then the catch-all ones, each in registration order.

    A listener that raises is logged and skipped; `fire` itself never raises.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = defaultdict(list)
        self._catch_all_listeners: List[Callable] = []

    def add_listener(self, event: str, listener: Callable) -> None:
        """Registers `listener` for notifications named `event`, e.g. "stream_element". Idempotent."""
        if listener not in self._listeners[event]:
            self._listeners[event].append(listener)

    def remove_listener(self, listener: Callable) -> None:
        """Detaches `listener` wherever it is registered, catch-all included"""
        for named in self._listeners.values():
            if listener in named:
                named.remove(listener)
        self.remove_catch_all_listener(listener)

    def add_catch_all_listener(self, listener: Callable) -> None:
        if listener not in self._catch_all_listeners:
            self._catch_all_listeners.append(listener)

    def remove_catch_all_listener(self, listener: Callable) -> None:
        if listener in self._catch_all_listeners:
            self._catch_all_listeners.remove(listener)

    def auto_listen(self, observer: Any, prefix: str = "_on_") -> None:
        """Registers every `<prefix><event>` method of `observer`

        A session object with `_on_stream_start(name, attrs)` and `_on_stream_element(element)` methods is wired
        to those two notifications by a single call.
        """
        for attr_name in dir(observer):
            if not attr_name.startswith(prefix):
                continue
            handler = getattr(observer, attr_name)
            if callable(handler):
                self.add_listener(attr_name[len(prefix):], handler)

    def fire(self, event: str, *args: Any) -> None:
        # snapshots, listeners may detach themselves or the sink may be swapped mid delivery
        for listener in list(self._listeners.get(event, ())):
            self._deliver(event, listener, args)
        for listener in list(self._catch_all_listeners):
            self._deliver(event, listener, (event,) + args)

    def _deliver(self, event: str, listener: Callable, args: tuple) -> None:
        try:
            listener(*args)
        except Exception:
            logger.exception("Listener %r failed while handling %r", listener, event)
