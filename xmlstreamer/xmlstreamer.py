"""xmlstreamer assembles tokenizer events into XML element trees.

The XMLStreamer class is a push parser for long lived XML streams: every element closed directly under the
stream container is emitted as a complete tree. parse_element parses one self contained fragment.

Useful for parsing partial XML coming over the wire or via disk.
"""

import logging
from sys import stdin
from typing import Callable, List, Optional, Union

from . import events, stack
from .expat import ExpatDriver
from .model import Element, Frame, OpenElement, RootMarker
from .tape import Tape

logger = logging.getLogger(__name__)

STANZA_TOO_BIG = "XML stanza is too big"


class XMLStreamerException(Exception):
    """Exception raised when XMLStreamer encounters an error during parsing or validation."""

    def __init__(self, msg: Union[str, bytes]) -> None:
        """Initialize XMLStreamerException with an error message.

        Args:
            msg: The error message as string or bytes
        """
        super().__init__(msg)
        self._msg: Union[str, bytes] = msg

    def __str__(self) -> str:
        """Return the error message as a string."""
        if isinstance(self._msg, bytes):
            return self._msg.decode("utf-8")
        return str(self._msg)


class ParseError(XMLStreamerException):
    """Raised by parse_element when the input is not exactly one well formed element."""


class XMLStreamer(events.EventSource):
    """Push parser which emits one event per complete top level element of an XML stream

    Apart from the public API of this class - an API for attaching events is inherited from events.EventSource
    which provides the following functionality

    self.add_listener(event, listener)
    self.remove_listener(listener)
    self.add_catch_all_listener(listener) - this listener receives ALL events
    self.remove_catch_all_listener(listener)
    self.auto_listen(observer, prefix="_on_") - this automatically finds and attaches methods in the `observer`
        object which are named as `_on_event` as listeners to the streamer object.

    Events:
        Events are of the form (event, *args)

        XMLStreamer.STREAM_START_EVENT (str): Fired when the stream container opens; delivers its name and its
            attributes as a tuple of (name, value) pairs
        XMLStreamer.STREAM_ELEMENT_EVENT (str): Fired when an element directly under the container is closed;
            delivers the finalized `Element`
        XMLStreamer.STREAM_END_EVENT (str): Fired when the stream container closes; delivers its name
        XMLStreamer.CDATA_EVENT (str): Fired for character data found between top level elements, e.g.
            whitespace keep-alives; delivers the text
        XMLStreamer.STREAM_ERROR_EVENT (str): Fired for a syntax error reported by the tokenizer and when the
            bytes fed since the last complete top level element exceed `max_size`; delivers a message

    Args:
        driver: tokenizer factory, usually a `xmlstreamer.expat.ExpatDriver`. One tokenizer is opened per
            streamer and held until `close`.
        sink (callable, optional): catch-all listener called as sink(event_name, *args)
        max_size (int, optional): size limit in bytes for one top level element. None means unlimited.
        buffer_size (int): largest slice of input handed to the tokenizer at once (default: 65536)
    """

    STREAM_START_EVENT = stack.STREAM_START
    STREAM_ELEMENT_EVENT = stack.STREAM_ELEMENT
    STREAM_END_EVENT = stack.STREAM_END
    CDATA_EVENT = stack.CDATA
    STREAM_ERROR_EVENT = stack.STREAM_ERROR

    def __init__(self, driver, sink: Optional[Callable] = None, max_size: Optional[int] = None,
                 buffer_size: int = 65536):
        super().__init__()
        if max_size is not None and max_size <= 0:
            raise ValueError(f"max_size must be a positive integer or None, got {max_size!r}")
        if buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {buffer_size!r}")
        self._max_size = max_size
        self._buffer_size = buffer_size
        self._file_like = Tape()
        self._stack: List[Frame] = []
        self._size = 0
        self._sink = None
        self._tokenizer = driver.open()
        if sink is not None:
            self.change_sink(sink)

    @property
    def max_size(self) -> Optional[int]:
        return self._max_size

    @property
    def size(self) -> int:
        """Bytes fed since the last top level element was completed"""
        return self._size

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def closed(self) -> bool:
        return self._tokenizer is None

    def change_sink(self, sink: Optional[Callable]) -> None:
        """Replaces the catch-all sink, e.g. when another consumer takes over the stream.

        Parsing state is untouched. Passing None detaches the current sink.
        """
        if self._tokenizer is None:
            raise XMLStreamerException("streamer is closed")
        if self._sink is not None:
            self.remove_catch_all_listener(self._sink)
        self._sink = sink
        if sink is not None:
            self.add_catch_all_listener(sink)

    def consume(self, data: Union[bytes, str]) -> None:
        """Takes input that must be parsed

        Can be called any number of times with arbitrary chunks of the stream; notifications are fired as soon
        as the events that produce them are folded.

        Args:
            data (bytes|str): raw stream bytes, a str is encoded as UTF-8
        """
        if self._tokenizer is None:
            raise XMLStreamerException("streamer is closed")
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._size += len(data)
        self._file_like.write(data)
        try:
            while len(self._file_like):
                chunk = self._file_like.read(self._buffer_size)
                for event in self._tokenizer.emit_events(chunk):
                    if self._tokenizer is None:
                        # closed by a listener
                        return
                    self._process(event)
        except BaseException:
            # unread slices of a failed feed are never handed to the tokenizer later
            self._file_like.clear()
            raise
        if self._tokenizer is not None and self._max_size is not None and self._size > self._max_size:
            logger.warning("Stanza exceeds %d bytes (%d buffered)", self._max_size, self._size)
            self.fire(XMLStreamer.STREAM_ERROR_EVENT, STANZA_TOO_BIG)

    feed = consume

    def _process(self, event) -> None:
        closing_stanza = (len(self._stack) == 2
                          and isinstance(self._stack[0], RootMarker)
                          and isinstance(self._stack[1], OpenElement))
        notification = stack.process_stream_event(self._stack, event)
        if closing_stanza and len(self._stack) == 1:
            self._size = 0
        if notification is not None:
            if notification[0] == XMLStreamer.STREAM_ERROR_EVENT:
                logger.debug("Tokenizer error: %s", notification[1])
            self.fire(*notification)

    def close(self) -> None:
        """Close the streamer and free resources.

        Releases the tokenizer. Any partially received element is discarded, nothing is fired.
        Calling close more than once is harmless.
        """
        if self._tokenizer is None:
            return
        tokenizer, self._tokenizer = self._tokenizer, None
        self._stack = []
        self._file_like.clear()
        tokenizer.close()

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - ensures close() is always called"""
        self.close()
        return False


def parse_element(data: Union[bytes, str], driver) -> Element:
    """Parses a complete, self contained XML fragment into an Element

    Args:
        data (bytes|str): the whole fragment, a str is encoded as UTF-8
        driver: tokenizer factory, usually a `xmlstreamer.expat.ExpatDriver`

    Raises:
        ParseError: for a syntax error, for anything after the root element, or when the root element is
            never closed
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    tokenizer = driver.open()
    try:
        tokens = tokenizer.emit_events(data, final=True)
    finally:
        tokenizer.close()
    try:
        return stack.build_element(tokens)
    except stack.StackError as se:
        raise ParseError(se.message) from se


def run(data=stdin, driver=None):
    xml_input = data.read()

    def _catch_all(event_name, *args):
        print(f"\t{event_name} : {args}")

    streamer = XMLStreamer(driver or ExpatDriver(), sink=_catch_all)
    streamer.consume(xml_input)
    streamer.close()


if __name__ == "__main__":
    run()
