"""
Folds low level tokenizer events over a stack of open element frames.

Two disciplines are provided:

    process_stream_event -- used by XMLStreamer. The first start tag opens the stream container, which is
        represented on the stack by a RootMarker; every element closed directly under the marker is a stanza.
    build_element -- used by parse_element. There is no container, the outermost element is the result.
"""

from typing import Iterable, List, Optional

from .model import CharData, Element, EndTag, Frame, OpenElement, RootMarker, StartTag, SyntaxFault

STREAM_START = "stream_start"
STREAM_ELEMENT = "stream_element"
STREAM_END = "stream_end"
CDATA = "cdata"
STREAM_ERROR = "stream_error"


class StackError(Exception):
    """Raised when an event sequence cannot be folded into a tree"""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def process_stream_event(stack: List[Frame], event) -> Optional[tuple]:
    """Applies one event to `stack` in place.

    Returns the notification the event produces as an (event_name, *args) tuple, or None.
    """
    if isinstance(event, StartTag):
        if not stack:
            # name and attributes of the container are not needed again
            stack.append(RootMarker())
            return (STREAM_START, event.name, tuple(event.attrs))
        stack.append(OpenElement(event.name, event.attrs))
        return None

    if isinstance(event, EndTag):
        if not stack:
            return None
        top = stack[-1]
        if isinstance(top, RootMarker):
            stack.pop()
            return (STREAM_END, event.name)
        element = stack.pop().finalize()
        parent = stack[-1] if stack else None
        if isinstance(parent, OpenElement):
            parent.add_child(element)
            return None
        return (STREAM_ELEMENT, element)

    if isinstance(event, CharData):
        if not stack:
            return None
        top = stack[-1]
        if isinstance(top, RootMarker):
            return (CDATA, event.text)
        top.add_cdata(event.text)
        return None

    if isinstance(event, SyntaxFault):
        return (STREAM_ERROR, event.message)

    raise TypeError(f"Unknown tokenizer event {event!r}")


def build_element(events: Iterable) -> Element:
    """Folds a complete event list into a single element tree.

    Raises:
        StackError: on a tokenizer error, on content after the root element, or when the events run out
            before the root element is closed
    """
    stack: List[OpenElement] = []
    events = iter(events)
    for event in events:
        if isinstance(event, StartTag):
            stack.append(OpenElement(event.name, event.attrs))
        elif isinstance(event, EndTag):
            if not stack:
                raise StackError("unexpected end tag")
            element = stack.pop().finalize()
            if stack:
                stack[-1].add_child(element)
            elif next(events, None) is None:
                return element
            else:
                raise StackError("trailing content after root")
        elif isinstance(event, CharData):
            # text ahead of the root element is dropped
            if stack:
                stack[-1].add_cdata(event.text)
        elif isinstance(event, SyntaxFault):
            raise StackError(event.message)
        else:
            raise TypeError(f"Unknown tokenizer event {event!r}")
    raise StackError("unexpected end of input")
