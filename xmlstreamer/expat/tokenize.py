"""
Expat backed tokenizer: turns raw bytes into the ordered low level events folded by xmlstreamer.stack.
"""

import logging
from typing import List

from ..model import CharData, EndTag, StartTag, SyntaxFault
from .expat_cffi import ffi, load_expat_library

logger = logging.getLogger(__name__)


def _text(value) -> str:
    return ffi.string(value).decode("utf-8")


class ExpatDriver:
    """Loaded expat library; create one at startup and hand it to every streamer and parse_element call.

    Args:
        lib: an already loaded library object, mainly for tests. When omitted `load_expat_library` is called.

    Raises:
        OSError: if the expat library cannot be loaded
    """

    def __init__(self, lib=None) -> None:
        self._lib = lib if lib is not None else load_expat_library()

    def open(self) -> "ExpatTokenizer":
        return ExpatTokenizer(self._lib)


class ExpatTokenizer:
    """
    A single expat parser instance. Scan state for incomplete input is kept between `emit_events` calls.
    """

    def __init__(self, lib) -> None:
        self._lib = lib
        self._events: List = []
        self._callback_functions = []  # Keep references to callback functions

        @ffi.callback("void(void *, const char *, const char **)")
        def on_start_element(ctx, name, atts):
            attrs = []
            i = 0
            while atts[i] != ffi.NULL:
                attrs.append((_text(atts[i]), _text(atts[i + 1])))
                i += 2
            self._events.append(StartTag(_text(name), tuple(attrs)))

        self._callback_functions.append(on_start_element)

        @ffi.callback("void(void *, const char *)")
        def on_end_element(ctx, name):
            self._events.append(EndTag(_text(name)))

        self._callback_functions.append(on_end_element)

        @ffi.callback("void(void *, const char *, int)")
        def on_character_data(ctx, s, length):
            self._events.append(CharData(ffi.unpack(s, length).decode("utf-8")))

        self._callback_functions.append(on_character_data)

        self._handler = lib.XML_ParserCreate(ffi.NULL)
        if self._handler == ffi.NULL:
            raise MemoryError("XML_ParserCreate failed")
        lib.XML_SetElementHandler(self._handler, on_start_element, on_end_element)
        lib.XML_SetCharacterDataHandler(self._handler, on_character_data)
        self._disable_reparse_deferral()
        logger.debug("Opened expat tokenizer %r", self)

    def _disable_reparse_deferral(self) -> None:
        # deferred reparsing would hold back events for bytes already fed
        try:
            set_deferral = self._lib.XML_SetReparseDeferralEnabled
        except AttributeError:
            return
        set_deferral(self._handler, 0)

    @property
    def closed(self) -> bool:
        return self._handler is None

    def emit_events(self, data: bytes, final: bool = False) -> List:
        """Tokenizes exactly `data` and returns the events it completes.

        Args:
            data: raw bytes, may end in the middle of a token
            final: True when no more data will follow

        Returns:
            A list of StartTag, EndTag, CharData and SyntaxFault events in document order. A failed parse
            contributes the events seen before the failure followed by one SyntaxFault.
        """
        if self._handler is None:
            raise ValueError("tokenizer is closed")
        self._events = []
        status = self._lib.XML_Parse(self._handler, data, len(data), 1 if final else 0)
        events, self._events = self._events, []
        if status == self._lib.XML_STATUS_ERROR:
            events.append(SyntaxFault(self._error_message()))
        return events

    def _error_message(self) -> str:
        code = self._lib.XML_GetErrorCode(self._handler)
        error_ptr = self._lib.XML_ErrorString(code)
        message = ffi.string(error_ptr).decode("utf-8") if error_ptr != ffi.NULL else f"error {code}"
        line = self._lib.XML_GetCurrentLineNumber(self._handler)
        column = self._lib.XML_GetCurrentColumnNumber(self._handler)
        return f"{message}: line {line}, column {column}"

    def close(self) -> None:
        """Free the expat parser handle and release associated memory."""
        if self._handler is not None:
            self._lib.XML_ParserFree(self._handler)
            self._handler = None
            logger.debug("Closed expat tokenizer %r", self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

