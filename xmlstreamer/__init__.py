"""xmlstreamer provides a push parser for XML streams via the XMLStreamer class, which emits every element
completed directly under the stream container as a tree, and parse_element for one self contained fragment.

Useful for parsing partial XML coming over the wire, such as XMPP streams.
Tokenizing is done by the expat C library, loaded through an explicit ExpatDriver.
"""

from xmlstreamer.expat import ExpatDriver
from xmlstreamer.model import CData, Element
from xmlstreamer.xmlstreamer import ParseError, XMLStreamer, XMLStreamerException, parse_element

__all__ = ["XMLStreamer", "XMLStreamerException", "ParseError", "parse_element", "Element", "CData", "ExpatDriver"]
