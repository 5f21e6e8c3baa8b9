"""
Node, frame and low-level event types shared by the streamer and the element builder.
"""

from typing import NamedTuple, Optional, Tuple, Union


class CData(NamedTuple):
    """Character data child of an element"""

    text: str


class Element(NamedTuple):
    """A finalized XML element.

    `attrs` keeps the (name, value) pairs in document order, duplicates included. `children` never holds two
    adjacent CData nodes.
    """

    name: str
    attrs: Tuple[Tuple[str, str], ...] = ()
    children: Tuple[Union["Element", CData], ...] = ()

    def get_attr(self, name: str, default: Optional[str] = None) -> Optional[str]:
        for key, value in self.attrs:
            if key == name:
                return value
        return default

    def get_cdata(self) -> str:
        """Returns the concatenated character data found directly under this element"""
        return "".join(child.text for child in self.children if isinstance(child, CData))

    def subtags(self):
        return [child for child in self.children if isinstance(child, Element)]

    def get_subtag(self, name: str) -> Optional["Element"]:
        for child in self.subtags():
            if child.name == name:
                return child
        return None


Node = Union[Element, CData]


class RootMarker:
    """Stack frame for 'inside the stream container, no stanza open'"""

    __slots__ = ()

    def __repr__(self) -> str:
        return "RootMarker()"


class OpenElement:
    """Stack frame for an element whose end tag has not been seen yet.

    Children are appended in arrival order and frozen into a tuple by `finalize`.
    """

    __slots__ = ("name", "attrs", "children")

    def __init__(self, name: str, attrs=()) -> None:
        self.name = name
        self.attrs = tuple(attrs)
        self.children = []

    def add_cdata(self, text: str) -> None:
        """Appends character data, merging it into a trailing CData child if there is one"""
        if self.children and isinstance(self.children[-1], CData):
            self.children[-1] = CData(self.children[-1].text + text)
        else:
            self.children.append(CData(text))

    def add_child(self, element: Element) -> None:
        self.children.append(element)

    def finalize(self) -> Element:
        return Element(self.name, self.attrs, tuple(self.children))

    def __repr__(self) -> str:
        return f"OpenElement({self.name!r}, {self.attrs!r}, {self.children!r})"


Frame = Union[RootMarker, OpenElement]


# Low level events produced by a tokenizer


class StartTag(NamedTuple):
    name: str
    attrs: Tuple[Tuple[str, str], ...] = ()


class EndTag(NamedTuple):
    name: str


class CharData(NamedTuple):
    text: str


class SyntaxFault(NamedTuple):
    message: str


LowLevelEvent = Union[StartTag, EndTag, CharData, SyntaxFault]
