"""
Tests for folding tokenizer events over the open element stack.
"""

import unittest

from xmlstreamer import stack
from xmlstreamer.model import CData, CharData, Element, EndTag, OpenElement, RootMarker, StartTag, SyntaxFault


def fold(events, frames=None):
    frames = [] if frames is None else frames
    notifications = []
    for event in events:
        notification = stack.process_stream_event(frames, event)
        if notification is not None:
            notifications.append(notification)
    return frames, notifications


class StreamFoldTests(unittest.TestCase):
    def test_first_start_tag_opens_container(self):
        frames, notifications = fold([StartTag("stream", (("to", "example.com"),))])
        self.assertEqual(len(frames), 1)
        self.assertIsInstance(frames[0], RootMarker)
        self.assertEqual(notifications, [("stream_start", "stream", (("to", "example.com"),))])

    def test_nested_start_pushes_open_element(self):
        frames, notifications = fold([StartTag("stream"), StartTag("message"), StartTag("body")])
        self.assertEqual([type(f) for f in frames], [RootMarker, OpenElement, OpenElement])
        self.assertEqual(len(notifications), 1)

    def test_stanza_emitted_when_closed_under_container(self):
        frames, notifications = fold([StartTag("stream"), StartTag("message", (("to", "a"),)), StartTag("body"),
                                      CharData("hi"), EndTag("body"), EndTag("message")])
        self.assertEqual(len(frames), 1)
        self.assertEqual(notifications[-1],
                         ("stream_element",
                          Element("message", (("to", "a"),), (Element("body", (), (CData("hi"),)),))))

    def test_container_close_ends_stream(self):
        frames, notifications = fold([StartTag("stream"), EndTag("stream")])
        self.assertEqual(frames, [])
        self.assertEqual(notifications[-1], ("stream_end", "stream"))

    def test_cdata_merge(self):
        _, notifications = fold([StartTag("stream"), StartTag("body"), CharData("foo"), CharData("bar"),
                                 EndTag("body")])
        self.assertEqual(notifications[-1], ("stream_element", Element("body", (), (CData("foobar"),))))

    def test_root_level_text_passthrough(self):
        frames, notifications = fold([StartTag("stream"), CharData(" "), CharData("\n")])
        self.assertEqual(notifications[1:], [("cdata", " "), ("cdata", "\n")])
        self.assertEqual(len(frames), 1)
        self.assertIsInstance(frames[0], RootMarker)

    def test_empty_stack_text_is_dropped(self):
        frames, notifications = fold([CharData("junk")])
        self.assertEqual(frames, [])
        self.assertEqual(notifications, [])

    def test_error_leaves_stack_unchanged(self):
        frames, _ = fold([StartTag("stream"), StartTag("message")])
        before = list(frames)
        notification = stack.process_stream_event(frames, SyntaxFault("not well-formed"))
        self.assertEqual(notification, ("stream_error", "not well-formed"))
        self.assertEqual(frames, before)

    def test_folding_continues_after_error(self):
        _, notifications = fold([StartTag("stream"), SyntaxFault("bad"), StartTag("presence"),
                                 EndTag("presence")])
        self.assertEqual([n[0] for n in notifications], ["stream_start", "stream_error", "stream_element"])

    def test_unknown_event_rejected(self):
        with self.assertRaises(TypeError):
            stack.process_stream_event([], ("start", "x"))


class BuildElementTests(unittest.TestCase):
    def test_document_success(self):
        element = stack.build_element([StartTag("a", (("k", "v"),)), CharData("text"), EndTag("a")])
        self.assertEqual(element, Element("a", (("k", "v"),), (CData("text"),)))

    def test_nested_children_in_order(self):
        element = stack.build_element([StartTag("a"), StartTag("b"), EndTag("b"), CharData("x"), CharData("y"),
                                       StartTag("c"), EndTag("c"), EndTag("a")])
        self.assertEqual(element, Element("a", (), (Element("b"), CData("xy"), Element("c"))))

    def test_text_before_root_is_dropped(self):
        element = stack.build_element([CharData("\n"), StartTag("a"), EndTag("a")])
        self.assertEqual(element, Element("a"))

    def test_trailing_content_rejected(self):
        with self.assertRaises(stack.StackError) as cm:
            stack.build_element([StartTag("a"), EndTag("a"), StartTag("b"), EndTag("b")])
        self.assertEqual(cm.exception.message, "trailing content after root")

    def test_unterminated_document(self):
        with self.assertRaises(stack.StackError) as cm:
            stack.build_element([StartTag("a"), StartTag("b"), EndTag("b")])
        self.assertEqual(cm.exception.message, "unexpected end of input")

    def test_empty_input(self):
        with self.assertRaises(stack.StackError) as cm:
            stack.build_element([])
        self.assertEqual(cm.exception.message, "unexpected end of input")

    def test_error_short_circuits(self):
        with self.assertRaises(stack.StackError) as cm:
            stack.build_element([StartTag("a"), SyntaxFault("mismatched tag"), EndTag("a")])
        self.assertEqual(cm.exception.message, "mismatched tag")


if __name__ == '__main__':
    unittest.main(verbosity=2)
