"""
Tests for parse_element using a scripted tokenizer.
"""

import unittest

from xmlstreamer import CData, Element, ParseError, XMLStreamerException, parse_element
from xmlstreamer.model import CharData, EndTag, StartTag, SyntaxFault


class OneShotTokenizer:
    def __init__(self, events):
        self.events = events
        self.calls = []
        self.closed = False

    def emit_events(self, data, final=False):
        self.calls.append((data, final))
        return list(self.events)

    def close(self):
        self.closed = True


class OneShotDriver:
    def __init__(self, events):
        self.tokenizer = OneShotTokenizer(events)

    def open(self):
        return self.tokenizer


class ExplodingTokenizer(OneShotTokenizer):
    def emit_events(self, data, final=False):
        raise RuntimeError("tokenizer crashed")


class ParseElementTests(unittest.TestCase):
    def test_document_success(self):
        driver = OneShotDriver([StartTag("a", (("k", "v"),)), CharData("text"), EndTag("a")])
        element = parse_element(b'<a k="v">text</a>', driver)
        self.assertEqual(element, Element("a", (("k", "v"),), (CData("text"),)))
        self.assertEqual(driver.tokenizer.calls, [(b'<a k="v">text</a>', True)])
        self.assertTrue(driver.tokenizer.closed)

    def test_str_input(self):
        driver = OneShotDriver([StartTag("a"), EndTag("a")])
        parse_element("<a/>", driver)
        self.assertEqual(driver.tokenizer.calls, [(b"<a/>", True)])

    def test_cdata_merge(self):
        driver = OneShotDriver([StartTag("a"), CharData("foo"), CharData("bar"), EndTag("a")])
        self.assertEqual(parse_element(b"", driver).children, (CData("foobar"),))

    def test_trailing_content_rejected(self):
        driver = OneShotDriver([StartTag("a"), EndTag("a"), StartTag("b"), EndTag("b")])
        with self.assertRaises(ParseError) as cm:
            parse_element(b"<a/><b/>", driver)
        self.assertIn("trailing content", str(cm.exception))
        self.assertTrue(driver.tokenizer.closed)

    def test_unterminated(self):
        driver = OneShotDriver([StartTag("a"), CharData("text")])
        with self.assertRaises(ParseError) as cm:
            parse_element(b"<a>text", driver)
        self.assertEqual(str(cm.exception), "unexpected end of input")

    def test_syntax_error(self):
        driver = OneShotDriver([StartTag("a"), SyntaxFault("mismatched tag: line 1, column 5")])
        with self.assertRaises(ParseError) as cm:
            parse_element(b"<a></b>", driver)
        self.assertEqual(str(cm.exception), "mismatched tag: line 1, column 5")
        self.assertTrue(driver.tokenizer.closed)

    def test_parse_error_is_streamer_exception(self):
        self.assertTrue(issubclass(ParseError, XMLStreamerException))

    def test_tokenizer_released_when_it_raises(self):
        driver = OneShotDriver([])
        driver.tokenizer = ExplodingTokenizer([])
        with self.assertRaises(RuntimeError):
            parse_element(b"<a/>", driver)
        self.assertTrue(driver.tokenizer.closed)


if __name__ == '__main__':
    unittest.main(verbosity=2)
