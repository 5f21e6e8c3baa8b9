#!/usr/bin/env python3
"""
Demo of xmlstreamer features
"""

from xmlstreamer import ExpatDriver, ParseError, XMLStreamer, parse_element

print("=" * 60)
print("xmlstreamer Feature Demo")
print("=" * 60)

# Loaded once, shared by every streamer
driver = ExpatDriver()


# Feature 1: Streaming stanzas split across arbitrary chunks
print("\n1. Streaming Stanzas")
print("-" * 60)

session = (
    "<stream:stream xmlns:stream='http://etherx.jabber.org/streams' to='example.com'>"
    "<message to='juliet@example.com'><body>Wherefore art thou?</body></message> "
    "<presence/>"
    "</stream:stream>"
)

with XMLStreamer(driver) as streamer:
    events = []
    streamer.add_catch_all_listener(lambda e, *a: events.append((e, a)))
    for i in range(0, len(session), 5):
        streamer.consume(session[i:i + 5])

for event in events:
    print(f"✅ {event}")


# Feature 2: Size limit
print("\n2. Size Limit")
print("-" * 60)

errors = []

with XMLStreamer(driver, max_size=64) as streamer:
    streamer.add_listener(XMLStreamer.STREAM_ERROR_EVENT, errors.append)
    streamer.consume("<stream><message><body>" + ("x" * 100))

print(f"✅ Caught oversized stanza: {errors}")


# Feature 3: Handing the stream to another consumer
print("\n3. Changing the Sink")
print("-" * 60)

first, second = [], []

with XMLStreamer(driver, sink=lambda e, *a: first.append(e)) as streamer:
    streamer.consume("<stream><presence/>")
    streamer.change_sink(lambda e, *a: second.append(e))
    streamer.consume("<presence/></stream>")

print(f"✅ First consumer: {first}")
print(f"✅ Second consumer: {second}")


# Feature 4: One-shot parsing
print("\n4. parse_element")
print("-" * 60)

element = parse_element('<iq type="get" id="ping1"><ping xmlns="urn:xmpp:ping"/></iq>', driver)
print("✅ Parsed:", element)

try:
    parse_element("<a/><b/>", driver)
except ParseError as e:
    print(f"✅ Rejected: {e}")


print("\n" + "=" * 60)
print("All features working! 🚀")
print("=" * 60)
