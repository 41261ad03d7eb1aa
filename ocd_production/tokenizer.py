"""Turn a UTF-8 XML byte stream into markup events using lxml.

lxml's pull parser reports element starts and ends; text is attached to the
tree rather than reported. Each element's own text is emitted as a ``Text``
event once it is complete: just before its first child starts, or just
before the element ends. Finished elements are cleared so the tree never
grows beyond the currently open path.
"""

import logging
from typing import Iterable, Iterator, List

from lxml import etree as ET

from .events import EndElement, EndOfStream, MarkupEvent, StartElement, Text, local_name
from .exceptions import TokenizeFailure

logger = logging.getLogger("ocd_production.tokenizer")


def _text_event(elem) -> Iterator[MarkupEvent]:
    """Emit an element's text trimmed; blank text yields nothing."""
    text = (elem.text or '').strip()
    if text:
        yield Text(text)


def _drain(parser: ET.XMLPullParser, open_elements: List[bool]) -> Iterator[MarkupEvent]:
    """Translate queued lxml events.

    ``open_elements`` holds one flag per open element, set once that
    element's text has been emitted.
    """
    for event, elem in parser.read_events():
        if event == 'start':
            if open_elements and not open_elements[-1]:
                open_elements[-1] = True
                yield from _text_event(elem.getparent())
            open_elements.append(False)
            yield StartElement(local_name(elem.tag))

        elif event == 'end':
            if not open_elements.pop():
                yield from _text_event(elem)
            yield EndElement(local_name(elem.tag))

            # Clear processed element to free memory
            elem.clear()
            while elem.getprevious() is not None:
                del elem.getparent()[0]


def iter_markup_events(chunks: Iterable[bytes]) -> Iterator[MarkupEvent]:
    """Tokenize UTF-8 encoded XML into markup events.

    Args:
        chunks: UTF-8 byte chunks of one XML document, in order

    Yields:
        ``StartElement``, ``Text`` and ``EndElement`` events in document
        order, followed by exactly one ``EndOfStream``

    Raises:
        TokenizeFailure: If the document is not well-formed XML
    """
    # Declared encodings are ignored; the bytes are always UTF-8 here
    parser = ET.XMLPullParser(
        events=('start', 'end'),
        encoding='utf-8',
        huge_tree=True,
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
    )

    open_elements: List[bool] = []
    try:
        for chunk in chunks:
            parser.feed(chunk)
            yield from _drain(parser, open_elements)

        parser.close()
        yield from _drain(parser, open_elements)
    except ET.XMLSyntaxError as e:
        logger.error(f"XML parsing error: {e}")
        raise TokenizeFailure(f"Malformed XML: {e}") from e

    yield EndOfStream()
