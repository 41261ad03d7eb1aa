"""Markup events passed from the tokenizer to the production parser."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class StartElement:
    """Opening tag; ``name`` is the namespace-stripped local name."""
    name: str


@dataclass(frozen=True)
class EndElement:
    """Closing tag; ``name`` is the namespace-stripped local name."""
    name: str


@dataclass(frozen=True)
class Text:
    """Character content of the innermost open element."""
    content: str


@dataclass(frozen=True)
class EndOfStream:
    """Marks the end of the document. Always the last event."""


MarkupEvent = Union[StartElement, EndElement, Text, EndOfStream]


def local_name(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an lxml tag."""
    return tag.split('}', 1)[-1] if '}' in tag else tag
