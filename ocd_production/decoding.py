"""Transcoding of the archived document to UTF-8.

The archived document may be UTF-8 or UTF-16 with a byte order mark. It is
re-encoded to UTF-8 chunk by chunk so the tokenizer always sees one encoding.
"""

import codecs
import logging
import zipfile
import zlib
from typing import IO, Callable, Iterator, Optional

from .exceptions import DecodeFailure

logger = logging.getLogger("ocd_production.decoding")

DEFAULT_ENCODING = "utf-8"

# Longest mark first; each codec strips its own mark while decoding
_BYTE_ORDER_MARKS = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def detect_encoding(head: bytes) -> str:
    """Pick a codec from the byte order mark at the start of a document.

    Args:
        head: First bytes of the document

    Returns:
        Codec name; UTF-8 when no byte order mark is present
    """
    for bom, encoding in _BYTE_ORDER_MARKS:
        if head.startswith(bom):
            return encoding
    return DEFAULT_ENCODING


def _read(stream: IO[bytes], size: int) -> bytes:
    try:
        return stream.read(size)
    except (zipfile.BadZipFile, zlib.error, EOFError, OSError) as e:
        # Corrupt compressed data surfaces here, CRC mismatches included
        raise DecodeFailure(f"Failed to read document: {e}") from e


def transcode_to_utf8(stream: IO[bytes], chunk_size: int = 64 * 1024,
                      on_read: Optional[Callable[[int], None]] = None) -> Iterator[bytes]:
    """Decode a binary stream and re-encode it as UTF-8 chunks.

    Args:
        stream: Binary stream positioned at the start of the document
        chunk_size: Number of bytes read per iteration
        on_read: Optional callback receiving the number of raw bytes read

    Yields:
        Non-empty UTF-8 encoded chunks

    Raises:
        DecodeFailure: If the stream cannot be read or is not valid in the
            detected encoding
    """
    head = _read(stream, chunk_size)
    encoding = detect_encoding(head)
    logger.info(f"Detected document encoding: {encoding}")

    decoder = codecs.getincrementaldecoder(encoding)(errors="strict")
    offset = 0
    chunk = head
    while True:
        final = not chunk
        if on_read is not None and chunk:
            on_read(len(chunk))

        try:
            text = decoder.decode(chunk, final=final)
        except UnicodeDecodeError as e:
            raise DecodeFailure(
                f"Invalid {encoding} data near byte {offset + e.start}: {e.reason}"
            ) from e

        if text:
            yield text.encode("utf-8")
        if final:
            return

        offset += len(chunk)
        chunk = _read(stream, chunk_size)
