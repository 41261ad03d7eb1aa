"""Access to the single XML document inside an OCD ZIP archive."""

import logging
import zipfile
from contextlib import contextmanager
from typing import IO, Iterator, List, Tuple

from .exceptions import ArchiveContentCountViolation, ArchiveOpenFailure
from .utils import format_bytes

logger = logging.getLogger("ocd_production.archive")


def list_documents(zip_ref: zipfile.ZipFile) -> List[zipfile.ZipInfo]:
    """List the file members of an archive, skipping directory entries."""
    return [info for info in zip_ref.infolist() if not info.is_dir()]


def open_single_document(zip_path: str) -> Tuple[zipfile.ZipFile, zipfile.ZipInfo]:
    """Open a ZIP archive and locate its only document.

    Args:
        zip_path: Path to ZIP file

    Returns:
        Tuple of (open archive, member info). The caller closes the archive.

    Raises:
        ArchiveOpenFailure: If the file is missing, unreadable or not a ZIP file
        ArchiveContentCountViolation: If the archive holds zero or several documents
    """
    try:
        zip_ref = zipfile.ZipFile(zip_path, 'r')
    except zipfile.BadZipFile as e:
        logger.error(f"Invalid ZIP file {zip_path}: {e}")
        raise ArchiveOpenFailure(zip_path, str(e)) from e
    except OSError as e:
        logger.error(f"Error opening {zip_path}: {e}")
        raise ArchiveOpenFailure(zip_path, e.strerror or str(e)) from e

    documents = list_documents(zip_ref)
    if len(documents) != 1:
        zip_ref.close()
        raise ArchiveContentCountViolation(zip_path, len(documents))

    info = documents[0]
    logger.info(
        f"Archive {zip_path} contains {info.filename} "
        f"({format_bytes(info.compress_size)} compressed, {format_bytes(info.file_size)} uncompressed)"
    )
    return zip_ref, info


@contextmanager
def single_document_stream(zip_path: str) -> Iterator[Tuple[zipfile.ZipInfo, IO[bytes]]]:
    """Yield the archive's only document as a binary stream.

    Both the member stream and the archive are closed on exit.

    Raises:
        ArchiveOpenFailure: If the archive or its member cannot be opened
        ArchiveContentCountViolation: If the archive holds zero or several documents
    """
    zip_ref, info = open_single_document(zip_path)
    try:
        try:
            stream = zip_ref.open(info, 'r')
        except (zipfile.BadZipFile, NotImplementedError, RuntimeError) as e:
            # Unsupported compression or encrypted member
            raise ArchiveOpenFailure(zip_path, f"cannot open member {info.filename}: {e}") from e

        with stream:
            yield info, stream
    finally:
        zip_ref.close()
