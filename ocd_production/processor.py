"""Processing pipeline: archive -> transcoding -> tokenizer -> production parser."""

import logging
from datetime import datetime
from typing import Dict, Optional

from tqdm import tqdm

from .archive import single_document_stream
from .decoding import transcode_to_utf8
from .events import EndOfStream
from .models import Aggregate
from .production_parser import ApiPredicate, WellProductionParser
from .settings import config
from .tokenizer import iter_markup_events
from .utils import format_bytes, log_memory_usage


class ProductionProcessor:
    """Streams an OCD production archive into an in-memory aggregate."""

    def __init__(self, api_predicate: Optional[ApiPredicate] = None,
                 chunk_size: Optional[int] = None, show_progress: bool = False):
        """Initialize the processor.

        Args:
            api_predicate: Optional filter over API numbers passed to the parser
            chunk_size: Bytes read from the archive member at once
            show_progress: Display a progress bar on stderr while parsing
        """
        self.logger = logging.getLogger("ocd_production.processor")
        self.api_predicate = api_predicate
        self.chunk_size = chunk_size or config.CHUNK_SIZE
        self.show_progress = show_progress
        self.stats: Dict[str, int] = {}

    def extract(self, archive_path: str) -> Aggregate:
        """Parse the single document in ``archive_path``.

        Args:
            archive_path: Path to the ZIP archive

        Returns:
            Mapping of well -> period -> production record

        Raises:
            ArchiveOpenFailure: If the archive cannot be opened
            ArchiveContentCountViolation: If the archive does not hold exactly one document
            DecodeFailure: If the document cannot be read or decoded
            TokenizeFailure: If the document is not well-formed XML
            MalformedNumericField: If a numeric field cannot be parsed
            InvalidPhaseCode: If a product kind code is not O, G or W
        """
        start_time = datetime.now()
        parser = WellProductionParser(self.api_predicate)

        with single_document_stream(archive_path) as (info, stream):
            self.logger.info(f"Parsing {info.filename}")
            log_memory_usage(self.logger, "before parsing")

            with tqdm(total=info.file_size, unit='B', unit_scale=True,
                      desc="Parsing production", disable=not self.show_progress) as pbar:
                chunks = transcode_to_utf8(stream, self.chunk_size, on_read=pbar.update)
                for event in iter_markup_events(chunks):
                    parser.process(event)
                    if isinstance(event, EndOfStream):
                        break

        production = parser.finish()
        self.stats = dict(parser.stats)
        self.stats['wells'] = len(production)
        self.stats['periods'] = sum(len(by_period) for by_period in production.values())

        processing_time = (datetime.now() - start_time).total_seconds()
        self.logger.info(
            f"Parsed {format_bytes(info.file_size)} in {processing_time:.2f}s: "
            f"{self.stats['records_seen']} records, {self.stats['records_skipped']} skipped, "
            f"{self.stats['wells']} wells, {self.stats['periods']} well-months"
        )
        if self.stats['readings_overwritten']:
            self.logger.warning(
                f"{self.stats['readings_overwritten']} readings repeated a well, month and phase "
                f"already seen; the later value was kept"
            )
        log_memory_usage(self.logger, "after parsing")

        return production
