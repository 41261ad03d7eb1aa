"""Main CLI entry point for the OCD production extractor."""

import logging
import sys
from typing import Optional, Tuple

import click

from .emitter import write_table
from .exceptions import ExtractionError, MissingArgument
from .predicates import county_predicate
from .processor import ProductionProcessor
from .production_parser import ApiPredicate
from .settings import config
from .utils import setup_logging


def setup_application_logging(verbose: bool = False) -> logging.Logger:
    """Set up application-wide logging.

    Args:
        verbose: Enable verbose logging

    Returns:
        Main application logger
    """
    log_level = "DEBUG" if verbose else config.LOG_LEVEL
    logger = setup_logging(log_level)

    logger.info("=" * 60)
    logger.info("OCD Well Production Extractor")
    logger.info("=" * 60)
    logger.info(f"Log level: {log_level}")

    return logger


def build_predicate(counties: Tuple[int, ...], state: Optional[int],
                    all_wells: bool) -> Optional[ApiPredicate]:
    """Build the inclusion predicate from the command line options.

    Args:
        counties: County codes given with --county (defaults apply when empty)
        state: State code given with --state
        all_wells: Whether --all-wells was given

    Returns:
        Predicate over API numbers, or None to keep every well
    """
    if all_wells:
        if counties or state is not None:
            raise click.BadParameter("--all-wells cannot be combined with --county or --state")
        return None

    return county_predicate(counties or config.DEFAULT_COUNTIES, state)


@click.command()
@click.argument('archive', required=False)
@click.option('--county', 'counties', multiple=True, type=click.IntRange(0, 0xFFFF),
              help='County code to keep (repeatable; default: 15, Eddy County)')
@click.option('--state', type=click.IntRange(0, 0xFF), default=None,
              help='State code wells must also match (e.g. 30 for New Mexico)')
@click.option('--all-wells', is_flag=True, default=False,
              help='Keep every well instead of filtering by county')
@click.option('--progress', is_flag=True, default=False,
              help='Show a progress bar on stderr while parsing')
@click.option('--verbose', '-v', is_flag=True, default=False,
              help='Enable verbose logging')
def run_extraction(archive: Optional[str], counties: Tuple[int, ...], state: Optional[int],
                   all_wells: bool, progress: bool, verbose: bool) -> None:
    """Extract monthly well production from an OCD wcproduction ZIP archive.

    ARCHIVE is a ZIP file holding exactly one wcproduction XML document. The
    production table is written tab-separated to stdout with the columns
    api, year, month, oil, gas and water.

    Examples:

        # Eddy County wells (default)
        ocd-production wcproduction.zip > eddy.tsv

        # Lea and Eddy County wells in New Mexico
        ocd-production wcproduction.zip --state 30 --county 25 --county 15

        # Every well in the archive
        ocd-production wcproduction.zip --all-wells
    """
    # Set up logging
    logger = setup_application_logging(verbose)

    try:
        if not archive:
            raise MissingArgument("ARCHIVE")

        predicate = build_predicate(counties, state, all_wells)
        if predicate is None:
            logger.info("Keeping all wells")
        else:
            logger.info(
                f"Keeping counties {', '.join(str(c) for c in counties or config.DEFAULT_COUNTIES)}"
                + (f" in state {state}" if state is not None else "")
            )

        processor = ProductionProcessor(api_predicate=predicate, show_progress=progress)
        production = processor.extract(archive)

        write_table(production, sys.stdout)

        logger.info("Extraction completed successfully!")

    except click.BadParameter:
        raise
    except ExtractionError as e:
        logger.error(f"{type(e).__name__}: {e.message}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        if verbose:
            import traceback
            logger.error(traceback.format_exc())
        sys.exit(1)


if __name__ == "__main__":
    run_extraction()
