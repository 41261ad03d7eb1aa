"""Tab-separated output of the production aggregate."""

import logging
from typing import IO

import numpy as np
import pandas as pd

from .exceptions import WriteFailure
from .models import Aggregate, Phase
from .settings import config

logger = logging.getLogger("ocd_production.emitter")


def format_volume(value) -> str:
    """Render a volume the way the OCD table has always printed them.

    Shortest round-tripping digits in positional notation, without a
    trailing ``.0`` on whole numbers (``100``, ``123.4``, ``0.0000001``).
    Missing volumes render as an empty cell.
    """
    if value is None or pd.isna(value):
        return ''
    return np.format_float_positional(value, trim='-')


def aggregate_to_dataframe(production: Aggregate) -> pd.DataFrame:
    """Flatten the aggregate into one row per (well, period).

    Args:
        production: Mapping of well -> period -> production record

    Returns:
        DataFrame with columns api, year, month, oil, gas, water, sorted by
        API number and period. Absent phases are missing values.
    """
    rows = []
    for api in sorted(production):
        by_period = production[api]
        for period in sorted(by_period):
            record = by_period[period]
            rows.append({
                'api': str(api),
                'year': period.year,
                'month': period.month,
                'oil': record.get(Phase.OIL),
                'gas': record.get(Phase.GAS),
                'water': record.get(Phase.WATER),
            })

    df = pd.DataFrame(rows, columns=list(config.OUTPUT_COLUMNS))
    for phase in Phase:
        df[phase.value] = df[phase.value].astype('float64')
    return df


def write_table(production: Aggregate, stream: IO[str]) -> int:
    """Write the aggregate as a tab-separated table with a header row.

    Args:
        production: Mapping of well -> period -> production record
        stream: Text stream to write to

    Returns:
        Number of data rows written

    Raises:
        WriteFailure: If the stream cannot be written
    """
    df = aggregate_to_dataframe(production)
    table = df.copy()
    for phase in Phase:
        table[phase.value] = table[phase.value].map(format_volume)

    try:
        table.to_csv(
            stream,
            sep=config.OUTPUT_SEPARATOR,
            index=False,
            na_rep='',
            lineterminator='\n',
        )
        stream.flush()
    except (OSError, ValueError) as e:
        # ValueError: I/O operation on closed file
        logger.error(f"Failed to write production table: {e}")
        raise WriteFailure(f"Failed to write production table: {e}") from e

    logger.info(f"Wrote {len(df)} rows for {len(production)} wells")
    return len(df)
