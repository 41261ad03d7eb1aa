"""Streaming parser for OCD ``wcproduction`` well production records.

The OCD export is a flat list of ``wcproduction`` elements, one per
(well, month, product kind) reading::

    <wcproduction>
        <api_st_cde>30</api_st_cde>
        <api_cnty_cde>15</api_cnty_cde>
        <api_well_idn>23456</api_well_idn>
        <prodn_mth>6</prodn_mth>
        <prodn_yr>2021</prodn_yr>
        <prd_knd_cde>O</prd_knd_cde>
        <prod_amt>123.4</prod_amt>
        ...
    </wcproduction>

The parser is a state machine driven one markup event at a time, so the
document is never held in memory. Readings are merged into a two-level
aggregate (well -> period -> volumes); a repeated reading for the same well,
period and phase replaces the earlier one.
"""

import logging
import re
from dataclasses import replace
from enum import Enum
from typing import Callable, Dict, Optional

from .events import EndElement, EndOfStream, MarkupEvent, StartElement, Text
from .exceptions import MalformedNumericField, ParserFinishedError
from .models import Aggregate, Phase, ProductionRecord, ReportingPeriod, WellAPI

RECORD_ELEMENT = "wcproduction"

ApiPredicate = Callable[[WellAPI], bool]


class ParserState(Enum):
    """Where the parser is within the document."""
    BETWEEN = "between"
    NEED_API = "need_api"
    READ_API_STATE = "read_api_state"
    READ_API_COUNTY = "read_api_county"
    READ_API_WELL = "read_api_well"
    HAVE_API = "have_api"
    SKIP = "skip"
    READ_MONTH = "read_month"
    READ_YEAR = "read_year"
    READ_PHASE = "read_phase"
    READ_VOLUME = "read_volume"


# Field elements recognized while the API number is incomplete
_API_FIELDS = {
    "api_st_cde": ParserState.READ_API_STATE,
    "api_cnty_cde": ParserState.READ_API_COUNTY,
    "api_well_idn": ParserState.READ_API_WELL,
}

# Field elements recognized once the API number is known
_BODY_FIELDS = {
    "prodn_mth": ParserState.READ_MONTH,
    "prodn_yr": ParserState.READ_YEAR,
    "prd_knd_cde": ParserState.READ_PHASE,
    "prod_amt": ParserState.READ_VOLUME,
}

# Field state -> (element name, state to return to when the element closes)
_FIELD_STATES = {
    **{state: (name, ParserState.NEED_API) for name, state in _API_FIELDS.items()},
    **{state: (name, ParserState.HAVE_API) for name, state in _BODY_FIELDS.items()},
}

# Largest value each unsigned integer field may hold
_FIELD_LIMITS = {
    "api_st_cde": 0xFF,
    "api_cnty_cde": 0xFFFF,
    "api_well_idn": 0xFFFFFFFF,
    "prodn_mth": 0xFF,
    "prodn_yr": 0xFFFF,
}

_UNSIGNED_RE = re.compile(r"\+?0*([0-9]{1,10})")


def parse_unsigned(field: str, text: str) -> int:
    """Parse an unsigned integer field, enforcing the field's width.

    Text is taken as is; surrounding whitespace is malformed. Leading
    zeros are allowed in any number.

    Raises:
        MalformedNumericField: If the text is not a base-10 integer in range
    """
    match = _UNSIGNED_RE.fullmatch(text)
    if match is None:
        raise MalformedNumericField(field, text)
    number = int(match.group(1))
    if number > _FIELD_LIMITS[field]:
        raise MalformedNumericField(field, text)
    return number


def parse_volume(field: str, text: str) -> float:
    """Parse a production amount.

    Text is taken as is; surrounding whitespace is malformed.

    Raises:
        MalformedNumericField: If the text is not a floating point number
    """
    # float() tolerates whitespace and digit separators, the OCD data uses neither
    if '_' in text or text != text.strip():
        raise MalformedNumericField(field, text)
    try:
        return float(text)
    except ValueError as e:
        raise MalformedNumericField(field, text) from e


class WellProductionParser:
    """Event-driven state machine that builds the production aggregate.

    Feed events in document order with :meth:`process`, then call
    :meth:`finish` once the stream has ended to take the aggregate.

    Args:
        api_predicate: Optional filter over API numbers. Records of wells it
            rejects are skipped and never reach the aggregate.
    """

    def __init__(self, api_predicate: Optional[ApiPredicate] = None):
        """Initialize the parser in the ``BETWEEN`` state."""
        self.logger = logging.getLogger("ocd_production.parser")
        self.api_predicate = api_predicate

        self._state = ParserState.BETWEEN
        self._production: Aggregate = {}
        self._finished = False

        # Persist across records until a field overwrites them
        self.current_api = WellAPI()
        self.current_period = ReportingPeriod()
        self.current_phase = Phase.OIL

        # Track parsing statistics
        self.stats: Dict[str, int] = {
            'events_processed': 0,
            'records_seen': 0,
            'records_skipped': 0,
            'readings_committed': 0,
            'readings_overwritten': 0,
        }

        self._handlers = {
            ParserState.BETWEEN: self._on_between,
            ParserState.NEED_API: self._on_need_api,
            ParserState.HAVE_API: self._on_have_api,
            ParserState.SKIP: self._on_skip,
        }

    @property
    def state(self) -> ParserState:
        return self._state

    def process(self, event: MarkupEvent) -> None:
        """Advance the state machine by one event.

        Args:
            event: Next markup event in document order

        Raises:
            MalformedNumericField: If a numeric field cannot be parsed
            InvalidPhaseCode: If a product kind code is not O, G or W
            ParserFinishedError: If called after :meth:`finish`
        """
        if self._finished:
            raise ParserFinishedError()

        self.stats['events_processed'] += 1

        if isinstance(event, EndOfStream):
            if self._state is not ParserState.BETWEEN:
                self.logger.debug(f"Stream ended inside a record (state: {self._state.value})")
            return

        handler = self._handlers.get(self._state, self._on_field)
        self._state = handler(event)

    def finish(self) -> Aggregate:
        """Hand off the aggregate. The parser cannot be used afterwards.

        Returns:
            Mapping of well -> period -> production record
        """
        if self._finished:
            raise ParserFinishedError()
        self._finished = True

        self.logger.debug(
            f"Parser finished: {len(self._production)} wells, "
            f"{self.stats['readings_committed']} readings committed"
        )
        production, self._production = self._production, {}
        return production

    def _on_between(self, event: MarkupEvent) -> ParserState:
        if isinstance(event, StartElement) and event.name == RECORD_ELEMENT:
            self.stats['records_seen'] += 1
            return ParserState.NEED_API
        return ParserState.BETWEEN

    def _on_need_api(self, event: MarkupEvent) -> ParserState:
        if isinstance(event, StartElement):
            return _API_FIELDS.get(event.name, ParserState.NEED_API)
        return ParserState.NEED_API

    def _on_have_api(self, event: MarkupEvent) -> ParserState:
        if isinstance(event, StartElement):
            return _BODY_FIELDS.get(event.name, ParserState.HAVE_API)
        if isinstance(event, EndElement) and event.name == RECORD_ELEMENT:
            return ParserState.BETWEEN
        return ParserState.HAVE_API

    def _on_skip(self, event: MarkupEvent) -> ParserState:
        if isinstance(event, EndElement) and event.name == RECORD_ELEMENT:
            return ParserState.BETWEEN
        return ParserState.SKIP

    def _on_field(self, event: MarkupEvent) -> ParserState:
        """Handle events while inside one of the leaf field elements."""
        field, parent_state = _FIELD_STATES[self._state]

        if isinstance(event, Text):
            self._read_field(field, event.content)
            return self._state

        if isinstance(event, EndElement) and event.name == field:
            if self._state is ParserState.READ_API_WELL:
                return self._complete_api()
            return parent_state

        return self._state

    def _read_field(self, field: str, text: str) -> None:
        state = self._state
        if state is ParserState.READ_API_STATE:
            self.current_api = replace(self.current_api, state=parse_unsigned(field, text))
        elif state is ParserState.READ_API_COUNTY:
            self.current_api = replace(self.current_api, county=parse_unsigned(field, text))
        elif state is ParserState.READ_API_WELL:
            self.current_api = replace(self.current_api, well=parse_unsigned(field, text))
        elif state is ParserState.READ_MONTH:
            self.current_period = replace(self.current_period, month=parse_unsigned(field, text))
        elif state is ParserState.READ_YEAR:
            self.current_period = replace(self.current_period, year=parse_unsigned(field, text))
        elif state is ParserState.READ_PHASE:
            self.current_phase = Phase.from_code(text)
        elif state is ParserState.READ_VOLUME:
            self._commit(parse_volume(field, text))

    def _complete_api(self) -> ParserState:
        """Apply the inclusion predicate once the API number is complete."""
        if self.api_predicate is not None and not self.api_predicate(self.current_api):
            self.stats['records_skipped'] += 1
            return ParserState.SKIP
        return ParserState.HAVE_API

    def _commit(self, volume: float) -> None:
        record = (
            self._production
            .setdefault(self.current_api, {})
            .setdefault(self.current_period, ProductionRecord())
        )

        # Duplicate readings overwrite; a candidate for stricter validation
        if record.get(self.current_phase) is not None:
            self.stats['readings_overwritten'] += 1
            self.logger.debug(
                f"Overwriting {self.current_phase.value} for {self.current_api} "
                f"{self.current_period}: {record.get(self.current_phase)} -> {volume}"
            )

        record.set(self.current_phase, volume)
        self.stats['readings_committed'] += 1
