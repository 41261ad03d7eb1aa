"""
Event and document builders shared by the test modules.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from ocd_production.events import EndElement, EndOfStream, StartElement, Text


Reading = Tuple[int, int, str, str]  # year, month, phase code, amount


def field_events(name: str, text: str) -> list:
    """Events for one leaf field element."""
    return [StartElement(name), Text(text), EndElement(name)]


def record_events(state: int, county: int, well: int,
                  readings: Sequence[Reading] = (), extra_fields: bool = False) -> list:
    """Events for one ``wcproduction`` element.

    Each reading adds month, year, product kind and amount fields in the
    order the OCD export uses.
    """
    events = [StartElement("wcproduction")]
    events += field_events("api_st_cde", str(state))
    events += field_events("api_cnty_cde", f"{county:03d}")
    events += field_events("api_well_idn", f"{well:05d}")
    if extra_fields:
        events += field_events("ogrid_cde", "6137")
        events += field_events("pool_idn", "97565")
    for year, month, phase, amount in readings:
        events += field_events("prodn_mth", str(month))
        events += field_events("prodn_yr", str(year))
        events += field_events("prd_knd_cde", phase)
        if extra_fields:
            events += field_events("eff_dte", f"{year}-{month:02d}-01T00:00:00")
        events += field_events("prod_amt", amount)
    events.append(EndElement("wcproduction"))
    return events


def document_events(*records: list) -> list:
    """Wrap record event lists in a root element and terminate the stream."""
    events = [StartElement("root")]
    for record in records:
        events += record
    events += [EndElement("root"), EndOfStream()]
    return events


def build_wcproduction_xml(records: List[Dict], namespace: Optional[str] = None,
                           declaration: Optional[str] = 'UTF-8') -> str:
    """Render records as an OCD style XML document.

    Each record is a dict with state, county, well, month, year, phase and
    amount keys; values are inserted as text verbatim.
    """
    lines = []
    if declaration:
        lines.append(f'<?xml version="1.0" encoding="{declaration}" standalone="yes"?>')
    ns = f' xmlns="{namespace}"' if namespace else ''
    lines.append(f'<root{ns}>')
    for record in records:
        lines.append('  <wcproduction>')
        lines.append(f'    <api_st_cde>{record["state"]}</api_st_cde>')
        lines.append(f'    <api_cnty_cde>{record["county"]}</api_cnty_cde>')
        lines.append(f'    <api_well_idn>{record["well"]}</api_well_idn>')
        lines.append('    <ogrid_cde>6137</ogrid_cde>')
        lines.append(f'    <prodn_mth>{record["month"]}</prodn_mth>')
        lines.append(f'    <prodn_yr>{record["year"]}</prodn_yr>')
        lines.append(f'    <prd_knd_cde>{record["phase"]}</prd_knd_cde>')
        lines.append(f'    <prod_amt>{record["amount"]}</prod_amt>')
        lines.append('    <prodn_day_num>30</prodn_day_num>')
        lines.append('  </wcproduction>')
    lines.append('</root>')
    return '\n'.join(lines) + '\n'


