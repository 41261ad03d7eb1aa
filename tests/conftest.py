"""
Pytest configuration and shared fixtures for the OCD production extractor tests.
"""

import zipfile
from typing import Dict

import pytest

from tests.helpers import build_wcproduction_xml


@pytest.fixture
def sample_records():
    """Eddy County well with oil and gas for June 2021, plus a Lea County well."""
    return [
        {"state": 30, "county": "015", "well": 23456, "month": 6, "year": 2021, "phase": "O", "amount": "123.4"},
        {"state": 30, "county": "015", "well": 23456, "month": 6, "year": 2021, "phase": "G", "amount": "56.7"},
        {"state": 30, "county": "025", "well": 11111, "month": 6, "year": 2021, "phase": "W", "amount": "10"},
    ]


@pytest.fixture
def sample_xml(sample_records):
    return build_wcproduction_xml(sample_records)


@pytest.fixture
def make_archive(tmp_path):
    """Factory writing a ZIP archive with the given members.

    Members map archive names to ``bytes`` (written as is) or ``str``
    (encoded as UTF-8). Names ending in ``/`` become directory entries.
    """
    def _make(members: Dict[str, object], name: str = "wcproduction.zip") -> str:
        path = tmp_path / name
        with zipfile.ZipFile(path, 'w', compression=zipfile.ZIP_DEFLATED) as zf:
            for member, content in members.items():
                if member.endswith('/'):
                    zf.writestr(zipfile.ZipInfo(member), b'')
                elif isinstance(content, str):
                    zf.writestr(member, content.encode('utf-8'))
                else:
                    zf.writestr(member, content)
        return str(path)

    return _make
