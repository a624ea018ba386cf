import textwrap

import pytest

from papercal.models import SpecialDayRecord, SpecialDaysSource


@pytest.fixture
def write_file(tmp_path):
    def _write(name, content):
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def make_source():
    def _make(*records, date_format="2/1"):
        return SpecialDaysSource(
            date_format=date_format,
            day=[SpecialDayRecord(**r) for r in records],
        )
    return _make
