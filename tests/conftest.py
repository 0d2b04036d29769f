from __future__ import annotations

import pytest

from tests.factories import build_workbook


@pytest.fixture
def workbook_bytes():
    return build_workbook()


@pytest.fixture(autouse=True)
def my_team_names(settings):
    settings.CESIM_MY_TEAM_NAMES = ["Corpo'mate"]
    return settings.CESIM_MY_TEAM_NAMES
