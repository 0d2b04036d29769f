"""Tests for the CESIM results workbook parser."""
from __future__ import annotations

import pytest

from core.constants import DATA_KINDS
from core.excel_parser import WorkbookError, clean_str, parse_round_workbook, to_number
from tests.factories import TEAMS, build_sparse_workbook, build_workbook, cell_value


def test_parse_reads_teams_from_header_row(workbook_bytes):
    parsed = parse_round_workbook(workbook_bytes)

    assert parsed.teams == list(TEAMS)
    for kind in DATA_KINDS:
        assert [r['team'] for r in parsed.records(kind)] == list(TEAMS)
    assert any(line.endswith('Team found: Alpha (column 2)') for line in parsed.logs)


def test_parse_reads_values_at_mapped_cells(workbook_bytes):
    parsed = parse_round_workbook(workbook_bytes)

    alpha_perf = parsed.performances[1]
    assert alpha_perf['revenue_global'] == cell_value(1, 'revenue_global')
    assert alpha_perf['net_income_europe'] == cell_value(1, 'net_income_europe')
    assert parsed.market_shares[0]['market_share_asia'] == cell_value(0, 'market_share_asia')
    assert parsed.hr[2]['rd_staff'] == cell_value(2, 'rd_staff')
    assert parsed.financials[0]['total_liabilities'] == cell_value(0, 'total_liabilities')
    assert parsed.productions[1]['plants_asia'] == cell_value(1, 'plants_asia')
    assert parsed.defaulted_cells == 0


def test_unmapped_production_fields_are_zero(workbook_bytes):
    parsed = parse_round_workbook(workbook_bytes)

    for record in parsed.productions:
        assert record['capacity_usa'] == 0.0
        assert record['capacity_asia'] == 0.0
        assert record['network_coverage'] == 0.0
    assert any('No cell mapped for capacity_usa' in line for line in parsed.logs)


def test_empty_cell_defaults_to_zero_with_warning():
    parsed = parse_round_workbook(build_workbook(overrides={('Alpha', 'cash'): None}))

    assert parsed.financials[1]['cash'] == 0.0
    assert parsed.financials[0]['cash'] == cell_value(0, 'cash')
    assert parsed.defaulted_cells == 1
    assert any('WARNING: Alpha cash' in line and 'empty cell' in line for line in parsed.logs)


def test_non_numeric_cell_defaults_to_zero_with_warning():
    parsed = parse_round_workbook(build_workbook(overrides={('Beta', 'share_price'): 'n/a'}))

    assert parsed.performances[2]['share_price'] == 0.0
    assert parsed.defaulted_cells == 1
    assert any("non-numeric value 'n/a'" in line for line in parsed.logs)


def test_formatted_number_strings_are_read():
    overrides = {('Alpha', 'revenue_global'): '1 234,5', ('Alpha', 'market_share_global'): '12.5%'}
    parsed = parse_round_workbook(build_workbook(overrides=overrides))

    assert parsed.performances[1]['revenue_global'] == 1234.5
    assert parsed.market_shares[1]['market_share_global'] == 12.5
    assert parsed.defaulted_cells == 0


def test_duplicate_team_column_is_ignored():
    parsed = parse_round_workbook(build_workbook(teams=('Alpha', 'Alpha', 'Beta')))

    assert parsed.teams == ['Alpha', 'Beta']
    assert parsed.performances[1]['revenue_global'] == cell_value(2, 'revenue_global')
    assert any('duplicate team Alpha' in line for line in parsed.logs)


def test_workbook_without_teams_is_rejected():
    with pytest.raises(WorkbookError, match='No team found'):
        parse_round_workbook(build_workbook(teams=()))


def test_unreadable_workbook_is_rejected():
    with pytest.raises(WorkbookError, match='Unreadable workbook'):
        parse_round_workbook(b'this is not a spreadsheet')


def test_parse_accepts_a_path(tmp_path, workbook_bytes):
    path = tmp_path / 'round.xlsx'
    path.write_bytes(workbook_bytes)

    assert parse_round_workbook(str(path)).teams == list(TEAMS)


def test_log_trail_is_bracketed_and_timestamped(workbook_bytes):
    logs = parse_round_workbook(workbook_bytes).logs

    assert logs[0].endswith('=== START WORKBOOK PARSING ===')
    assert logs[-1].endswith('=== END WORKBOOK PARSING ===')
    assert all(line.startswith('[') for line in logs)
    assert any(line.endswith('--- PERFORMANCES ---') for line in logs)


def test_to_dict_is_a_round_bundle(workbook_bytes):
    data = parse_round_workbook(workbook_bytes).to_dict()

    assert set(data) == {'teams', 'logs', 'defaulted_cells', *DATA_KINDS}
    assert data['teams'] == list(TEAMS)
    assert data['hr'][0]['team'] == TEAMS[0]


@pytest.mark.parametrize('raw, expected', [
    (12, 12.0),
    ('3,75', 3.75),
    ('1,234.5', 1234.5),
    ('1,234', 1234.0),
    ('12,345,678', 12345678.0),
    ('-2,500', -2500.0),
    ('1,5', 1.5),
    ('\xa012 %', 12.0),
    ('', None),
    ('abc', None),
    (None, None),
    (float('nan'), None),
])
def test_to_number(raw, expected):
    assert to_number(raw) == expected


def test_clean_str():
    assert clean_str(' Alpha ') == 'Alpha'
    assert clean_str(12.0) == '12'
    assert clean_str(None) == ''
    assert clean_str(float('nan')) == ''


def test_team_names_that_look_like_missing_values_are_kept():
    parsed = parse_round_workbook(build_workbook(teams=('NA', 'None', 'Beta')))

    assert parsed.teams == ['NA', 'None', 'Beta']
    assert parsed.performances[0]['team'] == 'NA'
    assert parsed.performances[0]['revenue_global'] == cell_value(0, 'revenue_global')


def test_sparse_sheet_keeps_row_positions():
    cells = {
        ('Alpha', 'revenue_global'): 1500,
        ('Alpha', 'share_price'): 42.5,
        ('Beta', 'revenue_global'): 900,
    }
    parsed = parse_round_workbook(build_sparse_workbook(['Alpha', 'Beta'], cells))

    assert parsed.teams == ['Alpha', 'Beta']
    assert parsed.performances[0]['revenue_global'] == 1500
    assert parsed.performances[0]['share_price'] == 42.5
    assert parsed.performances[1]['revenue_global'] == 900
    assert parsed.performances[1]['share_price'] == 0.0
    assert parsed.defaulted_cells > 0
