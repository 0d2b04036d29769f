"""Tests for round import, deletion, filtering and rankings."""
from __future__ import annotations

from datetime import date

import pytest

from core.models import Financial, HrData, MarketShare, Performance, Production, Round, Team
from core.services import (
    ImportValidationError, delete_round, filter_records, get_default_team, import_round, kpi_changes,
    latest_round, metric_series, rank_teams, rounds_summary, search_rounds, sort_rounds, team_history,
)
from tests.factories import TEAMS, make_bundle

pytestmark = pytest.mark.django_db

ALL_MODELS = (Performance, MarketShare, HrData, Production, Financial)


def test_import_creates_round_teams_and_records():
    rnd = import_round(1, '2026-01-14', make_bundle(), comment='first')

    assert rnd.number == 1
    assert rnd.date == date(2026, 1, 14)
    assert rnd.comment == 'first'
    assert Team.objects.count() == len(TEAMS)
    for model in ALL_MODELS:
        assert model.objects.filter(round=rnd).count() == len(TEAMS)


def test_import_flags_my_team():
    import_round(1, '2026-01-14', make_bundle())

    assert Team.objects.get(name="Corpo'mate").is_my_team is True
    assert Team.objects.get(name='Alpha').is_my_team is False


def test_second_import_reuses_teams():
    import_round(1, '2026-01-14', make_bundle())
    import_round(2, '2026-01-21', make_bundle())

    assert Team.objects.count() == len(TEAMS)
    assert Round.objects.count() == 2
    assert Performance.objects.count() == 2 * len(TEAMS)


def test_duplicate_records_for_a_team_keep_one_row():
    bundle = make_bundle(teams=('Alpha',))
    bundle['performances'].append({'team': 'Alpha', 'revenue_global': 999})

    rnd = import_round(1, '2026-01-14', bundle)

    records = Performance.objects.filter(round=rnd)
    assert records.count() == 1
    assert records.get().revenue_global == 999


def test_import_coerces_values():
    bundle = make_bundle(teams=('Alpha',))
    bundle['hr'][0].update({'rd_staff': '12', 'turnover_rate': None, 'monthly_salary': 'abc'})

    rnd = import_round(1, '2026-01-14', bundle)

    hr = HrData.objects.get(round=rnd)
    assert hr.rd_staff == 12
    assert hr.turnover_rate == 0.0
    assert hr.monthly_salary == 0


def test_records_for_unknown_team_are_skipped():
    bundle = make_bundle(teams=('Alpha',))
    bundle['financials'].append({'team': 'Ghost', 'cash': 5})

    rnd = import_round(1, '2026-01-14', bundle)

    assert Financial.objects.filter(round=rnd).count() == 1
    assert not Team.objects.filter(name='Ghost').exists()


def test_round_zero_is_accepted():
    assert import_round(0, '2026-01-07', make_bundle()).number == 0


def test_default_comment_mentions_round():
    rnd = import_round(3, '2026-01-14', make_bundle())
    assert rnd.comment.startswith('Round 3 imported on')


@pytest.mark.parametrize('number, round_date, bundle', [
    (None, '2026-01-14', make_bundle()),
    ('', '2026-01-14', make_bundle()),
    (1, '', make_bundle()),
    (1, '2026-01-14', None),
    (1, '2026-01-14', {'teams': []}),
    ('one', '2026-01-14', make_bundle()),
    (-1, '2026-01-14', make_bundle()),
    (1, 'not a date', make_bundle()),
])
def test_import_validation_errors(number, round_date, bundle):
    with pytest.raises(ImportValidationError):
        import_round(number, round_date, bundle)
    assert Round.objects.count() == 0
    assert Team.objects.count() == 0


def test_delete_round_cascades_but_keeps_teams():
    first = import_round(1, '2026-01-14', make_bundle())
    second = import_round(2, '2026-01-21', make_bundle())

    delete_round(first.pk)

    assert list(Round.objects.all()) == [second]
    for model in ALL_MODELS:
        assert not model.objects.filter(round_id=first.pk).exists()
        assert model.objects.filter(round=second).count() == len(TEAMS)
    assert Team.objects.count() == len(TEAMS)


def test_delete_unknown_round_raises():
    with pytest.raises(Round.DoesNotExist):
        delete_round(12345)


def test_default_team_prefers_my_team():
    import_round(1, '2026-01-14', make_bundle(teams=('Zeta', "Corpo'mate", 'Alpha')))
    assert get_default_team().name == "Corpo'mate"


def test_default_team_falls_back_to_first_by_name():
    import_round(1, '2026-01-14', make_bundle(teams=('Zeta', 'Beta')))
    assert get_default_team().name == 'Beta'


def test_default_team_without_teams_is_none():
    assert get_default_team() is None


def test_filter_records_by_round_and_team():
    first = import_round(1, '2026-01-14', make_bundle())
    import_round(2, '2026-01-21', make_bundle())

    assert filter_records('performances').count() == 2 * len(TEAMS)
    assert filter_records('performances', round_id=first.pk).count() == len(TEAMS)
    alpha = filter_records('hr', team_name='Alpha')
    assert [r.round.number for r in alpha] == [1, 2]
    assert filter_records('hr', round_id=first.pk, team_name='Alpha').count() == 1
    assert filter_records('hr', team_name='Nobody').count() == 0


def test_kpi_changes():
    import_round(1, '2026-01-14', make_bundle(revenue_global=[100, 1, 1]))
    import_round(2, '2026-01-21', make_bundle(revenue_global=[80, 1, 1]))
    history = team_history(Team.objects.get(name="Corpo'mate"), 'performances')

    assert kpi_changes(history, 'revenue_global') == {'value': 80, 'change': 20.0, 'is_positive': False}
    assert kpi_changes(history[:1], 'revenue_global') == {'value': 100, 'change': 0.0, 'is_positive': True}
    assert kpi_changes([], 'revenue_global')['value'] is None


def test_kpi_changes_with_zero_previous_value():
    import_round(1, '2026-01-14', make_bundle(net_income_global=[0, 1, 1]))
    import_round(2, '2026-01-21', make_bundle(net_income_global=[50, 1, 1]))
    history = team_history(Team.objects.get(name="Corpo'mate"), 'performances')

    assert kpi_changes(history, 'net_income_global')['change'] == 0.0


def test_rank_teams_descending_by_default():
    import_round(1, '2026-01-14', make_bundle(revenue_global=[200, 300, 100]))

    rows = rank_teams('performances', 'revenue_global')

    assert [(r['rank'], r['team']) for r in rows] == [(1, 'Alpha'), (2, "Corpo'mate"), (3, 'Beta')]
    assert rows[1]['isMyTeam'] is True
    assert rows[0]['roundNumber'] == 1


def test_rank_teams_turnover_ascending():
    import_round(1, '2026-01-14', make_bundle(turnover_rate=[5.0, 2.0, 9.0]))

    rows = rank_teams('hr', 'turnover_rate')

    assert [r['team'] for r in rows] == ['Alpha', "Corpo'mate", 'Beta']


def test_rank_teams_ties_break_on_name():
    import_round(1, '2026-01-14', make_bundle(cash=[10, 10, 10]))

    assert [r['team'] for r in rank_teams('financials', 'cash')] == ['Alpha', 'Beta', "Corpo'mate"]


def test_rank_teams_uses_latest_round():
    import_round(1, '2026-01-14', make_bundle(share_price=[1, 2, 3]))
    import_round(2, '2026-01-21', make_bundle(share_price=[3, 2, 1]))

    rows = rank_teams('performances', 'share_price')

    assert rows[0]['team'] == "Corpo'mate"
    assert rows[0]['roundNumber'] == 2
    assert latest_round().number == 2


def test_rank_teams_unknown_metric():
    with pytest.raises(ValueError):
        rank_teams('performances', 'bogus')


def test_rank_teams_without_rounds_is_empty():
    assert rank_teams('performances', 'revenue_global') == []


def test_metric_series_fills_missing_rounds_with_none():
    import_round(1, '2026-01-14', make_bundle(teams=('Alpha',), cash=[5]))
    import_round(2, '2026-01-21', make_bundle(teams=('Alpha', 'Beta'), cash=[6, 7]))

    data = metric_series('financials', 'cash')

    assert data['labels'] == ['R1', 'R2']
    assert data['series']['Alpha']['values'] == [5, 6]
    assert data['series']['Beta']['values'] == [None, 7]


def test_rounds_summary_uses_default_team():
    import_round(2, '2026-01-21', make_bundle(revenue_global=[20, 1, 1]), comment='second')
    import_round(1, '2026-01-14', make_bundle(revenue_global=[10, 1, 1]), comment='first')

    rows = rounds_summary()

    assert [r['number'] for r in rows] == [1, 2]
    assert rows[0]['date'] == '2026-01-14'
    assert rows[0]['performance']['team'] == "Corpo'mate"
    assert rows[1]['performance']['revenue_global'] == 20
    assert rows[0]['marketShare'] is not None


def test_rounds_summary_without_data_for_team():
    import_round(1, '2026-01-14', make_bundle(teams=('Alpha',)))
    beta = Team.objects.create(name='Beta')

    rows = rounds_summary(beta)

    assert rows[0]['performance'] is None
    assert rows[0]['marketShare'] is None


def test_search_and_sort_rounds():
    import_round(1, '2026-01-14', make_bundle(revenue_global=[300, 1, 1]), comment='Kick-off')
    import_round(2, '2026-01-21', make_bundle(revenue_global=[100, 1, 1]), comment='Expansion in Asia')
    import_round(3, '2026-01-28', make_bundle(revenue_global=[200, 1, 1]), comment='Price war')
    rows = rounds_summary()

    assert [r['number'] for r in search_rounds(rows, 'asia')] == [2]
    assert [r['number'] for r in search_rounds(rows, '3')] == [3]
    assert len(search_rounds(rows, '  ')) == 3

    by_revenue = sort_rounds(rows, 'revenue_global', 'desc')
    assert [r['number'] for r in by_revenue] == [1, 3, 2]
    assert [r['number'] for r in sort_rounds(rows, 'date', 'desc')] == [3, 2, 1]
    assert [r['number'] for r in sort_rounds(rows, 'unknown')] == [1, 2, 3]
