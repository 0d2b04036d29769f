from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from django.conf import settings            # type:ignore
from django.db import transaction           # type:ignore
from django.utils import timezone           # type:ignore

from .constants import DATA_KINDS, LOWER_IS_BETTER, ROUND_SORT_FIELDS
from .models import Financial, HrData, MarketShare, Performance, Production, Round, Team

logger = logging.getLogger(__name__)

KIND_MODELS = {
    'performances': Performance,
    'market_shares': MarketShare,
    'hr': HrData,
    'productions': Production,
    'financials': Financial,
}


class ImportValidationError(ValueError):
    """A round import request is missing required data."""


# ==============================================================================
#  VALUE COERCION
# ==============================================================================

def to_float(value) -> float:
    if value is None or value == '':
        return 0.0
    try:
        num = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if num != num else num


def to_int(value) -> int:
    return int(to_float(value))


def numeric_fields(model) -> List[str]:
    """Names of the metric columns of a data-kind model, in declaration order."""
    return [
        f.name for f in model._meta.get_fields()
        if getattr(f, 'concrete', False) and f.get_internal_type() in ('FloatField', 'IntegerField')
    ]


def _coerce_record(model, raw: Dict[str, Any]) -> Dict[str, Any]:
    values = {}
    for f in model._meta.get_fields():
        if not getattr(f, 'concrete', False):
            continue
        kind = f.get_internal_type()
        if kind == 'IntegerField':
            values[f.name] = to_int(raw.get(f.name))
        elif kind == 'FloatField':
            values[f.name] = to_float(raw.get(f.name))
    return values


def _parse_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError as exc:
        raise ImportValidationError(f"Invalid round date: {value!r}") from exc


def is_my_team_name(name: str) -> bool:
    wanted = {n.strip().lower() for n in getattr(settings, 'CESIM_MY_TEAM_NAMES', [])}
    return name.strip().lower() in wanted


# ==============================================================================
#  1. IMPORT
# ==============================================================================

def import_round(number, round_date, bundle: Dict[str, Any], comment: Optional[str] = None) -> Round:
    """Persist a parsed round bundle (see ``ParsedRound.to_dict``).

    Teams are created on first sight. Each data kind gets at most one row per
    (team, round), a second record for the same team replaces the first.
    """
    if number is None or number == '' or not round_date or not bundle:
        raise ImportValidationError("Missing data: round number, round date and data are required")

    try:
        number = int(number)
    except (TypeError, ValueError) as exc:
        raise ImportValidationError(f"Invalid round number: {number!r}") from exc
    if number < 0:
        raise ImportValidationError("The round number must be positive")

    team_names = [str(n).strip() for n in bundle.get('teams') or [] if str(n).strip()]
    if not team_names:
        raise ImportValidationError("Missing data: no team in the imported round")

    round_date = _parse_date(round_date)
    if comment is None:
        comment = f"Round {number} imported on {timezone.now().isoformat()}"

    with transaction.atomic():
        rnd = Round.objects.create(number=number, date=round_date, comment=comment)

        teams: Dict[str, Team] = {}
        for name in dict.fromkeys(team_names):
            team, created = Team.objects.get_or_create(name=name, defaults={'is_my_team': is_my_team_name(name)})
            if created:
                logger.info("Created team %s%s", name, ' (my team)' if team.is_my_team else '')
            teams[name] = team

        for kind in DATA_KINDS:
            model = KIND_MODELS[kind]
            for raw in bundle.get(kind) or []:
                team = teams.get(str(raw.get('team', '')).strip())
                if team is None:
                    logger.warning("Skipping %s record for unknown team %r", kind, raw.get('team'))
                    continue
                model.objects.update_or_create(team=team, round=rnd, defaults=_coerce_record(model, raw))

    logger.info("Imported round %s (id=%s) with %d team(s)", rnd.number, rnd.pk, len(teams))
    return rnd


# ==============================================================================
#  2. DELETE
# ==============================================================================

def delete_round(round_id) -> None:
    rnd = Round.objects.get(pk=round_id)
    with transaction.atomic():
        for model in KIND_MODELS.values():
            model.objects.filter(round=rnd).delete()
        rnd.delete()
    logger.info("Deleted round %s (id=%s)", rnd.number, round_id)


# ==============================================================================
#  3. TEAMS
# ==============================================================================

def ordered_teams():
    return Team.objects.order_by('-is_my_team', 'name')


def get_default_team() -> Optional[Team]:
    """The flagged "my team", else the first team by name."""
    mine = Team.objects.filter(is_my_team=True).order_by('name').first()
    return mine or Team.objects.order_by('name').first()


def serialize_team(team: Team) -> Dict[str, Any]:
    return {'id': team.pk, 'name': team.name, 'isMyTeam': team.is_my_team}


# ==============================================================================
#  4. RECORDS
# ==============================================================================

def filter_records(kind: str, round_id=None, team_name: Optional[str] = None):
    model = KIND_MODELS[kind]
    qs = model.objects.select_related('team', 'round')

    if round_id not in (None, ''):
        qs = qs.filter(round_id=int(round_id))

    if team_name:
        team = Team.objects.filter(name=team_name).first()
        if team is None:
            return model.objects.none()
        qs = qs.filter(team=team)

    return qs.order_by('round__number', 'team__name')


def serialize_record(obj) -> Dict[str, Any]:
    data = {
        'id': obj.pk,
        'team': obj.team.name,
        'teamId': obj.team_id,
        'isMyTeam': obj.team.is_my_team,
        'roundId': obj.round_id,
        'roundNumber': obj.round.number,
    }
    for name in numeric_fields(type(obj)):
        data[name] = getattr(obj, name)
    return data


def team_history(team: Team, kind: str) -> List[Any]:
    model = KIND_MODELS[kind]
    return list(model.objects.filter(team=team).select_related('round', 'team').order_by('round__number'))


def kpi_changes(history: List[Any], field_name: str) -> Dict[str, Any]:
    """Latest value of a field and its % change against the previous round."""
    if not history:
        return {'value': None, 'change': 0.0, 'is_positive': True}

    current = getattr(history[-1], field_name)
    if len(history) < 2:
        return {'value': current, 'change': 0.0, 'is_positive': True}

    previous = getattr(history[-2], field_name)
    if not previous:
        return {'value': current, 'change': 0.0, 'is_positive': True}

    change = (current - previous) / previous * 100.0
    return {'value': current, 'change': round(abs(change), 1), 'is_positive': change >= 0}


# ==============================================================================
#  5. ROUNDS
# ==============================================================================

def serialize_round(rnd: Round) -> Dict[str, Any]:
    return {'id': rnd.pk, 'number': rnd.number, 'date': rnd.date.isoformat(), 'comment': rnd.comment}


def rounds_summary(team: Optional[Team] = None) -> List[Dict[str, Any]]:
    """Rounds by number with the team's performance and market share."""
    team = team or get_default_team()
    if team is None:
        logger.warning("No team found, rounds are listed without team data")

    performances, market_shares = {}, {}
    if team is not None:
        performances = {p.round_id: p for p in Performance.objects.filter(team=team).select_related('team', 'round')}
        market_shares = {m.round_id: m for m in MarketShare.objects.filter(team=team).select_related('team', 'round')}

    rows = []
    for rnd in Round.objects.order_by('number'):
        row = serialize_round(rnd)
        perf = performances.get(rnd.pk)
        share = market_shares.get(rnd.pk)
        row['performance'] = serialize_record(perf) if perf else None
        row['marketShare'] = serialize_record(share) if share else None
        rows.append(row)
    return rows


def round_detail(rnd: Round) -> Dict[str, Any]:
    data = serialize_round(rnd)
    for kind in DATA_KINDS:
        data[kind] = [serialize_record(r) for r in filter_records(kind, round_id=rnd.pk)]
    return data


def search_rounds(rows: Iterable[Dict[str, Any]], term: str) -> List[Dict[str, Any]]:
    term = (term or '').strip().lower()
    if not term:
        return list(rows)
    return [r for r in rows if term in (r.get('comment') or '').lower() or term in str(r['number'])]


def sort_rounds(rows: Iterable[Dict[str, Any]], sort_field: str = 'number', direction: str = 'asc'):
    source, field_name = ROUND_SORT_FIELDS.get(sort_field, ROUND_SORT_FIELDS['number'])

    def key(row):
        if source == 'round':
            return row[field_name]
        record = row.get('performance' if source == 'performance' else 'marketShare') or {}
        return record.get(field_name) or 0

    return sorted(rows, key=key, reverse=(direction == 'desc'))


def latest_round() -> Optional[Round]:
    return Round.objects.order_by('-number', '-pk').first()


# ==============================================================================
#  6. RANKINGS
# ==============================================================================

def rank_teams(kind: str, metric: str, rnd: Optional[Round] = None) -> List[Dict[str, Any]]:
    """Teams ordered on a metric for one round (latest round by default)."""
    model = KIND_MODELS[kind]
    if metric not in numeric_fields(model):
        raise ValueError(f"Unknown metric {metric!r} for {kind}")

    rnd = rnd or latest_round()
    if rnd is None:
        return []

    records = list(model.objects.filter(round=rnd).select_related('team', 'round'))
    if metric in LOWER_IS_BETTER:
        records.sort(key=lambda r: (getattr(r, metric), r.team.name))
    else:
        records.sort(key=lambda r: (-getattr(r, metric), r.team.name))

    return [
        {
            'rank': idx,
            'team': r.team.name,
            'teamId': r.team_id,
            'isMyTeam': r.team.is_my_team,
            'roundNumber': rnd.number,
            'value': getattr(r, metric),
        }
        for idx, r in enumerate(records, 1)
    ]


def metric_series(kind: str, metric: str) -> Dict[str, Any]:
    """Every team's value of a metric across rounds, for comparison charts."""
    model = KIND_MODELS[kind]
    rounds = list(Round.objects.order_by('number'))
    labels = [f"R{r.number}" for r in rounds]
    position = {r.pk: i for i, r in enumerate(rounds)}

    series = {}
    for team in ordered_teams():
        series[team.name] = {'isMyTeam': team.is_my_team, 'values': [None] * len(rounds)}
    for rec in model.objects.select_related('team'):
        if rec.round_id in position:
            series[rec.team.name]['values'][position[rec.round_id]] = getattr(rec, metric)

    return {'labels': labels, 'series': series}
