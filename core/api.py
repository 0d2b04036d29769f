"""JSON endpoints over teams, rounds and the five round data kinds."""
import functools
import json
import logging

from django.http import JsonResponse                                    # type:ignore
from django.views.decorators.csrf import csrf_exempt                    # type:ignore
from django.views.decorators.http import require_GET, require_http_methods  # type:ignore

from .constants import DATA_KINDS, METRIC_OPTIONS
from .excel_parser import WorkbookError, parse_round_workbook
from .models import Round, Team
from .services import (
    ImportValidationError, delete_round, filter_records, import_round, ordered_teams, rank_teams,
    round_detail, rounds_summary, serialize_record, serialize_team,
)

logger = logging.getLogger(__name__)


def _error(message, status):
    return JsonResponse({'error': message}, status=status)


def _server_errors(action):
    """Log any unexpected failure of the wrapped view and answer 500."""
    def decorator(view):
        @functools.wraps(view)
        def wrapper(request, *args, **kwargs):
            try:
                return view(request, *args, **kwargs)
            except Exception:
                logger.exception("Error while %s", action)
                return _error(f"Server error while {action}", 500)
        return wrapper
    return decorator


def _team_param(request):
    return request.GET.get('team') or request.GET.get('equipe')


# ==============================================================================
# 1. TEAMS
# ==============================================================================

@require_GET
@_server_errors('fetching teams')
def team_list(request):
    return JsonResponse([serialize_team(t) for t in ordered_teams()], safe=False)


@require_GET
@_server_errors('fetching the team')
def team_detail(request, pk):
    team = Team.objects.filter(pk=pk).first()
    if team is None:
        return _error('Team not found', 404)
    return JsonResponse(serialize_team(team))


# ==============================================================================
# 2. ROUNDS
# ==============================================================================

def _read_import_request(request):
    """(number, date, bundle, comment, logs) from a JSON or multipart import request."""
    if request.content_type == 'application/json':
        try:
            body = json.loads(request.body or b'{}')
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ImportValidationError(f"Invalid JSON body: {exc}") from exc
        if not isinstance(body, dict):
            raise ImportValidationError('Invalid JSON body: an object is expected')
        bundle = body.get('data')
        logs = bundle.get('logs', []) if isinstance(bundle, dict) else []
        return body.get('roundNumber'), body.get('roundDate'), bundle, body.get('comment'), logs

    number = request.POST.get('round_number', request.POST.get('roundNumber'))
    round_date = request.POST.get('round_date', request.POST.get('roundDate'))
    upload = request.FILES.get('file')
    if number in (None, '') or not round_date or upload is None:
        raise ImportValidationError('Missing data: round_number, round_date and file are required')

    parsed = parse_round_workbook(upload)
    return number, round_date, parsed.to_dict(), request.POST.get('comment') or None, parsed.logs


@csrf_exempt
@require_http_methods(['GET', 'POST'])
def round_collection(request):
    if request.method == 'GET':
        return _round_list(request)
    return _round_import(request)


@_server_errors('fetching rounds')
def _round_list(request):
    team = None
    team_id = request.GET.get('teamId')
    if team_id:
        if not team_id.isdigit():
            return _error('teamId must be an integer', 400)
        team = Team.objects.filter(pk=int(team_id)).first()
        if team is None:
            return _error('Team not found', 404)
    return JsonResponse(rounds_summary(team), safe=False)


@_server_errors('importing the round')
def _round_import(request):
    try:
        number, round_date, bundle, comment, logs = _read_import_request(request)
        if not isinstance(bundle, dict):
            raise ImportValidationError('Missing data: round number, round date and data are required')
        rnd = import_round(number, round_date, bundle, comment=comment)
    except (ImportValidationError, WorkbookError) as exc:
        logger.warning("Rejected round import: %s", exc)
        return _error(str(exc), 400)

    return JsonResponse({'success': True, 'roundId': rnd.pk, 'logs': logs})


@csrf_exempt
@require_http_methods(['GET', 'DELETE'])
@_server_errors('handling the round')
def round_item(request, pk):
    if not Round.objects.filter(pk=pk).exists():
        return _error('Round not found', 404)

    if request.method == 'DELETE':
        delete_round(pk)
        return JsonResponse({'success': True})

    return JsonResponse(round_detail(Round.objects.get(pk=pk)))


# ==============================================================================
# 3. ROUND DATA (performances, market shares, hr, productions, financials)
# ==============================================================================

def record_list(kind):
    @require_GET
    @_server_errors(f"fetching {kind.replace('_', ' ')}")
    def view(request):
        round_id = request.GET.get('roundId')
        if round_id and not round_id.isdigit():
            return _error('roundId must be an integer', 400)
        records = filter_records(kind, round_id=round_id, team_name=_team_param(request))
        return JsonResponse([serialize_record(r) for r in records], safe=False)

    view.__name__ = f"{kind}_list"
    return view


# ==============================================================================
# 4. RANKINGS
# ==============================================================================

@require_GET
@_server_errors('computing the ranking')
def ranking(request):
    category = request.GET.get('category', 'performances')
    if category not in DATA_KINDS:
        return _error(f"Unknown category '{category}'", 400)

    metric = request.GET.get('metric') or METRIC_OPTIONS[category][0][0]

    rnd = None
    round_id = request.GET.get('roundId')
    if round_id:
        rnd = Round.objects.filter(pk=round_id).first() if round_id.isdigit() else None
        if rnd is None:
            return _error('Round not found', 404)

    try:
        rows = rank_teams(category, metric, rnd)
    except ValueError as exc:
        return _error(str(exc), 400)
    return JsonResponse({'category': category, 'metric': metric, 'rankings': rows})
