import logging
from io import BytesIO

import pandas as pd
from django.contrib import messages                                 #type:ignore
from django.http import HttpResponse                                #type:ignore
from django.shortcuts import render, redirect, get_object_or_404    #type:ignore
from django.views.decorators.http import require_POST               #type:ignore

from .constants import DATA_KINDS, KIND_LABELS, KPI_CARDS, METRIC_OPTIONS, ROUND_SORT_FIELDS, ROUND_SORT_LABELS
from .excel_parser import WorkbookError, parse_round_workbook
from .forms import UploadRoundForm
from .models import Round, Team
from .services import (
    KIND_MODELS, ImportValidationError, delete_round, filter_records, get_default_team, import_round,
    kpi_changes, latest_round, metric_series, numeric_fields, ordered_teams, rank_teams, rounds_summary,
    search_rounds, sort_rounds, team_history,
)
from .templatetags.cesim_format import field_label

logger = logging.getLogger(__name__)

# Series drawn on the dashboard charts, per data kind
DASHBOARD_CHARTS = {
    'performances': ['revenue_global', 'net_income_global', 'ebitda_global', 'ebit_global'],
    'market_shares': ['market_share_global', 'tech1_share_global', 'tech2_share_global',
                      'tech3_share_global', 'tech4_share_global'],
    'financials': ['total_assets', 'total_equity', 'total_debt', 'cash'],
    'hr': ['rd_staff', 'training_budget', 'monthly_salary'],
    'productions': ['tech1_production_usa', 'tech2_production_usa', 'tech1_production_asia',
                    'tech2_production_asia'],
}

# ==============================================================================
#  INTERNAL HELPER FUNCTIONS
# ==============================================================================

def _selected_team(request):
    """Team from ?team=<id>, falling back to "my team"."""
    team_id = request.GET.get('team')
    if team_id and team_id.isdigit():
        team = Team.objects.filter(pk=int(team_id)).first()
        if team:
            return team
    return get_default_team()


def _category_and_metric(request):
    category = request.GET.get('category', 'performances')
    if category not in METRIC_OPTIONS:
        category = 'performances'
    options = [m for m, _ in METRIC_OPTIONS[category]]
    metric = request.GET.get('metric')
    if metric not in options:
        metric = options[0]
    return category, metric


def _kind_table(kind, records):
    fields = numeric_fields(KIND_MODELS[kind])
    return {
        'kind': kind,
        'title': KIND_LABELS[kind],
        'columns': [(f, field_label(f)) for f in fields],
        'rows': [
            {
                'team': r.team.name,
                'is_my_team': r.team.is_my_team,
                'values': [(f, getattr(r, f)) for f in fields],
            }
            for r in records
        ],
    }


# ==============================================================================
# 1. DASHBOARD VIEW
# ==============================================================================
def dashboard_view(request):
    team = _selected_team(request)
    teams = list(ordered_teams())

    kpis, charts = [], {}
    if team is not None:
        histories = {kind: team_history(team, kind) for kind in DATA_KINDS}

        for kind, field_name, label in KPI_CARDS:
            item = kpi_changes(histories[kind], field_name)
            item.update({'label': label, 'field': field_name})
            kpis.append(item)

        for kind, fields in DASHBOARD_CHARTS.items():
            history = histories[kind]
            charts[kind] = {
                'title': KIND_LABELS[kind],
                'labels': [f"R{r.round.number}" for r in history],
                'series': {field_label(f): [getattr(r, f) for r in history] for f in fields},
            }

    context = {
        'teams': teams,
        'team': team,
        'kpis': kpis,
        'charts': charts,
        'has_data': any(c['labels'] for c in charts.values()),
        'latest_round': latest_round(),
    }
    return render(request, 'core/dashboard.html', context)

# ==============================================================================
# 2. ROUNDS TABLE
# ==============================================================================
def rounds_view(request):
    team = _selected_team(request)
    search = request.GET.get('q', '')
    sort_field = request.GET.get('sort', 'number')
    direction = 'desc' if request.GET.get('dir') == 'desc' else 'asc'
    if sort_field not in ROUND_SORT_FIELDS:
        sort_field = 'number'

    rows = sort_rounds(search_rounds(rounds_summary(team), search), sort_field, direction)

    context = {
        'rounds': rows,
        'team': team,
        'teams': ordered_teams(),
        'search': search,
        'sort': sort_field,
        'dir': direction,
        'next_dir': 'desc' if direction == 'asc' else 'asc',
        'sort_columns': ROUND_SORT_LABELS,
    }
    return render(request, 'core/rounds.html', context)


def round_detail_view(request, pk):
    rnd = get_object_or_404(Round, pk=pk)
    tables = [_kind_table(kind, filter_records(kind, round_id=rnd.pk)) for kind in DATA_KINDS]
    return render(request, 'core/round_detail.html', {'round': rnd, 'tables': tables})


@require_POST
def round_delete_view(request, pk):
    rnd = get_object_or_404(Round, pk=pk)
    try:
        delete_round(rnd.pk)
        messages.success(request, f"Round {rnd.number} deleted.")
    except Exception as e:
        logger.exception("Failed to delete round %s", pk)
        messages.error(request, f"Delete Failed: {str(e)}")
    return redirect('rounds')

# ==============================================================================
# 3. UPLOAD VIEW
# ==============================================================================
def upload_view(request):
    logs = []
    if request.method == 'POST':
        form = UploadRoundForm(request.POST, request.FILES)
        if form.is_valid():
            try:
                parsed = parse_round_workbook(request.FILES['file'])
                logs = parsed.logs
                rnd = import_round(
                    form.cleaned_data['round_number'],
                    form.cleaned_data['round_date'],
                    parsed.to_dict(),
                    comment=form.cleaned_data['comment'] or None,
                )
                messages.success(request, f"Round {rnd.number} imported for {len(parsed.teams)} teams.")
                if parsed.defaulted_cells:
                    messages.warning(
                        request,
                        f"{parsed.defaulted_cells} cell(s) could not be read and were stored as 0, check the log below.",
                    )
                form = UploadRoundForm()
            except (WorkbookError, ImportValidationError) as e:
                messages.error(request, f"Upload Failed: {str(e)}")
            except Exception as e:
                logger.exception("Round upload failed")
                messages.error(request, f"Upload Failed: {str(e)}")
    else:
        form = UploadRoundForm()
    return render(request, 'core/upload.html', {'form': form, 'logs': logs})

# ==============================================================================
# 4. COMPARE (RANKING + EVOLUTION)
# ==============================================================================
def compare_view(request):
    category, metric = _category_and_metric(request)
    rnd = latest_round()

    context = {
        'categories': [(k, KIND_LABELS[k]) for k in METRIC_OPTIONS],
        'category': category,
        'metric_options': METRIC_OPTIONS[category],
        'metric': metric,
        'metric_label': dict(METRIC_OPTIONS[category]).get(metric, field_label(metric)),
        'round': rnd,
        'rankings': rank_teams(category, metric, rnd) if rnd else [],
        'series': metric_series(category, metric),
    }
    return render(request, 'core/compare.html', context)

# ==============================================================================
# 5. EXPORT ROUND (Excel)
# ==============================================================================
def export_round_view(request, pk):
    rnd = get_object_or_404(Round, pk=pk)

    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        for kind in DATA_KINDS:
            fields = numeric_fields(KIND_MODELS[kind])
            data = list(filter_records(kind, round_id=rnd.pk).values('team__name', *fields))
            df = pd.DataFrame(data, columns=['team__name'] + fields)
            df = df.rename(columns={'team__name': 'Team', **{f: field_label(f) for f in fields}})
            df.to_excel(writer, sheet_name=KIND_LABELS[kind][:31], index=False)

    buffer.seek(0)
    response = HttpResponse(buffer.getvalue(), content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet')
    response['Content-Disposition'] = f'attachment; filename="Round_{rnd.number}.xlsx"'
    return response
