from django.contrib import admin            # type: ignore
from django.db.models import Count          # type: ignore
from .models import Team, Round, Performance, MarketShare, HrData, Production, Financial

# --- 1. Teams ---
@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ('name', 'is_my_team')
    list_editable = ('is_my_team',)
    search_fields = ('name',)

# --- 2. Rounds ---
@admin.register(Round)
class RoundAdmin(admin.ModelAdmin):
    list_display = ('number', 'date', 'team_count', 'comment')
    search_fields = ('comment',)
    ordering = ('number',)

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_team_count=Count('performance', distinct=True))

    @admin.display(description='Teams', ordering='_team_count')
    def team_count(self, obj):
        return obj._team_count

# --- 3. Round data (one row per team and round) ---
class RoundRecordAdmin(admin.ModelAdmin):
    list_select_related = ('team', 'round')
    list_filter = ('round', 'team')
    search_fields = ('team__name',)
    ordering = ('round__number', 'team__name')


@admin.register(Performance)
class PerformanceAdmin(RoundRecordAdmin):
    list_display = ('team', 'round', 'revenue_global', 'net_income_global', 'ebitda_global', 'share_price')


@admin.register(MarketShare)
class MarketShareAdmin(RoundRecordAdmin):
    list_display = ('team', 'round', 'market_share_global', 'market_share_usa', 'market_share_europe', 'market_share_asia')


@admin.register(HrData)
class HrDataAdmin(RoundRecordAdmin):
    list_display = ('team', 'round', 'rd_staff', 'turnover_rate', 'training_budget', 'monthly_salary')


@admin.register(Production)
class ProductionAdmin(RoundRecordAdmin):
    list_display = ('team', 'round', 'plants_usa', 'plants_asia', 'capacity_usa', 'capacity_asia')


@admin.register(Financial)
class FinancialAdmin(RoundRecordAdmin):
    list_display = ('team', 'round', 'total_assets', 'total_equity', 'total_debt', 'cash')
