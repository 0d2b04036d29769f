from django.urls import path            # type:ignore
from . import api, views

urlpatterns = [
    # 1. Dashboard (The Homepage)
    path('', views.dashboard_view, name='dashboard'),

    # 2. Upload Page (Import a CESIM round workbook)
    path('upload/', views.upload_view, name='upload'),

    # 3. Rounds table, detail, delete and Excel export
    path('rounds/', views.rounds_view, name='rounds'),
    path('rounds/<int:pk>/', views.round_detail_view, name='round_detail'),
    path('rounds/<int:pk>/delete/', views.round_delete_view, name='round_delete'),
    path('rounds/<int:pk>/export/', views.export_round_view, name='round_export'),

    # 4. Compare teams (ranking on the latest round + evolution)
    path('compare/', views.compare_view, name='compare'),

    # 5. JSON API
    path('api/teams/', api.team_list, name='api_teams'),
    path('api/teams/<int:pk>/', api.team_detail, name='api_team_detail'),
    path('api/rounds/', api.round_collection, name='api_rounds'),
    path('api/rounds/<int:pk>/', api.round_item, name='api_round_detail'),
    path('api/performances/', api.record_list('performances'), name='api_performances'),
    path('api/market-shares/', api.record_list('market_shares'), name='api_market_shares'),
    path('api/hr/', api.record_list('hr'), name='api_hr'),
    path('api/productions/', api.record_list('productions'), name='api_productions'),
    path('api/financials/', api.record_list('financials'), name='api_financials'),
    path('api/rankings/', api.ranking, name='api_rankings'),
]
