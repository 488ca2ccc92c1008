"""
Agents API URLs

All routes are relative to /api/agents/
"""
from django.urls import path

from . import views

urlpatterns = [
    path('', views.AgentsListCreateView.as_view(), name='agents_list'),
    path('active', views.ActiveAgentsView.as_view(), name='agents_active'),
    path('<str:agent_id>', views.AgentDetailView.as_view(), name='agent_detail'),
    path('<str:agent_id>/transactions', views.AgentTransactionsView.as_view(), name='agent_transactions'),
    path(
        '<str:agent_id>/commission-summary',
        views.AgentCommissionSummaryView.as_view(),
        name='agent_commission_summary',
    ),
]
