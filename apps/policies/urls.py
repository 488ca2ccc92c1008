"""
Policies API URLs

All routes are relative to /api/policies/
"""
from django.urls import path

from . import views

urlpatterns = [
    path('', views.PoliciesListCreateView.as_view(), name='policies_list'),
    path('expiring', views.ExpiringPoliciesView.as_view(), name='policies_expiring'),
    path('statistics', views.PolicyStatisticsView.as_view(), name='policies_statistics'),
    path('rate-defaults', views.RateDefaultsView.as_view(), name='policies_rate_defaults'),
    path('calculate', views.CalculatePolicyView.as_view(), name='policies_calculate'),
    path('refresh-statuses', views.RefreshPolicyStatusesView.as_view(), name='policies_refresh_statuses'),
    path('<str:policy_id>', views.PolicyDetailView.as_view(), name='policy_detail'),
]
