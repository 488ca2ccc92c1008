"""
Dashboard API URLs

All routes are relative to /api/dashboard/
"""
from django.urls import path

from . import views

urlpatterns = [
    path('', views.DashboardSummaryView.as_view(), name='dashboard_summary'),
]
