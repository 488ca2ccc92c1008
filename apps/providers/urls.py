"""
Insurance Providers API URLs

All routes are relative to /api/insurance-providers/
"""
from django.urls import path

from . import views

urlpatterns = [
    path('', views.ProvidersListCreateView.as_view(), name='providers_list'),
    path('active', views.ActiveProvidersView.as_view(), name='providers_active'),
    path('<str:provider_id>', views.ProviderDetailView.as_view(), name='provider_detail'),
    path('<str:provider_id>/transactions', views.ProviderTransactionsView.as_view(), name='provider_transactions'),
]
