"""
URL Configuration for BrokerDesk Backend API

All routes are prefixed with /api/.
"""
from django.contrib import admin
from django.urls import include, path

from apps.core.views import health_check

urlpatterns = [
    # Django Admin
    path('admin/', admin.site.urls),

    # Health check endpoint (public)
    path('api/health', health_check, name='health_check'),

    # Back-office users
    path('api/users/', include('apps.users.urls')),

    # Rate table masters
    path('api/insurance-providers/', include('apps.providers.urls')),
    path('api/vehicle-classes/', include('apps.vehicle_classes.urls')),

    # Agents endpoints
    path('api/agents/', include('apps.agents.urls')),

    # Policies endpoints
    path('api/policies/', include('apps.policies.urls')),

    # Dashboard endpoints
    path('api/dashboard/', include('apps.dashboard.urls')),
]
