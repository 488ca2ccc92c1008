"""
Vehicle Classes API URLs

All routes are relative to /api/vehicle-classes/
"""
from django.urls import path

from . import views

urlpatterns = [
    path('', views.VehicleClassesListCreateView.as_view(), name='vehicle_classes_list'),
    path('active', views.ActiveVehicleClassesView.as_view(), name='vehicle_classes_active'),
    path('<str:vehicle_class_id>', views.VehicleClassDetailView.as_view(), name='vehicle_class_detail'),
    path(
        '<str:vehicle_class_id>/transactions',
        views.VehicleClassTransactionsView.as_view(),
        name='vehicle_class_transactions',
    ),
]
