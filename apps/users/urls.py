"""
Users API URLs

All routes are relative to /api/users/
"""
from django.urls import path

from . import views

urlpatterns = [
    path('', views.UsersListCreateView.as_view(), name='users_list'),
    path('me', views.CurrentUserView.as_view(), name='users_me'),
    path('<str:user_id>', views.UserDetailView.as_view(), name='user_detail'),
]
