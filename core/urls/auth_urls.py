"""Auth API URL configuration."""
from django.urls import path
from core.views.auth_views import (
    login,
    logout,
    current_user,
    demo_login,
    demo_logout,
    switch_test_account,
)

urlpatterns = [
    path('login', login),
    path('logout', logout),
    path('user', current_user),
    path('demo-login', demo_login),
    path('demo-logout', demo_logout),
    path('switch-test-account', switch_test_account),
]
