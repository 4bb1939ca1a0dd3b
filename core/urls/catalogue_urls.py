"""Dashboard, test accounts, ingredients and menu items."""
from django.urls import path
from core.views.auth_views import test_accounts
from core.views.dashboard_views import dashboard_stats
from core.views.ingredient_views import ingredient_list_or_create, ingredient_low_stock
from core.views.menu_views import menu_item_list_or_create, menu_item_add_ingredient

urlpatterns = [
    path('test-accounts', test_accounts),
    path('dashboard/stats', dashboard_stats),
    path('ingredients', ingredient_list_or_create),
    path('ingredients/low-stock', ingredient_low_stock),
    path('menu-items', menu_item_list_or_create),
    path('menu-items/<uuid:pk>/ingredients', menu_item_add_ingredient),
]
