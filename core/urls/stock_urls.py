"""Stock addition API URL configuration."""
from django.urls import path
from core.views.stock_addition_views import (
    stock_addition_list_or_create,
    stock_addition_approve,
    stock_addition_reject,
)

urlpatterns = [
    path('stock-additions', stock_addition_list_or_create),
    path('stock-additions/<uuid:pk>/approve', stock_addition_approve),
    path('stock-additions/<uuid:pk>/reject', stock_addition_reject),
]
