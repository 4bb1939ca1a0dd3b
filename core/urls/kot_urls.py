"""KOT and order reversal API URL configuration."""
from django.urls import path
from core.views.kot_views import kot_list_or_create, kot_detail, kot_update_status
from core.views.reversal_views import (
    reversal_list_or_create,
    reversal_approve,
    reversal_reject,
)

urlpatterns = [
    path('kots', kot_list_or_create),
    path('kots/<uuid:pk>', kot_detail),
    path('kots/<uuid:pk>/status', kot_update_status),
    path('order-reversals', reversal_list_or_create),
    path('order-reversals/<uuid:pk>/approve', reversal_approve),
    path('order-reversals/<uuid:pk>/reject', reversal_reject),
]
