"""Bill API URL configuration."""
from django.urls import path
from core.views.bill_views import bill_list_or_create, bill_pay, bill_pdf

urlpatterns = [
    path('bills', bill_list_or_create),
    path('bills/<uuid:pk>/pay', bill_pay),
    path('bills/<uuid:pk>/pdf', bill_pdf),
]
