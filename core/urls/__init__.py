# URL packages - one module per workflow area, all mounted under /api/ without trailing slashes.
from django.urls import path, include

urlpatterns = [
    path('auth/', include('core.urls.auth_urls')),
    path('', include('core.urls.catalogue_urls')),
    path('', include('core.urls.kot_urls')),
    path('', include('core.urls.stock_urls')),
    path('', include('core.urls.bill_urls')),
]
