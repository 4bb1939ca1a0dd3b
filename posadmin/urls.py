from django.conf import settings
from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path


def api_index(request):
    """GET / -> venue name and where the API and admin are mounted."""
    return JsonResponse({
        'venue': settings.POS_VENUE_NAME,
        'api': '/api/',
        'admin': '/admin/',
        'demoLogin': settings.POS_DEMO_LOGIN_ENABLED,
    })


urlpatterns = [
    path('', api_index),
    path('api/', include('core.urls')),
    path('admin/', admin.site.urls),
]
