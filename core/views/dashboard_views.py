"""Dashboard summary counts shown on every role's landing page."""
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from core import services
from core.permissions import auth_required
from core.utils import money


@auth_required
@require_http_methods(['GET'])
def dashboard_stats(request):
    """GET -> { totalUsers, todayOrders, stockItems, todayRevenue }."""
    stats = services.dashboard_stats()
    return JsonResponse({
        'totalUsers': stats['total_users'],
        'todayOrders': stats['today_orders'],
        'stockItems': stats['stock_items'],
        'todayRevenue': money(stats['today_revenue']),
    })
