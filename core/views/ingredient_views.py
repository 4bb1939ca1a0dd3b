"""Ingredient list, create (admin) and low-stock listing."""
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from core import services
from core.models import Ingredient
from core.permissions import ADMINS, LOW_STOCK_VIEWERS, auth_required, role_required
from core.utils import iso, parse_decimal, parse_json_body, require_text


def _ingredient_to_dict(i):
    return {
        'id': i.id,
        'name': i.name,
        'unit': i.unit,
        'currentStock': str(i.current_stock),
        'minimumThreshold': str(i.minimum_threshold),
        'costPerUnit': str(i.cost_per_unit),
        'isLowStock': i.is_low_stock,
        'createdAt': iso(i.created_at),
        'updatedAt': iso(i.updated_at),
    }


@auth_required
@require_http_methods(['GET'])
def ingredient_list(request):
    qs = Ingredient.objects.order_by('name')
    return JsonResponse([_ingredient_to_dict(i) for i in qs], safe=False)


@auth_required
@role_required(*ADMINS)
@require_http_methods(['POST'])
def ingredient_create(request):
    """POST { name, unit, currentStock?, minimumThreshold?, costPerUnit? }."""
    body = parse_json_body(request)
    ingredient = services.create_ingredient(
        name=require_text(body, 'name'),
        unit=require_text(body, 'unit'),
        current_stock=parse_decimal(
            body.get('currentStock', 0), 'currentStock', places=3, minimum=0
        ),
        minimum_threshold=parse_decimal(
            body.get('minimumThreshold', 0), 'minimumThreshold', places=3, minimum=0
        ),
        cost_per_unit=parse_decimal(body.get('costPerUnit', 0), 'costPerUnit', minimum=0),
    )
    return JsonResponse(_ingredient_to_dict(ingredient), status=201)


@auth_required
@role_required(*LOW_STOCK_VIEWERS)
@require_http_methods(['GET'])
def ingredient_low_stock(request):
    return JsonResponse(
        [_ingredient_to_dict(i) for i in services.low_stock_ingredients()], safe=False
    )


@require_http_methods(['GET', 'POST'])
def ingredient_list_or_create(request):
    """GET -> list, POST -> create (same path)."""
    if request.method == 'GET':
        return ingredient_list(request)
    return ingredient_create(request)
