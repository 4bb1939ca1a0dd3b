"""
Menu item catalogue: list (optionally filtered by category), create (admin)
and the declarative menu item -> ingredient mapping (admin).
"""
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from core import services
from core.models import KotType, MenuItem
from core.permissions import ADMINS, auth_required, role_required
from core.utils import (
    iso,
    parse_bool,
    parse_choice,
    parse_decimal,
    parse_json_body,
    parse_uuid,
    require_text,
)


def _menu_item_to_dict(m, include_ingredients=False):
    data = {
        'id': m.id,
        'name': m.name,
        'description': m.description or '',
        'price': str(m.price),
        'category': m.category,
        'isActive': m.is_active,
        'createdAt': iso(m.created_at),
        'updatedAt': iso(m.updated_at),
    }
    if include_ingredients:
        data['ingredients'] = [
            _menu_item_ingredient_to_dict(link)
            for link in m.ingredient_links.select_related('ingredient').all()
        ]
    return data


def _menu_item_ingredient_to_dict(link):
    return {
        'id': link.id,
        'menuItemId': link.menu_item_id,
        'ingredientId': link.ingredient_id,
        'ingredientName': link.ingredient.name,
        'unit': link.ingredient.unit,
        'quantity': str(link.quantity),
    }


@auth_required
@require_http_methods(['GET'])
def menu_item_list(request):
    """GET ?category=restaurant|bar. Inactive items are included; the client greys them out."""
    qs = MenuItem.objects.order_by('name')
    category = request.GET.get('category', '').strip()
    if category:
        qs = qs.filter(category=parse_choice(category, KotType, 'category'))
    return JsonResponse([_menu_item_to_dict(m) for m in qs], safe=False)


@auth_required
@role_required(*ADMINS)
@require_http_methods(['POST'])
def menu_item_create(request):
    """POST { name, price, category, description?, isActive? }."""
    body = parse_json_body(request)
    item = services.create_menu_item(
        name=require_text(body, 'name'),
        price=parse_decimal(body.get('price'), 'price', minimum=0),
        category=parse_choice(body.get('category'), KotType, 'category'),
        description=(body.get('description') or '').strip(),
        is_active=parse_bool(body.get('isActive', True), 'isActive'),
    )
    return JsonResponse(_menu_item_to_dict(item), status=201)


@auth_required
@role_required(*ADMINS)
@require_http_methods(['POST'])
def menu_item_add_ingredient(request, pk):
    """POST { ingredientId, quantity } - quantity of the ingredient per unit sold."""
    body = parse_json_body(request)
    link = services.add_menu_item_ingredient(
        menu_item_id=pk,
        ingredient_id=parse_uuid(body.get('ingredientId'), 'ingredientId'),
        quantity=parse_decimal(
            body.get('quantity'), 'quantity', places=3, minimum=0, exclusive_minimum=True
        ),
    )
    return JsonResponse(_menu_item_ingredient_to_dict(link), status=201)


@require_http_methods(['GET', 'POST'])
def menu_item_list_or_create(request):
    """GET -> list, POST -> create (same path)."""
    if request.method == 'GET':
        return menu_item_list(request)
    return menu_item_create(request)
