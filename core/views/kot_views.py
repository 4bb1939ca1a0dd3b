"""KOT list, detail, create (cashier/barman) and status update (store keeper/officer)."""
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_http_methods

from core import services
from core.exceptions import ValidationFailed
from core.models import Kot, KotStatus, KotType
from core.permissions import KOT_CREATORS, KOT_PROCESSORS, auth_required, role_required
from core.utils import (
    iso,
    parse_choice,
    parse_json_body,
    parse_positive_int,
    parse_timestamp,
    parse_uuid,
    require_text,
)
from core.views.auth_views import _user_to_dict


def _kot_item_to_dict(i):
    return {
        'id': i.id,
        'lineNumber': i.line_number,
        'menuItemId': i.menu_item_id,
        'menuItem': {
            'id': i.menu_item.id,
            'name': i.menu_item.name,
            'category': i.menu_item.category,
        },
        'quantity': i.quantity,
        'unitPrice': str(i.unit_price),
        'totalPrice': str(i.total_price),
    }


def _kot_to_dict(k, include_items=True):
    """Serialize a KOT with creator and (optionally) its lines in line order."""
    data = {
        'id': k.id,
        'kotNumber': k.kot_number,
        'customerName': k.customer_name,
        'type': k.type,
        'status': k.status,
        'orderTime': iso(k.order_time),
        'expectedTime': iso(k.expected_time),
        'totalAmount': str(k.total_amount),
        'createdById': k.created_by_id,
        'creator': _user_to_dict(k.created_by),
        'processedById': k.processed_by_id,
        'createdAt': iso(k.created_at),
        'updatedAt': iso(k.updated_at),
    }
    if include_items:
        data['items'] = [_kot_item_to_dict(i) for i in k.items.all()]
    return data


def _kot_qs():
    return Kot.objects.select_related('created_by').prefetch_related('items__menu_item')


@auth_required
@require_http_methods(['GET'])
def kot_list(request):
    """GET ?status=&type=&limit= - newest first."""
    qs = _kot_qs().order_by('-created_at')
    status = request.GET.get('status', '').strip()
    if status:
        qs = qs.filter(status=parse_choice(status, KotStatus, 'status'))
    kot_type = request.GET.get('type', '').strip()
    if kot_type:
        qs = qs.filter(type=parse_choice(kot_type, KotType, 'type'))
    limit = request.GET.get('limit', '').strip()
    if limit:
        qs = qs[:parse_positive_int(limit, 'limit')]
    return JsonResponse([_kot_to_dict(k) for k in qs], safe=False)


@auth_required
@require_http_methods(['GET'])
def kot_detail(request, pk):
    k = get_object_or_404(_kot_qs(), pk=pk)
    return JsonResponse(_kot_to_dict(k))


@auth_required
@role_required(*KOT_CREATORS)
@require_http_methods(['POST'])
def kot_create(request):
    """
    POST { "kot": { customerName, type, orderTime, expectedTime },
           "items": [ { menuItemId, quantity }, ... ] }
    Any unitPrice sent with an item is ignored; prices come from the menu.
    """
    body = parse_json_body(request)
    kot_data = body.get('kot')
    if not isinstance(kot_data, dict):
        raise ValidationFailed('kot is required')
    raw_items = body.get('items')
    if not isinstance(raw_items, list) or not raw_items:
        raise ValidationFailed('At least one item is required')
    items = []
    for n, raw in enumerate(raw_items, start=1):
        if not isinstance(raw, dict):
            raise ValidationFailed(f'items[{n}] must be an object')
        items.append((
            parse_uuid(raw.get('menuItemId'), f'items[{n}].menuItemId'),
            parse_positive_int(
                raw.get('quantity'), f'items[{n}].quantity',
                maximum=services.MAX_KOT_ITEM_QUANTITY,
            ),
        ))
    order_time = parse_timestamp(kot_data.get('orderTime'), 'orderTime')
    expected_time = parse_timestamp(kot_data.get('expectedTime'), 'expectedTime')
    kot = services.create_kot(
        user=request.user,
        customer_name=require_text(kot_data, 'customerName'),
        kot_type=parse_choice(kot_data.get('type'), KotType, 'type'),
        order_time=order_time,
        expected_time=expected_time,
        items=items,
    )
    return JsonResponse(_kot_to_dict(get_object_or_404(_kot_qs(), pk=kot.pk)), status=201)


@auth_required
@role_required(*KOT_PROCESSORS)
@require_http_methods(['PATCH'])
def kot_update_status(request, pk):
    """PATCH { status }. Allowed moves: pending -> processing|cancelled, processing -> completed."""
    body = parse_json_body(request)
    new_status = body.get('status')
    if not isinstance(new_status, str) or not new_status:
        raise ValidationFailed('status is required')
    kot = services.advance_kot_status(pk, new_status, request.user)
    return JsonResponse(_kot_to_dict(get_object_or_404(_kot_qs(), pk=kot.pk)))


@require_http_methods(['GET', 'POST'])
def kot_list_or_create(request):
    """GET -> list, POST -> create (same path)."""
    if request.method == 'GET':
        return kot_list(request)
    return kot_create(request)
