"""Stock addition requests (store keeper) and their approval/rejection (authorising officer)."""
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from core import services
from core.models import ApprovalStatus, StockAddition
from core.permissions import (
    APPROVERS,
    STOCK_REQUESTERS,
    STOCK_VIEWERS,
    auth_required,
    role_required,
)
from core.utils import iso, parse_choice, parse_decimal, parse_json_body, parse_uuid
from core.views.auth_views import _user_to_dict
from core.views.ingredient_views import _ingredient_to_dict


def _stock_addition_to_dict(s):
    return {
        'id': s.id,
        'ingredientId': s.ingredient_id,
        'ingredient': _ingredient_to_dict(s.ingredient),
        'quantity': str(s.quantity),
        'costPerUnit': str(s.cost_per_unit),
        'totalCost': str(s.total_cost),
        'status': s.status,
        'addedById': s.added_by_id,
        'addedBy': _user_to_dict(s.added_by),
        'approvedById': s.approved_by_id,
        'reason': s.reason or None,
        'createdAt': iso(s.created_at),
        'updatedAt': iso(s.updated_at),
    }


def _stock_addition_response(pk, status=200):
    s = StockAddition.objects.select_related('ingredient', 'added_by').get(pk=pk)
    return JsonResponse(_stock_addition_to_dict(s), status=status)


@auth_required
@role_required(*STOCK_VIEWERS)
@require_http_methods(['GET'])
def stock_addition_list(request):
    """GET ?status=pending|approved|rejected - newest first."""
    qs = StockAddition.objects.select_related('ingredient', 'added_by').order_by('-created_at')
    status = request.GET.get('status', '').strip()
    if status:
        qs = qs.filter(status=parse_choice(status, ApprovalStatus, 'status'))
    return JsonResponse([_stock_addition_to_dict(s) for s in qs], safe=False)


@auth_required
@role_required(*STOCK_REQUESTERS)
@require_http_methods(['POST'])
def stock_addition_create(request):
    """POST { ingredientId, quantity (> 0), costPerUnit (>= 0) }. Starts pending; stock is untouched."""
    body = parse_json_body(request)
    addition = services.create_stock_addition(
        user=request.user,
        ingredient_id=parse_uuid(body.get('ingredientId'), 'ingredientId'),
        quantity=parse_decimal(
            body.get('quantity'), 'quantity', places=3, minimum=0, exclusive_minimum=True
        ),
        cost_per_unit=parse_decimal(body.get('costPerUnit'), 'costPerUnit', minimum=0),
    )
    return _stock_addition_response(addition.pk, status=201)


@auth_required
@role_required(*APPROVERS)
@require_http_methods(['PATCH'])
def stock_addition_approve(request, pk):
    addition = services.approve_stock_addition(pk, request.user)
    return _stock_addition_response(addition.pk)


@auth_required
@role_required(*APPROVERS)
@require_http_methods(['PATCH'])
def stock_addition_reject(request, pk):
    """PATCH { reason } - reason is mandatory."""
    body = parse_json_body(request)
    reason = body.get('reason')
    addition = services.reject_stock_addition(
        pk, request.user, reason if isinstance(reason, str) else ''
    )
    return _stock_addition_response(addition.pk)


@require_http_methods(['GET', 'POST'])
def stock_addition_list_or_create(request):
    """GET -> list, POST -> create (same path)."""
    if request.method == 'GET':
        return stock_addition_list(request)
    return stock_addition_create(request)
