"""Order reversal requests and their approval/rejection by the authorising officer."""
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from core import services
from core.models import ApprovalStatus, OrderReversal
from core.permissions import APPROVERS, REVERSAL_REQUESTERS, auth_required, role_required
from core.utils import iso, parse_choice, parse_json_body, parse_uuid, require_text
from core.views.auth_views import _user_to_dict
from core.views.kot_views import _kot_to_dict


def _reversal_to_dict(r):
    return {
        'id': r.id,
        'kotId': r.kot_id,
        'kot': _kot_to_dict(r.kot, include_items=False),
        'reason': r.reason,
        'status': r.status,
        'requestedById': r.requested_by_id,
        'requestedBy': _user_to_dict(r.requested_by),
        'approvedById': r.approved_by_id,
        'createdAt': iso(r.created_at),
        'updatedAt': iso(r.updated_at),
    }


def _reversal_qs():
    return OrderReversal.objects.select_related('kot', 'kot__created_by', 'requested_by')


@auth_required
@role_required(*APPROVERS)
@require_http_methods(['GET'])
def reversal_list(request):
    """GET ?status= - newest first."""
    qs = _reversal_qs().order_by('-created_at')
    status = request.GET.get('status', '').strip()
    if status:
        qs = qs.filter(status=parse_choice(status, ApprovalStatus, 'status'))
    return JsonResponse([_reversal_to_dict(r) for r in qs], safe=False)


@auth_required
@role_required(*REVERSAL_REQUESTERS)
@require_http_methods(['POST'])
def reversal_create(request):
    """POST { kotId, reason }."""
    body = parse_json_body(request)
    reversal = services.create_order_reversal(
        user=request.user,
        kot_id=parse_uuid(body.get('kotId'), 'kotId'),
        reason=require_text(body, 'reason'),
    )
    return JsonResponse(_reversal_to_dict(_reversal_qs().get(pk=reversal.pk)), status=201)


@auth_required
@role_required(*APPROVERS)
@require_http_methods(['PATCH'])
def reversal_approve(request, pk):
    reversal = services.approve_order_reversal(pk, request.user)
    return JsonResponse(_reversal_to_dict(_reversal_qs().get(pk=reversal.pk)))


@auth_required
@role_required(*APPROVERS)
@require_http_methods(['PATCH'])
def reversal_reject(request, pk):
    reversal = services.reject_order_reversal(pk, request.user)
    return JsonResponse(_reversal_to_dict(_reversal_qs().get(pk=reversal.pk)))


@require_http_methods(['GET', 'POST'])
def reversal_list_or_create(request):
    """GET -> list, POST -> create (same path)."""
    if request.method == 'GET':
        return reversal_list(request)
    return reversal_create(request)
