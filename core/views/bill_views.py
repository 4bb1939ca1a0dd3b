"""Bills: list, generate for a KOT, mark paid, and the printable PDF."""
from decimal import Decimal

from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_http_methods

from core import services
from core.bill_pdf import bill_pdf_bytes
from core.models import Bill, PaymentMethod
from core.permissions import BILLERS, auth_required, role_required
from core.utils import (
    iso,
    parse_bool,
    parse_choice,
    parse_decimal,
    parse_json_body,
    parse_uuid,
)


def _bill_to_dict(b):
    return {
        'id': b.id,
        'billNumber': b.bill_number,
        'kotId': b.kot_id,
        'kotNumber': b.kot.kot_number,
        'totalAmount': str(b.total_amount),
        'discount': str(b.discount),
        'serviceCharge': str(b.service_charge),
        'tax': str(b.tax),
        'finalAmount': str(b.final_amount),
        'paymentMethod': b.payment_method or None,
        'isPaid': b.is_paid,
        'paidAt': iso(b.paid_at),
        'generatedById': b.generated_by_id,
        'createdAt': iso(b.created_at),
        'updatedAt': iso(b.updated_at),
    }


def _bill_qs():
    return Bill.objects.select_related('kot', 'generated_by')


@auth_required
@require_http_methods(['GET'])
def bill_list(request):
    """GET ?kotId=&isPaid=true|false - newest first."""
    qs = _bill_qs().order_by('-created_at')
    kot_id = request.GET.get('kotId', '').strip()
    if kot_id:
        qs = qs.filter(kot_id=parse_uuid(kot_id, 'kotId'))
    is_paid = request.GET.get('isPaid', '').strip()
    if is_paid:
        qs = qs.filter(is_paid=parse_bool(is_paid, 'isPaid'))
    return JsonResponse([_bill_to_dict(b) for b in qs], safe=False)


@auth_required
@role_required(*BILLERS)
@require_http_methods(['POST'])
def bill_create(request):
    """POST { kotId, discount?, paymentMethod? }. Amounts are computed server-side."""
    body = parse_json_body(request)
    discount = body.get('discount')
    if discount is None or discount == '':
        discount = Decimal('0')
    else:
        discount = parse_decimal(discount, 'discount', minimum=0)
    payment_method = body.get('paymentMethod') or ''
    if payment_method:
        payment_method = parse_choice(payment_method, PaymentMethod, 'paymentMethod')
    bill = services.create_bill(
        user=request.user,
        kot_id=parse_uuid(body.get('kotId'), 'kotId'),
        discount=discount,
        payment_method=payment_method,
    )
    return JsonResponse(_bill_to_dict(_bill_qs().get(pk=bill.pk)), status=201)


@auth_required
@role_required(*BILLERS)
@require_http_methods(['PATCH'])
def bill_pay(request, pk):
    """PATCH { paymentMethod? } (default cash). A bill can be paid once."""
    body = parse_json_body(request)
    payment_method = body.get('paymentMethod') or PaymentMethod.CASH
    bill = services.mark_bill_paid(
        pk, request.user, parse_choice(payment_method, PaymentMethod, 'paymentMethod')
    )
    return JsonResponse(_bill_to_dict(bill))


@auth_required
@require_http_methods(['GET'])
def bill_pdf(request, pk):
    """GET - returns the bill as application/pdf."""
    b = get_object_or_404(_bill_qs(), pk=pk)
    resp = HttpResponse(bill_pdf_bytes(b), content_type='application/pdf')
    resp['Content-Disposition'] = f'inline; filename="{b.bill_number}.pdf"'
    return resp


@require_http_methods(['GET', 'POST'])
def bill_list_or_create(request):
    """GET -> list, POST -> create (same path)."""
    if request.method == 'GET':
        return bill_list(request)
    return bill_create(request)
