"""
Business rules for KOTs, stock additions, order reversals and bills.

Every state change runs inside one transaction and is guarded by a
conditional UPDATE on the status that was read, so a concurrent change
surfaces as Conflict instead of a lost update. Views only parse input and
serialize results; everything that writes lives here.
"""
import logging
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import F, Sum
from django.utils import timezone

from .exceptions import Conflict, InvalidTransition, NotFound, ValidationFailed
from .models import (
    ApprovalStatus,
    Bill,
    Ingredient,
    Kot,
    KotItem,
    KotStatus,
    MenuItem,
    MenuItemIngredient,
    OrderReversal,
    PaymentMethod,
    StockAddition,
    User,
)
from .sequences import next_bill_number, next_kot_number
from .utils import round2

logger = logging.getLogger(__name__)


KOT_ALLOWED_NEXT = {
    KotStatus.PENDING: [KotStatus.PROCESSING, KotStatus.CANCELLED],
    KotStatus.PROCESSING: [KotStatus.COMPLETED],
    KotStatus.COMPLETED: [],
    KotStatus.REVERSED: [],
    KotStatus.CANCELLED: [],
}

# KOTs in these states can be neither billed nor reversed.
KOT_CLOSED_STATUSES = (KotStatus.REVERSED, KotStatus.CANCELLED)

MAX_KOT_ITEM_QUANTITY = 1000

# Exclusive upper bounds of the amount columns (max_digits - decimal_places).
MONEY_LIMIT = Decimal(10) ** 8
STOCK_LIMIT = Decimal(10) ** 7
STOCK_COST_LIMIT = Decimal(10) ** 10


# --- Catalogue ---

def create_ingredient(name, unit, current_stock, minimum_threshold, cost_per_unit):
    ingredient = Ingredient.objects.create(
        name=name,
        unit=unit,
        current_stock=current_stock,
        minimum_threshold=minimum_threshold,
        cost_per_unit=cost_per_unit,
    )
    logger.info("Ingredient %s created (%s %s)", ingredient.pk, current_stock, unit)
    return ingredient


def low_stock_ingredients():
    """Ingredients at or below their minimum threshold (boundary inclusive)."""
    return Ingredient.objects.filter(current_stock__lte=F("minimum_threshold")).order_by("name")


def create_menu_item(name, price, category, description="", is_active=True):
    item = MenuItem.objects.create(
        name=name,
        description=description,
        price=price,
        category=category,
        is_active=is_active,
    )
    logger.info("Menu item %s created in %s at %s", item.pk, category, price)
    return item


def add_menu_item_ingredient(menu_item_id, ingredient_id, quantity):
    """Declare how much of an ingredient one unit of a menu item consumes. Never touches stock."""
    menu_item = MenuItem.objects.filter(pk=menu_item_id).first()
    if menu_item is None:
        raise NotFound("Menu item not found")
    ingredient = Ingredient.objects.filter(pk=ingredient_id).first()
    if ingredient is None:
        raise NotFound("Ingredient not found")
    return MenuItemIngredient.objects.create(
        menu_item=menu_item, ingredient=ingredient, quantity=quantity
    )


# --- KOT lifecycle ---

def create_kot(user, customer_name, kot_type, order_time, expected_time, items):
    """
    Create a pending KOT with its lines. ``items`` is a list of
    (menu_item_id, quantity). Unit prices come from the menu item, never
    from the caller.
    """
    if not items:
        raise ValidationFailed("At least one item is required")
    menu = MenuItem.objects.in_bulk({menu_item_id for menu_item_id, _ in items})
    lines = []
    total = Decimal("0")
    for line_number, (menu_item_id, quantity) in enumerate(items, start=1):
        menu_item = menu.get(menu_item_id)
        if menu_item is None:
            raise NotFound(f"Menu item {menu_item_id} not found")
        if not menu_item.is_active:
            raise ValidationFailed(f"Menu item {menu_item.name} is not available")
        if menu_item.category != kot_type:
            raise ValidationFailed(
                f"Menu item {menu_item.name} cannot be ordered on a {kot_type} KOT"
            )
        if quantity > MAX_KOT_ITEM_QUANTITY:
            raise ValidationFailed(
                f"Quantity of {menu_item.name} must be at most {MAX_KOT_ITEM_QUANTITY}"
            )
        line_total = round2(menu_item.price * quantity)
        total += line_total
        if total >= MONEY_LIMIT:
            raise ValidationFailed(f"KOT total must be below {MONEY_LIMIT}")
        lines.append((line_number, menu_item, quantity, line_total))

    with transaction.atomic():
        kot = Kot.objects.create(
            kot_number=next_kot_number(kot_type),
            customer_name=customer_name,
            type=kot_type,
            status=KotStatus.PENDING,
            order_time=order_time,
            expected_time=expected_time,
            total_amount=total,
            created_by=user,
        )
        KotItem.objects.bulk_create([
            KotItem(
                kot=kot,
                line_number=line_number,
                menu_item=menu_item,
                quantity=quantity,
                unit_price=menu_item.price,
                total_price=line_total,
            )
            for line_number, menu_item, quantity, line_total in lines
        ])
    logger.info(
        "KOT %s created by %s: %d line(s), total %s", kot.kot_number, user.pk, len(lines), total
    )
    return kot


def advance_kot_status(kot_id, new_status, user):
    """Move a KOT along KOT_ALLOWED_NEXT. 'reversed' is only reachable through a reversal."""
    if new_status not in KotStatus.values:
        raise ValidationFailed(f"Unknown status: {new_status}")
    with transaction.atomic():
        kot = Kot.objects.filter(pk=kot_id).first()
        if kot is None:
            raise NotFound("KOT not found")
        current = kot.status
        if new_status not in KOT_ALLOWED_NEXT.get(current, []):
            raise InvalidTransition("KOT", current, new_status)
        now = timezone.now()
        updated = Kot.objects.filter(pk=kot.pk, status=current).update(
            status=new_status, processed_by=user, updated_at=now
        )
        if updated != 1:
            raise Conflict("KOT was changed by another request")
    logger.info("KOT %s %s -> %s by %s", kot.kot_number, current, new_status, user.pk)
    kot.refresh_from_db()
    return kot


# --- Stock additions ---

def create_stock_addition(user, ingredient_id, quantity, cost_per_unit):
    ingredient = Ingredient.objects.filter(pk=ingredient_id).first()
    if ingredient is None:
        raise NotFound("Ingredient not found")
    total_cost = round2(quantity * cost_per_unit)
    if total_cost >= STOCK_COST_LIMIT:
        raise ValidationFailed(f"Total cost must be below {STOCK_COST_LIMIT}")
    addition = StockAddition.objects.create(
        ingredient=ingredient,
        quantity=quantity,
        cost_per_unit=cost_per_unit,
        total_cost=total_cost,
        status=ApprovalStatus.PENDING,
        added_by=user,
    )
    logger.info(
        "Stock addition %s requested by %s: +%s %s", addition.pk, user.pk, quantity, ingredient.name
    )
    return addition


def credit_ingredient_stock(ingredient_id, quantity):
    """Atomically add ``quantity`` to an ingredient's stock. Only approvals call this."""
    updated = Ingredient.objects.filter(pk=ingredient_id).update(
        current_stock=F("current_stock") + quantity, updated_at=timezone.now()
    )
    if updated != 1:
        raise NotFound("Ingredient not found")


def _decide_pending(model, pk, label, **changes):
    """
    Flip a pending approval row to its decided state. Exactly one pending row
    must change; anything else is NotFound or Conflict.
    """
    updated = model.objects.filter(pk=pk, status=ApprovalStatus.PENDING).update(
        updated_at=timezone.now(), **changes
    )
    if updated == 1:
        return
    current = model.objects.filter(pk=pk).values_list("status", flat=True).first()
    if current is None:
        raise NotFound(f"{label.capitalize()} not found")
    raise InvalidTransition(label, current, changes["status"])


def approve_stock_addition(addition_id, user):
    with transaction.atomic():
        _decide_pending(
            StockAddition, addition_id, "stock addition",
            status=ApprovalStatus.APPROVED, approved_by=user,
        )
        addition = StockAddition.objects.select_related("ingredient").get(pk=addition_id)
        ingredient = Ingredient.objects.select_for_update().get(pk=addition.ingredient_id)
        if ingredient.current_stock + addition.quantity >= STOCK_LIMIT:
            raise Conflict(
                f"Approving would take {ingredient.name} stock to "
                f"{ingredient.current_stock + addition.quantity}, at or above the {STOCK_LIMIT} limit"
            )
        credit_ingredient_stock(addition.ingredient_id, addition.quantity)
    logger.info(
        "Stock addition %s approved by %s: %s +%s",
        addition.pk, user.pk, addition.ingredient.name, addition.quantity,
    )
    return addition


def reject_stock_addition(addition_id, user, reason):
    reason = (reason or "").strip()
    if not reason:
        raise ValidationFailed("Rejection reason is required")
    with transaction.atomic():
        _decide_pending(
            StockAddition, addition_id, "stock addition",
            status=ApprovalStatus.REJECTED, approved_by=user, reason=reason,
        )
        addition = StockAddition.objects.select_related("ingredient").get(pk=addition_id)
    logger.info("Stock addition %s rejected by %s", addition.pk, user.pk)
    return addition


# --- Order reversals ---

def create_order_reversal(user, kot_id, reason):
    with transaction.atomic():
        kot = Kot.objects.select_for_update().filter(pk=kot_id).first()
        if kot is None:
            raise NotFound("KOT not found")
        if kot.status in KOT_CLOSED_STATUSES:
            raise Conflict(f"KOT {kot.kot_number} is already {kot.status}")
        if kot.reversals.filter(status=ApprovalStatus.PENDING).exists():
            raise Conflict(f"KOT {kot.kot_number} already has a pending reversal")
        reversal = OrderReversal.objects.create(
            kot=kot, reason=reason, status=ApprovalStatus.PENDING, requested_by=user
        )
    logger.info("Reversal %s of KOT %s requested by %s", reversal.pk, kot.kot_number, user.pk)
    return reversal


def approve_order_reversal(reversal_id, user):
    """Approve and cascade the KOT to 'reversed'. Only status and updated_at change on the KOT."""
    with transaction.atomic():
        _decide_pending(
            OrderReversal, reversal_id, "order reversal",
            status=ApprovalStatus.APPROVED, approved_by=user,
        )
        reversal = OrderReversal.objects.select_related("kot").get(pk=reversal_id)
        previous = reversal.kot.status
        Kot.objects.filter(pk=reversal.kot_id).update(
            status=KotStatus.REVERSED, updated_at=timezone.now()
        )
        reversal.kot.refresh_from_db()
    logger.info(
        "Reversal %s approved by %s: KOT %s %s -> reversed",
        reversal.pk, user.pk, reversal.kot.kot_number, previous,
    )
    return reversal


def reject_order_reversal(reversal_id, user):
    with transaction.atomic():
        _decide_pending(
            OrderReversal, reversal_id, "order reversal",
            status=ApprovalStatus.REJECTED, approved_by=user,
        )
        reversal = OrderReversal.objects.select_related("kot").get(pk=reversal_id)
    logger.info("Reversal %s rejected by %s", reversal.pk, user.pk)
    return reversal


# --- Bills ---

def get_billing_rates():
    """(service_charge_rate, tax_rate) as Decimals from settings.POS_BILLING."""
    config = getattr(settings, "POS_BILLING", {})
    service_rate = Decimal(str(config.get("SERVICE_CHARGE_RATE", "0.10")))
    tax_rate = Decimal(str(config.get("TAX_RATE", "0.05")))
    return service_rate, tax_rate


def compute_bill_amounts(total_amount, discount=Decimal("0")):
    """
    service_charge = round2(total * SERVICE_CHARGE_RATE)
    tax            = round2(total * TAX_RATE)
    final          = total + service_charge + tax - discount
    """
    service_rate, tax_rate = get_billing_rates()
    service_charge = round2(total_amount * service_rate)
    tax = round2(total_amount * tax_rate)
    gross = total_amount + service_charge + tax
    if gross >= MONEY_LIMIT:
        raise ValidationFailed(f"Bill amount must be below {MONEY_LIMIT}")
    if discount < 0 or discount > gross:
        raise ValidationFailed(f"Discount must be between 0 and {gross}")
    return {
        "total_amount": total_amount,
        "service_charge": service_charge,
        "tax": tax,
        "discount": discount,
        "final_amount": gross - discount,
    }


def create_bill(user, kot_id, discount=Decimal("0"), payment_method=""):
    with transaction.atomic():
        kot = Kot.objects.select_for_update().filter(pk=kot_id).first()
        if kot is None:
            raise NotFound("KOT not found")
        if kot.status in KOT_CLOSED_STATUSES:
            raise Conflict(f"KOT {kot.kot_number} is {kot.status} and cannot be billed")
        if kot.bills.exists():
            raise Conflict(f"KOT {kot.kot_number} already has a bill")
        amounts = compute_bill_amounts(kot.total_amount, discount)
        bill = Bill.objects.create(
            bill_number=next_bill_number(),
            kot=kot,
            payment_method=payment_method or "",
            generated_by=user,
            **amounts,
        )
    logger.info(
        "Bill %s generated for KOT %s by %s: final %s",
        bill.bill_number, kot.kot_number, user.pk, bill.final_amount,
    )
    return bill


def mark_bill_paid(bill_id, user, payment_method=PaymentMethod.CASH):
    with transaction.atomic():
        now = timezone.now()
        updated = Bill.objects.filter(pk=bill_id, is_paid=False).update(
            is_paid=True, paid_at=now, payment_method=payment_method, updated_at=now
        )
        if updated != 1:
            if not Bill.objects.filter(pk=bill_id).exists():
                raise NotFound("Bill not found")
            raise Conflict("Bill is already paid")
        bill = Bill.objects.select_related("kot").get(pk=bill_id)
    logger.info("Bill %s paid by %s via %s", bill.bill_number, user.pk, payment_method)
    return bill


# --- Dashboard ---

def dashboard_stats():
    """Counts for the landing dashboard. 'Today' is the current local date."""
    start = timezone.localtime().replace(hour=0, minute=0, second=0, microsecond=0)
    end = start + timedelta(days=1)
    revenue = (
        Bill.objects.filter(created_at__gte=start, created_at__lt=end)
        .aggregate(total=Sum("final_amount"))["total"]
    )
    return {
        "total_users": User.objects.count(),
        "today_orders": Kot.objects.filter(created_at__gte=start, created_at__lt=end).count(),
        "stock_items": Ingredient.objects.count(),
        "today_revenue": revenue or Decimal("0"),
    }
