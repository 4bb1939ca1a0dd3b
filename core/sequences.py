"""
Human-readable sequential identifiers for KOTs and bills.

Each scope ('kot:restaurant', 'kot:bar', 'bill') owns one SequenceCounter row.
Allocation locks that row and bumps it with a single UPDATE inside the
caller's transaction, so concurrent creations never share a number and a
rolled-back insert does not consume one.

A scope without a counter row is seeded from the most recently created
entity of that scope; an identifier whose suffix is not numeric raises
SequenceError rather than restarting the numbering.
"""
import logging

from django.db import transaction
from django.db.models import F

from .exceptions import SequenceError
from .models import Bill, Kot, KotType, SequenceCounter

logger = logging.getLogger(__name__)

KOT_PREFIXES = {
    KotType.RESTAURANT: 'REST',
    KotType.BAR: 'BAR',
}
KOT_NUMBER_WIDTH = 3

BILL_SCOPE = 'bill'
BILL_PREFIX = 'BILL'
BILL_NUMBER_WIDTH = 4


def kot_scope(kot_type):
    return f'kot:{kot_type}'


def format_number(prefix, value, width):
    return f'{prefix}-{value:0{width}d}'


def parse_number(identifier):
    """Return the trailing integer of an identifier such as 'BAR-012'."""
    _, sep, suffix = (identifier or '').rpartition('-')
    if not sep or not (suffix.isascii() and suffix.isdigit()):
        raise SequenceError(f'Cannot parse sequence number from {identifier!r}')
    return int(suffix)


def _last_issued(scope, issued):
    """Number carried by the newest identifier in ``issued`` (0 when empty)."""
    last = issued.order_by('-created_at').first()
    if last is None:
        return 0
    try:
        return parse_number(last)
    except SequenceError:
        logger.error('Corrupt identifier %r found while seeding sequence %s', last, scope)
        raise


def next_value(scope, issued):
    """
    Allocate the next integer for ``scope``.

    ``issued`` is a queryset of already issued identifiers for the scope
    (values_list(..., flat=True) ordered by creation), used only to seed a
    missing counter row.
    """
    with transaction.atomic():
        counter = SequenceCounter.objects.select_for_update().filter(scope=scope).first()
        if counter is None:
            counter, _ = SequenceCounter.objects.get_or_create(
                scope=scope,
                defaults={'last_value': _last_issued(scope, issued)},
            )
            counter = SequenceCounter.objects.select_for_update().get(pk=counter.pk)
        SequenceCounter.objects.filter(pk=counter.pk).update(last_value=F('last_value') + 1)
        counter.refresh_from_db(fields=['last_value'])
    logger.debug('Allocated %s for sequence %s', counter.last_value, scope)
    return counter.last_value


def next_kot_number(kot_type):
    if kot_type not in KOT_PREFIXES:
        raise ValueError(f'Unknown KOT type: {kot_type!r}')
    issued = Kot.objects.filter(type=kot_type).values_list('kot_number', flat=True)
    value = next_value(kot_scope(kot_type), issued)
    return format_number(KOT_PREFIXES[kot_type], value, KOT_NUMBER_WIDTH)


def next_bill_number():
    issued = Bill.objects.values_list('bill_number', flat=True)
    value = next_value(BILL_SCOPE, issued)
    return format_number(BILL_PREFIX, value, BILL_NUMBER_WIDTH)
