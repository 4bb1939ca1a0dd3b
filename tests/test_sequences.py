from decimal import Decimal

import pytest
from django.db import transaction
from django.utils import timezone

from core import sequences
from core.exceptions import SequenceError
from core.models import Bill, Kot, KotType, SequenceCounter


def _raw_kot(user, number, kot_type=KotType.RESTAURANT):
    now = timezone.now()
    return Kot.objects.create(
        kot_number=number, customer_name='Walk-in', type=kot_type,
        order_time=now, expected_time=now, created_by=user,
    )


class TestFormatting:

    def test_kot_numbers_are_zero_padded_to_three_digits(self):
        assert sequences.format_number('REST', 7, 3) == 'REST-007'

    def test_numbers_grow_wider_past_the_padding(self):
        assert sequences.format_number('BAR', 1000, 3) == 'BAR-1000'

    def test_parse_number_reads_trailing_integer(self):
        assert sequences.parse_number('BILL-0042') == 42

    @pytest.mark.parametrize('identifier', ['REST-', 'REST-0x1', 'REST', '', 'BAR-12a'])
    def test_parse_number_rejects_malformed_identifiers(self, identifier):
        with pytest.raises(SequenceError):
            sequences.parse_number(identifier)


@pytest.mark.django_db
class TestKotNumbers:

    def test_sequential_per_type(self):
        assert sequences.next_kot_number(KotType.RESTAURANT) == 'REST-001'
        assert sequences.next_kot_number(KotType.RESTAURANT) == 'REST-002'
        assert sequences.next_kot_number(KotType.BAR) == 'BAR-001'
        assert sequences.next_kot_number(KotType.RESTAURANT) == 'REST-003'
        assert sequences.next_kot_number(KotType.BAR) == 'BAR-002'

    def test_counter_row_tracks_last_value(self):
        sequences.next_kot_number(KotType.BAR)
        sequences.next_kot_number(KotType.BAR)
        assert SequenceCounter.objects.get(scope='kot:bar').last_value == 2

    def test_missing_counter_is_seeded_from_latest_kot(self, cashier):
        _raw_kot(cashier, 'REST-041')
        assert sequences.next_kot_number(KotType.RESTAURANT) == 'REST-042'

    def test_corrupt_identifier_raises_instead_of_restarting(self, cashier, caplog):
        _raw_kot(cashier, 'REST-XYZ')
        with pytest.raises(SequenceError):
            sequences.next_kot_number(KotType.RESTAURANT)
        assert 'Corrupt identifier' in caplog.text
        assert not SequenceCounter.objects.filter(scope='kot:restaurant').exists()

    def test_rolled_back_allocation_does_not_consume_a_number(self):
        assert sequences.next_kot_number(KotType.RESTAURANT) == 'REST-001'
        with pytest.raises(RuntimeError):
            with transaction.atomic():
                assert sequences.next_kot_number(KotType.RESTAURANT) == 'REST-002'
                raise RuntimeError('insert failed')
        assert sequences.next_kot_number(KotType.RESTAURANT) == 'REST-002'

    def test_unknown_type_is_rejected(self):
        with pytest.raises(ValueError):
            sequences.next_kot_number('takeaway')

    def test_wider_than_padding(self):
        SequenceCounter.objects.create(scope='kot:restaurant', last_value=999)
        assert sequences.next_kot_number(KotType.RESTAURANT) == 'REST-1000'


@pytest.mark.django_db
class TestBillNumbers:

    def test_global_four_digit_sequence(self):
        assert sequences.next_bill_number() == 'BILL-0001'
        assert sequences.next_bill_number() == 'BILL-0002'

    def test_seeded_from_latest_bill(self, cashier):
        kot = _raw_kot(cashier, 'REST-001')
        Bill.objects.create(
            bill_number='BILL-0017', kot=kot, total_amount=Decimal('10'),
            final_amount=Decimal('11.50'), generated_by=cashier,
        )
        assert sequences.next_bill_number() == 'BILL-0018'
