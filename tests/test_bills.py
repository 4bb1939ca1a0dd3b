from decimal import Decimal

import pytest
from django.test import override_settings

from core import services
from core.exceptions import ValidationFailed
from core.models import Bill, KotStatus, KotType

pytestmark = pytest.mark.django_db


def _create(client, kot, **extra):
    return client.post(
        '/api/bills', {'kotId': str(kot.pk), **extra}, content_type='application/json'
    )


class TestAmounts:

    def test_default_rates(self):
        amounts = services.compute_bill_amounts(Decimal('250.00'))
        assert amounts['service_charge'] == Decimal('25.00')
        assert amounts['tax'] == Decimal('12.50')
        assert amounts['final_amount'] == Decimal('287.50')

    def test_discount_is_subtracted_last(self):
        amounts = services.compute_bill_amounts(Decimal('250.00'), Decimal('7.50'))
        assert amounts['final_amount'] == Decimal('280.00')

    def test_components_are_rounded_to_cents(self):
        amounts = services.compute_bill_amounts(Decimal('33.33'))
        assert amounts['service_charge'] == Decimal('3.33')
        assert amounts['tax'] == Decimal('1.67')
        assert amounts['final_amount'] == Decimal('38.33')

    @override_settings(POS_BILLING={'TAX_RATE': '0.13', 'SERVICE_CHARGE_RATE': '0'})
    def test_rates_follow_configuration(self):
        amounts = services.compute_bill_amounts(Decimal('100.00'))
        assert amounts['service_charge'] == Decimal('0.00')
        assert amounts['final_amount'] == Decimal('113.00')

    @pytest.mark.parametrize('discount', [Decimal('-1'), Decimal('287.51')])
    def test_discount_bounds(self, discount):
        with pytest.raises(ValidationFailed):
            services.compute_bill_amounts(Decimal('250.00'), discount)


class TestCreate:

    def test_generates_bill_for_kot(self, client_for, cashier, restaurant_kot):
        resp = _create(client_for(cashier), restaurant_kot, discount='10')
        assert resp.status_code == 201
        data = resp.json()
        assert data['billNumber'] == 'BILL-0001'
        assert data['totalAmount'] == '250.00'
        assert data['serviceCharge'] == '25.00'
        assert data['tax'] == '12.50'
        assert data['discount'] == '10.00'
        assert data['finalAmount'] == '277.50'
        assert data['isPaid'] is False

    def test_numbers_are_global_across_kot_types(self, client_for, cashier, barman, make_kot, burger, beer):
        rest = make_kot(cashier, KotType.RESTAURANT, [(burger, 1)])
        bar = make_kot(barman, KotType.BAR, [(beer, 1)])
        assert _create(client_for(barman), bar).json()['billNumber'] == 'BILL-0001'
        assert _create(client_for(cashier), rest).json()['billNumber'] == 'BILL-0002'

    def test_one_bill_per_kot(self, client_for, cashier, restaurant_kot):
        assert _create(client_for(cashier), restaurant_kot).status_code == 201
        assert _create(client_for(cashier), restaurant_kot).status_code == 409
        assert Bill.objects.count() == 1

    def test_cancelled_kot_cannot_be_billed(self, client_for, cashier, officer, restaurant_kot):
        services.advance_kot_status(restaurant_kot.pk, KotStatus.CANCELLED, officer)
        assert _create(client_for(cashier), restaurant_kot).status_code == 409

    def test_discount_above_gross_is_rejected(self, client_for, cashier, restaurant_kot):
        assert _create(client_for(cashier), restaurant_kot, discount='300').status_code == 400
        assert not Bill.objects.exists()

    def test_store_keeper_cannot_bill(self, client_for, store_keeper, restaurant_kot):
        assert _create(client_for(store_keeper), restaurant_kot).status_code == 403


class TestPayment:

    @pytest.fixture
    def bill(self, cashier, restaurant_kot):
        return services.create_bill(cashier, restaurant_kot.pk)

    def test_pay_defaults_to_cash(self, client_for, cashier, bill):
        resp = client_for(cashier).patch(f'/api/bills/{bill.pk}/pay')
        assert resp.status_code == 200
        data = resp.json()
        assert data['isPaid'] is True
        assert data['paymentMethod'] == 'cash'
        assert data['paidAt'] is not None

    def test_pay_with_method(self, client_for, barman, bill):
        resp = client_for(barman).patch(
            f'/api/bills/{bill.pk}/pay', {'paymentMethod': 'e_wallet'},
            content_type='application/json',
        )
        assert resp.json()['paymentMethod'] == 'e_wallet'

    def test_paying_twice_conflicts(self, client_for, cashier, bill):
        c = client_for(cashier)
        assert c.patch(f'/api/bills/{bill.pk}/pay').status_code == 200
        assert c.patch(f'/api/bills/{bill.pk}/pay').status_code == 409

    def test_unknown_payment_method(self, client_for, cashier, bill):
        resp = client_for(cashier).patch(
            f'/api/bills/{bill.pk}/pay', {'paymentMethod': 'cheque'},
            content_type='application/json',
        )
        assert resp.status_code == 400
        bill.refresh_from_db()
        assert bill.is_paid is False

    def test_list_filters(self, client_for, officer, cashier, bill, restaurant_kot):
        c = client_for(officer)
        assert len(c.get('/api/bills', {'isPaid': 'false'}).json()) == 1
        assert c.get('/api/bills', {'isPaid': 'true'}).json() == []
        by_kot = c.get('/api/bills', {'kotId': str(restaurant_kot.pk)}).json()
        assert [b['billNumber'] for b in by_kot] == [bill.bill_number]

    def test_pdf(self, client_for, officer, bill):
        resp = client_for(officer).get(f'/api/bills/{bill.pk}/pdf')
        assert resp.status_code == 200
        assert resp['Content-Type'] == 'application/pdf'
        assert resp.content.startswith(b'%PDF')
