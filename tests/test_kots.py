import pytest

from core import services
from core.exceptions import InvalidTransition, ValidationFailed
from core.models import Kot, KotStatus, KotType

pytestmark = pytest.mark.django_db

ORDER_TIME = '2026-03-01T12:00:00Z'
EXPECTED_TIME = '2026-03-01T12:30:00Z'


def _payload(kot_type, items, customer_name='Table 7'):
    return {
        'kot': {
            'customerName': customer_name,
            'type': kot_type,
            'orderTime': ORDER_TIME,
            'expectedTime': EXPECTED_TIME,
        },
        'items': items,
    }


class TestCreateKot:

    def test_total_is_sum_of_lines(self, client_for, cashier, burger, fries):
        resp = client_for(cashier).post('/api/kots', _payload('restaurant', [
            {'menuItemId': str(burger.pk), 'quantity': 2},
            {'menuItemId': str(fries.pk), 'quantity': 1},
        ]), content_type='application/json')
        assert resp.status_code == 201
        data = resp.json()
        assert data['kotNumber'] == 'REST-001'
        assert data['status'] == 'pending'
        assert data['totalAmount'] == '250.00'
        assert [i['totalPrice'] for i in data['items']] == ['200.00', '50.00']
        assert [i['lineNumber'] for i in data['items']] == [1, 2]
        assert data['creator']['username'] == cashier.username

    def test_caller_supplied_unit_price_is_ignored(self, client_for, cashier, burger):
        resp = client_for(cashier).post('/api/kots', _payload('restaurant', [
            {'menuItemId': str(burger.pk), 'quantity': 3, 'unitPrice': '0.01'},
        ]), content_type='application/json')
        assert resp.status_code == 201
        item = resp.json()['items'][0]
        assert item['unitPrice'] == '100.00'
        assert resp.json()['totalAmount'] == '300.00'

    def test_numbers_are_sequential_per_type(self, client_for, cashier, barman, burger, beer):
        first = client_for(cashier).post('/api/kots', _payload('restaurant', [
            {'menuItemId': str(burger.pk), 'quantity': 1},
        ]), content_type='application/json').json()
        bar = client_for(barman).post('/api/kots', _payload('bar', [
            {'menuItemId': str(beer.pk), 'quantity': 1},
        ]), content_type='application/json').json()
        second = client_for(cashier).post('/api/kots', _payload('restaurant', [
            {'menuItemId': str(burger.pk), 'quantity': 1},
        ]), content_type='application/json').json()
        assert (first['kotNumber'], bar['kotNumber'], second['kotNumber']) == (
            'REST-001', 'BAR-001', 'REST-002'
        )

    @pytest.mark.parametrize('quantity', [0, -1, 1.5, 'two', True, None])
    def test_quantity_must_be_positive_integer(self, client_for, cashier, burger, quantity):
        resp = client_for(cashier).post('/api/kots', _payload('restaurant', [
            {'menuItemId': str(burger.pk), 'quantity': quantity},
        ]), content_type='application/json')
        assert resp.status_code == 400
        assert not Kot.objects.exists()

    def test_items_must_not_be_empty(self, client_for, cashier):
        resp = client_for(cashier).post(
            '/api/kots', _payload('restaurant', []), content_type='application/json'
        )
        assert resp.status_code == 400
        assert resp.json()['message'] == 'At least one item is required'

    def test_inactive_menu_item_is_rejected(self, client_for, cashier, burger):
        burger.is_active = False
        burger.save()
        resp = client_for(cashier).post('/api/kots', _payload('restaurant', [
            {'menuItemId': str(burger.pk), 'quantity': 1},
        ]), content_type='application/json')
        assert resp.status_code == 400
        assert not Kot.objects.exists()

    def test_menu_item_category_must_match_kot_type(self, client_for, barman, burger):
        resp = client_for(barman).post('/api/kots', _payload('bar', [
            {'menuItemId': str(burger.pk), 'quantity': 1},
        ]), content_type='application/json')
        assert resp.status_code == 400

    def test_unknown_menu_item_is_not_found(self, client_for, cashier):
        resp = client_for(cashier).post('/api/kots', _payload('restaurant', [
            {'menuItemId': '00000000-0000-0000-0000-000000000000', 'quantity': 1},
        ]), content_type='application/json')
        assert resp.status_code == 404

    def test_unknown_type_is_rejected(self, client_for, cashier, burger):
        resp = client_for(cashier).post('/api/kots', _payload('takeaway', [
            {'menuItemId': str(burger.pk), 'quantity': 1},
        ]), content_type='application/json')
        assert resp.status_code == 400

    def test_store_keeper_cannot_create(self, client_for, store_keeper, burger):
        resp = client_for(store_keeper).post('/api/kots', _payload('restaurant', [
            {'menuItemId': str(burger.pk), 'quantity': 1},
        ]), content_type='application/json')
        assert resp.status_code == 403
        assert resp.json()['message'] == 'Insufficient permissions'
        assert not Kot.objects.exists()

    def test_anonymous_cannot_create(self, client_for, burger):
        resp = client_for().post('/api/kots', _payload('restaurant', [
            {'menuItemId': str(burger.pk), 'quantity': 1},
        ]), content_type='application/json')
        assert resp.status_code == 401


class TestListAndDetail:

    def test_filters_and_limit(self, client_for, cashier, barman, make_kot, burger, beer):
        make_kot(cashier, KotType.RESTAURANT, [(burger, 1)])
        make_kot(cashier, KotType.RESTAURANT, [(burger, 1)])
        make_kot(barman, KotType.BAR, [(beer, 1)])
        c = client_for(cashier)
        assert len(c.get('/api/kots').json()) == 3
        bar = c.get('/api/kots', {'type': 'bar'}).json()
        assert [k['kotNumber'] for k in bar] == ['BAR-001']
        assert len(c.get('/api/kots', {'limit': 2}).json()) == 2
        assert len(c.get('/api/kots', {'status': 'completed'}).json()) == 0

    def test_invalid_filter_is_rejected(self, client_for, cashier):
        assert client_for(cashier).get('/api/kots', {'status': 'lost'}).status_code == 400
        assert client_for(cashier).get('/api/kots', {'limit': '0'}).status_code == 400

    def test_detail(self, client_for, officer, restaurant_kot):
        resp = client_for(officer).get(f'/api/kots/{restaurant_kot.pk}')
        assert resp.status_code == 200
        assert resp.json()['kotNumber'] == restaurant_kot.kot_number
        assert len(resp.json()['items']) == 2

    def test_detail_unknown_is_404(self, client_for, officer):
        resp = client_for(officer).get('/api/kots/00000000-0000-0000-0000-000000000000')
        assert resp.status_code == 404
        assert resp.json() == {'message': 'Not found'}


class TestStatusTransitions:

    def _patch(self, client, kot, status):
        return client.patch(
            f'/api/kots/{kot.pk}/status', {'status': status}, content_type='application/json'
        )

    def test_pending_to_processing_to_completed(self, client_for, store_keeper, restaurant_kot):
        c = client_for(store_keeper)
        resp = self._patch(c, restaurant_kot, 'processing')
        assert resp.status_code == 200
        assert resp.json()['status'] == 'processing'
        assert resp.json()['processedById'] == store_keeper.pk
        assert self._patch(c, restaurant_kot, 'completed').json()['status'] == 'completed'

    def test_pending_can_be_cancelled(self, client_for, officer, restaurant_kot):
        resp = self._patch(client_for(officer), restaurant_kot, 'cancelled')
        assert resp.status_code == 200
        restaurant_kot.refresh_from_db()
        assert restaurant_kot.status == KotStatus.CANCELLED

    @pytest.mark.parametrize('target', ['completed', 'reversed', 'pending'])
    def test_illegal_moves_from_pending_conflict(self, client_for, officer, restaurant_kot, target):
        resp = self._patch(client_for(officer), restaurant_kot, target)
        assert resp.status_code == 409
        restaurant_kot.refresh_from_db()
        assert restaurant_kot.status == KotStatus.PENDING

    def test_completed_is_terminal(self, officer, restaurant_kot):
        services.advance_kot_status(restaurant_kot.pk, KotStatus.PROCESSING, officer)
        services.advance_kot_status(restaurant_kot.pk, KotStatus.COMPLETED, officer)
        with pytest.raises(InvalidTransition):
            services.advance_kot_status(restaurant_kot.pk, KotStatus.PROCESSING, officer)

    def test_unknown_status_is_validation_error(self, client_for, officer, restaurant_kot):
        assert self._patch(client_for(officer), restaurant_kot, 'burnt').status_code == 400
        with pytest.raises(ValidationFailed):
            services.advance_kot_status(restaurant_kot.pk, 'burnt', officer)

    def test_cashier_cannot_change_status(self, client_for, cashier, restaurant_kot):
        assert self._patch(client_for(cashier), restaurant_kot, 'processing').status_code == 403
        restaurant_kot.refresh_from_db()
        assert restaurant_kot.status == KotStatus.PENDING
        assert restaurant_kot.processed_by is None
