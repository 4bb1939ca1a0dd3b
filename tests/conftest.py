from datetime import timedelta
from decimal import Decimal

import pytest
from django.test import Client
from django.utils import timezone

from core import services
from core.models import Ingredient, KotType, MenuItem, User, UserRole


def _make_user(username, role, **extra):
    return User.objects.create_user(
        username=username, password=f'{username}-pass', role=role, **extra
    )


@pytest.fixture
def admin_user(db):
    return _make_user('admin1', UserRole.ADMIN)


@pytest.fixture
def cashier(db):
    return _make_user('cashier1', UserRole.RESTAURANT_CASHIER)


@pytest.fixture
def barman(db):
    return _make_user('barman1', UserRole.BARMAN)


@pytest.fixture
def store_keeper(db):
    return _make_user('store1', UserRole.STORE_KEEPER)


@pytest.fixture
def officer(db):
    return _make_user('officer1', UserRole.AUTHORISING_OFFICER)


@pytest.fixture
def client_for():
    """client_for(user) -> Django test Client with a session for ``user`` (anonymous when None)."""
    def _client(user=None):
        c = Client()
        if user is not None:
            c.force_login(user)
        return c
    return _client


@pytest.fixture
def rice(db):
    return Ingredient.objects.create(
        name='Rice', unit='kg', current_stock=Decimal('50'),
        minimum_threshold=Decimal('10'), cost_per_unit=Decimal('60'),
    )


@pytest.fixture
def chicken(db):
    return Ingredient.objects.create(
        name='Chicken', unit='kg', current_stock=Decimal('15'),
        minimum_threshold=Decimal('20'), cost_per_unit=Decimal('250'),
    )


@pytest.fixture
def burger(db):
    return MenuItem.objects.create(name='Burger', price=Decimal('100.00'), category=KotType.RESTAURANT)


@pytest.fixture
def fries(db):
    return MenuItem.objects.create(name='Fries', price=Decimal('50.00'), category=KotType.RESTAURANT)


@pytest.fixture
def beer(db):
    return MenuItem.objects.create(name='Beer', price=Decimal('300.00'), category=KotType.BAR)


@pytest.fixture
def order_times():
    now = timezone.now()
    return now, now + timedelta(minutes=20)


@pytest.fixture
def make_kot(order_times):
    """make_kot(user, kot_type, [(menu_item, qty), ...]) through the service layer."""
    def _make(user, kot_type, lines, customer_name='Table 4'):
        order_time, expected_time = order_times
        return services.create_kot(
            user=user,
            customer_name=customer_name,
            kot_type=kot_type,
            order_time=order_time,
            expected_time=expected_time,
            items=[(item.pk, qty) for item, qty in lines],
        )
    return _make


@pytest.fixture
def restaurant_kot(make_kot, cashier, burger, fries):
    """Pending restaurant KOT: 2 x Burger (100) + 1 x Fries (50) = 250.00."""
    return make_kot(cashier, KotType.RESTAURANT, [(burger, 2), (fries, 1)])
