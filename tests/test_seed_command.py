from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command

from core.models import Ingredient, User, UserRole

pytestmark = pytest.mark.django_db


def _seed(*args):
    out = StringIO()
    call_command('seed_test_accounts', *args, stdout=out)
    return out.getvalue()


def test_creates_one_account_per_role():
    _seed()
    roles = dict(User.objects.values_list('username', 'role'))
    assert roles == {
        'admin': UserRole.ADMIN,
        'cashier': UserRole.RESTAURANT_CASHIER,
        'storekeeper': UserRole.STORE_KEEPER,
        'officer': UserRole.AUTHORISING_OFFICER,
        'barman': UserRole.BARMAN,
    }
    assert User.objects.get(username='storekeeper').check_password('store123')
    assert Ingredient.objects.count() == 5
    assert Ingredient.objects.get(name='Whiskey').unit == 'l'


def test_is_idempotent():
    _seed()
    out = _seed()
    assert User.objects.count() == 5
    assert Ingredient.objects.count() == 5
    assert '0 created, 5 already present' in out


def test_keeps_changed_passwords_and_stock_unless_asked():
    _seed()
    officer = User.objects.get(username='officer')
    officer.set_password('rotated')
    officer.save()
    Ingredient.objects.filter(name='Rice').update(current_stock=Decimal('3'))

    _seed()
    officer.refresh_from_db()
    assert officer.check_password('rotated')
    assert Ingredient.objects.get(name='Rice').current_stock == Decimal('3')

    _seed('--reset-passwords')
    officer.refresh_from_db()
    assert officer.check_password('officer123')


def test_restores_role_of_seeded_account():
    _seed()
    User.objects.filter(username='barman').update(role=UserRole.ADMIN)
    _seed()
    assert User.objects.get(username='barman').role == UserRole.BARMAN


def test_skip_ingredients():
    _seed('--skip-ingredients')
    assert User.objects.count() == 5
    assert not Ingredient.objects.exists()
