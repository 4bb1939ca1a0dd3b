"""Seed data shared by the seed command, demo login and the test-account listing."""
from decimal import Decimal

from core.models import UserRole

# username -> account details. Passwords are demo-only.
TEST_ACCOUNTS = {
    'admin': {
        'password': 'admin123',
        'email': 'admin@restaurant.com',
        'first_name': 'John',
        'last_name': 'Admin',
        'role': UserRole.ADMIN,
    },
    'cashier': {
        'password': 'cashier123',
        'email': 'cashier@restaurant.com',
        'first_name': 'Jane',
        'last_name': 'Cashier',
        'role': UserRole.RESTAURANT_CASHIER,
    },
    'storekeeper': {
        'password': 'store123',
        'email': 'storekeeper@restaurant.com',
        'first_name': 'Bob',
        'last_name': 'Store',
        'role': UserRole.STORE_KEEPER,
    },
    'officer': {
        'password': 'officer123',
        'email': 'officer@restaurant.com',
        'first_name': 'Alice',
        'last_name': 'Officer',
        'role': UserRole.AUTHORISING_OFFICER,
    },
    'barman': {
        'password': 'bar123',
        'email': 'barman@restaurant.com',
        'first_name': 'Mike',
        'last_name': 'Bar',
        'role': UserRole.BARMAN,
    },
}

# (name, unit, current_stock, minimum_threshold, cost_per_unit)
SAMPLE_INGREDIENTS = [
    ('Rice', 'kg', Decimal('50'), Decimal('10'), Decimal('60')),
    ('Chicken', 'kg', Decimal('15'), Decimal('20'), Decimal('250')),
    ('Carrot', 'kg', Decimal('8'), Decimal('5'), Decimal('80')),
    ('Onion', 'kg', Decimal('25'), Decimal('10'), Decimal('40')),
    ('Whiskey', 'l', Decimal('10'), Decimal('5'), Decimal('2500')),
]
