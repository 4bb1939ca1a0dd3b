"""
Management command: create the five role test accounts and the sample
ingredients. Safe to run multiple times; existing rows keep their data
(passwords only change with --reset-passwords, stock is never touched).
"""
from django.core.management.base import BaseCommand
from django.db import transaction

from core.constants import SAMPLE_INGREDIENTS, TEST_ACCOUNTS
from core.models import Ingredient, User


class Command(BaseCommand):
    help = 'Create the test accounts (one per role) and sample ingredients'

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset-passwords',
            action='store_true',
            help='Reset existing test accounts to their default passwords',
        )
        parser.add_argument(
            '--skip-ingredients',
            action='store_true',
            help='Only seed the accounts',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        created_users = 0
        for username, account in TEST_ACCOUNTS.items():
            user, created = User.objects.get_or_create(
                username=username,
                defaults={
                    'email': account['email'],
                    'first_name': account['first_name'],
                    'last_name': account['last_name'],
                    'role': account['role'],
                },
            )
            if created or options['reset_passwords']:
                user.set_password(account['password'])
            if user.role != account['role']:
                self.stdout.write(self.style.WARNING(
                    f'Restoring role of {username}: {user.role} -> {account["role"]}'
                ))
                user.role = account['role']
            user.save()
            created_users += int(created)
        self.stdout.write(self.style.SUCCESS(
            f'Test accounts: {created_users} created, {len(TEST_ACCOUNTS) - created_users} already present.'
        ))

        if options['skip_ingredients']:
            return
        created_ingredients = 0
        for name, unit, stock, threshold, cost in SAMPLE_INGREDIENTS:
            _, created = Ingredient.objects.get_or_create(
                name=name,
                defaults={
                    'unit': unit,
                    'current_stock': stock,
                    'minimum_threshold': threshold,
                    'cost_per_unit': cost,
                },
            )
            created_ingredients += int(created)
        self.stdout.write(self.style.SUCCESS(
            f'Sample ingredients: {created_ingredients} created.'
        ))
