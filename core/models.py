import uuid
from decimal import Decimal

from django.contrib.auth.models import AbstractUser
from django.db import models


# --- Choice constants ---

class UserRole(models.TextChoices):
    ADMIN = 'admin', 'Administrator'
    RESTAURANT_CASHIER = 'restaurant_cashier', 'Restaurant Cashier'
    STORE_KEEPER = 'store_keeper', 'Store Keeper'
    AUTHORISING_OFFICER = 'authorising_officer', 'Authorising Officer'
    BARMAN = 'barman', 'Barman'


class KotType(models.TextChoices):
    RESTAURANT = 'restaurant', 'Restaurant'
    BAR = 'bar', 'Bar'


class KotStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PROCESSING = 'processing', 'Processing'
    COMPLETED = 'completed', 'Completed'
    REVERSED = 'reversed', 'Reversed'
    CANCELLED = 'cancelled', 'Cancelled'


class ApprovalStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


class PaymentMethod(models.TextChoices):
    CASH = 'cash', 'Cash'
    CARD = 'card', 'Card'
    E_WALLET = 'e_wallet', 'E Wallet'
    BANK = 'bank', 'Bank'


# --- Models ---

class User(AbstractUser):
    """Staff account; username/password from AbstractUser, role drives every permission check."""
    role = models.CharField(
        max_length=32, choices=UserRole.choices, default=UserRole.RESTAURANT_CASHIER
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'core_user'

    def __str__(self):
        return f'{self.username} ({self.role})'


class Ingredient(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    unit = models.CharField(max_length=20, help_text='kg, g, l, ml, pieces, ...')
    current_stock = models.DecimalField(
        max_digits=10, decimal_places=3, default=Decimal('0')
    )
    minimum_threshold = models.DecimalField(
        max_digits=10, decimal_places=3, default=Decimal('0')
    )
    cost_per_unit = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal('0')
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'core_ingredient'
        ordering = ['name']

    def __str__(self):
        return f'{self.name} ({self.unit})'

    @property
    def is_low_stock(self):
        return self.current_stock <= self.minimum_threshold


class MenuItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    category = models.CharField(max_length=20, choices=KotType.choices)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'core_menu_item'
        ordering = ['name']

    def __str__(self):
        return self.name


class MenuItemIngredient(models.Model):
    """Quantity of an ingredient consumed per unit sold. Declarative only."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    menu_item = models.ForeignKey(
        MenuItem, on_delete=models.CASCADE, related_name='ingredient_links'
    )
    ingredient = models.ForeignKey(
        Ingredient, on_delete=models.CASCADE, related_name='menu_item_links'
    )
    quantity = models.DecimalField(max_digits=10, decimal_places=3)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'core_menu_item_ingredient'
        ordering = ['created_at']

    def __str__(self):
        return f'{self.menu_item.name}: {self.quantity} {self.ingredient.name}'


class Kot(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    kot_number = models.CharField(max_length=20, unique=True)
    customer_name = models.CharField(max_length=255)
    type = models.CharField(max_length=20, choices=KotType.choices)
    status = models.CharField(
        max_length=20, choices=KotStatus.choices, default=KotStatus.PENDING
    )
    order_time = models.DateTimeField()
    expected_time = models.DateTimeField()
    total_amount = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal('0')
    )
    created_by = models.ForeignKey(
        User, on_delete=models.PROTECT, related_name='created_kots'
    )
    processed_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='processed_kots'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'core_kot'
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.kot_number} ({self.status})'


class KotItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    kot = models.ForeignKey(Kot, on_delete=models.CASCADE, related_name='items')
    line_number = models.PositiveSmallIntegerField()
    menu_item = models.ForeignKey(
        MenuItem, on_delete=models.PROTECT, related_name='kot_items'
    )
    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(max_digits=10, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'core_kot_item'
        ordering = ['kot', 'line_number']

    def __str__(self):
        return f'{self.kot.kot_number} #{self.line_number}: {self.quantity} x {self.menu_item.name}'


class StockAddition(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    ingredient = models.ForeignKey(
        Ingredient, on_delete=models.PROTECT, related_name='stock_additions'
    )
    quantity = models.DecimalField(max_digits=10, decimal_places=3)
    cost_per_unit = models.DecimalField(max_digits=10, decimal_places=2)
    total_cost = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(
        max_length=20, choices=ApprovalStatus.choices, default=ApprovalStatus.PENDING
    )
    added_by = models.ForeignKey(
        User, on_delete=models.PROTECT, related_name='stock_additions'
    )
    approved_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='approved_stock_additions'
    )
    reason = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'core_stock_addition'
        ordering = ['-created_at']

    def __str__(self):
        return f'+{self.quantity} {self.ingredient.name} ({self.status})'


class OrderReversal(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    kot = models.ForeignKey(Kot, on_delete=models.PROTECT, related_name='reversals')
    reason = models.TextField()
    status = models.CharField(
        max_length=20, choices=ApprovalStatus.choices, default=ApprovalStatus.PENDING
    )
    requested_by = models.ForeignKey(
        User, on_delete=models.PROTECT, related_name='reversal_requests'
    )
    approved_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='approved_reversals'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'core_order_reversal'
        ordering = ['-created_at']

    def __str__(self):
        return f'Reversal of {self.kot.kot_number} ({self.status})'


class Bill(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    bill_number = models.CharField(max_length=20, unique=True)
    kot = models.ForeignKey(Kot, on_delete=models.PROTECT, related_name='bills')
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)
    discount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0'))
    service_charge = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal('0')
    )
    tax = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0'))
    final_amount = models.DecimalField(max_digits=10, decimal_places=2)
    payment_method = models.CharField(
        max_length=20, choices=PaymentMethod.choices, blank=True
    )
    is_paid = models.BooleanField(default=False)
    paid_at = models.DateTimeField(null=True, blank=True)
    generated_by = models.ForeignKey(
        User, on_delete=models.PROTECT, related_name='generated_bills'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'core_bill'
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.bill_number} ({"paid" if self.is_paid else "unpaid"})'


class SequenceCounter(models.Model):
    """Last identifier number handed out per scope (e.g. 'kot:bar', 'bill')."""
    scope = models.CharField(max_length=50, unique=True)
    last_value = models.PositiveBigIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'core_sequence_counter'
        ordering = ['scope']

    def __str__(self):
        return f'{self.scope}: {self.last_value}'
