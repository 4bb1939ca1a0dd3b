from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import UserChangeForm, UserCreationForm

from .models import (
    Bill,
    Ingredient,
    Kot,
    KotItem,
    MenuItem,
    MenuItemIngredient,
    OrderReversal,
    SequenceCounter,
    StockAddition,
    User,
)


# --- Inlines ---

class KotItemInline(admin.TabularInline):
    model = KotItem
    extra = 0
    can_delete = False
    readonly_fields = ('line_number', 'menu_item', 'quantity', 'unit_price', 'total_price')

    def has_add_permission(self, request, obj=None):
        return False


class MenuItemIngredientInline(admin.TabularInline):
    model = MenuItemIngredient
    extra = 0
    autocomplete_fields = ['ingredient']


# --- User (replace default auth User admin) ---


class CustomUserCreationForm(UserCreationForm):
    """Add form must declare role so it renders and saves."""
    class Meta(UserCreationForm.Meta):
        model = User
        fields = UserCreationForm.Meta.fields + ('role',)


class CustomUserChangeForm(UserChangeForm):
    class Meta:
        model = User
        fields = '__all__'


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    form = CustomUserChangeForm
    add_form = CustomUserCreationForm
    list_display = ('username', 'first_name', 'last_name', 'role', 'is_active', 'created_at')
    list_filter = ('role', 'is_active', 'is_staff')
    search_fields = ('username', 'first_name', 'last_name', 'email')
    ordering = ('-date_joined',)
    readonly_fields = ('created_at', 'updated_at')

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Point of sale', {'fields': ('role', 'created_at', 'updated_at')}),
    )
    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Point of sale', {'fields': ('role',)}),
    )


# --- Catalogue ---

@admin.register(Ingredient)
class IngredientAdmin(admin.ModelAdmin):
    list_display = ('name', 'unit', 'current_stock', 'minimum_threshold', 'cost_per_unit', 'is_low_stock')
    search_fields = ('name',)
    readonly_fields = ('created_at', 'updated_at')

    @admin.display(boolean=True, description='Low stock')
    def is_low_stock(self, obj):
        return obj.is_low_stock

    def get_readonly_fields(self, request, obj=None):
        # Opening stock is set on create; afterwards only approved stock additions move it.
        if obj is not None:
            return self.readonly_fields + ('current_stock',)
        return self.readonly_fields


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'price', 'is_active', 'created_at')
    list_filter = ('category', 'is_active')
    search_fields = ('name',)
    inlines = (MenuItemIngredientInline,)
    readonly_fields = ('created_at', 'updated_at')


@admin.register(MenuItemIngredient)
class MenuItemIngredientAdmin(admin.ModelAdmin):
    list_display = ('menu_item', 'ingredient', 'quantity', 'created_at')
    search_fields = ('menu_item__name', 'ingredient__name')
    autocomplete_fields = ('menu_item', 'ingredient')
    readonly_fields = ('created_at',)


# --- Workflow entities: numbers, statuses and totals are read-only ---

@admin.register(Kot)
class KotAdmin(admin.ModelAdmin):
    list_display = ('kot_number', 'customer_name', 'type', 'status', 'total_amount', 'created_by', 'created_at')
    list_filter = ('type', 'status')
    search_fields = ('kot_number', 'customer_name')
    inlines = (KotItemInline,)
    readonly_fields = (
        'kot_number', 'type', 'status', 'total_amount', 'created_by', 'processed_by',
        'created_at', 'updated_at',
    )


@admin.register(StockAddition)
class StockAdditionAdmin(admin.ModelAdmin):
    list_display = ('id', 'ingredient', 'quantity', 'total_cost', 'status', 'added_by', 'approved_by', 'created_at')
    list_filter = ('status',)
    search_fields = ('ingredient__name',)
    readonly_fields = (
        'ingredient', 'quantity', 'cost_per_unit', 'total_cost', 'status',
        'added_by', 'approved_by', 'reason', 'created_at', 'updated_at',
    )


@admin.register(OrderReversal)
class OrderReversalAdmin(admin.ModelAdmin):
    list_display = ('id', 'kot', 'status', 'requested_by', 'approved_by', 'created_at')
    list_filter = ('status',)
    search_fields = ('kot__kot_number', 'reason')
    readonly_fields = (
        'kot', 'reason', 'status', 'requested_by', 'approved_by', 'created_at', 'updated_at',
    )


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    list_display = ('bill_number', 'kot', 'final_amount', 'payment_method', 'is_paid', 'paid_at', 'created_at')
    list_filter = ('is_paid', 'payment_method')
    search_fields = ('bill_number', 'kot__kot_number')
    readonly_fields = (
        'bill_number', 'kot', 'total_amount', 'discount', 'service_charge', 'tax',
        'final_amount', 'payment_method', 'is_paid', 'paid_at', 'generated_by',
        'created_at', 'updated_at',
    )


@admin.register(SequenceCounter)
class SequenceCounterAdmin(admin.ModelAdmin):
    list_display = ('scope', 'last_value', 'updated_at')
    readonly_fields = ('scope', 'last_value', 'updated_at')
