"""
Django Admin Configuration for BrokerDesk

Provides admin interface for viewing and managing data. Derived policy
amounts and the cached status are read-only; deleting from the admin
soft-deletes.
"""
from django.contrib import admin

from services.commission_calculator import DERIVED_FIELDS

from .models import Agent, InsuranceProvider, Policy, User, VehicleClass


class DocumentAdmin(admin.ModelAdmin):
    """Soft-delete aware base admin."""
    readonly_fields = ['id', 'created_at', 'updated_at', 'created_by', 'updated_by']
    actions = ['soft_delete_selected']

    def get_actions(self, request):
        actions = super().get_actions(request)
        actions.pop('delete_selected', None)
        return actions

    def delete_model(self, request, obj):
        obj.soft_delete()

    @admin.action(description='Delete selected records')
    def soft_delete_selected(self, request, queryset):
        updated = queryset.soft_delete()
        self.message_user(request, f'{updated} record(s) deleted.')


@admin.register(User)
class UserAdmin(DocumentAdmin):
    """Admin interface for users."""
    list_display = ['name', 'username', 'email', 'role', 'is_active', 'created_at']
    list_filter = ['role', 'is_active']
    search_fields = ['name', 'username', 'email']
    ordering = ['-created_at']


@admin.register(InsuranceProvider)
class InsuranceProviderAdmin(DocumentAdmin):
    """Admin interface for insurance providers."""
    list_display = ['name', 'agent_rate', 'our_rate', 'tds', 'gst', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name']
    ordering = ['name']


@admin.register(VehicleClass)
class VehicleClassAdmin(DocumentAdmin):
    """Admin interface for vehicle classes."""
    list_display = ['name', 'commission_rate', 'agent_rate', 'our_rate', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name']
    ordering = ['name']


@admin.register(Agent)
class AgentAdmin(DocumentAdmin):
    """Admin interface for agents."""
    list_display = ['name', 'phone_number', 'email', 'city', 'state', 'is_active']
    list_filter = ['is_active', 'state']
    search_fields = ['name', 'phone_number', 'email', 'city']
    ordering = ['-created_at']


@admin.register(Policy)
class PolicyAdmin(DocumentAdmin):
    """Admin interface for policies."""
    list_display = [
        'policy_number', 'name', 'agent', 'insurance_provider', 'vehicle_type',
        'premium_amount', 'our_profit', 'end_date', 'status',
    ]
    list_filter = ['status', 'insurance_provider', 'vehicle_type']
    search_fields = ['policy_number', 'name', 'phone_number', 'email']
    readonly_fields = DocumentAdmin.readonly_fields + [*DERIVED_FIELDS, 'status']
    raw_id_fields = ['agent']
    ordering = ['-created_at']

    fieldsets = (
        ('Holder', {
            'fields': ('name', 'phone_number', 'email', 'address')
        }),
        ('Policy', {
            'fields': ('policy_number', 'start_date', 'end_date', 'status', 'agent', 'insurance_provider', 'vehicle_type')
        }),
        ('Vehicle', {
            'fields': ('vehicle_registration_number', 'vehicle_make', 'vehicle_model')
        }),
        ('Rates', {
            'fields': ('premium_amount', 'agent_rate', 'our_rate', 'tds_rate', 'gst_rate')
        }),
        ('Commission', {
            'fields': DERIVED_FIELDS
        }),
        ('Audit', {
            'fields': ('id', 'created_at', 'updated_at', 'created_by', 'updated_by'),
            'classes': ('collapse',)
        }),
    )
