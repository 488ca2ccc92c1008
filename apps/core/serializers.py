"""
Core Serializers for BrokerDesk Django Backend

DRF Serializers for all core models:
- Explicit field definitions (no fields = '__all__')
- Unique fields are declared explicitly and checked against non-deleted
  rows only, with a message on the offending field
- Derived policy fields and status are read-only
"""
import math

from rest_framework import serializers

from services.commission_calculator import DERIVED_FIELDS, compute_derived_fields

from .models import Agent, InsuranceProvider, Policy, User, VehicleClass
from .references import reference_for
from .utils import normalize_name
from .validators import validate_email_format, validate_no_dangerous_characters, validate_phone_number


def percentage(**kwargs) -> serializers.FloatField:
    return serializers.FloatField(min_value=0, max_value=100, **kwargs)


def validate_premium(value: float) -> float:
    if not value > 0:
        raise serializers.ValidationError('Premium amount must be greater than 0')
    # Rates are capped at 100, so the maximum rates bound every derived amount
    derived = compute_derived_fields(value, 100, 100, 100, 100)
    if not all(math.isfinite(amount) for amount in derived.as_dict().values()):
        raise serializers.ValidationError('Premium amount is too large')
    return value


class UniqueAliveMixin:
    """
    Uniqueness checks scoped to non-deleted rows.

    Declare `unique_alive_messages = {field: message}` on the serializer and
    call `self.check_unique_alive(field, value)` from `validate_<field>`.
    """
    unique_alive_messages: dict[str, str] = {}

    def check_unique_alive(self, field: str, value):
        if value in (None, ''):
            return value
        queryset = self.Meta.model.objects.filter(**{field: value})
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError(self.unique_alive_messages[field])
        return value


# User Serializers

class UserSerializer(serializers.ModelSerializer):
    """Read serializer for User."""

    class Meta:
        model = User
        fields = [
            'id',
            'auth_uid',
            'name',
            'username',
            'email',
            'phone_number',
            'role',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class UserWriteSerializer(UniqueAliveMixin, serializers.ModelSerializer):
    """Write serializer for User create / update."""
    name = serializers.CharField(max_length=255)
    username = serializers.CharField(min_length=3, max_length=150)
    email = serializers.CharField(max_length=255, validators=[validate_email_format])
    phone_number = serializers.CharField(validators=[validate_phone_number])
    auth_uid = serializers.CharField(max_length=128, required=False, allow_null=True, allow_blank=True)

    unique_alive_messages = {
        'username': 'Username is already taken',
        'email': 'A user with this email already exists',
        'auth_uid': 'This identity is already linked to another user',
    }

    class Meta:
        model = User
        fields = ['auth_uid', 'name', 'username', 'email', 'phone_number', 'role', 'is_active']

    def validate_username(self, value):
        return self.check_unique_alive('username', value.strip())

    def validate_email(self, value):
        return self.check_unique_alive('email', value.strip().lower())

    def validate_auth_uid(self, value):
        value = (value or '').strip() or None
        if value is None:
            return None
        # auth_uid is unique across deleted rows too
        queryset = User.all_objects.filter(auth_uid=value)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError(self.unique_alive_messages['auth_uid'])
        return value


# Insurance Provider Serializers

class InsuranceProviderSerializer(UniqueAliveMixin, serializers.ModelSerializer):
    """Read / write serializer for InsuranceProvider."""
    name = serializers.CharField(max_length=255)
    agent_rate = percentage()
    our_rate = percentage()
    tds = percentage()
    gst = percentage()

    unique_alive_messages = {'name': 'An insurance provider with this name already exists'}

    class Meta:
        model = InsuranceProvider
        fields = [
            'id',
            'name',
            'agent_rate',
            'our_rate',
            'tds',
            'gst',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_name(self, value):
        name = normalize_name(value)
        if not name:
            raise serializers.ValidationError('Name is required')
        return self.check_unique_alive('name', name)


class InsuranceProviderMinimalSerializer(serializers.ModelSerializer):
    """Minimal provider serializer for dropdowns."""

    class Meta:
        model = InsuranceProvider
        fields = ['id', 'name', 'tds', 'gst']


# Vehicle Class Serializers

class VehicleClassSerializer(UniqueAliveMixin, serializers.ModelSerializer):
    """Read / write serializer for VehicleClass."""
    name = serializers.CharField(max_length=255)
    commission_rate = percentage()
    agent_rate = percentage()
    our_rate = percentage()

    unique_alive_messages = {'name': 'A vehicle class with this name already exists'}

    class Meta:
        model = VehicleClass
        fields = [
            'id',
            'name',
            'commission_rate',
            'agent_rate',
            'our_rate',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_name(self, value):
        name = normalize_name(value)
        if not name:
            raise serializers.ValidationError('Name is required')
        return self.check_unique_alive('name', name)


class VehicleClassMinimalSerializer(serializers.ModelSerializer):
    """Minimal vehicle class serializer for dropdowns."""

    class Meta:
        model = VehicleClass
        fields = ['id', 'name', 'agent_rate', 'our_rate']


# Agent Serializers

class LocationSerializer(serializers.Serializer):
    address = serializers.CharField(validators=[validate_no_dangerous_characters])
    city = serializers.CharField(
        required=False,
        allow_blank=True,
        default='',
        validators=[validate_no_dangerous_characters],
    )
    state = serializers.CharField(
        required=False,
        allow_blank=True,
        default='',
        validators=[validate_no_dangerous_characters],
    )


class AgentSerializer(UniqueAliveMixin, serializers.ModelSerializer):
    """
    Read / write serializer for Agent.

    Location is nested on the wire and flattened onto the model in validate().
    """
    name = serializers.CharField(max_length=255)
    phone_number = serializers.CharField(validators=[validate_phone_number])
    email = serializers.CharField(
        max_length=255,
        required=False,
        allow_null=True,
        allow_blank=True,
        validators=[validate_email_format],
    )
    location = LocationSerializer()

    unique_alive_messages = {'phone_number': 'An agent with this phone number already exists'}

    class Meta:
        model = Agent
        fields = [
            'id',
            'name',
            'phone_number',
            'email',
            'location',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_phone_number(self, value):
        return self.check_unique_alive('phone_number', value)

    def validate_email(self, value):
        return value.strip().lower() if value else None

    def validate(self, attrs):
        location = attrs.pop('location', None)
        if location is not None:
            attrs.update(location)
        return attrs


class AgentMinimalSerializer(serializers.ModelSerializer):
    """Minimal Agent serializer for dropdowns."""

    class Meta:
        model = Agent
        fields = ['id', 'name', 'phone_number']


# Policy Serializers

class VehicleInfoSerializer(serializers.Serializer):
    registration_number = serializers.CharField(
        source='vehicle_registration_number',
        max_length=50,
        required=False,
        allow_null=True,
        allow_blank=True,
    )
    make = serializers.CharField(
        source='vehicle_make',
        max_length=100,
        required=False,
        allow_null=True,
        allow_blank=True,
    )
    model = serializers.CharField(
        source='vehicle_model',
        max_length=100,
        required=False,
        allow_null=True,
        allow_blank=True,
    )


class PolicySerializer(serializers.ModelSerializer):
    """
    Read serializer for Policy.

    Pass context={'expand': True} to resolve agent, insurance_provider and
    vehicle_type into entity summaries; otherwise they are {"id": ...}.
    """
    agent = serializers.SerializerMethodField()
    insurance_provider = serializers.SerializerMethodField()
    vehicle_type = serializers.SerializerMethodField()
    vehicle_info = VehicleInfoSerializer(source='*', read_only=True)
    current_status = serializers.CharField(read_only=True)
    days_until_expiry = serializers.IntegerField(read_only=True)

    class Meta:
        model = Policy
        fields = [
            'id',
            'name',
            'phone_number',
            'email',
            'address',
            'policy_number',
            'start_date',
            'end_date',
            'agent',
            'insurance_provider',
            'vehicle_type',
            'vehicle_info',
            'premium_amount',
            'agent_rate',
            'our_rate',
            'tds_rate',
            'gst_rate',
            *DERIVED_FIELDS,
            'status',
            'current_status',
            'days_until_expiry',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    @property
    def expand(self) -> bool:
        return bool(self.context.get('expand'))

    def get_agent(self, obj):
        return reference_for(obj, 'agent', resolve=self.expand, fields=('name', 'phone_number')).as_dict()

    def get_insurance_provider(self, obj):
        return reference_for(obj, 'insurance_provider', resolve=self.expand).as_dict()

    def get_vehicle_type(self, obj):
        return reference_for(obj, 'vehicle_type', resolve=self.expand).as_dict()


class PolicyWriteSerializer(UniqueAliveMixin, serializers.ModelSerializer):
    """
    Write serializer for Policy create / update.

    Rates are optional; missing ones are filled from the provider and
    vehicle class by the service layer. Derived fields cannot be written.
    """
    name = serializers.CharField(max_length=255)
    phone_number = serializers.CharField(
        required=False,
        allow_null=True,
        allow_blank=True,
        validators=[validate_phone_number],
    )
    email = serializers.CharField(
        max_length=255,
        required=False,
        allow_null=True,
        allow_blank=True,
        validators=[validate_email_format],
    )
    address = serializers.CharField(required=False, allow_blank=True, default='')
    policy_number = serializers.CharField(max_length=100)
    agent_id = serializers.PrimaryKeyRelatedField(
        source='agent',
        queryset=Agent.objects.all(),
        pk_field=serializers.UUIDField(),
    )
    insurance_provider_id = serializers.PrimaryKeyRelatedField(
        source='insurance_provider',
        queryset=InsuranceProvider.objects.all(),
        pk_field=serializers.UUIDField(),
    )
    vehicle_type_id = serializers.PrimaryKeyRelatedField(
        source='vehicle_type',
        queryset=VehicleClass.objects.all(),
        pk_field=serializers.UUIDField(),
    )
    vehicle_info = VehicleInfoSerializer(source='*', required=False)
    premium_amount = serializers.FloatField()
    agent_rate = percentage(required=False, allow_null=True)
    our_rate = percentage(required=False, allow_null=True)
    tds_rate = percentage(required=False, allow_null=True)
    gst_rate = percentage(required=False, allow_null=True)

    unique_alive_messages = {'policy_number': 'A policy with this policy number already exists'}

    class Meta:
        model = Policy
        fields = [
            'name',
            'phone_number',
            'email',
            'address',
            'policy_number',
            'start_date',
            'end_date',
            'agent_id',
            'insurance_provider_id',
            'vehicle_type_id',
            'vehicle_info',
            'premium_amount',
            'agent_rate',
            'our_rate',
            'tds_rate',
            'gst_rate',
        ]

    def validate_policy_number(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Policy number is required')
        return self.check_unique_alive('policy_number', value)

    def validate_premium_amount(self, value):
        return validate_premium(value)

    def validate_phone_number(self, value):
        return value or None

    def validate_email(self, value):
        return value.strip().lower() if value else None

    def validate(self, attrs):
        start_date = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end_date = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start_date and end_date and start_date >= end_date:
            raise serializers.ValidationError({'end_date': 'End date must be after start date'})
        return attrs


class CalculationSerializer(serializers.Serializer):
    """Input of the calculation preview; rates fall back to provider / vehicle class defaults."""
    premium_amount = serializers.FloatField()
    agent_rate = percentage(required=False, allow_null=True)
    our_rate = percentage(required=False, allow_null=True)
    tds_rate = percentage(required=False, allow_null=True)
    gst_rate = percentage(required=False, allow_null=True)
    insurance_provider_id = serializers.PrimaryKeyRelatedField(
        source='insurance_provider',
        queryset=InsuranceProvider.objects.all(),
        pk_field=serializers.UUIDField(),
        required=False,
        allow_null=True,
    )
    vehicle_type_id = serializers.PrimaryKeyRelatedField(
        source='vehicle_type',
        queryset=VehicleClass.objects.all(),
        pk_field=serializers.UUIDField(),
        required=False,
        allow_null=True,
    )

    def validate_premium_amount(self, value):
        return validate_premium(value)
