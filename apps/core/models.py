"""
Core Models for BrokerDesk Django Backend

Business records (users, agents, insurance providers, vehicle classes and
policies) share the Document base: UUID primary key, soft-delete flag,
audit timestamps and creator/updater ids. Records are never physically
removed; `objects` hides soft-deleted rows and `all_objects` sees them.
"""
import uuid
from datetime import date

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone

from services.commission_calculator import DERIVED_FIELDS, DerivedFields, compute_derived_fields
from services.policy_status import POLICY_STATUSES, classify_status, days_until_expiry

from .managers import DocumentManager, PolicyManager
from .utils import normalize_name

PERCENTAGE_VALIDATORS = [MinValueValidator(0), MaxValueValidator(100)]


def percentage_field(**kwargs):
    """FloatField constrained to [0, 100]."""
    return models.FloatField(validators=PERCENTAGE_VALIDATORS, **kwargs)


class Document(models.Model):
    """
    Abstract base for every persisted business record.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    is_deleted = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    created_by = models.ForeignKey(
        'core.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )
    updated_by = models.ForeignKey(
        'core.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )

    objects = DocumentManager()
    all_objects = models.Manager()

    class Meta:
        abstract = True

    def soft_delete(self, user_id=None) -> None:
        """Flag the record as deleted; the row is kept."""
        self.is_deleted = True
        if user_id is not None:
            self.updated_by_id = user_id
        self.save(update_fields=['is_deleted', 'updated_by', 'updated_at'])


class User(Document):
    """
    Back-office user of the brokerage.

    auth_uid is the subject (`sub` claim) of the identity provider's token.
    """
    ROLE_ADMIN = 'admin'
    ROLE_SUB_USER = 'sub-user'
    ROLE_CHOICES = [
        (ROLE_ADMIN, 'Admin'),
        (ROLE_SUB_USER, 'Sub-User'),
    ]

    auth_uid = models.CharField(max_length=128, null=True, blank=True, unique=True)
    name = models.CharField(max_length=255)
    username = models.CharField(max_length=150)
    email = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=10)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_SUB_USER)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'users'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['username'],
                condition=Q(is_deleted=False),
                name='uq_users_username_alive',
            ),
            models.UniqueConstraint(
                fields=['email'],
                condition=Q(is_deleted=False),
                name='uq_users_email_alive',
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.email})"

    @property
    def is_admin(self) -> bool:
        return self.role == self.ROLE_ADMIN


class InsuranceProvider(Document):
    """
    Insurance underwriter. Supplies the default TDS and GST rates of a policy.
    Maps to: insurance_providers
    """
    name = models.CharField(max_length=255)
    agent_rate = percentage_field()
    our_rate = percentage_field()
    tds = percentage_field()
    gst = percentage_field()
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'insurance_providers'
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(
                fields=['name'],
                condition=Q(is_deleted=False),
                name='uq_providers_name_alive',
            ),
        ]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        self.name = normalize_name(self.name)
        super().save(*args, **kwargs)


class VehicleClass(Document):
    """
    Vehicle rating category. Supplies the default agent and brokerage rates.

    commission_rate is advisory and never used in the calculation.
    Maps to: vehicle_classes
    """
    name = models.CharField(max_length=255)
    commission_rate = percentage_field()
    agent_rate = percentage_field()
    our_rate = percentage_field()
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'vehicle_classes'
        ordering = ['name']
        verbose_name_plural = 'Vehicle classes'
        constraints = [
            models.UniqueConstraint(
                fields=['name'],
                condition=Q(is_deleted=False),
                name='uq_vehicle_classes_name_alive',
            ),
        ]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        self.name = normalize_name(self.name)
        super().save(*args, **kwargs)


class Agent(Document):
    """
    Intermediary who sells policies and earns the agent commission.
    Maps to: agents
    """
    name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=10)
    email = models.CharField(max_length=255, null=True, blank=True)
    address = models.TextField()
    city = models.CharField(max_length=255, blank=True, default='')
    state = models.CharField(max_length=255, blank=True, default='')
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'agents'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['phone_number'],
                condition=Q(is_deleted=False),
                name='uq_agents_phone_alive',
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.phone_number})"

    @property
    def location(self) -> dict:
        return {
            'address': self.address,
            'city': self.city,
            'state': self.state,
        }


class Policy(Document):
    """
    Insurance policy of one holder.

    The four rates are snapshotted at creation. The derived money fields and
    the cached status are recomputed on every save, so they can never be
    stored out of step with premium_amount and the rates.
    Maps to: policy_holders
    """
    STATUS_CHOICES = [(status, status.replace('-', ' ').title()) for status in POLICY_STATUSES]

    name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=10, null=True, blank=True)
    email = models.CharField(max_length=255, null=True, blank=True)
    address = models.TextField(blank=True, default='')
    policy_number = models.CharField(max_length=100)
    start_date = models.DateField()
    end_date = models.DateField()

    agent = models.ForeignKey(Agent, on_delete=models.PROTECT, related_name='policies')
    insurance_provider = models.ForeignKey(
        InsuranceProvider,
        on_delete=models.PROTECT,
        related_name='policies',
    )
    vehicle_type = models.ForeignKey(VehicleClass, on_delete=models.PROTECT, related_name='policies')

    # Vehicle details
    vehicle_registration_number = models.CharField(max_length=50, null=True, blank=True)
    vehicle_make = models.CharField(max_length=100, null=True, blank=True)
    vehicle_model = models.CharField(max_length=100, null=True, blank=True)

    # Calculator inputs
    premium_amount = models.FloatField(validators=[MinValueValidator(0)])
    agent_rate = percentage_field()
    our_rate = percentage_field()
    tds_rate = percentage_field()
    gst_rate = percentage_field()

    # Derived (never written directly)
    total_commission = models.FloatField(default=0)
    commission = models.FloatField(default=0)
    agent_commission = models.FloatField(default=0)
    tds_amount = models.FloatField(default=0)
    profit_after_tds = models.FloatField(default=0)
    our_profit = models.FloatField(default=0)
    gst_amount = models.FloatField(default=0)
    gross_amount = models.FloatField(default=0)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, db_index=True)

    objects = PolicyManager()
    all_objects = models.Manager()

    class Meta:
        db_table = 'policy_holders'
        ordering = ['-created_at']
        verbose_name_plural = 'Policies'
        constraints = [
            models.UniqueConstraint(
                fields=['policy_number'],
                condition=Q(is_deleted=False),
                name='uq_policies_number_alive',
            ),
            models.CheckConstraint(
                condition=Q(end_date__gt=models.F('start_date')),
                name='ck_policies_date_range',
            ),
        ]
        indexes = [
            models.Index(fields=['agent', 'start_date'], name='idx_policies_agent_start'),
            models.Index(fields=['insurance_provider', 'start_date'], name='idx_policies_provider_start'),
            models.Index(fields=['vehicle_type', 'start_date'], name='idx_policies_vclass_start'),
            models.Index(fields=['end_date'], name='idx_policies_end_date'),
        ]

    def __str__(self):
        return f"{self.policy_number} - {self.name}"

    def apply_derived_fields(self) -> DerivedFields:
        """Recompute and assign every derived field from premium and rates."""
        derived = compute_derived_fields(
            self.premium_amount,
            self.agent_rate,
            self.our_rate,
            self.tds_rate,
            self.gst_rate,
        )
        for field, value in derived.as_dict().items():
            setattr(self, field, value)
        return derived

    def refresh_status(self, today: date | None = None) -> str:
        """Re-derive and assign the cached status."""
        self.status = classify_status(self.start_date, self.end_date, today or timezone.localdate())
        return self.status

    @property
    def current_status(self) -> str:
        """Status as of today, ignoring the cached column."""
        return classify_status(self.start_date, self.end_date, timezone.localdate())

    @property
    def days_until_expiry(self) -> int:
        return days_until_expiry(self.end_date, timezone.localdate())

    def save(self, *args, **kwargs):
        self.apply_derived_fields()
        self.refresh_status()

        update_fields = kwargs.get('update_fields')
        if update_fields is not None:
            kwargs['update_fields'] = set(update_fields) | set(DERIVED_FIELDS) | {'status'}

        super().save(*args, **kwargs)
