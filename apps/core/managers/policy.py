"""
Policy QuerySet and Manager for report and list queries.
"""
from datetime import date, timedelta
from uuid import UUID

from django.db.models import Count, Q

from services.policy_status import (
    EXPIRING_SOON_DAYS,
    STATUS_ACTIVE,
    STATUS_EXPIRED,
    STATUS_EXPIRING_SOON,
)

from .document import DocumentManager, DocumentQuerySet

POLICY_SEARCH_FIELDS = ('policy_number', 'name', 'phone_number', 'email')


class PolicyQuerySet(DocumentQuerySet):
    """
    Custom QuerySet for Policy with filtering by related entity and dates.
    """

    def for_agent(self, agent_id: UUID):
        """Filter by agent."""
        return self.filter(agent_id=agent_id)

    def for_provider(self, provider_id: UUID):
        """Filter by insurance provider."""
        return self.filter(insurance_provider_id=provider_id)

    def for_vehicle_class(self, vehicle_class_id: UUID):
        """Filter by vehicle class."""
        return self.filter(vehicle_type_id=vehicle_class_id)

    def started_between(self, date_from: date | None = None, date_to: date | None = None):
        """
        Filter by policy start date range.

        Args:
            date_from: Start date (inclusive)
            date_to: End date (inclusive)

        Returns:
            Filtered queryset
        """
        qs = self
        if date_from:
            qs = qs.filter(start_date__gte=date_from)
        if date_to:
            qs = qs.filter(start_date__lte=date_to)
        return qs

    def ending_between(self, date_from: date, date_to: date):
        """Filter to policies whose end date falls in [date_from, date_to]."""
        return self.filter(end_date__gte=date_from, end_date__lte=date_to)

    def with_current_status(self, status: str, today: date):
        """
        Filter by status as of `today`, derived from end_date.

        Uses the same thresholds as classify_status() evaluated on calendar
        dates, so the stored status column is never trusted here.
        """
        horizon = today + timedelta(days=EXPIRING_SOON_DAYS)
        if status == STATUS_EXPIRED:
            return self.filter(end_date__lt=today)
        if status == STATUS_EXPIRING_SOON:
            return self.ending_between(today, horizon)
        if status == STATUS_ACTIVE:
            return self.filter(end_date__gt=horizon)
        return self.none()

    def search(self, query: str | None, fields=POLICY_SEARCH_FIELDS):
        """Search by policy number, holder name, phone or email."""
        return super().search(query, fields)

    def with_relations(self):
        """Include agent, provider and vehicle class."""
        return self.select_related('agent', 'insurance_provider', 'vehicle_type')

    def status_counts(self, today: date) -> dict[str, int]:
        """Count policies per current status as of `today`."""
        horizon = today + timedelta(days=EXPIRING_SOON_DAYS)
        return self.aggregate(
            total=Count('id'),
            active=Count('id', filter=Q(end_date__gt=horizon)),
            expired=Count('id', filter=Q(end_date__lt=today)),
            expiring_soon=Count('id', filter=Q(end_date__gte=today, end_date__lte=horizon)),
        )


class PolicyManager(DocumentManager.from_queryset(PolicyQuerySet)):
    """Default Policy manager: excludes soft-deleted policies."""
