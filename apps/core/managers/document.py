"""
Document QuerySet and Manager for soft-deleted records.

Every business record carries an is_deleted flag and is never physically
removed. `Model.objects` hides deleted rows; `Model.all_objects` sees them.
"""
from django.db import models
from django.db.models import Q
from django.utils import timezone


class DocumentQuerySet(models.QuerySet):
    """
    QuerySet with soft-delete, activity and search helpers.
    """

    def active(self):
        """Filter to records flagged is_active."""
        return self.filter(is_active=True)

    def search(self, query: str | None, fields: list[str] | tuple[str, ...]):
        """
        Case-insensitive substring search across `fields`.

        Args:
            query: Search string (blank means no filtering)
            fields: Model field lookups to match against

        Returns:
            Filtered queryset
        """
        query = (query or '').strip()
        if not query or not fields:
            return self

        condition = Q()
        for field in fields:
            condition |= Q(**{f'{field}__icontains': query})
        return self.filter(condition)

    def soft_delete(self, user_id=None) -> int:
        """Soft delete every record in the queryset. Returns the number of rows updated."""
        updates = {'is_deleted': True, 'updated_at': timezone.now()}
        if user_id is not None:
            updates['updated_by_id'] = user_id
        return self.update(**updates)


class DocumentManager(models.Manager.from_queryset(DocumentQuerySet)):
    """Default manager: excludes soft-deleted records."""

    def get_queryset(self):
        return super().get_queryset().filter(is_deleted=False)
