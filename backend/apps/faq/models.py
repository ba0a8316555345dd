# apps/faq/models.py

from django.db import models

from apps.core.models import TimeStampedModel


class FaqEntry(TimeStampedModel):
    """
    Public FAQ entry built from a list of typed content blocks.

    ``order`` is a dense position used for display; reordering swaps the
    values of two adjacent entries.
    """
    title = models.CharField(max_length=200)
    blocks = models.JSONField(default=list, blank=True)
    is_visible = models.BooleanField(default=True)
    order = models.PositiveIntegerField(default=0, db_index=True)

    class Meta:
        ordering = ['order', 'id']
        verbose_name = 'FAQ entry'
        verbose_name_plural = 'FAQ entries'

    def __str__(self):
        return self.title
