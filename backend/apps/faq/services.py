# apps/faq/services.py

import logging

from django.db import transaction

from apps.core.exceptions import NotFound
from .models import FaqEntry

logger = logging.getLogger(__name__)


class FaqService:
    """Reordering of FAQ entries"""

    @staticmethod
    def move(entry_id, direction):
        """
        Swap an entry's ``order`` with its neighbour above or below.

        Runs under row locks so two concurrent moves cannot interleave. An
        entry already at the edge stays where it is.
        """
        with transaction.atomic():
            entries = list(FaqEntry.objects.select_for_update().order_by('order', 'id'))
            index = next((i for i, entry in enumerate(entries) if entry.pk == int(entry_id)), None)
            if index is None:
                raise NotFound('FAQ entry not found')

            FaqService._densify(entries)

            target = index - 1 if direction == 'up' else index + 1
            if target < 0 or target >= len(entries):
                return entries[index]

            current, neighbour = entries[index], entries[target]
            current.order, neighbour.order = neighbour.order, current.order
            FaqEntry.objects.bulk_update([current, neighbour], ['order'])

        logger.info(f"Moved FAQ entry {current.pk} {direction} to position {current.order}")
        return current

    @staticmethod
    def _densify(entries):
        """Renumber 0..n-1 if positions have gaps or duplicates"""
        stale = [entry for position, entry in enumerate(entries) if entry.order != position]
        for position, entry in enumerate(entries):
            entry.order = position
        if stale:
            FaqEntry.objects.bulk_update(stale, ['order'])
