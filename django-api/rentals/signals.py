"""Django signals for cache invalidation.

Covers edits made through the ORM (admin, seeding). Availability flips done by
the booking ledger use queryset updates, which send no signals; the Django
store invalidates those itself on commit.
"""

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from rentals.cache import invalidate_catalog_cache
from rentals.models import Vehicle


@receiver([post_save, post_delete], sender=Vehicle)
def invalidate_vehicle_caches(sender, instance, **kwargs):
    """Invalidate catalog caches when a vehicle is saved or deleted."""
    transaction.on_commit(invalidate_catalog_cache)
