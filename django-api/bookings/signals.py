"""Django signals for cache invalidation."""

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from bookings.cache import ROOM_LIST_KEY, room_detail_key
from bookings.models import Room


@receiver([post_save, post_delete], sender=Room)
def invalidate_room_cache(sender, instance, **kwargs):
    """Invalidate catalog caches when a room is saved or deleted."""
    cache.delete_many([ROOM_LIST_KEY, room_detail_key(str(instance.pk))])
