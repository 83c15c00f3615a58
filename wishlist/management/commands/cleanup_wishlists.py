"""Delete wishlist entries that point at deactivated products."""

from django.core.management.base import BaseCommand
from wishlist.services import prune_inactive


class Command(BaseCommand):
    help = "Remove wishlist entries for inactive products"

    def handle(self, *args, **options):
        removed = prune_inactive()
        self.stdout.write(self.style.SUCCESS(f"Removed {removed} stale wishlist entries."))
