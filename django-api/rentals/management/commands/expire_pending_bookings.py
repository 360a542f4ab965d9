from datetime import timedelta

from django.core.management.base import BaseCommand

from rentals.dependencies import get_booking_service


class Command(BaseCommand):
    help = "Cancel pending bookings whose payment window has passed."

    def add_arguments(self, parser):
        parser.add_argument(
            "--ttl-minutes",
            type=int,
            help="Override RENTALS['PENDING_BOOKING_TTL_MINUTES'].",
        )

    def handle(self, *args, **options):
        ttl = None
        if options["ttl_minutes"] is not None:
            ttl = timedelta(minutes=options["ttl_minutes"])
        expired = get_booking_service().expire_stale_bookings(ttl=ttl)
        for booking in expired:
            self.stdout.write(f"Cancelled {booking.id} (vehicle {booking.vehicle_id})")
        self.stdout.write(self.style.SUCCESS(f"Expired {len(expired)} booking(s)."))
