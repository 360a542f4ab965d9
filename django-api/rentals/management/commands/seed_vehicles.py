from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from rentals.models import Vehicle, VehicleType


def image(photo_id: str) -> str:
    return (
        f"https://images.unsplash.com/{photo_id}"
        "?ixlib=rb-1.2.1&auto=format&fit=crop&w=500&h=300&q=80"
    )


SAMPLE_VEHICLES = [
    {
        "name": "Toyota Corolla",
        "type": VehicleType.CAR,
        "category": "Economy",
        "description": "Reliable and fuel-efficient compact car, perfect for city driving.",
        "rate_per_day": Decimal("32.00"),
        "image_url": image("photo-1549317661-bd32c8ce0db2"),
        "features": ["Manual", "4 Seats", "AC", "Bluetooth"],
    },
    {
        "name": "Honda CBR",
        "type": VehicleType.BIKE,
        "category": "Sport",
        "description": "Sporty motorcycle with excellent handling and performance.",
        "rate_per_day": Decimal("18.00"),
        "image_url": image("photo-1568772585407-9361f9bf3a87"),
        "features": ["600cc", "2 Seats", "Helmet"],
    },
    {
        "name": "BMW 3 Series",
        "type": VehicleType.CAR,
        "category": "Luxury",
        "description": "Elegant luxury sedan with premium features and smooth performance.",
        "rate_per_day": Decimal("58.00"),
        "image_url": image("photo-1580273916550-e323be2ae537"),
        "features": ["Automatic", "5 Seats", "AC", "Navigation"],
    },
    {
        "name": "Mercedes Sprinter",
        "type": VehicleType.BUS,
        "category": "Minibus",
        "description": "Spacious minibus ideal for group travel and events.",
        "rate_per_day": Decimal("90.00"),
        "image_url": image("photo-1570125909232-eb263c188f7e"),
        "features": ["Automatic", "12 Seats", "AC", "WiFi"],
    },
    {
        "name": "Vespa Scooter",
        "type": VehicleType.BIKE,
        "category": "City",
        "description": "Stylish city scooter perfect for urban commuting.",
        "rate_per_day": Decimal("12.00"),
        "image_url": image("photo-1599676821263-0cd72c777057"),
        "features": ["125cc", "2 Seats", "Helmet"],
    },
    {
        "name": "Volkswagen Golf",
        "type": VehicleType.CAR,
        "category": "Compact",
        "description": "Popular compact car with great handling and fuel economy.",
        "rate_per_day": Decimal("35.00"),
        "image_url": image("photo-1617624085810-3df2163d5384"),
        "features": ["Manual", "5 Seats", "AC", "Bluetooth"],
    },
]


class Command(BaseCommand):
    help = "Load the sample vehicle catalog into an empty database."

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Add the sample vehicles even if the catalog is not empty.",
        )

    def handle(self, *args, **options):
        if Vehicle.objects.exists() and not options["force"]:
            self.stdout.write("Catalog already has vehicles, nothing to do.")
            return
        with transaction.atomic():
            for fields in SAMPLE_VEHICLES:
                Vehicle.objects.create(**fields)
        self.stdout.write(
            self.style.SUCCESS(f"Seeded {len(SAMPLE_VEHICLES)} vehicles.")
        )
