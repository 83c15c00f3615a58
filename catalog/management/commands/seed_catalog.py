"""Seed the default jewelry categories and, optionally, demo products.

Re-running is idempotent; existing rows are reused by slug.
"""

from decimal import Decimal

from catalog.models import Category, Product
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils.text import slugify

DEFAULT_CATEGORIES = [
    ("Rings", "Engagement rings, bands and statement pieces"),
    ("Necklaces", "Pendants, chains and chokers"),
    ("Earrings", "Studs, hoops and drops"),
    ("Bracelets", "Bangles, cuffs and tennis bracelets"),
    ("Watches", "Luxury timepieces"),
]

DEMO_PRODUCTS = [
    {
        "name": "Solitaire Diamond Ring",
        "category": "rings",
        "sku": "RNG-SOL-001",
        "price": Decimal("2499.00"),
        "stock_quantity": 10,
        "is_featured": True,
        "tags": ["diamond", "engagement"],
        "specifications": {"metal": "18k white gold", "carat": "1.0"},
    },
    {
        "name": "Pearl Strand Necklace",
        "category": "necklaces",
        "sku": "NCK-PRL-001",
        "price": Decimal("899.00"),
        "stock_quantity": 15,
        "tags": ["pearl"],
        "specifications": {"length": "18 in"},
    },
    {
        "name": "Gold Hoop Earrings",
        "category": "earrings",
        "sku": "EAR-HOP-001",
        "price": Decimal("349.00"),
        "stock_quantity": 25,
        "is_new_arrival": True,
        "tags": ["gold"],
        "specifications": {"metal": "14k yellow gold"},
    },
]


class Command(BaseCommand):
    help = "Seed default catalog categories (and demo products with --demo)"

    def add_arguments(self, parser):
        parser.add_argument("--demo", action="store_true", help="Also create a few demo products")

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding catalog data...")

        categories = {}
        for order, (name, desc) in enumerate(DEFAULT_CATEGORIES):
            slug = slugify(name)
            cat, _ = Category.objects.get_or_create(
                slug=slug, defaults={"name": name, "description": desc, "is_active": True, "sort_order": order}
            )
            categories[slug] = cat

        created = 0
        if options["demo"]:
            for data in DEMO_PRODUCTS:
                data = dict(data)
                data["category"] = categories[data["category"]]
                _, was_created = Product.objects.get_or_create(slug=slugify(data["name"]), defaults=data)
                created += int(was_created)

        self.stdout.write(
            self.style.SUCCESS(f"Catalog seeded: {len(categories)} categories, {created} new products.")
        )
