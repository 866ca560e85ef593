from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.carts.models import CartLine
from apps.catalog.container import build_catalog_service
from apps.hikes.models import HikePlan


class Command(BaseCommand):
    help = "Reset the gear catalog to the default products and optionally create an admin."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush",
            action="store_true",
            help="Also delete every cart line and hike plan",
        )
        parser.add_argument("--admin-username", help="Create or update this staff user")
        parser.add_argument("--admin-password", help="Password for --admin-username")

    def handle(self, *args, **options):
        username = options.get("admin_username")
        password = options.get("admin_password")
        if bool(username) != bool(password):
            raise CommandError("--admin-username and --admin-password go together")

        with transaction.atomic():
            if options["flush"]:
                self.stdout.write("Flushing carts and hike plans...")
                CartLine.objects.all().delete()
                HikePlan.objects.all().delete()

            if username:
                self.stdout.write(f"Ensuring admin user {username}...")
                User = get_user_model()
                user, _ = User.objects.get_or_create(username=username)
                user.is_staff = True
                user.is_superuser = True
                user.set_password(password)
                user.save()

        self.stdout.write("Resetting catalog...")
        # Seeding runs outside any request, so the admin check always passes
        products = build_catalog_service(disable_cache=False).reset_catalog(
            is_authorized=lambda: True
        )
        self.stdout.write(
            self.style.SUCCESS(f"Gear store seed completed ({len(products)} products).")
        )
