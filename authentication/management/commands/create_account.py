"""
Django management command to mirror a hosted-provider account locally.

Usage:
    python manage.py create_account --id <provider uuid> --email "user@example.com" --name "Full Name"
    python manage.py create_account --id <provider uuid> --email "admin@example.com" --user-type admin

Useful for seeding admins: the admin role cannot be self-assigned through the API.
"""

import uuid

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from authentication.models import CustomUser


class Command(BaseCommand):
    help = "Create (or update) the local row for a hosted-provider account"

    def add_arguments(self, parser):
        parser.add_argument("--id", type=str, required=True, help="User id issued by the auth provider (token sub)")
        parser.add_argument("--email", type=str, required=True, help="Email address of the account")
        parser.add_argument("--name", type=str, default="", help="Full name")
        parser.add_argument(
            "--user-type",
            type=str,
            default="buyer",
            choices=[choice[0] for choice in CustomUser.USER_TYPE_CHOICES],
            help="Account role (default: buyer)",
        )

    def handle(self, *args, **options):
        try:
            user_id = uuid.UUID(options["id"])
        except ValueError:
            raise CommandError(f"Invalid user id: {options['id']}")

        email = options["email"].strip().lower()
        user_type = options["user_type"]

        with transaction.atomic():
            user, created = CustomUser.objects.update_or_create(
                pk=user_id,
                defaults={
                    "email": email,
                    "username": email,
                    "full_name": options["name"],
                    "user_type": user_type,
                    "is_admin": user_type == "admin",
                    "is_staff": user_type == "admin",
                },
            )
            if created:
                user.set_unusable_password()
                user.save(update_fields=["password"])

        verb = "Created" if created else "Updated"
        self.stdout.write(self.style.SUCCESS(f"{verb} {user.email} ({user.user_type})"))
