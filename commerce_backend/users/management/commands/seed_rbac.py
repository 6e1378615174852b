# users/management/commands/seed_rbac.py

"""
PATH: users/management/commands/seed_rbac.py

RBAC bootstrap (idempotent).

- Ensures the "admin" role exists.
- Ensures (resource, action) permissions exist for every known resource.
- When AUTO_ADMIN_EMAIL + AUTO_ADMIN_PASSWORD are set, ensures an admin
  staff account with that email (password reset to the env value).
"""

from __future__ import annotations

import os

from django.core.management.base import BaseCommand
from django.db import transaction

from users.models import Role, User
from users.services.rbac_service import seed_defaults


class Command(BaseCommand):
    help = "Seed the admin role, default permissions and (optionally) an admin account."

    def handle(self, *args, **options):
        result = seed_defaults()
        self.stdout.write(
            self.style.SUCCESS(
                f"RBAC seeded: admin role id={result['admin_role_id']}, "
                f"{result['permissions_created']} permission(s) created"
            )
        )

        email = (os.environ.get("AUTO_ADMIN_EMAIL") or "").strip()
        password = (os.environ.get("AUTO_ADMIN_PASSWORD") or "").strip()

        if not email or not password:
            self.stdout.write(self.style.WARNING("AUTO_ADMIN_* env vars not set. Skipping admin account."))
            return

        with transaction.atomic():
            admin_role = Role.objects.get(pk=result["admin_role_id"])
            user = User.objects.filter(email__iexact=email).first()

            if user:
                user.role = admin_role
                user.is_active = True
                user.is_staff = True
                user.is_superuser = True
                user.deleted_at = None
                user.set_password(password)
                user.save()
                self.stdout.write(self.style.SUCCESS(f"Admin ensured: {email} (updated)"))
                return

            User.objects.create_superuser(email=email, password=password, role=admin_role)
            self.stdout.write(self.style.SUCCESS(f"Admin ensured: {email} (created)"))
