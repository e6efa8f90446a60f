# backend/hn_core/iam/management/commands/ensure_roles.py

from django.core.management.base import BaseCommand

from hn_core.access.bootstrap import ROLE_SOURCE_DATABASE, reload_role_registry
from hn_core.iam.selectors import load_role_table
from hn_core.iam.services.role_catalog import RoleCatalogService


class Command(BaseCommand):
    help = "Ensure the permission catalog and default roles exist (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--list",
            action="store_true",
            help="Print each stored role with its level and permission count.",
        )
        parser.add_argument(
            "--reload",
            action="store_true",
            help="Swap this process's role registry to the stored rows.",
        )

    def handle(self, *args, **options):
        result = RoleCatalogService.ensure_defaults()

        self.stdout.write(
            self.style.SUCCESS(
                "Roles ensured. "
                f"Permissions created: {result.permissions_created}, "
                f"roles created: {result.roles_created}, "
                f"roles updated: {result.roles_updated}"
            )
        )

        if options["list"]:
            table = load_role_table()
            for role in table.roles():
                state = "" if role.is_active else " (inactive)"
                self.stdout.write(f"{role.slug:<22} level={role.level:<4} permissions={len(role.permissions)}{state}")

        if options["reload"]:
            table = reload_role_registry(ROLE_SOURCE_DATABASE)
            self.stdout.write(f"Role registry reloaded: version={table.version}")
