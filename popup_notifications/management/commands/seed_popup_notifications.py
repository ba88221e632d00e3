from django.core.management.base import BaseCommand, CommandError

from popup_notifications.exceptions import PersistenceError
from popup_notifications.services import get_settings_service


class Command(BaseCommand):
    help = "Store the default popup notifications document if none is stored yet."

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Overwrite any stored document with the defaults.",
        )

    def handle(self, *args, **options):
        force = bool(options.get("force"))
        try:
            written = get_settings_service().seed(force=force)
        except PersistenceError as exc:
            raise CommandError(str(exc)) from exc

        if written:
            self.stdout.write(self.style.SUCCESS("Popup notifications seeded with defaults."))
        else:
            self.stdout.write("Popup notifications already configured; nothing changed.")
