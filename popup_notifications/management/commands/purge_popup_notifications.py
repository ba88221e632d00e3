from django.core.management.base import BaseCommand, CommandError

from popup_notifications.exceptions import PersistenceError
from popup_notifications.services import get_settings_service


class Command(BaseCommand):
    help = "Delete the stored popup notifications document and its cached copy."

    def add_arguments(self, parser):
        parser.add_argument(
            "--noinput",
            "--no-input",
            action="store_false",
            dest="interactive",
            help="Do not prompt for confirmation.",
        )

    def handle(self, *args, **options):
        if options["interactive"]:
            answer = input("This removes all popup notification settings. Type 'yes' to continue: ")
            if answer.strip().lower() != "yes":
                self.stdout.write("Aborted.")
                return
        try:
            removed = get_settings_service().purge()
        except PersistenceError as exc:
            raise CommandError(str(exc)) from exc

        if removed:
            self.stdout.write(self.style.SUCCESS("Popup notifications settings removed."))
        else:
            self.stdout.write("No popup notifications settings were stored.")
