"""
Django management command for checking role-based authorization.

This command answers authorization questions against the permissions stored
in the database, in three operational modes:

1. **Check mode**: ``user_id action model_class`` prints whether the action is allowed.
2. **Listing mode**: ``--classes`` or ``--methods`` lists what a user may access.
3. **Interactive mode (default)**: reads ``user_id action model_class`` lines
   until ``quit``.

Example usage:
    python manage.py check_authorization 42 edit Beer
    python manage.py check_authorization --classes 42
    python manage.py check_authorization --methods 42 Beer
    python manage.py check_authorization

Example test input:
    >>> 42 delete Beer
    ✓ ALLOWED: 42 delete Beer
    >>> 42 delete Wine
    ✗ DENIED: 42 delete Wine
"""

import argparse

from django.core.management.base import BaseCommand, CommandError

from rbac_authz.engine.authorization import AuthorizationEngine
from rbac_authz.engine.exceptions import StoreError


def parse_user_id(value: str):
    """Convert a numeric user id given on the command line to an int."""
    return int(value) if value.isdigit() else value


class UserRef:
    """Minimal authenticated identity built from a user id given on the command line."""

    is_authenticated = True

    def __init__(self, user_id: str):
        self.id = parse_user_id(user_id)


class Command(BaseCommand):
    """
    Django management command for checking role-based authorization.

    Uses the process-wide AuthorizationEngine, so results match what the
    application itself would decide.
    """

    help = (
        "Check whether a user may invoke an action on a model class, or list the classes "
        "and methods a user is authorized for. Without arguments, starts an interactive mode. "
        "Format: user_id action model_class."
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add command-line arguments to the argument parser.

        Args:
            parser (argparse.ArgumentParser): The Django argument parser instance to configure.
        """
        parser.add_argument(
            "request",
            nargs="*",
            help="Authorization request as: user_id action model_class.",
        )
        parser.add_argument(
            "-c",
            "--classes",
            metavar="USER_ID",
            default=None,
            help="List the model classes the user holds any permission on.",
        )
        parser.add_argument(
            "-m",
            "--methods",
            nargs=2,
            metavar=("USER_ID", "MODEL_CLASS"),
            default=None,
            help="List the methods the user may invoke on the model class.",
        )

    def handle(self, *args, **options):
        """Execute the authorization command.

        Args:
            *args: Positional command arguments (unused).
            **options: Command options including ``request``, ``--classes`` and ``--methods``.

        Raises:
            CommandError: If the request is malformed or the permission store fails.
        """
        engine = AuthorizationEngine.get_engine()
        try:
            if options["classes"] is not None:
                self._list_classes(engine, options["classes"])
            elif options["methods"] is not None:
                self._list_methods(engine, *options["methods"])
            elif options["request"]:
                if len(options["request"]) != 3:
                    raise CommandError(f"Invalid format. Expected 3 parts, got {len(options['request'])}")
                self._check_request(engine, *options["request"])
            else:
                self._run_interactive_mode(engine)
        except StoreError as e:
            raise CommandError(f"Error querying permission store: {str(e)}") from e

    def _list_classes(self, engine: AuthorizationEngine, user_id: str) -> None:
        classes = sorted(engine.authorized_classes(user_id=parse_user_id(user_id)))
        self.stdout.write(f"✓ {len(classes)} authorized classes for user {user_id}")
        for model_class in classes:
            self.stdout.write(f"  - {model_class}")

    def _list_methods(self, engine: AuthorizationEngine, user_id: str, model_class: str) -> None:
        methods = engine.authorized_methods(user_id=parse_user_id(user_id), model_class=model_class)
        self.stdout.write(f"✓ {len(methods)} authorized methods for user {user_id} on {model_class}")
        for method in methods:
            self.stdout.write(f"  - {method}")

    def _check_request(self, engine: AuthorizationEngine, user_id: str, action: str, model_class: str) -> None:
        if engine.is_authorized(UserRef(user_id), action, model_class):
            self.stdout.write(self.style.SUCCESS(f"✓ ALLOWED: {user_id} {action} {model_class}"))
        else:
            self.stdout.write(self.style.ERROR(f"✗ DENIED: {user_id} {action} {model_class}"))

    def _run_interactive_mode(self, engine: AuthorizationEngine) -> None:
        """Start the interactive authorization shell.

        Note:
            Exit the interactive mode with Ctrl+C or Ctrl+D.
        """
        self.stdout.write(self.style.SUCCESS("Interactive Mode"))
        self.stdout.write("Enter 'quit', 'exit', or 'q' to exit the interactive mode.")
        self.stdout.write("")
        self.stdout.write("Format: user_id action model_class")
        self.stdout.write("Example: 42 edit Beer")
        self.stdout.write("")

        while True:
            try:
                user_input = input("Enter authorization request: ").strip()

                if not user_input:
                    continue

                if user_input.lower() in ["quit", "exit", "q"]:
                    break

                parts = user_input.split()
                if len(parts) != 3:
                    self.stdout.write(self.style.ERROR(f"✗ Invalid format. Expected 3 parts, got {len(parts)}"))
                    self.stdout.write("Format: user_id action model_class")
                    continue

                self._check_request(engine, *parts)
            except (KeyboardInterrupt, EOFError):
                self.stdout.write(self.style.ERROR("Exiting interactive mode..."))
                break
