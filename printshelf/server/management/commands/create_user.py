# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""printshelf-admin command to create users."""

import secrets
import string
from typing import Any, NoReturn

from django.core.exceptions import ValidationError
from django.core.management import CommandError, CommandParser
from django.db import IntegrityError, transaction

from printshelf.db.models import FIRST_USE_TOKEN, User
from printshelf.django.management.printshelf_base_command import (
    PrintshelfBaseCommand,
)


class Command(PrintshelfBaseCommand):
    """Command to create a user."""

    help = "Create a new user. Output generated password on the stdout"

    def add_arguments(self, parser: CommandParser) -> None:
        """Add CLI arguments for the create_user command."""
        parser.add_argument("username", help="Username")
        parser.add_argument("email", help="Email for the user")
        parser.add_argument(
            "--first-use",
            action="store_true",
            help="Require the user to choose their credentials on first login",
        )
        parser.add_argument(
            "--staff", action="store_true", help="Create a staff user"
        )

    @staticmethod
    def _generate_password() -> str:
        characters = string.ascii_letters + string.digits + string.punctuation
        length = 16
        return "".join(secrets.choice(characters) for i in range(length))

    def handle(self, *args: Any, **options: Any) -> NoReturn:
        """Create the user."""
        password = self._generate_password()
        with transaction.atomic():
            try:
                user = User.objects.create_user(
                    username=options["username"],
                    email=options["email"],
                    password=password,
                    is_staff=options["staff"],
                    reset_password_token=(
                        FIRST_USE_TOKEN if options["first_use"] else None
                    ),
                )
                user.full_clean()
            except ValidationError as exc:
                raise CommandError(
                    "Error creating user: " + "\n".join(exc.messages),
                    returncode=3,
                )
            except IntegrityError:
                raise CommandError(
                    "A user with this username already exists",
                    returncode=3,
                )

        self.stdout.write(password)
        raise SystemExit(0)
