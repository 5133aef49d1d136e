# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""PrintshelfBaseCommand extends BaseCommand with extra functionality."""

import signal
import types
from typing import Any, NoReturn

import yaml
from django.core.management import BaseCommand, CommandError
from django.db.utils import DatabaseError

from printshelf.db.context import context


class PrintshelfBaseCommand(BaseCommand):
    """Extend Django Base Command with functionality used by Printshelf."""

    @staticmethod
    def _exit_handler(signum: int, frame: types.FrameType | None) -> NoReturn:
        """
        Exit without printing Python's default stack trace.

        A user can Control+C and printshelf-admin does not print all the
        stack trace.
        """
        signum, frame  # fake usage for vulture
        raise SystemExit(3)

    def execute(self, *args: Any, **options: Any) -> None:
        """
        Printshelf BaseCommand common functionality.

        - Catch DatabaseError exceptions to print a helpful message
        - Set self.verbosity for --verbosity/-v option
        - Run with permission checks disabled, as the administrator

        Possible DatabaseErrors: database not reachable, invalid database
        credentials, etc.
        """
        try:
            signal.signal(signal.SIGINT, self._exit_handler)
            signal.signal(signal.SIGTERM, self._exit_handler)

            self.verbosity = options["verbosity"]

            with context.disable_permission_checks():
                super().execute(*args, **options)
        except DatabaseError as exc:
            raise CommandError(f"Database error: {exc}", returncode=3)

    def print_verbose(self, msg: str) -> None:
        r"""Write msg + "\n" to self.stdout if self.verbosity > 1."""
        if self.verbosity > 1:
            self.stdout.write(msg)

    def dump_yaml(self, data: Any) -> None:
        """Write data to self.stdout as YAML."""
        self.stdout.write(yaml.safe_dump(data, sort_keys=False), ending="")
