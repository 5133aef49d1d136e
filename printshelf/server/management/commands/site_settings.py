# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""printshelf-admin command to show and change site settings."""

import argparse
from typing import Any, NoReturn

from django.core.management import CommandParser

from printshelf.db.models import SiteSettings
from printshelf.django.management.printshelf_base_command import (
    PrintshelfBaseCommand,
)

#: Settings that can be changed from the command line
SETTINGS = {
    "approve_signups": "Require approval of new accounts",
    "registration_open": "Allow visitors to create new accounts",
}


class Command(PrintshelfBaseCommand):
    """Command to show and change site settings."""

    help = (
        "Show the site settings as YAML, after applying any changes given"
        " as options"
    )

    def add_arguments(self, parser: CommandParser) -> None:
        """Add CLI arguments for the site_settings command."""
        for name, help_text in SETTINGS.items():
            parser.add_argument(
                "--" + name.replace("_", "-"),
                action=argparse.BooleanOptionalAction,
                default=None,
                help=help_text,
            )

    def handle(self, *args: Any, **options: Any) -> NoReturn:
        """Apply changes and show the settings."""
        site = SiteSettings.get_current()

        changed = [name for name in SETTINGS if options[name] is not None]
        for name in changed:
            setattr(site, name, options[name])
        if changed:
            site.save(update_fields=changed)
            self.print_verbose("Updated: " + ", ".join(changed))

        self.dump_yaml({name: getattr(site, name) for name in SETTINGS})
        raise SystemExit(0)
