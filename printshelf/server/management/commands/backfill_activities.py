# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""printshelf-admin command to announce the creation of existing models."""

import enum
import logging
from dataclasses import dataclass
from typing import Any, NoReturn

from django.core.management import CommandParser
from django.db import transaction

from printshelf.db.models import Model
from printshelf.django.management.printshelf_base_command import (
    PrintshelfBaseCommand,
)

log = logging.getLogger(__name__)

#: Number of models processed when no limit is given
DEFAULT_LIMIT = 20


class Outcome(enum.StrEnum):
    """What happened to a model during the backfill."""

    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class BackfillResult:
    """Result of backfilling one model."""

    model: Model
    outcome: Outcome
    error: Exception | None = None


class BackfillActivities:
    """
    Create the missing creation activity of recent models.

    Models created before activities were recorded have actors with no
    activity at all. For each of them, the creation activity is recorded now.
    """

    def __init__(self, limit: int = DEFAULT_LIMIT) -> None:
        """Set the number of most recent models to process."""
        self.limit = limit

    def candidates(self) -> list[Model]:
        """Return the most recently created models, newest first."""
        return list(
            Model.objects.select_related("actor")
            .order_by("-created_at", "-id")[: self.limit]
        )

    def backfill(self, model: Model) -> BackfillResult:
        """
        Record the creation activity of a model if its actor has none.

        Models of remote actors are skipped: their creation is announced by
        the instance they come from.
        """
        try:
            with transaction.atomic():
                if model.actor is None:
                    raise ValueError(f"Model {model.pk} has no actor")
                if not model.actor.local or model.actor.activities.exists():
                    return BackfillResult(model=model, outcome=Outcome.SKIPPED)
                model.post_creation_activity()
        except Exception as exc:
            log.warning(
                "Cannot backfill creation activity of model %s: %s",
                model.pk,
                exc,
            )
            return BackfillResult(
                model=model, outcome=Outcome.FAILED, error=exc
            )
        return BackfillResult(model=model, outcome=Outcome.CREATED)

    def run(self) -> list[BackfillResult]:
        """Process all candidate models, continuing past failures."""
        return [self.backfill(model) for model in self.candidates()]


class Command(PrintshelfBaseCommand):
    """Command to backfill creation activities."""

    help = (
        "Record the creation activity of recently created models whose actor"
        " has no activities"
    )

    def add_arguments(self, parser: CommandParser) -> None:
        """Add CLI arguments for the backfill_activities command."""
        parser.add_argument(
            "--limit",
            type=int,
            default=DEFAULT_LIMIT,
            help="Number of most recently created models to check"
            f" (default: {DEFAULT_LIMIT})",
        )

    def handle(self, *args: Any, **options: Any) -> NoReturn:
        """Run the backfill."""
        results = BackfillActivities(limit=options["limit"]).run()

        for result in results:
            match result.outcome:
                case Outcome.FAILED:
                    self.stderr.write(
                        f"Model {result.model.pk} ({result.model}):"
                        f" {result.error}"
                    )
                case _:
                    self.print_verbose(
                        f"Model {result.model.pk} ({result.model}):"
                        f" {result.outcome}"
                    )

        counts = {
            outcome: sum(1 for r in results if r.outcome == outcome)
            for outcome in Outcome
        }
        self.stdout.write(
            ", ".join(f"{counts[outcome]} {outcome}" for outcome in Outcome)
        )
        raise SystemExit(0)
