# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Data models for federated actors and their activities."""

from typing import TYPE_CHECKING

from django.db import models

if TYPE_CHECKING:
    from django_stubs_ext.db.models import TypedModelMeta
else:
    TypedModelMeta = object


class Actor(models.Model):
    """
    Actor in the federated network.

    Local actors represent objects of this site; remote actors are received
    from other servers and can be turned into local objects.
    """

    name = models.CharField(max_length=255, blank=True)
    username = models.CharField(max_length=255)
    local = models.BooleanField(default=True)
    federated_url = models.URLField(max_length=2048, blank=True)
    #: Extra attributes of the actor representation, such as ``summary``,
    #: ``content`` and the ``attachment`` list
    extensions = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta(TypedModelMeta):
        ordering = ["id"]

    def __str__(self) -> str:
        """Return the username and where the actor lives."""
        where = "local" if self.local else "remote"
        return f"{self.username} ({where})"


class Activity(models.Model):
    """Activity published by an actor."""

    class Action(models.TextChoices):
        CREATE = "Create", "Create"
        UPDATE = "Update", "Update"

    actor = models.ForeignKey(
        Actor, on_delete=models.CASCADE, related_name="activities"
    )
    action = models.CharField(max_length=16, choices=Action.choices)
    model = models.ForeignKey(
        "db.Model",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="activities",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta(TypedModelMeta):
        verbose_name_plural = "activities"
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        """Return the action and who performed it."""
        return f"{self.action} by {self.actor}"

