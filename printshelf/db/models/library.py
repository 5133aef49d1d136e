# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Data models for the library of 3D print models and their files."""

import logging
from pathlib import PurePath
from typing import Any, Generic, TYPE_CHECKING, TypeVar

from django.conf import settings
from django.db import models, transaction
from django.db.models import Q, QuerySet

from printshelf.db.models.federation import Activity, Actor
from printshelf.db.models.permissions import (
    Allow,
    PermissionUser,
    permission_check,
    permission_filter,
)

if TYPE_CHECKING:
    from django_stubs_ext.db.models import TypedModelMeta
else:
    TypedModelMeta = object

log = logging.getLogger(__name__)

A = TypeVar("A")

#: File extensions that can be converted to other formats
CONVERTIBLE_EXTENSIONS = frozenset(("stl", "obj"))


class ModelQuerySet(QuerySet["Model", A], Generic[A]):
    """Custom QuerySet for Model."""

    @permission_filter(anonymous=Allow.PASS)
    def can_display(self, user: PermissionUser) -> "ModelQuerySet[A]":
        """Keep only Models that the given user can display."""
        assert user is not None  # Enforced by decorator
        if not user.is_authenticated:
            return self.filter(public=True)
        if user.is_staff:
            return self
        return self.filter(Q(public=True) | Q(owner=user))

    @permission_filter()
    def can_edit(self, user: PermissionUser) -> "ModelQuerySet[A]":
        """Keep only Models that the given user can edit."""
        assert user is not None  # Enforced by decorator
        if user.is_staff:
            return self
        return self.filter(owner=user)


class ModelManager(models.Manager["Model"]):
    """Manager for the Model model."""

    def get_queryset(self) -> ModelQuerySet[Any]:
        """Use the custom QuerySet."""
        return ModelQuerySet(self.model, using=self._db)


class Model(models.Model):
    """A 3D print model in the library."""

    objects = ModelManager.from_queryset(ModelQuerySet)()

    name = models.CharField(max_length=255)
    slug = models.CharField(max_length=255)
    caption = models.TextField(blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="library_models",
    )
    public = models.BooleanField(default=False)
    actor = models.ForeignKey(
        Actor,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="models",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta(TypedModelMeta):
        ordering = ["name"]

    def __str__(self) -> str:
        """Return the model name."""
        return self.name

    def save(self, *args: Any, **kwargs: Any) -> None:
        """
        Save the model.

        A new model without an actor gets a local actor, and announces its
        own creation.
        """
        adding = self._state.adding
        with transaction.atomic():
            if adding and self.actor is None:
                self.actor = Actor.objects.create(
                    name=self.name, username=self.slug, local=True
                )
            super().save(*args, **kwargs)
            if adding and self.actor.local:
                self.post_creation_activity()

    def post_creation_activity(self) -> Activity:
        """
        Record the activity announcing the creation of this model.

        :raises ValueError: if the model has no actor
        """
        if self.actor is None:
            raise ValueError(f"Model {self.pk} has no actor")
        activity = Activity.objects.create(
            actor=self.actor, action=Activity.Action.CREATE, model=self
        )
        log.debug("Recorded creation activity for model %s", self.pk)
        return activity

    @permission_check(
        "{user} cannot display model {resource}", anonymous=Allow.PASS
    )
    def can_display(self, user: PermissionUser) -> bool:
        """Check if the user can see this model."""
        assert user is not None  # enforced by decorator
        if self.public:
            return True
        if not user.is_authenticated:
            return False
        return user.is_staff or self.owner_id == user.pk

    @permission_check("{user} cannot edit model {resource}")
    def can_edit(self, user: PermissionUser) -> bool:
        """Check if the user can change this model and its contents."""
        assert user is not None  # enforced by decorator
        return user.is_staff or self.owner_id == user.pk


class Link(models.Model):
    """External link attached to a model."""

    model = models.ForeignKey(
        Model, on_delete=models.CASCADE, related_name="links"
    )
    url = models.URLField(max_length=2048)

    class Meta(TypedModelMeta):
        ordering = ["id"]

    def __str__(self) -> str:
        """Return the link target."""
        return self.url


class ModelFile(models.Model):
    """
    File belonging to a model.

    Permissions on files are derived from those on their model: anyone who
    can see the model can see its files, and anyone who can edit the model
    can change them.
    """

    #: Permission predicate for each operation on a file
    predicates = {
        "show": "can_display",
        "create": "can_create",
        "update": "can_update",
        "delete": "can_delete",
        "convert": "can_convert",
        "bulk_update": "can_bulk_update",
        "bulk_edit": "can_bulk_edit",
    }

    model = models.ForeignKey(
        Model, on_delete=models.CASCADE, related_name="model_files"
    )
    filename = models.CharField(max_length=1024)

    class Meta(TypedModelMeta):
        ordering = ["filename"]

    def __str__(self) -> str:
        """Return the file name."""
        return self.filename

    @property
    def extension(self) -> str:
        """Return the lowercase file extension, without the dot."""
        return PurePath(self.filename).suffix.removeprefix(".").lower()

    @permission_check(
        "{user} cannot display file {resource}", anonymous=Allow.PASS
    )
    def can_display(self, user: PermissionUser) -> bool:
        """Check if the user can see this file."""
        return self.model.can_display(user)

    @permission_check("{user} cannot create file {resource}")
    def can_create(self, user: PermissionUser) -> bool:
        """Check if the user can add files like this one to its model."""
        return self.model.can_edit(user)

    @permission_check("{user} cannot update file {resource}")
    def can_update(self, user: PermissionUser) -> bool:
        """Check if the user can update this file."""
        return self.can_create(user)

    @permission_check("{user} cannot delete file {resource}")
    def can_delete(self, user: PermissionUser) -> bool:
        """Check if the user can delete this file."""
        return self.can_create(user)

    @permission_check("{user} cannot convert file {resource}")
    def can_convert(self, user: PermissionUser) -> bool:
        """Check if the user can convert this file to another format."""
        return (
            self.can_create(user) and self.extension in CONVERTIBLE_EXTENSIONS
        )

    @permission_check("{user} cannot bulk update file {resource}")
    def can_bulk_update(self, user: PermissionUser) -> bool:
        """Check if the user can include this file in a bulk update."""
        return self.can_create(user)

    @permission_check("{user} cannot bulk edit file {resource}")
    def can_bulk_edit(self, user: PermissionUser) -> bool:
        """Check if the user can include this file in a bulk edit."""
        return self.can_bulk_update(user)

    def permissions_for(self, user: PermissionUser) -> dict[str, bool]:
        """Evaluate the predicate of each operation for the given user."""
        return {
            operation: getattr(self, predicate)(user)
            for operation, predicate in self.predicates.items()
        }
