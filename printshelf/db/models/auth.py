# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Data models for db users and authentication."""

from collections.abc import Collection, Mapping
from typing import Any, Generic, TypeVar

from django.contrib.auth.models import AbstractUser
from django.contrib.auth.models import UserManager as DjangoUserManager
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import QuerySet

from printshelf.db.models.permissions import (
    PermissionUser,
    permission_check,
    permission_filter,
)
from printshelf.db.user_settings import (
    FileListSettings,
    PaginationSettings,
    ProblemSettings,
    RendererSettings,
    TagCloudSettings,
)

A = TypeVar("A")

#: Value of reset_password_token marking an account that has not been set up
#: yet by its owner
FIRST_USE_TOKEN = "first_use"

#: Fields that can only be changed after confirming the current password
CREDENTIAL_FIELDS = frozenset(
    ("email", "password", "password_confirmation", "current_password")
)

#: Model fields that account updates are allowed to change
UPDATABLE_FIELDS = (
    "username",
    "email",
    "interface_language",
    "sensitive_content_handling",
    "pagination_settings",
    "tag_cloud_settings",
    "file_list_settings",
    "renderer_settings",
    "problem_settings",
    "reset_password_token",
)


class SensitiveContentHandling(models.TextChoices):
    """How to present content flagged as sensitive."""

    HIDE = "hide", "Hide"
    BLUR = "blur", "Blur"
    SHOW = "show", "Show"


class UserQuerySet(QuerySet["User", A], Generic[A]):
    """Custom QuerySet for User."""

    @permission_filter()
    def can_manage(self, user: PermissionUser) -> "UserQuerySet[A]":
        """Keep only Users that the given user can manage."""
        assert user is not None  # Enforced by decorator
        if user.is_staff:
            return self
        return self.filter(pk=user.pk)


class UserManager(DjangoUserManager["User"]):
    """Manager for User model."""

    # We cannot use from_queryset or we hit this problem:
    # https://stackoverflow.com/questions/68367703/adding-custom-queryset-to-usermodel-causes-makemigrations-exception  # noqa: E501
    # Therefore we need to proxy all permission filters here

    def can_manage(self, user: PermissionUser) -> "UserQuerySet[A]":
        """Keep only Users that the given user can manage."""
        return self.get_queryset().can_manage(user)

    def get_queryset(self) -> UserQuerySet[Any]:
        """Use the custom QuerySet."""
        return UserQuerySet(self.model, using=self._db)


class User(AbstractUser):
    """Printshelf user."""

    reset_password_token = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text=(
            "One-time password reset token. The value 'first_use' marks an"
            " account whose owner still needs to complete the initial setup"
        ),
    )
    approved = models.BooleanField(
        default=True, help_text="Unapproved users cannot log in"
    )
    interface_language = models.CharField(
        max_length=16,
        null=True,
        blank=True,
        help_text="Locale code for the interface, or unset to autodetect",
    )
    sensitive_content_handling = models.CharField(
        max_length=8,
        choices=SensitiveContentHandling.choices,
        null=True,
        blank=True,
    )
    pagination_settings = models.JSONField(null=True, blank=True)
    tag_cloud_settings = models.JSONField(null=True, blank=True)
    file_list_settings = models.JSONField(null=True, blank=True)
    renderer_settings = models.JSONField(null=True, blank=True)
    problem_settings = models.JSONField(null=True, blank=True)

    # mypy seems to struggle changing the manager in a subclass
    objects = UserManager()  # type: ignore[misc]

    @property
    def is_first_use(self) -> bool:
        """Check if the owner of the account still needs to set it up."""
        return self.reset_password_token == FIRST_USE_TOKEN

    @permission_check("{user} cannot manage user {resource}")
    def can_manage(self, user: PermissionUser) -> bool:
        """Check if the user can manage this user."""
        assert user is not None  # enforced by decorator
        return self.pk == user.pk or user.is_staff

    def get_pagination_settings(self) -> PaginationSettings:
        """Return the pagination settings, with defaults if unset."""
        return PaginationSettings.model_validate(
            self.pagination_settings or {}
        )

    def get_tag_cloud_settings(self) -> TagCloudSettings:
        """Return the tag cloud settings, with defaults if unset."""
        return TagCloudSettings.model_validate(self.tag_cloud_settings or {})

    def get_file_list_settings(self) -> FileListSettings:
        """Return the file list settings, with defaults if unset."""
        return FileListSettings.model_validate(self.file_list_settings or {})

    def get_renderer_settings(self) -> RendererSettings:
        """Return the renderer settings, with defaults if unset."""
        return RendererSettings.model_validate(self.renderer_settings or {})

    def get_problem_settings(self) -> ProblemSettings:
        """Return the problem settings, with defaults if unset."""
        return ProblemSettings.model_validate(self.problem_settings or {})

    def update_with_password(self, data: Mapping[str, Any]) -> None:
        """
        Update the account after checking ``current_password``.

        A blank ``password`` leaves the password unchanged.

        :raises ValidationError: if the current password does not match, or
          if the updated account does not validate. Nothing is saved in that
          case, and the instance is reloaded from the database
        """
        errors: dict[str, list[str]] = {}
        if not self.check_password(data.get("current_password") or ""):
            errors["current_password"] = [
                "The current password is not valid."
                if data.get("current_password")
                else "The current password is required."
            ]

        if not data.get("password"):
            data = {
                k: v
                for k, v in data.items()
                if k not in ("password", "password_confirmation")
            }
        self._assign(data, errors)
        self._validate_and_save(errors)

    def update_without_password(self, data: Mapping[str, Any]) -> None:
        """
        Update the account without touching email or password.

        Credential fields are dropped from ``data`` even if present.

        :raises ValidationError: if the updated account does not validate.
          Nothing is saved in that case, and the instance is reloaded from
          the database
        """
        errors: dict[str, list[str]] = {}
        self._assign(
            {k: v for k, v in data.items() if k not in CREDENTIAL_FIELDS},
            errors,
        )
        self._validate_and_save(errors)

    def update_fields(self, data: Mapping[str, Any]) -> None:
        """
        Update the account with all the given fields.

        This is used when the owner has already proved control of the account
        by other means, like during the initial setup.
        """
        errors: dict[str, list[str]] = {}
        self._assign(data, errors)
        self._validate_and_save(errors)

    def _assign(
        self, data: Mapping[str, Any], errors: dict[str, list[str]]
    ) -> None:
        """Set attributes from data, collecting password errors."""
        for name in UPDATABLE_FIELDS:
            if name in data:
                setattr(self, name, data[name])

        if password := data.get("password"):
            confirmation = data.get("password_confirmation")
            if confirmation is not None and confirmation != password:
                errors.setdefault("password_confirmation", []).append(
                    "The password confirmation does not match."
                )
            try:
                validate_password(password, self)
            except ValidationError as exc:
                errors.setdefault("password", []).extend(exc.messages)
            self.set_password(password)

    def _validate_and_save(self, errors: dict[str, list[str]]) -> None:
        """Validate the instance and save it, or roll back and raise."""
        try:
            self.full_clean(exclude=self._unvalidated_fields())
        except ValidationError as exc:
            for field, messages in exc.message_dict.items():
                errors.setdefault(field, []).extend(messages)

        if errors:
            self.refresh_from_db()
            raise ValidationError(errors)

        self.save()

    @staticmethod
    def _unvalidated_fields() -> Collection[str]:
        """Fields whose contents are not validated by full_clean."""
        return ("password", "last_login", "date_joined")
