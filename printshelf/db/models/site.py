# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Site-wide settings."""

from typing import TYPE_CHECKING

from django.db import models

from printshelf.db.models.permissions import (
    Allow,
    PermissionUser,
    permission_check,
)

if TYPE_CHECKING:
    from django_stubs_ext.db.models import TypedModelMeta
else:
    TypedModelMeta = object


class SiteSettings(models.Model):
    """
    Settings that apply to the whole site.

    There is only one instance, with primary key 1, created on first access.
    It is also the resource for permission checks that are not about an
    existing object, like signing up.
    """

    SINGLETON_PK = 1

    approve_signups = models.BooleanField(
        default=False, help_text="Require approval for signups"
    )
    registration_open = models.BooleanField(
        default=True, help_text="Allow visitors to create new accounts"
    )

    class Meta(TypedModelMeta):
        verbose_name_plural = "site settings"

    def __str__(self) -> str:
        """Return a description of the resource for messages."""
        return "site settings"

    @classmethod
    def get_current(cls) -> "SiteSettings":
        """Return the site settings, creating them if missing."""
        settings, _ = cls.objects.get_or_create(pk=cls.SINGLETON_PK)
        return settings

    @permission_check("{user} cannot sign up", anonymous=Allow.PASS)
    def can_sign_up(self, user: PermissionUser) -> bool:
        """Check if the user can create a new account."""
        assert user is not None  # enforced by decorator
        return self.registration_open and not user.is_authenticated

    @permission_check(
        "{user} cannot cancel an external sign-on", anonymous=Allow.ALWAYS
    )
    def can_cancel_sign_on(self, user: PermissionUser) -> bool:  # noqa: U100
        """Check if the user can abandon an in-progress external sign-on."""
        return False
