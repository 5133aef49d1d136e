# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Operations on user accounts, independent of how they are requested."""

import logging
from collections.abc import Mapping
from typing import Any

from django.conf import settings
from django.db import transaction
from django.utils.translation import get_language_info

from printshelf.db.models import SiteSettings, User
from printshelf.web.settings_groups import normalize_settings_groups

log = logging.getLogger(__name__)

#: Label of the language entry that follows the browser preferences
AUTODETECT_LABEL = "Autodetect"


def requires_password_check(user: User, fields: Mapping[str, Any]) -> bool:
    """
    Check if an update needs the current password.

    This is the case when changing the email address or setting a new
    password.
    """
    email = fields.get("email")
    if email and email != user.email:
        return True
    return bool(fields.get("password"))


def update_account(
    user: User, fields: Mapping[str, Any], form_data: Mapping[str, str]
) -> bool:
    """
    Update an account from its settings form.

    :param fields: top-level account fields
    :param form_data: submitted form data holding the settings groups
    :returns: True if the password was changed
    :raises ValidationError: if the update is rejected. Nothing is saved in
      that case
    """
    data = {**fields, **normalize_settings_groups(form_data)}
    if requires_password_check(user, data):
        user.update_with_password(data)
        return bool(data.get("password"))
    user.update_without_password(data)
    return False


def complete_first_use(user: User, fields: Mapping[str, Any]) -> None:
    """
    Apply the initial setup of an account, and leave first-use mode.

    :raises ValidationError: if the update is rejected. Nothing is saved in
      that case, and the account stays in first-use mode
    """
    user.update_fields({**fields, "reset_password_token": None})
    log.info("User %s completed the account setup", user)


@transaction.atomic
def register(user: User) -> User:
    """
    Finish the creation of a new account.

    If the site requires approval of sign-ups, the account is marked as
    unapproved.
    """
    if SiteSettings.get_current().approve_signups:
        user.approved = False
        user.save(update_fields=["approved"])
        log.info("User %s signed up, pending approval", user)
    else:
        log.info("User %s signed up", user)
    return user


def delete_account(user: User) -> None:
    """Delete an account."""
    username = user.username
    user.delete()
    log.info("User %s deleted their account", username)


def languages() -> list[tuple[str, str | None]]:
    """
    List the interface languages that can be chosen.

    Each entry is a ``(display name, locale code)`` pair, with the name in
    the language itself. The first entry selects autodetection.
    """
    result: list[tuple[str, str | None]] = [(AUTODETECT_LABEL, None)]
    for code, name in settings.LANGUAGES:
        try:
            display = get_language_info(code)["name_local"]
        except KeyError:
            display = str(name)
        result.append((display.capitalize(), code))
    return result
