# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Middleware sending accounts in first-use mode to their setup page."""

from collections.abc import Callable

import django.http
from django.conf import settings
from django.shortcuts import redirect
from django.urls import reverse


class FirstUseMiddleware:
    """
    Redirect users who still need to set up their account.

    Accounts created by an administrator start in first-use mode, and their
    owner needs to choose credentials before using the site.
    """

    #: URL names that remain reachable in first-use mode
    allowed_url_names = ("account:edit", "logout")

    def __init__(
        self,
        get_response: Callable[
            [django.http.HttpRequest], django.http.HttpResponse
        ],
    ) -> None:
        """Middleware API entry point."""
        self.get_response = get_response

    def is_allowed(self, request: django.http.HttpRequest) -> bool:
        """Check if the request can go through in first-use mode."""
        if settings.STATIC_URL and request.path.startswith(
            settings.STATIC_URL
        ):
            return True
        return request.path in (
            reverse(name) for name in self.allowed_url_names
        )

    def __call__(
        self, request: django.http.HttpRequest
    ) -> django.http.HttpResponse:
        """Middleware entry point."""
        user = request.user
        if (
            user.is_authenticated
            and getattr(user, "is_first_use", False)
            and not self.is_allowed(request)
        ):
            return redirect("account:edit")
        return self.get_response(request)
