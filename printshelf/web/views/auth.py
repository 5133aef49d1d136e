# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Printshelf auth views."""

from typing import Any

from django.contrib.auth import views as auth_views

from printshelf.web.views.base import BaseUIView


class LoginView(BaseUIView, auth_views.LoginView):
    """Class for the login view."""

    template_name = "web/account/login.html"
    title = "Log in"

    def get_context_data(self, *args: Any, **kwargs: Any) -> dict[str, Any]:
        """Tell the base template we are a login view."""
        ctx = super().get_context_data(**kwargs)
        ctx["is_login_view"] = True
        return ctx


class LogoutView(auth_views.LogoutView, BaseUIView):
    """Class for the logout view."""

    template_name = "web/account/logged_out.html"
    title = "Logged out"
