# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""
Printshelf URL Configuration.

API calls use the ``/api/`` prefix. Account management lives under
``/accounts/``, and the home page is served from the root.
"""

from django.urls import URLPattern, URLResolver, include, path

from printshelf.web.views.auth import LoginView, LogoutView

urlpatterns: list[URLPattern | URLResolver] = [
    path("api/", include("printshelf.server.urls", namespace="api")),
    path(
        "accounts/",
        include("printshelf.web.urls.account", namespace="account"),
    ),
    path("login/", LoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("", include("printshelf.web.urls.homepage", namespace="homepage")),
]
