# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""URLs to sign up and manage one's own account."""

from django.urls import path

import printshelf.web.views.registration as views

app_name = "account"

urlpatterns = [
    path("sign-up/", views.SignupView.as_view(), name="signup"),
    path("edit/", views.AccountEditView.as_view(), name="edit"),
    path("delete/", views.AccountDeleteView.as_view(), name="delete"),
    path("cancel/", views.SignonCancelView.as_view(), name="cancel"),
]
