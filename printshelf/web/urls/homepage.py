# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""URLs for the home page."""

from django.urls import path

from printshelf.web.views.homepage import HomepageView

app_name = "homepage"

urlpatterns = [
    path("", HomepageView.as_view(), name="homepage"),
]
