# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""URLs for the server application - API."""

from django.urls import path

from printshelf.server.views.model_files import ModelFilePermissionsView

app_name = 'server'


urlpatterns = [
    path(
        '1.0/file/<int:file_id>/permissions/',
        ModelFilePermissionsView.as_view(),
        name='model-file-permissions',
    ),
]
