# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Views for the server application: model files."""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response

from printshelf.db.context import context
from printshelf.db.models import ModelFile
from printshelf.server.exceptions import PrintshelfAPIException
from printshelf.server.views.base import BaseAPIView


class ModelFilePermissionsView(BaseAPIView):
    """Report which operations the current user can perform on a file."""

    def get(self, request: Request, file_id: int) -> Response:  # noqa: U100
        """Return a map of operation names to booleans."""
        try:
            model_file = ModelFile.objects.select_related(
                "model", "model__owner"
            ).get(pk=file_id)
        except ModelFile.DoesNotExist:
            model_file = None

        # Files of models that cannot be displayed are reported as missing,
        # to avoid leaking their existence
        if model_file is None or not model_file.can_display(context.user):
            raise PrintshelfAPIException(
                title="Model file not found",
                detail=f"Model file {file_id} not found",
                status_code=status.HTTP_404_NOT_FOUND,
            )

        return Response(
            model_file.permissions_for(context.user),
            status=status.HTTP_200_OK,
        )
