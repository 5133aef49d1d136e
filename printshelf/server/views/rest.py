# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Error responses of the printshelf API."""

from collections.abc import Iterable
from typing import Any

from django.http import JsonResponse
from rest_framework import status

PROBLEM_CONTENT_TYPE = "application/problem+json"


class ProblemResponse(JsonResponse):
    """
    Report to an API client why its request about models or files failed.

    The body is an RFC 7807 problem document: ``title`` is always present,
    while ``detail`` and ``validation_errors`` are only sent when given.
    """

    def __init__(
        self,
        title: str,
        detail: str | None = None,
        validation_errors: Iterable[Any] | None = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
    ) -> None:
        """Build the problem document and respond with ``status_code``."""
        optional = {"detail": detail, "validation_errors": validation_errors}
        data: dict[str, Any] = {"title": title}
        for key, value in optional.items():
            if value is not None:
                data[key] = value

        super().__init__(
            data, status=status_code, content_type=PROBLEM_CONTENT_TYPE
        )
