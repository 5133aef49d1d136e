# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Used by Django REST framework exception handling."""

import logging
import traceback
from collections.abc import Iterable
from typing import Any, TYPE_CHECKING

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler, set_rollback

if TYPE_CHECKING:
    from printshelf.server.views.rest import ProblemResponse

logger = logging.getLogger(__name__)


class PrintshelfAPIException(APIException):
    """APIException producing the JSON structure of the Printshelf API."""

    def __init__(
        self,
        title: str,
        detail: str | None = None,
        validation_errors: Iterable[Any] | None = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        rollback_transaction: bool = True,
    ) -> None:
        """Initialize with ProblemResponse's arguments."""
        super().__init__(code=str(status_code))
        self.printshelf_title = title
        self.printshelf_detail = detail
        self.printshelf_validation_errors = validation_errors
        self.printshelf_status_code = status_code
        self.rollback_transaction = rollback_transaction


def printshelf_exception_handler(
    exc: Exception, context: dict[str, Any]
) -> "ProblemResponse":
    """Return ProblemResponse based on exc, context."""
    from printshelf.server.views.rest import ProblemResponse

    match exc:
        case PrintshelfAPIException():
            if exc.rollback_transaction:
                set_rollback()
            return ProblemResponse(
                title=exc.printshelf_title,
                detail=exc.printshelf_detail,
                validation_errors=exc.printshelf_validation_errors,
                status_code=exc.printshelf_status_code,
            )
        case _:
            rest_response = exception_handler(exc, context)

            status_code = getattr(
                rest_response, "status_code", status.HTTP_400_BAD_REQUEST
            )
            detail = getattr(exc, "detail", None)

            formatted_traceback = traceback.format_exc().replace("\n", "\\n")

            logger.error(
                "Server exception. status_code: %s detail: %s traceback: %s",
                status_code,
                detail,
                formatted_traceback,
            )

            return ProblemResponse(
                title="Error",
                detail=None if detail is None else str(detail),
                status_code=status_code,
            )
