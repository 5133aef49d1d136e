# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Authentication backends."""

import logging

from django.contrib.auth.backends import ModelBackend
from django.contrib.auth.base_user import AbstractBaseUser

log = logging.getLogger(__name__)


class ApprovalBackend(ModelBackend):
    """Model backend that rejects accounts still waiting for approval."""

    def user_can_authenticate(self, user: AbstractBaseUser | None) -> bool:
        """Reject inactive and unapproved users."""
        if not super().user_can_authenticate(user):
            return False
        if not getattr(user, "approved", True):
            log.info("Rejected login of unapproved user %s", user)
            return False
        return True
