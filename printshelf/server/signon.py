# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Session state of sign-on through external authentication providers."""

import logging

from django.contrib.sessions.backends.base import SessionBase

log = logging.getLogger("printshelf.server.signon")

#: Session key prefixes used while an external sign-on is in progress
SIGNON_SESSION_PREFIXES = ("signon_state_", "signon_pending_")


def state_session_key(provider: str) -> str:
    """Return the session key of the authorization state for a provider."""
    return f"signon_state_{provider}"


def pending_session_key(provider: str) -> str:
    """Return the session key of the identity waiting for an account."""
    return f"signon_pending_{provider}"


def expire_pending_signon(session: SessionBase) -> list[str]:
    """
    Drop all data of in-progress external sign-ons from the session.

    :returns: the session keys that were removed
    """
    expired = [
        key
        for key in list(session.keys())
        if key.startswith(SIGNON_SESSION_PREFIXES)
    ]
    for key in expired:
        del session[key]
    if expired:
        log.info("Expired pending sign-on data: %s", ", ".join(expired))
    return expired
