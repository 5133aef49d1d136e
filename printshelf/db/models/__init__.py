# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Data models for the db application."""

from printshelf.db.models.auth import (
    FIRST_USE_TOKEN,
    SensitiveContentHandling,
    User,
)
from printshelf.db.models.federation import Activity, Actor
from printshelf.db.models.library import Link, Model, ModelFile
from printshelf.db.models.site import SiteSettings

__all__ = [
    "Activity",
    "Actor",
    "FIRST_USE_TOKEN",
    "Link",
    "Model",
    "ModelFile",
    "SensitiveContentHandling",
    "SiteSettings",
    "User",
]
