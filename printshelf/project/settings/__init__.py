# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""
Django settings for Printshelf.

The settings in ``defaults`` are completed by a local ``selected`` module,
which usually imports one of ``development`` or ``test`` and is not tracked
in version control. Without it, development settings are used.
"""

from printshelf.project.settings.defaults import *  # noqa: F401, F403

try:
    from printshelf.project.settings.selected import *  # noqa: F401, F403
except ModuleNotFoundError:
    from printshelf.project.settings.development import *  # noqa: F401, F403
