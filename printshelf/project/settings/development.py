# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""
Appropriate settings to run during development.

When running in development mode, selected.py should point to this file.
"""

from printshelf.project.settings import defaults

__all__ = [
    'ALLOWED_HOSTS',
    'DATABASES',
    'DEBUG',
    'EMAIL_BACKEND',
    'INSTALLED_APPS',
    'MIDDLEWARE',
    'PRINTSHELF_RANDOM_DELAY',
    'SECRET_KEY',
]

DEBUG = True

# Not suitable for production: deployments set SECRET_KEY in selected.py
SECRET_KEY = "printshelf-development-secret-key-not-for-production"

ALLOWED_HOSTS = ["*"]

EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": defaults.BASE_DIR.parent / "printshelf.sqlite3",
        "ATOMIC_REQUESTS": True,
    }
}

INSTALLED_APPS = defaults.INSTALLED_APPS.copy()

MIDDLEWARE = defaults.MIDDLEWARE.copy()

# Keep development snappy
PRINTSHELF_RANDOM_DELAY = (0.0, 0.1)
