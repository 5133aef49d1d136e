# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Default settings shared by all Printshelf deployments."""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

#: Directory with the local state of development installations
DATA_DIR = Path(
    os.environ.get("PRINTSHELF_DATA_DIR", BASE_DIR.parent / "data")
)

#: File holding the secret key in production, to be read in selected.py with
#: read_secret_key. Development and test settings use a fixed key instead
PRINTSHELF_SECRET_KEY_FILE = os.environ.get(
    "PRINTSHELF_SECRET_KEY_FILE", "/etc/printshelf/secret_key"
)

DEBUG = False

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "[::1]"]

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "printshelf.db",
    "printshelf.server",
    "printshelf.web",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "printshelf.server.middlewares.context.ContextMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "printshelf.server.middlewares.context.UserContextMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "printshelf.server.middlewares.first_use.FirstUseMiddleware",
]

ROOT_URLCONF = "printshelf.project.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "printshelf.project.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": DATA_DIR / "printshelf.sqlite3",
        "ATOMIC_REQUESTS": True,
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

AUTH_USER_MODEL = "db.User"

AUTHENTICATION_BACKENDS = ["printshelf.server.auth.ApprovalBackend"]

AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation."
        "UserAttributeSimilarityValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation."
        "MinimumLengthValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation."
        "CommonPasswordValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation."
        "NumericPasswordValidator",
    },
]

LOGIN_URL = "login"
LOGIN_REDIRECT_URL = "homepage:homepage"
LOGOUT_REDIRECT_URL = "homepage:homepage"

LANGUAGE_CODE = "en-us"

#: Languages that users can choose for the interface
LANGUAGES = [
    ("cs", "Czech"),
    ("de", "German"),
    ("en", "English"),
    ("es", "Spanish"),
    ("fr", "French"),
    ("nl", "Dutch"),
    ("pl", "Polish"),
]

TIME_ZONE = "UTC"

USE_I18N = True

USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = DATA_DIR / "static"

REST_FRAMEWORK = {
    "EXCEPTION_HANDLER": (
        "printshelf.server.exceptions.printshelf_exception_handler"
    ),
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": "django.contrib.auth.models.AnonymousUser",
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "printshelf": {
            "handlers": ["console"],
            "level": os.environ.get("PRINTSHELF_LOG_LEVEL", "INFO"),
        },
    },
}

#: Range in seconds of the random delay applied to sign up and sign-on
#: cancellation requests
PRINTSHELF_RANDOM_DELAY = (0.1, 0.5)
