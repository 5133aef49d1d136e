# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

from django.db import migrations
from django.db.backends.base.schema import BaseDatabaseSchemaEditor
from django.db.migrations.state import StateApps

SITE_SETTINGS_PK = 1


def create_site_settings(
    apps: StateApps, schema_editor: BaseDatabaseSchemaEditor
) -> None:
    SiteSettings = apps.get_model("db", "SiteSettings")
    SiteSettings.objects.get_or_create(pk=SITE_SETTINGS_PK)


def delete_site_settings(
    apps: StateApps, schema_editor: BaseDatabaseSchemaEditor
) -> None:
    SiteSettings = apps.get_model("db", "SiteSettings")
    SiteSettings.objects.filter(pk=SITE_SETTINGS_PK).delete()


class Migration(migrations.Migration):

    dependencies = [("db", "0001_initial")]

    operations = [
        migrations.RunPython(create_site_settings, delete_site_settings),
    ]
