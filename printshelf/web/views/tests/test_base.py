# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Tests for the base views."""

from importlib.metadata import PackageNotFoundError
from unittest import mock

from django.core.exceptions import PermissionDenied
from django.urls import reverse

from printshelf.db.context import context
from printshelf.test.django import TestCase
from printshelf.web.views.base import BaseUIView


class BaseUIViewTests(TestCase):
    """Test BaseUIView."""

    def test_enforce(self) -> None:
        """Test the enforce method."""
        user = self.playground.get_default_user()
        other = self.playground.create_user("other")
        context.set_user(user)
        view = BaseUIView()

        view.enforce(user.can_manage)
        with self.assertRaisesRegex(
            PermissionDenied, r"playground cannot manage user other"
        ):
            view.enforce(other.can_manage)

    def test_base_context(self) -> None:
        """Pages get the base template and their title."""
        response = self.client.get(reverse("homepage:homepage"))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "web/homepage.html")
        self.assertTemplateUsed(response, "web/_base.html")
        self.assertEqual(response.context["base_template"], "web/_base.html")
        self.assertEqual(response.context["title"], "Printshelf")

    def test_version(self) -> None:
        with mock.patch(
            "printshelf.web.views.base.version", return_value="1.2.3"
        ):
            response = self.client.get(reverse("homepage:homepage"))

        self.assertEqual(response.context["printshelf_version"], "1.2.3")
        self.assertContains(response, "Printshelf 1.2.3")

    def test_version_not_installed(self) -> None:
        with mock.patch(
            "printshelf.web.views.base.version",
            side_effect=PackageNotFoundError("printshelf"),
        ):
            response = self.client.get(reverse("homepage:homepage"))

        self.assertNotIn("printshelf_version", response.context)
