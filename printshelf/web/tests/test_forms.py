# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Tests for the forms."""

from typing import ClassVar

from django import forms
from django.utils.datastructures import MultiValueDict

from printshelf.test.django import TestCase
from printshelf.web.forms import (
    AccountForm,
    BootstrapMixin,
    FirstUseForm,
    SignupForm,
)


class BootstrapMixinForm(BootstrapMixin, forms.Form):
    """Class to test BootstrapMixin."""

    existing_class = "class1"
    char_field = forms.CharField(required=False)
    char_field_required = forms.CharField(required=True)
    char_field_extra_class = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={"class": existing_class}),
    )
    choice_field = forms.ChoiceField(choices=[("1", "One"), ("2", "Two")])
    boolean_field = forms.BooleanField(required=False)


class BootstrapMixinTests(TestCase):
    """Tests for BootstrapMixin."""

    form: ClassVar[BootstrapMixinForm]

    @classmethod
    def setUpTestData(cls) -> None:
        """Set up common data for tests."""
        super().setUpTestData()
        cls.form = BootstrapMixinForm()

    def widget_class(self, name: str) -> str | None:
        """Return the CSS class of the widget of a field."""
        return self.form.fields[name].widget.attrs.get("class")

    def test_charfield_bootstrap_class(self) -> None:
        """CharField has the correct Bootstrap class."""  # noqa: D403
        self.assertEqual(self.widget_class("char_field"), "form-control")

    def test_charfield_bootstrap_class_add(self) -> None:
        """Existing classes are kept."""
        self.assertEqual(
            self.widget_class("char_field_extra_class"),
            f"{BootstrapMixinForm.existing_class} form-control",
        )

    def test_choicefield_bootstrap_class(self) -> None:
        """ChoiceField has the correct Bootstrap class."""  # noqa: D403
        self.assertEqual(self.widget_class("choice_field"), "form-select")

    def test_booleanfield_bootstrap_class(self) -> None:
        """BooleanField has the correct Bootstrap class."""  # noqa: D403
        self.assertEqual(self.widget_class("boolean_field"), "form-check-input")

    def test_required_label_suffix(self) -> None:
        """Required fields are marked in their label."""
        self.assertEqual(
            self.form.fields["char_field_required"].label_suffix, " *"
        )
        self.assertIsNone(self.form.fields["char_field"].label_suffix)


class SignupFormTests(TestCase):
    """Tests for SignupForm."""

    def test_email_required(self) -> None:
        form = SignupForm()
        self.assertTrue(form.fields["email"].required)
        self.assertEqual(list(form.fields)[:2], ["username", "email"])
        self.assertIn("password1", form.fields)
        self.assertIn("password2", form.fields)


class AccountFormTests(TestCase):
    """Tests for AccountForm."""

    def test_language_choices(self) -> None:
        """The empty choice selects autodetection."""
        choices = AccountForm().fields["interface_language"].choices
        self.assertEqual(choices[0], ("", "Autodetect"))
        self.assertIn(("de", "Deutsch"), choices)

    def test_empty_choices_are_null(self) -> None:
        form = AccountForm(
            data={"interface_language": "", "sensitive_content_handling": ""}
        )
        self.assertTrue(form.is_valid())
        self.assertEqual(
            form.submitted_fields(),
            {"interface_language": None, "sensitive_content_handling": None},
        )

    def test_submitted_fields(self) -> None:
        """Only fields present in the request are reported."""
        form = AccountForm(
            data=MultiValueDict(
                {
                    "email": ["new@example.org"],
                    "current_password": ["playground-secret"],
                    "pagination-models": ["0", "1"],
                }
            )
        )
        self.assertTrue(form.is_valid())
        self.assertEqual(
            form.submitted_fields(),
            {
                "email": "new@example.org",
                "current_password": "playground-secret",
            },
        )

    def test_invalid_choice(self) -> None:
        form = AccountForm(data={"sensitive_content_handling": "explode"})
        self.assertFalse(form.is_valid())
        self.assertIn("sensitive_content_handling", form.errors)


class FirstUseFormTests(TestCase):
    """Tests for FirstUseForm."""

    def test_fields(self) -> None:
        """The username can be chosen and a password is required."""
        form = FirstUseForm()
        self.assertEqual(
            list(form.fields)[:4],
            ["username", "email", "password", "password_confirmation"],
        )
        self.assertTrue(form.fields["password"].required)
        self.assertTrue(form.fields["username"].required)
