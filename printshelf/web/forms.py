# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Printshelf Web forms."""

from typing import Any

from django.contrib.auth.forms import UserCreationForm
from django.forms import (
    BaseForm,
    BooleanField,
    CharField,
    ChoiceField,
    EmailField,
    Field,
    Form,
    PasswordInput,
)

from printshelf.db.models import SensitiveContentHandling, User
from printshelf.server.accounts import languages


class BootstrapMixin:
    """
    Mixin that adjusts the CSS classes of form fields with Bootstrap's UI.

    This mixin is intended to be used in combination with Django's form classes.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the mixin."""
        super().__init__(*args, **kwargs)
        assert isinstance(self, BaseForm)
        for field in self.fields.values():
            self._adjust_bootstrap_for_field(field)

    @staticmethod
    def _adjust_bootstrap_for_field(field: Field) -> None:
        """Adjust the CSS class for a field."""
        existing_class = field.widget.attrs.get("class", "")
        bootstrap_class = None

        if field.required:
            suffix = " *"
            if not (field.label_suffix or "").endswith(suffix):
                field.label_suffix = (field.label_suffix or "") + suffix

        if isinstance(field, ChoiceField):
            bootstrap_class = "form-select"
        elif isinstance(field, CharField):
            bootstrap_class = "form-control"
        elif isinstance(field, BooleanField):
            bootstrap_class = "form-check-input"

        if bootstrap_class and bootstrap_class not in existing_class.split():
            field.widget.attrs["class"] = (
                f"{existing_class} {bootstrap_class}".strip()
            )


class SignupForm(BootstrapMixin, UserCreationForm):  # type: ignore[type-arg]
    """Form to create a new account."""

    class Meta(UserCreationForm.Meta):
        model = User
        fields = ("username", "email")

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Make the email address required."""
        super().__init__(*args, **kwargs)
        self.fields["email"].required = True


def _language_choices() -> list[tuple[str, str]]:
    """Return the interface language choices, with "" for autodetect."""
    return [(code or "", name) for name, code in languages()]


class AccountForm(BootstrapMixin, Form):
    """
    Form to change the settings of an account.

    All fields are optional: only the fields present in the submitted data
    are changed. Settings groups are not form fields, and are handled
    separately from the raw form data.
    """

    email = EmailField(required=False)
    password = CharField(
        required=False,
        strip=False,
        widget=PasswordInput(attrs={"autocomplete": "new-password"}),
        help_text="Leave blank to keep the current password",
    )
    password_confirmation = CharField(
        required=False,
        strip=False,
        widget=PasswordInput(attrs={"autocomplete": "new-password"}),
    )
    current_password = CharField(
        required=False,
        strip=False,
        widget=PasswordInput(attrs={"autocomplete": "current-password"}),
        help_text="Needed to change the email address or the password",
    )
    interface_language = ChoiceField(required=False)
    sensitive_content_handling = ChoiceField(
        required=False,
        choices=[("", "Default")] + SensitiveContentHandling.choices,
    )

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Load the available languages."""
        super().__init__(*args, **kwargs)
        language_field = self.fields["interface_language"]
        assert isinstance(language_field, ChoiceField)
        language_field.choices = _language_choices()

    def clean_interface_language(self) -> str | None:
        """Store autodetect as null."""
        return self.cleaned_data["interface_language"] or None

    def clean_sensitive_content_handling(self) -> str | None:
        """Store the default as null."""
        return self.cleaned_data["sensitive_content_handling"] or None

    def submitted_fields(self) -> dict[str, Any]:
        """Return the cleaned values of the fields present in the request."""
        assert self.is_valid()
        return {
            name: value
            for name, value in self.cleaned_data.items()
            if name in self.data
        }


class FirstUseForm(AccountForm):
    """Form to set up an account created by an administrator."""

    field_order = ["username", "email", "password", "password_confirmation"]

    username = CharField(max_length=150)

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Require a new password."""
        super().__init__(*args, **kwargs)
        self.fields["password"].required = True
