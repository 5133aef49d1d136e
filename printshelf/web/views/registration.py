# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""
Views to sign up and to manage one's own account.

Create and cancel requests are slowed down by a random delay, to make timing
attacks on account existence harder.
"""

import logging
import random
import time
from typing import Any

from django.conf import settings
from django.contrib import messages
from django.contrib.auth import login, logout, update_session_auth_hash
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import ValidationError
from django.forms import BaseForm
from django.http import HttpRequest, HttpResponse
from django.http.response import HttpResponseBase
from django.shortcuts import redirect
from django.views.generic import FormView, TemplateView, View

from printshelf.db.models import SiteSettings, User
from printshelf.db.user_settings import PROBLEM_CATEGORIES
from printshelf.server import accounts
from printshelf.server.signon import expire_pending_signon
from printshelf.web.forms import AccountForm, FirstUseForm, SignupForm
from printshelf.web.views.base import BaseUIView

log = logging.getLogger(__name__)

#: Backend used to log in users after sign up or account setup
LOGIN_BACKEND = "printshelf.server.auth.ApprovalBackend"

#: Severities offered for each problem category
SEVERITY_CHOICES = ("silent", "info", "warning", "danger")


def random_delay() -> None:
    """Sleep for a random time in the PRINTSHELF_RANDOM_DELAY range."""
    low, high = settings.PRINTSHELF_RANDOM_DELAY
    if high > 0:
        time.sleep(random.uniform(low, high))


def add_validation_errors(form: BaseForm, error: ValidationError) -> None:
    """Report model validation errors on the form."""
    for field, messages_ in error.message_dict.items():
        form.add_error(field if field in form.fields else None, messages_)


class RandomDelayMixin:
    """Apply random_delay before handling some HTTP methods."""

    random_delay_methods: tuple[str, ...] = ()

    def dispatch(
        self, request: HttpRequest, *args: Any, **kwargs: Any
    ) -> HttpResponseBase:
        """Delay, then dispatch."""
        assert request.method is not None
        if request.method.lower() in self.random_delay_methods:
            random_delay()
        return super().dispatch(  # type: ignore[misc]
            request, *args, **kwargs
        )


class SignupView(RandomDelayMixin, BaseUIView, FormView):
    """Create a new account."""

    template_name = "web/account/signup.html"
    form_class = SignupForm
    title = "Sign up"
    random_delay_methods = ("post",)

    def init_view(self) -> None:
        """Check that sign ups are possible."""
        super().init_view()
        self.enforce(SiteSettings.get_current().can_sign_up)

    def form_valid(self, form: SignupForm) -> HttpResponse:
        """Create the account, and log in if it does not need approval."""
        user = accounts.register(form.save())
        if not user.approved:
            messages.info(
                self.request,
                "You have signed up successfully. However, we could not sign"
                " you in because your account is awaiting approval.",
            )
            return redirect("homepage:homepage")

        login(self.request, user, backend=LOGIN_BACKEND)
        messages.success(
            self.request, "Welcome! You have signed up successfully."
        )
        return redirect("homepage:homepage")


class AccountView(LoginRequiredMixin, BaseUIView):
    """Common structure of views acting on the current account."""

    user: User

    def init_view(self) -> None:
        """Load the current account and check permissions."""
        super().init_view()
        self.user = User.objects.get(pk=self.request.user.pk)
        self.enforce(self.user.can_manage)


class AccountEditView(AccountView, FormView):
    """
    Change the settings of the current account.

    Accounts in first-use mode get a setup form instead, which also allows to
    choose the username.
    """

    title = "Account settings"

    def init_view(self) -> None:
        """Detect first-use mode."""
        super().init_view()
        self.first_use = self.user.is_first_use

    def get_title(self) -> str:
        """Return the page title."""
        if self.first_use:
            return "Set up your account"
        return super().get_title()

    def get_template_names(self) -> list[str]:
        """Use a dedicated template for first-use mode."""
        if self.first_use:
            return ["web/account/first_use.html"]
        return ["web/account/edit.html"]

    def get_form_class(self) -> type[AccountForm]:
        """Allow to choose the username in first-use mode."""
        if self.first_use:
            return FirstUseForm
        return AccountForm

    def get_initial(self) -> dict[str, Any]:
        """Fill the form with the current values."""
        initial = super().get_initial()
        initial.update(
            email=self.user.email,
            interface_language=self.user.interface_language or "",
            sensitive_content_handling=(
                self.user.sensitive_content_handling or ""
            ),
        )
        if self.first_use:
            initial["username"] = self.user.username
        return initial

    def get_context_data(self, **kwargs: Any) -> dict[str, Any]:
        """Add the languages and settings groups."""
        ctx = super().get_context_data(**kwargs)
        ctx["first_use"] = self.first_use
        ctx["languages"] = accounts.languages()
        ctx["pagination"] = self.user.get_pagination_settings()
        ctx["tag_cloud"] = self.user.get_tag_cloud_settings()
        ctx["file_list"] = self.user.get_file_list_settings()
        ctx["renderer"] = self.user.get_renderer_settings()
        severities = self.user.get_problem_settings().severities
        ctx["problem_severities"] = [
            (category, severities.get(category, ""))
            for category in PROBLEM_CATEGORIES
        ]
        ctx["severity_choices"] = SEVERITY_CHOICES
        return ctx

    def form_valid(self, form: AccountForm) -> HttpResponse:
        """Apply the changes."""
        if self.first_use:
            return self.complete_first_use(form)

        try:
            password_changed = accounts.update_account(
                self.user, form.submitted_fields(), self.request.POST
            )
        except ValidationError as exc:
            add_validation_errors(form, exc)
            return self.form_invalid(form)

        if password_changed:
            update_session_auth_hash(self.request, self.user)
        messages.success(
            self.request, "Your account has been updated successfully."
        )
        return redirect("account:edit")

    def complete_first_use(self, form: AccountForm) -> HttpResponse:
        """Apply the initial setup and leave first-use mode."""
        try:
            accounts.complete_first_use(self.user, form.submitted_fields())
        except ValidationError as exc:
            add_validation_errors(form, exc)
            return self.form_invalid(form)

        login(self.request, self.user, backend=LOGIN_BACKEND)
        messages.success(
            self.request, "Your account setup is complete. Welcome!"
        )
        return redirect("homepage:homepage")


class AccountDeleteView(AccountView, TemplateView):
    """Delete the current account, after confirmation."""

    template_name = "web/account/delete.html"
    title = "Delete account"

    def post(
        self, request: HttpRequest, *args: Any, **kwargs: Any  # noqa: U100
    ) -> HttpResponse:
        """Delete the account and log out."""
        accounts.delete_account(self.user)
        logout(request)
        messages.info(
            request,
            "Bye! Your account has been successfully cancelled."
            " We hope to see you again soon.",
        )
        return redirect("homepage:homepage")


class SignonCancelView(RandomDelayMixin, BaseUIView, View):
    """Abandon an external sign-on in progress."""

    random_delay_methods = ("get",)

    def init_view(self) -> None:
        """Check that there is no logged in user."""
        super().init_view()
        self.enforce(SiteSettings.get_current().can_cancel_sign_on)

    def get(
        self, request: HttpRequest, *args: Any, **kwargs: Any  # noqa: U100
    ) -> HttpResponse:
        """Expire the sign-on data, and go back to the sign up page."""
        expire_pending_signon(request.session)
        return redirect("account:signup")
