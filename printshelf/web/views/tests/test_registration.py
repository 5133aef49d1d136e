# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Tests for the sign up and account management views."""

from typing import ClassVar
from unittest import mock

from django.contrib.auth import SESSION_KEY
from django.contrib.messages import get_messages
from django.test import override_settings
from django.urls import reverse

from printshelf.db.models import FIRST_USE_TOKEN, User
from printshelf.server.signon import pending_session_key, state_session_key
from printshelf.test.django import TestCase, TestResponseType
from printshelf.web.views import registration
from printshelf.web.views.registration import SEVERITY_CHOICES


class RegistrationViewTestCase(TestCase):
    """Common code for registration view tests."""

    user: ClassVar[User]
    password: ClassVar[str] = "playground-secret"

    @classmethod
    def setUpTestData(cls) -> None:
        """Set up common data."""
        super().setUpTestData()
        cls.user = cls.playground.get_default_user()

    def assertMessage(self, response: TestResponseType, message: str) -> None:
        """Ensure that the response queued exactly the given message."""
        self.assertEqual(
            [m.message for m in get_messages(response.wsgi_request)],
            [message],
        )

    def assertLoggedInAs(self, user: User | None) -> None:
        """Check which user the test client session belongs to."""
        session_user = self.client.session.get(SESSION_KEY)
        if user is None:
            self.assertIsNone(session_user)
        else:
            self.assertEqual(session_user, str(user.pk))


class RandomDelayTests(TestCase):
    """Tests for random_delay."""

    @override_settings(PRINTSHELF_RANDOM_DELAY=(0.2, 0.4))
    def test_sleeps_in_range(self) -> None:
        with mock.patch("time.sleep") as sleep:
            registration.random_delay()
        sleep.assert_called_once()
        self.assertGreaterEqual(sleep.call_args.args[0], 0.2)
        self.assertLessEqual(sleep.call_args.args[0], 0.4)

    @override_settings(PRINTSHELF_RANDOM_DELAY=(0, 0))
    def test_disabled(self) -> None:
        with mock.patch("time.sleep") as sleep:
            registration.random_delay()
        sleep.assert_not_called()


class SignupViewTests(RegistrationViewTestCase):
    """Tests for SignupView."""

    def post_signup(self, username: str = "maker") -> TestResponseType:
        """Submit the sign up form."""
        return self.client.post(
            reverse("account:signup"),
            {
                "username": username,
                "email": f"{username}@example.org",
                "password1": "a-much-longer-secret",
                "password2": "a-much-longer-secret",
            },
        )

    def test_get(self) -> None:
        """The sign up form is shown to visitors."""
        with mock.patch.object(registration, "random_delay") as delay:
            response = self.client.get(reverse("account:signup"))
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "web/account/signup.html")
        delay.assert_not_called()

    def test_signup(self) -> None:
        """Signing up creates an account and logs in."""
        with (
            mock.patch.object(registration, "random_delay") as delay,
            self.assertLogsContains(
                "User maker signed up", logger="printshelf"
            ),
        ):
            response = self.post_signup()

        self.assertRedirects(response, reverse("homepage:homepage"))
        delay.assert_called_once_with()
        user = User.objects.get(username="maker")
        self.assertTrue(user.approved)
        self.assertEqual(user.email, "maker@example.org")
        self.assertLoggedInAs(user)
        self.assertMessage(
            response, "Welcome! You have signed up successfully."
        )

    def test_signup_needs_approval(self) -> None:
        """Accounts waiting for approval are not logged in."""
        self.playground.get_site_settings(approve_signups=True)

        response = self.post_signup()

        self.assertRedirects(response, reverse("homepage:homepage"))
        user = User.objects.get(username="maker")
        self.assertFalse(user.approved)
        self.assertLoggedInAs(None)
        self.assertMessage(
            response,
            "You have signed up successfully. However, we could not sign"
            " you in because your account is awaiting approval.",
        )

    def test_signup_requires_email(self) -> None:
        response = self.client.post(
            reverse("account:signup"),
            {
                "username": "maker",
                "password1": "a-much-longer-secret",
                "password2": "a-much-longer-secret",
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn("email", response.context["form"].errors)
        self.assertFalse(User.objects.filter(username="maker").exists())

    def test_registration_closed(self) -> None:
        """Nobody can sign up when registration is closed."""
        self.playground.get_site_settings(registration_open=False)

        response = self.post_signup()

        self.assertEqual(response.status_code, 403)
        self.assertFalse(User.objects.filter(username="maker").exists())

    def test_logged_in(self) -> None:
        """Logged in users cannot sign up again."""
        self.client.force_login(self.user)

        response = self.client.get(reverse("account:signup"))

        self.assertEqual(response.status_code, 403)


class AccountEditViewTests(RegistrationViewTestCase):
    """Tests for AccountEditView in normal mode."""

    def setUp(self) -> None:
        """Log in the default user."""
        super().setUp()
        self.client.force_login(self.user)

    def test_anonymous(self) -> None:
        """Anonymous users are sent to the login page."""
        self.client.logout()
        url = reverse("account:edit")

        response = self.client.get(url)

        self.assertRedirects(
            response,
            f"{reverse('login')}?next={url}",
            fetch_redirect_response=False,
        )

    def test_get(self) -> None:
        self.user.problem_settings = {"severities": {"missing": "danger"}}
        self.user.save()

        response = self.client.get(reverse("account:edit"))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "web/account/edit.html")
        ctx = response.context
        self.assertFalse(ctx["first_use"])
        self.assertEqual(ctx["title"], "Account settings")
        self.assertEqual(ctx["languages"][0], ("Autodetect", None))
        self.assertEqual(ctx["severity_choices"], SEVERITY_CHOICES)
        self.assertIn(("missing", "danger"), ctx["problem_severities"])
        self.assertIn(("no_tags", ""), ctx["problem_severities"])
        self.assertNotIn("username", ctx["form"].fields)

    def test_update_settings(self) -> None:
        """Settings change without the current password."""
        response = self.client.post(
            reverse("account:edit"),
            {
                "email": self.user.email,
                "password": "",
                "password_confirmation": "",
                "current_password": "",
                "interface_language": "de",
                "sensitive_content_handling": "blur",
                "pagination-models": ["0", "1"],
                "pagination-creators": "0",
                "pagination-per_page": "24",
                "renderer-grid_width": "180",
                "renderer-grid_depth": "90",
                "problems-no_tags": "silent",
            },
        )

        self.assertRedirects(response, reverse("account:edit"))
        self.assertMessage(
            response, "Your account has been updated successfully."
        )
        self.user.refresh_from_db()
        self.assertEqual(self.user.interface_language, "de")
        self.assertEqual(self.user.sensitive_content_handling, "blur")
        self.assertEqual(
            self.user.pagination_settings,
            {
                "models": True,
                "creators": False,
                "collections": False,
                "per_page": 24,
            },
        )
        renderer = self.user.get_renderer_settings()
        self.assertEqual((renderer.grid_width, renderer.grid_depth), (180, 180))
        self.assertIsNone(self.user.tag_cloud_settings)
        self.assertEqual(
            self.user.problem_settings, {"severities": {"no_tags": "silent"}}
        )

    def test_autodetect_language(self) -> None:
        """An empty language selects autodetection."""
        self.user.interface_language = "fr"
        self.user.save()

        self.client.post(reverse("account:edit"), {"interface_language": ""})

        self.user.refresh_from_db()
        self.assertIsNone(self.user.interface_language)

    def test_change_email(self) -> None:
        response = self.client.post(
            reverse("account:edit"),
            {"email": "new@example.org", "current_password": self.password},
        )

        self.assertRedirects(response, reverse("account:edit"))
        self.user.refresh_from_db()
        self.assertEqual(self.user.email, "new@example.org")

    def test_change_email_wrong_password(self) -> None:
        """Changing the email address needs the current password."""
        response = self.client.post(
            reverse("account:edit"),
            {"email": "new@example.org", "current_password": "wrong"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.context["form"].errors["current_password"],
            ["The current password is not valid."],
        )
        self.user.refresh_from_db()
        self.assertEqual(self.user.email, "playground@example.org")

    def test_change_password_keeps_session(self) -> None:
        """Changing the password does not log out."""
        response = self.client.post(
            reverse("account:edit"),
            {
                "password": "a-much-longer-secret",
                "password_confirmation": "a-much-longer-secret",
                "current_password": self.password,
            },
        )

        self.assertRedirects(response, reverse("account:edit"))
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("a-much-longer-secret"))
        self.assertEqual(
            self.client.get(reverse("account:edit")).status_code, 200
        )

    def test_change_password_mismatch(self) -> None:
        response = self.client.post(
            reverse("account:edit"),
            {
                "password": "a-much-longer-secret",
                "password_confirmation": "something-else-entirely",
                "current_password": self.password,
            },
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.context["form"].errors["password_confirmation"],
            ["The password confirmation does not match."],
        )
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password(self.password))


class AccountEditViewFirstUseTests(RegistrationViewTestCase):
    """Tests for AccountEditView in first-use mode."""

    def setUp(self) -> None:
        """Put the default user in first-use mode and log in."""
        super().setUp()
        self.user.reset_password_token = FIRST_USE_TOKEN
        self.user.save()
        self.client.force_login(self.user)

    def test_get(self) -> None:
        response = self.client.get(reverse("account:edit"))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "web/account/first_use.html")
        self.assertTrue(response.context["first_use"])
        self.assertEqual(response.context["title"], "Set up your account")
        form = response.context["form"]
        self.assertEqual(form.initial["username"], "playground")
        self.assertTrue(form.fields["password"].required)

    def test_complete_setup(self) -> None:
        """Submitting the setup leaves first-use mode without old password."""
        response = self.client.post(
            reverse("account:edit"),
            {
                "username": "maker",
                "email": "maker@example.org",
                "password": "a-much-longer-secret",
                "password_confirmation": "a-much-longer-secret",
            },
        )

        self.assertRedirects(response, reverse("homepage:homepage"))
        self.assertMessage(
            response, "Your account setup is complete. Welcome!"
        )
        self.user.refresh_from_db()
        self.assertFalse(self.user.is_first_use)
        self.assertIsNone(self.user.reset_password_token)
        self.assertEqual(self.user.username, "maker")
        self.assertEqual(self.user.email, "maker@example.org")
        self.assertTrue(self.user.check_password("a-much-longer-secret"))
        self.assertLoggedInAs(self.user)

    def test_password_required(self) -> None:
        response = self.client.post(
            reverse("account:edit"),
            {"username": "maker", "email": "maker@example.org"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertIn("password", response.context["form"].errors)
        self.user.refresh_from_db()
        self.assertTrue(self.user.is_first_use)

    def test_rejected_setup_stays_in_first_use(self) -> None:
        """A failed setup leaves the account unchanged."""
        self.playground.create_user("taken")

        response = self.client.post(
            reverse("account:edit"),
            {
                "username": "taken",
                "email": "maker@example.org",
                "password": "a-much-longer-secret",
                "password_confirmation": "a-much-longer-secret",
            },
        )

        self.assertEqual(response.status_code, 200)
        self.assertIn("username", response.context["form"].errors)
        self.user.refresh_from_db()
        self.assertTrue(self.user.is_first_use)
        self.assertEqual(self.user.username, "playground")


class AccountDeleteViewTests(RegistrationViewTestCase):
    """Tests for AccountDeleteView."""

    def test_get_confirmation(self) -> None:
        self.client.force_login(self.user)

        response = self.client.get(reverse("account:delete"))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "web/account/delete.html")

    def test_delete(self) -> None:
        """Deleting the account removes it and logs out."""
        self.client.force_login(self.user)

        response = self.client.post(reverse("account:delete"))

        self.assertRedirects(response, reverse("homepage:homepage"))
        self.assertFalse(User.objects.filter(pk=self.user.pk).exists())
        self.assertLoggedInAs(None)

    def test_anonymous(self) -> None:
        response = self.client.post(reverse("account:delete"))

        self.assertEqual(response.status_code, 302)
        self.assertTrue(User.objects.filter(pk=self.user.pk).exists())


class SignonCancelViewTests(RegistrationViewTestCase):
    """Tests for SignonCancelView."""

    def test_cancel(self) -> None:
        """Pending sign-on data is dropped from the session."""
        session = self.client.session
        session[state_session_key("gitlab")] = "state"
        session[pending_session_key("gitlab")] = {"sub": "42"}
        session["unrelated"] = "kept"
        session.save()

        with mock.patch.object(registration, "random_delay") as delay:
            response = self.client.get(reverse("account:cancel"))

        self.assertRedirects(response, reverse("account:signup"))
        delay.assert_called_once_with()
        session = self.client.session
        self.assertNotIn(state_session_key("gitlab"), session)
        self.assertNotIn(pending_session_key("gitlab"), session)
        self.assertEqual(session["unrelated"], "kept")

    def test_logged_in(self) -> None:
        """Logged in users have no sign-on to cancel."""
        self.client.force_login(self.user)

        response = self.client.get(reverse("account:cancel"))

        self.assertEqual(response.status_code, 403)
