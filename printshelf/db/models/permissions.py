# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Basic permission check infrastructure."""

import enum
import functools
from collections.abc import Callable
from typing import (
    Protocol,
    TYPE_CHECKING,
    TypeAlias,
    TypeVar,
    Union,
    assert_never,
    runtime_checkable,
)

from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import PermissionDenied
from django.db.models import Model, QuerySet

from printshelf.db.context import ContextConsistencyError, context

if TYPE_CHECKING:
    from printshelf.db.models import User

#: Type alias for the user variable used by permission predicates
PermissionUser: TypeAlias = Union["User", AnonymousUser, None]

M = TypeVar("M", bound=Model)
QS = TypeVar("QS", bound=QuerySet)  # type: ignore[type-arg]


@runtime_checkable
class PermissionCheckPredicate(Protocol[M]):
    """Interface of a permission predicate on a resource."""

    __self__: M

    __func__: Callable[[M, "PermissionUser"], bool]

    def __call__(self, user: "PermissionUser") -> bool:
        """Test the predicate."""


class Allow(enum.StrEnum):
    """
    Handling strategies for permission predicates.

    This is used to specify how to handle anonymous users.
    """

    #: The tested condition makes the predicate always succeed
    ALWAYS = "always"
    #: The tested condition makes the predicate always fail
    NEVER = "never"
    #: The tested condition is ignored and the decision is delegated to the
    #: body of the predicate
    PASS = "pass"


P: TypeAlias = Callable[[M, PermissionUser], bool]


def permission_check(
    msg: str,
    *,
    anonymous: Allow = Allow.NEVER,
) -> Callable[[P[M]], P[M]]:
    """
    Implement common elements of permission checking predicates.

    :param msg: error message template, formatted with ``user`` and
                ``resource``
    :param anonymous: what to do if an anonymous user is passed

    Predicates are evaluated on every call: results are never cached, since
    the state of the resource or of its containers may have changed.
    """

    def wrap(f: P[M]) -> P[M]:
        @functools.wraps(f)
        def wrapper(self: M, user: PermissionUser) -> bool:
            if context.permission_checks_disabled:
                return True

            # User has not been set in the context: context.user is passed,
            # but it contains None
            if user is None:
                raise ContextConsistencyError("user was not set in context")

            if not user.is_authenticated:
                match anonymous:
                    case Allow.ALWAYS:
                        return True
                    case Allow.NEVER:
                        return False
                    case Allow.PASS:
                        pass
                    case _ as unreachable:
                        assert_never(unreachable)

            return f(self, user)

        setattr(wrapper, "error_template", msg)
        setattr(wrapper, "anonymous", anonymous)
        return wrapper

    return wrap


PF: TypeAlias = Callable[[QS, PermissionUser], QS]


def permission_filter(
    *, anonymous: Allow = Allow.NEVER
) -> Callable[[PF[QS]], PF[QS]]:
    """
    Implement common elements of permission filtering predicates.

    :param anonymous: what to do if an anonymous user is passed
    """

    def wrap(f: PF[QS]) -> PF[QS]:
        @functools.wraps(f)
        def wrapper(self: QS, user: PermissionUser) -> QS:
            if context.permission_checks_disabled:
                return self

            if user is None:
                raise ContextConsistencyError("user was not set in context")

            if not user.is_authenticated:
                match anonymous:
                    case Allow.ALWAYS:
                        return self
                    case Allow.NEVER:
                        return self.none()
                    case Allow.PASS:
                        pass
                    case _ as unreachable:
                        assert_never(unreachable)

            return f(self, user)

        setattr(wrapper, "anonymous", anonymous)
        return wrapper

    return wrap


def format_permission_check_error(
    predicate: Callable[[PermissionUser], bool], user: PermissionUser
) -> str:
    """Format a permission check error message."""
    assert hasattr(predicate, "error_template")
    error_template = predicate.error_template
    assert isinstance(error_template, str)
    assert hasattr(predicate, "__self__")
    return error_template.format(resource=predicate.__self__, user=user)


def enforce(predicate: Callable[[PermissionUser], bool]) -> None:
    """Enforce a permission predicate at the model level."""
    if predicate(context.user):
        return

    raise PermissionDenied(
        format_permission_check_error(predicate, context.user),
    )
