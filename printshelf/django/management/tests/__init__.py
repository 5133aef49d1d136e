# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Helpers to run printshelf-admin commands from tests."""

import io
from contextlib import redirect_stderr, redirect_stdout
from typing import Any, NamedTuple

from django.core.management import call_command as django_call_command


class CommandResult(NamedTuple):
    """Output of a management command run from a test."""

    stdout: str
    stderr: str
    #: Code passed to SystemExit, or None if the command returned normally
    exit_code: int | str | None


def call_command(
    cmd: str, *args: str, verbosity: int = 0, **kwargs: Any
) -> CommandResult:
    """
    Run a management command, capturing its output and exit code.

    Printshelf commands end by raising SystemExit; CommandError and other
    exceptions are left to the caller.
    """
    stdout = io.StringIO()
    stderr = io.StringIO()
    exit_code: int | str | None = None

    with redirect_stderr(stderr), redirect_stdout(stdout):
        try:
            django_call_command(cmd, *args, verbosity=verbosity, **kwargs)
        except SystemExit as exc:
            exit_code = 0 if exc.code is None else exc.code

    return CommandResult(stdout.getvalue(), stderr.getvalue(), exit_code)
