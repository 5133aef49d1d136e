# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Typed records for the per-user settings groups."""

import pydantic


class SettingsGroup(pydantic.BaseModel):
    """
    Base class for a settings group.

    Settings groups are stored as JSON in the User model, and modeled as
    pydantic data structures in memory for both ease of access and
    validation.
    """

    model_config = pydantic.ConfigDict(extra="forbid")


class PaginationSettings(SettingsGroup):
    """Pagination of the library listings."""

    models: bool = False
    creators: bool = False
    collections: bool = False
    per_page: int = 0


class TagCloudSettings(SettingsGroup):
    """Display of the tag cloud."""

    threshold: int = 0
    heatmap: bool = False
    keypair: bool = False
    #: Opaque sort key, stored as submitted
    sorting: str | None = None


class FileListSettings(SettingsGroup):
    """Display of the file list of a model."""

    hide_presupported_versions: bool = False


class RendererSettings(SettingsGroup):
    """Configuration of the 3D preview renderer."""

    grid_width: int = 0
    grid_depth: int = 0
    show_grid: bool = False
    enable_pan_zoom: bool = False
    background_colour: str | None = None
    object_colour: str | None = None
    render_style: str | None = None
    auto_load_max_size: int = 0


#: Categories of library problems whose reporting severity can be configured
PROBLEM_CATEGORIES = (
    "missing",
    "empty",
    "nesting",
    "inefficient",
    "duplicate",
    "no_image",
    "no_3d_model",
    "non_manifold",
    "inside_out",
    "no_license",
    "no_links",
    "no_creator",
    "no_tags",
)


class ProblemSettings(SettingsGroup):
    """Severity chosen by the user for each problem category."""

    severities: dict[str, str] = pydantic.Field(default_factory=dict)

    @pydantic.field_validator("severities")
    @classmethod
    def _known_categories(cls, value: dict[str, str]) -> dict[str, str]:
        """Only allow known problem categories."""
        if unknown := set(value) - set(PROBLEM_CATEGORIES):
            raise ValueError(
                "unknown problem categories: " + ", ".join(sorted(unknown))
            )
        return value
