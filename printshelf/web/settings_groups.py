# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""
Conversion of submitted settings groups into typed records.

Settings groups are submitted as form fields named ``<group>-<field>``. Each
group is reconstructed in full from the submitted values: missing booleans
are false, numbers are read from their leading digits, and missing or
non-numeric numbers are zero.
"""

import re
from collections.abc import Callable, Mapping

from printshelf.db.user_settings import (
    FileListSettings,
    PROBLEM_CATEGORIES,
    PaginationSettings,
    ProblemSettings,
    RendererSettings,
    SettingsGroup,
    TagCloudSettings,
)

#: Raw values of a settings group, keyed by field name
RawGroup = Mapping[str, str]

_leading_int = re.compile(r"[+-]?\d+")


def to_bool(value: str | None) -> bool:
    """Return True only for the value submitted by a ticked checkbox."""
    return value == "1"


def to_int(value: str | None) -> int:
    """Parse the leading integer of a value, with 0 if there is none."""
    if value is None:
        return 0
    if (match := _leading_int.match(value.strip())) is None:
        return 0
    return int(match.group())


def extract_group(data: Mapping[str, str], name: str) -> RawGroup | None:
    """
    Collect the raw values of a settings group from form data.

    :returns: the values keyed by field name, or None if the form does not
      contain the group
    """
    prefix = f"{name}-"
    group = {
        key.removeprefix(prefix): value
        for key, value in data.items()
        if key.startswith(prefix)
    }
    return group or None


def normalize_pagination(
    raw: RawGroup | None,
) -> PaginationSettings | None:
    """Build pagination settings from raw values."""
    if raw is None:
        return None
    return PaginationSettings(
        models=to_bool(raw.get("models")),
        creators=to_bool(raw.get("creators")),
        collections=to_bool(raw.get("collections")),
        per_page=to_int(raw.get("per_page")),
    )


def normalize_tag_cloud(raw: RawGroup | None) -> TagCloudSettings | None:
    """Build tag cloud settings from raw values."""
    if raw is None:
        return None
    return TagCloudSettings(
        threshold=to_int(raw.get("threshold")),
        heatmap=to_bool(raw.get("heatmap")),
        keypair=to_bool(raw.get("keypair")),
        sorting=raw.get("sorting"),
    )


def normalize_file_list(raw: RawGroup | None) -> FileListSettings | None:
    """Build file list settings from raw values."""
    if raw is None:
        return None
    return FileListSettings(
        hide_presupported_versions=to_bool(
            raw.get("hide_presupported_versions")
        )
    )


def normalize_renderer(raw: RawGroup | None) -> RendererSettings | None:
    """
    Build renderer settings from raw values.

    The grid is always square: its depth is taken from the submitted width,
    and any submitted depth is ignored.
    """
    if raw is None:
        return None
    return RendererSettings(
        grid_width=to_int(raw.get("grid_width")),
        grid_depth=to_int(raw.get("grid_width")),
        show_grid=to_bool(raw.get("show_grid")),
        enable_pan_zoom=to_bool(raw.get("enable_pan_zoom")),
        background_colour=raw.get("background_colour"),
        object_colour=raw.get("object_colour"),
        render_style=raw.get("render_style"),
        auto_load_max_size=to_int(raw.get("auto_load_max_size")),
    )


def normalize_problems(raw: RawGroup | None) -> ProblemSettings | None:
    """Build problem settings from raw values, ignoring unknown categories."""
    if raw is None:
        return None
    return ProblemSettings(
        severities={
            category: raw[category]
            for category in PROBLEM_CATEGORIES
            if category in raw
        }
    )


#: Settings groups: form prefix, User field, normalizer
SETTINGS_GROUPS: dict[
    str, tuple[str, Callable[[RawGroup | None], SettingsGroup | None]]
] = {
    "pagination": ("pagination_settings", normalize_pagination),
    "tag_cloud": ("tag_cloud_settings", normalize_tag_cloud),
    "file_list": ("file_list_settings", normalize_file_list),
    "renderer": ("renderer_settings", normalize_renderer),
    "problems": ("problem_settings", normalize_problems),
}

#: Groups that are cleared when missing from the submitted data
NULLABLE_GROUPS = frozenset(
    ("pagination", "tag_cloud", "file_list", "renderer")
)


def normalize_settings_groups(
    data: Mapping[str, str],
) -> dict[str, dict[str, object] | None]:
    """
    Convert all settings groups of form data.

    :returns: a mapping from User field name to the JSON value to store.
      Problem settings are only included if present in ``data``, so that
      forms without them leave them unchanged
    """
    result: dict[str, dict[str, object] | None] = {}
    for prefix, (field, normalize) in SETTINGS_GROUPS.items():
        record = normalize(extract_group(data, prefix))
        if record is None:
            if prefix not in NULLABLE_GROUPS:
                continue
            result[field] = None
        else:
            result[field] = record.model_dump()
    return result
