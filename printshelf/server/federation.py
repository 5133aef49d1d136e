# Copyright © The Printshelf Developers
# See the AUTHORS file at the top-level directory of this distribution
#
# This file is part of Printshelf. It is subject to the license terms
# in the LICENSE file found in the top-level directory of this
# distribution. No part of Printshelf, including this file, may be copied,
# modified, propagated, or distributed except according to the terms
# contained in the LICENSE file.

"""Conversion of federated actors into local library objects."""

import logging
from typing import Any

import pydantic
from django.db import transaction

from printshelf.db.models import Actor, Link, Model

log = logging.getLogger(__name__)


class Attachment(pydantic.BaseModel):
    """Entry of the ``attachment`` list of an actor."""

    model_config = pydantic.ConfigDict(extra="allow")

    type: str | None = None
    href: str | None = None

    @pydantic.model_validator(mode="after")
    def _links_have_targets(self) -> "Attachment":
        """Links need to point somewhere."""
        if self.type == "Link" and not self.href:
            raise ValueError("Link attachments need an href")
        return self


class ActorExtensions(pydantic.BaseModel):
    """Extra attributes of a federated actor representing a model."""

    model_config = pydantic.ConfigDict(extra="allow")

    summary: str | None = None
    content: str | None = None
    attachment: list[Attachment] = pydantic.Field(default_factory=list)

    @pydantic.field_validator("attachment", mode="before")
    @classmethod
    def _no_attachments(cls, value: Any) -> Any:
        """An explicit null list has no attachments."""
        return [] if value is None else value

    @property
    def link_urls(self) -> list[str]:
        """Return the targets of the Link attachments, in order."""
        return [
            attachment.href
            for attachment in self.attachment
            if attachment.type == "Link" and attachment.href
        ]


class ModelDeserializer:
    """Create a local Model from a federated actor."""

    def __init__(self, actor: Any) -> None:
        """
        Store the actor to convert.

        :raises TypeError: if actor is not an Actor
        """
        if not isinstance(actor, Actor):
            raise TypeError(
                f"{actor!r} is not a federated actor"
                f" but a {type(actor).__name__}"
            )
        self.actor = actor

    def parse_extensions(self) -> ActorExtensions:
        """
        Parse the extension attributes of the actor.

        :raises pydantic.ValidationError: if the extensions are malformed
        """
        return ActorExtensions.model_validate(self.actor.extensions or {})

    def deserialize(self) -> Model:
        """
        Create a new Model from the actor.

        Each call creates a new Model, even if one was already created from
        the same actor.
        """
        extensions = self.parse_extensions()
        with transaction.atomic():
            model = Model.objects.create(
                name=self.actor.name,
                slug=self.actor.username,
                caption=extensions.summary,
                notes=extensions.content,
                actor=self.actor,
            )
            Link.objects.bulk_create(
                Link(model=model, url=url) for url in extensions.link_urls
            )
        log.info("Created model %s from actor %s", model.pk, self.actor)
        return model
