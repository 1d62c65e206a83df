"""Models for the chat notification payload."""

from collections.abc import Sequence
from typing import Any, Literal

from pydantic import Field

from chat_report.models.base import Model

type Color = Literal["good", "danger"]


class AttachmentField(Model):
    """A single field inside an attachment block."""

    title: str | None = None
    value: str
    short: bool | None = None


class Attachment(Model):
    """One visually distinct section of the notification."""

    text: str | None = None
    mrkdwn_in: Sequence[str] | None = None
    color: Color | None = None
    fields: Sequence[AttachmentField] = Field(default_factory=list)
    fallback: str | None = None
    footer: str | None = None

    def with_fields(self, extra: Sequence[AttachmentField]) -> "Attachment":
        """Return a copy with ``extra`` appended after the existing fields."""
        return self.model_copy(update={"fields": [*self.fields, *extra]})


class NotificationPayload(Model):
    """Root message: a title line followed by ordered attachments."""

    text: str
    attachments: Sequence[Attachment] = Field(default_factory=list)

    def to_body(self) -> dict[str, Any]:
        """Render the JSON body expected by Slack incoming webhooks.

        Unset keys are omitted and attachments without fields do not carry
        an empty ``fields`` list.
        """
        body = self.model_dump(mode="json", exclude_none=True)
        for attachment in body["attachments"]:
            if not attachment["fields"]:
                del attachment["fields"]
        return body
