"""
Interactive message models for WhatsApp messaging.

Request-side schemas for reply-button and list messages. The inbound replies
these produce are modelled under wacloud.webhooks.
"""

from pydantic import BaseModel, Field, field_validator


class ReplyButton(BaseModel):
    """Reply button for button messages."""

    id: str = Field(..., min_length=1, max_length=256, description="Button identifier")
    title: str = Field(..., min_length=1, max_length=20, description="Button text")

    def to_payload(self) -> dict:
        return {"type": "reply", "reply": {"id": self.id, "title": self.title}}


class ListRow(BaseModel):
    """Row within a list section."""

    id: str = Field(..., min_length=1, max_length=200, description="Row identifier")
    title: str = Field(..., min_length=1, max_length=24, description="Row title")
    description: str | None = Field(
        None, max_length=72, description="Optional row description"
    )


class ListSection(BaseModel):
    """Section within a list message."""

    title: str = Field(..., max_length=24, description="Section title")
    rows: list[ListRow] = Field(..., min_length=1, max_length=10)


class ButtonMessage(BaseModel):
    """Reply-button message (1 to 3 buttons)."""

    body: str = Field(..., min_length=1, max_length=1024)
    buttons: list[ReplyButton] = Field(..., min_length=1, max_length=3)
    header: str | None = Field(None, max_length=60, description="Text header")
    footer: str | None = Field(None, max_length=60)

    @field_validator("buttons")
    @classmethod
    def validate_button_uniqueness(cls, v: list[ReplyButton]) -> list[ReplyButton]:
        """Validate button IDs are unique."""
        button_ids = [button.id for button in v]
        if len(button_ids) != len(set(button_ids)):
            raise ValueError("Button IDs must be unique")
        return v

    def to_payload(self) -> dict:
        interactive: dict = {
            "type": "button",
            "body": {"text": self.body},
            "action": {"buttons": [button.to_payload() for button in self.buttons]},
        }
        if self.header:
            interactive["header"] = {"type": "text", "text": self.header}
        if self.footer:
            interactive["footer"] = {"text": self.footer}
        return interactive


class ListMessage(BaseModel):
    """List message with up to 10 sections."""

    body: str = Field(..., min_length=1, max_length=4096)
    button_text: str = Field(..., min_length=1, max_length=20)
    sections: list[ListSection] = Field(..., min_length=1, max_length=10)
    header: str | None = Field(None, max_length=60)
    footer: str | None = Field(None, max_length=60)

    @field_validator("sections")
    @classmethod
    def validate_row_uniqueness(cls, v: list[ListSection]) -> list[ListSection]:
        """Validate row IDs are unique across all sections."""
        row_ids = [row.id for section in v for row in section.rows]
        if len(row_ids) != len(set(row_ids)):
            raise ValueError("Row IDs must be unique across all sections")
        return v

    def to_payload(self) -> dict:
        interactive: dict = {
            "type": "list",
            "body": {"text": self.body},
            "action": {
                "button": self.button_text,
                "sections": [
                    section.model_dump(exclude_none=True) for section in self.sections
                ],
            },
        }
        if self.header:
            interactive["header"] = {"type": "text", "text": self.header}
        if self.footer:
            interactive["footer"] = {"text": self.footer}
        return interactive
