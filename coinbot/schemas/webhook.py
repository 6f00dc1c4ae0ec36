"""Pydantic models for the Dialogflow ES webhook request/response contracts."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Intent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    display_name: str = Field(default="", alias="displayName")


class QueryResult(BaseModel):
    intent: Intent = Field(default_factory=Intent)
    action: Optional[str] = None
    parameters: dict[str, Any] = Field(default_factory=dict)


class WebhookRequest(BaseModel):
    """Subset of the platform's WebhookRequest this service reads; extra members are ignored."""

    model_config = ConfigDict(populate_by_name=True)

    session: str = ""
    response_id: str = Field(default="", alias="responseId")
    query_result: QueryResult = Field(default_factory=QueryResult, alias="queryResult")

    @property
    def intent_name(self) -> str:
        return self.query_result.intent.display_name


class TextLines(BaseModel):
    text: list[str]


class FulfillmentMessage(BaseModel):
    text: TextLines


class WebhookResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    fulfillment_messages: list[FulfillmentMessage] = Field(
        default_factory=list, alias="fulfillmentMessages"
    )

    @classmethod
    def from_text(cls, line: str) -> "WebhookResponse":
        return cls(fulfillment_messages=[FulfillmentMessage(text=TextLines(text=[line]))])

    def lines(self) -> list[str]:
        return [line for message in self.fulfillment_messages for line in message.text.text]

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
