from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

TICKET_CREATED_EVENT_TYPE = "com.zendesk.ticket.created"
TAG_CREATE_EVENT_TYPE = "com.zendesk.tag.create"
TAG_NEGATIVE_EVENT_TYPE = "com.zendesk.tag.negative"

NEGATIVE_SENTIMENT = "NEGATIVE"
EVENT_SUBJECT = "Zendesk Comprehend"


class SentimentRequest(BaseModel):
    """Ticket-created payload; upstream sends the id as a string."""

    model_config = ConfigDict(extra="ignore")

    id: StrictInt | StrictStr
    description: StrictStr


class ArchiveRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: StrictInt
    description: StrictStr
    tag: StrictStr


class TagResponse(BaseModel):
    id: int = 0
    tag: str = ""


class SentimentResponse(TagResponse):
    description: str = Field(default="")
