"""Wire contract for the voice-processing endpoint."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ActionType(str, Enum):
    ASK_TIME = "ask_time"
    CONFIRM_APPOINTMENT = "confirm_appointment"
    CONFIRM_ORDER = "confirm_order"
    CHECK_STOCK = "check_stock"
    NONE = "none"


class ProcessVoiceRequest(BaseModel):
    """Inbound utterance for one conversational turn."""
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(min_length=1)
    session_id: str = Field(alias="sessionId", min_length=1)


class ActionHint(BaseModel):
    """Typed hint telling the presentation layer what just happened."""
    type: ActionType
    data: Optional[Any] = None


class ProcessVoiceResponse(BaseModel):
    """Spoken reply plus optional action hint."""
    text_response: str
    action: Optional[ActionHint] = None

    def to_wire(self) -> dict[str, Any]:
        """Render the JSON body, omitting ``action``/``data`` when absent."""
        body: dict[str, Any] = {"textResponse": self.text_response}
        if self.action is not None:
            hint: dict[str, Any] = {"type": self.action.type.value}
            if self.action.data is not None:
                data = self.action.data
                if isinstance(data, BaseModel):
                    data = data.model_dump(mode="json", by_alias=True)
                hint["data"] = data
            body["action"] = hint
        return body
