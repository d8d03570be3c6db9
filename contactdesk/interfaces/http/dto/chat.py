from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ChatMessageRequestDTO(BaseModel):
    author: str = Field(min_length=1, max_length=50)
    text: str = Field(min_length=1)

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")
