# src/assistant_relay/models/lines.py
from typing import Annotated, Literal, Union
from pydantic import BaseModel, ConfigDict, Field
from .response import UNKNOWN_PATH


class MarkerLine(BaseModel):
    """A line announcing a file edit or an Edit tool call."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["marker"] = "marker"
    file_path: str = UNKNOWN_PATH
    additions: int = 0
    deletions: int = 0


class PlainLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["plain"] = "plain"
    text: str


ClassifiedLine = Annotated[Union[MarkerLine, PlainLine], Field(discriminator="kind")]
