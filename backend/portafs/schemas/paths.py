"""Path utility schemas."""

from pydantic import BaseModel


class JoinRequest(BaseModel):
    left: str
    right: str


class PathRequest(BaseModel):
    path: str


class PathResponse(BaseModel):
    path: str
