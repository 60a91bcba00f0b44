"""
VOTECHAIN — API Models.
Centralized Pydantic models for request/response validation.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class CandidateRequest(BaseModel):
    # Blank or null names reach the service so the caller gets EmptyName.
    name: str = Field("", description="Candidate display name")

    @field_validator("name", mode="before")
    @classmethod
    def null_as_blank(cls, v: Any) -> Any:
        return "" if v is None else v


class CandidateResponse(BaseModel):
    name: str
    message: str


class VoteRequest(BaseModel):
    voter_id: str = Field("", description="Opaque voter identifier (NIK)")
    candidate: str = Field("", description="Registered candidate name")

    @field_validator("voter_id", "candidate", mode="before")
    @classmethod
    def null_as_blank(cls, v: Any) -> Any:
        return "" if v is None else v


class VoteResponse(BaseModel):
    candidate: str
    block_index: int
    hash: str
    message: str


class ResultEntry(BaseModel):
    candidate: str
    votes: int


class BlockResponse(BaseModel):
    index: int
    timestamp: int
    payload: Any
    previous_hash: str
    hash: str


class IntegrityResponse(BaseModel):
    valid: bool
    blocks_checked: int
    violations: list[dict[str, Any]] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    detail: str
    code: str
