"""Login and session schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from bookshelf.api.schemas.books import Book


class LoginRequest(BaseModel):
    """Username/password login form."""

    username: str = Field(..., min_length=1, max_length=200)
    password: str = Field(..., min_length=1, max_length=200)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "username": "admin",
                    "password": "1234",
                }
            ]
        }
    }


class SessionResponse(BaseModel):
    """Public view of the session. The token itself is never exposed."""

    authenticated: bool = Field(description="Whether a credential token is held")
    status_message: Optional[str] = Field(default=None, description="Outcome of the last login attempt")


class HomeResponse(BaseModel):
    """Landing view: session plus the most recent searches."""

    session: SessionResponse
    last_searches: list[Book] = Field(default_factory=list)
