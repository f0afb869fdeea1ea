"""
FakeStack Backend — Shared Schema Base and Common Responses
=============================================================

What:  The WireModel base used by every request/response schema, plus the
       error and health response models.
How:   Fields are declared in snake_case and exchanged on the wire in
       camelCase (askedBy, askDateTime, upVotes, ...). Identifiers are
       exposed as `_id`. populate_by_name lets code build models by field
       name while FastAPI validates and serializes by alias.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    """
    What:  JSON body of 404/500 responses.

    Fields:
        error: Machine-readable error code (e.g., "not_found", "server_error")
        message: Human-readable description
        request_id: Correlation ID for tracing this error in server logs

    400 responses are plain text ("Invalid user body") and do not use this model.
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
