"""API request and response schemas."""

from pydantic import BaseModel, Field


class WeatherResponse(BaseModel):
    """Weather API response."""

    description: str = Field(..., description="Weather description, e.g. 'clear sky'")


class WeatherHealthResponse(BaseModel):
    """Weather service health response."""

    status: str = Field(..., description="Service status")
    databaseHealthy: bool = Field(..., description="Weather store reachable")  # noqa: N815


class KeyValidationResponse(BaseModel):
    """API key validation result."""

    isValid: bool = Field(..., description="Whether the API key is registered")  # noqa: N815


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str = Field(..., description="Result message")


class ErrorDetail(BaseModel):
    """Error detail."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Error response."""

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Health status")


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    status: str = Field(..., description="Readiness status")
    checks: dict[str, str] = Field(default_factory=dict, description="Component checks")
