from typing import Dict, Optional
from pydantic import BaseModel


class PromptRequest(BaseModel):
    # optional so a missing prompt maps to our own 400 instead of a 422
    prompt: Optional[str] = None


class ProviderResult(BaseModel):
    """Outcome of a single call to one provider."""
    success: bool
    provider: str
    data: Optional[str] = None
    error: Optional[str] = None


class AggregateOutcome(BaseModel):
    success: bool
    provider: str  # "None" when every provider failed
    data: Optional[str] = None
    error: Optional[str] = None


class HealthReport(BaseModel):
    server: str = "healthy"
    timestamp: str
    providers: Dict[str, str] = {}  # provider name -> healthy | unhealthy
