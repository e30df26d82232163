# anymessage/integrations/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class IntegrationSaveRequest(BaseModel):
    """Request body for saving a team's integration credentials."""
    name: str = Field(description="Integration name, unique within the team (e.g., 'slack').")
    authentication: Dict[str, Any] = Field(
        description="Provider authentication payload. Stored encrypted."
    )
    providers: List[str] = Field(
        default_factory=list,
        description="Identifiers of the providers this integration serves."
    )


class Integration(BaseModel):
    """Immutable snapshot of an integration row. ``id`` is None until first saved."""
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    team_id: int
    name: str
    providers: List[str] = Field(default_factory=list)
    authentication: Optional[str] = None  # Fernet-encrypted JSON
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
