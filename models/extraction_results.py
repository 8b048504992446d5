from pydantic import BaseModel, Field
from typing import Optional

class OutreachEmail(BaseModel):
    """First-touch sponsorship email written by the LLM"""
    subject: str
    body: str

class FollowupMessage(BaseModel):
    """Single follow-up, sent day_offset days after the first email"""
    day_offset: int = Field(..., alias='dayOffset', ge=0)
    message: str

    model_config = {'populate_by_name': True}

class FollowupSequence(BaseModel):
    """Follow-up messages returned by the LLM"""
    followups: list[FollowupMessage] = []

class OutreachDraft(BaseModel):
    """Complete outreach package for one company"""
    subject: str
    body: str
    followups: list[FollowupMessage] = []
    contact_value: Optional[str] = None
