from enum import Enum

class ContactKind(str, Enum):
    """How a contact path reaches the company"""
    EMAIL = "email"
    FORM = "form"
    AGENCY = "agency"
    PRESS = "press"

class PathKind(str, Enum):
    """Ranked outreach path category"""
    NAMED_EMAIL = "named_email"
    INBOX = "inbox"
    AGENCY = "agency"
    FORM = "form"
    EXTERNAL_SEARCH = "external_search_fallback"

class CompanyStatus(str, Enum):
    """Company qualification status"""
    UNQUALIFIED = "unqualified"
    QUALIFIED = "qualified"

class OutreachStatus(str, Enum):
    """Outreach draft lifecycle"""
    DRAFT = "draft"
    SENT = "sent"
    REPLIED = "replied"

class FollowupStatus(str, Enum):
    """Follow-up message lifecycle"""
    PENDING = "pending"
    SENT = "sent"
    SKIPPED = "skipped"
