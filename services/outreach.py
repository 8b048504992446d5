"""
Thin service layer for LLM-written outreach.

The first email and its follow-up sequence are two template calls on the
shared LLM client; the event description comes from EVENT_CONTEXT_FILE.
"""

from pathlib import Path
from typing import List, Optional

from config import EVENT_CONTEXT_FILE, DEBUG_LOGS
from models.extraction_results import OutreachEmail, FollowupMessage, FollowupSequence, OutreachDraft
from models.schemas import Signal, RankedPath
from utils.debug_logger import get_logger
from utils.llm_client import LLMClient, get_client

DEFAULT_EVENT_CONTEXT = (
    "The Panna World Championship is the leading global event in street football (panna), "
    "a discipline rooted in urban culture, creativity and 1v1 expression. It brings together "
    "the world's best street football players and targets young, mobile-first audiences "
    "interested in street culture, hip-hop, fashion and sports."
)

DEFAULT_FOLLOWUPS = [
    FollowupMessage(day_offset=3, message='Following up on my previous email...'),
    FollowupMessage(day_offset=7, message='Wanted to share some updates...'),
    FollowupMessage(day_offset=10, message='Final follow-up...'),
]


def load_event_context(path: Path = EVENT_CONTEXT_FILE) -> str:
    """Event description from disk, or the built-in one when the file is missing"""
    try:
        return Path(path).read_text(encoding='utf-8').strip() or DEFAULT_EVENT_CONTEXT
    except OSError:
        return DEFAULT_EVENT_CONTEXT


# First-touch email
write_email = lambda client, company_name, signals, path, event_context: client.call(
    'outreach_email',
    OutreachEmail,
    event_context=event_context,
    company_name=company_name,
    signals=signals,
    person_name=path.person_name,
    person_title=path.person_title,
    path_kind=path.kind
)

# Follow-up sequence
write_followups = lambda client, company_name, email: client.call(
    'outreach_followups',
    FollowupSequence,
    company_name=company_name,
    subject=email.subject,
    body=email.body
)


def generate_outreach(company_name: str, signals: List[Signal], path: RankedPath,
                      client: Optional[LLMClient] = None, debug_logger=None) -> OutreachDraft:
    """
    Write a sponsorship email plus follow-ups for the chosen contact path.

    Raises:
        pydantic.ValidationError: model output does not match the expected shape
    """
    client = client or get_client()
    debug_logger = debug_logger or (get_logger() if DEBUG_LOGS else None)

    email = write_email(client, company_name, signals, path, load_event_context())
    sequence = write_followups(client, company_name, email)
    followups = sequence.followups or list(DEFAULT_FOLLOWUPS)

    if debug_logger:
        debug_logger.log_llm_call(company_name, 'outreach_email',
                                  {'path_kind': path.kind, 'person_name': path.person_name,
                                   'signals': [s.category for s in signals]},
                                  email.model_dump())
        debug_logger.log_llm_call(company_name, 'outreach_followups', {'subject': email.subject},
                                  sequence.model_dump(by_alias=True))

    return OutreachDraft(subject=email.subject, body=email.body,
                         followups=sorted(followups, key=lambda f: f.day_offset),
                         contact_value=path.value)
