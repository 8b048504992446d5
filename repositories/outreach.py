from typing import Dict, Optional
from models.database import Outreach, Followup
from models.enums import OutreachStatus, FollowupStatus
from models.extraction_results import OutreachDraft
from .base import BaseRepository

class OutreachRepository(BaseRepository):
    """Outreach drafts and follow-up sequences"""

    # Queries
    get = lambda self, outreach_id: self.session.query(Outreach).filter_by(id=outreach_id).first()

    # Saves
    def save_outreach(self, company_id: int, draft: OutreachDraft,
                      contact_path_id: Optional[int] = None, person_id: Optional[int] = None) -> Outreach:
        """Save draft with its follow-ups and flush to get ID"""
        outreach = Outreach(
            company_id=company_id,
            contact_path_id=contact_path_id,
            person_id=person_id,
            subject=draft.subject,
            body=draft.body,
            status=OutreachStatus.DRAFT.value,
            followups=[
                Followup(day_offset=f.day_offset, message=f.message, status=FollowupStatus.PENDING.value)
                for f in draft.followups
            ],
        )
        self.session.add(outreach)
        self.session.flush()
        return outreach

    def get_outreach(self, outreach_id: int) -> Optional[Dict]:
        """Outreach as a plain dict, follow-ups ordered by day offset"""
        outreach = self.get(outreach_id)
        if not outreach:
            return None
        return {
            'subject': outreach.subject,
            'body': outreach.body,
            'status': outreach.status,
            'followups': [{'day_offset': f.day_offset, 'message': f.message} for f in outreach.followups],
        }
