from typing import Dict, List, Optional

from models.enums import PathKind
from repositories import CompanyRepository, QualificationRepository, OutreachRepository
from services.outreach import generate_outreach
from tasks.path_selection import PathSelector, path_kind_label


def run_company_outreach(company_id: int, session_factory, generator=generate_outreach,
                         region: Optional[str] = None) -> Dict:
    """
    Draft and store outreach for a qualified company's primary path.

    Raises:
        ValueError: company_id does not exist
    """
    with OutreachRepository.transaction(session_factory) as outreach:
        company = CompanyRepository(outreach.session).get(company_id)
        if not company:
            raise ValueError(f"Company {company_id} not found")

        qualification = QualificationRepository(outreach.session)
        selection = PathSelector(qualification).select(company_id, company.name, region or company.region)
        primary = selection.primary
        print(f"  [OUTREACH] {company.name}: {path_kind_label(primary.kind)} -> {primary.value}")

        draft = generator(company.name, qualification.get_signals(company_id), primary)

        contact_row = (qualification.get_contact_row(company_id, primary.value)
                       if primary.kind != PathKind.EXTERNAL_SEARCH.value else None)
        person_row = (qualification.get_person_row(company_id, primary.person_name)
                      if primary.person_name else None)

        saved = outreach.save_outreach(company_id, draft,
                                       contact_path_id=contact_row.id if contact_row else None,
                                       person_id=person_row.id if person_row else None)

        return {
            'company_id': company_id,
            'outreach_id': saved.id,
            'path_kind': primary.kind,
            'contact': primary.value,
            'subject': draft.subject,
            'followups': len(draft.followups),
        }


def _try_outreach(company_id: int, session_factory, **kwargs) -> Optional[Dict]:
    """Safely run outreach generation with error handling"""
    try:
        return run_company_outreach(company_id, session_factory, **kwargs)
    except Exception as e:
        print(f"Failed to generate outreach for company {company_id}: {str(e)}")
        return None


run_bulk_outreach = lambda company_ids, session_factory, **kwargs: [
    result for result in (_try_outreach(c_id, session_factory, **kwargs) for c_id in company_ids) if result
]


def top_qualified_company_ids(session_factory, count: int = 3) -> List[int]:
    """Highest scoring qualified companies"""
    with CompanyRepository.transaction(session_factory) as companies:
        return [company.id for company in companies.top_qualified(count)]
