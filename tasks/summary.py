from typing import Dict, List, Optional

from models.schemas import PageResult, Signal, Contact, Person, PathSelection

_path_summary = lambda path: None if path is None else {
    'kind': path.kind, 'value': path.value, 'score': path.score,
    'person_name': path.person_name, 'person_title': path.person_title,
}


def build_summary(company_id: int, status: str, pages: Dict[str, PageResult], signals: List[Signal],
                  score: int, qualified: bool, contacts: List[Contact], people: List[Person],
                  selection: Optional[PathSelection]) -> Dict:
    """
    Build per-company qualification summary.

    Returns:
        Summary dict with counts and the chosen paths
    """
    return {
        'company_id': company_id,
        'status': status,
        'pages_fetched': sum(1 for page in pages.values() if page.success),
        'signals': len(signals),
        'score': score,
        'qualified': qualified,
        'contacts': len(contacts),
        'people': len(people),
        'primary_path': _path_summary(selection.primary if selection else None),
        'backup_path': _path_summary(selection.backup if selection else None),
        'errors': sum(1 for page in pages.values() if not page.success),
    }


def error_summary(company_id: int, status: str = 'error') -> Dict:
    """Summary for a company whose run did not complete"""
    return {
        'company_id': company_id, 'status': status, 'pages_fetched': 0, 'signals': 0,
        'score': 0, 'qualified': False, 'contacts': 0, 'people': 0,
        'primary_path': None, 'backup_path': None, 'errors': 1 if status == 'error' else 0,
    }
