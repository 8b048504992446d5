from typing import List
from models.database import SponsorshipSignal, ContactPath, PersonRecord
from models.enums import PathKind
from models.schemas import Signal, Contact, Person, PathSelection
from .base import BaseRepository

class QualificationRepository(BaseRepository):
    """Per-run signals, contact paths and people for one company.

    Each replace_* call deletes the company's previous rows before inserting,
    so a re-run fully replaces the earlier result instead of appending to it.
    """

    # Row <-> dataclass conversion
    _to_signal = staticmethod(lambda row: Signal(
        category=row.signal_type, text=row.signal_text or '', weight=row.weight, source_url=row.source_url
    ))
    _to_contact = staticmethod(lambda row: Contact(
        kind=row.path_type, value=row.value, confidence=row.confidence_score,
        source_url=row.source_url, email_type=row.email_type
    ))
    _to_person = staticmethod(lambda row: Person(
        name=row.name, job_title=row.job_title, department=row.department,
        source_url=row.source_url, search_url=row.search_url
    ))

    # Queries
    get_signals = lambda self, company_id: [
        self._to_signal(row) for row in self.session.query(SponsorshipSignal)
        .filter_by(company_id=company_id).order_by(SponsorshipSignal.id).all()
    ]

    get_contacts = lambda self, company_id: [
        self._to_contact(row) for row in self.session.query(ContactPath)
        .filter_by(company_id=company_id)
        .order_by(ContactPath.confidence_score.desc(), ContactPath.id)
        .all()
    ]

    get_people = lambda self, company_id: [
        self._to_person(row) for row in self.session.query(PersonRecord)
        .filter_by(company_id=company_id).order_by(PersonRecord.id).all()
    ]

    get_primary_contact = lambda self, company_id: (
        self.session.query(ContactPath).filter_by(company_id=company_id, is_primary=True).first()
    )

    get_contact_row = lambda self, company_id, value: (
        self.session.query(ContactPath).filter_by(company_id=company_id, value=value).first()
    )

    get_person_row = lambda self, company_id, name: (
        self.session.query(PersonRecord).filter_by(company_id=company_id, name=name).first()
    )

    # Replacements
    def replace_signals(self, company_id: int, signals: List[Signal]) -> List[SponsorshipSignal]:
        """Delete existing signals for the company and insert the new set"""
        self.session.query(SponsorshipSignal).filter_by(company_id=company_id).delete()
        rows = [
            SponsorshipSignal(company_id=company_id, signal_type=s.category, signal_text=s.text,
                              weight=s.weight, source_url=s.source_url)
            for s in signals
        ]
        self.session.add_all(rows)
        self.session.flush()
        return rows

    def replace_contacts(self, company_id: int, contacts: List[Contact]) -> List[ContactPath]:
        """Delete existing contact paths and insert the new set; first contact starts as primary"""
        self.session.query(ContactPath).filter_by(company_id=company_id).delete()
        rows = [
            ContactPath(company_id=company_id, path_type=c.kind, value=c.value, email_type=c.email_type,
                        confidence_score=c.confidence, source_url=c.source_url, is_primary=(idx == 0))
            for idx, c in enumerate(contacts)
        ]
        self.session.add_all(rows)
        self.session.flush()
        return rows

    def replace_people(self, company_id: int, people: List[Person]) -> List[PersonRecord]:
        """Delete existing people and insert the new set"""
        self.session.query(PersonRecord).filter_by(company_id=company_id).delete()
        rows = [
            PersonRecord(company_id=company_id, name=p.name, job_title=p.job_title, department=p.department,
                         source_url=p.source_url, search_url=p.search_url)
            for p in people
        ]
        self.session.add_all(rows)
        self.session.flush()
        return rows

    def mark_primary(self, company_id: int, selection: PathSelection) -> None:
        """Flag the stored contact matching the selected primary path"""
        self.session.query(ContactPath).filter_by(company_id=company_id).update({'is_primary': False})
        if selection.primary.kind != PathKind.EXTERNAL_SEARCH.value:
            (self.session.query(ContactPath)
             .filter_by(company_id=company_id, value=selection.primary.value)
             .update({'is_primary': True}))
        self.session.flush()
