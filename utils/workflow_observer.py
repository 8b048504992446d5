from typing import List, Dict
from models.database import Company
from models.schemas import PageResult, Signal, Contact, Person, PathSelection
from tasks.path_selection import path_kind_label


class QualificationObserver:
    """Base observer for qualification workflow events"""

    def on_company_start(self, company: Company):
        pass

    def on_crawl_complete(self, pages: Dict[str, PageResult]):
        pass

    def on_signals(self, signals: List[Signal], score: int, qualified: bool):
        pass

    def on_contacts(self, contacts: List[Contact]):
        pass

    def on_people(self, people: List[Person]):
        pass

    def on_paths_selected(self, selection: PathSelection):
        pass

    def on_complete(self, summary: Dict):
        pass


class ConsoleObserver(QualificationObserver):
    """Console output observer for the qualification workflow"""

    def on_company_start(self, company: Company):
        print(f"\n{'='*60}")
        print(f"Qualifying {company.name} ({company.website_url})")
        print(f"{'='*60}")

    def on_crawl_complete(self, pages: Dict[str, PageResult]):
        fetched = [path for path, page in pages.items() if page.success]
        print(f"\nPages fetched: {len(fetched)}")
        for path in fetched:
            print(f"  {path}")
        failed = [page for page in pages.values() if not page.success]
        for page in failed:
            print(f"  X {page.path}: {page.error}")

    def on_signals(self, signals: List[Signal], score: int, qualified: bool):
        print(f"\nSignals ({len(signals)}):")
        for signal in signals:
            print(f"  + {signal.category} ({signal.weight}): {signal.text[:100]}")
        print(f"Score: {score} -> {'QUALIFIED' if qualified else 'not qualified'}")

    def on_contacts(self, contacts: List[Contact]):
        print(f"\nContacts ({len(contacts)}):")
        for contact in contacts[:5]:
            print(f"  {contact.kind}: {contact.value} ({contact.confidence})")

    def on_people(self, people: List[Person]):
        print(f"\nPeople ({len(people)}):")
        for person in people[:5]:
            print(f"  {person.name} - {person.job_title or 'Unknown title'}")

    def on_paths_selected(self, selection: PathSelection):
        primary = selection.primary
        print(f"\nPrimary path: {path_kind_label(primary.kind)} -> {primary.value}")
        if selection.backup:
            print(f"Backup path: {path_kind_label(selection.backup.kind)} -> {selection.backup.value}")

    def on_complete(self, summary: Dict):
        print(f"\n{'='*60}")
        print("Qualification complete")
        print(f"{'='*60}")
        print(f"  Status: {summary['status']}")
        print(f"  Pages fetched: {summary['pages_fetched']}")
        print(f"  Signals: {summary['signals']} (score {summary['score']})")
        print(f"  Contacts: {summary['contacts']}")
        print(f"  People: {summary['people']}")
        print(f"  Errors: {summary['errors']}")


class SilentObserver(QualificationObserver):
    """No-op observer for silent execution"""
    pass
