import pytest

from models.extraction_results import OutreachDraft, FollowupMessage
from models.schemas import Signal, Contact, Person, RankedPath, PathSelection
from repositories import CompanyRepository, QualificationRepository, OutreachRepository

SIGNALS = [
    Signal(category='sport', text='[/] ...football...', weight=15, source_url='https://acme.test/'),
    Signal(category='youth', text='[/] ...youth...', weight=20, source_url='https://acme.test/'),
]
CONTACTS = [
    Contact(kind='email', value='partnerships@acme.test', confidence=100, email_type='partnerships'),
    Contact(kind='form', value='https://acme.test/contact', confidence=40),
    Contact(kind='email', value='jane@acme.test', confidence=20, email_type='general'),
]
PEOPLE = [Person(name='Jane Doe', job_title='Head of Partnerships', department='partnerships')]


@pytest.fixture
def company_id(session_factory):
    with CompanyRepository.transaction(session_factory) as companies:
        return companies.add('Acme', website_url='https://acme.test', region='denmark').id


class TestCompanyRepository:

    def test_add_and_get(self, session_factory, company_id):
        with CompanyRepository.transaction(session_factory) as companies:
            company = companies.get(company_id)
            assert company.name == 'Acme'
            assert company.status == 'unqualified'
            assert company.qualification_score == 0
            assert companies.get_by_name('acme').id == company_id
            assert companies.get(company_id + 100) is None

    @pytest.mark.parametrize("score,status", [(0, 'unqualified'), (49, 'unqualified'), (50, 'qualified'), (115, 'qualified')])
    def test_update_qualification_threshold(self, session_factory, company_id, score, status):
        with CompanyRepository.transaction(session_factory) as companies:
            companies.update_qualification(companies.get(company_id), score, threshold=50)

        with CompanyRepository.transaction(session_factory) as companies:
            company = companies.get(company_id)
            assert (company.qualification_score, company.status) == (score, status)

    def test_qualified_ordering(self, session_factory):
        with CompanyRepository.transaction(session_factory) as companies:
            for name, score in [('Low', 60), ('High', 90), ('Out', 10)]:
                companies.update_qualification(companies.add(name), score, threshold=50)

        with CompanyRepository.transaction(session_factory) as companies:
            assert [c.name for c in companies.get_qualified()] == ['High', 'Low']
            assert [c.name for c in companies.top_qualified(1)] == ['High']
            assert [c.name for c in companies.get_unqualified()] == ['Out']

    def test_transaction_rolls_back_on_error(self, session_factory):
        with pytest.raises(RuntimeError):
            with CompanyRepository.transaction(session_factory) as companies:
                companies.add('Ghost')
                raise RuntimeError("boom")

        with CompanyRepository.transaction(session_factory) as companies:
            assert companies.get_by_name('Ghost') is None


class TestQualificationRepository:

    def test_round_trip(self, session_factory, company_id):
        with QualificationRepository.transaction(session_factory) as repo:
            repo.replace_signals(company_id, SIGNALS)
            repo.replace_contacts(company_id, CONTACTS)
            repo.replace_people(company_id, PEOPLE)

        with QualificationRepository.transaction(session_factory) as repo:
            assert repo.get_signals(company_id) == SIGNALS
            assert [c.value for c in repo.get_contacts(company_id)] == [c.value for c in CONTACTS]
            assert repo.get_people(company_id)[0].name == 'Jane Doe'
            assert repo.get_primary_contact(company_id).value == 'partnerships@acme.test'

    def test_replace_does_not_append(self, session_factory, company_id):
        for _ in range(3):
            with QualificationRepository.transaction(session_factory) as repo:
                repo.replace_signals(company_id, SIGNALS)
                repo.replace_contacts(company_id, CONTACTS)
                repo.replace_people(company_id, PEOPLE)

        with QualificationRepository.transaction(session_factory) as repo:
            assert len(repo.get_signals(company_id)) == len(SIGNALS)
            assert len(repo.get_contacts(company_id)) == len(CONTACTS)
            assert len(repo.get_people(company_id)) == len(PEOPLE)

    def test_contacts_ordered_by_confidence(self, session_factory, company_id):
        unordered = [CONTACTS[2], CONTACTS[0], CONTACTS[1]]
        with QualificationRepository.transaction(session_factory) as repo:
            repo.replace_contacts(company_id, unordered)
            confidences = [c.confidence for c in repo.get_contacts(company_id)]
        assert confidences == [100, 40, 20]

    def test_mark_primary(self, session_factory, company_id):
        selection = PathSelection(primary=RankedPath(kind='named_email', value='jane@acme.test', score=100))
        with QualificationRepository.transaction(session_factory) as repo:
            repo.replace_contacts(company_id, CONTACTS)
            repo.mark_primary(company_id, selection)

        with QualificationRepository.transaction(session_factory) as repo:
            assert repo.get_primary_contact(company_id).value == 'jane@acme.test'
            assert repo.get_contact_row(company_id, 'partnerships@acme.test').is_primary is False

    def test_mark_primary_external_search_clears_flags(self, session_factory, company_id):
        selection = PathSelection(primary=RankedPath(kind='external_search_fallback',
                                                     value='https://www.linkedin.com/search/results/people/?x',
                                                     score=25))
        with QualificationRepository.transaction(session_factory) as repo:
            repo.replace_contacts(company_id, CONTACTS)
            repo.mark_primary(company_id, selection)

        with QualificationRepository.transaction(session_factory) as repo:
            assert repo.get_primary_contact(company_id) is None


class TestOutreachRepository:

    def test_save_and_read(self, session_factory, company_id):
        draft = OutreachDraft(
            subject='Street football x Acme',
            body='Hi Jane...',
            followups=[
                FollowupMessage(day_offset=10, message='Last one'),
                FollowupMessage(day_offset=3, message='Bump'),
                FollowupMessage(day_offset=7, message='News'),
            ],
        )
        with OutreachRepository.transaction(session_factory) as repo:
            outreach_id = repo.save_outreach(company_id, draft).id

        with OutreachRepository.transaction(session_factory) as repo:
            stored = repo.get_outreach(outreach_id)
            assert stored['subject'] == 'Street football x Acme'
            assert stored['status'] == 'draft'
            assert [f['day_offset'] for f in stored['followups']] == [3, 7, 10]
            assert repo.get_outreach(outreach_id + 1) is None
