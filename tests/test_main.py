from main import add_company, company_ids_by_name, print_outreach_summary
from models.extraction_results import OutreachDraft
from repositories import OutreachRepository
from services.outreach import DEFAULT_FOLLOWUPS


class TestCompanyLookup:

    def test_names_resolved_case_insensitively(self, session_factory):
        acme_id = add_company(session_factory, 'Acme', 'acme.test')
        nordlys_id = add_company(session_factory, 'Nordlys Cycles', 'nordlys.test')

        assert company_ids_by_name(session_factory, ['nordlys cycles', 'ACME']) == [nordlys_id, acme_id]

    def test_unknown_name_reported_and_skipped(self, session_factory, capsys):
        acme_id = add_company(session_factory, 'Acme', 'acme.test')

        assert company_ids_by_name(session_factory, ['Missing Co', 'Acme']) == [acme_id]
        assert "No company named 'Missing Co'" in capsys.readouterr().out


class TestOutreachSummary:

    def test_drafts_read_back_from_storage(self, session_factory, capsys):
        company_id = add_company(session_factory, 'Acme', 'acme.test')
        draft = OutreachDraft(subject='Acme x street football', body='Hi Jane',
                              followups=list(reversed(DEFAULT_FOLLOWUPS)))
        with OutreachRepository.transaction(session_factory) as repo:
            outreach_id = repo.save_outreach(company_id, draft).id

        results = [{'company_id': company_id, 'outreach_id': outreach_id, 'contact': 'jane.doe@acme.test'}]
        print_outreach_summary(session_factory, results)

        out = capsys.readouterr().out
        assert (f'Company {company_id}: "Acme x street football" -> jane.doe@acme.test '
                '(draft, follow-ups on days 3, 7, 10)') in out

    def test_draft_without_followups(self, session_factory, capsys):
        company_id = add_company(session_factory, 'Acme', 'acme.test')
        with OutreachRepository.transaction(session_factory) as repo:
            outreach_id = repo.save_outreach(company_id, OutreachDraft(subject='Hello', body='Hi')).id

        print_outreach_summary(session_factory, [{'company_id': company_id, 'outreach_id': outreach_id,
                                                  'contact': 'info@acme.test'}])

        assert '(draft, follow-ups on days none)' in capsys.readouterr().out
