import pytest
from pydantic import ValidationError

from models.extraction_results import OutreachEmail, FollowupSequence, FollowupMessage
from models.schemas import Signal, RankedPath
from services.outreach import generate_outreach, load_event_context, DEFAULT_EVENT_CONTEXT
from utils.debug_logger import DebugLogger
from utils.llm_client import LLMClient

SIGNALS = [
    Signal(category='sport', text='[/] ...grassroots football...', weight=15),
    Signal(category='youth', text='[/about] ...young people...', weight=20),
]
NAMED_PATH = RankedPath(kind='named_email', value='jane@acme.test', score=100,
                        person_name='Jane Doe', person_title='Head of Brand')
INBOX_PATH = RankedPath(kind='inbox', value='partnerships@acme.test', score=75)


class StubClient:
    """Answers template calls with canned JSON, validated like the real client"""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def call(self, template_name, response_model, **variables):
        self.calls.append((template_name, variables))
        return response_model.model_validate(self.responses[template_name])


EMAIL_RESPONSE = {'subject': 'Street football x Acme', 'body': 'Hi Jane, ...'}


class TestGenerateOutreach:

    def test_email_and_sorted_followups(self):
        client = StubClient({
            'outreach_email': EMAIL_RESPONSE,
            'outreach_followups': {'followups': [
                {'dayOffset': 10, 'message': 'Last try'},
                {'dayOffset': 3, 'message': 'Bump'},
            ]},
        })

        draft = generate_outreach('Acme', SIGNALS, NAMED_PATH, client=client)

        assert draft.subject == 'Street football x Acme'
        assert draft.contact_value == 'jane@acme.test'
        assert [f.day_offset for f in draft.followups] == [3, 10]

    def test_default_followups_when_model_returns_none(self):
        client = StubClient({'outreach_email': EMAIL_RESPONSE, 'outreach_followups': {'followups': []}})
        draft = generate_outreach('Acme', SIGNALS, INBOX_PATH, client=client)
        assert [f.day_offset for f in draft.followups] == [3, 7, 10]

    def test_template_variables(self):
        client = StubClient({'outreach_email': EMAIL_RESPONSE, 'outreach_followups': {}})
        generate_outreach('Acme', SIGNALS, NAMED_PATH, client=client)

        (email_template, email_vars), (followup_template, followup_vars) = client.calls
        assert email_template == 'outreach_email'
        assert email_vars['person_name'] == 'Jane Doe'
        assert email_vars['path_kind'] == 'named_email'
        assert email_vars['signals'] == SIGNALS
        assert followup_template == 'outreach_followups'
        assert followup_vars['subject'] == 'Street football x Acme'

    def test_llm_calls_logged(self, tmp_path):
        client = StubClient({'outreach_email': EMAIL_RESPONSE, 'outreach_followups': {}})
        logger = DebugLogger(base_dir=str(tmp_path))

        generate_outreach('Acme', SIGNALS, NAMED_PATH, client=client, debug_logger=logger)

        names = sorted(p.name for p in tmp_path.rglob('*_llm.json'))
        assert len(names) == 2
        assert names[0].startswith('Acme_outreach_email_')
        assert names[1].startswith('Acme_outreach_followups_')

    def test_malformed_model_output_raises(self):
        client = StubClient({'outreach_email': {'subject': 'No body'}, 'outreach_followups': {}})
        with pytest.raises(ValidationError):
            generate_outreach('Acme', SIGNALS, INBOX_PATH, client=client)


class TestEventContext:

    def test_read_from_file(self, tmp_path):
        context_file = tmp_path / 'event.md'
        context_file.write_text('  A panna tournament in Copenhagen.\n', encoding='utf-8')
        assert load_event_context(context_file) == 'A panna tournament in Copenhagen.'

    def test_missing_file_uses_default(self, tmp_path):
        assert load_event_context(tmp_path / 'missing.md') == DEFAULT_EVENT_CONTEXT

    def test_empty_file_uses_default(self, tmp_path):
        context_file = tmp_path / 'event.md'
        context_file.write_text('', encoding='utf-8')
        assert load_event_context(context_file) == DEFAULT_EVENT_CONTEXT


class TestPromptTemplates:

    @pytest.fixture
    def client(self):
        return LLMClient(provider='ollama')

    def test_email_prompt_for_named_person(self, client):
        system, user = client.render('outreach_email', event_context='Panna World Championship',
                                     company_name='Acme', signals=SIGNALS, person_name='Jane Doe',
                                     person_title='Head of Brand', path_kind='named_email')

        assert 'Panna World Championship' in system
        assert '---USER_PROMPT---' not in system + user
        assert 'Company: Acme' in user
        assert 'Contact: Jane Doe, Head of Brand' in user
        assert '- sport: [/] ...grassroots football...' in user

    def test_email_prompt_without_person_or_signals(self, client):
        _, user = client.render('outreach_email', event_context='', company_name='Acme', signals=[],
                                person_name=None, person_title=None, path_kind='inbox')

        assert 'Contact type: inbox' in user
        assert 'No specific signals found' in user

    def test_followup_prompt(self, client):
        system, user = client.render('outreach_followups', company_name='Acme',
                                     subject='Street football x Acme', body='Hi Jane')
        assert 'dayOffset' in system
        assert 'Original email subject: Street football x Acme' in user

    @pytest.mark.parametrize("rendered,expected", [
        ("system\n---USER_PROMPT---\nuser", ("system", "user")),
        ("only system", ("only system", "")),
        ("a---USER_PROMPT---b---USER_PROMPT---c", ("a", "b---USER_PROMPT---c")),
    ], ids=['both_parts', 'no_separator', 'split_once'])
    def test_split_prompts(self, client, rendered, expected):
        assert client.split_prompts(rendered) == expected

    def test_unsupported_provider(self):
        with pytest.raises(ValueError):
            LLMClient(provider='nope')


def test_followup_alias_and_field_name():
    assert FollowupMessage(dayOffset=3, message='a') == FollowupMessage(day_offset=3, message='a')
    assert FollowupSequence.model_validate({}).followups == []
    with pytest.raises(ValidationError):
        OutreachEmail.model_validate({'subject': 'x'})
