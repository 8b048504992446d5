import pytest
import requests

from conftest import FakeResponse, FakeSession
from tasks.fetcher import Fetcher
from utils.rate_limiter import RateLimiter


FAILURE_CASES = [
    {
        "id": "http_404",
        "route": FakeResponse(status_code=404),
        "error": "HTTP 404",
    },
    {
        "id": "http_500",
        "route": FakeResponse(text="<p>oops</p>", status_code=500),
        "error": "HTTP 500",
    },
    {
        "id": "timeout",
        "route": requests.Timeout("read timed out"),
        "error": "Timeout after 10s",
    },
    {
        "id": "connection_error",
        "route": requests.ConnectionError("Name or service not known"),
        "error": "Name or service not known",
    },
    {
        "id": "malformed_markup",
        "route": "<p>About</p><![foo bar",
        "error": "Unparseable markup",
    },
]


class TestFetcher:

    def test_success_parses_text_and_links(self, fake_session, fetcher):
        fake_session.routes['https://acme.test/about'] = (
            "<body><script>x()</script><h1>About   us</h1><a href='/team'>Team</a></body>"
        )
        page = fetcher.fetch('https://acme.test/about')

        assert page.success
        assert page.path == '/about'
        assert page.text == 'About us Team'
        assert page.links == ('/team',)
        assert page.error is None

    def test_path_override(self, fake_session, fetcher):
        fake_session.routes['https://acme.test'] = "<p>home</p>"
        page = fetcher.fetch('https://acme.test', path='/')
        assert page.path == '/'

    def test_default_path_for_bare_host(self, fake_session, fetcher):
        fake_session.routes['https://acme.test'] = "<p>home</p>"
        assert fetcher.fetch('https://acme.test').path == '/'

    @pytest.mark.parametrize("test_case", FAILURE_CASES, ids=lambda x: x["id"])
    def test_failures_never_raise(self, fake_session, fetcher, test_case):
        fake_session.routes['https://acme.test/x'] = test_case["route"]
        page = fetcher.fetch('https://acme.test/x')

        assert not page.success
        assert page.error == test_case["error"], f"Expected '{test_case['error']}', got '{page.error}'"
        assert page.text == ''
        assert page.links == ()

    def test_request_options(self, fake_session, fetcher):
        fake_session.routes['https://acme.test'] = "<p>home</p>"
        fetcher.fetch('https://acme.test')

        call = fake_session.calls[0]
        assert call['timeout'] == 10
        assert call['allow_redirects'] is True
        assert call['verify'] is True
        assert 'SponsorPathfinder' in call['headers']['User-Agent']
        assert 'text/html' in call['headers']['Accept']

    def test_every_request_waits_on_limiter(self, fake_session):
        waits = []

        class CountingLimiter(RateLimiter):
            def wait(self):
                waits.append(1)
                return 0.0

        fetcher = Fetcher(CountingLimiter(), session=fake_session)
        for path in ('/a', '/b', '/c'):
            fetcher.fetch(f'https://acme.test{path}')

        assert len(waits) == 3
        assert fetcher.request_count == 3


class TestInsecureRetry:

    def _ssl_then_ok_session(self):
        class SSLSession(FakeSession):
            def get(self, url, **kwargs):
                if kwargs.get('verify', True):
                    self.calls.append({'url': url, **kwargs})
                    raise requests.exceptions.SSLError("certificate verify failed")
                return super().get(url, **kwargs)

        return SSLSession({'https://acme.test': "<p>insecure home</p>"})

    def test_ssl_failure_is_final_by_default(self, no_wait_limiter):
        session = self._ssl_then_ok_session()
        fetcher = Fetcher(no_wait_limiter, session=session, allow_insecure_ssl=False)
        page = fetcher.fetch('https://acme.test')

        assert not page.success
        assert 'certificate verify failed' in page.error
        assert fetcher.request_count == 1

    def test_ssl_failure_retried_when_allowed(self, no_wait_limiter):
        session = self._ssl_then_ok_session()
        fetcher = Fetcher(no_wait_limiter, session=session, allow_insecure_ssl=True)
        page = fetcher.fetch('https://acme.test')

        assert page.success
        assert page.text == 'insecure home'
        assert fetcher.request_count == 2
        assert session.calls[-1]['verify'] is False
