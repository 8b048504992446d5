"""
Shared fakes: an in-memory HTTP session, a no-wait rate limiter and a
throwaway SQLite database per test.
"""

import pytest
import requests

from models.database import make_engine, make_session_factory, init_db
from models.schemas import PageResult
from tasks.fetcher import Fetcher
from utils.html_parser import parse_page
from utils.rate_limiter import RateLimiter


class FakeResponse:
    def __init__(self, text='', status_code=200, payload=None):
        self.text = text
        self.status_code = status_code
        self.payload = payload

    def json(self):
        if self.payload is None:
            raise ValueError("No JSON body")
        return self.payload

    def raise_for_status(self):
        if not 200 <= self.status_code < 300:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """
    Routes GETs by exact URL. A route maps to an HTML string, a FakeResponse
    or an exception instance to raise. Unknown URLs answer 404.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append({'url': url, **kwargs})
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(status_code=404)
        if isinstance(route, BaseException):
            raise route
        if isinstance(route, FakeResponse):
            return route
        return FakeResponse(text=route)

    requested_urls = property(lambda self: [call['url'] for call in self.calls])


def make_page(path, html, url=None, success=True):
    """PageResult built the same way the fetcher builds one"""
    text, links = parse_page(html)
    return PageResult(path=path, url=url or f"https://acme.test{path}", html=html, text=text,
                      links=tuple(links), success=success)


@pytest.fixture
def no_wait_limiter():
    return RateLimiter(min_interval_ms=0, sleep=lambda seconds: None)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def fetcher(fake_session, no_wait_limiter):
    return Fetcher(no_wait_limiter, session=fake_session)


@pytest.fixture
def session_factory(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)
    yield make_session_factory(engine=engine)
    engine.dispose()
