from types import SimpleNamespace

import pytest
import requests

from colorscheme_lib import fetch
from colorscheme_lib.errors import FetchExhausted


def ok_response(content=b'data', url='https://example.org/x', headers=None):
    return SimpleNamespace(status_code=200, content=content, text=content.decode('latin-1'),
                           url=url, headers=headers or {}, raise_for_status=lambda: None)


def failing_response(status=503):
    def raise_for_status():
        raise requests.HTTPError(f"HTTP {status}")
    return SimpleNamespace(status_code=status, content=b'', text='', url='', headers={},
                           raise_for_status=raise_for_status)


@pytest.fixture
def sleeps(monkeypatch):
    calls = []
    monkeypatch.setattr(fetch.time, 'sleep', lambda s: calls.append(s))
    return calls


def test_first_attempt_success_does_not_sleep(sleeps):
    seen = {}

    def fake_get(url, headers=None, verify=None, allow_redirects=None, timeout=None):
        seen['headers'] = headers
        seen['timeout'] = timeout
        return ok_response()

    session = SimpleNamespace(get=fake_get)
    response = fetch.fetch_with_retry(session, 'https://example.org/x', timeout=7)
    assert response.content == b'data'
    assert sleeps == []
    assert seen['headers']['User-Agent']
    assert seen['timeout'] == 7


def test_retries_with_linear_backoff_then_succeeds(sleeps):
    attempts = []

    def fake_get(url, **kwargs):
        attempts.append(url)
        if len(attempts) < 3:
            raise requests.ConnectionError('connection reset')
        return ok_response()

    session = SimpleNamespace(get=fake_get)
    fetch.fetch_with_retry(session, 'https://example.org/x')
    assert len(attempts) == 3
    assert sleeps == [1, 2]


def test_exhausts_after_six_attempts(sleeps):
    attempts = []

    def fake_get(url, **kwargs):
        attempts.append(url)
        return failing_response()

    session = SimpleNamespace(get=fake_get)
    with pytest.raises(FetchExhausted) as exc:
        fetch.fetch_with_retry(session, 'https://example.org/x')

    assert len(attempts) == 6
    assert sleeps == [1, 2, 3, 4, 5]
    assert exc.value.attempts == 6
    assert isinstance(exc.value.last_error, requests.HTTPError)


def test_filename_from_content_disposition():
    resp = ok_response(headers={'Content-Disposition': 'attachment; filename="schemes.tar.gz"'})
    assert fetch.filename_from_response(resp, 'https://example.org/download?id=1') == 'schemes.tar.gz'


def test_filename_from_url_when_header_missing():
    resp = ok_response(url='https://codeload.example.org/archive/refs/heads/master%20copy.zip')
    assert fetch.filename_from_response(resp, 'https://example.org/ignored') == 'master copy.zip'
