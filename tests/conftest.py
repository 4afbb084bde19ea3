import json

import pytest

from webhook_flow.utils import Config


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        if text is None:
            text = "" if body is None else json.dumps(body)
        self.text = text

    def json(self):
        return json.loads(self.text)


@pytest.fixture()
def cfg():
    return Config(
        name="Jane Doe",
        email="jane@example.com",
        reg_no="REG12347",
        generate_url="https://vendor.test/generateWebhook",
        submit_url="https://vendor.test/testWebhook",
    )


@pytest.fixture()
def fake_post(monkeypatch):
    """
    Replace requests.post. Queue responses (or exceptions) with `fake_post.queue`,
    every call is recorded in `fake_post.calls`.
    """
    class _FakePost:
        def __init__(self):
            self.queue = []
            self.calls = []

        def __call__(self, url, json=None, headers=None, timeout=None, verify=True):
            self.calls.append({"url": url, "json": json, "headers": headers,
                               "timeout": timeout, "verify": verify})
            outcome = self.queue.pop(0) if self.queue else FakeResponse(200, text="ok")
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

    fake = _FakePost()
    monkeypatch.setattr("requests.post", fake)
    return fake
