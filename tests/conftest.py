import pytest
import requests

from tests.fakes import FakePost


@pytest.fixture
def fake_post(monkeypatch):
    fake = FakePost()
    monkeypatch.setattr(requests, "post", fake)
    return fake


@pytest.fixture
def proxy_dict():
    return {"proxy": "p", "port": 8080, "user": "u", "password": "pw"}
