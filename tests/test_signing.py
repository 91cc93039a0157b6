"""Tests for the Cloudinary upload-signing endpoint."""

import hashlib

import pytest

from design_gallery.api.routes import sign_routes
from design_gallery.api.utils.cloudinary import sign_params

URL = "/functions/v1/cloudinary-sign"


def test_sign_params_sorts_and_appends_secret():
    expected = hashlib.sha256(b"a=1&b=two&c=3secret").hexdigest()
    assert sign_params({"c": 3, "a": 1, "b": "two"}, "secret") == expected


class TestSigningEndpoint:
    """Tests for /functions/v1/cloudinary-sign."""

    @pytest.fixture(autouse=True)
    def fixed_time(self, monkeypatch):
        monkeypatch.setattr(sign_routes, "unix_timestamp", lambda: 1_700_000_000)

    def test_preflight(self, client):
        resp = client.options(URL)
        assert resp.status_code == 200
        assert resp.get_data(as_text=True) == "ok"
        assert resp.headers["Access-Control-Allow-Origin"] == "*"
        assert "authorization" in resp.headers["Access-Control-Allow-Headers"]

    def test_missing_header(self, client):
        resp = client.post(URL)
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "No authorization header"}
        assert resp.headers["Access-Control-Allow-Origin"] == "*"

    def test_invalid_token(self, client):
        resp = client.post(URL, headers={"Authorization": "Bearer not-a-token"})
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "User not authenticated"}

    def test_missing_credentials(self, app, client, user_headers):
        app.config["CLOUDINARY_API_SECRET"] = None
        resp = client.post(URL, headers=user_headers)
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Cloudinary credentials not configured"}

    def test_signature(self, client, user_headers):
        resp = client.get(URL, headers=user_headers)
        assert resp.status_code == 200
        data = resp.get_json()

        to_sign = "folder=designs&timestamp=1700000000&transformation=q_auto,f_webp,w_800"
        assert data == {
            "signature": hashlib.sha256((to_sign + "cloud-secret").encode()).hexdigest(),
            "timestamp": 1_700_000_000,
            "cloudName": "demo-cloud",
            "apiKey": "123456789",
            "folder": "designs",
            "transformation": "q_auto,f_webp,w_800",
        }

    def test_unexpected_failure_is_401(self, client, monkeypatch):
        def broken(auth_header):
            raise RuntimeError("SECRET_KEY is not set, cannot issue auth tokens.")

        monkeypatch.setattr(sign_routes, "user_from_auth_header", broken)
        resp = client.post(URL, headers={"Authorization": "Bearer whatever"})
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "SECRET_KEY is not set, cannot issue auth tokens."}
        assert resp.headers["Access-Control-Allow-Origin"] == "*"
