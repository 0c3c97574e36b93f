"""
Tests for the authentication module – login handshake and session-cookie
detection.
"""

import time
import unittest
from unittest.mock import MagicMock, patch

import requests

from avalon.auth import cookie_names_for_url, has_session_cookie, login
from avalon.config import ACCEPT_LANGUAGE, LANDING_URL, LOGIN_URL
from avalon.errors import (
    InvalidCredentialsError,
    OperationCancelled,
    UnexpectedResponseError,
)
from avalon.models import Credentials
from avalon.network import CancellationToken, SessionClient

CREDENTIALS = Credentials("someone@example.com", "hunter2")


def _make_response(status_code=200, body="", url=LANDING_URL):
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.url = url
    resp.encoding = "utf-8"
    resp.iter_content.return_value = [body.encode("utf-8")] if body else []
    return resp


def _scripted(*steps):
    """
    Build a requests.Session.request stand-in that answers with *steps* in
    order.  Each step is ``(status_code, {cookie_name: value})``.
    """
    steps = list(steps)
    calls = []

    def fake_request(session, method, url, **kwargs):
        calls.append((method, url, kwargs))
        status_code, cookies = steps.pop(0)
        for name, value in cookies.items():
            session.cookies.set(name, value, domain=".facebook.com", path="/")
        return _make_response(status_code, url=url)

    return fake_request, calls


class TestCredentials(unittest.TestCase):
    def test_password_hidden_from_repr(self):
        self.assertNotIn("hunter2", repr(CREDENTIALS))
        self.assertIn("someone@example.com", repr(CREDENTIALS))

    def test_none_mail_rejected(self):
        with self.assertRaises(TypeError):
            Credentials(None, "pw")

    def test_none_password_rejected(self):
        with self.assertRaises(TypeError):
            Credentials("a@b.c", None)


class TestHasSessionCookie(unittest.TestCase):
    def setUp(self):
        self.jar = requests.cookies.RequestsCookieJar()

    def test_root_domain_cookie(self):
        self.jar.set("c_user", "1000", domain=".facebook.com", path="/")
        self.assertTrue(has_session_cookie(self.jar))

    def test_empty_jar(self):
        self.assertFalse(has_session_cookie(self.jar))

    def test_other_cookies_only(self):
        self.jar.set("datr", "seed", domain=".facebook.com", path="/")
        self.jar.set("xs", "token", domain=".facebook.com", path="/")
        self.assertFalse(has_session_cookie(self.jar))

    def test_host_only_subdomain_cookie_ignored(self):
        self.jar.set("c_user", "1000", domain="mbasic.facebook.com", path="/")
        self.assertFalse(has_session_cookie(self.jar))

    def test_expired_cookie_ignored(self):
        self.jar.set("c_user", "1000", domain=".facebook.com", path="/",
                     expires=int(time.time()) - 3600)
        self.assertFalse(has_session_cookie(self.jar))

    def test_deeper_path_ignored(self):
        self.jar.set("c_user", "1000", domain=".facebook.com", path="/groups")
        self.assertFalse(has_session_cookie(self.jar))

    def test_other_domain_ignored(self):
        self.jar.set("c_user", "1000", domain=".example.com", path="/")
        self.assertFalse(has_session_cookie(self.jar))


class TestCookieNamesForUrl(unittest.TestCase):
    def setUp(self):
        self.jar = requests.cookies.RequestsCookieJar()

    def test_secure_cookie_not_sent_over_http(self):
        self.jar.set("c_user", "1000", domain=".facebook.com", path="/", secure=True)
        self.assertEqual(cookie_names_for_url(self.jar, "http://facebook.com/"), [])
        self.assertEqual(cookie_names_for_url(self.jar, "https://facebook.com/"), ["c_user"])

    def test_parent_domain_cookie_applies_to_subdomain(self):
        self.jar.set("datr", "seed", domain=".facebook.com", path="/")
        names = cookie_names_for_url(self.jar, "https://mbasic.facebook.com/groups/")
        self.assertEqual(names, ["datr"])

    def test_path_prefix_must_end_on_segment_boundary(self):
        self.jar.set("c_user", "1000", domain=".facebook.com", path="/gr")
        self.assertEqual(cookie_names_for_url(self.jar, "https://facebook.com/groups"), [])

    def test_matching_path_prefix_is_sent(self):
        self.jar.set("c_user", "1000", domain=".facebook.com", path="/groups")
        self.assertEqual(cookie_names_for_url(self.jar, "https://facebook.com/groups/1"), ["c_user"])

    def test_empty_jar(self):
        self.assertEqual(cookie_names_for_url(self.jar, "https://facebook.com/"), [])


class TestLogin(unittest.TestCase):
    def setUp(self):
        self.client = SessionClient(user_agent="TestAgent/1.0")

    def test_seeds_then_posts_credentials(self):
        fake, calls = _scripted((200, {"datr": "seed"}), (200, {"c_user": "1000"}))
        with patch.object(requests.Session, "request", autospec=True, side_effect=fake):
            login(self.client, CREDENTIALS)

        self.assertEqual([(m, u) for m, u, _ in calls], [("GET", LANDING_URL), ("POST", LOGIN_URL)])

        landing_headers = calls[0][2]["headers"]
        self.assertEqual(landing_headers["User-Agent"], "TestAgent/1.0")
        self.assertEqual(landing_headers["Accept-Language"], ACCEPT_LANGUAGE)
        self.assertNotIn("Referer", landing_headers)

        post_kwargs = calls[1][2]
        self.assertEqual(post_kwargs["headers"]["Referer"], LANDING_URL)
        self.assertEqual(post_kwargs["headers"]["User-Agent"], "TestAgent/1.0")
        self.assertEqual(
            post_kwargs["data"],
            {"email": "someone@example.com", "pass": "hunter2", "login": "Entrar"},
        )
        self.assertTrue(has_session_cookie(self.client.cookies))

    def test_skips_landing_page_when_cookies_present(self):
        self.client.cookies.set("datr", "seed", domain=".facebook.com", path="/")
        fake, calls = _scripted((200, {"c_user": "1000"}))
        with patch.object(requests.Session, "request", autospec=True, side_effect=fake):
            login(self.client, CREDENTIALS)

        self.assertEqual([m for m, _, _ in calls], ["POST"])

    def test_landing_page_failure_stops_before_post(self):
        fake, calls = _scripted((503, {}))
        with patch.object(requests.Session, "request", autospec=True, side_effect=fake):
            with self.assertRaises(UnexpectedResponseError) as ctx:
                login(self.client, CREDENTIALS)

        self.assertEqual(ctx.exception.status_code, 503)
        self.assertEqual([m for m, _, _ in calls], ["GET"])

    def test_login_post_failure(self):
        fake, _ = _scripted((200, {"datr": "seed"}), (500, {}))
        with patch.object(requests.Session, "request", autospec=True, side_effect=fake):
            with self.assertRaises(UnexpectedResponseError):
                login(self.client, CREDENTIALS)

    def test_missing_session_cookie_is_invalid_credentials(self):
        fake, _ = _scripted((200, {"datr": "seed"}), (200, {"sb": "x"}))
        with patch.object(requests.Session, "request", autospec=True, side_effect=fake):
            with self.assertRaises(InvalidCredentialsError):
                login(self.client, CREDENTIALS)
        self.assertFalse(has_session_cookie(self.client.cookies))

    def test_repeated_login_posts_again(self):
        fake, calls = _scripted(
            (200, {"datr": "seed"}),
            (200, {"c_user": "1000"}),
            (200, {"c_user": "1000"}),
        )
        with patch.object(requests.Session, "request", autospec=True, side_effect=fake):
            login(self.client, CREDENTIALS)
            login(self.client, CREDENTIALS)

        self.assertEqual([m for m, _, _ in calls], ["GET", "POST", "POST"])

    def test_cancel_during_post_restores_cookie_jar(self):
        token = CancellationToken()

        def fake_request(session, method, url, **kwargs):
            if method == "GET":
                session.cookies.set("datr", "seed", domain=".facebook.com", path="/")
            else:
                session.cookies.set("c_user", "1000", domain=".facebook.com", path="/")
                token.cancel()
            return _make_response(200, "<html></html>", url=url)

        with patch.object(requests.Session, "request", autospec=True, side_effect=fake_request):
            with self.assertRaises(OperationCancelled):
                login(self.client, CREDENTIALS, cancel=token)

        self.assertEqual(len(self.client.cookies), 0)

    def test_cancel_keeps_previous_session(self):
        self.client.cookies.set("c_user", "1000", domain=".facebook.com", path="/")
        self.client.cookies.set("xs", "old", domain=".facebook.com", path="/")
        token = CancellationToken()

        def fake_request(session, method, url, **kwargs):
            session.cookies.set("xs", "new", domain=".facebook.com", path="/")
            token.cancel()
            return _make_response(200, "<html></html>", url=url)

        with patch.object(requests.Session, "request", autospec=True, side_effect=fake_request):
            with self.assertRaises(OperationCancelled):
                login(self.client, CREDENTIALS, cancel=token)

        self.assertEqual(self.client.cookies.get("xs"), "old")
        self.assertTrue(has_session_cookie(self.client.cookies))


if __name__ == "__main__":
    unittest.main()
