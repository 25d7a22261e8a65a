import base64
import unittest
from unittest import mock

import requests

import spotify_client
from spotify_client import SpotifyAuthError, SpotifyClient


def _response(status=200, payload=None):
    response = mock.Mock()
    response.ok = status < 400
    response.status_code = status
    response.json.return_value = payload if payload is not None else {}
    return response


class TokenFetchTests(unittest.TestCase):
    def test_token_request_uses_basic_auth_and_client_credentials(self):
        session = mock.Mock()
        session.post.return_value = _response(payload={"access_token": "abc", "expires_in": 3600})
        client = SpotifyClient("my-id", "my-secret", session=session)

        token = client.get_access_token()

        self.assertEqual(token, "abc")
        args, kwargs = session.post.call_args
        self.assertEqual(args[0], spotify_client.TOKEN_URL)
        expected = base64.b64encode(b"my-id:my-secret").decode()
        self.assertEqual(kwargs["headers"]["Authorization"], f"Basic {expected}")
        self.assertEqual(kwargs["data"], {"grant_type": "client_credentials"})
        self.assertEqual(client.stats["api_calls"], 1)

    def test_non_success_status_raises(self):
        session = mock.Mock()
        session.post.return_value = _response(status=400, payload={"error": "invalid_client"})
        client = SpotifyClient("id", "bad", session=session)

        with self.assertRaises(SpotifyAuthError) as ctx:
            client.get_access_token()

        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(session.post.call_count, 1)

    def test_transport_error_raises_auth_error(self):
        session = mock.Mock()
        session.post.side_effect = requests.exceptions.ConnectionError("down")
        client = SpotifyClient("id", "secret", session=session)

        with self.assertRaises(SpotifyAuthError):
            client.get_access_token()

    def test_non_object_token_body_raises(self):
        session = mock.Mock()
        session.post.return_value = _response(payload=["access_token"])
        client = SpotifyClient("id", "secret", session=session)

        with self.assertRaises(SpotifyAuthError):
            client.get_access_token()

    def test_missing_token_in_body_raises(self):
        session = mock.Mock()
        session.post.return_value = _response(payload={"token_type": "Bearer"})
        client = SpotifyClient("id", "secret", session=session)

        with self.assertRaises(SpotifyAuthError):
            client.get_access_token()


class SearchTests(unittest.TestCase):
    def test_search_passes_query_type_and_limit(self):
        session = mock.Mock()
        session.get.return_value = _response(payload={"albums": {"items": [{"name": "X"}]}})
        client = SpotifyClient("id", "secret", session=session)

        items = client.search_albums("tok", "Blue Train", limit=10)

        self.assertEqual(items, [{"name": "X"}])
        _, kwargs = session.get.call_args
        self.assertEqual(kwargs["params"], {"q": "Blue Train", "type": "album", "limit": 10})
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer tok")

    def test_unexpected_search_body_gives_no_candidates(self):
        session = mock.Mock()
        client = SpotifyClient("id", "secret", session=session)

        for payload in (["list"], {"albums": None}, {"albums": {"items": "nope"}}, {}):
            session.get.return_value = _response(payload=payload)
            self.assertEqual(client.search_albums("tok", "anything"), [])

    def test_non_object_items_are_dropped(self):
        session = mock.Mock()
        session.get.return_value = _response(payload={"albums": {"items": [None, {"name": "Kept"}, "x"]}})
        client = SpotifyClient("id", "secret", session=session)

        self.assertEqual(client.search_albums("tok", "anything"), [{"name": "Kept"}])

    def test_search_failure_returns_none(self):
        session = mock.Mock()
        session.get.return_value = _response(status=500)
        client = SpotifyClient("id", "secret", session=session)

        self.assertIsNone(client.search_albums("tok", "anything"))
        self.assertEqual(client.stats["failed_calls"], 1)


if __name__ == "__main__":
    unittest.main()
