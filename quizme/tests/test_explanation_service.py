"""
Explanation service client tests against a local fake chat completions API.
"""

import asyncio
import unittest

from aiohttp import web
from aiohttp import test_utils

from quizme.common.exceptions import ServiceError
from quizme.domain.explanations import ExplanationServiceConfig, OpenAIExplanationService


class FakeCompletionsAPI:
    """Serves scripted chat completion responses and records requests."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append({
            "authorization": request.headers.get("Authorization"),
            "body": await request.json(),
        })
        status, body = self.responses.pop(0)
        if isinstance(body, str):
            return web.Response(status=status, text=body)
        return web.json_response(body, status=status)


def completion(text):
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


class TestOpenAIExplanationService(unittest.TestCase):
    """Test the HTTP client of the explanation service."""

    def setUp(self):
        self.loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)
        self.server = None
        self.service = None

    def tearDown(self):
        if self.service is not None:
            self.run_async(self.service.close())
        if self.server is not None:
            self.run_async(self.server.close())
        self.loop.close()

    def run_async(self, coro):
        return self.loop.run_until_complete(coro)

    def start(self, responses, max_retries=2, api_key="test-key"):
        api = FakeCompletionsAPI(responses)
        app = web.Application()
        app.router.add_post("/v1/chat/completions", api.handle)
        self.server = test_utils.TestServer(app)
        self.run_async(self.server.start_server())

        config = ExplanationServiceConfig(
            api_key=api_key,
            api_base=str(self.server.make_url("/v1")),
            model="test-model",
            timeout=5.0,
            max_retries=max_retries,
        )
        self.service = OpenAIExplanationService(config, backoff_base=0)
        return api

    def generate(self):
        return self.run_async(self.service.generate(
            "Capital of Vietnam?", "Hanoi", "Hue", ["Hanoi", "Da Nang", "Hue"]
        ))

    def test_returns_message_content(self):
        api = self.start([(200, completion("  Hanoi is the capital.  "))])
        self.assertEqual(self.generate(), "Hanoi is the capital.")

        sent = api.requests[0]
        self.assertEqual(sent["authorization"], "Bearer test-key")
        self.assertEqual(sent["body"]["model"], "test-model")
        self.assertEqual(sent["body"]["messages"][0]["role"], "system")
        self.assertIn('Correct Answer: "Hanoi"', sent["body"]["messages"][1]["content"])

    def test_retries_server_errors(self):
        api = self.start([(503, "busy"), (500, "oops"), (200, completion("Done."))])
        self.assertEqual(self.generate(), "Done.")
        self.assertEqual(len(api.requests), 3)

    def test_gives_up_after_retries(self):
        api = self.start([(503, "busy"), (503, "busy")], max_retries=1)
        with self.assertRaises(ServiceError) as ctx:
            self.generate()
        self.assertEqual(ctx.exception.status_code, 503)
        self.assertEqual(len(api.requests), 2)

    def test_client_error_is_not_retried(self):
        api = self.start([(401, {"error": {"message": "bad key"}})])
        with self.assertRaises(ServiceError) as ctx:
            self.generate()
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(len(api.requests), 1)

    def test_malformed_response(self):
        self.start([(200, {"choices": []})])
        with self.assertRaises(ServiceError):
            self.generate()

    def test_empty_content(self):
        self.start([(200, completion("   "))])
        with self.assertRaises(ServiceError):
            self.generate()

    def test_non_json_response(self):
        self.start([(200, "<html>proxy error</html>")])
        with self.assertRaises(ServiceError):
            self.generate()

    def test_missing_api_key(self):
        api = self.start([], api_key=None)
        with self.assertRaises(ServiceError):
            self.generate()
        self.assertEqual(api.requests, [])
