from unittest import TestCase

from potion_client import Api


class FakeClient(object):
    """
    A transport that records every call and answers from a dictionary of canned responses,
    keyed by ``(method, path)``.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def api_get(self, path, query=None):
        self.calls.append(('GET', path, query))
        return self._respond('GET', path)

    def api_post(self, path, data):
        self.calls.append(('POST', path, data))
        return self._respond('POST', path)

    def api_put(self, path, data):
        self.calls.append(('PUT', path, data))
        return self._respond('PUT', path)

    def _respond(self, method, path):
        response = self.responses.get((method, path))
        if isinstance(response, Exception):
            raise response
        return response


class BaseTestCase(TestCase):

    def setUp(self):
        super(BaseTestCase, self).setUp()
        self.api = Api()
        self.client = FakeClient()

    def _without(self, dct, without):
        return {k: v for k, v in dct.items() if k not in without}

    def assertEqualWithout(self, first, second, without, msg=None):
        if isinstance(first, list) and isinstance(second, list):
            self.assertEqual(
                [self._without(v, without) for v in first],
                [self._without(v, without) for v in second],
                msg=msg
            )
        elif isinstance(first, dict) and isinstance(second, dict):
            self.assertEqual(self._without(first, without),
                             self._without(second, without),
                             msg=msg)
        else:
            self.maxDiff = None
            self.assertEqual(first, second)
