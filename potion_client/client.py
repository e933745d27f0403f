import json
import logging

import requests

from .utils import PotionJSONEncoder

logger = logging.getLogger(__name__)


class Client(object):
    """
    A transport for :class:`Resource` items, backed by :mod:`requests`.

    Any object with ``api_get``, ``api_post`` and ``api_put`` methods can be used in its place. HTTP errors are raised
    as :class:`requests.HTTPError` and are not handled by the resources.

    :param str base_url: e.g. ``"https://api.example.com"``
    :param str api_version: version segment of the API prefix, default: ``"v1"``
    :param auth: optional authentication accepted by :mod:`requests`
    :param timeout: optional timeout for each request, in seconds
    :param requests.Session session: optional session
    """

    def __init__(self, base_url, api_version='v1', auth=None, timeout=None, session=None):
        self.base_url = base_url.rstrip('/')
        self.api_version = api_version
        self.timeout = timeout
        self.session = session or requests.Session()

        if auth is not None:
            self.session.auth = auth

        self.session.headers.update({
            'Accept': 'application/json',
            'Content-Type': 'application/json'
        })

    @property
    def api_prefix(self):
        return '/api/{}'.format(self.api_version)

    def url(self, path):
        return ''.join((self.base_url, self.api_prefix, path))

    def api_get(self, path, query=None):
        return self._request('GET', path, params=query)

    def api_post(self, path, data):
        return self._request('POST', path, data=json.dumps(data, cls=PotionJSONEncoder))

    def api_put(self, path, data):
        return self._request('PUT', path, data=json.dumps(data, cls=PotionJSONEncoder))

    def _request(self, method, path, **kwargs):
        url = self.url(path)
        logger.debug('%s %s', method, url)

        response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        response.raise_for_status()

        if not response.content:
            return None
        return response.json()
