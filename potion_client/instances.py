import logging
import re
from urllib.parse import urlsplit, parse_qsl

from werkzeug.datastructures import MultiDict

from .exceptions import UnexpectedResponse, UnknownResourceType

logger = logging.getLogger(__name__)

DEFAULT_PREFIX_PATTERN = re.compile(r'^/api/v\d+')


class SubResource(object):
    """
    A collection of items advertised by the server in the payload of a parent item.

    Calling it fetches the collection. The item type is resolved from the relation name on every call, so an
    unregistered relation only fails once the collection is requested.

    :param Api api: the api used to resolve the item type
    :param client: the transport
    :param str relation: relation name, e.g. ``"payouts"``
    :param str path: collection path relative to the API root
    :param dict query: query parameters, or ``None``
    """

    def __init__(self, api, client, relation, path, query=None):
        self.api = api
        self.client = client
        self.relation = relation
        self.path = path
        self.query = query

    @classmethod
    def from_uri(cls, api, client, relation, uri):
        parts = urlsplit(uri)
        prefix_pattern = api.prefix_pattern if api is not None else DEFAULT_PREFIX_PATTERN
        path = prefix_pattern.sub('', parts.path, count=1)

        if parts.query:
            query = MultiDict(parse_qsl(parts.query, keep_blank_values=True)).to_dict()
        else:
            query = None

        return cls(api, client, relation, path, query)

    @property
    def target(self):
        if self.api is None:
            raise UnknownResourceType(self.relation, 'Resource named "{}" cannot be found; '
                                                     'the sub-resource is not bound to an Api.'.format(self.relation))
        return self.api.resolve(self.relation)

    def __call__(self):
        target = self.target
        logger.debug('Fetching %s from %s %r', self.relation, self.path, self.query)

        items = self.client.api_get(self.path, self.query)
        if not isinstance(items, list):
            raise UnexpectedResponse(self.relation, items)
        return [target(self.client, properties) for properties in items]

    def __repr__(self):
        return "<SubResource '{}' {} {!r}>".format(self.relation, self.path, self.query)


def expand_sub_resources(api, client, uris):
    """
    :param dict uris: a dictionary of relation names and collection URIs
    :return: a dictionary of relation names and :class:`SubResource` accessors
    """
    return {relation: SubResource.from_uri(api, client, relation, uri) for relation, uri in uris.items()}
