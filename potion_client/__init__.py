import re

from .exceptions import UnknownResourceType
from .instances import DEFAULT_PREFIX_PATTERN
from .resource import Resource
from .utils import camelize, singularize

__all__ = (
    'Api',
    'Resource',
    'client',
    'exceptions',
    'fields',
    'instances',
    'schema',
    'signals',
)


class Api(object):
    """
    A registry of :class:`Resource` classes.

    References and sub-resources name their target resources; the :class:`Api` the referring resource is registered
    with resolves these names to resource classes.

    :param prefix_pattern: an optional regular expression matching the versioned API prefix that is stripped from
        sub-resource URIs; default: ``^/api/v\\d+``
    :param list resources: an optional list of resources to register
    """

    def __init__(self, prefix_pattern=None, resources=()):
        if prefix_pattern is None:
            prefix_pattern = DEFAULT_PREFIX_PATTERN
        elif isinstance(prefix_pattern, str):
            prefix_pattern = re.compile(prefix_pattern)

        self.prefix_pattern = prefix_pattern
        self.resources = {}

        for resource in resources:
            self.add_resource(resource)

    def add_resource(self, resource):
        """
        Add a :class:`Resource` class to the API. Can be used as a class decorator.

        :param Resource resource: resource
        :return: the resource
        """
        # prevent resources from being added twice
        if resource in self.resources.values():
            return resource

        bound_api = resource.__dict__.get('api')
        if bound_api is not None and bound_api != self:
            raise RuntimeError("Attempted to register a resource that is already registered with a different Api.")

        resource.api = self
        self.resources[resource.meta.name] = resource
        return resource

    def resolve(self, name, plural=True):
        """
        Return the resource registered for a name. Plural, lower-case relation names such as ``"pre_authorizations"``
        resolve to the resource of the singular, camel-cased name, ``"PreAuthorization"``.

        :param bool plural: whether the name is a plural collection name; singular names, such as those of
            references (``"status"``), are only camel-cased
        :raises UnknownResourceType: if no resource matches the name
        """
        if plural:
            name_ = camelize(singularize(name))
        else:
            name_ = camelize(name)

        for candidate in (name, name_):
            try:
                return self.resources[candidate]
            except KeyError:
                pass
        raise UnknownResourceType(name)
