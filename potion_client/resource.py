from collections import OrderedDict
import json
import logging

from . import fields
from .exceptions import InvalidDeclaration, OperationNotPermitted, UnexpectedResponse
from .instances import expand_sub_resources
from .schema import FieldSet
from .signals import before_create, after_create, before_update, after_update
from .utils import AttributeDict, PotionJSONEncoder, substitute_id

logger = logging.getLogger(__name__)


class ResourceMeta(type):

    def __new__(mcs, name, bases, members):
        class_ = super(ResourceMeta, mcs).__new__(mcs, name, bases, members)
        class_.meta = meta = AttributeDict(getattr(class_, 'meta', {}) or {})

        for base in bases:
            if hasattr(base, 'Meta'):
                meta.update((k, v) for k, v in base.Meta.__dict__.items() if not k.startswith('__'))

        if 'Meta' in members:
            changes = members['Meta'].__dict__
            for k, v in changes.items():
                if not k.startswith('__'):
                    meta[k] = v

            if not changes.get('name', None):
                meta['name'] = name
        else:
            meta['name'] = name

        schema = OrderedDict()
        for base in bases:
            if getattr(base, 'schema', None) is not None:
                schema.update(base.schema.fields)

        if 'Schema' in members:
            schema.update((k, f) for k, f in members['Schema'].__dict__.items() if isinstance(f, fields.Raw))

        class_.schema = fs = FieldSet(schema).bind(class_)

        for key, field in fs.fields.items():
            setattr(class_, key, field)

            if isinstance(field, fields.ReferenceId):
                relation = fields.ToOne(field)
                fs.add_relation(field.relation, relation)
                setattr(class_, field.relation, relation)

        return class_


class Resource(metaclass=ResourceMeta):
    """
    An item of a remote resource.

    A resource is configured using the `Schema` and `Meta` attributes. Every field declared in `Schema` becomes an
    attribute of the resource; every :class:`fields.ReferenceId` field ``<relation>_id`` additionally installs an
    accessor named ``<relation>`` that fetches the referenced item.

    :class:`Meta` class attributes:

    =====================  ==============================  ==============================================================================
    Attribute name         Default                         Description
    =====================  ==============================  ==============================================================================
    name                   ---                             Name of the resource in its :class:`Api`; defaults to the class name
    endpoint               ``None``                        Path of an item, with ``:id`` as the placeholder for its id
    creatable              ``False``                       Whether new items can be saved
    updatable              ``False``                       Whether existing items can be saved
    sub_resources_key      ``"sub_resource_uris"``         Key of the payload property listing the URIs of sub-resources
    =====================  ==============================  ==============================================================================

    Usage example:

    .. code-block:: python

        class Bill(Resource):
            class Schema:
                amount = fields.Any()
                status = fields.String()
                created_at = fields.DateTime()
                merchant_id = fields.ReferenceId()

            class Meta:
                endpoint = '/bills/:id'
                creatable = True

        bill = Bill.find(client, 'B1')
        bill.merchant          # fetches the merchant
        bill.sub_resources     # {'payouts': <SubResource 'payouts' ...>}

    .. attribute:: api

        Back reference to the :class:`Api` this resource is registered on.

    .. attribute:: meta

        A :class:`AttributeDict` of configuration attributes collected from the :class:`Meta` attributes of the base classes.

    .. attribute:: schema

        A :class:`FieldSet` containing fields collected from the :class:`Schema` attributes of the base classes.

    .. attribute:: sub_resources

        A dictionary of :class:`instances.SubResource` accessors advertised by the server for this item.
        Accessors are also available as attributes of the item, unless the name is taken by a field or another
        attribute of the resource; ``sub_resources[name]`` always returns the accessor.

    """
    api = None
    meta = None
    schema = None

    class Schema:
        id = fields.Any()
        uri = fields.Uri()

    class Meta:
        name = None
        endpoint = None
        creatable = False
        updatable = False
        sub_resources_key = 'sub_resource_uris'

    def __init__(self, client, data=None, **properties):
        self.client = client
        self._values = {}
        self.sub_resources = {}

        properties = dict(data or {}, **properties)
        self.merge(properties)

    @classmethod
    def _path(cls, id):
        if cls.meta.endpoint is None:
            raise InvalidDeclaration(cls.meta.name, 'endpoint', 'no endpoint declared in Meta')
        return substitute_id(cls.meta.endpoint, id)

    @classmethod
    def find(cls, client, id):
        """
        Fetches an item from the server.

        :raises InvalidDeclaration: if the resource declares no endpoint
        :raises UnexpectedResponse: if the server does not answer with a JSON object
        """
        data = client.api_get(cls._path(id))
        if not isinstance(data, dict):
            raise UnexpectedResponse(cls.meta.name, data, expected='an object')
        return cls(client, data)

    def merge(self, properties):
        """
        Assigns the properties of a JSON object to this item. Sub-resource URIs are turned into accessors.

        :raises UnknownField: if the object has a property that is not a field of this resource
        """
        properties = dict(properties)
        uris = properties.pop(self.meta.sub_resources_key, None)
        if uris is not None:
            expanded = expand_sub_resources(self.api, self.client, uris)
            for relation in expanded:
                if hasattr(type(self), relation):
                    logger.debug('Sub-resource "%s" of %s is shadowed by an attribute; use sub_resources[%r]',
                                 relation, self.meta.name, relation)
            self.sub_resources.update(expanded)
        return self.schema.assign(self, properties)

    @property
    def persisted(self):
        return self.id is not None

    def to_mapping(self):
        return self.schema.items(self)

    def to_json(self):
        return json.dumps(self.schema.format(self), cls=PotionJSONEncoder)

    def save(self):
        """
        Saves this item on the server: new items are created with a POST, existing items are updated with a PUT.
        A JSON object in the response is merged back into the item.

        :raises OperationNotPermitted: if the resource is not creatable, respectively updatable
        :raises InvalidDeclaration: if the resource declares no endpoint
        :return: the item
        """
        resource = self.__class__

        if self.persisted:
            if not self.meta.updatable:
                raise OperationNotPermitted(resource, 'update')

            path = resource._path(self.id)
            before_update.send(resource, item=self)
            logger.debug('Updating %s %s at %s', self.meta.name, self.id, path)
            response = self.client.api_put(path, self.to_mapping())
            self._merge_response(response)
            after_update.send(resource, item=self)
        else:
            if not self.meta.creatable:
                raise OperationNotPermitted(resource, 'create')

            path = resource._path(self.id)
            before_create.send(resource, item=self)
            logger.debug('Creating %s at %s', self.meta.name, path)
            response = self.client.api_post(path, self.to_mapping())
            self._merge_response(response)
            after_create.send(resource, item=self)
        return self

    def _merge_response(self, response):
        if isinstance(response, dict):
            self.merge(response)

    def __getattr__(self, name):
        try:
            return self.__dict__['sub_resources'][name]
        except KeyError:
            raise AttributeError("'{}' object has no attribute '{}'".format(self.__class__.__name__, name))

    def __repr__(self):
        return '<{} {}>'.format(self.__class__.__name__,
                                ' '.join('{}={!r}'.format(k, v) for k, v in self.to_mapping().items()))
