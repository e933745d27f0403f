from collections import OrderedDict

from werkzeug.utils import cached_property
from jsonschema import Draft4Validator

from .exceptions import InvalidFieldValue, UnknownField
from .reference import ResourceBound


class Schema(object):
    """
    The base class for all types with a schema in Potion. Has :attr:`response` and a :attr:`request` attributes
    for the schema describing, respectively, data returned by the server and data sent to it.

    Any class inheriting from schema needs to implement :meth:`schema`.

    ..  attribute:: response

        JSON-schema describing data returned by the server.

    .. attribute:: request

        JSON-schema describing data sent to the server; used to validate values assigned on the client.

    """

    def schema(self):
        """
        Abstract method returning the JSON schema used by both :attr:`response` and :attr:`request`.

        :return: a JSON-schema or a tuple of JSON-schemas in the format ``(response_schema, request_schema)``
        """
        raise NotImplementedError()

    @cached_property
    def response(self):
        schema = self.schema()
        if isinstance(schema, tuple):
            return schema[0]
        return schema

    @cached_property
    def request(self):
        schema = self.schema()
        if isinstance(schema, tuple):
            return schema[1]
        return schema

    @cached_property
    def _validator(self):
        Draft4Validator.check_schema(self.request)
        return Draft4Validator(self.request)

    def format(self, value):
        """
        Formats a python object for JSON serialization. Noop by default.

        :param object value:
        :return:
        """
        return value

    def convert(self, instance):
        """
        Validates a deserialized JSON value against :attr:`request` and converts it into a python object.

        :param instance: JSON value
        :raises InvalidFieldValue: if validation failed
        """
        errors = list(self._validator.iter_errors(instance))
        if errors:
            raise InvalidFieldValue(self, instance, errors)
        return instance


class FieldSet(Schema, ResourceBound):
    """
    A schema representation of an ordered dictionary of :class:`fields.Raw` objects.

    The field set is built once, when a :class:`Resource` class is defined, and holds the table of setters used to
    assign JSON properties to items of that resource.

    :param dict fields: an ordered dictionary of :class:`fields.Raw` objects
    """

    def __init__(self, fields):
        self.fields = OrderedDict()
        self.relations = OrderedDict()
        self.setters = {}

        for key, field in fields.items():
            self.set(key, field)

    def bind(self, resource):
        if self.resource is None:
            self.resource = resource
            for key, field in list(self.fields.items()):
                if isinstance(field, ResourceBound):
                    self.set(key, field.bind(resource))
        elif self.resource != resource:
            return self.rebind(resource)
        return self

    def rebind(self, resource):
        return FieldSet(self.fields).bind(resource)

    def set(self, key, field):
        if field.attribute is None:
            field.attribute = key
        if self.resource and isinstance(field, ResourceBound):
            field = field.bind(self.resource)
        self.fields[key] = field
        self.setters[key] = field.__set__

    def add_relation(self, name, relation):
        self.relations[name] = relation
        self.setters[name] = relation.__set__

    def schema(self):
        return {
            "type": "object",
            "properties": OrderedDict((key, field.response) for key, field in self.fields.items()),
            "additionalProperties": False
        }, {
            "type": "object",
            "properties": OrderedDict((key, field.request) for key, field in self.fields.items()),
            "additionalProperties": False
        }

    def assign(self, item, properties):
        """
        Assigns each property to the item through the setter of the matching field.

        :raises UnknownField: if a property has no matching field
        """
        for key, value in properties.items():
            try:
                setter = self.setters[key]
            except KeyError:
                raise UnknownField(self.resource, key)
            setter(item, value)
        return item

    def items(self, item):
        """
        Field names and python values of all fields that have been assigned on the item, in declaration order.
        """
        return OrderedDict((key, item._values[field.attribute])
                           for key, field in self.fields.items() if field.attribute in item._values)

    def format(self, item):
        return OrderedDict((key, self.fields[key].format(value)) for key, value in self.items(item).items())
