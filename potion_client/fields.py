import logging
from datetime import date

import aniso8601

from .exceptions import InvalidDeclaration, InvalidFieldValue, TypeMismatch
from .reference import ResourceReference, ResourceBound
from .schema import Schema

logger = logging.getLogger(__name__)


class Raw(Schema):
    """
    This is the base class for all field types, can be given any JSON-schema.

    Fields are data descriptors: once a :class:`Resource` is defined, each field of its ``Schema`` is available as an
    attribute of the resource and its items. Values are converted and validated when they are assigned.

    >>> f = fields.Raw({"type": "string"})
    >>> f.response
    {'type': ['string', 'null']}

    :param schema: JSON-schema for field, or :class:`callable` resolving to a JSON-schema when called
    :param default: optional default value returned for unassigned fields; may be a callable with no arguments
    :param attribute: key on the item the value is stored under, optional.
    :param nullable: whether the field is nullable, default: ``True``.
    :param title: optional title for JSON schema
    :param description: optional description for JSON schema
    """

    def __init__(self, schema, default=None, attribute=None, nullable=True, title=None, description=None):
        self._schema = schema
        self._default = default
        self.attribute = attribute
        self.nullable = nullable
        self.title = title
        self.description = description

    def _finalize_schema(self, schema):
        """
        :return: new schema updated for field `nullable`, `title`, `description` and `default` attributes.
        """
        schema = dict(schema)

        if "null" in schema.get("type", []):
            self.nullable = True
        elif self.nullable:
            # enum is independent of type validation:
            if "enum" in schema and None not in schema["enum"]:
                schema["enum"] = schema["enum"] + [None]

            if "type" in schema:
                type_ = schema["type"]
                if isinstance(type_, (str, dict)):
                    schema["type"] = [type_, "null"]
                else:
                    schema["type"] = type_ + ["null"]
            else:
                logger.warning('%r is nullable but "null" type cannot be added', self)

        for attr in ("default", "title", "description"):
            value = getattr(self, attr)
            if value is not None:
                schema[attr] = value
        return schema

    @property
    def default(self):
        if callable(self._default):
            return self._default()
        return self._default

    @default.setter
    def default(self, value):
        self._default = value

    def schema(self):
        """
        JSON schema representation
        """
        schema = self._schema
        if callable(schema):
            schema = schema()

        if isinstance(schema, tuple):
            read_schema, write_schema = schema
        else:
            read_schema = write_schema = schema

        return self._finalize_schema(read_schema), self._finalize_schema(write_schema)

    def format(self, value):
        """
        Format a Python value representation for output in JSON. Noop by default.
        """
        if value is not None:
            return self.formatter(value)
        return value

    def convert(self, instance, validate=True):
        """
        Convert a JSON value representation to a Python object. Noop by default.
        """
        if validate:
            instance = super(Raw, self).convert(instance)

        if instance is not None:
            return self.converter(instance)
        return instance

    def formatter(self, value):
        return value

    def converter(self, value):
        return value

    def __get__(self, item, owner=None):
        if item is None:
            return self
        return item._values.get(self.attribute, self.default)

    def __set__(self, item, value):
        item._values[self.attribute] = self.convert(value)

    def __repr__(self):
        return '{}(attribute={})'.format(self.__class__.__name__, repr(self.attribute))


class Any(Raw):
    """
    A field type that allows any value.
    """
    def __init__(self, **kwargs):
        super(Any, self).__init__({"type": ["null", "string", "number", "boolean", "object", "array"]}, **kwargs)


class String(Raw):
    """
    :param int min_length: minimum length of string
    :param int max_length: maximum length of string
    :param str pattern: regex pattern that the string must match
    :param list enum: list of strings with enumeration
    """

    def __init__(self, min_length=None, max_length=None, pattern=None, enum=None, **kwargs):
        schema = {"type": "string"}

        if enum is not None:
            enum = list(enum)

        for v, k in ((min_length, 'minLength'),
                     (max_length, 'maxLength'),
                     (pattern, 'pattern'),
                     (enum, 'enum')):
            if v is not None:
                schema[k] = v

        super(String, self).__init__(schema, **kwargs)


class Uri(String):
    """
    A string field for URIs. Relative references, such as ``/api/v1/bills/1``, are allowed.
    """


class Boolean(Raw):
    def __init__(self, **kwargs):
        super(Boolean, self).__init__({"type": "boolean"}, **kwargs)


class Integer(Raw):

    def __init__(self, minimum=None, maximum=None, **kwargs):
        schema = {"type": "integer"}

        if minimum is not None:
            schema['minimum'] = minimum
        if maximum is not None:
            schema['maximum'] = maximum

        super(Integer, self).__init__(schema, **kwargs)


class Number(Raw):
    def __init__(self, minimum=None, maximum=None, **kwargs):
        schema = {"type": "number"}

        if minimum is not None:
            schema['minimum'] = minimum
        if maximum is not None:
            schema['maximum'] = maximum

        super(Number, self).__init__(schema, **kwargs)


class DateTime(Raw):
    """
    A field for ISO8601-formatted date and date-time strings.

    Strings are parsed with :mod:`aniso8601` to :class:`datetime.datetime` (with a ``T``, ``t`` or space between date
    and time) or, when they carry no time component,
    :class:`datetime.date`. Date and date-time objects are stored as they are.
    """

    def __init__(self, **kwargs):
        super(DateTime, self).__init__({"type": "string", "format": "date-time"}, **kwargs)

    def convert(self, instance, validate=True):
        if instance is None or isinstance(instance, date):
            return instance
        if not isinstance(instance, str):
            raise InvalidFieldValue(self, instance)
        try:
            return self.converter(instance)
        except ValueError:
            raise InvalidFieldValue(self, instance)

    def formatter(self, value):
        return value.isoformat()

    def converter(self, value):
        for delimiter in ('T', 't', ' '):
            if delimiter in value:
                return aniso8601.parse_datetime(value, delimiter=delimiter)
        return aniso8601.parse_date(value)


class ReferenceId(Raw, ResourceBound):
    """
    The identity of a related item. The field name must end with ``_id``; the name without the suffix is the name of
    the relation, and a :class:`ToOne` accessor is installed under that name on the resource.

    The target resource is the resource registered for the relation name, unless it is given explicitly:

    - a :class:`Resource` class
    - a string with a resource name
    - ``"self"`` --- which resolves to the resource this field is bound to

    :param resource: an optional resource reference
    """
    suffix = '_id'

    def __init__(self, resource=None, **kwargs):
        self.target_reference = ResourceReference(resource) if resource is not None else None
        super(ReferenceId, self).__init__({"type": ["string", "integer"]}, **kwargs)

    def _on_bind(self, resource):
        if not self.attribute.endswith(self.suffix):
            raise InvalidDeclaration(resource.__name__,
                                     self.attribute,
                                     'reference fields must end with "{}"'.format(self.suffix))

        if self.target_reference is None:
            self.target_reference = ResourceReference(self.relation)

    def rebind(self, resource):
        return self.__class__(
            self.target_reference.value,
            default=self._default,
            attribute=self.attribute,
            nullable=self.nullable,
            title=self.title,
            description=self.description
        ).bind(resource)

    @property
    def relation(self):
        return self.attribute[:-len(self.suffix)]

    @property
    def target(self):
        return self.target_reference.resolve(self.resource)


class ToOne(object):
    """
    Accessor for the item referenced by a :class:`ReferenceId` field.

    Reading the accessor fetches the referenced item from the server every time. Assigning an item stores its ``id``
    in the reference id field.
    """

    def __init__(self, id_field):
        self.id_field = id_field

    @property
    def target(self):
        return self.id_field.target

    def resolve(self, item):
        id = self.id_field.__get__(item)
        if id is None:
            return None
        return self.target.find(item.client, id)

    def __get__(self, item, owner=None):
        if item is None:
            return self
        return self.resolve(item)

    def __set__(self, item, value):
        target = self.target
        if not isinstance(value, target):
            raise TypeMismatch(target, value)
        self.id_field.__set__(item, value.id)

    def __repr__(self):
        return '{}(relation={})'.format(self.__class__.__name__, repr(self.id_field.relation))
