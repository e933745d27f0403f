class PotionException(Exception):
    """
    Base class for all errors raised by the resource mapping layer. Errors raised by the transport are not wrapped.
    """

    def as_dict(self):
        return {
            'error': self.__class__.__name__,
            'message': str(self)
        }


class InvalidDeclaration(PotionException):

    def __init__(self, resource_name, field_name, message):
        super(InvalidDeclaration, self).__init__('{}.{}: {}'.format(resource_name, field_name, message))
        self.resource_name = resource_name
        self.field_name = field_name


class UnknownField(PotionException):

    def __init__(self, resource, key):
        super(UnknownField, self).__init__('{} has no field "{}"'.format(resource.meta.name, key))
        self.resource = resource
        self.key = key

    def as_dict(self):
        dct = super(UnknownField, self).as_dict()
        dct['item'] = {
            "$type": self.resource.meta.name,
            "field": self.key
        }
        return dct


class InvalidFieldValue(PotionException):

    def __init__(self, field, value, errors=()):
        self.field = field
        self.value = value
        self.errors = list(errors)

        message = 'Invalid value {!r} for {}'.format(value, field)
        if self.errors:
            message = '{}: {}'.format(message, '; '.join(error.message for error in self.errors))
        super(InvalidFieldValue, self).__init__(message)

    def as_dict(self):
        dct = super(InvalidFieldValue, self).as_dict()
        dct['errors'] = [{
            'validationOf': {error.validator: error.validator_value},
            'path': tuple(error.absolute_path)
        } for error in self.errors]
        return dct


class TypeMismatch(PotionException):

    def __init__(self, expected, value):
        super(TypeMismatch, self).__init__('Object must be an instance of {}, got {!r}'.format(expected.__name__, value))
        self.expected = expected
        self.value = value


class UnknownResourceType(PotionException):

    def __init__(self, name, message=None):
        super(UnknownResourceType, self).__init__(message or 'Resource named "{}" is not registered.'.format(name))
        self.name = name


class OperationNotPermitted(PotionException):

    def __init__(self, resource, kind):
        super(OperationNotPermitted, self).__init__('{} cannot be {}d'.format(resource.meta.name, kind))
        self.resource = resource
        self.kind = kind

    def as_dict(self):
        dct = super(OperationNotPermitted, self).as_dict()
        dct['item'] = {
            "$type": self.resource.meta.name,
            "operation": self.kind
        }
        return dct


class UnexpectedResponse(PotionException):

    def __init__(self, relation, response, expected='a list of items'):
        super(UnexpectedResponse, self).__init__(
            'Expected {} for "{}", got {}'.format(expected, relation, type(response).__name__))
        self.relation = relation
        self.response = response
