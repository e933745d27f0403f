import inspect

from .exceptions import UnknownResourceType


class ResourceReference(object):
    def __init__(self, value):
        self.value = value

    def resolve(self, binding=None):
        """
        Attempt to resolve the reference value and return the matching :class:`Resource`.

        Names are looked up in the :class:`Api` the binding resource is registered with, so that a reference can be
        declared before its target exists.
        """
        name = self.value

        if name == 'self':
            return binding

        from .resource import Resource
        if inspect.isclass(name) and issubclass(name, Resource):
            return name

        if binding is not None and binding.api is not None:
            return binding.api.resolve(name, plural=False)

        raise UnknownResourceType(name, 'Resource named "{}" cannot be found; '
                                        'the reference is not bound to an Api.'.format(name))

    def __repr__(self):
        return "<ResourceReference '{}'>".format(self.value)


class ResourceBound(object):
    resource = None

    def _on_bind(self, resource):
        pass

    def bind(self, resource):
        if self.resource is None:
            self.resource = resource
            self._on_bind(resource)
        elif self.resource != resource:
            return self.rebind(resource)
        return self

    def rebind(self, resource):
        raise NotImplementedError('{} is already bound to {}'
                                  ' and does not support rebinding to {}'.format(repr(self), self.resource, resource))
