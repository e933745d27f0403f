import json
import re
from datetime import date

_SINGULAR_RULES = (
    (re.compile(r'ies$'), 'y'),
    (re.compile(r'(ss|x|ch|sh)es$'), r'\1'),
    (re.compile(r'([^s])s$'), r'\1'),
)


def singularize(word):
    """
    Singular form of a regular English plural: ``"bills"`` -> ``"bill"``, ``"categories"`` -> ``"category"``.
    Irregular plurals are returned unchanged.
    """
    for pattern, replacement in _SINGULAR_RULES:
        if pattern.search(word):
            return pattern.sub(replacement, word)
    return word


def camelize(s):
    return ''.join(part[:1].upper() + part[1:] for part in s.split('_')) if s else s


def substitute_id(template, id):
    return template.replace(':id', '' if id is None else str(id))


class PotionJSONEncoder(json.JSONEncoder):

    def default(self, o):
        if isinstance(o, date):
            return o.isoformat()
        return super(PotionJSONEncoder, self).default(o)


class AttributeDict(dict):
    __getattr__ = dict.__getitem__
    __setattr__ = dict.__setitem__
