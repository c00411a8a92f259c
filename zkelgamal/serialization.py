"""
JSON plumbing.

Every integer is persisted as a decimal string. Classes expose ``to_json()`` (returning a
JSON-ready dict) and ``from_json(data)``; the helpers here turn those into strings and back.

>>> from zkelgamal.base import Commitment
>>> dumps(Commitment(1, 2), sort_keys=True)
'{"A": "1", "B": "2"}'
>>> loads(Commitment, '{"A": "1", "B": "2"}')
Commitment(A=BigInteger(1), B=BigInteger(2))
"""

import json

from zkelgamal.bn import BigInteger
from zkelgamal.exceptions import ParseError


def get_field(data, name):
    """Fetch a field of a JSON object, raising :py:class:`exceptions.ParseError` if absent."""
    try:
        return data[name]
    except (KeyError, TypeError):
        raise ParseError("Missing field {!r}".format(name)) from None


def parse_bn(data, name):
    """Fetch a decimal-string field of a JSON object as a :py:class:`bn.BigInteger`."""
    value = get_field(data, name)
    if not isinstance(value, str):
        raise ParseError("Field {!r} must be a decimal string".format(name))
    return BigInteger.from_decimal(value)


def dumps(obj, **kwargs):
    return json.dumps(obj.to_json(), **kwargs)


def loads(cls, text):
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError("Invalid JSON: {}".format(e)) from e
    return cls.from_json(data)
