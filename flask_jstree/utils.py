import copy
import itertools
import json
import logging
import re
from collections.abc import Mapping

from flask import url_for
from werkzeug.routing import BuildError

from .exceptions import ConfigurationError


log = logging.getLogger(__name__)

_placeholder_ids = itertools.count()


class JsExpression(str):
    """
    A piece of javascript that is emitted as is by :func:`dumps_js`,
    instead of being encoded as a JSON string.

    Use it for callbacks and variable references inside jsTree options::

        options = {"core": {"data": {"url": JsExpression("function (node) {...}")}}}
    """

    def __deepcopy__(self, memo):
        return self

    def __repr__(self):
        return "JsExpression(%s)" % str.__repr__(self)


def merge_options(base, *overrides):
    """
    Merges option mappings, later ones take precedence.

    Nested mappings are merged recursively, any other value (lists
    included) replaces the previous one wholesale. Keys are never
    validated. The arguments are left untouched.

    :param base: the default options
    :param overrides: partial options applied in the given order
    :return: a new dict
    """
    result = copy.deepcopy(dict(base))
    for override in overrides:
        if override:
            _merge_into(result, override)
    return result


def _merge_into(target, source):
    for key, value in source.items():
        current = target.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            if not isinstance(current, dict):
                current = target[key] = dict(current)
            _merge_into(current, value)
        else:
            target[key] = copy.deepcopy(value)


def _extract_expressions(value, expressions, prefix):
    if isinstance(value, JsExpression):
        token = "%s%d__" % (prefix, len(expressions))
        expressions[token] = str(value)
        return token
    if isinstance(value, Mapping):
        return {
            key: _extract_expressions(item, expressions, prefix)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_extract_expressions(item, expressions, prefix) for item in value]
    return value


def dumps_js(value, **kwargs):
    """
    Serializes ``value`` to JSON, inlining every :class:`JsExpression`
    found in it as raw javascript.

    The JSON part is made safe for embedding in a ``<script>`` element,
    the same way Flask's ``htmlsafe_json_dumps`` does.
    """
    expressions = {}
    prefix = "__jstree_js_%d_" % next(_placeholder_ids)
    encoded = json.dumps(_extract_expressions(value, expressions, prefix), **kwargs)
    encoded = (
        encoded.replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
        .replace("'", "\\u0027")
    )
    for token, expression in expressions.items():
        encoded = encoded.replace(json.dumps(token), expression)
    return encoded


def js_identifier(widget_id):
    """Turns a DOM id into something usable as a javascript variable name"""
    return "jsTree_" + re.sub(r"\W", "_", str(widget_id))


def validate_route(route, name="route"):
    """
    Checks that ``route`` is a literal URL or a route descriptor.

    A route descriptor is either ``("endpoint.name", {"arg": value})``
    (the values mapping is optional) or ``{"endpoint": "endpoint.name",
    "arg": value}``.

    :raises ConfigurationError: if it's neither
    """
    if isinstance(route, str):
        if route:
            return
    elif isinstance(route, Mapping):
        if isinstance(route.get("endpoint"), str) and route["endpoint"]:
            return
    elif isinstance(route, (list, tuple)) and 1 <= len(route) <= 2:
        endpoint = route[0]
        values = route[1] if len(route) == 2 else {}
        if isinstance(endpoint, str) and endpoint and isinstance(values, Mapping):
            return
    raise ConfigurationError("Malformed %s: %r" % (name, route))


def resolve_route(route, resolver=None, name="route"):
    """
    Resolves an endpoint definition to a URL.

    :param route: ``None`` or ``False`` for no endpoint, a literal URL, or
        a route descriptor (see :func:`validate_route`)
    :param resolver: callable with the signature of ``flask.url_for``,
        defaults to it
    :return: the URL or ``None``
    :raises ConfigurationError: when the route is malformed or can't be
        resolved
    """
    if route is None or route is False:
        return None
    validate_route(route, name=name)
    if isinstance(route, str):
        return route
    resolver = resolver or url_for
    if isinstance(route, Mapping):
        values = dict(route)
        endpoint = values.pop("endpoint")
    else:
        endpoint = route[0]
        values = dict(route[1]) if len(route) == 2 else {}
    try:
        url = resolver(endpoint, **values)
    except (BuildError, RuntimeError) as e:
        log.error("Cannot resolve %s %s: %s", name, endpoint, e)
        raise ConfigurationError(
            "Cannot resolve %s %r: %s" % (name, endpoint, e)
        ) from e
    log.debug("Resolved %s %s to %s", name, endpoint, url)
    return url
