"""HTTP method tokens recognised as endpoint file names.

A file whose stem (lower-cased) is one of these tokens is bound as a handler
for that method, unless the matcher table reserves the name.
"""

from fsroutes._types import MethodToken

HTTP_METHODS: frozenset[MethodToken] = frozenset({
    "acl",
    "bind",
    "checkout",
    "connect",
    "copy",
    "delete",
    "get",
    "head",
    "link",
    "lock",
    "m-search",
    "merge",
    "mkactivity",
    "mkcalendar",
    "mkcol",
    "move",
    "notify",
    "options",
    "patch",
    "post",
    "propfind",
    "proppatch",
    "purge",
    "put",
    "rebind",
    "report",
    "search",
    "source",
    "subscribe",
    "trace",
    "unbind",
    "unlink",
    "unlock",
    "unsubscribe",
})


def is_method(token: MethodToken) -> bool:
    """Return True if *token* names a recognised HTTP method (case-insensitive)."""
    return token.lower() in HTTP_METHODS
