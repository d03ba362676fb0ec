"""Connection URL parsing for dbcontainers.

Parses ``jdbc:tc:`` URLs into ConnectionDescriptor objects. Supported forms:
    jdbc:tc:postgresql://localhost/app
    jdbc:tc:postgresql:14.5://localhost/app?user=app&password=secret
    jdbc:tc:myregistry.io/library/postgres:14://localhost/app?TC_REUSABLE=true
"""

from __future__ import annotations

import re

from dbcontainers.core.exceptions import ConnectionUrlError
from dbcontainers.core.models import ConnectionDescriptor

SCHEME = "jdbc:tc:"

# Parameters with this prefix configure the container rather than the database
CONTAINER_PARAM_PREFIX = "TC_"
REUSABLE_PARAM = "TC_REUSABLE"

_URL_RE = re.compile(
    r"^jdbc:tc:"
    r"(?:(?P<registry>[^/?]+)/)?"
    r"(?P<image>[a-z0-9][a-z0-9._-]*(?:/[a-z0-9][a-z0-9._-]*)*)"
    r"(?::(?P<tag>[^:/?]+))?"
    r"://(?P<host_string>[^?]+)"
    r"(?:\?(?P<query>.*))?$"
)

_HOST_STRING_RE = re.compile(r"^(?P<host>[^:/]+)(?::(?P<port>[0-9]+))?(?:/(?P<database>[^?]*))?$")


def is_connection_url(arg: str) -> bool:
    """Check if an argument looks like a jdbc:tc: connection URL."""
    return arg.startswith(SCHEME) and "://" in arg


def parse_connection_url(url: str) -> ConnectionDescriptor:
    """Parse a ``jdbc:tc:`` connection URL into a ConnectionDescriptor.

    Args:
        url: Connection URL, e.g. ``jdbc:tc:postgresql:14://localhost/app``.

    Returns:
        ConnectionDescriptor populated from the URL.

    Raises:
        ConnectionUrlError: If the URL does not follow the jdbc:tc: format.
    """
    if not is_connection_url(url):
        raise ConnectionUrlError(f"Connection URL must start with '{SCHEME}' and contain '://': {url}")

    match = _URL_RE.match(url)
    if not match:
        raise ConnectionUrlError(f"Malformed connection URL: {url}")

    host_string = match.group("host_string")
    host_match = _HOST_STRING_RE.match(host_string)
    if not host_match:
        raise ConnectionUrlError(f"Malformed host in connection URL: {host_string}")

    query_parameters: dict[str, str] = {}
    container_parameters: dict[str, str] = {}
    for pair in (match.group("query") or "").split("&"):
        if not pair:
            continue
        # Values are kept verbatim, without percent-decoding
        key, _, value = pair.partition("=")
        target = container_parameters if key.startswith(CONTAINER_PARAM_PREFIX) else query_parameters
        target[key] = value

    image = match.group("image")
    return ConnectionDescriptor(
        url=url,
        database_type=image.rsplit("/", 1)[-1],
        registry=match.group("registry"),
        image_name=image,
        image_tag=match.group("tag"),
        database_host_string=host_string,
        database_name=host_match.group("database") or None,
        query_parameters=query_parameters,
        container_parameters=container_parameters,
        reusable=container_parameters.get(REUSABLE_PARAM, "").lower() == "true",
    )
