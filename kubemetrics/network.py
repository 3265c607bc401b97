"""Discovery of the default network interface."""

from __future__ import annotations

import re
import sys
from pathlib import Path

DEFAULT_ROUTE_FILE = "/proc/net/route"
FALLBACK_INTERFACE = "eth0"

_SEPARATOR = "\t"
_DESTINATION_FIELD = 1
_INTERFACE_NAME_FIELD = 0
_HEX = re.compile(r"[0-9A-Fa-f]+")


class RouteError(Exception):
    """Raised when the route table cannot be read or holds no default route."""


def default_interface(route_file: str | None = None) -> str:
    """Return the name of the interface used for the default route.

    On Linux the route table is read from ``route_file`` (``/proc/net/route``
    when empty); elsewhere ``eth0`` is assumed.
    """
    if not sys.platform.startswith("linux"):
        return FALLBACK_INTERFACE

    path = route_file or DEFAULT_ROUTE_FILE
    try:
        content = Path(path).read_bytes()
    except OSError as exc:
        raise RouteError(f"getting routes content from file {path}: Can't access {path}") from exc
    return find_default_interface(content)


def find_default_interface(route: str | bytes) -> str:
    """Return the interface whose destination is zero in a route table.

    The first line is a header and is skipped; rows are tab separated with
    the interface name first and the hex destination second.
    """
    text = route.decode() if isinstance(route, (bytes, bytearray)) else route
    lines = text.splitlines()
    if not lines:
        raise RouteError(f"invalid linux route file: {text}")

    for row in lines[1:]:
        tokens = row.split(_SEPARATOR)
        if len(tokens) <= _DESTINATION_FIELD:
            raise RouteError(f"invalid row '{row}' in route file")

        destination_hex = tokens[_DESTINATION_FIELD]
        if not _HEX.fullmatch(destination_hex):
            raise RouteError(
                f"parsing destination field hex '0x{destination_hex}' in row '{row}'"
            )
        if int(destination_hex, 16) == 0:
            return tokens[_INTERFACE_NAME_FIELD]

    raise RouteError("couldn't find interface with default destination")