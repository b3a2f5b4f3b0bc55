"""
Decoding of inline photos sent as data URIs ('data:<mimetype>;base64,<encoded_data>').
"""

import base64
import binascii
import re
from typing import Tuple

from ..core.errors import InputError

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?P<params>(;[\w.+-]+=[\w.+-]+)*);base64,(?P<data>.*)$", re.DOTALL)


def decode_data_uri(data_uri: str) -> Tuple[str, bytes]:
    """
    Split a base64 data URI into its mime type and decoded bytes.

    Raises:
        InputError: if the URI is not a non-empty base64 data URI
    """
    if not data_uri or not isinstance(data_uri, str):
        raise InputError("no photo supplied")

    match = _DATA_URI_RE.match(data_uri.strip())
    if not match:
        raise InputError("photo must be a base64 data URI with a mime type")

    try:
        payload = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError):
        raise InputError("photo data is not valid base64")

    if not payload:
        raise InputError("photo data is empty")

    return match.group("mime").lower(), payload


def describe_data_uri(data_uri: str) -> str:
    """Short description of a data URI for logs, never including the payload."""
    if not isinstance(data_uri, str):
        return "<missing>"
    header, _, data = data_uri.partition(",")
    return f"{header[:60]} ({len(data)} chars)"
