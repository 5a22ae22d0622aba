"""
Hex text <-> bytes conversion for bytecode strings.

Decoding and encoding are delegated to ``eth_utils``; this module only adds
the validation the disassembler relies on (lowercase ``0x`` prefix, even
length, hex digits only) so that bad input surfaces as ``InvalidHexCharacter``.
"""

import logging
import re

from eth_utils import decode_hex, encode_hex

from .errors import InvalidHexCharacter

logger = logging.getLogger(__name__)

HEX_PREFIX = "0x"

_NON_HEX = re.compile(r"[^0-9a-fA-F]")


def strip_0x_prefix(text: str) -> str:
    """Remove a leading ``0x``. Inputs shorter than the prefix are returned as-is."""
    if len(text) >= len(HEX_PREFIX) and text[:len(HEX_PREFIX)] == HEX_PREFIX:
        return text[len(HEX_PREFIX):]
    return text


def hex_to_bytes(text: str) -> bytes:
    """
    Decode a bytecode hex string.

    Args:
        text: Even-length hex digits, optionally prefixed with ``0x``

    Returns:
        Decoded bytes (empty for ``""`` and ``"0x"``)

    Raises:
        InvalidHexCharacter: On a non-hex character or an odd number of digits
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected hex text, got {type(text).__name__}")

    body = strip_0x_prefix(text)
    offset = len(text) - len(body)

    bad = _NON_HEX.search(body)
    if bad:
        logger.debug("Rejecting hex input: %r at position %d", bad.group(), offset + bad.start())
        raise InvalidHexCharacter(text, offset + bad.start())
    if len(body) % 2:
        logger.debug("Rejecting hex input: odd length %d", len(body))
        raise InvalidHexCharacter(body)

    return decode_hex(body)


def bytes_to_hex(data: bytes, prefix: bool = True) -> str:
    """Lowercase hex text for ``data``, with the ``0x`` prefix unless disabled."""
    encoded = encode_hex(bytes(data))
    return encoded if prefix else strip_0x_prefix(encoded)
