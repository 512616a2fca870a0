"""Signature scheme used by the storefront app proxy.

The platform signs every forwarded request: all query parameters except
``signature`` are sorted by name, rendered as ``name=value`` and joined
with no separator, then HMAC-SHA256'd with the app secret. The lowercase
hex digest travels as the ``signature`` query parameter.
"""

import hashlib
import hmac
import logging
from typing import Iterable, Mapping, Tuple, Union

logger = logging.getLogger(__name__)

SIGNATURE_PARAM = "signature"

ParamValue = Union[str, Iterable[str]]


def collect_params(items: Iterable[Tuple[str, str]]) -> dict[str, str]:
    """Fold (name, value) pairs into a mapping.

    Repeated names are joined with ``,`` the way the platform renders
    array values before signing.
    """
    grouped: dict[str, list[str]] = {}
    for name, value in items:
        grouped.setdefault(name, []).append(value)
    return {name: ",".join(values) for name, values in grouped.items()}


def _render(value: ParamValue) -> str:
    if isinstance(value, str):
        return value
    return ",".join(value)


def canonical_message(params: Mapping[str, ParamValue]) -> str:
    """Return the exact string the platform signs for *params*."""
    return "".join(
        f"{name}={_render(params[name])}"
        for name in sorted(params)
        if name != SIGNATURE_PARAM
    )


def sign_params(params: Mapping[str, ParamValue], secret: str) -> str:
    """Compute the hex signature the platform would attach to *params*."""
    message = canonical_message(params)
    return hmac.new(
        secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256
    ).hexdigest()


def verify_signature(params: Mapping[str, ParamValue], secret: str) -> bool:
    """Return True if *params* carries a valid ``signature`` for *secret*.

    Never raises: a missing signature, an empty secret, or a mismatch all
    yield False.
    """
    received = params.get(SIGNATURE_PARAM)
    if not received:
        logger.warning("No signature in request")
        return False
    if not secret:
        logger.error("App secret not configured, rejecting signed request")
        return False
    if not isinstance(received, str):
        received = _render(received)

    expected = sign_params(params, secret)
    if not hmac.compare_digest(expected.encode("ascii"), received.encode("utf-8")):
        logger.warning("Signature mismatch, received %r", received)
        return False
    logger.info("Signature valid")
    return True
