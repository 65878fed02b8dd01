"""
Decoders for Docker registry credential documents.

Handles both layouts Kubernetes stores in image pull secrets:
- .dockercfg: {"https://index.docker.io/v1/": {"username": ..., "password": ..., "auth": ...}}
- .dockerconfigjson: {"auths": {"https://index.docker.io/v1/": {...}}}
"""

import base64
import binascii
import json
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from pull_secrets.errors import DecodeError, EmptyTokenError
from pull_secrets.image import normalize_registry_host
from pull_secrets.logging_utils import get_logger
from pull_secrets.types import Credentials

logger = get_logger(__name__)

DOCKERCFG_SECRET_TYPES = ("kubernetes.io/dockercfg", "kubernetes.io/dockerconfigjson")
DOCKERCFG_DATA_KEYS = (".dockerconfigjson", ".dockercfg")


def decode_base64_secret(token: str) -> Tuple[str, str]:
    """Decode a base64 "username:password" auth token.

    The value is split on the first ':'. A value without ':' is returned as
    the username with an empty password.

    Raises:
        EmptyTokenError: If the token is empty
        DecodeError: If the token is not valid base64 or not UTF-8
    """
    if token == "":
        raise EmptyTokenError()

    try:
        decoded = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, ValueError, TypeError) as e:
        raise DecodeError("Auth token is not valid base64", details={"error_message": str(e)})

    username, _, password = decoded.partition(":")
    return username, password


def _string_field(entry: Dict[str, Any], name: str) -> str:
    value = entry.get(name)
    return value if isinstance(value, str) else ""


def _registry_table(document: Any) -> Dict[str, Any]:
    if not isinstance(document, dict):
        raise DecodeError("Docker config must be a JSON object")
    auths = document.get("auths")
    if isinstance(auths, dict):
        return auths
    return document


def _select_entry(table: Dict[str, Any], registry: Optional[str]) -> Tuple[str, Any]:
    if not table:
        raise DecodeError(
            "Docker config has no registry entries",
            suggestions=["Add at least one registry host entry to the secret"],
        )

    if registry:
        wanted = normalize_registry_host(registry)
        for host, entry in table.items():
            if normalize_registry_host(host) == wanted:
                return host, entry
        logger.debug(f"No entry for registry {registry}, using first entry")

    return next(iter(table.items()))


def decode_dockercfg(payload: Union[bytes, str], registry: Optional[str] = None) -> Credentials:
    """Decode a dockercfg/dockerconfigjson document into credentials.

    Args:
        payload: Raw JSON document
        registry: Registry host of the image being pulled. When given, the
            entry for that host is preferred; otherwise the first entry is used.

    Returns:
        Credentials from the selected registry entry

    Raises:
        DecodeError: If the document is not valid JSON, has no registry
            entries, or the selected entry has no usable credentials
        EmptyTokenError: If the entry falls back to an empty 'auth' field
    """
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError("Docker config is not UTF-8", details={"error_message": str(e)})

    try:
        document = json.loads(payload)
    except ValueError as e:
        raise DecodeError("Docker config is not valid JSON", details={"error_message": str(e)})

    host, entry = _select_entry(_registry_table(document), registry)
    if not isinstance(entry, dict):
        raise DecodeError(f"Registry entry for {host} is not an object")

    # Non-string fields are treated as absent
    username = _string_field(entry, "username")
    password = _string_field(entry, "password")
    if username and password:
        return Credentials(username=username, password=password)

    if "auth" in entry:
        auth = entry["auth"]
        if auth is not None and not isinstance(auth, str):
            raise DecodeError(
                f"Registry entry for {host} has a non-string auth field",
                details={"registry": host, "auth_type": type(auth).__name__},
            )
        username, password = decode_base64_secret(auth or "")
        return Credentials(username=username, password=password)

    raise DecodeError(
        f"Registry entry for {host} has no username/password or auth field",
        details={"registry": host},
    )


def credentials_from_secret(secret: Any, registry: Optional[str] = None,
                            secret_types: Sequence[str] = DOCKERCFG_SECRET_TYPES,
                            data_keys: Sequence[str] = DOCKERCFG_DATA_KEYS) -> Credentials:
    """Extract credentials from a Kubernetes image pull secret.

    Args:
        secret: V1Secret (or any object with 'type' and 'data' attributes).
            Data values are base64 encoded, as returned by the Kubernetes API.
        registry: Registry host to prefer when selecting an entry
        secret_types: Secret types trusted to carry a dockercfg payload
        data_keys: Data keys to read, first present wins

    Raises:
        DecodeError: If the secret is of the wrong type, lacks a payload, or
            the payload cannot be decoded
    """
    secret_type = getattr(secret, "type", None)
    if secret_type not in secret_types:
        raise DecodeError(
            f"Secret type {secret_type!r} is not a registry credential type",
            suggestions=[f"Create the secret with type {' or '.join(secret_types)}"],
        )

    data = getattr(secret, "data", None) or {}
    key = next((k for k in data_keys if data.get(k)), None)
    if key is None:
        raise DecodeError(
            "Secret does not contain a docker config payload",
            details={"expected_keys": ", ".join(data_keys)},
        )

    try:
        payload = base64.b64decode(data[key], validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Secret data {key} is not valid base64", details={"error_message": str(e)})

    return decode_dockercfg(payload, registry=registry)
