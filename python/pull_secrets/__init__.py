"""
Registry pull credential resolution for Kubernetes workloads.

This package resolves username/password pairs for a container image from:
- Image pull secrets declared for the workload
- Image pull secrets of pods already running the same image
falling back to anonymous access when nothing usable is found.
"""

from pull_secrets.dockercfg import credentials_from_secret, decode_base64_secret, decode_dockercfg
from pull_secrets.errors import (
    DecodeError,
    DiscoveryError,
    EmptyTokenError,
    FetchError,
    NamespaceNotSpecifiedError,
)
from pull_secrets.getter import Getter
from pull_secrets.image import ImageReference
from pull_secrets.kube import KubernetesImplementer
from pull_secrets.types import Credentials, TrackedImage

__all__ = [
    "Credentials",
    "DecodeError",
    "DiscoveryError",
    "EmptyTokenError",
    "FetchError",
    "Getter",
    "ImageReference",
    "KubernetesImplementer",
    "NamespaceNotSpecifiedError",
    "TrackedImage",
    "credentials_from_secret",
    "decode_base64_secret",
    "decode_dockercfg",
]
