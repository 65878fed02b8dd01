"""
Container image reference parsing.

Turns image strings as they appear in pod specs into a structured identity
so that "nginx", "library/nginx:latest" and "docker.io/library/nginx:latest"
compare equal.
"""

from dataclasses import dataclass
from typing import Optional

DEFAULT_REGISTRY = "docker.io"
DEFAULT_TAG = "latest"

# Hosts that all refer to Docker Hub
DOCKER_HUB_ALIASES = frozenset({
    "docker.io",
    "index.docker.io",
    "registry-1.docker.io",
    "registry.hub.docker.com",
})


def normalize_registry_host(host: str) -> str:
    """Normalize a registry host or URL for comparison.

    Strips scheme and path ("https://index.docker.io/v1/" -> "index.docker.io"),
    lowercases, and folds Docker Hub aliases to "docker.io".
    """
    host = host.strip().lower()
    if "://" in host:
        host = host.split("://", 1)[1]
    host = host.split("/", 1)[0]
    if host in DOCKER_HUB_ALIASES:
        return DEFAULT_REGISTRY
    return host


def _looks_like_registry(component: str) -> bool:
    return "." in component or ":" in component or component == "localhost"


@dataclass(frozen=True)
class ImageReference:
    """Structured image identity: registry host, repository, tag and digest"""
    registry: str
    repository: str
    tag: Optional[str] = DEFAULT_TAG
    digest: Optional[str] = None

    @classmethod
    def parse(cls, ref: str) -> "ImageReference":
        """Parse an image reference string.

        Examples:
            nginx -> docker.io/library/nginx:latest
            karolisr/webhook-demo:0.0.11 -> docker.io/karolisr/webhook-demo:0.0.11
            registry.example.com:5000/team/app:v1 -> registry.example.com:5000/team/app:v1
            nginx@sha256:abc -> docker.io/library/nginx@sha256:abc

        Raises:
            ValueError: If the reference is empty or malformed
        """
        if not ref or not ref.strip():
            raise ValueError("image reference is empty")
        name = ref.strip()

        digest = None
        if "@" in name:
            name, digest = name.split("@", 1)
            if not digest or ":" not in digest:
                raise ValueError(f"invalid digest in image reference: {ref}")

        # A tag colon can only appear after the last slash; earlier colons are registry ports
        tag = None
        last_slash = name.rfind("/")
        colon = name.rfind(":")
        if colon > last_slash:
            name, tag = name[:colon], name[colon + 1:]
            if not tag:
                raise ValueError(f"empty tag in image reference: {ref}")
        if tag is None and digest is None:
            tag = DEFAULT_TAG

        parts = name.split("/")
        if any(not part for part in parts):
            raise ValueError(f"invalid repository in image reference: {ref}")

        if len(parts) > 1 and _looks_like_registry(parts[0]):
            registry = normalize_registry_host(parts[0])
            repository = "/".join(parts[1:])
        else:
            registry = DEFAULT_REGISTRY
            repository = name

        if registry == DEFAULT_REGISTRY and "/" not in repository:
            repository = f"library/{repository}"

        return cls(registry=registry, repository=repository, tag=tag, digest=digest)

    def remote(self) -> str:
        """Full reference string, e.g. docker.io/library/nginx:latest"""
        ref = f"{self.registry}/{self.repository}"
        if self.tag:
            ref = f"{ref}:{self.tag}"
        if self.digest:
            ref = f"{ref}@{self.digest}"
        return ref

    def matches(self, image: str) -> bool:
        """True if the image string names the same identity as this reference"""
        try:
            return ImageReference.parse(image) == self
        except ValueError:
            return False

    def __str__(self) -> str:
        return self.remote()
