"""
Registry credential resolution for tracked images.

Credentials are looked up in this order:
1. Secrets explicitly declared for the tracked image
2. Image pull secrets of pods in the same namespace running the same image

The first secret that decodes to a username/password wins. When nothing is
found the result is anonymous (empty) credentials, never an error.
"""

from typing import Callable, Iterable, Iterator, Optional, Set

from pull_secrets.config_manager import ConfigManager, config_manager as default_config_manager
from pull_secrets.discovery import PodSecretDiscoverer
from pull_secrets.dockercfg import credentials_from_secret
from pull_secrets.errors import DecodeError, DiscoveryError, FetchError, NamespaceNotSpecifiedError
from pull_secrets.logging_utils import get_logger
from pull_secrets.types import Credentials, TrackedImage

logger = get_logger(__name__)


class Getter:
    """Resolves registry credentials for tracked images"""

    def __init__(self, implementer, config: Optional[ConfigManager] = None):
        """
        Args:
            implementer: Object with get_secret(namespace, name) and
                list_pods(namespace, field_selector=None)
            config: ConfigManager, defaults to the global instance. Settings
                are read once here and apply to every get() call.
        """
        self.implementer = implementer
        self.config = config or default_config_manager
        self.discoverer = PodSecretDiscoverer(implementer, field_selector=self.config.get_pod_field_selector())
        self.match_registry_host = self.config.get_match_registry_host()
        self.secret_types = self.config.get_secret_types()
        self.data_keys = self.config.get_data_keys()

    def get(self, tracked_image: TrackedImage) -> Credentials:
        """Return credentials for the tracked image, or anonymous credentials.

        Raises:
            NamespaceNotSpecifiedError: If the tracked image has no namespace
        """
        if not tracked_image.namespace:
            raise NamespaceNotSpecifiedError(details={"image": str(tracked_image.image)})

        sources = (
            lambda: tracked_image.secrets or [],
            lambda: self._discover(tracked_image),
        )

        tried: Set[str] = set()
        for name in self._candidate_names(sources):
            if name in tried:
                continue
            tried.add(name)

            creds = self._try_secret(tracked_image, name)
            if creds is not None:
                logger.info(f"Using credentials from secret {tracked_image.namespace}/{name} for {tracked_image.image}")
                return creds

        logger.debug(f"No credentials found for {tracked_image.image}, using anonymous access")
        return Credentials()

    @staticmethod
    def _candidate_names(sources: Iterable[Callable[[], Iterable[str]]]) -> Iterator[str]:
        # Each source is only evaluated once the previous ones are exhausted
        for source in sources:
            yield from source()

    def _discover(self, tracked_image: TrackedImage) -> Iterable[str]:
        try:
            return self.discoverer.discover(tracked_image.namespace, tracked_image.image)
        except DiscoveryError as e:
            logger.warning(f"Pull secret discovery failed for {tracked_image.image}: {e.message}")
            logger.debug(str(e))
            return []

    def _try_secret(self, tracked_image: TrackedImage, name: str) -> Optional[Credentials]:
        """Credentials from one secret, or None if the secret yields nothing"""
        try:
            secret = self.implementer.get_secret(tracked_image.namespace, name)
        except FetchError as e:
            logger.debug(f"Skipping secret {tracked_image.namespace}/{name}: {e.message}")
            return None

        registry = tracked_image.image.registry if self.match_registry_host else None
        try:
            creds = credentials_from_secret(
                secret,
                registry=registry,
                secret_types=self.secret_types,
                data_keys=self.data_keys,
            )
        except DecodeError as e:
            logger.debug(f"Skipping secret {tracked_image.namespace}/{name}: {e.message}")
            return None

        if creds.is_anonymous:
            logger.debug(f"Secret {tracked_image.namespace}/{name} decoded to empty credentials")
            return None
        return creds
