from typing import Any, Iterator, List, Optional

from pull_secrets.image import ImageReference
from pull_secrets.logging_utils import get_logger

logger = get_logger(__name__)


def _pod_images(pod: Any) -> Iterator[str]:
    spec = pod.spec
    if spec is None:
        return
    for container in (spec.containers or []) + (spec.init_containers or []):
        if container.image:
            yield container.image


def _pod_name(pod: Any) -> str:
    metadata = getattr(pod, "metadata", None)
    return getattr(metadata, "name", None) or "<unnamed>"


class PodSecretDiscoverer:
    """Finds image pull secrets referenced by pods that run a given image"""

    def __init__(self, implementer, field_selector: Optional[str] = None):
        """
        Args:
            implementer: Object with list_pods(namespace, field_selector=None)
            field_selector: Optional pod field selector, e.g. "status.phase=Running"
        """
        self.implementer = implementer
        self.field_selector = field_selector

    def discover(self, namespace: str, image: ImageReference) -> List[str]:
        """Return pull secret names of pods in namespace running image, in pod order.

        Names are not deduplicated.

        Raises:
            DiscoveryError: If pods cannot be listed
        """
        pods = self.implementer.list_pods(namespace, field_selector=self.field_selector)

        names = []
        for pod in pods:
            if not any(image.matches(pod_image) for pod_image in _pod_images(pod)):
                continue
            refs = pod.spec.image_pull_secrets or []
            found = [ref.name for ref in refs if ref.name]
            if found:
                logger.debug(f"Pod {_pod_name(pod)} runs {image} with pull secrets: {', '.join(found)}")
            names.extend(found)

        logger.debug(f"Discovered {len(names)} pull secret reference(s) for {image} in namespace {namespace}")
        return names
