"""
Kubernetes access for secret reads and pod listing.

Wraps CoreV1Api so callers only ever see FetchError / DiscoveryError.
"""

from typing import Any, List, Optional

from pull_secrets.errors import create_discovery_error, create_fetch_error
from pull_secrets.logging_utils import get_logger

logger = get_logger(__name__)


def _load_kubernetes_config():
    """Helper function to load Kubernetes configuration.

    Tries in-cluster config first, then falls back to local kubeconfig.

    Raises:
        Exception if both methods fail
    """
    try:
        from kubernetes.config import load_incluster_config

        load_incluster_config()
    except Exception:
        from kubernetes.config import load_kube_config

        load_kube_config()


def _get_kubernetes_core_client():
    """Helper function to get Kubernetes CoreV1Api client.

    Returns:
        CoreV1Api instance
    """
    from kubernetes import client as k8s_client

    _load_kubernetes_config()
    return k8s_client.CoreV1Api()


class KubernetesImplementer:
    """Reads secrets and lists pods through the Kubernetes API"""

    def __init__(self, core_v1: Any = None):
        """
        Args:
            core_v1: CoreV1Api instance. Created from in-cluster config or
                kubeconfig on first use when not given.
        """
        self._core_v1 = core_v1

    @property
    def core_v1(self):
        if self._core_v1 is None:
            self._core_v1 = _get_kubernetes_core_client()
        return self._core_v1

    def get_secret(self, namespace: str, name: str):
        """Read a secret.

        Raises:
            FetchError: If the secret cannot be read for any reason
        """
        logger.debug(f"Reading secret {name} from namespace {namespace}")
        try:
            return self.core_v1.read_namespaced_secret(name=name, namespace=namespace)
        except Exception as e:
            raise create_fetch_error(namespace, name, e) from e

    def list_pods(self, namespace: str, field_selector: Optional[str] = None) -> List[Any]:
        """List pods in a namespace.

        Raises:
            DiscoveryError: If the pods cannot be listed
        """
        kwargs = {"namespace": namespace}
        if field_selector:
            kwargs["field_selector"] = field_selector
        try:
            pods = self.core_v1.list_namespaced_pod(**kwargs)
        except Exception as e:
            raise create_discovery_error(namespace, e) from e
        return list(pods.items or [])
