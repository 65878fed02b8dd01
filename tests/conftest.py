"""
Pytest configuration file.

Sets up the Python path so test files can import from the python/ directory,
and provides builders for Kubernetes secrets and pods.
"""
import base64
import json
import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Keep the module-level config_manager from validating a stray config.yaml
os.environ.setdefault("SKIP_CONFIG_VALIDATION", "true")

# Add python directory to path for all tests
_python_dir = Path(__file__).parent.parent / 'python'
_python_dir_abs = str(_python_dir.absolute())
if _python_dir_abs not in sys.path:
    sys.path.insert(0, _python_dir_abs)

from kubernetes.client import (  # noqa: E402
    V1Container,
    V1LocalObjectReference,
    V1ObjectMeta,
    V1Pod,
    V1PodList,
    V1PodSpec,
    V1Secret,
)

WEBHOOK_DEMO_IMAGE = "karolisr/webhook-demo:0.0.11"


def b64(value: str) -> str:
    return base64.b64encode(value.encode()).decode()


def make_secret(document, secret_type="kubernetes.io/dockercfg", key=".dockerconfigjson") -> V1Secret:
    """Build a V1Secret the way the API returns it (base64 encoded data values)"""
    payload = document if isinstance(document, str) else json.dumps(document)
    return V1Secret(type=secret_type, data={key: b64(payload)})


def make_pod(name, images, pull_secrets=(), init_images=()) -> V1Pod:
    return V1Pod(
        metadata=V1ObjectMeta(name=name, namespace="default"),
        spec=V1PodSpec(
            containers=[V1Container(name=f"c{i}", image=image) for i, image in enumerate(images)],
            init_containers=[V1Container(name=f"init{i}", image=image) for i, image in enumerate(init_images)] or None,
            image_pull_secrets=[V1LocalObjectReference(name=s) for s in pull_secrets] or None,
        ),
    )


@pytest.fixture
def core_v1():
    """Mocked CoreV1Api"""
    mock = MagicMock()
    mock.list_namespaced_pod.return_value = V1PodList(items=[])
    return mock


@pytest.fixture
def pod_list():
    def _build(*pods):
        return V1PodList(items=list(pods))
    return _build


@pytest.fixture
def config():
    """ConfigManager with default values only"""
    from pull_secrets.config_manager import ConfigManager

    return ConfigManager(config_file="/nonexistent/config.yaml", validate=False)
