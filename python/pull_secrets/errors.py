"""
Error types for registry credential resolution.

Every error carries actionable guidance: a category, suggested fixes and
extra details, rendered together in the exception message.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCategory(Enum):
    """Categories of errors for better error handling"""
    FETCH = "fetch"
    DISCOVERY = "discovery"
    DECODE = "decode"
    CONFIGURATION = "configuration"
    PERMISSION = "permission"
    UNKNOWN = "unknown"


class ActionableError(Exception):
    """Exception with actionable guidance for users"""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN,
                 suggestions: Optional[List[str]] = None, details: Optional[Dict[str, Any]] = None):
        """Initialize actionable error

        Args:
            message: Primary error message
            category: Error category for classification
            suggestions: List of suggested fixes
            details: Additional context information
        """
        self.message = message
        self.category = category
        self.suggestions = suggestions or []
        self.details = details or {}
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format the complete error message with suggestions"""
        lines = [self.message]

        if self.suggestions:
            lines.append("\nSuggested fixes:")
            for i, suggestion in enumerate(self.suggestions, 1):
                lines.append(f"   {i}. {suggestion}")

        if self.details:
            lines.append("\nAdditional details:")
            for key, value in self.details.items():
                lines.append(f"   {key}: {value}")

        return "\n".join(lines)


class FetchError(ActionableError):
    """A secret could not be read from the cluster"""

    def __init__(self, message: str, namespace: str, name: str, status: Optional[int] = None, **kwargs):
        self.namespace = namespace
        self.name = name
        self.status = status
        kwargs.setdefault("category", ErrorCategory.FETCH)
        super().__init__(message, **kwargs)


class DiscoveryError(ActionableError):
    """Pods could not be listed while looking for image pull secrets"""

    def __init__(self, message: str, namespace: str, status: Optional[int] = None, **kwargs):
        self.namespace = namespace
        self.status = status
        kwargs.setdefault("category", ErrorCategory.DISCOVERY)
        super().__init__(message, **kwargs)


class DecodeError(ActionableError):
    """A secret payload or auth token could not be interpreted"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("category", ErrorCategory.DECODE)
        super().__init__(message, **kwargs)


class EmptyTokenError(DecodeError):
    """The base64 auth token was empty"""

    def __init__(self, message: str = "Auth token is empty", **kwargs):
        kwargs.setdefault("suggestions", [
            "Populate the 'auth' field with base64('username:password')",
            "Or set 'username' and 'password' fields directly in the registry entry",
        ])
        super().__init__(message, **kwargs)


class NamespaceNotSpecifiedError(ActionableError):
    """Credential lookup was requested without a namespace"""

    def __init__(self, message: str = "Namespace not specified for tracked image", **kwargs):
        kwargs.setdefault("category", ErrorCategory.CONFIGURATION)
        kwargs.setdefault("suggestions", [
            "Pass the namespace the workload runs in",
            "Set PULL_SECRETS_NAMESPACE or kubernetes.namespace in config.yaml",
        ])
        super().__init__(message, **kwargs)


def _status_of(error: Exception) -> Optional[int]:
    status = getattr(error, "status", None)
    return status if isinstance(status, int) else None


def create_fetch_error(namespace: str, name: str, error: Exception) -> FetchError:
    """Create actionable error for secret read failures"""
    error_str = str(error).lower()
    status = _status_of(error)

    suggestions = [
        f"Verify secret '{name}' exists (kubectl -n {namespace} get secret {name})",
        "Verify Kubernetes cluster access (kubectl cluster-info)",
        "Verify RBAC permissions allow 'get' on secrets",
    ]
    category = ErrorCategory.FETCH

    if status == 403 or "forbidden" in error_str:
        category = ErrorCategory.PERMISSION
        suggestions.insert(0, "Grant the service account 'get' on secrets in this namespace")

    if status == 404 or "not found" in error_str:
        suggestions.insert(0, "Check the secret name referenced in imagePullSecrets")

    return FetchError(
        message=f"Failed to read secret {namespace}/{name}",
        namespace=namespace,
        name=name,
        status=status,
        category=category,
        suggestions=suggestions,
        details={
            "namespace": namespace,
            "secret": name,
            "error_type": type(error).__name__,
            "error_message": str(error),
        },
    )


def create_discovery_error(namespace: str, error: Exception) -> DiscoveryError:
    """Create actionable error for pod listing failures"""
    error_str = str(error).lower()
    status = _status_of(error)

    suggestions = [
        f"Verify namespace '{namespace}' exists and is accessible",
        "Verify RBAC permissions allow 'list' on pods",
    ]
    category = ErrorCategory.DISCOVERY

    if status == 403 or "forbidden" in error_str:
        category = ErrorCategory.PERMISSION
        suggestions.insert(0, "Grant the service account 'list' on pods in this namespace")

    return DiscoveryError(
        message=f"Failed to list pods in namespace {namespace}",
        namespace=namespace,
        status=status,
        category=category,
        suggestions=suggestions,
        details={
            "namespace": namespace,
            "error_type": type(error).__name__,
            "error_message": str(error),
        },
    )
