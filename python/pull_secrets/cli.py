#!/usr/bin/env python3
"""
Resolve registry pull credentials for an image from the command line.

Looks at the given secrets first, then at pull secrets of pods running the
image. Prints the username and a masked password, or "anonymous".
"""

import argparse
import logging
import sys
from typing import List, Optional

from pull_secrets.config_manager import config_manager
from pull_secrets.errors import NamespaceNotSpecifiedError
from pull_secrets.getter import Getter
from pull_secrets.image import ImageReference
from pull_secrets.kube import KubernetesImplementer
from pull_secrets.logging_utils import get_logger, log_exception, mask_secret, setup_logging
from pull_secrets.types import TrackedImage


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Resolve registry pull credentials for a container image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Look up credentials from pods running the image
  pull-secrets --image karolisr/webhook-demo:0.0.11 --namespace default

  # Try an explicit secret first
  pull-secrets --image registry.example.com/team/app:v1 --secret myregistrysecret
        """,
    )
    parser.add_argument("--image", help="Image reference, e.g. nginx:1.25")
    parser.add_argument(
        "--namespace",
        default=None,
        help="Namespace of the workload (default: PULL_SECRETS_NAMESPACE or config value)",
    )
    parser.add_argument(
        "--secret",
        dest="secrets",
        action="append",
        default=[],
        help="Image pull secret name to try first (may be repeated)",
    )
    parser.add_argument("--show-password", action="store_true", help="Print the password in clear text")
    parser.add_argument("--print-config", action="store_true", help="Print the active configuration and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, implementer=None) -> int:
    args = parse_arguments(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)
    logger = get_logger(__name__)

    if args.print_config:
        config_manager.print_config()
        return 0

    if not args.image:
        logger.error("--image is required")
        return 1

    try:
        image = ImageReference.parse(args.image)
    except ValueError as e:
        logger.error(f"Invalid image reference '{args.image}': {e}")
        return 1

    namespace = args.namespace if args.namespace is not None else config_manager.get_namespace()
    tracked = TrackedImage(image=image, namespace=namespace, secrets=args.secrets)

    getter = Getter(implementer or KubernetesImplementer(), config=config_manager)
    try:
        creds = getter.get(tracked)
    except NamespaceNotSpecifiedError as e:
        log_exception(logger, f"Cannot resolve credentials for {image}", e)
        return 1
    except Exception as e:
        log_exception(logger, f"Unexpected error resolving credentials for {image}", e)
        return 1

    print(f"Image: {image}")
    print(f"Namespace: {namespace}")
    if creds.is_anonymous:
        print("Credentials: anonymous")
    else:
        print(f"Username: {creds.username}")
        print(f"Password: {creds.password if args.show_password else mask_secret(creds.password)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
