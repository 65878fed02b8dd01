from dataclasses import dataclass, field
from typing import List, Optional

from pull_secrets.image import ImageReference


@dataclass
class Credentials:
    """Registry credentials. Empty username and password mean anonymous pull."""
    username: str = ""
    password: str = field(default="", repr=False)

    @property
    def is_anonymous(self) -> bool:
        return not self.username and not self.password


@dataclass
class TrackedImage:
    """An image a workload pulls, the namespace it runs in and its declared pull secrets"""
    image: ImageReference
    namespace: str
    secrets: Optional[List[str]] = field(default_factory=list)
