import os
from dataclasses import dataclass
from typing import Optional

from .listing import DEFAULT_MAX_DEPTH

DEFAULT_PORT = 8080
DEFAULT_HOST = "0.0.0.0"


@dataclass(frozen=True)
class Config:
    """Settings fixed at startup and shared read-only by every request."""

    root: str
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    local_only: bool = True
    max_depth: int = DEFAULT_MAX_DEPTH
    max_upload_bytes: Optional[int] = None

    def __post_init__(self):
        # frozen, so bypass __setattr__ to store the absolute form
        object.__setattr__(self, "root", os.path.abspath(os.path.expanduser(self.root)))
