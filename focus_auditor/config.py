"""Run configuration and URL-list loading."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .audits.traversal import TraversalOptions
from .collectors.browser import ScanOptions
from .policy import AuditPolicy

DEFAULT_FORMATS = ("html",)


@dataclass
class AuditConfig:
    """Settings shared by every page audited in one run."""

    urls: List[str] = field(default_factory=list)
    output_dir: Optional[Path] = None
    formats: Tuple[str, ...] = DEFAULT_FORMATS
    viewport: Tuple[int, int] = (1920, 1080)
    headless: bool = True
    page_settle: float = 1.0
    page_load_timeout: int = 30
    settle_interval: float = 0.3
    traversal: TraversalOptions = field(default_factory=TraversalOptions)
    policy: AuditPolicy = field(default_factory=AuditPolicy)
    scan: ScanOptions = field(default_factory=ScanOptions)

    def __post_init__(self):
        """Fill unset values from the environment."""
        if self.output_dir is None:
            self.output_dir = Path(os.getenv("FOCUS_AUDIT_OUTPUT_DIR", "reports"))
        else:
            self.output_dir = Path(self.output_dir)
        if not self.urls:
            urls_file = os.getenv("FOCUS_AUDIT_URLS_FILE")
            if urls_file:
                self.urls = load_target_urls(urls_file)


def load_target_urls(path: Union[str, Path]) -> List[str]:
    """Read target URLs from ``{"urls": [...]}`` or a bare JSON list."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("urls")
    if not isinstance(data, list) or not all(isinstance(url, str) for url in data):
        raise ValueError(f"{path}: expected a list of URL strings or an object with a 'urls' list")
    return [url.strip() for url in data if url.strip()]
