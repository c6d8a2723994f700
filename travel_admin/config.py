"""
Runtime configuration for the proposal service.

Read once by the process bootstrap (`create_app`) and passed down explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import os


PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_TEMPLATE_DIR = PACKAGE_DIR / "templates"


def _cors_origins(raw: Optional[str]) -> List[str]:
    if not raw or raw.strip() == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass(frozen=True)
class ProposalSettings:
    database_url: str = "sqlite:///./dev.db"
    template_dir: Path = DEFAULT_TEMPLATE_DIR
    template_name: str = "proposal.html"
    output_dir: Path = Path("public") / "generated-pdfs"
    url_prefix: str = "/generated-pdfs"
    # Upper bound for the network-idle wait before rasterizing.
    render_timeout_ms: int = 30000
    default_actor: str = "admin-user"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ProposalSettings":
        return cls(
            database_url=(os.getenv("DATABASE_URL") or "sqlite:///./dev.db").strip(),
            template_dir=Path(os.getenv("PROPOSAL_TEMPLATE_DIR") or DEFAULT_TEMPLATE_DIR),
            template_name=os.getenv("PROPOSAL_TEMPLATE_NAME") or "proposal.html",
            output_dir=Path(os.getenv("GENERATED_PDF_DIR") or Path("public") / "generated-pdfs"),
            url_prefix=(os.getenv("GENERATED_PDF_URL_PREFIX") or "/generated-pdfs").rstrip("/"),
            render_timeout_ms=int(os.getenv("PDF_RENDER_TIMEOUT_MS", "30000")),
            default_actor=(os.getenv("PROPOSAL_DEFAULT_ACTOR") or "admin-user").strip(),
            cors_origins=_cors_origins(os.getenv("CORS_ALLOW_ORIGINS")),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )
