"""
Headless Chromium rendering of proposal HTML to PDF bytes.

One browser per call, never pooled. The browser is closed on every path,
including failures.
"""

from __future__ import annotations

import logging
import time
from typing import Dict, List, Optional

from playwright.async_api import async_playwright

from travel_admin.errors import RenderError

logger = logging.getLogger("travel_admin.pdf_renderer")

CHROMIUM_ARGS: List[str] = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--disable-gpu",
]

PAGE_MARGINS: Dict[str, str] = {"top": "20px", "bottom": "40px", "left": "15px", "right": "15px"}


class PlaywrightPdfRenderer:
    def __init__(self, timeout_ms: int = 30000, launch_args: Optional[List[str]] = None):
        self.timeout_ms = timeout_ms
        self.launch_args = launch_args if launch_args is not None else list(CHROMIUM_ARGS)

    async def render(self, html: str) -> bytes:
        t0 = time.perf_counter()
        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(headless=True, args=self.launch_args)
                try:
                    page = await browser.new_page()
                    # Wait for remote images (hero photo) before rasterizing
                    await page.set_content(html, wait_until="networkidle", timeout=self.timeout_ms)
                    pdf_bytes = await page.pdf(
                        format="A4",
                        print_background=True,
                        margin=PAGE_MARGINS,
                        prefer_css_page_size=True,
                    )
                finally:
                    await self._close(browser)
        except Exception as e:
            logger.exception("pdf render failed")
            raise RenderError(f"Failed to generate PDF: {e}", details=repr(e)) from e

        logger.info(
            "pdf rendered",
            extra={"size_bytes": len(pdf_bytes), "latency_ms": int((time.perf_counter() - t0) * 1000)},
        )
        return pdf_bytes

    async def _close(self, browser):
        try:
            await browser.close()
        except Exception:
            logger.warning("browser close failed", exc_info=True)
