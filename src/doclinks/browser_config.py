"""
Browser configuration for the Playwright render backend.

This module provides a validated Pydantic configuration model for the
settings the render strategy uses when it launches a browser.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from doclinks.constants import RENDER_TIMEOUT_MS


# Chrome flags for running headless inside containers and CI runners
DEFAULT_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--disable-gpu",
    "--window-size=1920,1080",
]


class RenderConfig(BaseModel):
    """
    Configuration for the render backend session.

    All fields are validated by Pydantic to ensure type safety and valid values.
    """

    headless: bool = Field(
        default=True,
        description="Run browser in headless mode (no visible UI)"
    )

    timeout: int = Field(
        default=RENDER_TIMEOUT_MS,
        description="Page navigation timeout in milliseconds",
        ge=1000,
        le=300000
    )

    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = Field(
        default="networkidle",
        description="When to consider navigation complete"
    )

    viewport_width: int = Field(default=1920, ge=320)
    viewport_height: int = Field(default=1080, ge=240)

    executable_path: Optional[str] = Field(
        default=None,
        description="Explicit Chrome/Chromium binary. None searches the usual install paths."
    )

    launch_args: List[str] = Field(
        default_factory=lambda: list(DEFAULT_LAUNCH_ARGS),
        description="Additional browser launch arguments"
    )

    screenshot_path: Optional[str] = Field(
        default=None,
        description="Save a screenshot of each rendered page here (debug aid)"
    )

    @property
    def viewport(self) -> dict:
        return {"width": self.viewport_width, "height": self.viewport_height}
