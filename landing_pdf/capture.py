"""
Capture session: one browser, one context per device profile, one PDF each.

Profiles are processed strictly one after another. The browser is closed on
every exit path; an error inside a profile aborts the rest of the batch.
"""

import math
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Tuple

from PIL import Image
from playwright.sync_api import sync_playwright, Error as PWError

from .devices import DEVICE_PROFILES, DeviceProfile, context_options, get_profile
from .health import SiteUnavailableError, check_site_health

MAX_INITIAL_DELAY = 30
MAX_PAGE_DELAY = 10
ENGINES = ("chromium", "firefox", "webkit")
CSS_PX_PER_INCH = 96.0


@dataclass(frozen=True)
class CaptureRequest:
    url: str
    output_name: str = "landing-page.pdf"
    initial_delay: int = 0
    page_delay: int = 0
    devices: Tuple[str, ...] = ("desktop",)

    def __post_init__(self):
        if not 0 <= self.initial_delay <= MAX_INITIAL_DELAY:
            raise ValueError(f"initial delay must be between 0 and {MAX_INITIAL_DELAY} seconds")
        if not 0 <= self.page_delay <= MAX_PAGE_DELAY:
            raise ValueError(f"page delay must be between 0 and {MAX_PAGE_DELAY} seconds")
        if not self.devices:
            raise ValueError("at least one device type is required")
        unknown = [d for d in self.devices if d not in DEVICE_PROFILES]
        if unknown:
            raise ValueError(f"unknown device type(s): {', '.join(unknown)}")


@dataclass(frozen=True)
class BrowserOptions:
    engine: str = "chromium"
    headless: bool = True
    insecure: bool = False
    timeout_ms: Optional[int] = None


# ---------- filenames ----------

def output_filename(base_name: str, device: str, device_count: int) -> str:
    """<base>.pdf for a single device, <base>-<device>.pdf when several are requested."""
    stem = Path(base_name).name
    if stem.endswith(".pdf"):
        stem = stem[: -len(".pdf")]
    suffix = f"-{device}" if device_count > 1 else ""
    return f"{stem}{suffix}.pdf"

# ---------- page steps ----------

def dismiss_popups(page, tag: str):
    """Best effort: click the top-right corner, then the centre, then press Escape."""
    try:
        print(f"[{tag}] Attempting to close any popups by clicking on the page...")
        page.wait_for_timeout(2000)
        dims = page.evaluate("() => ({width: window.innerWidth, height: window.innerHeight})")

        page.mouse.click(dims["width"] - 50, 50)
        print(f"[{tag}] Clicked top-right corner to dismiss possible popups")
        page.wait_for_timeout(500)

        page.mouse.click(dims["width"] / 2, dims["height"] / 2)
        print(f"[{tag}] Clicked center of page to dismiss possible popups")
        page.wait_for_timeout(500)

        page.keyboard.press("Escape")
        print(f"[{tag}] Pressed Escape key to dismiss possible popups")
    except PWError as e:
        print(f"[{tag}] Error handling popups: {e}")


def scroll_through_pages(page, page_delay: int, viewport_height: int, tag: str) -> int:
    """Scroll one viewport at a time, pausing page_delay seconds at each stop.

    Returns the number of viewport-height pages the content spans.
    """
    content_height = page.evaluate("() => document.body.scrollHeight")
    num_pages = math.ceil(content_height / viewport_height)
    print(f"[{tag}] Content requires approximately {num_pages} pages")

    if num_pages > 1:
        for i in range(1, num_pages):
            page.evaluate("(y) => window.scrollTo(0, y)", i * viewport_height)
            print(f"[{tag}] Scrolling to page {i + 1} and waiting {page_delay} seconds...")
            page.wait_for_timeout(page_delay * 1000)
        page.evaluate("() => window.scrollTo(0, 0)")
    return num_pages


def export_pdf(page, path: Path, profile: DeviceProfile, engine: str = "chromium"):
    size = page.viewport_size or {"width": profile.width, "height": profile.height}
    print(f"[{profile.name}] Generating PDF with viewport: {size['width']}x{size['height']}")

    if engine == "chromium":
        page.pdf(
            path=str(path),
            width=f"{size['width']}px",
            height=f"{size['height']}px",
            print_background=True,
        )
        return

    # Only Chromium can print to PDF; other engines go through a full-page screenshot
    png = page.screenshot(full_page=True)
    img = Image.open(BytesIO(png)).convert("RGB")
    img.save(path, "PDF", resolution=CSS_PX_PER_INCH * profile.device_scale_factor)

# ---------- core capture ----------

def capture_device(browser, request: CaptureRequest, device: str, options: BrowserOptions) -> Path:
    profile = get_profile(device)
    opts = context_options(profile)
    if options.engine == "firefox":
        # Firefox rejects mobile emulation; viewport and UA still apply
        opts.pop("is_mobile")
    context = browser.new_context(ignore_https_errors=options.insecure, **opts)
    try:
        page = context.new_page()
        if options.timeout_ms is not None:
            page.set_default_navigation_timeout(options.timeout_ms)

        def on_dialog(dialog):
            print(f"[{device}] Auto-dismissing dialog: {dialog.message}")
            dialog.dismiss()

        page.on("dialog", on_dialog)
        page.goto(request.url, wait_until="networkidle")

        dismiss_popups(page, device)

        if request.initial_delay > 0:
            print(f"[{device}] Waiting initial {request.initial_delay} seconds for page to fully load...")
            page.wait_for_timeout(request.initial_delay * 1000)

        if request.page_delay > 0:
            print(f"[{device}] Using {request.page_delay} second delay between pages for multi-page content")
            size = page.viewport_size or {"height": profile.height}
            scroll_through_pages(page, request.page_delay, size["height"], device)

        out_path = Path(output_filename(request.output_name, device, len(request.devices)))
        export_pdf(page, out_path, profile, options.engine)
        print(f"[{device}] PDF generated as {out_path}")
        return out_path
    finally:
        context.close()


def generate_pdfs(request: CaptureRequest, options: Optional[BrowserOptions] = None) -> List[Path]:
    options = options or BrowserOptions()
    if options.engine not in ENGINES:
        raise ValueError(f"unsupported browser engine: {options.engine}")

    if not check_site_health(request.url, verify=not options.insecure):
        raise SiteUnavailableError(f"Site is not available: {request.url}")

    written: List[Path] = []
    with sync_playwright() as p:
        launcher = getattr(p, options.engine)
        browser = launcher.launch(headless=options.headless)
        try:
            for device in request.devices:
                written.append(capture_device(browser, request, device, options))
        finally:
            browser.close()

    print("All requested PDFs have been generated.")
    return written
