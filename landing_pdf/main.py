#!/usr/bin/env python3
"""
landing-pdf

- Renders a web page to PDF with Playwright, once per device profile
- Profiles: desktop (1440x900), tablet (768x1024), mobile (375x667)
- Health check before launching the browser; unreachable sites abort the run
- Auto-dismisses dialogs, clicks away first-load popups, presses Escape
- Initial delay for late content, per-page delay to trigger lazy loading
- Prompts interactively for everything when no URL is given

Usage: landing-pdf <url> <output> <initial_delay> <page_delay> [desktop|tablet|mobile ...]
"""

import argparse
import sys
from typing import List, Optional

from playwright.sync_api import Error as PWError

from .capture import ENGINES, MAX_INITIAL_DELAY, MAX_PAGE_DELAY, BrowserOptions, CaptureRequest, generate_pdfs
from .devices import filter_device_names
from .prompts import ensure_pdf_suffix, ensure_scheme, is_valid_url, prompt_for_request

DEFAULT_OUTPUT = "landing-page"

# ---------- CLI ----------

def _delay(maximum: int):
    def parse(value: str) -> int:
        try:
            n = int(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid delay: {value!r}")
        if not 0 <= n <= maximum:
            raise argparse.ArgumentTypeError(f"delay must be between 0 and {maximum} seconds")
        return n
    return parse


def parse_args(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(description="Render a web page to PDF at one or more device sizes.")
    ap.add_argument("url", nargs="?", help="Website URL. Omit to be prompted for every setting.")
    ap.add_argument("output", nargs="?", default=None, help=f"Output file name (default: {DEFAULT_OUTPUT}.pdf)")
    ap.add_argument("initial_delay", nargs="?", type=_delay(MAX_INITIAL_DELAY), default=0,
                    help=f"Seconds to wait after load and popup dismissal (0-{MAX_INITIAL_DELAY}, default 0)")
    ap.add_argument("page_delay", nargs="?", type=_delay(MAX_PAGE_DELAY), default=0,
                    help=f"Seconds to wait at each scrolled page (0-{MAX_PAGE_DELAY}, default 0 = no scrolling)")
    ap.add_argument("devices", nargs="*", default=[],
                    help="Any of desktop, tablet, mobile. Unknown names are ignored (default: desktop)")
    ap.add_argument("--browser", choices=ENGINES, default="chromium",
                    help="Browser engine (default chromium). Firefox and WebKit cannot print to PDF: they export "
                         "a full-page screenshot as one page as tall as the content, not viewport-sized pages.")
    ap.add_argument("--insecure", action="store_true", help="Ignore HTTPS certificate errors.")
    ap.add_argument("--timeout-ms", type=int, default=None, help="Navigation timeout in ms (default: engine default).")
    ap.add_argument("--headed", action="store_true", help="Show the browser window.")
    return ap.parse_args(argv)


def build_request(args) -> CaptureRequest:
    url = ensure_scheme(args.url)
    if not is_valid_url(url):
        raise ValueError(f"Invalid URL: {args.url}")
    return CaptureRequest(
        url=url,
        output_name=ensure_pdf_suffix(args.output or DEFAULT_OUTPUT),
        initial_delay=args.initial_delay,
        page_delay=args.page_delay,
        devices=filter_device_names(args.devices),
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if args.url:
        try:
            request = build_request(args)
        except ValueError as e:
            print(e, file=sys.stderr)
            return 1
    else:
        try:
            request = prompt_for_request()
        except (EOFError, KeyboardInterrupt) as e:
            print(f"Error during interactive prompt: {e!r}", file=sys.stderr)
            return 1

    if not request.url:
        print("No URL provided. Please specify a URL to generate PDF.", file=sys.stderr)
        return 1

    options = BrowserOptions(
        engine=args.browser,
        headless=not args.headed,
        insecure=args.insecure,
        timeout_ms=args.timeout_ms,
    )
    try:
        written = generate_pdfs(request, options)
    except (RuntimeError, PWError) as e:
        print(f"Error generating PDF: {e}", file=sys.stderr)
        return 1

    print("Done!")
    for p in written:
        print(p)
    return 0


if __name__ == "__main__":
    sys.exit(main())
