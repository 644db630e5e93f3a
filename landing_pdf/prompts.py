"""Interactive collection of the capture settings when no URL is given."""

import re
from urllib.parse import urlparse

from .capture import MAX_INITIAL_DELAY, MAX_PAGE_DELAY, CaptureRequest
from .devices import DEVICE_PROFILES, DEFAULT_DEVICE

# ---------- helpers ----------

def ensure_scheme(url: str) -> str:
    if not re.match(r"^https?://", url, flags=re.I):
        return "https://" + url
    return url

def is_valid_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        # e.g. an unterminated IPv6 host: "http://[broken"
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)

def ensure_pdf_suffix(name: str) -> str:
    return name if name.endswith(".pdf") else name + ".pdf"

# ---------- prompts ----------

def ask(message: str, default: str, validate):
    """Re-prompt until validate() returns None; it returns an error message otherwise."""
    while True:
        answer = input(f"{message} [{default}]: ").strip() or default
        error = validate(answer)
        if error is None:
            return answer
        print(f"  {error}")


def _validate_url(answer: str):
    if not is_valid_url(ensure_scheme(answer)):
        return "Please enter a valid URL"
    return None


def _validate_devices(answer: str):
    tokens = [t for t in re.split(r"[\s,]+", answer.lower()) if t]
    unknown = [t for t in tokens if t not in DEVICE_PROFILES]
    if not tokens:
        return "Please select at least one device type"
    if unknown:
        return f"Unknown device type(s): {', '.join(unknown)}"
    return None


def _delay_validator(maximum: int):
    def validate(answer: str):
        try:
            value = int(answer)
        except ValueError:
            return "Please enter a number"
        if not 0 <= value <= maximum:
            return f"Delay must be between 0 and {maximum} seconds"
        return None
    return validate


def prompt_for_request() -> CaptureRequest:
    print("Landing Page PDF Generator")
    print("--------------------------------")

    url = ask("Enter website URL", "https://example.com", _validate_url)
    output = ask(
        "Enter output filename (without extension)", "landing-page",
        lambda a: None if a else "Filename must not be empty",
    )

    for p in DEVICE_PROFILES.values():
        print(f"  - {p.name}: {p.label}")
    devices_raw = ask("Select device types (comma separated)", DEFAULT_DEVICE, _validate_devices)
    devices = []
    for t in re.split(r"[\s,]+", devices_raw.lower()):
        if t and t not in devices:
            devices.append(t)

    initial_delay = ask(
        "Initial delay in seconds before capturing page", "2", _delay_validator(MAX_INITIAL_DELAY)
    )
    page_delay = ask(
        "Delay between capturing pages in seconds", "1", _delay_validator(MAX_PAGE_DELAY)
    )

    return CaptureRequest(
        url=ensure_scheme(url),
        output_name=ensure_pdf_suffix(output),
        initial_delay=int(initial_delay),
        page_delay=int(page_delay),
        devices=tuple(devices),
    )
