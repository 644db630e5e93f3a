from io import BytesIO

import pytest
from PIL import Image
from playwright.sync_api import Error as PWError

from landing_pdf import capture


class FakeMouse:
    def __init__(self, page):
        self.page = page

    def click(self, x, y):
        if self.page.popup_error:
            raise PWError("click intercepted")
        self.page.calls.append(("click", x, y))


class FakeKeyboard:
    def __init__(self, page):
        self.page = page

    def press(self, key):
        self.page.calls.append(("press", key))


class FakePage:
    def __init__(self, context, scroll_height=900, popup_error=False, goto_error=None):
        self.context = context
        self.scroll_height = scroll_height
        self.popup_error = popup_error
        self.goto_error = goto_error
        self.calls = []
        self.handlers = {}
        self.mouse = FakeMouse(self)
        self.keyboard = FakeKeyboard(self)

    @property
    def viewport_size(self):
        return self.context.options["viewport"]

    def on(self, event, handler):
        self.handlers[event] = handler

    def set_default_navigation_timeout(self, ms):
        self.calls.append(("timeout", ms))

    def goto(self, url, wait_until=None):
        self.calls.append(("goto", url, wait_until))
        if self.goto_error:
            raise PWError(self.goto_error)

    def wait_for_timeout(self, ms):
        self.calls.append(("wait", ms))

    def evaluate(self, expression, arg=None):
        if "innerWidth" in expression:
            vp = self.viewport_size
            return {"width": vp["width"], "height": vp["height"]}
        if "scrollHeight" in expression:
            return self.scroll_height
        if "scrollTo" in expression:
            self.calls.append(("scroll", arg if arg is not None else 0))
        return None

    def pdf(self, path, width, height, print_background):
        self.calls.append(("pdf", path, width, height, print_background))
        with open(path, "wb") as fh:
            fh.write(b"%PDF-1.4\n")

    def screenshot(self, full_page=False):
        self.calls.append(("screenshot", full_page))
        vp = self.viewport_size
        buf = BytesIO()
        Image.new("RGB", (vp["width"], vp["height"] * 2), "white").save(buf, "PNG")
        return buf.getvalue()

    def scrolls(self):
        return [c[1] for c in self.calls if c[0] == "scroll"]

    def pdf_calls(self):
        return [c for c in self.calls if c[0] == "pdf"]


class FakeContext:
    def __init__(self, browser, options):
        self.browser = browser
        self.options = options
        self.pages = []
        self.closed = False

    def new_page(self):
        page = FakePage(self, **self.browser.page_kwargs)
        self.pages.append(page)
        return page

    def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, **page_kwargs):
        self.page_kwargs = page_kwargs
        self.contexts = []
        self.closed = False

    def new_context(self, **options):
        # one context at a time
        assert all(c.closed for c in self.contexts)
        ctx = FakeContext(self, options)
        self.contexts.append(ctx)
        return ctx

    def close(self):
        self.closed = True


class FakeLauncher:
    def __init__(self, browser):
        self.browser = browser
        self.launches = 0

    def launch(self, headless=True):
        self.launches += 1
        self.headless = headless
        return self.browser


class FakePlaywright:
    def __init__(self, browser):
        self.chromium = FakeLauncher(browser)
        self.firefox = FakeLauncher(browser)
        self.webkit = FakeLauncher(browser)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def fake_env(monkeypatch, tmp_path):
    """Patch Playwright and the health probe; returns a configurer for the browser."""
    monkeypatch.chdir(tmp_path)
    state = {"healthy": True, "probed": []}

    def fake_health(url, verify=True):
        state["probed"].append(url)
        state["verify"] = verify
        return state["healthy"]

    def configure(**page_kwargs):
        browser = FakeBrowser(**page_kwargs)
        pw = FakePlaywright(browser)
        state["browser"] = browser
        state["playwright"] = pw
        monkeypatch.setattr(capture, "sync_playwright", lambda: pw)
        return browser

    monkeypatch.setattr(capture, "check_site_health", fake_health)
    configure()
    state["configure"] = configure
    return state
