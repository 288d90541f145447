"""Selenium-backed implementation of :class:`BrowserSession`."""
from __future__ import annotations

import json
import logging
import os
import shutil
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, List, Optional, Tuple, Type

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.by import By

try:
    from axe_selenium_python import Axe  # type: ignore[import]
except ImportError:  # pragma: no cover - optional dependency
    Axe = None

try:  # pragma: no cover - optional dependency
    from webdriver_manager.chrome import ChromeDriverManager  # type: ignore[import]
    from webdriver_manager.core.os_manager import ChromeType  # type: ignore[import]
except ImportError:  # pragma: no cover
    ChromeDriverManager = None
    ChromeType = None

from ..errors import (
    BrowserSessionError,
    BrowserUnavailableError,
    FocusAuditError,
    NavigationError,
    ScanFailedError,
    ScanUnavailableError,
)
from .browser import ElementHandle, ScanOptions

logger = logging.getLogger(__name__)

DriverFactory = Callable[[], Any]

# Results are stringified in the page so large axe payloads survive the
# WebDriver round trip.
_AXE_RUN_SCRIPT = """
const options = JSON.parse(arguments[0]);
const callback = arguments[arguments.length - 1];
try {
    window.axe.run(document, options).then(results => {
        callback(JSON.stringify({
            violations: results.violations || [],
            incomplete: results.incomplete || []
        }));
    }).catch(err => {
        callback(JSON.stringify({ error: String(err) }));
    });
} catch (e) {
    callback(JSON.stringify({ error: String(e) }));
}
"""

_SCROLL_INTO_VIEW_SCRIPT = "arguments[0].scrollIntoView({block: 'center', inline: 'nearest'});"
_FOCUS_SCRIPT = "arguments[0].focus();"


class SeleniumBrowser:
    """Drives one Chrome session for the duration of a page audit."""

    def __init__(
        self,
        driver: Any,
        *,
        page_settle: float = 1.0,
        timeout: int = 30,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.driver = driver
        self.page_settle = page_settle
        self.timeout = timeout
        self._sleep = sleep

    @classmethod
    def launch(
        cls,
        *,
        driver_factory: Optional[DriverFactory] = None,
        headless: bool = True,
        window_size: Tuple[int, int] = (1920, 1080),
        page_settle: float = 1.0,
        timeout: int = 30,
    ) -> "SeleniumBrowser":
        if driver_factory is None:
            driver = default_driver_factory(headless=headless, window_size=window_size)
        else:
            driver = driver_factory()
        driver.set_page_load_timeout(timeout)
        driver.set_script_timeout(timeout)
        return cls(driver, page_settle=page_settle, timeout=timeout)

    def __enter__(self) -> "SeleniumBrowser":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def navigate(self, url: str) -> None:
        logger.info("Navigating to %s", url)
        with _webdriver_errors(f"Could not load {url}", NavigationError):
            self.driver.get(url)
        if self.page_settle:
            self._sleep(self.page_settle)

    def run_accessibility_scan(self, options: ScanOptions) -> dict:
        if Axe is None:
            raise ScanUnavailableError(
                "axe-selenium-python is not installed. Install it to run accessibility audits."
            )
        with _webdriver_errors("axe-core scan failed", ScanFailedError):
            Axe(self.driver).inject()
            raw = self.driver.execute_async_script(
                _AXE_RUN_SCRIPT, json.dumps(options.to_axe_options())
            )
        if isinstance(raw, str):
            try:
                return json.loads(raw)
            except ValueError:
                return {"error": "Failed to parse axe results", "raw": raw[:1000]}
        return raw or {}

    def query_elements(self, selector: str) -> List[ElementHandle]:
        with _webdriver_errors(f"Query {selector!r} failed"):
            return list(self.driver.find_elements(By.CSS_SELECTOR, selector))

    def is_visible(self, element: ElementHandle) -> bool:
        with _webdriver_errors("Visibility check failed"):
            return bool(element.is_displayed())

    def get_attribute(self, element: ElementHandle, name: str) -> Optional[str]:
        with _webdriver_errors(f"Reading attribute {name!r} failed"):
            return element.get_dom_attribute(name)

    def has_attribute(self, element: ElementHandle, name: str) -> bool:
        return self.get_attribute(element, name) is not None

    def tag_name(self, element: ElementHandle) -> str:
        with _webdriver_errors("Reading tag name failed"):
            return element.tag_name

    def text(self, element: ElementHandle) -> str:
        with _webdriver_errors("Reading text failed"):
            return element.get_property("textContent") or ""

    def outer_html(self, element: ElementHandle) -> str:
        with _webdriver_errors("Reading markup failed"):
            return element.get_property("outerHTML") or ""

    def scroll_into_view(self, element: ElementHandle) -> None:
        with _webdriver_errors("Scrolling failed"):
            self.driver.execute_script(_SCROLL_INTO_VIEW_SCRIPT, element)

    def focus(self, element: ElementHandle) -> None:
        with _webdriver_errors("Focusing failed"):
            self.driver.execute_script(_FOCUS_SCRIPT, element)

    def focused_element(self) -> Optional[ElementHandle]:
        with _webdriver_errors("Reading the active element failed"):
            return self.driver.switch_to.active_element

    def computed_style(self, element: ElementHandle, name: str) -> str:
        with _webdriver_errors(f"Reading computed {name!r} failed"):
            return element.value_of_css_property(name)

    def hover(self, element: ElementHandle) -> None:
        with _webdriver_errors("Hovering failed"):
            ActionChains(self.driver).move_to_element(element).perform()

    def close(self) -> None:
        try:
            self.driver.quit()
        except WebDriverException as exc:
            logger.warning("Closing the browser failed: %s", exc)


@contextmanager
def _webdriver_errors(
    message: str, error: Type[FocusAuditError] = BrowserSessionError
) -> Iterator[None]:
    try:
        yield
    except WebDriverException as exc:
        raise error(f"{message}: {exc.msg or type(exc).__name__}") from exc


def default_driver_factory(
    *, headless: bool = True, window_size: Tuple[int, int] = (1920, 1080)
) -> Any:
    options = webdriver.ChromeOptions()
    if headless:
        options.add_argument("--headless=new")
    options.add_argument("--disable-gpu")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument(f"--window-size={window_size[0]},{window_size[1]}")

    binary = resolve_chrome_binary()
    if binary:
        options.binary_location = binary

    service = None
    driver_path = resolve_chromedriver_path()
    if driver_path:
        service = ChromeService(driver_path)

    try:
        if service is not None:
            return webdriver.Chrome(service=service, options=options)
        return webdriver.Chrome(options=options)
    except Exception as exc:  # pragma: no cover - propagate meaningful error
        raise BrowserUnavailableError(
            "Failed to initialize ChromeDriver. Verify Google Chrome is installed or "
            "set CHROME_BINARY and CHROMEDRIVER_PATH environment variables."
        ) from exc


def resolve_chrome_binary() -> Optional[str]:
    explicit = os.getenv("CHROME_BINARY")
    if explicit and Path(explicit).exists():
        return explicit

    candidates = [
        shutil.which("google-chrome"),
        shutil.which("google-chrome-stable"),
        shutil.which("chromium"),
        shutil.which("chromium-browser"),
        "/opt/google/chrome/chrome",
        r"C:\Program Files\Google\Chrome\Application\chrome.exe",
        r"C:\Program Files (x86)\Google\Chrome\Application\chrome.exe",
        "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
    ]
    for candidate in candidates:
        if candidate and Path(candidate).exists():
            return str(candidate)
    return None


def resolve_chromedriver_path() -> Optional[str]:
    explicit = os.getenv("CHROMEDRIVER_PATH")
    if explicit and Path(explicit).exists():
        return explicit

    system_driver = shutil.which("chromedriver")
    if system_driver:
        return system_driver

    if ChromeDriverManager is not None:
        try:
            kwargs = {"chrome_type": ChromeType.GOOGLE} if ChromeType is not None else {}
            return ChromeDriverManager(**kwargs).install()
        except Exception as exc:
            logger.warning("webdriver-manager could not install chromedriver: %s", exc)
            return None
    return None
