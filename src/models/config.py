"""Configuration models for the storefront test suite."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Mapping, Optional, Sequence

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_BASE_URL = "https://www.saucedemo.com/"
DEFAULT_RESULTS_DIR = "test-results"

# Must all be present before any browser is launched
REQUIRED_ENV_VARS = ("USER_NAME", "USER_PASSWORD", "BASE_URL")

_FALSY = ("0", "false", "no", "off")

# Model field -> environment variable, for error reports
_ENV_NAMES = {
    "base_url": "BASE_URL",
    "username": "USER_NAME",
    "password": "USER_PASSWORD",
    "browser_name": "BROWSER",
    "headless": "HEADLESS",
    "slow_mo_ms": "SLOW_MO",
    "auth_dir": "AUTH_STATE_DIR",
    "results_dir": "RESULTS_DIR",
}


class ConfigurationError(Exception):
    """Raised when required environment variables are missing or invalid."""

    def __init__(self, missing: Sequence[str] = (), invalid: Sequence[str] = ()):
        self.missing = list(missing)
        self.invalid = list(invalid)
        if self.missing:
            message = f"Missing environment variables: {', '.join(self.missing)}"
        else:
            message = f"Invalid environment variables: {'; '.join(self.invalid)}"
        super().__init__(message)


def _flag(value: str) -> bool:
    return value.strip().lower() not in _FALSY


def _describe(error: ValidationError) -> list[str]:
    invalid = []
    for err in error.errors():
        field = str(err["loc"][-1]) if err["loc"] else ""
        invalid.append(f"{_ENV_NAMES.get(field, field)}: {err['msg']}")
    return invalid


class ViewportConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int = 1280
    height: int = 720


class BrowserConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    browser_name: Literal["chromium", "firefox", "webkit"] = "chromium"
    headless: bool = True
    slow_mo_ms: int = 0
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    ignore_https_errors: bool = True

    # Timeouts (milliseconds)
    action_timeout_ms: int = 10_000
    navigation_timeout_ms: int = 30_000
    assertion_timeout_ms: int = 5_000


class Credentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    password: str = Field(repr=False)


class Settings(BaseModel):
    """Immutable run configuration, built once per process."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    credentials: Credentials
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    auth_dir: str = "fixtures/auth"
    results_dir: str = DEFAULT_RESULTS_DIR
    # Failure artifacts kept alongside the screenshot and HTML dump
    record_video: bool = False
    trace: bool = False

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got '{v}'")
        return v if v.endswith("/") else v + "/"

    @property
    def screenshot_dir(self) -> Path:
        return Path(self.results_dir) / "screenshots"

    @property
    def html_dir(self) -> Path:
        return Path(self.results_dir) / "html"

    @property
    def video_dir(self) -> Path:
        return Path(self.results_dir) / "videos"

    @property
    def trace_dir(self) -> Path:
        return Path(self.results_dir) / "traces"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Raises ConfigurationError listing every missing required variable,
        or every variable whose value does not validate.
        """
        env = os.environ if environ is None else environ
        missing = [name for name in REQUIRED_ENV_VARS if not env.get(name)]
        if missing:
            raise ConfigurationError(missing)

        browser_kwargs: dict = {}
        if env.get("BROWSER"):
            browser_kwargs["browser_name"] = env["BROWSER"].lower()
        if env.get("HEADLESS"):
            browser_kwargs["headless"] = _flag(env["HEADLESS"])
        if env.get("SLOW_MO"):
            browser_kwargs["slow_mo_ms"] = env["SLOW_MO"]

        kwargs: dict = {}
        if env.get("AUTH_STATE_DIR"):
            kwargs["auth_dir"] = env["AUTH_STATE_DIR"]
        if env.get("RESULTS_DIR"):
            kwargs["results_dir"] = env["RESULTS_DIR"]
        if env.get("RECORD_VIDEO"):
            kwargs["record_video"] = _flag(env["RECORD_VIDEO"])
        if env.get("TRACE"):
            kwargs["trace"] = _flag(env["TRACE"])

        invalid: list[str] = []
        try:
            browser = BrowserConfig(**browser_kwargs)
        except ValidationError as e:
            invalid.extend(_describe(e))
            browser = BrowserConfig()
        try:
            settings = cls(
                base_url=env["BASE_URL"],
                credentials=Credentials(
                    username=env["USER_NAME"],
                    password=env["USER_PASSWORD"],
                ),
                browser=browser,
                **kwargs,
            )
        except ValidationError as e:
            invalid.extend(_describe(e))
        if invalid:
            raise ConfigurationError(invalid=invalid)
        return settings


def load_environment(env_file: str | Path = ".env") -> bool:
    """Load a .env file without overriding variables already set.

    Returns True if the file existed and was read.
    """
    path = Path(env_file)
    if not path.exists():
        return False
    return load_dotenv(path, override=False)
