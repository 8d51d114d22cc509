"""Login page selectors."""

from __future__ import annotations

from types import MappingProxyType

LOGIN_SELECTORS = MappingProxyType({
    # Input fields
    "username_input": '[data-test="username"]',
    "password_input": '[data-test="password"]',

    # Buttons
    "login_button": '[data-test="login-button"]',

    # Error messages
    "error_message": '[data-test="error"]',
    "error_button": ".error-button",

    # Logo and branding
    "logo": ".login_logo",
    "bot_image": ".bot_column",

    # Form container
    "login_container": ".login_container",
    "login_form": ".login-box",

    # Credential hints shown below the form
    "login_credentials": "#login_credentials",
    "login_password": ".login_password",
})
