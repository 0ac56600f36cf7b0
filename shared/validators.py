"""Validators for mainland phone numbers and WeChat ids."""

from __future__ import annotations

import re

from django.core.validators import RegexValidator  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

PHONE_REGEX = re.compile(r"^1[3-9]\d{9}$")
WECHAT_REGEX = re.compile(r"^[a-zA-Z][-_a-zA-Z0-9]{5,19}$")

validate_phone = RegexValidator(
    regex=PHONE_REGEX,
    message=_("Invalid phone number, expected 11 digits starting with 1."),
    code="invalid_phone",
)

validate_wechat = RegexValidator(
    regex=WECHAT_REGEX,
    message=_("Invalid WeChat id."),
    code="invalid_wechat",
)


def is_valid_phone(phone: str | None) -> bool:
    return isinstance(phone, str) and PHONE_REGEX.match(phone) is not None


def mask_phone(phone: str | None) -> str:
    """138****5678 style masking used on every public response."""
    if not phone:
        return ""
    return re.sub(r"(\d{3})\d{4}(\d{4})", r"\1****\2", phone)
