"""
Request DTO for the CAPTCHA submission form.

The form arrives as multipart parts in arrival order. parse_submission()
walks them once and either returns a complete Submission or raises a
ValidationError naming the first problem found.
"""

from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from errors import ValidationError

FIELD_CHALLENGE_RESPONSE = "g-recaptcha-response"
FIELD_REQUEST_TOKEN = "request-token"
FIELD_REDIRECT_URL = "redirect-url"

# form field name → (attribute, human label); order is the "missing" check order
SUBMISSION_FIELDS = {
    FIELD_CHALLENGE_RESPONSE: ("challenge_response", "Recaptcha response"),
    FIELD_REQUEST_TOKEN: ("request_token", "Request token"),
    FIELD_REDIRECT_URL: ("redirect_url", "Redirect URL"),
}


class Submission(BaseModel):
    """One validated form submission. Exists for a single request only."""

    model_config = ConfigDict(frozen=True)

    challenge_response: str = Field(min_length=1)
    request_token: str = Field(min_length=1)
    redirect_url: str = Field(min_length=1)


def parse_submission(parts: Iterable[tuple[str, str]]) -> Submission:
    """Build a Submission from ``(name, value)`` form parts.

    Rules:
    - Names are matched case-insensitively; unknown and empty names are skipped
    - A recognised field with an empty value fails at once ("... is empty.")
    - A repeated recognised field replaces the earlier value
    - Any recognised field never seen fails after the walk ("... is missing.")

    Raises:
        ValidationError: for the first empty or missing field.
    """
    values: dict[str, Optional[str]] = {name: None for name in SUBMISSION_FIELDS}

    for raw_name, value in parts:
        name = (raw_name or "").lower()
        if not name or name not in SUBMISSION_FIELDS:
            continue
        if not value:
            _, label = SUBMISSION_FIELDS[name]
            raise ValidationError(f"{label} is empty.", field=name)
        values[name] = value

    for name, (_, label) in SUBMISSION_FIELDS.items():
        if values[name] is None:
            raise ValidationError(f"{label} is missing.", field=name)

    return Submission(
        **{attr: values[name] for name, (attr, _) in SUBMISSION_FIELDS.items()}
    )
