"""US location parsing and normalization.

Accepted inputs are "City, ST", "City, ST 12345" and a bare 5-digit zip.
No geocoding happens here; state codes are checked against a fixed set.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from forecaster.core.errors import InvalidLocation


US_STATES = frozenset(
    {
        "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
        "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
        "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
        "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
        "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY", "DC",
    }
)

ZIP_RE = re.compile(r"^\d{5}\Z", re.ASCII)
STATE_ZIP_RE = re.compile(r"^([A-Z]{2})\s+(\d{5})\Z", re.ASCII)
STATE_RE = re.compile(r"^[A-Z]{2}\Z", re.ASCII)


class Location(BaseModel):
    city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    state: Optional[str] = None
    zip: Optional[str] = None

    @field_validator("city", mode="before")
    @classmethod
    def _clean_city(cls, value):
        if isinstance(value, str):
            value = " ".join(value.split())
            return value or None
        return value

    @field_validator("state", mode="before")
    @classmethod
    def _normalize_state(cls, value):
        if isinstance(value, str):
            value = value.strip().upper()
            if not value:
                return None
            if value not in US_STATES:
                raise ValueError("Invalid US state code")
        return value

    @field_validator("zip", mode="before")
    @classmethod
    def _check_zip(cls, value):
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            if not ZIP_RE.match(value):
                raise ValueError("Zip code must be 5 digits")
        return value

    @model_validator(mode="after")
    def _require_place(self) -> "Location":
        if self.city and self.state:
            return self
        if self.zip and not self.city and not self.state:
            return self
        raise ValueError("Provide a city and state, or a zip code")

    @classmethod
    def from_fields(
        cls,
        city: Optional[str] = None,
        state: Optional[str] = None,
        zip: Optional[str] = None,
    ) -> "Location":
        try:
            return cls(city=city, state=state, zip=zip)
        except ValidationError as exc:
            raise InvalidLocation() from exc

    @property
    def is_zip_only(self) -> bool:
        return not self.city

    @property
    def cache_key(self) -> str:
        if self.is_zip_only:
            return f"zip-{self.zip}"
        key = f"{self.city.lower()}-{self.state}"
        if self.zip:
            key = f"{key}-{self.zip}"
        return key

    @property
    def display(self) -> str:
        if self.is_zip_only:
            return f"zip code {self.zip}"
        text = f"{self.city}, {self.state}"
        if self.zip:
            text = f"{text} {self.zip}"
        return text


def parse_location(raw: str) -> Location:
    """Parse free text into a validated :class:`Location`.

    >>> parse_location("Denver, CO 80202").zip
    '80202'

    Raises:
        InvalidLocation: the text is not a zip, "City, ST" or "City, ST ZIP",
            or names an unknown state.
    """
    text = (raw or "").strip()
    if ZIP_RE.match(text):
        return Location.from_fields(zip=text)

    city, sep, remainder = text.rpartition(",")
    city = city.strip()
    if not sep or not city:
        raise InvalidLocation()

    remainder = remainder.strip().upper()
    state_zip = STATE_ZIP_RE.match(remainder)
    if state_zip:
        return Location.from_fields(city=city, state=state_zip.group(1), zip=state_zip.group(2))
    if STATE_RE.match(remainder):
        return Location.from_fields(city=city, state=remainder)
    raise InvalidLocation()
