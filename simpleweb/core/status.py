"""HTTP status value returned by handlers.

Handlers may return either a :class:`Status` or a plain ``int``. Both are
normalized with :func:`coerce_status`, so ``201``, ``Status(code=201)`` and
``Status.from_code(201)`` are interchangeable.
"""

from collections.abc import Mapping
from http import HTTPStatus
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from .errors import InvalidStatusError


MIN_STATUS_CODE = 100
MAX_STATUS_CODE = 599


def _reason_phrase(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


class Status(BaseModel):
    """HTTP response outcome: status code plus optional description and headers.

    Instances are immutable, headers included, so the module-level constants
    can be shared between requests.
    """

    model_config = ConfigDict(frozen=True)

    code: Annotated[
        int,
        Field(
            ge=MIN_STATUS_CODE,
            le=MAX_STATUS_CODE,
            strict=True,
            description="HTTP status code",
        ),
    ]
    description: Annotated[
        str, Field(description="Reason phrase; defaults to the standard one")
    ] = ""
    location: Annotated[
        str | None, Field(description="Value for the Location response header")
    ] = None
    headers: Annotated[
        Mapping[str, str], Field(description="Additional response headers")
    ] = Field(default_factory=lambda: MappingProxyType({}))

    @model_validator(mode="before")
    @classmethod
    def default_description(cls, data: Any) -> Any:
        """Fill in the standard reason phrase when no description is given."""
        if isinstance(data, dict) and data.get("description") is None:
            code = data.get("code")
            if isinstance(code, int) and not isinstance(code, bool):
                data = {**data, "description": _reason_phrase(code)}
        return data

    @field_validator("headers", mode="after")
    @classmethod
    def freeze_headers(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("headers")
    def serialize_headers(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)

    @classmethod
    def from_code(
        cls,
        code: int,
        description: str | None = None,
        location: str | None = None,
    ) -> "Status":
        """Build a status from an integer code.

        Raises:
            InvalidStatusError: If ``code`` is not an integer in 100..599
        """
        if isinstance(code, bool) or not isinstance(code, int):
            raise InvalidStatusError(code)
        if not MIN_STATUS_CODE <= code <= MAX_STATUS_CODE:
            raise InvalidStatusError(code)
        return cls(code=int(code), description=description, location=location)

    @classmethod
    def created_at(cls, location: str) -> "Status":
        """201 Created pointing at the new resource."""
        return cls.from_code(201, location=location)

    @classmethod
    def see_other(cls, location: str) -> "Status":
        """303 See Other redirect."""
        return cls.from_code(303, location=location)

    @classmethod
    def temporary_redirect(cls, location: str) -> "Status":
        """307 Temporary Redirect."""
        return cls.from_code(307, location=location)

    @property
    def is_success(self) -> bool:
        return 200 <= self.code <= 299

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.code <= 399

    @property
    def is_error(self) -> bool:
        return self.code >= 400

    @property
    def allows_body(self) -> bool:
        """Whether a response with this status may carry a body."""
        return self.code >= 200 and self.code not in (204, 304)

    def response_headers(self) -> dict[str, str]:
        """Headers implied by this status, including ``Location``."""
        headers = dict(self.headers)
        if self.location is not None:
            headers["Location"] = self.location
        return headers

    def __int__(self) -> int:
        return self.code

    def __str__(self) -> str:
        return f"{self.code} {self.description}".rstrip()


def coerce_status(value: Any) -> Status:
    """Normalize a handler return value into a :class:`Status`.

    Args:
        value: A Status or an integer HTTP status code

    Returns:
        The equivalent Status

    Raises:
        InvalidStatusError: If the value is neither, or the code is out of range
    """
    if isinstance(value, Status):
        return value
    return Status.from_code(value)


# Well-known statuses
CONTINUE = Status.from_code(100)
OK = Status.from_code(200)
CREATED = Status.from_code(201)
ACCEPTED = Status.from_code(202)
NO_CONTENT = Status.from_code(204)
MOVED_PERMANENTLY = Status.from_code(301)
FOUND = Status.from_code(302)
SEE_OTHER = Status.from_code(303)
NOT_MODIFIED = Status.from_code(304)
BAD_REQUEST = Status.from_code(400)
UNAUTHORIZED = Status.from_code(401)
FORBIDDEN = Status.from_code(403)
NOT_FOUND = Status.from_code(404)
METHOD_NOT_ALLOWED = Status.from_code(405)
CONFLICT = Status.from_code(409)
UNSUPPORTED_MEDIA_TYPE = Status.from_code(415)
UNPROCESSABLE_ENTITY = Status.from_code(422)
INTERNAL_SERVER_ERROR = Status.from_code(500)
SERVICE_UNAVAILABLE = Status.from_code(503)
