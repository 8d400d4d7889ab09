"""
fontseca.dev Backend — Problem Details Exceptions
===================================================

What:  RFC 9457 "problem details" errors, raised as exceptions and emitted as
       `application/problem+json` responses.
How:   Services and handlers raise a `Problem`; the global exception handler
       registered in main.py turns it into a `ProblemResponse`. Any other
       exception reaching that layer is replaced by `new_internal()`.
Who:   Raised by the binding helpers, the route handlers and the (external)
       service layer.

Exception Hierarchy:
    Problem (base, carries its own HTTP status)
    └── (no subclasses: the registry functions below build the common ones)

Problem Registry:
    new_internal()              → 500 Internal Server Error
    new_not_found()             → 404 Record not found
    new_missing_parameter()     → 400 Missing required parameter
    new_unparsable_value()      → 400 Unparsable value
    new_value_out_of_range()    → 400 Value out of range
    new_validation()            → 422 Failed validation

Type resolution:
    A problem's `type` member is "about:blank" unless a global base URL has been
    configured with `set_global_url()`. With a base URL, relative types are joined
    to it as a path, or as a URL fragment when fragments are enabled:

        set_global_url("https://example.net/problems", fragment=True)
        Problem(type="out-of-credit").type
        → "https://example.net/problems#out-of-credit"
"""

import logging
import re
from http import HTTPStatus
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlsplit, urlunsplit

from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

ABOUT_BLANK = "about:blank"

_REPEATED_SLASHES = re.compile(r"/{2,}")
_ILLEGAL_URL_CHARACTERS = set(' {}<>"\\^`|')


# ══════════════════════════════════════════════════════════════════════════
# Global Type Base URL
# ══════════════════════════════════════════════════════════════════════════

class _BaseURL:
    """Process-wide base URL used to resolve problem types."""

    def __init__(self) -> None:
        self.url: Optional[str] = None
        self.fragment = False

    @property
    def empty(self) -> bool:
        return self.url is None


base = _BaseURL()


def _clean_path(path: str) -> str:
    return _REPEATED_SLASHES.sub("/", path).rstrip("/")


def set_global_url(url: str, fragment: bool = False) -> None:
    """
    Configure the base URL that relative problem types are resolved against.

    Surrounding whitespace, repeated slashes and trailing slashes are removed.
    An unparsable URL is logged and leaves no base URL configured.
    """
    base.fragment = fragment
    base.url = None

    url = url.strip()
    if not url:
        return

    if _ILLEGAL_URL_CHARACTERS.intersection(url):
        logger.error("Unable to parse problem base URL: %r", url)
        return

    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError on a malformed port
    except ValueError as exc:
        logger.error("Unable to parse problem base URL %r: %s", url, exc)
        return

    path = _clean_path(parts.path)
    base.url = urlunsplit((parts.scheme, parts.netloc, path, parts.query, ""))


def _resolve_type(value: str) -> str:
    value = value.strip()
    if value == ABOUT_BLANK:
        return value
    if base.empty:
        return value or ABOUT_BLANK
    if not value:
        return base.url
    if base.fragment:
        return f"{base.url}#{value.lstrip('#')}"
    return f"{base.url}/{_clean_path(value).lstrip('/')}"


# ══════════════════════════════════════════════════════════════════════════
# Extension Members
# ══════════════════════════════════════════════════════════════════════════

def canonical_snake_case(s: str) -> str:
    """Lowercase `s` and join its whitespace-separated words with underscores."""
    return "_".join(s.split()).lower()


def _is_serializable(value: Any) -> bool:
    if value is None or callable(value):
        return False
    if isinstance(value, (str, int, float, bool)):
        return True
    if isinstance(value, dict):
        return all(isinstance(k, str) and _is_serializable(v) for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return all(_is_serializable(v) for v in value)
    return False


class Problem(Exception):
    """
    An RFC 9457 problem details object that can be raised.

    Attributes:
        status:     HTTP status code of the response (100-599, else 200)
        title:      Short summary; defaults to the status phrase when emitted
        detail:     Human-readable explanation specific to this occurrence
        instance:   URI reference identifying this occurrence
        extensions: Additional members; each key maps to the list of values
                    added under it
    """

    def __init__(
        self,
        status: int = 500,
        title: str = "",
        detail: str = "",
        type: str = "",
        instance: str = "",
    ):
        self.status = status if 100 <= status <= 599 else 200
        self.title = title.strip()
        self.detail = detail.strip()
        self.type = _resolve_type(type)
        self.instance = instance.strip()
        self.extensions: Dict[str, List[Any]] = {}
        super().__init__(self.detail or self.title or str(self.status))

    def add_extension(self, key: str, value: Any) -> "Problem":
        """Append `value` under `key`; blank keys and unserializable values are ignored."""
        key = canonical_snake_case(key)
        if key and _is_serializable(value):
            self.extensions.setdefault(key, []).append(value)
        return self

    def set_extension(self, key: str, value: Any) -> "Problem":
        """Replace every value stored under `key` with `value`."""
        key = canonical_snake_case(key)
        if key and _is_serializable(value):
            self.extensions[key] = [value]
        return self

    def del_extension(self, key: str) -> None:
        self.extensions.pop(canonical_snake_case(key), None)

    def to_dict(self) -> Dict[str, Any]:
        title = self.title
        if not title:
            try:
                title = HTTPStatus(self.status).phrase
            except ValueError:
                title = ""

        body: Dict[str, Any] = {"type": self.type, "title": title, "status": self.status}
        if self.detail:
            body["detail"] = self.detail
        if self.instance:
            body["instance"] = self.instance
        for key, values in self.extensions.items():
            body[key] = values[0] if len(values) == 1 else list(values)
        return body

    def emit(self, headers: Optional[Dict[str, str]] = None) -> "ProblemResponse":
        return ProblemResponse(self.to_dict(), status_code=self.status, headers=headers)


class ProblemResponse(JSONResponse):
    media_type = "application/problem+json"


# ══════════════════════════════════════════════════════════════════════════
# Problem Registry
# ══════════════════════════════════════════════════════════════════════════

# Set from settings.problem_contact by create_app().
contact = "mailto:fontseca.dev@outlook.com"


def new_internal() -> Problem:
    p = Problem(
        status=500,
        title="Internal Server Error.",
        detail=(
            "An unexpected error occurred while processing your request. Please try "
            "again later. If the problem persists, contact the developer for assistance."
        ),
        type=ABOUT_BLANK,
    )
    if contact:
        p.add_extension("contact", contact)
    return p


def new_not_found(record_id: str, record_type: str) -> Problem:
    p = Problem(
        status=404,
        title="Record not found.",
        detail=f"The {record_type} record with ID '{record_id}' could not be found in the database.",
        type=ABOUT_BLANK,
    )
    p.add_extension("record_id", record_id)
    p.add_extension("record_type", record_type)
    return p


def new_missing_parameter(parameter: str) -> Problem:
    p = Problem(
        status=400,
        title="Missing required parameter.",
        detail=(
            f"The parameter '{parameter}' is required but was not found in the request "
            "form data or query string."
        ),
    )
    p.add_extension("parameter", parameter)
    return p


def new_unparsable_value(target_type: str, field: str, value: str) -> Problem:
    p = Problem(
        status=400,
        title="Unparsable value.",
        detail=(
            f"Failed to parse the provided value as: {target_type}. Please make sure "
            "the value is valid according to its type."
        ),
    )
    p.add_extension("field", field)
    p.add_extension("value", value)
    p.add_extension("target_type", target_type)
    return p


def new_value_out_of_range(target_type: str, field: str, value: str) -> Problem:
    p = Problem(
        status=400,
        title="Value out of range.",
        detail=(
            f"The value '{value}' of the field '{field}' is out of range for the "
            f"specified type: {target_type}."
        ),
    )
    p.add_extension("field", field)
    p.add_extension("value", value)
    p.add_extension("target_type", target_type)
    return p


Failure = Tuple[str, str, str]


def failure_member(field: str, criterion: str, parameter: str = "") -> Dict[str, str]:
    member = {"field": field, "criterion": criterion}
    if parameter:
        member["parameter"] = parameter
    return member


def new_validation(
    *failures: Failure,
    title: str = "Failed to validate request data.",
    detail: str = (
        "The provided data does not meet the required validation criteria. "
        "Please review your input and try again."
    ),
) -> Problem:
    """
    Build a 422 problem from `(field, criterion, parameter)` triples.

    The `errors` member is always a list, even for a single failure.
    """
    p = Problem(status=422, title=title, detail=detail)
    p.set_extension("errors", [failure_member(*f) for f in failures])
    return p
