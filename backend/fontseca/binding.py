"""
fontseca.dev Backend — Request Binding & Validation
=====================================================

What:  Populates transfer records from URL-encoded forms and JSON bodies,
       and validates populated records against their declared rules.
How:   Transfer records are Pydantic models. Field names (or aliases) are the
       wire names; annotations declare the primitive type each value is coerced
       to. Fixed-width numbers are declared with the `Int8`…`Int64` and
       `Float32` markers; a plain `int` is the generic 32-bit integer and a
       plain `float` is 64-bit.
Who:   Called by the route handlers before delegating to a service.

Error classification:
    Form value not parsable as the field type    → 400 unparsable value
    Form integer/float beyond the type's range   → 400 value out of range
    Record violates its validation rules         → 422 validation problem
    Binder misuse (None, non-model target)       → TypeError (500 upstream)
"""

import json
import logging
import math
import re
import struct
from dataclasses import dataclass
from typing import Annotated, Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError
from pydantic.fields import FieldInfo
from starlette.requests import Request

from fontseca.exceptions import (
    Problem,
    new_missing_parameter,
    new_unparsable_value,
    new_validation,
    new_value_out_of_range,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


# ══════════════════════════════════════════════════════════════════════════
# Fixed-Width Type Markers
# ══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class BitSize:
    """Annotation metadata giving a numeric field its storage width."""

    bits: int


Int8 = Annotated[int, BitSize(8)]
Int16 = Annotated[int, BitSize(16)]
Int32 = Annotated[int, BitSize(32)]
Int64 = Annotated[int, BitSize(64)]
Float32 = Annotated[float, BitSize(32)]

GENERIC_INT_BITS = 32
FLOAT32_MAX = 3.4028234663852886e38

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INFINITY = {"inf", "+inf", "-inf", "infinity", "+infinity", "-infinity"}
_TRUTHY = {"1", "t", "T", "TRUE", "true", "True"}
_FALSY = {"0", "f", "F", "FALSE", "false", "False"}


def wire_name(name: str, field: FieldInfo) -> str:
    return field.alias or name


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) is Union:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def describe_field(field: FieldInfo) -> Tuple[Any, Optional[int], str]:
    """
    Resolve a field to (python type, bit width, target type name).

    Examples:
        str         → (str, None, "str")
        int         → (int, None, "int")
        Int16       → (int, 16, "int16")
        Float32     → (float, 32, "float32")
    """
    annotation = _unwrap_optional(field.annotation)
    bits = next((m.bits for m in field.metadata if isinstance(m, BitSize)), None)

    if annotation is bool:
        return bool, None, "bool"
    if annotation is int:
        return int, bits, f"int{bits}" if bits else "int"
    if annotation is float:
        bits = bits or 64
        return float, bits, f"float{bits}"
    name = getattr(annotation, "__name__", str(annotation))
    return annotation, bits, name


# ══════════════════════════════════════════════════════════════════════════
# Scalar Coercion
# ══════════════════════════════════════════════════════════════════════════

def parse_int(value: str, bits: int, target_type: str, field: str) -> int:
    if not _INTEGER.fullmatch(value):
        raise new_unparsable_value(target_type, field, value)
    parsed = int(value)
    limit = 1 << (bits - 1)
    if not -limit <= parsed < limit:
        raise new_value_out_of_range(target_type, field, value)
    return parsed


def parse_float(value: str, bits: int, target_type: str, field: str) -> float:
    if not value or "_" in value:
        raise new_unparsable_value(target_type, field, value)
    try:
        parsed = float(value)
    except ValueError:
        raise new_unparsable_value(target_type, field, value) from None
    if math.isinf(parsed) and value.lower() not in _INFINITY:
        raise new_value_out_of_range(target_type, field, value)
    if bits == 32 and math.isfinite(parsed) and abs(parsed) > FLOAT32_MAX:
        raise new_value_out_of_range(target_type, field, value)
    if bits == 32:
        parsed = struct.unpack("f", struct.pack("f", parsed))[0]
    return parsed


def parse_bool(value: str, field: str) -> bool:
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise new_unparsable_value("bool", field, value)


def _first_value(form: Mapping[str, Any], key: str) -> Any:
    getlist = getattr(form, "getlist", None)
    if getlist is not None:
        return getlist(key)[0]
    return form[key]


# ══════════════════════════════════════════════════════════════════════════
# Form Binding
# ══════════════════════════════════════════════════════════════════════════

def bind_post_form(form: Optional[Mapping[str, Any]], target: Optional[BaseModel]) -> None:
    """
    Populate `target` in place from URL-encoded form values.

    What:    For each declared field whose wire name appears in `form`, the
             first submitted value is stripped and coerced to the field type.
    Missing: Fields without a form key keep their current (zero) value.
    Order:   Fields are visited in declaration order; the first coercion
             failure raises and leaves later fields untouched.

    Raises:
        Problem:   400 unparsable value / value out of range
        TypeError: `form` or `target` is None, or `target` is not a model instance
    """
    if form is None or target is None:
        message = "got an unacceptable None parameter"
        logger.error(message)
        raise TypeError(message)

    if not isinstance(target, BaseModel):
        message = f"target must be a pydantic model instance, got {type(target).__name__}"
        logger.error(message)
        raise TypeError(message)

    for name, field in type(target).model_fields.items():
        key = wire_name(name, field)
        if key not in form:
            continue

        value = str(_first_value(form, key)).strip()
        kind, bits, target_type = describe_field(field)

        if kind is str:
            parsed: Any = value
        elif kind is bool:
            parsed = parse_bool(value, key)
        elif kind is int:
            parsed = parse_int(value, bits or GENERIC_INT_BITS, target_type, key)
        elif kind is float:
            parsed = parse_float(value, bits, target_type, key)
        else:
            logger.debug("Skipping field %r with unsupported type %s", key, target_type)
            continue

        setattr(target, name, parsed)


# ══════════════════════════════════════════════════════════════════════════
# Validation
# ══════════════════════════════════════════════════════════════════════════

# Pydantic error type → validation criterion reported to clients
CRITERIA: Dict[str, str] = {
    "missing": "required",
    "string_too_short": "min",
    "string_too_long": "max",
    "too_short": "min",
    "too_long": "max",
    "greater_than": "gt",
    "greater_than_equal": "gte",
    "less_than": "lt",
    "less_than_equal": "lte",
    "string_pattern_mismatch": "pattern",
    "literal_error": "oneof",
    "enum": "oneof",
}

_PARAMETER_KEYS = ("min_length", "max_length", "gt", "ge", "lt", "le", "pattern", "expected")


def _wire_names(model: Type[BaseModel]) -> Dict[str, str]:
    return {name: wire_name(name, field) for name, field in model.model_fields.items()}


def _field_of(error: Dict[str, Any], names: Dict[str, str]) -> str:
    loc = error.get("loc") or ()
    if not loc:
        return ""
    return names.get(str(loc[0]), str(loc[0]))


def failures(exc: ValidationError, model: Type[BaseModel]) -> List[Tuple[str, str, str]]:
    """Convert pydantic errors into `(field, criterion, parameter)` triples."""
    names = _wire_names(model)
    result = []
    for error in exc.errors():
        ctx = error.get("ctx") or {}
        parameter = next((str(ctx[k]) for k in _PARAMETER_KEYS if k in ctx), "")
        criterion = CRITERIA.get(error["type"], error["type"])
        result.append((_field_of(error, names), criterion, parameter))
    return result


class StructValidator:
    """
    Runs the declarative rules of a populated transfer record.

    Constructed once per application (see main.create_app) and handed to the
    route handlers through a dependency.
    """

    def validate(self, record: BaseModel) -> None:
        """
        Raises:
            Problem: 422 with an `errors` list of `{field, criterion, parameter}`
        """
        model = type(record)
        try:
            model.model_validate(record.model_dump())
        except ValidationError as exc:
            raise new_validation(*failures(exc, model)) from None
        except Exception:
            logger.error("Validator failed on %s", model.__name__, exc_info=True)
            raise


# ══════════════════════════════════════════════════════════════════════════
# JSON Body Binding
# ══════════════════════════════════════════════════════════════════════════

def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _is_type_error(error_type: str) -> bool:
    return error_type.endswith("_type") or error_type.endswith("_parsing") or error_type == "int_from_float"


def _too_large() -> Problem:
    return Problem(
        status=413,
        title="Request body too large.",
        detail="The size of the request body must not exceed 1MB.",
    )


async def _read_body(request: Request, max_size: int) -> bytes:
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > max_size:
        raise _too_large()

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_size:
            raise _too_large()
    return bytes(body)


def _decode(body: bytes) -> Any:
    if not body.strip():
        raise Problem(
            status=400,
            title="Empty request body.",
            detail="The request body must not be empty. Please provide a valid JSON object.",
        )

    try:
        return json.loads(body)
    except json.JSONDecodeError as exc:
        if exc.pos >= len(exc.doc.rstrip()):
            raise Problem(
                status=400,
                title="Ill-formed JSON in request body.",
                detail="The request body contains incomplete or truncated JSON data.",
            ) from None
        p = Problem(
            status=400,
            title="Malformed JSON in request body.",
            detail="The request body contains invalid JSON syntax.",
        )
        p.add_extension("position", exc.pos)
        p.add_extension("error", exc.msg)
        raise p from None
    except UnicodeDecodeError as exc:
        p = Problem(
            status=400,
            title="Malformed JSON in request body.",
            detail="The request body contains invalid JSON syntax.",
        )
        p.add_extension("position", exc.start)
        p.add_extension("error", exc.reason)
        raise p from None


async def bind_json_body(request: Request, model: Type[M], max_size: int = 1 << 20) -> M:
    """
    Read, decode and validate a JSON request body into `model`.

    Failure mapping (first matching row wins):
        body over `max_size`            → 413 Request body too large
        empty body                      → 400 Empty request body
        truncated JSON                  → 400 Ill-formed JSON
        invalid JSON                    → 400 Malformed JSON (+ position, error)
        member not declared by `model`  → 400 Unexpected field (+ unexpected)
        value of the wrong JSON type    → 400 Invalid value type
                                           (+ property, has_type, wants_type)
        rule violations                 → 422 Invalid HTTP request body (+ errors)
    """
    data = _decode(await _read_body(request, max_size))
    if data is None:
        # A JSON null binds as the zero record
        data = {}

    try:
        return model.model_validate(data, strict=True)
    except ValidationError as exc:
        errors = exc.errors()
        names = _wire_names(model)

        unknown = next((e for e in errors if e["type"] == "extra_forbidden"), None)
        if unknown is not None:
            p = Problem(
                status=400,
                title="Unexpected field in request body.",
                detail=(
                    "The request body contains an unexpected field. Please check the "
                    "properties of the object."
                ),
            )
            p.add_extension("unexpected", str(unknown["loc"][-1]))
            raise p from None

        mistyped = next((e for e in errors if _is_type_error(e["type"])), None)
        if mistyped is not None:
            prop = _field_of(mistyped, names)
            field = next(
                (f for n, f in model.model_fields.items() if wire_name(n, f) == prop),
                None,
            )
            wants = describe_field(field)[2] if field is not None else "object"
            p = Problem(
                status=400,
                title="Invalid value type in request body.",
                detail=(
                    "The request body contains a value that does not match the "
                    "expected data type."
                ),
            )
            p.add_extension("property", prop)
            p.add_extension("has_type", _json_type(mistyped.get("input")))
            p.add_extension("wants_type", wants)
            raise p from None

        raise new_validation(
            *failures(exc, model),
            title="Invalid HTTP request body.",
            detail=(
                "The provided JSON data does not meet the required validation "
                "criteria. Please review your input and try again."
            ),
        ) from None


# ══════════════════════════════════════════════════════════════════════════
# Route Helpers
# ══════════════════════════════════════════════════════════════════════════

def require_form(form: Mapping[str, Any], name: str) -> str:
    """
    Return the form value `name` as submitted (untrimmed).

    Raises:
        Problem: 400 missing parameter when the key is absent
    """
    if name not in form:
        raise new_missing_parameter(name)
    return str(_first_value(form, name))


def get_validator(request: Request) -> StructValidator:
    """FastAPI dependency: the validator constructed by create_app()."""
    return request.app.state.validator


def is_truthy(value: str) -> bool:
    """True for the accepted boolean "true" tokens; anything else is False."""
    return value.strip() in _TRUTHY
