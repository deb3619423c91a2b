"""Field-level request validation.

Every rule of every chain runs, in declaration order, and each failure
produces its own error record. Values are compared the way the public API
has always compared them: as their string form for format checks, and as a
loosely coerced number for the price positivity check.

The pydantic input schemas only see a request once every rule has passed,
since a pydantic field stops at its first failing validator.
"""
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from app.exceptions import ValidationError

MISSING = object()

INT_PATTERN = re.compile(r"[-+]?[0-9]+")
NUMERIC_PATTERN = re.compile(r"[+-]?([0-9]*[.])?[0-9]+")
NUMBER_LITERAL_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
BOOLEAN_STRINGS = ("true", "false", "1", "0")
TRUE_STRINGS = ("true", "1")


@dataclass(frozen=True)
class Rule:
    """A predicate over a raw value and the message reported when it fails."""

    check: Callable[[Any], bool]
    message: str


@dataclass(frozen=True)
class FieldChain:
    """Ordered, independent rules applied to one field."""

    field: str
    location: str  # "params" or "body"
    rules: Tuple[Rule, ...]


@dataclass(frozen=True)
class FieldError:
    field: str
    location: str
    message: str
    value: Any = MISSING

    def to_dict(self) -> Dict[str, Any]:
        error = {"type": "field"}
        if self.value is not MISSING:
            error["value"] = self.value
        error.update({"msg": self.message, "path": self.field, "location": self.location})
        return error


def as_text(value: Any) -> str:
    """String form used by the format checks."""
    if value is MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(as_text(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def as_number(value: Any) -> Optional[float]:
    """Loose numeric coercion; None when the value has no numeric reading."""
    if value is MISSING or value is None:
        return None
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.inf
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if NUMBER_LITERAL_PATTERN.fullmatch(text):
            return float(text)
    return None


def is_int(value: Any) -> bool:
    return bool(INT_PATTERN.fullmatch(as_text(value)))


def is_numeric(value: Any) -> bool:
    return bool(NUMERIC_PATTERN.fullmatch(as_text(value)))


def is_not_empty(value: Any) -> bool:
    return len(as_text(value)) > 0


def is_boolean(value: Any) -> bool:
    return as_text(value) in BOOLEAN_STRINGS


def is_positive(value: Any) -> bool:
    number = as_number(value)
    return number is not None and math.isfinite(number) and number > 0


def to_boolean(value: Any) -> bool:
    return as_text(value) in TRUE_STRINGS


ID_CHAIN = FieldChain("id", "params", (Rule(is_int, "ID no valido"),))
NAME_CHAIN = FieldChain(
    "name", "body", (Rule(is_not_empty, "el nombre del producto no puede ir vacio"),)
)
PRICE_CHAIN = FieldChain(
    "price",
    "body",
    (
        Rule(is_positive, "precio no valido"),
        Rule(is_numeric, "Valor no valido"),
        Rule(is_not_empty, "el precio del producto no puede ir vacio"),
    ),
)
AVAILABILITY_CHAIN = FieldChain(
    "availability", "body", (Rule(is_boolean, "Valor para disponibilidad no valido"),)
)

ID_RULES = (ID_CHAIN,)
CREATE_RULES = (NAME_CHAIN, PRICE_CHAIN)
REPLACE_RULES = (ID_CHAIN, NAME_CHAIN, PRICE_CHAIN, AVAILABILITY_CHAIN)


def run_chains(
    chains: Sequence[FieldChain],
    params: Optional[Dict[str, Any]] = None,
    body: Optional[Dict[str, Any]] = None,
) -> List[FieldError]:
    """
    Run every rule of every chain and collect the failures.

    Args:
        chains: Rule chains in the order their errors should be reported
        params: Path parameters of the request
        body: Parsed JSON body of the request

    Returns:
        One FieldError per failed rule, empty when the request is valid
    """
    sources = {"params": params or {}, "body": body or {}}
    errors = []
    for chain in chains:
        value = sources[chain.location].get(chain.field, MISSING)
        for rule in chain.rules:
            if not rule.check(value):
                errors.append(FieldError(chain.field, chain.location, rule.message, value))
    return errors


def validate(
    chains: Sequence[FieldChain],
    params: Optional[Dict[str, Any]] = None,
    body: Optional[Dict[str, Any]] = None,
) -> None:
    """Raise ValidationError carrying every failure, if there is any."""
    errors = run_chains(chains, params, body)
    if errors:
        raise ValidationError(errors)
