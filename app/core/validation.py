"""
Explicit validation step run before any record is built for persistence.

validate_model() never raises on bad input; it returns a Validated result
carrying either the normalized schema instance or the list of violations.
Callers decide how to surface the violations (services call unwrap()).
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import ValidationError

T = TypeVar("T", bound=BaseModel)


@dataclass
class Validated(Generic[T]):
    """Tagged result of a validation step"""
    value: Optional[T] = None
    violations: List[Dict[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations

    def unwrap(self, message: str = "Validation failed") -> T:
        """Return the normalized value or raise ValidationError listing the violations"""
        if not self.ok:
            first = self.violations[0]
            raise ValidationError(
                f"{message}: {first['message']}" if len(self.violations) == 1 else message,
                field=first["field"] if len(self.violations) == 1 else None,
                violations=self.violations,
            )
        return self.value


def format_violations(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic/FastAPI error dicts into {field, message} pairs"""
    violations = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        violations.append({
            "field": ".".join(loc) or "__root__",
            "message": err.get("msg", "Invalid value"),
        })
    return violations


def validate_model(schema: Type[T], payload: Any) -> Validated[T]:
    """Run a pydantic schema over raw input and return a tagged result"""
    if not isinstance(payload, dict):
        return Validated(violations=[{"field": "__root__", "message": "Request body must be a JSON object"}])
    try:
        return Validated(value=schema.model_validate(payload))
    except PydanticValidationError as exc:
        return Validated(violations=format_violations(exc.errors()))


def is_blank(value: Any) -> bool:
    """
    True for values a client leaves out: missing, null, False, zero and "".

    Whitespace-only strings and empty lists or objects count as supplied;
    callers that need trimmed text normalize it themselves.
    """
    if isinstance(value, (list, dict)):
        return False
    return not value


def missing_fields(data: Dict[str, Any], fields: Iterable[str]) -> List[str]:
    """Names from `fields` that are blank in `data`"""
    return [name for name in fields if is_blank(data.get(name))]
