"""Field validation for request bodies.

Learn: Routes take the raw JSON body and validate it explicitly with check(),
so they decide *when* validation runs (after the 404 and ownership checks
on updates, for instance). Pydantic does the checking; this module turns
its errors into the ordered violation list the API returns.

Schemas may declare a `field_messages` mapping to replace pydantic's
default wording: keys are either "<field>" or "<field>.<error type>",
the more specific key wins.
"""

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from inkpost.errors import ValidationFailed
from inkpost.schemas.envelope import Violation

M = TypeVar("M", bound=BaseModel)


def violations_from(exc: PydanticValidationError, schema: type[BaseModel]) -> list[Violation]:
    messages: dict[str, str] = getattr(schema, "field_messages", {})
    violations = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "body"
        top = str(error["loc"][0]) if error["loc"] else field
        msg = (
            messages.get(f"{top}.{error['type']}")
            or messages.get(top)
            or error["msg"]
        )
        violations.append(Violation(field=field, msg=msg))
    return violations


def check(schema: type[M], payload: Any) -> M:
    """Validate payload against schema, raising ValidationFailed on violations."""
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationFailed(violations_from(exc, schema))
