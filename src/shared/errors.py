"""Error types and helpers shared across bounded contexts.

Not-found, validation and conflict conditions reuse Protean's exception
vocabulary (``ObjectNotFoundError``, ``ValidationError``, ``InvalidStateError``).
Only the integrity category has no Protean counterpart.
"""

from protean.exceptions import ProteanException, ValidationError
from pydantic import ValidationError as SchemaError


class DataIntegrityError(ProteanException):
    """A stored record references data that no longer exists.

    Fatal to the multi-step operation that encounters it.
    """


def validation_error_from(exc: SchemaError) -> ValidationError:
    """Translate a pydantic schema failure into a ``{field: [messages]}`` ValidationError."""
    messages: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "_entity"
        messages.setdefault(field, []).append(error["msg"])
    return ValidationError(messages)
