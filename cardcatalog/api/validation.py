"""Request body validation decorator.

@validate_request looks for a view parameter annotated with a Pydantic
model, builds that model from the request body and passes it in. Path
parameters are passed through untouched.

    @auth_bp.post("/login")
    @validate_request
    def login(data: UserLogin):
        ...

Bodies may be JSON objects or form-encoded. An absent body validates as
an empty object, so "field missing" stays a business-rule decision of the
view rather than a parsing failure.
"""

import inspect
import logging
import typing
from functools import wraps

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)


def _find_model_parameter(f) -> tuple[str, type[BaseModel]] | None:
    hints = typing.get_type_hints(f)
    for name in inspect.signature(f).parameters:
        annotation = hints.get(name)
        if inspect.isclass(annotation) and issubclass(annotation, BaseModel):
            return name, annotation
    return None


def _read_body() -> dict:
    """Read the request body as a dict.

    Raises:
        ValidationError: If the body is unparsable JSON or not an object
    """
    if request.is_json:
        payload = request.get_json(silent=True)
        if payload is None:
            if request.get_data():
                raise ValidationError(
                    "Request body must be valid JSON",
                    code="VALIDATION_INVALID_BODY",
                )
            return {}
        if not isinstance(payload, dict):
            raise ValidationError(
                "Request body must be a JSON object",
                {"received": type(payload).__name__},
                code="VALIDATION_INVALID_BODY",
            )
        return payload

    if request.form:
        return request.form.to_dict()

    return {}


def validate_request(f):
    """Validate the request body against the view's Pydantic model parameter."""
    model_parameter = _find_model_parameter(f)

    @wraps(f)
    def wrapper(*args, **kwargs):
        if model_parameter is not None:
            name, model = model_parameter
            try:
                kwargs[name] = model.model_validate(_read_body())
            except PydanticValidationError as e:
                logger.warning(f"Request validation failed on {request.path}: {e.error_count()} error(s)")
                raise ValidationError(
                    "Invalid request data",
                    {"errors": e.errors(include_url=False, include_context=False, include_input=False)},
                    code="VALIDATION_INVALID_BODY",
                )
        return f(*args, **kwargs)

    return wrapper
