from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ModelWrapValidatorHandler, PrivateAttr, model_validator

from apierrors.type import JsonTypes


class InnerError(BaseModel):
    """Nested diagnostic detail of a service error."""

    model_config = ConfigDict(frozen=True, extra="allow", coerce_numbers_to_str=True)

    code: str | None = None


class StructuredError(BaseModel):
    """Service-reported error, decoded from the response body or synthesized on parse failure."""

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    code: str | None = None
    message: str | None = None
    inner_error: InnerError | None = Field(default=None, alias="innererror")
    raw_payload: JsonTypes = Field(default=None, exclude=True)


class ErrorResponse(BaseModel):
    """Service error response envelope."""

    model_config = ConfigDict(frozen=True, extra="allow")

    error: StructuredError

    _raw_payload: JsonTypes = PrivateAttr(default=None)

    @model_validator(mode="wrap")
    @classmethod
    def keep_raw_payload(
        cls,
        value: Any,  # noqa: ANN401
        handler: ModelWrapValidatorHandler["ErrorResponse"],
    ) -> "ErrorResponse":
        response = handler(value)
        if isinstance(value, dict):
            response._raw_payload = value  # noqa: SLF001
        return response

    @property
    def raw_payload(self) -> JsonTypes:
        """Decoded structure exactly as received."""
        return self._raw_payload
