"""Pydantic models for arithmetic operation requests and results."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class OperationRequest(BaseModel):
    """Represents a single arithmetic expression to evaluate."""

    model_config = ConfigDict(frozen=True)

    expression: str = Field(..., description="Arithmetic expression as a string")
    line_number: int = Field(default=1, ge=1, description="Position of the expression in its batch")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not empty."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v


class OperationResult(BaseModel):
    """Represents the outcome of an evaluated arithmetic operation: a result or an error."""

    model_config = ConfigDict(frozen=True)

    expression: str = Field(..., description="Original arithmetic expression")
    line_number: int = Field(default=1, ge=1, description="Position of the expression in its batch")
    result: Optional[float] = Field(default=None, description="Evaluated numeric result of the expression")
    error: Optional[str] = Field(default=None, description="Reason the expression could not be evaluated")

    @model_validator(mode="after")
    def result_xor_error(self) -> "OperationResult":
        """Ensure that exactly one of result and error is set."""
        if (self.result is None) == (self.error is None):
            raise ValueError("Exactly one of 'result' and 'error' must be set")
        return self

    @property
    def succeeded(self) -> bool:
        """True when the expression was evaluated to a number."""
        return self.error is None
