"""Request and response models for the big integer evaluation API.

Operands and results travel as canonical decimal strings, the only
interchange format of the library.  Grammar checking is left to the
library's parser so that the API and the library reject exactly the
same strings; these models only check shape.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator


# ---------------------------------------------------------------------------
# Operation: what the evaluator should compute
# ---------------------------------------------------------------------------

class Operation(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    COMPARE = "compare"
    NEGATE = "negate"
    ABS = "abs"

    @property
    def is_unary(self) -> bool:
        return self in (Operation.NEGATE, Operation.ABS)


# ---------------------------------------------------------------------------
# Evaluate
# ---------------------------------------------------------------------------

class EvaluateRequest(BaseModel):
    """One operation over one or two decimal operands."""

    operation: Operation
    a: str = Field(..., min_length=1, description="Left operand, e.g. '-123'")
    b: str | None = Field(
        default=None,
        min_length=1,
        description="Right operand; required for binary operations only",
    )

    @model_validator(mode="after")
    def operand_count_matches(self) -> EvaluateRequest:
        if self.operation.is_unary and self.b is not None:
            raise ValueError(f"{self.operation.value} takes a single operand")
        if not self.operation.is_unary and self.b is None:
            raise ValueError(f"{self.operation.value} requires operand 'b'")
        return self


class EvaluateResponse(BaseModel):
    """Result of an evaluation, echoing the canonical operands."""

    operation: Operation
    a: str
    b: str | None = None
    result: str = Field(
        ..., description="Canonical decimal result; -1, 0 or 1 for compare"
    )
    approximation: float = Field(
        ..., description="Float approximation of result; lossy above 2**53"
    )


# ---------------------------------------------------------------------------
# Normalize
# ---------------------------------------------------------------------------

class NormalizeRequest(BaseModel):
    value: str = Field(..., min_length=1)


class NormalizeResponse(BaseModel):
    """Canonical form of a decimal string and its digit-group layout."""

    value: str
    negative: bool
    digit_groups: list[int] = Field(
        default_factory=list,
        description="Base 10**7 digit groups, least significant first",
    )
    approximation: float
