"""FastAPI endpoints for big integer evaluation.

Routes
------
POST   /bigint/evaluate    Run one operation over decimal operands
POST   /bigint/normalize   Canonicalize a decimal string
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import APIRouter, HTTPException

import bigint
from bigint import BigInt, BigIntError, DivisionByZero, DivisionStrategy
from models import (
    EvaluateRequest,
    EvaluateResponse,
    NormalizeRequest,
    NormalizeResponse,
    Operation,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bigint", tags=["bigint"])


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ServiceConfig:
    """Limits and algorithm choices for the evaluation service."""

    max_operand_length: int = 10_000
    division_strategy: DivisionStrategy = DivisionStrategy.ESTIMATE

    def __post_init__(self) -> None:
        if self.max_operand_length < 1:
            raise ValueError(
                f"max_operand_length must be >= 1, got {self.max_operand_length}"
            )


# The config is injected by the app factory (see app.py).
_config: ServiceConfig | None = None


def set_config(config: ServiceConfig) -> None:
    """Inject the service configuration. Called once at app startup."""
    global _config
    _config = config


def get_config() -> ServiceConfig:
    assert _config is not None, "Config not initialized"
    return _config


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse(name: str, text: str) -> BigInt:
    config = get_config()
    if len(text) > config.max_operand_length:
        logger.info("rejected operand %s: %d characters", name, len(text))
        raise HTTPException(
            status_code=413,
            detail=(
                f"Operand {name!r} has {len(text)} characters; "
                f"limit is {config.max_operand_length}"
            ),
        )
    try:
        return bigint.construct(text)
    except BigIntError as e:
        logger.info("rejected operand %s: %s", name, e)
        raise HTTPException(status_code=422, detail=str(e)) from e


def _evaluate(op: Operation, a: BigInt, b: BigInt | None) -> BigInt:
    if op is Operation.NEGATE:
        return bigint.negate(a)
    if op is Operation.ABS:
        return bigint.abs_(a)
    assert b is not None
    if op is Operation.ADD:
        return bigint.add(a, b)
    if op is Operation.SUBTRACT:
        return bigint.subtract(a, b)
    if op is Operation.MULTIPLY:
        return bigint.multiply(a, b)
    if op is Operation.DIVIDE:
        return bigint.divide(a, b, get_config().division_strategy)
    return bigint.construct(bigint.compare(a, b))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate(payload: EvaluateRequest) -> EvaluateResponse:
    """Evaluate one operation and return the canonical result."""
    a = _parse("a", payload.a)
    b = _parse("b", payload.b) if payload.b is not None else None
    try:
        result = _evaluate(payload.operation, a, b)
    except DivisionByZero as e:
        logger.warning("division by zero: %s / %s", a, b)
        raise HTTPException(status_code=400, detail=str(e)) from e
    return EvaluateResponse(
        operation=payload.operation,
        a=bigint.to_string(a),
        b=bigint.to_string(b) if b is not None else None,
        result=bigint.to_string(result),
        approximation=bigint.to_number(result),
    )


@router.post("/normalize", response_model=NormalizeResponse)
def normalize(payload: NormalizeRequest) -> NormalizeResponse:
    """Return the canonical form of a decimal string."""
    value = _parse("value", payload.value)
    return NormalizeResponse(
        value=bigint.to_string(value),
        negative=value.negative,
        digit_groups=list(value.digits),
        approximation=bigint.to_number(value),
    )
