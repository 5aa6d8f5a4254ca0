import logging
from functools import lru_cache

from app.models.math import INT32_MAX, INT32_MIN, SumaRequest, SumaResponse, ValidationError

logger = logging.getLogger(__name__)

SumaResult = SumaResponse | ValidationError


class MathService:
    """Integer arithmetic with signed 32-bit overflow detection."""

    operation = "suma"

    def sum(self, request: SumaRequest | None) -> SumaResult:
        if request is None:
            return ValidationError("request cannot be null")

        total = request.a + request.b
        if not INT32_MIN <= total <= INT32_MAX:
            logger.warning("Sum overflow", extra={"a": request.a, "b": request.b})
            return ValidationError(f"sum of {request.a} + {request.b} produces an overflow")

        return SumaResponse(a=request.a, b=request.b, resultado=total, operacion=self.operation)


@lru_cache
def get_math_service() -> MathService:
    return MathService()
