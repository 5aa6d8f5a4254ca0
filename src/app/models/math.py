from dataclasses import dataclass

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class SumaRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    a: int = Field(
        default=0,
        ge=INT32_MIN,
        le=INT32_MAX,
        strict=True,
        validation_alias=AliasChoices("A", "a"),
        description="Primer sumando",
    )
    b: int = Field(
        default=0,
        ge=INT32_MIN,
        le=INT32_MAX,
        strict=True,
        validation_alias=AliasChoices("B", "b"),
        description="Segundo sumando",
    )


class SumaResponse(BaseModel):
    a: int
    b: int
    resultado: int
    operacion: str = "suma"


@dataclass(frozen=True)
class ValidationError:
    """Input rejected by a business rule; returned, not raised."""

    message: str

    def __str__(self) -> str:
        return self.message
