from typing import Annotated, Any, List
from pydantic import BaseModel, BeforeValidator, ConfigDict, NonNegativeInt


def _as_str(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    return str(value)


def none_as_empty(value: Any) -> Any:
    return [] if value is None else value


def none_as_zero(value: Any) -> Any:
    return 0 if value is None else value


# Identifiers arrive as strings, ints or UUIDs depending on the caller
Identifier = Annotated[str, BeforeValidator(_as_str)]

# Optional list fields: absent or null both mean "nothing known"
StrList = Annotated[List[Identifier], BeforeValidator(none_as_empty)]

# Activity counters: null means nothing happened
Count = Annotated[NonNegativeInt, BeforeValidator(none_as_zero)]


class IntroEngineModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )
