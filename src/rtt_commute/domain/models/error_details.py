"""Error details domain model."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ErrorDetails(BaseModel):
    """Details about a failed run, including the HTTP status code if applicable."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    phase: str
    reason: str
    status_code: int | None = None
