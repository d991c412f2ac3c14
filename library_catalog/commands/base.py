"""
Base command for encapsulating business operations.

The Command pattern encapsulates business logic as objects, making it
reusable from the HTTP layer, scripts and tests, and easy to test in
isolation against a mocked store.

Example:
    ```python
    from library_catalog.commands.author_commands import CreateAuthorCommand

    store = CatalogStore(session)
    async with store.transaction():
        author = await CreateAuthorCommand(store).execute(
            {"name": "J. R. R. Tolkien", "birthDate": "1892-01-03"}
        )
    ```
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Mapping, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from library_catalog.exceptions import ValidationError
from library_catalog.types import EntityKind

TInput = TypeVar("TInput")
TOutput = TypeVar("TOutput")
TSchema = TypeVar("TSchema", bound=BaseModel)

# What a caller may hand to a create/update command as the payload
Payload = BaseModel | Mapping[str, Any] | None


@dataclass(frozen=True)
class UpdateRequest:
    """
    Input of an update command.

    Attributes:
        id: Identity taken from the request path.
        payload: New field values; validated only after the target exists.
    """

    id: int
    payload: Payload


def parse_payload(
    schema: Type[TSchema], payload: Payload, kind: EntityKind
) -> TSchema:
    """
    Validate a raw payload against its input schema.

    Args:
        schema: Pydantic input model for the entity kind.
        payload: Already-parsed model, a mapping, or None.
        kind: Entity kind, used in the error message.

    Returns:
        The validated input model.

    Raises:
        ValidationError: If the payload is absent or a field is invalid.
    """
    if payload is None:
        raise ValidationError(f"{kind.label} object is null.")

    if isinstance(payload, schema):
        return payload

    if isinstance(payload, BaseModel):
        payload = payload.model_dump()

    try:
        return schema.model_validate(payload)
    except PydanticValidationError as ex:
        raise ValidationError(
            f"{kind.label} payload is invalid.",
            details={"errors": json.loads(ex.json(include_url=False))},
        ) from ex


class BaseCommand(ABC, Generic[TInput, TOutput]):
    """
    Base command for business operations.

    Commands encapsulate business logic and depend on the store protocol
    for data access. They do not open or commit transactions; the caller
    runs them inside ``store.transaction()``.

    Type Parameters:
        TInput: Input data type.
        TOutput: Output data type.
    """

    @abstractmethod
    async def execute(self, input_data: TInput) -> TOutput:
        """
        Execute the command.

        Args:
            input_data: Input data for the command.

        Returns:
            Result of the command execution.

        Raises:
            AppException: Subclasses for every classified catalog failure.
        """
        pass
