# app/db/schemas/base_schema.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    JSON bodies use camelCase (firstName, patientId); Python attributes
    stay snake_case. Either spelling is accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,  # Tells Pydantic to read SQLAlchemy objects
    )


__all__ = ["CamelModel"]
