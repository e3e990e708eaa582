"""
Todo REST Backend — Todo Record
=================================

What:  The Todo record and its CSV row codec.
Why:   One model is shared by the store, the CSV file and the JSON API, so
       the field set is defined exactly once.
How:   Pydantic model in strict mode: a JSON body is decoded field by field
       without coercion ("1" is not a bool, 5 is not a title). Missing or null fields
       fall back to their zero value; unknown fields are ignored.

CSV row layout (no header row):
    id,title,description,terminated
    0,Buy milk,2 litres,false
"""

from typing import List, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Column order of a data file row
CSV_FIELDS = ("id", "title", "description", "terminated")

# Spellings accepted when reading the terminated column
_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


def parse_bool(value: str) -> bool:
    """
    Converts a CSV cell to a boolean.

    Unrecognised values read as False instead of failing the whole load.
    """
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return False


class Todo(BaseModel):
    """
    A task record with id, title, description and completion flag.

    `id` is assigned by the store; whatever a client sends in it is
    discarded on create and overridden on update.
    """

    id: str = Field(default="", description="Sequential identifier assigned by the store")
    title: str = Field(default="", description="Short task title")
    description: str = Field(default="", description="Free-form task details")
    terminated: bool = Field(default=False, description="Whether the task is done")

    model_config = ConfigDict(strict=True)

    @field_validator("id", "title", "description", mode="before")
    @classmethod
    def null_string_is_empty(cls, v):
        """A JSON null leaves a string field at its zero value."""
        return "" if v is None else v

    @field_validator("terminated", mode="before")
    @classmethod
    def null_flag_is_false(cls, v):
        return False if v is None else v

    def serialize(self) -> List[str]:
        """Returns the CSV row for this todo."""
        return [self.id, self.title, self.description, "true" if self.terminated else "false"]

    @classmethod
    def from_row(cls, row: Sequence[str]) -> "Todo":
        """
        Builds a Todo from a CSV row.

        Raises:
            ValueError: the row has fewer columns than CSV_FIELDS
        """
        if len(row) < len(CSV_FIELDS):
            raise ValueError(
                f"Expected {len(CSV_FIELDS)} columns ({','.join(CSV_FIELDS)}), got {len(row)}"
            )
        return cls(
            id=row[0],
            title=row[1],
            description=row[2],
            terminated=parse_bool(row[3]),
        )
