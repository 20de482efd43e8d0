import datetime as dt
from datetime import datetime
from uuid import UUID, uuid4
from typing import List, Optional

from pydantic import BaseModel, StrictStr, field_validator
from sqlalchemy import JSON, Column, String, Text
from sqlalchemy.dialects import postgresql
from sqlmodel import SQLModel, Field

# varchar[] on postgres, json everywhere else (the sqlite test store)
StackType = JSON().with_variant(postgresql.ARRAY(String), "postgresql")


class Person(SQLModel, table=True):
    __tablename__ = "people"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    apelido: str = Field(unique=True)
    nome: str
    nascimento: dt.date
    stack: Optional[List[str]] = Field(default=None, sa_column=Column(StackType, nullable=True))
    # internal substring-search target, never rendered
    for_search: str = Field(sa_column=Column(Text, nullable=False))


def build_search_field(apelido: str, nome: str, stack: Optional[List[str]]) -> str:
    """denormalized text the search endpoint matches against"""
    return " ".join([apelido, nome, *(stack or [])])


class PersonCreate(BaseModel):
    apelido: StrictStr
    nome: StrictStr
    nascimento: dt.date
    stack: Optional[List[StrictStr]] = None

    @field_validator("nascimento", mode="before")
    @classmethod
    def parse_nascimento(cls, value):
        # only calendar dates written as YYYY-MM-DD, no timestamps or datetimes
        if not isinstance(value, str):
            raise ValueError("nascimento must be a YYYY-MM-DD string")
        return datetime.strptime(value, "%Y-%m-%d").date()


class PersonRead(BaseModel):
    id: str
    apelido: str
    nome: str
    nascimento: dt.date
    stack: Optional[List[str]] = None

    @classmethod
    def from_row(cls, person) -> "PersonRead":
        """accepts a Person or any selected row with the same attributes"""
        return cls(
            id=str(person.id),
            apelido=person.apelido,
            nome=person.nome,
            nascimento=person.nascimento,
            stack=person.stack,
        )
