import logging
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy.exc import DBAPIError
from sqlmodel import Session, select, func

from pessoas.core.errors import InternalFault, StoreErrorKind, UnprocessableInput, classify
from pessoas.models import Person, PersonCreate, PersonRead, build_search_field

logger = logging.getLogger(__name__)


def create_person(session: Session, payload: PersonCreate) -> UUID:
    """insert a new person in a single statement and return its generated id"""
    person = Person(
        id=uuid4(),
        apelido=payload.apelido,
        nome=payload.nome,
        nascimento=payload.nascimento,
        stack=payload.stack,
        for_search=build_search_field(payload.apelido, payload.nome, payload.stack),
    )
    person_id = person.id

    try:
        session.add(person)
        session.commit()
    except DBAPIError as e:
        session.rollback()
        kind = classify(e)
        if kind is StoreErrorKind.UNIQUE_VIOLATION:
            logger.info(f"rejected duplicate apelido: {payload.apelido!r}")
            raise UnprocessableInput("apelido already taken") from e
        if kind is StoreErrorKind.INTEGRITY_VIOLATION:
            logger.info(f"rejected person violating store constraints: {e.orig}")
            raise UnprocessableInput("integrity constraint violated") from e
        raise InternalFault("insert failed") from e

    logger.debug(f"created person {person_id}")
    return person_id


def parse_person_id(raw: str) -> UUID:
    """
    parse a path id into a uuid

    a malformed id is reported as an internal fault rather than a 404,
    matching the behaviour existing clients already observe
    """
    try:
        return UUID(raw)
    except ValueError as e:
        raise InternalFault(f"invalid person id: {raw!r}") from e


# for_search is never read back
PUBLIC_COLUMNS = (Person.id, Person.apelido, Person.nome, Person.nascimento, Person.stack)


def get_person(session: Session, person_id: UUID) -> Optional[PersonRead]:
    row = session.exec(select(*PUBLIC_COLUMNS).where(Person.id == person_id)).first()
    return PersonRead.from_row(row) if row else None


def search_people(session: Session, term: str) -> List[PersonRead]:
    """case-sensitive substring match on for_search, unordered; an empty term matches everything"""
    query = select(*PUBLIC_COLUMNS).where(Person.for_search.like("%" + term + "%"))
    return [PersonRead.from_row(row) for row in session.exec(query).all()]


def count_people(session: Session) -> int:
    return session.exec(select(func.count()).select_from(Person)).one()
