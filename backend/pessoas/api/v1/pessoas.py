from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
from sqlmodel import Session
from typing import List

from pessoas.core.db import get_session
from pessoas.core.errors import PersonNotFound, UnprocessableInput
from pessoas.models import PersonCreate, PersonRead
from pessoas.services import people

router = APIRouter()

async def read_person_payload(request: Request) -> PersonCreate:
    """parse the raw body as json whatever the content-type; any failure (bad utf-8 included) is a 422"""
    try:
        return PersonCreate.model_validate_json(await request.body())
    except ValidationError as e:
        raise UnprocessableInput("invalid person payload") from e

@router.post("/pessoas", status_code=201)
def create_person(
    person: PersonCreate = Depends(read_person_payload),
    session: Session = Depends(get_session),
):
    """create a person, the new id comes back only in the Location header"""
    person_id = people.create_person(session, person)
    return Response(status_code=201, headers={"Location": f"/pessoas/{person_id}"})

@router.get("/pessoas/{person_id}", response_model=PersonRead)
def get_person(person_id: str, session: Session = Depends(get_session)):
    person = people.get_person(session, people.parse_person_id(person_id))
    if person is None:
        raise PersonNotFound(person_id)
    return person

@router.get("/pessoas", response_model=List[PersonRead])
def search_people(t: str = "", session: Session = Depends(get_session)):
    """substring search over apelido, nome and stack"""
    return people.search_people(session, t)

@router.get("/contagem-pessoas", response_class=PlainTextResponse)
def count_people(session: Session = Depends(get_session)):
    return PlainTextResponse(str(people.count_people(session)))
