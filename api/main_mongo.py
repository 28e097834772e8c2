from functools import lru_cache

from bson.errors import InvalidId
from fastapi import Depends, FastAPI, HTTPException, Query, status

from people_mongodb.connect_db import get_client, get_database, get_people_collection
from people_mongodb.models import PersonIn, PersonOut
from people_mongodb.person_tasks import (
    CHAIN_FOOD,
    CHAIN_LIMIT,
    REMOVE_NAME,
    UPDATED_AGE,
    PersonNotFoundError,
    create_and_save_person,
    create_many_people,
    find_and_update,
    find_edit_then_save,
    find_one_by_food,
    find_people_by_name,
    find_person_by_id,
    query_chain,
    remove_by_id,
    remove_many_people,
)
from people_mongodb.schema import SchemaValidationError

app = FastAPI(title="People CRUD API (Mongo)", version="1.0.0")


@lru_cache(maxsize=1)
def _client():
    # one client per process; the in-memory fallback only keeps data per client
    return get_client()


def people_conn():
    yield get_people_collection(get_database(_client()))


def _bad_request(e: Exception) -> HTTPException:
    return HTTPException(status_code=400, detail=str(e))


def _invalid_id() -> HTTPException:
    return HTTPException(status_code=400, detail="Invalid id")


# ======== People CRUD ========
@app.post("/people", response_model=PersonOut, status_code=status.HTTP_201_CREATED, tags=["People"])
def create_person(payload: PersonIn, people=Depends(people_conn)):
    try:
        return create_and_save_person(people, payload)
    except SchemaValidationError as e:
        raise _bad_request(e)


@app.post("/people/bulk", response_model=list[PersonOut], status_code=status.HTTP_201_CREATED, tags=["People"])
def create_people(payload: list[PersonIn], people=Depends(people_conn)):
    try:
        return create_many_people(people, payload)
    except SchemaValidationError as e:
        raise _bad_request(e)


@app.get("/people", response_model=list[PersonOut], tags=["People"])
def list_people_by_name(name: str, people=Depends(people_conn)):
    return find_people_by_name(people, name)


@app.get("/people/chain", response_model=list[PersonOut], tags=["People"])
def chain_people(food: str = CHAIN_FOOD, limit: int = CHAIN_LIMIT, people=Depends(people_conn)):
    return query_chain(people, food, limit)


@app.get("/people/by-food/{food}", response_model=PersonOut, tags=["People"])
def get_person_by_food(food: str, people=Depends(people_conn)):
    person = find_one_by_food(people, food)
    if person is None:
        raise HTTPException(status_code=404, detail="Person not found")
    return person


@app.get("/people/{person_id}", response_model=PersonOut, tags=["People"])
def get_person(person_id: str, people=Depends(people_conn)):
    try:
        person = find_person_by_id(people, person_id)
    except InvalidId:
        raise _invalid_id()
    if person is None:
        raise HTTPException(status_code=404, detail="Person not found")
    return person


@app.post("/people/{person_id}/favorite-foods", response_model=PersonOut, tags=["People"])
def add_favorite_food(person_id: str, people=Depends(people_conn)):
    try:
        return find_edit_then_save(people, person_id)
    except InvalidId:
        raise _invalid_id()
    except PersonNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SchemaValidationError as e:
        raise _bad_request(e)


@app.patch("/people/by-name/{name}/age", response_model=PersonOut, tags=["People"])
def update_age_by_name(name: str, age: int = Query(UPDATED_AGE, ge=0), people=Depends(people_conn)):
    person = find_and_update(people, name, age)
    if person is None:
        raise HTTPException(status_code=404, detail="Person not found")
    return person


@app.delete("/people/{person_id}", response_model=PersonOut, tags=["People"])
def delete_person(person_id: str, people=Depends(people_conn)):
    try:
        person = remove_by_id(people, person_id)
    except InvalidId:
        raise _invalid_id()
    if person is None:
        raise HTTPException(status_code=404, detail="Person not found")
    return person


@app.delete("/people", response_model=dict, tags=["People"])
def delete_people_by_name(name: str = REMOVE_NAME, people=Depends(people_conn)):
    return remove_many_people(people, name)


@app.get("/health", response_model=dict, tags=["Health"])
def health(people=Depends(people_conn)):
    # Simple ping
    try:
        people.database.client.admin.command("ping")
        return {"status": "ok"}
    except Exception:
        raise HTTPException(status_code=500, detail="db ping failed")
