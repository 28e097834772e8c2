"""Basic data-access tasks on the people collection.

Each task is a thin wrapper over one driver call. Tasks can be used in two
ways:

* direct: ``person = find_person_by_id(people, pid)`` returns the result or
  raises the driver/validation error;
* callback: ``find_person_by_id(people, pid, done=cb)`` calls
  ``cb(None, result)`` on success or ``cb(err, None)`` on failure and returns
  whatever ``cb`` returns.

``as_result`` turns a callback-style call back into a plain return value.
"""
import functools
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from bson.objectid import ObjectId
from pymongo import ASCENDING, ReturnDocument

from people_mongodb.models import PersonIn, PersonOut, PersonPatch, person_from_doc
from people_mongodb.schema import SchemaValidationError, validate_person

NEW_PERSON = {"name": "Charlie", "age": 40, "favorite_foods": ["sandwich"]}
EXTRA_FOOD = "hamburger"
UPDATED_AGE = 20
REMOVE_NAME = "Mary"
CHAIN_FOOD = "burritos"
CHAIN_LIMIT = 2

Done = Callable[[Optional[BaseException], Any], Any]


class PersonNotFoundError(LookupError):
    pass


def callback_style(fn):
    """Let ``fn`` report through an optional ``done(err, data)`` keyword."""

    @functools.wraps(fn)
    def wrapper(*args, done: Optional[Done] = None, **kwargs):
        if done is None:
            return fn(*args, **kwargs)
        try:
            result = fn(*args, **kwargs)
        except Exception as err:
            return done(err, None)
        return done(None, result)

    return wrapper


def as_result(fn, *args, **kwargs):
    """Run a callback-style task and return its data, raising its error."""
    outcome: Dict[str, Any] = {"err": None, "data": None}

    def done(err, data):
        outcome["err"] = err
        outcome["data"] = data

    fn(*args, done=done, **kwargs)
    if outcome["err"] is not None:
        raise outcome["err"]
    return outcome["data"]


def _to_object_id(person_id: Union[str, ObjectId]) -> ObjectId:
    if isinstance(person_id, ObjectId):
        return person_id
    # raises bson.errors.InvalidId for malformed ids
    return ObjectId(person_id)


def _new_document(person: Union[PersonIn, Dict[str, Any]]) -> dict:
    if not isinstance(person, PersonIn):
        person = PersonIn(**person)
    doc = person.to_document()
    validate_person(doc)
    return doc


# 1) Create and save a record
@callback_style
def create_and_save_person(people, person: Union[PersonIn, Dict[str, Any], None] = None) -> PersonOut:
    doc = _new_document(NEW_PERSON if person is None else person)
    result = people.insert_one(doc)
    doc["_id"] = result.inserted_id
    return person_from_doc(doc)


# 2) Create many records at once
@callback_style
def create_many_people(people, array_of_people: Iterable[Union[PersonIn, Dict[str, Any]]]) -> List[PersonOut]:
    # validate everything before inserting anything
    docs = [_new_document(p) for p in array_of_people]
    if not docs:
        return []
    result = people.insert_many(docs)
    created = []
    for doc, inserted_id in zip(docs, result.inserted_ids):
        doc["_id"] = inserted_id
        created.append(person_from_doc(doc))
    return created


# 3) Search by name
@callback_style
def find_people_by_name(people, person_name: str) -> List[PersonOut]:
    return [person_from_doc(d) for d in people.find({"name": person_name})]


# 4) Return a single match; the query matches inside the favorite_foods array
@callback_style
def find_one_by_food(people, food: str) -> Optional[PersonOut]:
    doc = people.find_one({"favorite_foods": food})
    return person_from_doc(doc) if doc else None


# 5) Search by _id
@callback_style
def find_person_by_id(people, person_id: Union[str, ObjectId]) -> Optional[PersonOut]:
    doc = people.find_one({"_id": _to_object_id(person_id)})
    return person_from_doc(doc) if doc else None


# 6) Classic update: find, edit, then save
@callback_style
def find_edit_then_save(people, person_id: Union[str, ObjectId]) -> PersonOut:
    oid = _to_object_id(person_id)
    doc = people.find_one({"_id": oid})
    if not doc:
        raise PersonNotFoundError("Person not found")
    doc.setdefault("favorite_foods", []).append(EXTRA_FOOD)
    validate_person(doc)
    people.replace_one({"_id": oid}, doc)
    return person_from_doc(doc)


# 7) Atomic update, returning the updated document
@callback_style
def find_and_update(people, person_name: str, age: int = UPDATED_AGE) -> Optional[PersonOut]:
    age = PersonPatch(age=age).age
    if age is None:
        raise SchemaValidationError("Schema validation error: age is required")
    doc = people.find_one_and_update(
        {"name": person_name},
        {"$set": {"age": age}},
        return_document=ReturnDocument.AFTER,
    )
    return person_from_doc(doc) if doc else None


# 8) Delete one document by _id, returning what was removed
@callback_style
def remove_by_id(people, person_id: Union[str, ObjectId]) -> Optional[PersonOut]:
    doc = people.find_one_and_delete({"_id": _to_object_id(person_id)})
    return person_from_doc(doc) if doc else None


# 9) Delete every document matching a name
@callback_style
def remove_many_people(people, name: str = REMOVE_NAME) -> Dict[str, Any]:
    result = people.delete_many({"name": name})
    return {"acknowledged": result.acknowledged, "deleted_count": result.deleted_count}


# 10) Chain query helpers: filter, sort by name, limit, hide age
@callback_style
def query_chain(people, food: str = CHAIN_FOOD, limit: int = CHAIN_LIMIT) -> List[PersonOut]:
    cursor = people.find({"favorite_foods": food}, {"age": 0}).sort("name", ASCENDING).limit(limit)
    return [person_from_doc(d) for d in cursor]
