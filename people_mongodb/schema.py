# schema.py
import jsonschema
from jsonschema import FormatChecker

from people_mongodb.connect_db import PEOPLE_COLLECTION

person_schema = {
    "bsonType": "object",
    "required": ["name"],
    "properties": {
        "_id": {"bsonType": "objectId"},
        "name": {"bsonType": "string", "minLength": 1},
        "age": {"bsonType": "int", "minimum": 0},
        "favorite_foods": {
            "bsonType": "array",
            "items": {"bsonType": "string"},
        },
    },
}

SCHEMAS = {
    PEOPLE_COLLECTION: person_schema,
}


class SchemaValidationError(ValueError):
    """Raised when a document does not satisfy its collection schema."""


_JSON_SCHEMA_CACHE: dict = {}

# keywords carried over unchanged from $jsonSchema to JSON Schema
_PASSTHROUGH = ("minLength", "maxLength", "minimum", "maximum", "enum")


def _bson_type_to_json(t):
    if t == "string":
        return "string"
    if t in ("int", "long"):
        return "integer"
    if t in ("double", "decimal", "number"):
        return "number"
    if t == "bool":
        return "boolean"
    if t == "array":
        return "array"
    if t == "object":
        return "object"
    if t == "null":
        return "null"
    # objectId, date and friends are not JSON-native; accept anything
    return None


def _convert_property(prop: dict) -> dict:
    bsonType = prop.get("bsonType")
    types = bsonType if isinstance(bsonType, list) else [bsonType]
    json_types = [jt for jt in (_bson_type_to_json(t) for t in types) if jt]

    prop_schema: dict = {}
    if json_types:
        prop_schema["type"] = json_types[0] if len(json_types) == 1 else json_types
    for keyword in _PASSTHROUGH:
        if keyword in prop:
            prop_schema[keyword] = prop[keyword]
    if "items" in prop:
        prop_schema["items"] = _convert_property(prop["items"])
    if "properties" in prop:
        prop_schema.update(bson_to_jsonschema(prop))
    return prop_schema


def bson_to_jsonschema(bson_schema: dict) -> dict:
    props = {key: _convert_property(prop) for key, prop in bson_schema.get("properties", {}).items()}

    json_schema = {"type": "object", "properties": props}
    if "required" in bson_schema:
        json_schema["required"] = bson_schema["required"]
    return json_schema


def validate_document(collection: str, doc: dict) -> bool:
    """Validate doc against the $jsonSchema registered for collection.

    Collections without a registered schema are accepted as-is.
    """
    bson_sch = SCHEMAS.get(collection)
    if not bson_sch:
        return True

    if collection not in _JSON_SCHEMA_CACHE:
        _JSON_SCHEMA_CACHE[collection] = bson_to_jsonschema(bson_sch)
    json_sch = _JSON_SCHEMA_CACHE[collection]

    try:
        jsonschema.validate(instance=doc, schema=json_sch, format_checker=FormatChecker())
    except jsonschema.ValidationError as e:
        raise SchemaValidationError(f"Schema validation error: {e.message}") from e
    return True


def validate_person(doc: dict) -> bool:
    return validate_document(PEOPLE_COLLECTION, doc)
