from pymongo.errors import CollectionInvalid, OperationFailure

from people_mongodb.connect_db import get_database
from people_mongodb.schema import SCHEMAS


def create_collections(db=None):
    db = db if db is not None else get_database()

    for name, schema in SCHEMAS.items():
        try:
            db.create_collection(name)
        except CollectionInvalid:
            # already exists
            pass

        try:
            db.command({"collMod": name, "validator": {"$jsonSchema": schema}})
            print(f"✅ Created/updated collection '{name}' with validation.")
        except (OperationFailure, NotImplementedError) as e:
            # mongomock has no collMod; documents are still checked client-side
            print(f"⚠️ Failed to apply validator to '{name}': {e}")


if __name__ == "__main__":
    create_collections()
