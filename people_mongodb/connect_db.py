# connect_db.py - MongoDB connection, with an in-memory fallback
import os

import mongomock
from dotenv import load_dotenv
from pymongo import MongoClient

load_dotenv()
MONGO_URI = os.getenv("MONGO_URI")
DB_NAME = os.getenv("DB_NAME", "people_db")
PEOPLE_COLLECTION = os.getenv("PEOPLE_COLLECTION", "people")
MONGO_TLS_ALLOW_INVALID = os.getenv("MONGO_TLS_ALLOW_INVALID", "false").lower() in ("1", "true", "yes")


def get_client(uri=None):
    """Return a connected client.

    Without a URI (argument or MONGO_URI) an in-memory mongomock client is
    returned so the tasks can run without external credentials.
    """
    uri = uri or MONGO_URI
    if not uri:
        print("MONGO_URI not set. Starting in-memory MongoDB...")
        return mongomock.MongoClient()

    options = {"serverSelectionTimeoutMS": 5000}
    if MONGO_TLS_ALLOW_INVALID:
        options.update(tls=True, tlsAllowInvalidCertificates=True)

    try:
        client = MongoClient(uri, **options)
        # Test the connection
        client.admin.command("ping")
        return client
    except Exception as e:
        print(f"❌ Failed to connect to MongoDB: {e}")
        raise


def get_database(client=None, name=None):
    client = client if client is not None else get_client()
    name = name or DB_NAME
    db = client[name]
    print(f"✅ Connected to MongoDB database: {name}")
    return db


def get_people_collection(db=None):
    db = db if db is not None else get_database()
    return db[PEOPLE_COLLECTION]


def close_client(client):
    client.close()


if __name__ == "__main__":
    get_database()
