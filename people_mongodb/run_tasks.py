"""people_mongodb/run_tasks.py

Connects to MongoDB and runs every person task in sequence, printing each
result.

Two modes:
1) MONGO_URI (from .env or --uri) points at an external MongoDB / Atlas.
2) MONGO_URI unset: an in-memory database is used so the tasks run without
   credentials.

Usage:
    python -m people_mongodb.run_tasks --drop
"""
from __future__ import annotations
import argparse

from people_mongodb.connect_db import (
    DB_NAME,
    MONGO_URI,
    close_client,
    get_client,
    get_database,
    get_people_collection,
)
from people_mongodb.create_collections import create_collections
from people_mongodb.people_data import PEOPLE_DATA
from people_mongodb.person_tasks import (
    as_result,
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


def run_all_tasks(people) -> dict:
    print("\n---- Running MongoDB tasks ----\n")
    results = {}

    saved = as_result(create_and_save_person, people)
    results["create_and_save_person"] = saved
    print("1) create_and_save_person result ->", saved)

    many = as_result(create_many_people, people, PEOPLE_DATA)
    results["create_many_people"] = many
    print("2) create_many_people result -> created", len(many), "people")

    found_mary = as_result(find_people_by_name, people, "Mary")
    results["find_people_by_name"] = found_mary
    print('3) find_people_by_name("Mary") ->', found_mary)

    one_with_burritos = as_result(find_one_by_food, people, "burritos")
    results["find_one_by_food"] = one_with_burritos
    print('4) find_one_by_food("burritos") ->', one_with_burritos)

    # 5) and 6) use the person saved in step 1
    found_by_id = as_result(find_person_by_id, people, saved.id)
    results["find_person_by_id"] = found_by_id
    print("5) find_person_by_id ->", found_by_id)

    edited = as_result(find_edit_then_save, people, saved.id)
    results["find_edit_then_save"] = edited
    print("6) find_edit_then_save ->", edited)

    updated = as_result(find_and_update, people, "John")
    results["find_and_update"] = updated
    print('7) find_and_update("John") ->', updated)

    # 8) remove the first of the seeded people
    removed = as_result(remove_by_id, people, many[0].id)
    results["remove_by_id"] = removed
    print("8) remove_by_id ->", removed)

    remove_many_result = as_result(remove_many_people, people)
    results["remove_many_people"] = remove_many_result
    print("9) remove_many_people (name: Mary) ->", remove_many_result)

    chain_result = as_result(query_chain, people)
    results["query_chain"] = chain_result
    print("10) query_chain ->", chain_result)

    print("\n---- Tasks finished ----\n")
    return results


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run the basic MongoDB person tasks in sequence",
    )
    parser.add_argument(
        "--uri",
        default=MONGO_URI,
        help="MongoDB connection string (in-memory database when unset)",
    )
    parser.add_argument(
        "--db",
        default=DB_NAME,
        help="Database name",
    )
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Remove existing people before running",
    )
    parser.add_argument(
        "--no-validator",
        action="store_true",
        help="Do not create the collection / apply the $jsonSchema validator",
    )
    args = parser.parse_args(argv)

    try:
        client = get_client(args.uri)
    except Exception as e:
        print("MongoDB connection error:", e)
        return 1

    print("Successfully connected to MongoDB")
    try:
        db = get_database(client, args.db)
        people = get_people_collection(db)
        if args.drop:
            people.delete_many({})
        if not args.no_validator:
            create_collections(db)
        run_all_tasks(people)
        print("All tasks completed.")
        return 0
    except Exception as e:
        print("Error running tasks:", e)
        return 1
    finally:
        close_client(client)
        print("Connection closed.")


if __name__ == "__main__":
    raise SystemExit(main())
