"""people_mongodb package initializer

Connection helpers, the Person schema and the tutorial data-access tasks
(insert, find, update, delete and a chained query) run against a MongoDB
collection of people.
"""

__all__ = [
    "connect_db",
    "create_collections",
    "models",
    "people_data",
    "person_tasks",
    "run_tasks",
    "schema",
]
