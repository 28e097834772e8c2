# people_data.py
# Example people used to seed the collection with create_many_people()

PEOPLE_DATA = [
    {"name": "John", "age": 25, "favorite_foods": ["pizza", "burritos"]},
    {"name": "Mary", "age": 30, "favorite_foods": ["salad", "burritos"]},
    {"name": "Mary", "age": 22, "favorite_foods": ["pasta"]},
    {"name": "Peter", "age": 28, "favorite_foods": ["burritos", "burger"]},
    {"name": "Alice", "age": 35, "favorite_foods": ["sushi"]},
]
