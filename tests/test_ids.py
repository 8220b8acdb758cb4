from meal_shopping_list.ids import ID_STRATEGIES, random_ids, sequential_ids


def test_sequential_ids_count_from_one():
    new_id = sequential_ids()
    assert [new_id(), new_id(), new_id()] == ["item-1", "item-2", "item-3"]


def test_sequential_ids_are_independent_per_factory():
    first, second = sequential_ids(), sequential_ids()
    first()
    assert second() == "item-1"


def test_random_ids_are_unique_and_prefixed():
    new_id = random_ids("x")
    ids = [new_id() for _ in range(500)]
    assert len(set(ids)) == 500
    assert all(i.startswith("x-") and len(i) == 11 for i in ids)


def test_strategies_registered_by_name():
    assert set(ID_STRATEGIES) == {"sequential", "random"}
