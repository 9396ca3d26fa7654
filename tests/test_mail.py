import dataclasses

import pytest

from automail.core.mail import MailItem, Storage


def test_mail_ids_follow_construction_order():
    MailItem.reset_ids()
    items = [MailItem(2, 5, 300) for _ in range(3)]

    assert [item.id for item in items] == ["0", "1", "2"]


def test_mail_ids_keep_increasing_without_reset():
    first = MailItem(1, 1, 100)
    second = MailItem(1, 1, 100)

    assert int(second.id) == int(first.id) + 1
    assert first != second


def test_mail_item_is_immutable():
    item = MailItem(3, 10, 250, 10)

    with pytest.raises(dataclasses.FrozenInstanceError):
        item.weight = 10
    with pytest.raises(dataclasses.FrozenInstanceError):
        item.id = "x"


def test_has_priority():
    assert MailItem(1, 1, 100, 10).has_priority()
    assert MailItem(1, 1, 100, 100).has_priority()
    assert not MailItem(1, 1, 100).has_priority()


def test_describe_includes_priority_only_when_set():
    MailItem.reset_ids()
    plain = MailItem(4, 12, 870)
    urgent = MailItem(9, 3, 55, 100)

    assert plain.describe() == (
        "Mail Item:: ID:           0 | Arrival:   12 | Destination:  4 | Weight:  870"
    )
    assert urgent.describe().endswith("| Priority: 100")


def test_storage_is_last_in_first_out():
    storage = Storage(3)
    a, b, c = MailItem(1, 1, 1), MailItem(2, 1, 1), MailItem(3, 1, 1)
    for item in (a, b, c):
        storage.push(item)

    assert storage.items() == (a, b, c)
    assert [storage.pop(), storage.pop(), storage.pop()] == [c, b, a]
    assert storage.is_empty()


def test_storage_push_does_not_enforce_capacity():
    storage = Storage(1)
    storage.push(MailItem(1, 1, 100))
    storage.push(MailItem(1, 1, 200))

    assert len(storage) == 2
    assert storage.is_full()
    assert storage.capacity == 1
    assert storage.total_weight() == 300


def test_storage_pop_empty_raises():
    with pytest.raises(IndexError):
        Storage(2).pop()


def test_storage_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        Storage(0)


def test_storage_remove_specific_item():
    storage = Storage(3)
    a, b, c = MailItem(1, 1, 1), MailItem(2, 1, 1), MailItem(3, 1, 1)
    for item in (a, b, c):
        storage.push(item)

    storage.remove(b)

    assert storage.items() == (a, c)
