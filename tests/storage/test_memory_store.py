from school_admin.core.enums import Collection
from school_admin.storage.memory_store import InMemoryRecordStore


def test_save_one_is_a_whole_record_upsert():
    store = InMemoryRecordStore()

    store.save_one(Collection.TEACHERS, {"id": "T1", "fullName": "Meera", "email": "m@school.in"})
    store.save_one(Collection.TEACHERS, {"id": "T1", "fullName": "Meera Nair"})

    assert store.get_all(Collection.TEACHERS) == [{"id": "T1", "fullName": "Meera Nair"}]


def test_collections_are_independent():
    store = InMemoryRecordStore({Collection.STUDENTS: [{"id": "S1"}]})

    assert store.get_all(Collection.TEACHERS) == []
    assert store.delete_one(Collection.TEACHERS, "S1") is False
    assert store.delete_one(Collection.STUDENTS, "S1") is True
    assert store.get_all(Collection.STUDENTS) == []


def test_records_are_copied_in_and_out():
    store = InMemoryRecordStore()
    record = {"id": "F1", "transactions": []}
    store.save_one(Collection.FEES, record)

    record["transactions"].append({"id": "TXN-1"})
    store.get_all(Collection.FEES)[0]["transactions"].append({"id": "TXN-2"})

    assert store.get_all(Collection.FEES) == [{"id": "F1", "transactions": []}]
