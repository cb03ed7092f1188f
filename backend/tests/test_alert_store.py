from bson import ObjectId

from app.services.alert_store import AlertStore


def _doc(title, owner):
    return {
        "title": title,
        "description": "d",
        "severity": "Low",
        "location": "here",
        "coordinates": {"lat": 1.0, "lng": 2.0},
        "radius": 5,
        "user": owner,
        "userName": "Ann",
        "userContact": "",
    }


def test_insert_assigns_id_and_created_at(db):
    store = AlertStore(db)
    doc = store.insert({**_doc("a", ObjectId()), "_id": "client-chosen"})
    assert isinstance(doc["_id"], ObjectId)
    assert doc["createdAt"] is not None
    assert store.get(doc["_id"])["title"] == "a"


def test_list_all_is_newest_first(db):
    store = AlertStore(db)
    owner = ObjectId()
    for title in ("first", "second", "third"):
        store.insert(_doc(title, owner))
    assert [d["title"] for d in store.list_all()] == ["third", "second", "first"]


def test_list_by_owner(db):
    store = AlertStore(db)
    ann, bob = ObjectId(), ObjectId()
    store.insert(_doc("ann-1", ann))
    store.insert(_doc("bob-1", bob))
    store.insert(_doc("ann-2", ann))
    assert [d["title"] for d in store.list_by_owner(str(ann))] == ["ann-2", "ann-1"]
    assert store.list_by_owner("not-an-id") == []


def test_delete(db):
    store = AlertStore(db)
    doc = store.insert(_doc("gone", ObjectId()))
    assert store.delete(str(doc["_id"])) is True
    assert store.delete(str(doc["_id"])) is False
    assert store.get(doc["_id"]) is None
    assert store.list_all() == []


def test_unknown_or_malformed_ids_are_not_found(db):
    store = AlertStore(db)
    assert store.get("123") is None
    assert store.get(str(ObjectId())) is None
    assert store.delete("zzz") is False
