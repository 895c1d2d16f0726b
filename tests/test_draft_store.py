from models.form_drafts import FormDraft
from models.master_records import MasterRecord
from services.draft_store import DraftStore
from services.master_store import MasterStore


def test_save_always_inserts(db):
    store = DraftStore(db)
    first = store.save(user_id=1, form_number=1, form_data={"name": "Ada"})
    second = store.save(user_id=1, form_number=1, form_data={"name": "Ada L."})
    db.commit()

    assert first.id != second.id
    assert first.saved_at is not None
    assert [d.form_data["name"] for d in store.list_by_user(1)] == ["Ada", "Ada L."]


def test_list_is_scoped_to_user_and_ordered(db):
    store = DraftStore(db)
    store.save(user_id=1, form_number=2, form_data={"step": 2})
    store.save(user_id=2, form_number=1, form_data={"other": True})
    store.save(user_id=1, form_number=1, form_data={"step": 1})
    db.commit()

    drafts = store.list_by_user(1)

    assert [d.form_number for d in drafts] == [2, 1]
    assert all(d.user_id == 1 for d in drafts)
    assert store.list_by_user(3) == []


def test_delete_by_user(db):
    store = DraftStore(db)
    store.save(user_id=1, form_number=None, form_data={"a": 1})
    store.save(user_id=1, form_number=None, form_data={"b": 2})
    store.save(user_id=2, form_number=None, form_data={"c": 3})
    db.commit()

    assert store.delete_by_user(1) == 2
    db.commit()

    assert store.list_by_user(1) == []
    assert len(store.list_by_user(2)) == 1
    assert store.delete_by_user(1) == 0


def test_master_store_never_merges(db):
    store = MasterStore(db)
    store.save(MasterRecord(user_id=1, name="Ada", mapping_version=1, unmapped_keys=[]))
    store.save(MasterRecord(user_id=1, name="Ada", mapping_version=1, unmapped_keys=[]))
    db.commit()

    assert db.query(MasterRecord).filter(MasterRecord.user_id == 1).count() == 2
    assert db.query(FormDraft).count() == 0
