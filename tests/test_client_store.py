import json

from clarityworks.models.schemas import Account, ClientFields, ClientUpdate, Goal, Provenance
from clarityworks.services.sample_data import BUILTIN_CLIENTS
from clarityworks.services.storage import CLIENTS_KEY


def make_fields(name="Jordan Avery", **overrides):
    data = dict(
        name=name,
        aum=750000,
        risk_profile="Aggressive",
        advisor="Sarah Mitchell",
        last_contact="2024-12-01",
        goals=[Goal(name="House", target_amount=200000, current_amount=50000, target_date="2027-01-01")],
        accounts=[Account(name="Rollover", type="IRA", balance=300000)],
    )
    data.update(overrides)
    return ClientFields(**data)


def builtin_ids():
    return [c.id for c in BUILTIN_CLIENTS]


def test_list_all_starts_with_builtins(client_store):
    clients = client_store.list_all()

    assert [c.id for c in clients] == ["client-001", "client-002"]
    assert all(c.provenance == Provenance.BUILTIN for c in clients)


def test_created_clients_are_custom_and_follow_builtins(client_store):
    first = client_store.create(make_fields("First"))
    second = client_store.create(make_fields("Second"))

    assert client_store.is_custom(first.id)
    assert client_store.is_custom(second.id)
    assert first.id != second.id
    assert first.provenance == Provenance.CUSTOM
    assert [c.id for c in client_store.list_all()] == builtin_ids() + [first.id, second.id]


def test_create_keeps_builtins_untouched(client_store):
    before = [c.model_dump() for c in client_store.list_all()]

    client_store.create(make_fields())

    after = [c.model_dump() for c in client_store.list_all()[:2]]
    assert after == before


def test_only_custom_clients_are_persisted(client_store, storage):
    client = client_store.create(make_fields())

    stored = json.loads(storage.read(CLIENTS_KEY))
    assert [c["id"] for c in stored] == [client.id]
    assert stored[0]["riskProfile"] == "Aggressive"
    assert stored[0]["goals"][0]["targetAmount"] == 200000


def test_removing_builtin_is_rejected(client_store):
    assert client_store.remove("client-001") is False
    assert [c.id for c in client_store.list_all()] == builtin_ids()


def test_remove_custom(client_store):
    client = client_store.create(make_fields())

    assert client_store.remove(client.id) is True
    assert client_store.get(client.id) is None
    assert client_store.remove(client.id) is False


def test_remove_unknown_custom_id(client_store):
    assert client_store.remove("client-custom-0-missing") is False


def test_is_custom_is_a_prefix_check(client_store):
    assert client_store.is_custom("client-custom-123-abc")
    assert not client_store.is_custom("client-001")
    assert not client_store.is_custom("client-doc-123")


def test_corrupt_storage_means_no_custom_clients(client_store, storage):
    storage.write(CLIENTS_KEY, "{not json")

    assert [c.id for c in client_store.list_all()] == builtin_ids()


def test_wrong_shape_means_no_custom_clients(client_store, storage):
    storage.write(CLIENTS_KEY, json.dumps([{"id": "client-custom-1"}]))

    assert client_store.list_custom() == []


def test_mutating_a_returned_builtin_does_not_leak(client_store):
    margaret = client_store.list_all()[0]
    margaret.name = "Someone Else"
    margaret.goals.clear()

    fresh = client_store.get("client-001")
    assert fresh.name == "Margaret Chen"
    assert len(fresh.goals) == 3


def test_update_custom_client(client_store):
    client = client_store.create(make_fields())

    updated = client_store.update(client.id, ClientUpdate(aum=900000, advisor="Lee Park"))

    assert updated.aum == 900000
    assert updated.advisor == "Lee Park"
    assert updated.name == client.name
    assert client_store.get(client.id).aum == 900000


def test_update_builtin_is_refused(client_store):
    assert client_store.update("client-002", ClientUpdate(name="Renamed")) is None
    assert client_store.get("client-002").name == "Robert & Diana Hartwell"


def test_one_bad_record_does_not_cost_the_others(client_store, storage):
    kept = make_fields().model_dump(mode="json", by_alias=True)
    kept["id"] = "client-custom-1-a"
    broken = {**kept, "id": "client-custom-2-b", "riskProfile": "Very Aggressive"}
    storage.write(CLIENTS_KEY, json.dumps([kept, broken]))

    assert [c.id for c in client_store.list_custom()] == ["client-custom-1-a"]

    created = client_store.create(make_fields(name="Priya Shah"))

    stored = [c["id"] for c in json.loads(storage.read(CLIENTS_KEY))]
    assert stored == ["client-custom-1-a", created.id]


def test_non_list_storage_means_no_custom_clients(client_store, storage):
    storage.write(CLIENTS_KEY, json.dumps({"id": "client-custom-1-a"}))

    assert client_store.list_custom() == []
