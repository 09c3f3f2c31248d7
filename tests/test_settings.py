import json

from settings import JsonFileStore, MemoryStore, Settings, load_settings, save_settings


def test_defaults_from_empty_store():
    assert load_settings(MemoryStore()) == Settings()


def test_load_reads_stored_values():
    store = MemoryStore({
        "beta_features_enabled": "true",
        "api_key": "sk-123",
        "venmo_username": "alex-k",
    })
    assert load_settings(store) == Settings(True, "sk-123", "alex-k")


def test_beta_flag_only_true_for_true():
    assert load_settings(MemoryStore({"beta_features_enabled": "yes"})).beta_features_enabled is False


def test_save_writes_and_clears_keys():
    store = MemoryStore({"api_key": "old"})
    save_settings(Settings(beta_features_enabled=True, venmo_username="alex-k"), store)
    assert store.values == {"beta_features_enabled": "true", "venmo_username": "alex-k"}


def test_json_file_store_round_trip(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    store = JsonFileStore(str(path))
    assert store.get("venmo_username") is None
    assert not path.exists()

    save_settings(Settings(venmo_username="alex-k"), store)
    assert json.loads(path.read_text()) == {"beta_features_enabled": "false", "venmo_username": "alex-k"}
    assert load_settings(JsonFileStore(str(path))).venmo_username == "alex-k"

    store.delete("venmo_username")
    assert load_settings(store).venmo_username is None


def test_json_file_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    store = JsonFileStore(str(path))
    assert load_settings(store) == Settings()
    store.set("venmo_username", "sam")
    assert store.get("venmo_username") == "sam"
