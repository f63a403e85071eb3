import json

import pytest

from cworch.errors import OpenFileError, StateAlreadyLockedError
from cworch.json_lock import JsonLockedState, patch_state_if_old, read


def test_old_to_new():
    old_map = {
        "chain-name": {
            "chain-id": {
                "abracadabra": {"open": "sesame"},
                "code_ids": {"foo": 123},
            }
        }
    }
    expected = {
        "chain-id": {
            "abracadabra": {"open": "sesame"},
            "code_ids": {"foo": 123},
        }
    }
    patched = patch_state_if_old(old_map)
    assert patched == expected
    assert patch_state_if_old(patched) == expected


def _juno_one():
    return {
        "code_ids": {
            "abstract:account-factory": 22,
            "abstract:ans-host": 20,
            "abstract:ibc-client": 26,
            "abstract:ibc-host": 27,
            "abstract:manager": 24,
            "abstract:module-factory": 23,
            "abstract:proxy": 25,
            "abstract:version-control": 21,
            "polytone:note": 9,
            "polytone:proxy": 11,
            "polytone:voice": 10,
        },
        "default": {
            "abstract:account-factory": "juno1exampleaccountfactory",
            "abstract:ans-host": "juno1exampleanshost",
            "abstract:ibc-client": "juno1exampleibcclient",
            "abstract:ibc-host": "juno1exampleibchost",
            "abstract:manager-local-0": "juno1examplemanager0",
            "abstract:manager-local-1": "juno1examplemanager1",
            "abstract:manager-local-2": "juno1examplemanager2",
            "abstract:module-factory": "juno1examplemodulefactory",
            "abstract:proxy-local-0": "juno1exampleproxy0",
            "abstract:proxy-local-1": "juno1exampleproxy1",
            "abstract:proxy-local-2": "juno1exampleproxy2",
            "abstract:version-control": "juno1exampleversioncontrol",
            "polytone:note": None,
            "polytone:note | junotwo-1": "juno1examplenote",
        },
    }


def _junotwo_one():
    return {
        "code_ids": {
            "abstract:account-factory": 24,
            "abstract:ans-host": 22,
            "abstract:ibc-client": 28,
            "abstract:ibc-host": 29,
            "abstract:manager": 26,
            "abstract:module-factory": 25,
            "abstract:proxy": 27,
            "abstract:version-control": 23,
            "counter_contract": 30,
            "polytone:note": 9,
            "polytone:proxy": 11,
            "polytone:voice": 10,
        },
        "default": {
            "abstract:account-factory": "osmo1exampleaccountfactory",
            "abstract:ans-host": "osmo1exampleanshost",
            "abstract:ibc-client": "osmo1exampleibcclient",
            "abstract:ibc-host": "osmo1exampleibchost",
            "abstract:manager-juno-2": "osmo1examplemanagerjuno2",
            "abstract:manager-local-0": "osmo1examplemanager0",
            "abstract:module-factory": "osmo1examplemodulefactory",
            "abstract:proxy-juno-2": "osmo1exampleproxyjuno2",
            "abstract:proxy-local-0": "osmo1exampleproxy0",
            "abstract:version-control": "osmo1exampleversioncontrol",
            "counter_contract": "osmo1examplecounter",
            "polytone:voice": None,
            "polytone:voice | juno-1": "osmo1examplevoice",
        },
    }


def test_big_state():
    old_state = {
        "juno": {
            "juno-1": _juno_one(),
            "junofour-1": {"code_ids": {}, "default": {}},
            "junothree-1": {"code_ids": {}, "default": {}},
        },
        "osmosis": {"junotwo-1": _junotwo_one()},
    }
    expected = {
        "juno-1": _juno_one(),
        "junofour-1": {"code_ids": {}, "default": {}},
        "junothree-1": {"code_ids": {}, "default": {}},
        "junotwo-1": _junotwo_one(),
    }
    patched = patch_state_if_old(old_state)
    assert patched == expected
    assert patch_state_if_old(patched) == expected


def test_patch_empty_map_is_unchanged():
    assert patch_state_if_old({}) == {}


def test_patch_rejects_non_object():
    with pytest.raises(ValueError, match="Unexpected daemon state format"):
        patch_state_if_old([1, 2])


def test_patch_rejects_non_object_chain():
    with pytest.raises(ValueError, match="Unexpected daemon state format"):
        patch_state_if_old({"juno": 5})


def test_new_file_starts_empty(tmp_path):
    path = tmp_path / "state.json"
    with JsonLockedState(path) as state:
        assert state.state() == {}
        assert state.path() == str(path)
    assert read(path) == {}


def test_prepare_and_write(tmp_path):
    path = tmp_path / "state.json"
    with JsonLockedState(path) as state:
        state.prepare("juno-1", "default")
        assert state.get("juno-1") == {"default": {}, "code_ids": {}}
        state.force_write()
        assert read(path) == {"juno-1": {"default": {}, "code_ids": {}}}


def test_prepare_keeps_existing_chain(tmp_path):
    path = tmp_path / "state.json"
    with JsonLockedState(path) as state:
        state.prepare("juno-1", "default")
        state.get("juno-1")["code_ids"]["counter"] = 7
        state.prepare("juno-1", "other")
        assert state.get("juno-1") == {"default": {}, "code_ids": {"counter": 7}}


def test_get_missing_chain_is_none(tmp_path):
    with JsonLockedState(tmp_path / "state.json") as state:
        assert state.get("absent-1") is None


def test_state_is_a_copy(tmp_path):
    with JsonLockedState(tmp_path / "state.json") as state:
        state.prepare("juno-1", "default")
        snapshot = state.state()
        snapshot["juno-1"]["code_ids"]["x"] = 1
        assert state.get("juno-1")["code_ids"] == {}


def test_close_writes_changes(tmp_path):
    path = tmp_path / "state.json"
    state = JsonLockedState(path)
    state.prepare("osmo-1", "v1")
    state.get("osmo-1")["v1"]["counter"] = "osmo1examplecounter"
    state.close()
    assert state.closed
    assert read(path) == {"osmo-1": {"v1": {"counter": "osmo1examplecounter"}, "code_ids": {}}}


def test_second_lock_is_refused(tmp_path):
    path = tmp_path / "state.json"
    with JsonLockedState(path):
        with pytest.raises(StateAlreadyLockedError):
            JsonLockedState(path)


def test_lock_released_after_close(tmp_path):
    path = tmp_path / "state.json"
    with JsonLockedState(path) as first:
        first.prepare("juno-1", "default")
    with JsonLockedState(path) as second:
        assert second.get("juno-1") == {"default": {}, "code_ids": {}}


def test_old_file_is_patched_on_open(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(
        json.dumps({"juno": {"juno-1": {"code_ids": {"foo": 1}, "default": {}}}}),
        encoding="utf-8",
    )
    with JsonLockedState(path) as state:
        assert state.state() == {"juno-1": {"code_ids": {"foo": 1}, "default": {}}}
    assert read(path) == {"juno-1": {"code_ids": {"foo": 1}, "default": {}}}


def test_force_write_after_close_fails(tmp_path):
    state = JsonLockedState(tmp_path / "state.json")
    state.close()
    with pytest.raises(ValueError):
        state.force_write()


def test_read_missing_file(tmp_path):
    missing = tmp_path / "missing.json"
    with pytest.raises(OpenFileError) as info:
        read(missing)
    assert info.value.path == str(missing)


def test_read_existing_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text('{"a": [1, 2, 3]}', encoding="utf-8")
    assert read(path) == {"a": [1, 2, 3]}