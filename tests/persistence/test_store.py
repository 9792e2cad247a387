# ABOUTME: Tests for the JSON record store
# ABOUTME: Case-insensitive dedup, sorted indented output and unreadable-file handling

import json

import pytest

from nikkedex.core.models import Burst, Code, Manufacturer, Nikke, Position, Rarity, Weapon
from nikkedex.persistence import NikkeStore, StoreError


def _nikke(name: str, weapon_name: str | None = "Gun") -> Nikke:
    return Nikke(
        name=name,
        rarity=Rarity.SSR,
        burst=Burst.II,
        weapon_name=weapon_name,
        squad="Counters",
        code=Code.WIND,
        weapon_type=Weapon.SNIPER_RIFLE,
        position=Position.SUPPORTER,
        manufacturer=Manufacturer.PILGRIM,
        image_url=f"{name}_Icon.png",
    )


class TestStoreMembership:
    """Test case-insensitive dedup."""

    def test_contains_ignores_case(self, tmp_path):
        store = NikkeStore(tmp_path / "db.json")
        store.add(_nikke("Rapi"))

        assert store.contains("rapi")
        assert store.contains("RAPI")
        assert not store.contains("Anis")

    def test_add_rejects_duplicate_names(self, tmp_path):
        store = NikkeStore(tmp_path / "db.json")

        assert store.add(_nikke("Rapi")) is True
        assert store.add(_nikke("rapi")) is False
        assert len(store) == 1
        assert [record.name for record in store.records()] == ["Rapi"]

    def test_records_sorted_by_name(self, tmp_path):
        store = NikkeStore(tmp_path / "db.json")
        for name in ["Rapi", "anis", "Neon"]:
            store.add(_nikke(name))

        assert [record.name for record in store.records()] == ["anis", "Neon", "Rapi"]
        assert [record.name for record in store] == ["anis", "Neon", "Rapi"]


class TestStoreFile:
    """Test reading and writing the record file."""

    def test_missing_file_is_empty(self, tmp_path):
        store = NikkeStore(tmp_path / "missing.json").load()
        assert len(store) == 0

    def test_save_writes_sorted_integer_json(self, tmp_path):
        path = tmp_path / "data" / "db.json"
        store = NikkeStore(path)
        store.add(_nikke("Rapi"))
        store.add(_nikke("Anis", weapon_name=None))
        store.save()

        data = json.loads(path.read_text())
        assert [item["name"] for item in data] == ["Anis", "Rapi"]
        assert data[1]["rarity"] == 2
        assert data[1]["weapon_type"] == 4
        assert data[1]["image_url"] == "Rapi_Icon.png"
        assert "weapon_name" not in data[0]
        assert path.read_text().startswith("[\n  {")

    def test_round_trip(self, tmp_path):
        path = tmp_path / "db.json"
        store = NikkeStore(path)
        store.add(_nikke("Rapi"))
        store.save()

        reloaded = NikkeStore(path).load()
        assert reloaded.records() == [_nikke("Rapi")]

    def test_duplicate_names_in_file_collapse(self, tmp_path):
        path = tmp_path / "db.json"
        rapi = _nikke("Rapi").model_dump(mode="json")
        path.write_text(json.dumps([rapi, {**rapi, "name": "RAPI"}]))

        assert len(NikkeStore(path).load()) == 1

    @pytest.mark.parametrize("content", ["not json", '{"name": "Rapi"}', '[{"name": "Rapi"}]'])
    def test_unreadable_file_raises(self, tmp_path, content):
        path = tmp_path / "db.json"
        path.write_text(content)

        with pytest.raises(StoreError):
            NikkeStore(path).load()
