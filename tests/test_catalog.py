"""Unit tests for plexpurchases_builder.catalog module."""

from plexpurchases_builder.catalog import (
    DISPLAY_ITEMS,
    exists,
    format_display_name,
    get_item,
    search,
)


class TestCatalog:
    """Tests for the display item catalog."""

    def test_sorted_by_display_name(self):
        names = [item.display_name for item in DISPLAY_ITEMS]
        assert names == sorted(names)

    def test_ids_unique(self):
        ids = [item.id for item in DISPLAY_ITEMS]
        assert len(ids) == len(set(ids))

    def test_exists(self):
        assert exists("DIAMOND") is True
        assert exists("diamond") is False
        assert exists("") is False

    def test_get_item(self):
        item = get_item("GOLD_INGOT")
        assert item.display_name == "Gold Ingot"
        assert item.image_url == "https://static.minecraftitemids.com/64/gold_ingot.png"
        assert get_item("NOPE") is None

    def test_format_display_name(self):
        assert format_display_name("HEART_OF_THE_SEA") == "Heart Of The Sea"

    def test_search(self):
        ids = [item.id for item in search("pickaxe")]
        assert "DIAMOND_PICKAXE" in ids
        assert all("PICKAXE" in i for i in ids)
        assert len(search("")) == len(DISPLAY_ITEMS)
