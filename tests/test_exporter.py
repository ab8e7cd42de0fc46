"""Unit tests for plexpurchases_builder.exporter module."""

import io
import zipfile

import yaml

from plexpurchases_builder.entities import (
    PRODUCT_ONLY_KEYS,
    SUBSCRIPTION_ONLY_KEYS,
    PurchaseConfiguration,
)
from plexpurchases_builder.exporter import (
    export_archive,
    filename_for,
    project,
    serialize,
    write_archive,
    write_documents,
)
from plexpurchases_builder.importer import import_text
from plexpurchases_builder.normalizer import normalize


def _entries(data: bytes) -> dict[str, str]:
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        return {name: archive.read(name).decode("utf-8") for name in archive.namelist()}


class TestProject:
    """Tests for variant projection."""

    def test_product_drops_subscription_fields(self, sample_product):
        doc = project(sample_product)
        for key in SUBSCRIPTION_ONLY_KEYS:
            assert key not in doc
        for key in PRODUCT_ONLY_KEYS:
            assert key in doc

    def test_subscription_drops_product_fields(self, sample_subscription):
        doc = project(sample_subscription)
        for key in PRODUCT_ONLY_KEYS:
            assert key not in doc
        for key in SUBSCRIPTION_ONLY_KEYS:
            assert key in doc

    def test_shared_defaults_are_kept(self):
        doc = project(PurchaseConfiguration(product_id="p"))
        assert doc["dependency"] == ""
        assert doc["permission"] == ""
        assert doc["dependencyAmount"] == 1
        assert doc["hideIfNoPermission"] is False
        assert doc["actions"] == {"success": [""], "expire": [""], "renew": [""]}

    def test_half_subscription_is_exported_as_product(self):
        config = PurchaseConfiguration(product_id="p", subscription_id="s")
        doc = project(config)
        assert "subscriptionId" not in doc
        assert filename_for(config) == "p.yml"


class TestSerialize:
    """Tests for YAML output formatting."""

    def test_block_style_with_indented_sequences(self, sample_product):
        text = serialize(project(sample_product))

        assert text.startswith("productId: vip_rank\n")
        assert "actions:\n  success:\n    - lp user %player_name% parent add vip\n" in text
        assert "{" not in text

    def test_no_aliases_for_repeated_values(self):
        shared = ["same"]
        text = serialize({"a": shared, "b": shared})
        assert "&" not in text
        assert "*" not in text

    def test_long_lines_not_wrapped(self):
        command = "say " + "word " * 60
        text = serialize({"actions": {"success": [command.strip()]}})
        assert command.strip() in text

    def test_empty_strings_quoted(self):
        assert "permission: ''" in serialize({"permission": ""})

    def test_round_trip(self, sample_product, sample_subscription):
        for config in (sample_product, sample_subscription):
            text = serialize(project(config))
            assert normalize(yaml.safe_load(text)) == config


class TestExportArchive:
    """Tests for ZIP packaging."""

    def test_one_entry_per_configuration(self, sample_product, sample_subscription):
        result = export_archive([sample_product, sample_subscription])

        assert result.entry_count == 2
        assert result.collisions == {}
        entries = _entries(result.data)
        assert sorted(entries) == ["coins-monthly.yml", "vip_rank.yml"]
        assert yaml.safe_load(entries["vip_rank.yml"])["productName"] == "VIP Rank"

    def test_entries_are_reimportable(self, sample_product, sample_subscription):
        entries = _entries(export_archive([sample_product, sample_subscription]).data)
        reimported = [import_text(text).accepted[0] for text in entries.values()]
        assert sorted(reimported, key=lambda c: c.identifier) == [sample_subscription, sample_product]

    def test_collision_keeps_last(self, sample_product):
        first = PurchaseConfiguration(product_id="dup", product_name="First", price=1)
        second = PurchaseConfiguration(product_id="dup", product_name="Second", price=2)

        result = export_archive([first, sample_product, second])

        assert result.entry_count == 2
        assert result.collisions == {"dup.yml": 2}
        entries = _entries(result.data)
        assert len(entries) == 2
        assert yaml.safe_load(entries["dup.yml"])["productName"] == "Second"

    def test_product_and_subscription_share_filename(self):
        product = PurchaseConfiguration(product_id="gold", product_name="Gold")
        subscription = PurchaseConfiguration(subscription_id="gold", subscription_name="Gold Sub")

        result = export_archive([product, subscription])

        assert result.filenames == ["gold.yml"]
        assert "subscriptionId" in _entries(result.data)["gold.yml"]

    def test_empty_collection(self):
        result = export_archive([])
        assert result.entry_count == 0
        assert _entries(result.data) == {}


class TestWriters:
    """Tests for writing exports to disk."""

    def test_write_archive(self, temp_dir, sample_product):
        result = export_archive([sample_product])
        path = write_archive(result, temp_dir / "out" / "configs.zip")
        assert path.read_bytes() == result.data

    def test_write_documents(self, temp_dir, sample_product, sample_subscription):
        paths = write_documents([sample_product, sample_subscription], temp_dir / "purchases")

        assert [p.name for p in paths] == ["vip_rank.yml", "coins-monthly.yml"]
        text = (temp_dir / "purchases" / "coins-monthly.yml").read_text(encoding="utf-8")
        assert "productId" not in text
