"""Tests for catalog entities."""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest

from addon_publisher.domain.catalog.entities import Addon, AddonCatalog
from addon_publisher.domain.catalog.value_objects import ContentType
from addon_publisher.domain.errors import ValidationError

from factories import make_addon, make_metadata

PAST = datetime(2020, 1, 1, tzinfo=timezone.utc)


class TestAddon:
    """Test the Addon entity."""

    def test_creation(self, sample_metadata):
        discovered = datetime(2024, 2, 1, tzinfo=timezone.utc)
        addon = Addon(sample_metadata, "/Community/test", discovered)

        assert isinstance(addon.id, UUID)
        assert addon.metadata == sample_metadata
        assert addon.install_path == "/Community/test"
        assert not addon.is_selected
        assert addon.discovered_at == discovered
        assert addon.created_at == addon.updated_at

    def test_reconstitution_keeps_all_fields(self, sample_metadata):
        addon_id = uuid4()
        addon = Addon(
            sample_metadata,
            "/Community/test",
            PAST,
            id=addon_id,
            is_selected=True,
            created_at=PAST + timedelta(hours=1),
            updated_at=PAST + timedelta(hours=2),
        )

        assert addon.id == addon_id
        assert addon.is_selected
        assert addon.created_at == PAST + timedelta(hours=1)
        assert addon.updated_at == PAST + timedelta(hours=2)

    def test_id_from_string(self, sample_metadata):
        addon_id = uuid4()
        addon = Addon(sample_metadata, "/x", id=str(addon_id))
        assert addon.id == addon_id

    @pytest.mark.parametrize("bad_id", [UUID(int=0), "00000000-0000-0000-0000-000000000000", "not-a-uuid"])
    def test_empty_or_invalid_id_fails(self, sample_metadata, bad_id):
        with pytest.raises(ValidationError):
            Addon(sample_metadata, "/x", id=bad_id)

    @pytest.mark.parametrize("path", ["", "   "])
    def test_blank_install_path_fails(self, sample_metadata, path):
        with pytest.raises(ValidationError):
            Addon(sample_metadata, path)

    def test_missing_metadata_fails(self):
        with pytest.raises(TypeError):
            Addon(None, "/x")

    def test_no_public_setter_for_selection(self, sample_addon):
        with pytest.raises(AttributeError):
            sample_addon.is_selected = True

    def test_select_is_idempotent(self, sample_metadata):
        addon = Addon(sample_metadata, "/x", created_at=PAST, updated_at=PAST)

        assert addon.select() is True
        assert addon.is_selected
        first_update = addon.updated_at
        assert first_update > PAST

        assert addon.select() is False
        assert addon.is_selected
        assert addon.updated_at == first_update

    def test_deselect_is_idempotent(self, sample_metadata):
        addon = Addon(sample_metadata, "/x", created_at=PAST, updated_at=PAST)

        assert addon.deselect() is False
        assert addon.updated_at == PAST

        addon.select()
        assert addon.deselect() is True
        assert not addon.is_selected

    def test_toggle_selection(self, sample_metadata):
        addon = Addon(sample_metadata, "/x", created_at=PAST, updated_at=PAST)

        addon.toggle_selection()
        assert addon.is_selected
        assert addon.updated_at > PAST

        addon.toggle_selection()
        assert not addon.is_selected

    def test_toggle_returns_true(self, sample_addon):
        assert sample_addon.toggle_selection() is True
        assert sample_addon.toggle_selection() is True
        assert not sample_addon.is_selected

    def test_naive_timestamps_are_treated_as_utc(self, sample_metadata):
        naive = datetime(2024, 1, 1, 12)
        addon = Addon(sample_metadata, "/x", naive, created_at=naive, updated_at=naive)

        assert addon.created_at == naive.replace(tzinfo=timezone.utc)
        assert addon.discovered_at.tzinfo is not None
        assert addon.select() is True
        assert addon.toggle_selection() is True
        assert addon.updated_at > addon.created_at

    def test_equality_by_id_only(self):
        addon_id = uuid4()
        first = make_addon("First", id=addon_id)
        second = make_addon("Second", ContentType.SCENERY, id=addon_id)
        other = make_addon("First")

        assert first == second
        assert hash(first) == hash(second)
        assert first != other

    def test_str(self, sample_addon):
        assert str(sample_addon) == "Addon: Test Aircraft v1.0.0 (Aircraft) at /Community/test-aircraft"


class TestAddonCatalog:
    """Test the AddonCatalog aggregate."""

    @pytest.fixture
    def catalog(self):
        return AddonCatalog(created_at=PAST, updated_at=PAST)

    def test_new_catalog_is_empty(self, catalog):
        assert catalog.count == 0
        assert len(catalog) == 0
        assert catalog.get_all_addons() == ()
        assert catalog.get_selected_addons() == frozenset()

    def test_add_then_get(self, catalog, sample_addon):
        catalog.add_addon(sample_addon)

        found = catalog.get_addon_by_id(sample_addon.id)
        assert found is sample_addon
        assert found.metadata == sample_addon.metadata
        assert catalog.contains_addon(sample_addon.id)
        assert sample_addon.id in catalog

    def test_add_always_advances_watermark(self, catalog, sample_addon):
        catalog.add_addon(sample_addon)
        assert catalog.updated_at > PAST

    def test_add_replaces_same_id(self, catalog):
        addon_id = uuid4()
        catalog.add_addon(make_addon("Original", id=addon_id))
        replacement = make_addon("Replacement", version="2.0.0", id=addon_id)

        catalog.add_addon(replacement)

        assert catalog.count == 1
        assert catalog.get_addon_by_id(addon_id).metadata == make_metadata("Replacement", version="2.0.0")

    def test_add_none_fails(self, catalog):
        with pytest.raises(TypeError):
            catalog.add_addon(None)
        assert catalog.updated_at == PAST

    def test_remove(self, catalog, sample_addon):
        catalog.add_addon(sample_addon)

        assert catalog.remove_addon(sample_addon.id) is True
        assert not catalog.contains_addon(sample_addon.id)
        assert catalog.count == 0

    def test_remove_missing_leaves_watermark(self, catalog):
        assert catalog.remove_addon(uuid4()) is False
        assert catalog.updated_at == PAST

    def test_get_missing_returns_none(self, catalog):
        assert catalog.get_addon_by_id(uuid4()) is None
        assert not catalog.contains_addon(uuid4())

    def test_selected_addons_snapshot(self, catalog):
        first, second = make_addon("First"), make_addon("Second")
        catalog.add_addon(first)
        catalog.add_addon(second)
        first.select()

        selected = catalog.get_selected_addons()
        assert selected == frozenset({first})
        with pytest.raises(AttributeError):
            selected.add(second)

        second.select()
        assert selected == frozenset({first})
        assert catalog.get_selected_addons() == frozenset({first, second})

    def test_select_all_and_clear_selection(self, catalog):
        for title in ("A", "B", "C"):
            catalog.add_addon(make_addon(title))

        catalog.select_all()
        assert len(catalog.get_selected_addons()) == len(catalog.get_all_addons()) == 3
        assert catalog.selected_count == 3

        catalog.clear_selection()
        assert catalog.get_selected_addons() == frozenset()

    def test_clear_selection_idempotent_watermark(self):
        addon = make_addon("A")
        catalog = AddonCatalog(created_at=PAST, updated_at=PAST, addons={addon.id: addon})

        catalog.clear_selection()
        assert catalog.updated_at == PAST

        addon.select()
        catalog.clear_selection()
        watermark = catalog.updated_at
        assert watermark > PAST

        catalog.clear_selection()
        assert catalog.updated_at == watermark

    def test_select_all_idempotent_watermark(self):
        addon = make_addon("A", is_selected=True)
        catalog = AddonCatalog(created_at=PAST, updated_at=PAST, addons={addon.id: addon})

        catalog.select_all()
        assert catalog.updated_at == PAST

    def test_select_all_on_empty_catalog(self, catalog):
        catalog.select_all()
        catalog.clear_selection()
        assert catalog.updated_at == PAST

    def test_get_addons_by_type(self, catalog):
        plane = make_addon("Plane")
        airport = make_addon("Airport", ContentType.SCENERY)
        catalog.add_addon(plane)
        catalog.add_addon(airport)

        assert catalog.get_addons_by_type(ContentType.AIRCRAFT) == (plane,)
        assert catalog.get_addons_by_type(ContentType.SCENERY) == (airport,)
        assert catalog.get_addons_by_type(ContentType.MISSION) == ()

    def test_clear(self, catalog, sample_addon):
        catalog.clear()
        assert catalog.updated_at == PAST

        catalog.add_addon(sample_addon)
        catalog.clear()
        assert catalog.count == 0

    def test_watermark_never_moves_backwards(self, sample_addon):
        future = datetime.now(timezone.utc) + timedelta(days=365)
        catalog = AddonCatalog(created_at=PAST, updated_at=future)

        catalog.add_addon(sample_addon)
        assert catalog.updated_at == future

    def test_naive_watermark_does_not_break_mutations(self, sample_addon):
        naive = datetime(2024, 1, 1, 12)
        catalog = AddonCatalog(created_at=naive, updated_at=naive)

        catalog.add_addon(sample_addon)
        catalog.select_all()
        catalog.clear_selection()
        assert catalog.remove_addon(sample_addon.id) is True

        assert catalog.created_at == naive.replace(tzinfo=timezone.utc)
        assert catalog.updated_at > catalog.created_at

    def test_reconstitute(self):
        addon = make_addon("A")
        catalog_id = uuid4()
        catalog = AddonCatalog.reconstitute(catalog_id, PAST, PAST, {addon.id: addon})

        assert catalog.id == catalog_id
        assert catalog.created_at == PAST
        assert catalog.get_addon_by_id(addon.id) is addon

    def test_reconstitute_copies_source_map(self):
        addon = make_addon("A")
        source = {addon.id: addon}
        catalog = AddonCatalog.reconstitute(uuid4(), PAST, PAST, source)

        extra = make_addon("B")
        source[extra.id] = extra
        del source[addon.id]

        assert catalog.count == 1
        assert catalog.contains_addon(addon.id)
        assert not catalog.contains_addon(extra.id)

    def test_reconstitute_rejects_empty_id(self):
        with pytest.raises(ValidationError):
            AddonCatalog.reconstitute(UUID(int=0), PAST, PAST, {})

    def test_reconstitute_rejects_missing_map(self):
        with pytest.raises(TypeError):
            AddonCatalog.reconstitute(uuid4(), PAST, PAST, None)

    def test_reconstitute_rejects_mismatched_key(self):
        addon = make_addon("A")
        with pytest.raises(ValidationError):
            AddonCatalog.reconstitute(uuid4(), PAST, PAST, {uuid4(): addon})

    def test_statistics_and_str(self, catalog):
        catalog.add_addon(make_addon("A", is_selected=True))
        catalog.add_addon(make_addon("B", ContentType.LIVERY))

        stats = catalog.get_statistics()
        assert stats["total_addons"] == 2
        assert stats["selected_addons"] == 1
        assert stats["by_content_type"] == {"Aircraft": 1, "Livery": 1}
        assert str(catalog) == "AddonCatalog: 2 addons (1 selected)"
