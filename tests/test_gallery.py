from dataclasses import replace

from variation_gallery.engine.assignments import ASSIGNMENTS_META_KEY
from variation_gallery.engine.cache import DatasetCache
from variation_gallery.engine.gallery import (
    DISABLED_META_KEY,
    GalleryOptions,
    loop_galleries,
    loop_thumbnails,
    match_filtered_values,
    parse_filter_query,
    prepare_dataset,
    resolve_for_selection,
    should_run,
    valid_slugs,
)
from variation_gallery.engine.host import PRODUCT, SIMPLE


def _store(host, product_id, records):
    host.meta[(PRODUCT, product_id, ASSIGNMENTS_META_KEY)] = records


def _variable_product(host):
    host.add_product(1, default_image_id=1, gallery=[2])
    host.images.update({1, 2, 10, 11, 12})
    host.add_taxonomy(1, "pa_color", [(1, "Red", "red"), (2, "Blue", "blue")])
    host.add_taxonomy(1, "pa_size", [(3, "Large", "large")])
    _store(host, 1, [
        {"slugs": ["red", "large"], "imgs": [10, 11]},
        {"slugs": ["blue"], "imgs": [12], "video": {"12": "https://video/12"}},
    ])


class TestPrepareDataset:
    def test_missing_product(self, host, options):
        assert prepare_dataset(host, 404, options) is None

    def test_variable_product_gallery_order(self, host, options):
        _variable_product(host)
        dataset = prepare_dataset(host, 1, options)
        assert dataset.default_image_id == 1
        assert [(i.id, i.idk) for i in dataset.images] == [
            (1, None), (2, None), (10, "0"), (11, "0"), (12, "1"),
        ]
        assert [i.product_img for i in dataset.images] == [True, False, False, False, False]
        assert dataset.images[-1].video == "https://video/12"
        assert dataset.images[0].src == "/media/1-large.jpg"
        assert dataset.images[0].thumb_src == "/media/1-thumbnail.jpg"
        assert dataset.slugs == {"red": "Red", "blue": "Blue", "large": "Large"}

    def test_simple_product_deduplicates(self, host, options):
        host.add_product(2, type=SIMPLE, default_image_id=5, gallery=[5, 6, 0])
        dataset = prepare_dataset(host, 2, options)
        assert [i.id for i in dataset.images] == [5, 6]
        assert dataset.assignments == []

    def test_missing_asset_uses_placeholder(self, host, options):
        host.add_product(2, type=SIMPLE, default_image_id=5)
        image = prepare_dataset(host, 2, options).images[0]
        assert image.src == "/static/placeholder.png"
        assert image.width == 0

    def test_invalid_references_are_skipped(self, host, options):
        host.add_product(1, default_image_id=1)
        _store(host, 1, [{"slugs": ["red"], "imgs": ["abc", "-3", "0", "7"]}])
        dataset = prepare_dataset(host, 1, options)
        assert [i.id for i in dataset.images] == [1, 7]

    def test_malformed_store_degrades_to_plain_gallery(self, host, options):
        host.add_product(1, default_image_id=1, gallery=[2])
        _store(host, 1, '""')
        dataset = prepare_dataset(host, 1, options)
        assert [i.id for i in dataset.images] == [1, 2]
        assert dataset.assignments == []

    def test_default_record_gets_default_image(self, host, options):
        host.add_product(1, default_image_id=1)
        _store(host, 1, [{"slugs": ["svidefault"], "imgs": [4]}, {"slugs": ["Red"], "imgs": [5]}])
        dataset = prepare_dataset(host, 1, options)
        assert dataset.assignments[0].imgs == ["1", "4"]
        assert dataset.assignments[1].slugs == ["red"]
        # stored data is untouched
        assert host.meta[(PRODUCT, 1, ASSIGNMENTS_META_KEY)][0]["imgs"] == [4]

    def test_global_record_is_listed_last(self, host, options):
        host.add_product(1, default_image_id=1)
        _store(host, 1, [
            {"slugs": ["sviproglobal"], "imgs": [9]},
            {"slugs": ["red"], "imgs": [5]},
        ])
        dataset = prepare_dataset(host, 1, options)
        assert [r.slugs[0] for r in dataset.assignments] == ["red", "sviproglobal"]
        assert [i.id for i in dataset.images] == [1, 5, 9]

        kept = prepare_dataset(host, 1, replace(options, global_last=False))
        assert [i.id for i in kept.images] == [1, 9, 5]

    def test_stale_slugs_are_healed_and_saved(self, host, options):
        host.add_product(1, default_image_id=1)
        host.add_taxonomy(1, "pa_color", [(1, "Dark Blue Navy", "dark-blue-navy")])
        _store(host, 1, [{"slugs": ["dark-blue-navyy"], "imgs": [5]}])
        dataset = prepare_dataset(host, 1, options)
        assert dataset.assignments[0].slugs == ["dark-blue-navy"]
        assert host.meta[(PRODUCT, 1, ASSIGNMENTS_META_KEY)][0]["slugs"] == ["dark-blue-navy"]

    def test_simple_products_are_not_healed(self, host, options):
        host.add_product(1, type=SIMPLE, default_image_id=1)
        host.add_taxonomy(1, "pa_color", [(1, "Dark Blue Navy", "dark-blue-navy")])
        _store(host, 1, [{"slugs": ["dark-blue-navyy"], "imgs": [5]}])
        prepare_dataset(host, 1, options)
        assert (PRODUCT, 1, ASSIGNMENTS_META_KEY) not in host.meta_writes

    def test_legacy_data_is_imported(self, host, options):
        host.add_product(1, default_image_id=1)
        host.attached[1] = [1, 2, 3]
        host.tag_image(2, 1, "red")
        dataset = prepare_dataset(host, 1, options)
        assert [(r.slugs, r.imgs) for r in dataset.assignments] == [(["red"], ["2"])]


class TestResolveForSelection:
    def test_combination(self, host, options):
        _variable_product(host)
        assert resolve_for_selection(host, 1, {"pa_color": "Red", "pa_size": "Large"}, options) == 10

    def test_single_value(self, host, options):
        _variable_product(host)
        assert resolve_for_selection(host, 1, {"pa_color": "Blue"}, options) == 12

    def test_partial_selection_without_record(self, host, options):
        _variable_product(host)
        assert resolve_for_selection(host, 1, {"pa_color": "Red"}, options) is None

    def test_unknown_product(self, host, options):
        assert resolve_for_selection(host, 404, {"pa_color": "Red"}, options) is None

    def test_cache_reuses_dataset(self, host, options):
        _variable_product(host)
        cache = DatasetCache()
        assert resolve_for_selection(host, 1, {"pa_color": "Blue"}, options, cache) == 12
        # later edits are invisible within the same cache
        _store(host, 1, [{"slugs": ["blue"], "imgs": [99]}])
        assert resolve_for_selection(host, 1, {"pa_color": "Blue"}, options, cache) == 12
        assert resolve_for_selection(host, 1, {"pa_color": "Blue"}, options) == 99


class TestRunGate:
    def test_enabled_by_default(self, host, options):
        host.add_product(1)
        assert should_run(host, 1, options)

    def test_product_opt_out(self, host, options):
        host.add_product(1)
        host.meta[(PRODUCT, 1, DISABLED_META_KEY)] = "yes"
        assert not should_run(host, 1, options)

    def test_disable_on_empty(self, host, options):
        host.add_product(1)
        _store(host, 1, "[]")
        strict = replace(options, disable_on_empty=True)
        assert not should_run(host, 1, strict)
        _store(host, 1, [{"slugs": ["red"], "imgs": [1]}])
        assert should_run(host, 1, strict)


class TestLoop:
    def test_thumbnails(self, host, options):
        host.add_product(1, default_image_id=1)
        _store(host, 1, [
            {"slugs": ["red"], "imgs": [5, 6]},
            {"slugs": ["blue"], "imgs": [5]},
            {"slugs": ["green"], "imgs": [7]},
        ])
        dataset = prepare_dataset(host, 1, options)
        assert loop_thumbnails(dataset) == [5, 7]
        assert loop_thumbnails(dataset, limit=1) == [5]

    def test_loop_galleries_need_explicit_visibility(self, host, options):
        host.add_product(1)
        _store(host, 1, [
            {"slugs": ["red"], "imgs": [5], "loop_hidden": False},
            {"slugs": ["blue"], "imgs": [6], "loop_hidden": True},
            {"slugs": ["green"], "imgs": [7]},
        ])
        dataset = prepare_dataset(host, 1, options)
        assert [r.slugs for r in loop_galleries(dataset)] == [["red"]]

    def test_parse_filter_query(self):
        assert parse_filter_query({"orderby": "price", "filter_color": "Red,Dark Blue"}) == (
            "color", ["red", "dark-blue"],
        )
        assert parse_filter_query({"filter_color": "", "filter_size": "xl"}) == ("size", ["xl"])
        assert parse_filter_query({"page": "2"}) is None

    def test_match_filtered_values(self, host, options):
        host.add_product(1)
        _store(host, 1, [
            {"slugs": ["red", "large"], "imgs": [5]},
            {"slugs": ["red"], "imgs": [6]},
            {"slugs": ["blue"], "imgs": [7]},
        ])
        dataset = prepare_dataset(host, 1, options)
        assert match_filtered_values(dataset, ["blue", "red", "green"]) == {"blue": 7, "red": 5}


def test_valid_slugs_skip_non_variation_attributes(host):
    host.add_product(1)
    host.add_taxonomy(1, "pa_brand", [(1, "Acme", "acme")], is_variation=False)
    host.add_text_attribute(1, "material", ["Organic Cotton"])
    assert valid_slugs(host, 1) == {"organic-cotton": "Organic Cotton"}


def test_options_from_settings():
    from variation_gallery.core.config import settings

    options = GalleryOptions.from_settings(settings)
    assert options.global_last == (settings.GLOBAL_ASSIGNMENT_POSITION == "end")
    assert options.fuzzy_threshold == settings.FUZZY_MATCH_THRESHOLD
