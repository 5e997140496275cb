"""Tests for block loading, breadcrumb normalization and the record filters."""

import json

import pytest

from content_optimizer.blocks import (
    STRUCTURE_ERROR,
    breadcrumb_parts,
    check_structure,
    filter_blocks,
    has_content,
    load_content,
    normalize_breadcrumbs,
    should_exclude_href,
    slim_block,
    to_block,
)


class TestNormalizeBreadcrumbs:
    def test_list_is_joined(self):
        assert normalize_breadcrumbs(["Docs", "Svelte", "Runes"]) == "Docs > Svelte > Runes"

    def test_joined_string_passes_through(self):
        assert normalize_breadcrumbs("Docs > Svelte > Runes") == "Docs > Svelte > Runes"

    @pytest.mark.parametrize("value", [None, [], "", ["Docs", 3], {"a": 1}, 42])
    def test_malformed_is_none(self, value):
        assert normalize_breadcrumbs(value) is None

    def test_string_and_list_give_same_segments(self):
        a = to_block({"content": "x", "breadcrumbs": ["Docs", "Svelte", "Runes"]})
        b = to_block({"content": "x", "breadcrumbs": "Docs > Svelte > Runes"})
        assert a.segments == b.segments == ["Docs", "Svelte", "Runes"]

    def test_missing_breadcrumbs_have_no_segments(self):
        assert to_block({"content": "x"}).segments == []

    def test_list_segments_kept_whole(self):
        assert breadcrumb_parts(["Docs", "Svelte", "a > b", "t"]) == ("Docs", "Svelte", "a > b", "t")
        assert breadcrumb_parts("Docs > Svelte > a") == ("Docs", "Svelte", "a")
        assert breadcrumb_parts(["Docs", 3]) == ()


class TestFilters:
    @pytest.mark.parametrize("item", [{}, {"content": None}, {"content": ""}])
    def test_empty_content_rejected(self, item):
        assert not has_content(to_block(item))

    @pytest.mark.parametrize("content", [0, 0.0, False, float("nan")])
    def test_falsy_scalars_rejected(self, content):
        assert not has_content(to_block({"content": content}))

    @pytest.mark.parametrize("content", [[], {}, "x", " ", 1, True, "0"])
    def test_empty_containers_count_as_content(self, content):
        assert has_content(to_block({"content": content}))

    def test_exclusion_is_prefix_based(self):
        prefixes = ["/tutorial", "/docs/svelte/legacy"]
        assert should_exclude_href("/tutorial/x", prefixes)
        assert should_exclude_href("/docs/svelte/legacy-overview", prefixes)
        assert not should_exclude_href("/docs/kit/tutorial", prefixes)

    def test_missing_href_never_excluded(self):
        assert not should_exclude_href(None, ["/"])
        assert not should_exclude_href("", ["/"])

    def test_filters_combine(self, sample_document):
        blocks = [to_block(b) for b in sample_document["blocks"]]
        kept = filter_blocks(blocks, ["/tutorial", "/docs/svelte/legacy"])

        assert all(b.content for b in kept)
        assert not any(b.href and b.href.startswith("/tutorial") for b in kept)
        assert [b.raw.get("href") for b in kept] == [
            "/docs/svelte/what-are-runes",
            "/docs/svelte/$state",
            None,
            "/docs/kit/routing",
            None,
            None,
        ]

    def test_filter_keeps_input_order(self):
        blocks = [to_block({"content": str(i)}) for i in range(5)]
        assert [b.content for b in filter_blocks(blocks)] == ["0", "1", "2", "3", "4"]


class TestSlimBlock:
    def test_title_from_breadcrumbs(self):
        block = to_block({"content": "c", "breadcrumbs": ["A", "B"], "href": "/x"})
        assert slim_block(block) == {"title": "A > B", "content": "c"}

    def test_no_title_without_breadcrumbs(self):
        assert slim_block(to_block({"content": "c"})) == {"content": "c"}

    def test_existing_title_kept(self):
        block = to_block({"title": "A > B", "content": "c"})
        assert slim_block(block) == {"title": "A > B", "content": "c"}


class TestLoadContent:
    def test_loads_blocks(self, content_file, sample_document):
        data, blocks = load_content(content_file)
        assert data == sample_document
        assert len(blocks) == len(sample_document["blocks"])
        assert blocks[3].breadcrumb == "Docs > Svelte > Special elements > <svelte:window>"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_content(tmp_path / "content.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "content.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            load_content(path)

    @pytest.mark.parametrize("data", [[], {"items": []}, {"blocks": {"a": 1}}, "blocks"])
    def test_structure_checked(self, data):
        with pytest.raises(ValueError, match="expected \"blocks\" array"):
            check_structure(data)
        assert STRUCTURE_ERROR == 'Invalid JSON structure: expected "blocks" array'

    def test_non_object_entries_are_empty(self):
        assert check_structure({"blocks": ["x", {"content": "y"}]}) == [{}, {"content": "y"}]
