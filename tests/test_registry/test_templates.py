"""Tests for hexstack.registry.templates module."""

import pytest

from hexstack.errors import RegistryError
from hexstack.registry.templates import (
    TEMPLATES,
    Frontend,
    build_templates,
    load_templates,
    lookup,
    parse_frontend,
    template_key,
)


class TestParseFrontend:
    """Tests for parse_frontend()."""

    @pytest.mark.parametrize("value", [None, "", "none", "None", " NONE "])
    def test_no_frontend(self, value):
        assert parse_frontend(value) is None

    def test_case_insensitive(self):
        assert parse_frontend("React") is Frontend.REACT
        assert parse_frontend("SVELTE") is Frontend.SVELTE

    def test_enum_passthrough(self):
        assert parse_frontend(Frontend.REACT) is Frontend.REACT

    def test_invalid_value(self):
        with pytest.raises(ValueError, match="Invalid frontend 'vue'"):
            parse_frontend("vue")


class TestTemplateKey:
    """Tests for template_key()."""

    def test_single_component(self):
        assert template_key({"ripress"}) == "ripress"

    def test_sorted_components(self):
        assert template_key(["wynd", "ripress"]) == "ripress_wynd"

    def test_with_frontend(self):
        assert template_key({"wynd", "ripress"}, Frontend.REACT) == "ripress_wynd_react"


class TestLoadTemplates:
    """Tests for load_templates()."""

    def test_every_combination_present(self):
        templates = load_templates()
        combos = {(t.components, t.frontend) for t in templates.values()}
        expected = {
            (frozenset(components), frontend)
            for components in (("ripress",), ("wynd",), ("ripress", "wynd"))
            for frontend in (None, Frontend.REACT, Frontend.SVELTE)
        }
        assert combos == expected
        assert len(templates) == 9

    def test_no_frontend_templates(self):
        templates = load_templates()
        assert templates["ripress"].name == "Ripress Basic"
        assert templates["ripress"].github_url == "https://github.com/Guru901/ripress-only"
        assert templates["wynd"].name == "Wynd Basic"
        assert templates["ripress_wynd"].name == "Ripress + Wynd"
        assert templates["ripress_wynd"].components == frozenset({"ripress", "wynd"})

    def test_keys_match_derivation(self):
        for key, template in load_templates().items():
            assert key == template.key
            assert key == template_key(template.components, template.frontend)

    def test_urls_are_unique(self):
        urls = [t.github_url for t in TEMPLATES.values()]
        assert len(urls) == len(set(urls))

    def test_loading_twice_is_identical(self):
        first = load_templates()
        second = load_templates()
        assert set(first) == set(second)
        for key in first:
            assert first[key] == second[key]

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            TEMPLATES["other"] = TEMPLATES["ripress"]


class TestBuildTemplates:
    """Tests for the registry invariants enforced by build_templates()."""

    def test_rejects_duplicate_combination(self):
        specs = [
            (("ripress",), None, "One", "https://example.com/one"),
            (("RIPRESS",), None, "Two", "https://example.com/two"),
        ]
        with pytest.raises(RegistryError, match="both map to 'ripress'"):
            build_templates(specs)

    def test_rejects_unknown_component(self):
        specs = [(("lume",), None, "Lume", "https://example.com/lume")]
        with pytest.raises(RegistryError, match="unknown components"):
            build_templates(specs)

    def test_rejects_empty_components(self):
        with pytest.raises(RegistryError, match="requires no components"):
            build_templates([((), None, "Empty", "https://example.com/empty")])

    def test_same_components_different_frontend_allowed(self):
        specs = [
            (("wynd",), None, "Plain", "https://example.com/a"),
            (("wynd",), Frontend.REACT, "React", "https://example.com/b"),
        ]
        templates = build_templates(specs)
        assert set(templates) == {"wynd", "wynd_react"}


class TestLookup:
    """Tests for lookup()."""

    def test_known_key(self):
        assert lookup("ripress_wynd_svelte").name == "Ripress + Wynd + Svelte"

    def test_unknown_key(self):
        assert lookup("lume") is None
