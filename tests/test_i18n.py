"""
Tests for language normalization and resolution.
"""

from catalog.i18n import get_labels, normalize_language, resolve_language


class TestNormalizeLanguage:

    def test_supported_codes_pass_through(self):
        assert normalize_language("en") == "en"
        assert normalize_language("es") == "es"

    def test_region_suffix_is_dropped(self):
        assert normalize_language("es-MX") == "es"
        assert normalize_language("en_GB") == "en"
        assert normalize_language("ES") == "es"

    def test_unsupported_and_empty_fall_back(self):
        assert normalize_language("fr") == "en"
        assert normalize_language(None) == "en"
        assert normalize_language("") == "en"
        assert normalize_language("fr", default="es") == "es"


class TestResolveLanguage:

    def test_explicit_value_wins(self):
        assert resolve_language("es", "en-US,en;q=0.9") == "es"

    def test_accept_language_header_is_used(self):
        assert resolve_language(None, "fr-FR,es;q=0.8,en;q=0.5") == "es"

    def test_wildcard_and_unsupported_header_fall_back(self):
        assert resolve_language(None, "*") == "en"
        assert resolve_language(None, "de,fr") == "en"
        assert resolve_language(None, None, default="es") == "es"


class TestLabels:

    def test_spanish_loading_label(self):
        assert get_labels("es")["loading"] == "Cargando..."

    def test_label_tables_have_same_keys(self):
        assert set(get_labels("en")) == set(get_labels("es"))
