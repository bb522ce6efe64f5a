"""Tests for loading style sheets from disk."""

import logging

import pytest

from ecss.config import EcssConfig
from ecss.errors import StyleSheetLoaderError
from ecss.stylesheet import StyleSheetLoader, parse_stylesheet


@pytest.fixture
def loader():
    return StyleSheetLoader()


class TestLoad:
    def test_load_css(self, loader, tmp_path):
        path = tmp_path / "ui.css"
        path.write_text("node { width: 10px; }", encoding="utf-8")
        document = loader.load(path)
        assert document.path == str(path)
        assert len(document.rules) == 1
        assert document.hash == parse_stylesheet("node { width: 10px; }").hash

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(StyleSheetLoaderError, match="File not found"):
            loader.load(tmp_path / "missing.css")

    def test_unsupported_extension(self, loader):
        with pytest.raises(StyleSheetLoaderError, match=r"Unsupported style sheet extension: \.txt"):
            loader.load_bytes("ui.txt", b"a {}")

    def test_invalid_utf8(self, loader):
        with pytest.raises(StyleSheetLoaderError, match="Invalid file format") as exc_info:
            loader.load_bytes("ui.css", b"a { text-content: \"\xff\"; }")
        assert exc_info.value.path == "ui.css"
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    def test_extension_case_insensitive(self, loader):
        assert loader.supports("UI.CSS")
        assert not loader.supports("ui.scss")

    def test_logs_at_info(self, loader, caplog):
        with caplog.at_level(logging.INFO, logger="ecss.stylesheet.loader"):
            loader.load_bytes("ui.css", b"a {} b {}")
        assert "Loaded style sheet ui.css (2 rule(s), 0 diagnostic(s))" in caplog.text


class TestPreprocessors:
    def test_registered_extension(self, loader):
        loader.register_preprocessor(".ecss", lambda text, path: text.replace("$w", "10px"))
        assert loader.supports("ui.ecss")
        assert "ecss" in loader.extensions()
        document = loader.load_bytes("ui.ecss", b"a { width: $w; }")
        assert str(document.rules[0].properties["width"]) == "10px"

    def test_preprocessor_failure(self, loader):
        def broken(text, path):
            raise RuntimeError("bad variable")

        loader.register_preprocessor("ecss", broken)
        with pytest.raises(StyleSheetLoaderError, match="Could not preprocess ui.ecss: bad variable"):
            loader.load_bytes("ui.ecss", b"a {}")

    def test_configured_extensions(self):
        loader = StyleSheetLoader(EcssConfig(extensions=("css", "style")))
        assert len(loader.load_bytes("ui.style", b"a {}").rules) == 1
