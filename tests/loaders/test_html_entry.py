# tests/loaders/test_html_entry.py
"""Tests for HTMLEntryLoader."""

import os

import pytest

from vita.exceptions import InvalidInputError
from vita.loaders import HTMLEntryLoader

ARTICLE = """<!DOCTYPE html>
<html>
<head><title>Flu - Ensiklopedia Kesehatan</title></head>
<body>
<nav>Beranda | Penyakit</nav>
<h1 class="page-title">  Flu  </h1>
<div class="main">
  <aside class="side">Artikel terkait</aside>
  <div class="side">Iklan</div>
  <section><h2>Definisi</h2><p>Flu adalah infeksi virus.</p></section>
  <section><h2>Gejala</h2><p>Demam, batuk, pilek.</p></section>
  <section><h2>Referensi</h2><p>Daftar pustaka</p></section>
  <section><h2>Bagikan</h2><p>Tombol sosial</p></section>
  <section><h2>Komentar</h2><p>Komentar pembaca</p></section>
  <section><h2>Terkait</h2><p>Baca juga</p></section>
  <script>track();</script>
</div>
</body>
</html>"""


@pytest.fixture
def loader():
    return HTMLEntryLoader()


class TestHTMLEntryLoader:
    def test_title_from_page_title(self, loader):
        draft = loader.load(ARTICLE, "https://example.org/flu")
        assert draft.title == "Flu"
        assert draft.source_url == "https://example.org/flu"

    def test_keeps_article_sections(self, loader):
        draft = loader.load(ARTICLE)
        assert "## Definisi" in draft.content
        assert "Flu adalah infeksi virus." in draft.content
        assert "Demam, batuk, pilek." in draft.content

    def test_drops_trailing_sections(self, loader):
        content = loader.load(ARTICLE).content
        for dropped in ["Daftar pustaka", "Tombol sosial", "Komentar pembaca", "Baca juga"]:
            assert dropped not in content

    def test_drops_sidebar_scripts_and_nav(self, loader):
        content = loader.load(ARTICLE).content
        assert "Iklan" not in content
        assert "Artikel terkait" not in content
        assert "track()" not in content
        assert "Beranda" not in content

    def test_few_sections_are_all_kept(self, loader):
        html = (
            '<h1 class="page-title">DBD</h1><div class="main">'
            "<section><p>Satu</p></section><section><p>Dua</p></section></div>"
        )
        content = loader.load(html).content
        assert "Satu" in content
        assert "Dua" in content

    def test_falls_back_to_title_and_body(self, loader):
        html = "<html><head><title>Batuk</title></head><body><p>Batuk kering.</p></body></html>"
        draft = loader.load(html)
        assert draft.title == "Batuk"
        assert draft.content == "Batuk kering."

    def test_no_title(self, loader):
        with pytest.raises(InvalidInputError, match="title"):
            loader.load("<body><p>Tanpa judul</p></body>")

    def test_no_content(self, loader):
        with pytest.raises(InvalidInputError, match="content"):
            loader.load('<h1 class="page-title">Kosong</h1><div class="main"></div>')

    def test_collapses_blank_lines(self, loader):
        html = '<h1 class="page-title">X</h1><div class="main"><p>a</p><br><br><br><p>b</p></div>'
        assert "\n\n\n" not in loader.load(html).content


class TestLoadFile:
    def test_load_file(self, loader, temp_dir):
        path = os.path.join(temp_dir, "flu.html")
        with open(path, "w", encoding="utf-8") as f:
            f.write(ARTICLE)

        draft = loader.load_file(path)

        assert draft.title == "Flu"
        assert draft.source_url.startswith("file://")

    def test_load_file_source_override(self, loader, temp_dir):
        path = os.path.join(temp_dir, "flu.html")
        with open(path, "w", encoding="utf-8") as f:
            f.write(ARTICLE)

        assert loader.load_file(path, "https://example.org").source_url == "https://example.org"

    def test_missing_file(self, loader):
        with pytest.raises(FileNotFoundError):
            loader.load_file("/nonexistent/page.html")

    def test_supports(self, loader):
        assert loader.supports("page.HTML")
        assert loader.supports("page.htm")
        assert not loader.supports("page.pdf")
