"""Tests for the HTML snippet: it must name exactly the packaged files."""

import re

from favicon_studio.models.naming import FAVICON_SIZES, ICO_FILENAME, MANIFEST_FILENAME, png_filename
from favicon_studio.services.package_service import PackageService
from favicon_studio.services.snippet_service import HTML_SNIPPET, get_snippet


def test_snippet_is_constant():
    assert get_snippet() == get_snippet() == HTML_SNIPPET


def test_snippet_references():
    snippet = get_snippet()
    hrefs = re.findall(r'href="/([^"]+)"', snippet)
    assert hrefs == [ICO_FILENAME] + [png_filename(s) for s in FAVICON_SIZES] + [MANIFEST_FILENAME]
    assert 'rel="manifest"' in snippet
    assert len(snippet.splitlines()) == len(FAVICON_SIZES) + 2


def test_snippet_matches_archive_entries(solid_source):
    archive = PackageService().create_package(solid_source)
    hrefs = re.findall(r'href="/([^"]+)"', get_snippet())
    assert set(hrefs) == set(archive.entry_names)


def test_snippet_for_custom_sizes_matches_archive(solid_source):
    sizes = [32, 16]
    archive = PackageService().create_package(solid_source, sizes=sizes)
    hrefs = re.findall(r'href="/([^"]+)"', get_snippet(sizes))
    assert hrefs == list(archive.entry_names)
    assert png_filename(48) not in hrefs
