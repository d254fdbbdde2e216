import datetime as dt
import gzip
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from fhsite.sitemap import SITEMAP_NS, build_sitemap, get_change_freq, get_priority, sitemap_url, write_sitemap

NS = {"sm": SITEMAP_NS}


@pytest.mark.parametrize(
    "name,priority,freq",
    [
        ("index.html", "1.0", "weekly"),
        ("INDEX.html", "1.0", "weekly"),
        ("toc3.html", "0.80", "weekly"),
        ("_nameindex.html", "0.80", "weekly"),
        ("fam42.html", "0.5", "monthly"),
        ("ind7.html", "0.5", "monthly"),
    ],
)
def test_priority_and_change_freq(name, priority, freq):
    assert get_priority(name) == priority
    assert get_change_freq(name) == freq


def test_sitemap_url():
    url = sitemap_url("fam42.html", "https://example.com/", "2024-03-05")
    assert url.loc == "https://example.com/fam42.html"
    assert url.lastmod == "2024-03-05"


def test_build_sitemap_preserves_order_and_duplicates():
    names = ["toc1.html", "fam2.html", "index.html", "fam2.html"]
    xml = build_sitemap(names, "https://example.com/", dt.date(2024, 3, 5))
    root = ET.fromstring(xml.encode("utf-8"))
    assert root.tag == f"{{{SITEMAP_NS}}}urlset"
    urls = root.findall("sm:url", NS)
    assert [u.findtext("sm:loc", namespaces=NS) for u in urls] == [
        "https://example.com/toc1.html",
        "https://example.com/fam2.html",
        "https://example.com/index.html",
        "https://example.com/fam2.html",
    ]
    assert {u.findtext("sm:lastmod", namespaces=NS) for u in urls} == {"2024-03-05"}
    assert [u.findtext("sm:priority", namespaces=NS) for u in urls] == ["0.80", "0.5", "1.0", "0.5"]
    assert [u.findtext("sm:changefreq", namespaces=NS) for u in urls] == ["weekly", "monthly", "weekly", "monthly"]


def test_build_sitemap_empty():
    root = ET.fromstring(build_sitemap([], "https://example.com/").encode("utf-8"))
    assert root.findall("sm:url", NS) == []


def test_loc_is_xml_escaped():
    xml = build_sitemap(["fam1.html"], "https://example.com/a&b/", dt.date(2024, 1, 1))
    assert "<loc>https://example.com/a&amp;b/fam1.html</loc>" in xml


def test_write_sitemap_with_gzip_copy(tmp_path: Path):
    xml = build_sitemap(["index.html"], "https://example.com/", dt.date(2024, 1, 1))
    gz_path = write_sitemap(tmp_path, xml)
    assert gz_path.name == "sitemap.xml.gz"
    assert (tmp_path / "sitemap.xml").read_text(encoding="utf-8") == xml
    assert gzip.decompress(gz_path.read_bytes()).decode("utf-8") == xml


def test_loc_percent_encodes_file_names():
    url = sitemap_url("fam 1.html", "https://example.com/", "2024-03-05")
    assert url.loc == "https://example.com/fam%201.html"
