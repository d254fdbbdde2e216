from pathlib import Path

from fhsite.render import copy_assets, find_placeholders, neutralise_placeholders, render_template


def test_render_template_replaces_every_occurrence():
    assert render_template("{{A}} and {{A}} {{B}}", A="x", B="y") == "x and x y"


def test_content_substituted_last():
    out = render_template("{{CONTENT}}|{{TITLE}}", CONTENT="{{TITLE}}", TITLE="t")
    assert out == "{{TITLE}}|t"


def test_find_placeholders():
    assert find_placeholders("<p>{{TITLE}} {{AD_IMG}} {{lower}} {x}</p>") == {"TITLE", "AD_IMG"}


def test_copy_assets(tmp_path: Path):
    source = tmp_path / "source"
    out = tmp_path / "out"
    source.mkdir()
    (source / "a.jpg").write_bytes(b"a")
    (source / "b.jpg").write_bytes(b"b")
    (source / "fam1.html").write_text("x", encoding="utf-8")
    assert copy_assets(source, out, ["*.jpg"]) == 2
    assert sorted(p.name for p in out.iterdir()) == ["a.jpg", "b.jpg"]


def test_title_substituted_late_and_before_content():
    out = render_template("{{TITLE}}|{{AD_IMG}}|{{CONTENT}}", TITLE="{{AD_IMG}}", AD_IMG="x.png", CONTENT="c")
    assert out == "{{AD_IMG}}|x.png|c"


def test_neutralise_placeholders():
    assert neutralise_placeholders("<p>{{TITLE}}</p>") == "<p>&#123;&#123;TITLE}}</p>"
    assert find_placeholders(neutralise_placeholders("{{A}} {{B}}")) == set()
