"""
Tests for the text and HTML renderers, fed from a laid-out table.
"""

from jinja2 import Environment

from containerdiff.layout import layout_table
from containerdiff.renderers import make_env, render_html, render_text
from containerdiff.schema import DiffRow, RenderModel


def _model(target_width=None, label="api") -> RenderModel:
    header = DiffRow(name="Container", label="Container", cells=[["prod"], ["stage"]])
    rows = [
        DiffRow(name="api", label=label, cells=[["1.0.0", "1.1.0", "1.2.0"], ["1.0.0"]], different=True),
        DiffRow(name="web", label="web", cells=[["2.0"], ["2.0"]]),
    ]
    return RenderModel(header=header, rows=rows, target_width=target_width)


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

def test_text_lines_are_padded_and_styled():
    lines = render_text(layout_table(_model(target_width=30)))
    assert [line.text for line in lines] == [
        "Container" + "  " + "prod" + " " * 7 + "stage",
        "api" + " " * 8 + "<<< 3 >>>" + "  " + "1.0.0",
        "web" + " " * 8 + "2.0" + " " * 8 + "2.0",
    ]
    assert [line.style for line in lines] == [None, "yellow", "green"]


def test_text_trailing_spaces_trimmed():
    model = _model(target_width=200)
    model.rows[1].cells[1] = []
    lines = render_text(layout_table(model))
    assert not lines[2].text.endswith(" ")


def test_text_only_different_drops_equal_rows_unstyled():
    lines = render_text(layout_table(_model(target_width=30)), show_only_different=True)
    assert len(lines) == 2
    assert lines[1].text.startswith("api")
    assert lines[1].style is None


def test_text_only_different_matches_styled_rows():
    layout = layout_table(_model(target_width=80))
    all_lines = render_text(layout, show_only_different=False)
    only = render_text(layout, show_only_different=True)
    styled = [line.text for line in all_lines[1:] if line.style == "yellow"]
    assert styled == [line.text for line in only[1:]]


def test_text_header_only_for_empty_model():
    model = RenderModel(header=DiffRow(name="Container", label="Container"), target_width=80)
    lines = render_text(layout_table(model))
    assert [line.text for line in lines] == ["Container"]


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------

def _html(model=None, **kwargs) -> str:
    layout = layout_table(model or _model(), collapse_limit=None if kwargs.get("expand_versions") else 10)
    return render_html(layout, make_env(), **kwargs)


def test_html_is_a_document_with_one_row_per_container():
    html = _html()
    assert html.lstrip().startswith("<!DOCTYPE html>")
    assert "<th>prod</th>" in html
    assert "<th>stage</th>" in html
    assert html.count("<tr") == 3


def test_html_row_classes():
    html = _html()
    assert '<tr class="different">' in html
    assert '<tr class="equal">' in html


def test_html_collapsed_cell_has_tooltip():
    html = _html()
    assert '<td title="1.0.0, 1.1.0, 1.2.0">&lt;&lt;&lt; 3 &gt;&gt;&gt;</td>' in html


def test_html_expand_lists_every_value():
    html = _html(expand_versions=True)
    assert "<td>1.0.0<br>1.1.0<br>1.2.0</td>" in html
    assert "&lt;&lt;&lt;" not in html


def test_html_only_different_omits_equal_rows_and_classes():
    html = _html(show_only_different=True)
    assert 'class="different"' not in html
    assert 'class="equal"' not in html
    assert "<td>web</td>" not in html
    assert "<td>api</td>" in html


def test_html_escapes_labels():
    html = _html(_model(label="<api>"))
    assert "<td>&lt;api&gt;</td>" in html


def test_html_lists_warnings():
    html = _html(warnings=[{"source": "environments", "message": "too many matches for 'x'"}])
    assert "too many matches for &#39;x&#39;" in html


def test_html_without_loader_uses_package_templates():
    layout = layout_table(_model(), collapse_limit=10)
    html = render_html(layout, Environment(autoescape=True))
    assert "<th>prod</th>" in html
