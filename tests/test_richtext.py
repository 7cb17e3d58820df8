from __future__ import annotations

from bokexport.richtext import list_items, split_paragraphs


def test_split_paragraphs_drops_empty_entries() -> None:
    html = "<p>Snyder (1987).</p><p>   </p><p>Tobler (1970).</p>"
    assert split_paragraphs(html) == ["Snyder (1987).", "Tobler (1970)."]


def test_split_paragraphs_without_paragraph_markup() -> None:
    assert split_paragraphs("  A single reference  ") == ["A single reference"]


def test_split_paragraphs_absent_field() -> None:
    assert split_paragraphs(None) == []
    assert split_paragraphs("   ") == []


def test_split_paragraphs_tolerates_malformed_markup() -> None:
    html = "<p>A <b>bold</p><p>B"
    assert split_paragraphs(html) == ["A bold", "B"]


def test_list_items_returns_trimmed_text() -> None:
    html = "<ul><li> Learn <em>X</em> </li><li></li><li>Do Y</li></ul>"
    assert list_items(html) == ["Learn X", "Do Y"]


def test_list_items_without_list() -> None:
    assert list_items("<p>No objectives listed.</p>") == []
    assert list_items(None) == []


def test_split_paragraphs_with_unclosed_paragraphs() -> None:
    assert split_paragraphs("<p>Ref A<p>Ref B") == ["Ref A", "Ref B"]
    assert split_paragraphs("<p>Ref A <em>2001</em><p>Ref B<p>Ref C") == ["Ref A 2001", "Ref B", "Ref C"]


def test_split_paragraphs_ignores_comments() -> None:
    assert split_paragraphs("<p>Ref A<!-- draft --></p>") == ["Ref A"]
