import numpy as np

from apicula.collada_xml import Xml


def _open(xml, name):
    xml.start_open_tag()
    xml.push_str(name)
    xml.end_tag()
    xml.nl()


def _close(xml, name):
    xml.deindent_and_start_close_tag()
    xml.push_str(name)
    xml.end_tag()
    xml.nl()


def test_open_and_close_element():
    xml = Xml()
    _open(xml, "asset")
    _close(xml, "asset")
    assert xml.string() == "<asset>\n</asset>\n"


def test_empty_tag_keeps_indent_level():
    xml = Xml()
    xml.start_open_tag()
    xml.push_str("a")
    xml.end_empty_tag()
    xml.nl()
    assert xml.string() == "<a/>\n"
    assert xml.cur_indent == 0


def test_nested_elements_are_indented():
    xml = Xml()
    _open(xml, "outer")
    _open(xml, "inner")
    _close(xml, "inner")
    _close(xml, "outer")
    lines = xml.string().split("\n")
    assert lines[0] == "<outer>"
    assert lines[1] == "  <inner>"
    assert lines[2] == "  </inner>"
    assert lines[3] == "</outer>"
    assert xml.cur_indent == 0


def test_push_text_formats_values():
    xml = Xml()
    xml.push_text(2.0)
    xml.push_str(" ")
    xml.push_text(0.25)
    xml.push_str(" ")
    xml.push_text(7)
    xml.push_str(" ")
    xml.push_text(True)
    tokens = xml.string().split(" ")
    assert tokens[0] == "2"
    assert float(tokens[1]) == 0.25
    assert tokens[2] == "7"
    assert tokens[3] == "true"


def test_push_text_never_uses_exponent():
    xml = Xml()
    xml.push_text(1e-07)
    text = xml.string()
    assert "e" not in text.lower()
    assert float(text) == 1e-07


def test_matrix_is_row_major():
    m = np.arange(16, dtype=float).reshape(4, 4) / 4.0
    xml = Xml()
    xml.matrix(m)
    values = [float(t) for t in xml.string().split(" ")]
    assert len(values) == 16
    assert values == list(m.flatten())