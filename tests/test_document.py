# tests/test_document.py
from pathlib import Path

import pytest

from chettu.document import render
from chettu.patterns import PatternSet
from chettu.walker import TreeEntry, walk


def _entry(path: str, is_dir: bool = False) -> TreeEntry:
    return TreeEntry(path=path, rel_path=path, source=Path(path), is_dir=is_dir)


def _reader(contents):
    def read(source: Path) -> bytes:
        try:
            return contents[source.as_posix()]
        except KeyError:
            raise FileNotFoundError(source)

    return read


def _sources(document: str):
    return [
        line.strip()[len("<source>"):-len("</source>")]
        for line in document.splitlines()
        if line.strip().startswith("<source>")
    ]


def test_exact_format():
    entries = [_entry("p/a.txt"), _entry("p/b", is_dir=True), _entry("p/b/c.txt")]
    out = render(entries, _reader({"p/a.txt": b"hello", "p/b/c.txt": b"one\ntwo\n"}))
    assert out == (
        "<documents>\n"
        "p/a.txt\n"
        "p/b\n"
        "p/b/c.txt\n"
        "\n"
        "\t<document>\n"
        "\t\t<source>p/a.txt</source>\n"
        "\t\t<document_content>\n"
        "\t\thello\n"
        "\t\t</document_content>\n"
        "\t</document>\n"
        "\t<document>\n"
        "\t\t<source>p/b/c.txt</source>\n"
        "\t\t<document_content>\n"
        "\t\tone\n"
        "\t\ttwo\n"
        "\n"
        "\t\t</document_content>\n"
        "\t</document>\n"
        "</documents>\n"
    )


def test_empty_lines_are_not_indented():
    out = render([_entry("f")], _reader({"f": b"a\n\nb"}))
    assert "\t\ta\n\n\t\tb\n" in out


def test_empty_entry_list():
    assert render([], _reader({})) == "<documents>\n\n</documents>\n"


def test_only_newline_ends_a_line():
    raw = b"int x;\x0c/* page */\n\x0bnext\x1c\xc2\x85\xe2\x80\xa8end\r\n\r\ntail"
    out = render([_entry("f.c")], _reader({"f.c": raw}))
    assert "\t\tint x;\x0c/* page */\n\t\t\x0bnext\x1c\x85\u2028end\r\n\r\n\t\ttail\n" in out


def test_unreadable_file_keeps_manifest_line(capsys):
    entries = [_entry("gone.txt"), _entry("ok.txt")]
    out = render(entries, _reader({"ok.txt": b"fine"}))

    manifest = out.split("\n\n", 1)[0].splitlines()
    assert manifest == ["<documents>", "gone.txt", "ok.txt"]
    assert _sources(out) == ["ok.txt"]
    assert "Could not read gone.txt" in capsys.readouterr().err


def test_content_blocks_follow_manifest_files_in_order():
    entries = [
        _entry("d", is_dir=True),
        _entry("d/x"),
        _entry("e", is_dir=True),
        _entry("e/y"),
        _entry("z"),
    ]
    out = render(entries, _reader({"d/x": b"1", "e/y": b"2", "z": b"3"}))
    assert _sources(out) == [e.path for e in entries if not e.is_dir]


def test_render_is_idempotent():
    entries = [_entry("a"), _entry("b")]
    read = _reader({"a": b"alpha\n", "b": b"beta"})
    assert render(entries, read) == render(entries, read)


def test_undecodable_bytes_survive():
    out = render([_entry("bin")], _reader({"bin": b"\xffok"}))
    assert b"\t\t\xffok\n" in out.encode("utf-8", "surrogateescape")


def test_framing_token_in_content_warns(capsys):
    render([_entry("t.xml")], _reader({"t.xml": b"</document_content>"}))
    assert "t.xml contains" in capsys.readouterr().err


def test_render_walked_project(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    root = Path("project")
    (root / "b").mkdir(parents=True)
    (root / "a.txt").write_text("hello", encoding="utf-8")
    (root / "b" / "c.txt").write_text("world", encoding="utf-8")

    out = render(walk(root, PatternSet.from_lines(["b/"])))

    assert out == (
        "<documents>\n"
        "project/a.txt\n"
        "\n"
        "\t<document>\n"
        "\t\t<source>project/a.txt</source>\n"
        "\t\t<document_content>\n"
        "\t\thello\n"
        "\t\t</document_content>\n"
        "\t</document>\n"
        "</documents>\n"
    )
