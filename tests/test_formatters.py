from pathlib import Path

from form_data.services.formatters import FORMATTERS, CallableFormatter, MultipartFormatter, UrlEncodedFormatter
from form_data.utils.files import FormFile


def test_multipart_field_entry():
    payload = MultipartFormatter().output([("key", "one")], {})
    assert payload == ("multipart", [("", "one", ("form-data", [("name", '"key"')]), [])])


def test_multipart_stringifies_values():
    _tag, entries = MultipartFormatter().output([("n[0]", 5), ("flag", True)], {})
    assert [entry[1] for entry in entries] == ["5", "True"]


def test_multipart_file_entry_uses_basename():
    upload = FormFile("/var/data/photos/cat.png")
    _tag, entries = MultipartFormatter().output([("user[avatar]", upload)], None)
    assert entries == [
        (
            "file",
            "/var/data/photos/cat.png",
            ("form-data", [("name", '"user[avatar]"'), ("filename", '"cat.png"')]),
            [],
        )
    ]


def test_file_reference_accepts_path_objects(tmp_path):
    upload = FormFile(tmp_path / "notes.txt")
    assert upload.filename == "notes.txt"
    assert FormFile("dir/sub/").filename == "sub"
    assert isinstance(upload.path, Path)


def test_url_encoded_uses_plus_by_default():
    body = UrlEncodedFormatter().output([("q", "a b"), ("tags[0]", "x")], {})
    assert body == b"q=a+b&tags%5B0%5D=x"


def test_url_encoded_percent_spaces_when_disabled():
    body = UrlEncodedFormatter().output([("q", "a b")], {"quote_plus": False})
    assert body == b"q=a%20b"


def test_url_encoded_honours_encoding_option():
    body = UrlEncodedFormatter().output([("name", "é")], {"encoding": "latin-1"})
    assert body == b"name=%E9"
    assert UrlEncodedFormatter().output([("name", "é")], {}) == b"name=%C3%A9"


def test_url_encoded_file_reference_contributes_its_path():
    body = UrlEncodedFormatter().output([("f", FormFile("/a/b.txt"))], {})
    assert body == b"f=%2Fa%2Fb.txt"


def test_registry_contains_builtins():
    assert set(FORMATTERS) == {"multipart", "url_encoded"}
    assert isinstance(FORMATTERS["multipart"], MultipartFormatter)


def test_callable_formatter_passes_options_through():
    seen = {}

    def collect(pairs, options):
        seen["options"] = options
        return list(pairs)

    formatter = CallableFormatter(collect)
    assert formatter.output(iter([("a", 1)]), {"x": True}) == [("a", 1)]
    assert seen["options"] == {"x": True}


def test_url_encoded_passes_bytes_through():
    assert UrlEncodedFormatter().output([("k", b"abc")], {}) == b"k=abc"


def test_multipart_keeps_bytes_content():
    _tag, entries = MultipartFormatter().output([("k", b"abc")], {})
    assert entries == [("", b"abc", ("form-data", [("name", '"k"')]), [])]
