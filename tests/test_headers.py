"""Tests for httpfields.http.headers: mutable, case-insensitive Headers."""

import logging

import pytest

from httpfields.config import FieldsConfig, use_config
from httpfields.errors import HeaderValueError
from httpfields.http.headers import Headers, capitalize_name


class TestInitialize:
    def test_from_mapping(self) -> None:
        h = Headers({"Foo": "Bar", "Baz": "Bat"})
        assert h.to_dict() == {"foo": ["Bar"], "baz": ["Bat"]}

    def test_from_pairs(self) -> None:
        h = Headers([(" Foo ", " Bar "), (" Baz ", " Bat ")])
        assert h.to_dict() == {" foo ": ["Bar"], " baz ": ["Bat"]}

    def test_values_are_stripped(self) -> None:
        h = Headers({"Foo": "  Bar  "})
        assert h["foo"] == "Bar"

    def test_sequence_value_expands(self) -> None:
        h = Headers({"Accept": [" text/html ", "application/json"]})
        assert h.get_all("accept") == ["text/html", "application/json"]

    def test_mapping_value_expands_keys_and_values(self) -> None:
        h = Headers({"Foo": {"Bar": "Baz"}})
        assert h.get_all("foo") == ["Bar", "Baz"]

    def test_none_value_is_skipped(self) -> None:
        h = Headers({"Foo": None, "Bar": "1"})
        assert "foo" not in h
        assert list(h) == ["bar"]

    def test_replaces_existing_fields(self) -> None:
        h = Headers({"Foo": "Bar"})
        h.initialize({"Bat": "Bah"})
        assert h.to_dict() == {"bat": ["Bah"]}

    def test_duplicate_overwrites(self) -> None:
        h = Headers([("Foo", "1"), ("FOO", "2")])
        assert h.get_all("foo") == ["2"]

    def test_crlf_rejected_and_state_kept(self) -> None:
        h = Headers({"Foo": "Bar"})
        with pytest.raises(HeaderValueError, match="CR/LF"):
            h.initialize({"Baz": "a\r\nInjected: yes"})
        assert h.to_dict() == {"foo": ["Bar"]}

    def test_none_initializer(self) -> None:
        h = Headers(None)
        assert len(h) == 0

    def test_non_str_name_rejected(self) -> None:
        with pytest.raises(TypeError):
            Headers({1: "x"})  # type: ignore[dict-item]


class TestDiagnostics:
    def test_silent_by_default(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="httpfields.headers"):
            Headers([("Foo", "1"), ("foo", "2"), ("Bar", None)])
        assert caplog.records == []

    def test_duplicate_logged_when_verbose(self, caplog: pytest.LogCaptureFixture) -> None:
        with (
            use_config(FieldsConfig(verbose=True)),
            caplog.at_level(logging.WARNING, logger="httpfields.headers"),
        ):
            Headers([("Foo", "1"), ("foo", "2")])
        assert "duplicated HTTP header: foo" in caplog.text

    def test_none_logged_when_verbose(self, caplog: pytest.LogCaptureFixture) -> None:
        with (
            use_config(FieldsConfig(verbose=True)),
            caplog.at_level(logging.WARNING, logger="httpfields.headers"),
        ):
            Headers({"Foo": None})
        assert "nil HTTP header: Foo" in caplog.text


class TestGetSet:
    def test_case_insensitive(self) -> None:
        h = Headers()
        h["Content-Type"] = "text/html"
        assert h["content-type"] == "text/html"
        assert h["CONTENT-TYPE"] == "text/html"
        assert h.get("cOnTeNt-TyPe") == h.get("Content-Type")

    def test_get_missing(self) -> None:
        h = Headers()
        assert h.get("x-missing") is None
        assert h.get("x-missing", "fallback") == "fallback"

    def test_getitem_missing_raises(self) -> None:
        h = Headers()
        with pytest.raises(KeyError):
            h["X-Missing"]

    def test_set_is_not_stripped(self) -> None:
        h = Headers()
        h[" Foo "] = " Bar "
        assert h[" foo "] == " Bar "

    def test_set_replaces(self) -> None:
        h = Headers({"Foo": "Bar"})
        h["foo"] = "Baz"
        assert h.get_all("Foo") == ["Baz"]

    def test_set_none_deletes(self) -> None:
        h = Headers({"Foo": "Bar"})
        h["FOO"] = None
        assert "foo" not in h

    def test_set_sequence(self) -> None:
        h = Headers()
        h["Foo"] = [" Bar ", " Baz "]
        assert h.get_all("foo") == [" Bar ", " Baz "]
        h["Foo"] = [" Bat ", " Bag "]
        assert h.get_all("foo") == [" Bat ", " Bag "]

    def test_set_mapping(self) -> None:
        h = Headers()
        h["Foo"] = {" Bar ": " Baz "}
        assert h.get_all("foo") == [" Bar ", " Baz "]

    def test_set_nested(self) -> None:
        h = Headers()
        h.set("Foo", ["a", ["b", {"c": "d"}]])
        assert h.get_all("foo") == ["a", "b", "c", "d"]

    def test_set_scalar_coerced(self) -> None:
        h = Headers()
        h["Content-Length"] = 42
        assert h["content-length"] == "42"

    def test_set_empty_sequence_removes(self) -> None:
        h = Headers({"Foo": "Bar"})
        h["Foo"] = []
        assert "foo" not in h

    def test_set_crlf_rejected_and_state_kept(self) -> None:
        h = Headers({"Foo": "Bar"})
        with pytest.raises(HeaderValueError):
            h["Foo"] = "evil\r\nSet-Cookie: x=1"
        assert h["foo"] == "Bar"

    def test_set_crlf_in_sequence_rejected(self) -> None:
        h = Headers({"Foo": "Bar"})
        with pytest.raises(HeaderValueError):
            h["Foo"] = ["ok", "bad\n"]
        assert h.get_all("foo") == ["Bar"]

    def test_set_bytes_crlf_rejected(self) -> None:
        h = Headers()
        with pytest.raises(HeaderValueError):
            h["Foo"] = b"a\rb"


class TestAdd:
    def test_add_creates(self) -> None:
        h = Headers()
        h.add(" Foo ", " Bar ")
        assert h.get_all(" foo ") == [" Bar "]

    def test_add_appends(self) -> None:
        h = Headers()
        h.add("Foo", [" Bar ", " Baz "])
        h.add("Foo", [" Bat ", " Bag "])
        assert h.get_all("foo") == [" Bar ", " Baz ", " Bat ", " Bag "]

    def test_add_mapping(self) -> None:
        h = Headers()
        h.add("Foo", {"Bar": "Baz"})
        h.add("Foo", {"Bat": "Bag"})
        assert h.get_all("foo") == ["Bar", "Baz", "Bat", "Bag"]

    def test_getitem_joins(self) -> None:
        h = Headers({"Foo": "Bar"})
        h.add("Foo", [" Baz ", " Bat "])
        assert h["Foo"] == "Bar,  Baz ,  Bat "

    def test_add_crlf_leaves_prior_values(self) -> None:
        h = Headers({"Foo": "Bar"})
        with pytest.raises(HeaderValueError):
            h.add("Foo", ["ok", "bad\r\n"])
        assert h.get_all("foo") == ["Bar"]

    def test_add_crlf_does_not_create_key(self) -> None:
        h = Headers()
        with pytest.raises(HeaderValueError):
            h.add("Foo", "\n")
        assert "foo" not in h

    def test_add_none_is_noop(self) -> None:
        h = Headers()
        h.add("Foo", None)
        assert "foo" not in h


class TestDeleteAndContains:
    def test_delete_returns_values(self) -> None:
        h = Headers({"Foo": "Bar"})
        assert h.delete("FOO") == ["Bar"]
        assert "foo" not in h

    def test_delete_missing(self) -> None:
        assert Headers().delete("foo") is None

    def test_delitem(self) -> None:
        h = Headers({"Foo": "Bar"})
        del h["foo"]
        assert len(h) == 0

    def test_delitem_missing_raises(self) -> None:
        with pytest.raises(KeyError):
            del Headers()["foo"]

    def test_contains_rejects_non_str(self) -> None:
        h = Headers({"Accept": "*/*"})
        assert 42 not in h  # type: ignore[operator]
        assert "ACCEPT" in h


class TestMultiValue:
    def test_get_all_is_a_copy(self) -> None:
        h = Headers({"Foo": "Bar"})
        values = h.get_all("foo")
        assert values is not None
        values.append("mutated")
        assert h.get_all("foo") == ["Bar"]

    def test_get_all_missing(self) -> None:
        assert Headers().get_all("foo") is None

    def test_get_list_missing(self) -> None:
        assert Headers().get_list("foo") == []

    def test_to_dict_is_deep_copy(self) -> None:
        h = Headers({"Foo": "Bar"})
        d = h.to_dict()
        d["foo"].append("x")
        d["new"] = ["y"]
        assert h.to_dict() == {"foo": ["Bar"]}

    def test_copy_is_independent(self) -> None:
        h = Headers({"Foo": "Bar"})
        clone = h.copy()
        clone.add("Foo", "Baz")
        assert h.get_all("foo") == ["Bar"]
        assert clone.get_all("foo") == ["Bar", "Baz"]


class TestIteration:
    def test_each_header_in_insertion_order(self) -> None:
        h = Headers({"Foo": "Bar", "Baz": "Bat"})
        assert list(h.each_header()) == [("foo", "Bar"), ("baz", "Bat")]

    def test_each_capitalized_name(self) -> None:
        h = Headers({"Foo": "Bar", "Baz": "Bat"})
        assert list(h.each_capitalized_name()) == ["Foo", "Baz"]

    def test_each_name_and_value(self) -> None:
        h = Headers({"FOO": "Bar", "BAZ": "Bat"})
        assert list(h.each_name()) == ["foo", "baz"]
        assert list(h.each_value()) == ["Bar", "Bat"]

    def test_each_capitalized(self) -> None:
        h = Headers({"content-type": "text/html", "x-request-id": "1"})
        assert list(h.each_capitalized()) == [
            ("Content-Type", "text/html"),
            ("X-Request-Id", "1"),
        ]

    def test_each_header_joins_values(self) -> None:
        h = Headers()
        h.add("Accept", ["a", "b"])
        assert list(h.each_header()) == [("accept", "a, b")]

    def test_each_header_is_restartable(self) -> None:
        h = Headers({"Foo": "Bar"})
        first = list(h.each_header())
        second = list(h.each_header())
        assert first == second == [("foo", "Bar")]

    def test_each_header_is_a_snapshot(self) -> None:
        h = Headers({"Foo": "Bar", "Baz": "Bat"})
        seen = []
        for name, _ in h.each_header():
            seen.append(name)
            h.delete(name)
        assert seen == ["foo", "baz"]
        assert len(h) == 0

    def test_order_kept_on_overwrite(self) -> None:
        h = Headers({"A": "1", "B": "2"})
        h["a"] = "3"
        assert list(h) == ["a", "b"]

    def test_len(self) -> None:
        h = Headers({"A": "1", "B": "2"})
        h.add("a", "3")
        assert len(h) == 2

    def test_repr(self) -> None:
        assert "accept" in repr(Headers({"Accept": "*/*"}))


class TestCapitalizeName:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("content-type", "Content-Type"),
            ("CONTENT-LENGTH", "Content-Length"),
            ("www-authenticate", "Www-Authenticate"),
            ("host", "Host"),
        ],
    )
    def test_capitalize(self, name: str, expected: str) -> None:
        assert capitalize_name(name) == expected


class TestToWire:
    def test_block(self) -> None:
        h = Headers({"content-type": "text/plain"})
        h.add("Via", ["a", "b"])
        assert h.to_wire() == "Content-Type: text/plain\r\nVia: a, b\r\n\r\n"

    def test_empty(self) -> None:
        assert Headers().to_wire() == "\r\n"
