"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

Tests for body encoding, header merging and multipart payloads.
"""

import json

import pytest

from apifetch.http.body import FormData, encode_body, merge_headers


class TestEncodeBody:
    def test_string_passes_through(self):
        body = "name=ada&lang=en"
        assert encode_body(body) is body

    def test_form_data_passes_through(self):
        form = FormData().add_field("a", "1")
        assert encode_body(form) is form

    def test_none_means_no_body(self):
        assert encode_body(None) is None

    @pytest.mark.parametrize(
        "value",
        [
            {"id": 1, "tags": ["a", "b"], "nested": {"ok": True, "none": None}},
            [1, 2, 3],
            42,
            True,
        ],
    )
    def test_structured_values_serialized_to_json(self, value):
        encoded = encode_body(value)
        assert isinstance(encoded, str)
        assert encoded == json.dumps(value, separators=(",", ":"))
        assert json.loads(encoded) == value

    def test_json_is_compact(self):
        assert encode_body({"a": 1, "b": [1, 2]}) == '{"a":1,"b":[1,2]}'

    def test_unserializable_value_raises(self):
        with pytest.raises(TypeError):
            encode_body({"when": object()})


class TestMergeHeaders:
    def test_call_headers_override_defaults(self):
        merged = merge_headers(
            {"Accept": "application/json", "X-Team": "core"},
            {"Accept": "text/csv"},
        )
        assert merged == {"Accept": "text/csv", "X-Team": "core"}

    def test_defaults_only(self):
        assert merge_headers({"Accept": "application/json"}) == {"Accept": "application/json"}

    def test_no_headers(self):
        assert merge_headers(None, None) == {}

    def test_content_type_not_added_for_json_body(self):
        merged = merge_headers({}, None, {"id": 1})
        assert "Content-Type" not in merged

    def test_form_data_headers_win(self):
        form = FormData(boundary="b0undary")
        merged = merge_headers(
            {"Content-Type": "application/json"},
            {"Content-Type": "text/plain", "X-Trace": "1"},
            form,
        )
        assert merged == {
            "Content-Type": "multipart/form-data; boundary=b0undary",
            "X-Trace": "1",
        }

    def test_call_headers_override_defaults_ignoring_case(self):
        merged = merge_headers({"accept": "application/json"}, {"Accept": "text/csv"})
        assert merged == {"Accept": "text/csv"}

    def test_form_data_replaces_lowercase_content_type(self):
        form = FormData(boundary="b0undary")
        merged = merge_headers({"content-type": "application/json", "X-Team": "core"}, None, form)
        assert merged == {
            "Content-Type": "multipart/form-data; boundary=b0undary",
            "X-Team": "core",
        }
        assert [k for k in merged if k.lower() == "content-type"] == ["Content-Type"]

    def test_inputs_not_mutated(self):
        defaults = {"A": "1"}
        call = {"B": "2"}
        merge_headers(defaults, call, FormData())
        assert defaults == {"A": "1"}
        assert call == {"B": "2"}


class TestFormData:
    def test_headers_carry_boundary(self):
        form = FormData()
        assert form.get_headers() == {
            "Content-Type": f"multipart/form-data; boundary={form.boundary}"
        }

    def test_boundaries_are_unique(self):
        assert FormData().boundary != FormData().boundary

    def test_encode_fields_and_files(self):
        form = FormData(boundary="xyz")
        form.add_field("title", "report")
        form.add_field("pages", 3)
        form.add_file("file", "notes.txt", b"hello world")

        body = form.encode()

        assert body.startswith(b"--xyz\r\n")
        assert body.endswith(b"--xyz--\r\n")
        assert b'name="title"' in body
        assert b"report" in body
        assert b'name="pages"' in body
        assert b'filename="notes.txt"' in body
        assert b"Content-Type: text/plain" in body
        assert b"hello world" in body

    def test_unknown_extension_defaults_to_octet_stream(self):
        form = FormData(boundary="xyz").add_file("blob", "data.unknownext", b"\x00\x01")
        assert b"Content-Type: application/octet-stream" in form.encode()

    def test_explicit_file_content_type(self):
        form = FormData(boundary="xyz").add_file("doc", "a.bin", b"{}", "application/json")
        assert b"Content-Type: application/json" in form.encode()

    def test_len_counts_parts(self):
        form = FormData().add_field("a", "1").add_file("f", "a.txt", b"x")
        assert len(form) == 2
