# tests/application/services/test_request_builder.py
import pytest

from application.exceptions import RequestBuildError
from application.outcome import VariableKind
from application.services.request_builder import RequestBuilder
from domain.steps.request import RequestStep
from domain.variable_store import VariableStore


def make_step(**kwargs) -> RequestStep:
    kwargs.setdefault("id", "s1")
    kwargs.setdefault("name", "s1")
    return RequestStep(**kwargs)


class TestRequestBuilder:
    def test_builds_request_without_placeholders(self):
        step = make_step(
            method="post",
            url="https://api.example.com/users?page=1",
            headers={"Accept": ["application/json"]},
            body='{"name": "alice"}',
        )

        built = RequestBuilder().build(step, VariableStore())

        req = built.request
        assert req.method == "POST"
        assert req.base_url == "https://api.example.com/users"
        assert req.query_params == {"page": "1"}
        assert req.headers == {"Accept": "application/json"}
        assert req.body == b'{"name": "alice"}'
        assert built.variables_used == []

    def test_patches_every_field_and_records_provenance_in_order(self):
        store = VariableStore({"host": "api.example.com", "id": "42", "token": "t0k", "name": "bob"})
        step = make_step(
            url="https://${host}/users/${id}?auth=${token}&static=1",
            headers={"Authorization": ["Bearer ${token}"], "Accept": ["*/*"]},
            body='{"name": "${name}"}',
        )

        built = RequestBuilder().build(step, store)

        assert built.request.base_url == "https://api.example.com/users/42"
        assert built.request.query_params == {"auth": "t0k", "static": "1"}
        assert built.request.headers == {"Authorization": "Bearer t0k", "Accept": "*/*"}
        assert built.request.body == b'{"name": "bob"}'

        used = [(v.key, v.value) for v in built.variables_used]
        assert used == [
            ("body", '{"name": "bob"}'),
            ("URL", "https://api.example.com/users/42"),
            ("params[auth]", "t0k"),
            ("headers.Authorization", "Bearer t0k"),
        ]
        assert all(v.kind is VariableKind.USED for v in built.variables_used)

    def test_unresolved_placeholder_is_sent_literally_without_record(self):
        step = make_step(url="https://a.example/users/${missing}")

        built = RequestBuilder().build(step, VariableStore())

        assert built.request.base_url == "https://a.example/users/${missing}"
        assert built.variables_used == []

    def test_only_first_header_value_is_sent(self):
        step = make_step(url="https://a.example/", headers={"X-Multi": ["one", "two"], "X-Empty": []})

        built = RequestBuilder().build(step, VariableStore())

        assert built.request.headers == {"X-Multi": "one"}

    def test_override_headers_win_and_are_patched(self):
        store = VariableStore({"token": "from-store"})
        step = make_step(url="https://a.example/", headers={"Authorization": ["Basic xyz"]})

        built = RequestBuilder().build(
            step, store, override_headers={"Authorization": "Bearer ${token}", "X-Trace": "1"}
        )

        assert built.request.headers == {"Authorization": "Bearer from-store", "X-Trace": "1"}
        assert [v.key for v in built.variables_used] == ["headers.Authorization"]

    def test_provenance_count_matches_changed_fields(self):
        store = VariableStore({"a": "1"})
        step = make_step(
            url="https://a.example/x?p=${a}&q=plain",
            headers={"H1": ["${a}"], "H2": ["plain"]},
            body="plain",
        )

        built = RequestBuilder().build(step, store)

        assert len(built.variables_used) == 2

    def test_default_method_is_get(self):
        step = make_step(url="https://a.example/", method="")
        assert RequestBuilder().build(step, VariableStore()).request.method == "GET"

    def test_malformed_url_raises_build_error(self):
        step = make_step(url="https://a.example/%zz")
        with pytest.raises(RequestBuildError, match="cannot build request"):
            RequestBuilder().build(step, VariableStore())

    def test_request_url_property_renders_query(self):
        step = make_step(url="https://a.example/search?q=a b")
        built = RequestBuilder().build(step, VariableStore())
        assert built.request.url == "https://a.example/search?q=a+b"
