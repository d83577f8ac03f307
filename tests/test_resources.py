"""Tests for resource operations: validation, query rules and success policy."""

from __future__ import annotations

import json

import httpx
import pytest

from piperun import ApiError, Person, ValidationError

OK = {"success": True, "data": []}


def params_of(request: httpx.Request) -> httpx.QueryParams:
    return request.url.params


class TestPipelines:
    def test_list_succeeds_on_200(self, make_client):
        client, recorder = make_client(httpx.Response(200, json={"data": [{"id": 1, "name": "Vendas"}]}))
        envelope = client.pipelines.list()
        assert recorder.last.url.path == "/v1/pipelines"
        assert envelope.body["data"][0]["name"] == "Vendas"

    def test_list_raises_with_server_message(self, make_client):
        client, _ = make_client(httpx.Response(401, json={"success": False, "message": "Token inválido"}))
        with pytest.raises(ApiError, match="Token inválido") as excinfo:
            client.pipelines.list()
        assert excinfo.value.http_code == 401


class TestPersons:
    def test_find_by_email_replaces_caller_email(self, make_client):
        client, recorder = make_client(httpx.Response(200, json=OK))
        client.persons.find_by_email(
            "new@x.com",
            [{"name": "email", "value": "old@x.com"}, {"name": "show", "value": "5"}],
        )
        query = params_of(recorder.last)
        assert query.get_list("email") == ["new@x.com"]
        assert query["show"] == "5"

    def test_token_param_never_reaches_the_url(self, make_client):
        client, recorder = make_client(httpx.Response(200, json=OK))
        client.persons.find_by_email("a@x.com", [("token", "leak")])
        assert "token" not in params_of(recorder.last)
        assert "leak" not in str(recorder.last.url)

    def test_find_by_phone_uses_hardcoded_query(self, make_client):
        client, recorder = make_client(httpx.Response(200, json=OK))
        client.persons.find_by_phone("+55 51 1234")
        query = params_of(recorder.last)
        assert recorder.last.url.path == "/v1/persons"
        assert query["with"] == "deals"
        assert query["phone"] == "+55 51 1234"

    def test_find_by_phone_requires_phone(self, make_client):
        client, recorder = make_client()
        with pytest.raises(ValidationError):
            client.persons.find_by_phone("")
        assert recorder.requests == []

    def test_create_requires_name(self, make_client):
        client, recorder = make_client()
        with pytest.raises(ValidationError) as excinfo:
            client.persons.create({"email": "a@x.com"})
        assert str(excinfo.value) == "The contact name is required"
        assert recorder.requests == []

    def test_create_posts_body(self, make_client):
        client, recorder = make_client(httpx.Response(200, json={"success": True, "data": {"id": 7, "name": "Ana"}}))
        envelope = client.persons.create({"name": "Ana"})
        assert recorder.last.method == "POST"
        assert json.loads(recorder.last.content) == {"name": "Ana"}
        person = envelope.data_as(Person)
        assert isinstance(person, Person)
        assert person.id == 7

    def test_create_failure_without_message_serializes_envelope(self, make_client):
        client, _ = make_client(httpx.Response(200, json={"success": False}))
        with pytest.raises(ApiError) as excinfo:
            client.persons.create({"name": "Ana"})
        assert json.loads(str(excinfo.value)) == {"body": {"success": False}, "httpCode": 200}

    def test_update_and_delete_paths(self, make_client):
        client, recorder = make_client(httpx.Response(200, json=OK))
        client.persons.update(3, {"name": "Bia"})
        assert (recorder.last.method, recorder.last.url.path) == ("PUT", "/v1/persons/3")
        client.persons.delete(3)
        assert (recorder.last.method, recorder.last.url.path) == ("DELETE", "/v1/persons/3")

    def test_update_requires_id(self, make_client):
        client, _ = make_client()
        with pytest.raises(ValidationError, match="person to update"):
            client.persons.update(0, {"name": "Bia"})


class TestCompanies:
    def test_find_by_cnpj_replaces_caller_cnpj(self, make_client):
        client, recorder = make_client(httpx.Response(200, json=OK))
        client.companies.find_by_cnpj("12345678000199", [("cnpj", "1"), ("cnpj", "2")])
        assert params_of(recorder.last).get_list("cnpj") == ["12345678000199"]

    def test_find_by_phone(self, make_client):
        client, recorder = make_client(httpx.Response(200, json=OK))
        client.companies.find_by_phone("5551234")
        assert str(recorder.last.url) == "https://api.pipe.run/v1/companies?with=deals&phone=5551234"

    def test_create_requires_name(self, make_client):
        client, _ = make_client()
        with pytest.raises(ValidationError, match="company name"):
            client.companies.create({"name": ""})

    def test_update_and_delete(self, make_client):
        client, recorder = make_client(httpx.Response(200, json=OK))
        client.companies.update(8, {"name": "ACME"})
        assert (recorder.last.method, recorder.last.url.path) == ("PUT", "/v1/companies/8")
        client.companies.delete(8)
        assert (recorder.last.method, recorder.last.url.path) == ("DELETE", "/v1/companies/8")

    def test_delete_failure_uses_message(self, make_client):
        client, _ = make_client(httpx.Response(404, json={"success": False, "message": "Empresa não encontrada"}))
        with pytest.raises(ApiError, match="Empresa não encontrada"):
            client.companies.delete(8)


class TestDeals:
    def test_create_collects_every_violation(self, make_client):
        client, recorder = make_client()
        with pytest.raises(ValidationError) as excinfo:
            client.deals.create({"pipeline_id": 0, "title": "  "})
        assert excinfo.value.violations == [
            "The id of the pipeline for the deal is required",
            "The id of the stage for the deal is required",
            "The deal title is required",
        ]
        assert str(excinfo.value) == "\n".join(excinfo.value.violations)
        assert recorder.requests == []

    def test_create_posts_body(self, make_client):
        client, recorder = make_client(httpx.Response(201, json={"success": True, "data": {"id": 11}}))
        client.deals.create({"pipeline_id": 1, "stage_id": 2, "title": "Proposta"})
        assert json.loads(recorder.last.content) == {"pipeline_id": 1, "stage_id": 2, "title": "Proposta"}

    def test_find_by_account_uses_custom_field(self, make_client):
        client, recorder = make_client(httpx.Response(200, json=OK))
        client.deals.find_by_account(42, [("conta_id", "1"), ("with", "person"), ("show", "10")])
        query = params_of(recorder.last)
        assert query["custom_fields[427888]"] == "'42'"
        assert query.get_list("with") == ["customFields"]
        assert "conta_id" not in query
        assert query["show"] == "10"

    def test_find_by_account_field_id_follows_settings(self, make_client):
        client, recorder = make_client(httpx.Response(200, json=OK), account_custom_field_id=99)
        client.deals.find_by_account(5)
        assert params_of(recorder.last)["custom_fields[99]"] == "'5'"

    def test_update(self, make_client):
        client, recorder = make_client(httpx.Response(200, json=OK))
        client.deals.update(4, {"title": "Novo"})
        assert (recorder.last.method, recorder.last.url.path) == ("PUT", "/v1/deals/4")

    def test_delete_succeeds_only_on_204(self, make_client):
        client, recorder = make_client(httpx.Response(204))
        envelope = client.deals.delete(4)
        assert envelope.http_code == 204
        assert recorder.last.method == "DELETE"

    def test_delete_with_other_code_serializes_envelope(self, make_client):
        client, _ = make_client(httpx.Response(200, json={"success": True}))
        with pytest.raises(ApiError) as excinfo:
            client.deals.delete(4)
        assert json.loads(str(excinfo.value)) == {"body": {"success": True}, "httpCode": 200}

    def test_delete_with_message(self, make_client):
        client, _ = make_client(httpx.Response(403, json={"message": "Sem permissão"}))
        with pytest.raises(ApiError, match="Sem permissão"):
            client.deals.delete(4)


class TestNotes:
    def test_create_for_person(self, make_client):
        client, recorder = make_client(httpx.Response(200, json={"success": True}))
        client.notes.create_for_person(1, 2, "Ligou hoje")
        assert recorder.last.url.path == "/v1/notes"
        assert json.loads(recorder.last.content) == {"text": "Ligou hoje", "person_id": 1, "deal_id": 2}

    def test_create_for_company(self, make_client):
        client, recorder = make_client(httpx.Response(200, json={"success": True}))
        client.notes.create_for_company(5, 2, "Reunião")
        assert json.loads(recorder.last.content) == {"text": "Reunião", "company_id": 5, "deal_id": 2}

    def test_create_for_person_collects_violations(self, make_client):
        client, _ = make_client()
        with pytest.raises(ValidationError) as excinfo:
            client.notes.create_for_person(0, 0, "")
        assert len(excinfo.value.violations) == 3

    def test_delete(self, make_client):
        client, recorder = make_client(httpx.Response(200, json={"success": True}))
        client.notes.delete(77)
        assert (recorder.last.method, recorder.last.url.path) == ("DELETE", "/v1/notes/77")

    def test_delete_requires_id(self, make_client):
        client, _ = make_client()
        with pytest.raises(ValidationError, match="note id"):
            client.notes.delete(0)


class TestCities:
    def test_find_replaces_city_params(self, make_client):
        client, recorder = make_client(httpx.Response(200, json=OK))
        client.cities.find("Porto Alegre", "RS", [("cidade", "x"), ("name", "y"), ("uf", "SP"), ("show", "1")])
        query = params_of(recorder.last)
        assert query.get_list("name") == ["Porto Alegre"]
        assert query.get_list("uf") == ["RS"]
        assert "cidade" not in query
        assert query["show"] == "1"

    def test_find_requires_name_and_uf(self, make_client):
        client, _ = make_client()
        with pytest.raises(ValidationError) as excinfo:
            client.cities.find("", "")
        assert len(excinfo.value.violations) == 2


class TestRawMode:
    def test_success_flag_cannot_be_read_from_raw_text(self, make_client):
        client, _ = make_client(httpx.Response(200, text='{"success": true}'), decode=False)
        with pytest.raises(ApiError):
            client.persons.find_by_email("a@x.com")

    def test_pipelines_accept_raw_text(self, make_client):
        client, _ = make_client(httpx.Response(200, text="[]"), decode=False)
        assert client.pipelines.list().body == "[]"
