"""
Name: Domain Entity Validation Tests

Responsibilities:
  - Verify Client/Form/User invariants and their stable messages
  - Verify first-failure-wins ordering
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from olidesk.domain.entities import (
    NIL_UUID,
    ClientReference,
    Form,
    Member,
    is_valid_email,
    validate_user_fields,
)
from olidesk.domain.errors import (
    MSG_CITY,
    MSG_CLIENT_ID,
    MSG_CLIENT_NAME,
    MSG_CLIENT_TYPE,
    MSG_CNPJ_OR_CPF,
    MSG_CONTACT_EMAIL,
    MSG_CONTACT_NAME,
    MSG_CONTACT_PHONE,
    MSG_COUNTRY,
    MSG_DEFECT_DESCRIPTION,
    MSG_DIFFICULTY_LEVEL,
    MSG_NUMBER,
    MSG_OPEN_DATE,
    MSG_POSTAL_CODE,
    MSG_SOLICITED_BY,
    MSG_SOLUTION_DESCRIPTION,
    MSG_STATE,
    MSG_STREET,
    MSG_TECHNICIANS,
    MSG_USER_EMAIL,
    MSG_USER_PASSWORD,
    DomainValidationError,
)

pytestmark = pytest.mark.unit


def _valid_form(**overrides) -> Form:
    form = Form(
        id=uuid4(),
        opened_at=datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc),
        technicians=[Member(id=uuid4(), name="Ana")],
        client=ClientReference(id=uuid4(), client_name="Padaria Central"),
        solicited_by="João",
        difficulty_level="media",
        defect_description="Impressora não liga",
        solution_description="Troca da fonte",
    )
    for key, value in overrides.items():
        setattr(form, key, value)
    return form


class TestClientValidation:
    def test_valid_client_passes(self, client_factory):
        client_factory().validate()

    @pytest.mark.parametrize(
        "path,value,field,message",
        [
            ("client_name", "", "client_name", MSG_CLIENT_NAME),
            ("client_type", "", "client_type", MSG_CLIENT_TYPE),
            ("client_type", "empresa", "client_type", MSG_CLIENT_TYPE),
            ("cnpj_or_cpf", "", "cnpj_or_cpf", MSG_CNPJ_OR_CPF),
            (
                "contact.responsible_name",
                "",
                "contact_person.responsible_name",
                MSG_CONTACT_NAME,
            ),
            ("contact.email", "", "contact_person.email", MSG_CONTACT_EMAIL),
            ("contact.email", "not-an-email", "contact_person.email", MSG_CONTACT_EMAIL),
            ("contact.phone", "", "contact_person.phone", MSG_CONTACT_PHONE),
            ("address.postal_code", "", "address.postal_code", MSG_POSTAL_CODE),
            ("address.country", "", "address.country", MSG_COUNTRY),
            ("address.state", "", "address.state", MSG_STATE),
            ("address.city", "", "address.city", MSG_CITY),
            ("address.street", "", "address.street", MSG_STREET),
            ("address.number", "", "address.number", MSG_NUMBER),
        ],
    )
    def test_each_required_field_fails_on_its_own(
        self, client_factory, path, value, field, message
    ):
        client = client_factory()
        *parents, attr = path.split(".")
        target = client
        for name in parents:
            target = getattr(target, name)
        setattr(target, attr, value)

        with pytest.raises(DomainValidationError) as exc_info:
            client.validate()

        assert exc_info.value.field == field
        assert exc_info.value.message == message

    def test_neighborhood_and_complement_are_optional(self, client_factory):
        client = client_factory()
        client.address.neighborhood = ""
        client.address.complement = ""

        client.validate()

    def test_first_failure_wins(self, client_factory):
        client = client_factory(client_name="", client_type="")

        with pytest.raises(DomainValidationError, match=MSG_CLIENT_NAME):
            client.validate()

    def test_touch_sets_updated_at(self, client_factory):
        client = client_factory()
        client.touch()
        assert client.updated_at is not None


class TestFormValidation:
    def test_valid_form_passes(self):
        _valid_form().validate()

    @pytest.mark.parametrize(
        "overrides,field,message",
        [
            ({"defect_description": ""}, "defect_description", MSG_DEFECT_DESCRIPTION),
            ({"difficulty_level": ""}, "difficulty_level", MSG_DIFFICULTY_LEVEL),
            ({"solicited_by": ""}, "solicited_by", MSG_SOLICITED_BY),
            ({"client": None}, "cliente_id", MSG_CLIENT_ID),
            ({"client": ClientReference(id=NIL_UUID)}, "cliente_id", MSG_CLIENT_ID),
            ({"technicians": []}, "tecnicos_responsaveis", MSG_TECHNICIANS),
            ({"opened_at": None}, "data_de_abertura", MSG_OPEN_DATE),
            (
                {"solution_description": ""},
                "solution_description",
                MSG_SOLUTION_DESCRIPTION,
            ),
        ],
    )
    def test_invalid_fields(self, overrides, field, message):
        form = _valid_form(**overrides)

        with pytest.raises(DomainValidationError) as exc_info:
            form.validate()

        assert exc_info.value.field == field
        assert exc_info.value.message == message

    @pytest.mark.parametrize("level", ["baixa", "ALTA", "nível 3", "x"])
    def test_difficulty_level_is_free_text(self, level):
        _valid_form(difficulty_level=level).validate()

    def test_technician_ids_preserve_order(self):
        first, second = uuid4(), uuid4()
        form = _valid_form(technicians=[Member(id=first), Member(id=second)])
        assert form.technician_ids == [first, second]


class TestUserValidation:
    def test_email_pattern(self):
        assert is_valid_email("ana@olidesk.com")
        assert not is_valid_email("ana@olidesk")
        assert not is_valid_email("")
        assert not is_valid_email(None)

    def test_invalid_email_rejected(self):
        with pytest.raises(DomainValidationError, match=MSG_USER_EMAIL):
            validate_user_fields(name="Ana", email="x", role="admin", password="p")

    def test_missing_password_rejected(self):
        with pytest.raises(DomainValidationError, match=MSG_USER_PASSWORD):
            validate_user_fields(
                name="Ana", email="ana@olidesk.com", role="admin", password=""
            )

    def test_to_member_projection(self, user_factory):
        user = user_factory(name="Ana", role="tecnico")
        member = user.to_member()

        assert member.id == user.id
        assert member.name == "Ana"
        assert member.email == user.email
        assert member.role == "tecnico"
