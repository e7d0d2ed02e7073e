"""
Name: User Account Use Case Tests

Responsibilities:
  - Register: normalization, validation, conflict on duplicated email
  - Login: token issuance and uniform failure message
  - Self-service: details / update / delete
  - Members listing
"""

from uuid import uuid4

import pytest
from olidesk.application.errors import ErrorKind
from olidesk.application.usecases.users import (
    DeleteCurrentUserUseCase,
    GetCurrentUserUseCase,
    ListMembersUseCase,
    LoginInput,
    LoginUserUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
    UpdateCurrentUserUseCase,
    UpdateUserInput,
)
from olidesk.domain.entities import CallerIdentity
from olidesk.domain.errors import (
    MSG_DUPLICATED_EMAIL,
    MSG_INVALID_CREDENTIALS,
    MSG_USER_EMAIL,
)
from olidesk.identity.tokens import TokenService
from olidesk.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit

SECRET = "users-test-secret-with-at-least-32-bytes"


@pytest.fixture
def repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


def _register(repo, hasher, **overrides):
    data = RegisterUserInput(
        name="Ana", email="Ana@Olidesk.com ", role="tecnico", password="s3cret"
    )
    for key, value in overrides.items():
        setattr(data, key, value)
    return RegisterUserUseCase(repo, hasher).execute(None, data)


class TestRegister:
    def test_normalizes_email_and_hashes_password(self, repo, fake_hasher):
        result = _register(repo, fake_hasher)

        assert result.error is None
        stored = repo.get_user_by_email("ana@olidesk.com")
        assert stored is not None
        assert stored.password_hash == "hashed:s3cret"

    def test_member_projection_created(self, repo, fake_hasher):
        user = _register(repo, fake_hasher).user

        members = ListMembersUseCase(repo).execute(CallerIdentity(user_id=user.id))

        assert [m.id for m in members.members] == [user.id]

    def test_duplicate_email_is_conflict(self, repo, fake_hasher):
        _register(repo, fake_hasher)

        result = _register(repo, fake_hasher, email="ana@olidesk.com")

        assert result.error.kind == ErrorKind.CONFLICT
        assert result.error.message == MSG_DUPLICATED_EMAIL

    def test_invalid_email(self, repo, fake_hasher):
        result = _register(repo, fake_hasher, email="ana")

        assert result.error.kind == ErrorKind.VALIDATION_ERROR
        assert result.error.message == MSG_USER_EMAIL


class TestLogin:
    def test_login_issues_verifiable_token(self, repo, fake_hasher):
        user = _register(repo, fake_hasher).user
        tokens = TokenService(SECRET)

        result = LoginUserUseCase(repo, fake_hasher, tokens).execute(
            LoginInput(email="ANA@olidesk.com", password="s3cret")
        )

        assert result.error is None
        assert result.token_type == "Bearer"
        assert result.expires_in == 86400
        assert tokens.verify(result.access_token).subject_id == str(user.id)

    @pytest.mark.parametrize(
        "email,password",
        [("ana@olidesk.com", "wrong"), ("ghost@olidesk.com", "s3cret"), ("", "")],
    )
    def test_login_failures_are_uniform(self, repo, fake_hasher, email, password):
        _register(repo, fake_hasher)

        result = LoginUserUseCase(repo, fake_hasher, TokenService(SECRET)).execute(
            LoginInput(email=email, password=password)
        )

        assert result.error.kind == ErrorKind.NOT_AUTHENTICATED
        assert result.error.message == MSG_INVALID_CREDENTIALS
        assert result.access_token == ""


class TestSelfService:
    def test_details(self, repo, fake_hasher):
        user = _register(repo, fake_hasher).user

        result = GetCurrentUserUseCase(repo).execute(CallerIdentity(user_id=user.id))

        assert result.user.email == "ana@olidesk.com"

    def test_details_for_deleted_user(self, repo):
        result = GetCurrentUserUseCase(repo).execute(CallerIdentity(user_id=uuid4()))

        assert result.error.kind == ErrorKind.NOT_FOUND

    def test_update_name_only(self, repo, fake_hasher):
        user = _register(repo, fake_hasher).user

        result = UpdateCurrentUserUseCase(repo).execute(
            CallerIdentity(user_id=user.id), UpdateUserInput(name="Ana Maria")
        )

        assert result.user.name == "Ana Maria"
        assert result.user.role == "tecnico"

    def test_delete_is_idempotent(self, repo, fake_hasher):
        user = _register(repo, fake_hasher).user
        caller = CallerIdentity(user_id=user.id)
        use_case = DeleteCurrentUserUseCase(repo)

        assert use_case.execute(caller).deleted is True
        assert use_case.execute(caller).deleted is False
        assert repo.get_user_by_id(user.id) is None
