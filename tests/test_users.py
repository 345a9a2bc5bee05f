import pytest

from food_portal.core.config import settings
from food_portal.core.errors import AuthError, InvalidTokenError, NotFoundError, StorageError, ValidationError
from food_portal.core.security import decode_token, hash_password, issue_token, verify_password
from food_portal.models.user import PriceTier, User

from tests.conftest import count_rows, drop_table


class TestPasswords:
	def test_hash_round_trip(self):
		hashed = hash_password("s3cret")
		assert hashed != "s3cret"
		assert verify_password("s3cret", hashed)
		assert not verify_password("wrong", hashed)

	def test_malformed_hash_does_not_verify(self):
		assert not verify_password("s3cret", "not-a-bcrypt-hash")


class TestTokens:
	def test_round_trip(self):
		payload = decode_token(issue_token("u1", True))
		assert payload["sub"] == "u1"
		assert payload["is_admin"] is True

	def test_tampered_token(self):
		token = issue_token("u1", False)
		with pytest.raises(InvalidTokenError):
			decode_token(token[:-2] + ("AA" if token[-2:] != "AA" else "BB"))

	def test_foreign_secret(self, monkeypatch):
		token = issue_token("u1", False)
		monkeypatch.setattr(settings, "jwt_secret", "rotated")
		with pytest.raises(InvalidTokenError):
			decode_token(token)


class TestAuthenticate:
	async def test_valid_credentials(self, users, customer):
		user = await users.authenticate("bistro", "secret-pass")
		assert user.id == customer.id
		assert user.category is PriceTier.B
		assert not user.is_admin

	async def test_invalid_credentials_share_one_message(self, users, customer):
		with pytest.raises(AuthError) as wrong:
			await users.authenticate("bistro", "nope")
		with pytest.raises(AuthError) as unknown:
			await users.authenticate("ghost", "nope")
		assert wrong.value.message == unknown.value.message == "Invalid credentials"


class TestManageUsers:
	async def test_create_requires_fields(self, users):
		with pytest.raises(ValidationError):
			await users.create_user(username="", password="x", category="A", company_name="C")
		with pytest.raises(ValidationError):
			await users.create_user(username="u", password="x", category="A", company_name=" ")

	async def test_create_rejects_bad_tier(self, users):
		with pytest.raises(ValidationError):
			await users.create_user(username="u", password="x", category="Z", company_name="C")

	async def test_duplicate_username(self, users, customer):
		with pytest.raises(ValidationError):
			await users.create_user(username="bistro", password="x", category="A", company_name="C")

	async def test_update_profile_and_password(self, users, customer):
		updated = await users.update_user(customer.id, category="C", contact_number=None, password="new-pass")
		assert updated.category is PriceTier.C
		assert updated.contact_number is None
		assert updated.address == "1 Market St"
		assert (await users.authenticate("bistro", "new-pass")).id == customer.id

	async def test_rename_to_taken_username(self, users, customer, admin):
		with pytest.raises(ValidationError):
			await users.update_user(customer.id, username="boss")

	async def test_update_missing(self, users):
		with pytest.raises(NotFoundError):
			await users.update_user("nope", category="A")

	async def test_delete(self, users, customer, session_factory):
		await users.delete_user(customer.id)
		assert await count_rows(session_factory, User) == 0
		with pytest.raises(NotFoundError):
			await users.delete_user(customer.id)

	async def test_failed_read_is_storage_error(self, users, customer, session_factory):
		await drop_table(session_factory, "users")
		with pytest.raises(StorageError):
			await users.list_users()
		with pytest.raises(StorageError):
			await users.get_user(customer.id)
		with pytest.raises(StorageError):
			await users.authenticate("bistro", "secret-pass")


async def test_seed_admin_once(users, session_factory):
	await users.seed_admin()
	await users.seed_admin()
	assert await count_rows(session_factory, User, User.is_admin.is_(True)) == 1
	admin = await users.authenticate(settings.admin_username, settings.admin_password)
	assert admin.is_admin
	assert admin.category is PriceTier.A
