"""
Unit tests for the Supabase client module.
"""
import pytest
from unittest.mock import Mock, patch

from config.settings import supabase_config
from hostdesk.supabase_sync.supabase_client import SupabaseClient
from hostdesk.utils.errors import AuthenticationError, BackendError, DuplicateRoomError
from hostdesk.utils.models import UserProfile, UserRoom


@pytest.fixture
def supabase_client():
    client = SupabaseClient()
    client.initialized = True
    client.client = Mock()
    return client


def _mock_table(mock_client, rows=None):
    table = Mock()
    mock_client.table.return_value = table
    for method in ("select", "insert", "update", "delete", "eq", "limit"):
        getattr(table, method).return_value = table

    res = Mock()
    res.data = rows if rows is not None else []
    table.execute.return_value = res
    return table


def _postgrest_error(code):
    error = Exception(f"postgrest error {code}")
    error.code = code
    return error


class TestInitialize:

    def test_missing_config(self, monkeypatch):
        monkeypatch.setattr(supabase_config, "url", "")
        client = SupabaseClient()

        assert client.initialize() is False
        assert client.initialized is False

    def test_uses_session_token_for_queries(self, monkeypatch):
        monkeypatch.setattr(supabase_config, "url", "https://project.supabase.co")
        monkeypatch.setattr(supabase_config, "anon_key", "anon")
        monkeypatch.setattr(supabase_config, "service_role_key", "")

        with patch("hostdesk.supabase_sync.supabase_client.create_client") as create_client:
            client = SupabaseClient(access_token="user-token")
            assert client.initialize() is True

        create_client.assert_called_once_with("https://project.supabase.co", "anon")
        create_client.return_value.postgrest.auth.assert_called_once_with("user-token")

    def test_uninitialized_calls_raise_backend_error(self, monkeypatch):
        monkeypatch.setattr(supabase_config, "url", "")
        with pytest.raises(BackendError):
            SupabaseClient().get_user_rooms("user-1")


class TestSession:

    def test_access_token_from_constructor(self):
        assert SupabaseClient(access_token="abc").get_access_token() == "abc"

    def test_no_session(self, supabase_client):
        supabase_client.client.auth.get_session.return_value = None
        with pytest.raises(AuthenticationError):
            supabase_client.get_access_token()

    def test_token_from_current_session(self, supabase_client):
        supabase_client.client.auth.get_session.return_value = Mock(access_token="live-token")
        assert supabase_client.get_access_token() == "live-token"

    def test_sign_in_keeps_token(self, supabase_client):
        supabase_client.client.auth.sign_in_with_password.return_value = Mock(
            session=Mock(access_token="fresh")
        )

        assert supabase_client.sign_in("host@example.com", "secret") == "fresh"
        assert supabase_client.get_access_token() == "fresh"
        supabase_client.client.postgrest.auth.assert_called_with("fresh")

    def test_sign_in_failure(self, supabase_client):
        supabase_client.client.auth.sign_in_with_password.side_effect = Exception("Invalid login credentials")
        with pytest.raises(AuthenticationError, match="Invalid login credentials"):
            supabase_client.sign_in("host@example.com", "wrong")

    def test_get_user(self, supabase_client):
        user = Mock(id="user-1", email="host@example.com")
        supabase_client.client.auth.get_user.return_value = Mock(user=user)

        assert supabase_client.get_user("token") == {"id": "user-1", "email": "host@example.com"}
        supabase_client.client.auth.get_user.assert_called_once_with("token")

    def test_get_user_rejected(self, supabase_client):
        supabase_client.client.auth.get_user.side_effect = Exception("invalid JWT")
        with pytest.raises(AuthenticationError):
            supabase_client.get_user("expired")


class TestRooms:

    def test_get_user_rooms(self, supabase_client):
        table = _mock_table(supabase_client.client, [
            {"id": "a1", "user_id": "user-1", "room_id": "101", "room_name": "Studio"},
        ])

        rooms = supabase_client.get_user_rooms("user-1")

        assert rooms == [UserRoom("a1", "user-1", "101", "Studio")]
        supabase_client.client.table.assert_called_with("user_rooms")
        table.eq.assert_called_with("user_id", "user-1")

    def test_get_user_rooms_without_user(self, supabase_client):
        assert supabase_client.get_user_rooms(None) == []
        supabase_client.client.table.assert_not_called()

    def test_add_user_room(self, supabase_client):
        table = _mock_table(supabase_client.client, [
            {"id": "a2", "user_id": "user-1", "room_id": "102", "room_name": "Loft"},
        ])

        room = supabase_client.add_user_room("user-1", "102", "Loft")

        table.insert.assert_called_once_with({"user_id": "user-1", "room_id": "102", "room_name": "Loft"})
        assert room.id == "a2"

    def test_add_duplicate_room(self, supabase_client):
        table = _mock_table(supabase_client.client)
        table.execute.side_effect = _postgrest_error("23505")

        with pytest.raises(DuplicateRoomError, match='Room "102" is already added.'):
            supabase_client.add_user_room("user-1", "102", "Loft")

    def test_add_room_other_failure(self, supabase_client):
        table = _mock_table(supabase_client.client)
        table.execute.side_effect = _postgrest_error("42501")

        with pytest.raises(BackendError):
            supabase_client.add_user_room("user-1", "102", "Loft")

    def test_delete_user_room(self, supabase_client):
        table = _mock_table(supabase_client.client)

        assert supabase_client.delete_user_room("a2") is True
        table.delete.assert_called_once()
        table.eq.assert_called_with("id", "a2")


class TestProfiles:

    def test_get_profile(self, supabase_client):
        _mock_table(supabase_client.client, [{"id": "user-1", "first_name": "Ana", "role": "admin"}])

        profile = supabase_client.get_profile("user-1")

        assert profile == UserProfile(id="user-1", first_name="Ana", role="admin")

    def test_get_profile_missing(self, supabase_client):
        _mock_table(supabase_client.client, [])
        assert supabase_client.get_profile("user-1") is None

    def test_get_profile_no_rows_error(self, supabase_client):
        table = _mock_table(supabase_client.client)
        table.execute.side_effect = _postgrest_error("PGRST116")
        assert supabase_client.get_profile("user-1") is None

    def test_update_profile_never_writes_id_or_role(self, supabase_client):
        table = _mock_table(supabase_client.client, [{"id": "user-1", "first_name": "Ana"}])

        supabase_client.update_profile("user-1", {"first_name": "Ana", "role": "admin", "id": "other"})

        table.update.assert_called_once_with({"first_name": "Ana"})
        table.eq.assert_called_with("id", "user-1")

    def test_update_profile_without_fields(self, supabase_client):
        with pytest.raises(ValueError):
            supabase_client.update_profile("user-1", {"role": "admin"})

    @pytest.mark.parametrize("rows,expected", [
        ([{"id": "user-1", "role": "admin"}], True),
        ([{"id": "user-1", "role": "user"}], False),
        ([], False),
    ])
    def test_is_admin(self, supabase_client, rows, expected):
        _mock_table(supabase_client.client, rows)
        assert supabase_client.is_admin("user-1") is expected
