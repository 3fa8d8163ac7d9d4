"""
Storage Tests

Tests for the key-value stores and the UserStore view over them: user list
persistence, the session pointer and login attempt records, including how
damaged data is read.

Run with: pytest tests/test_storage.py -v
"""

import json

import pytest

from hub.storage import JsonFileStore, MemoryStore, UserStore
from models.user import User, LoginAttemptRecord


class TestMemoryStore:
    """Test the dict-backed store."""

    def test_missing_key_is_none(self, store):
        assert store.get('nothing') is None

    def test_set_replaces_value(self, store):
        store.set('k', 'a')
        store.set('k', 'b')
        assert store.get('k') == 'b'
        assert store.write_count == 2

    def test_remove_missing_key_is_ignored(self, store):
        """Removing an absent key neither raises nor counts as a write."""
        store.remove('nothing')
        assert store.write_count == 0

    def test_initial_data(self):
        store = MemoryStore({'currentUser': 'bob'})
        assert store.get('currentUser') == 'bob'
        assert store.keys() == ['currentUser']


class TestJsonFileStore:
    """Test the JSON file store."""

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / 'nested' / 'profile.json'
        JsonFileStore(path).set('currentUser', 'alice')

        assert path.exists()
        assert JsonFileStore(path).get('currentUser') == 'alice'

    def test_remove_persists(self, tmp_path):
        path = tmp_path / 'profile.json'
        store = JsonFileStore(path)
        store.set('a', '1')
        store.remove('a')

        assert JsonFileStore(path).get('a') is None

    def test_corrupted_file_starts_empty(self, tmp_path, quiet_logging):
        path = tmp_path / 'profile.json'
        path.write_text('{not json', encoding='utf-8')

        store = JsonFileStore(path)
        assert store.get('users') is None

    def test_non_object_file_starts_empty(self, tmp_path, quiet_logging):
        path = tmp_path / 'profile.json'
        path.write_text('[1, 2, 3]', encoding='utf-8')

        assert JsonFileStore(path).get('users') is None


class TestUserList:
    """Test reading and writing the users list."""

    def test_empty_store_has_no_users(self, users):
        assert users.list_users() == []

    def test_save_and_list(self, users):
        users.save_users([User(username='alice', password='pw')])

        listed = users.list_users()
        assert len(listed) == 1
        assert listed[0].username == 'alice'
        assert listed[0].score == 0
        assert listed[0].games_played == 0

    def test_persisted_with_camel_case_key(self, users, store):
        """Stored records use the gamesPlayed key."""
        users.save_users([User(username='alice', password='pw', score=3, games_played=1)])

        records = json.loads(store.get('users'))
        assert records == [{'username': 'alice', 'password': 'pw', 'score': 3, 'gamesPlayed': 1}]

    def test_missing_stats_default_to_zero(self, store, users):
        store.set('users', json.dumps([{'username': 'bob', 'password': 'x'}]))

        bob = users.list_users()[0]
        assert bob.score == 0
        assert bob.games_played == 0

    def test_null_stats_read_as_zero(self, store, users):
        store.set('users', json.dumps([
            {'username': 'bob', 'password': 'x', 'score': None, 'gamesPlayed': None},
            {'username': 'carol', 'password': 'y', 'score': 7, 'gamesPlayed': 2},
        ]))

        bob, carol = users.list_users()
        assert (bob.score, bob.games_played) == (0, 0)
        assert (carol.score, carol.games_played) == (7, 2)

    @pytest.mark.parametrize('raw', [
        'not json at all',
        '{"username": "bob"}',
        '[{"username": "bob"}]',
        '[{"username": "bob", "password": "x", "score": -4}]',
    ])
    def test_damaged_data_reads_as_empty(self, store, users, raw, quiet_logging):
        """Bad JSON, wrong shape or invalid fields degrade to no users."""
        store.set('users', raw)
        assert users.list_users() == []

    def test_find_user_is_case_sensitive(self, users):
        users.save_users([User(username='Alice', password='pw')])

        assert users.find_user('Alice') is not None
        assert users.find_user('alice') is None
        assert users.find_user(None) is None


class TestSessionPointer:
    """Test the currentUser key."""

    def test_set_get_clear(self, users, store):
        assert users.get_current_user() is None

        users.set_current_user('alice')
        assert users.get_current_user() == 'alice'
        assert store.get('currentUser') == 'alice'

        users.clear_current_user()
        assert users.get_current_user() is None


class TestAttemptRecords:
    """Test per-username attempt and lock keys."""

    def test_fresh_record(self, users):
        record = users.get_attempt_record('alice')
        assert record.attempts == 0
        assert record.lock_until is None

    def test_save_and_read(self, users, store):
        users.save_attempt_record('alice', LoginAttemptRecord(attempts=3, lock_until=5000))

        assert store.get('attempts_alice') == '3'
        assert store.get('lock_alice') == '5000'
        record = users.get_attempt_record('alice')
        assert record.attempts == 3
        assert record.lock_until == 5000

    def test_saving_without_lock_removes_lock_key(self, users, store):
        users.save_attempt_record('alice', LoginAttemptRecord(attempts=3, lock_until=5000))
        users.save_attempt_record('alice', LoginAttemptRecord(attempts=1))

        assert store.get('lock_alice') is None

    def test_clear(self, users, store):
        users.save_attempt_record('alice', LoginAttemptRecord(attempts=2))
        users.clear_attempt_record('alice')

        assert store.get('attempts_alice') is None
        assert users.get_attempt_record('alice').attempts == 0

    def test_unparsable_numbers_are_absent(self, store, users):
        store.set('attempts_alice', 'many')
        store.set('lock_alice', 'soon')

        record = users.get_attempt_record('alice')
        assert record.attempts == 0
        assert record.lock_until is None

    def test_records_are_per_username(self, users):
        users.save_attempt_record('alice', LoginAttemptRecord(attempts=2))
        assert users.get_attempt_record('bob').attempts == 0


class TestUserModel:
    """Test the User and LoginAttemptRecord models."""

    def test_populate_by_alias_or_name(self):
        assert User.model_validate({'username': 'a', 'password': 'b', 'gamesPlayed': 4}).games_played == 4
        assert User(username='a', password='b', games_played=4).games_played == 4

    def test_lock_window(self):
        record = LoginAttemptRecord(attempts=3, lock_until=1000)

        assert record.is_locked(999)
        assert not record.is_expired(999)
        assert not record.is_locked(1000)
        assert record.is_expired(1000)

    def test_unlocked_record_never_expires(self):
        record = LoginAttemptRecord(attempts=1)
        assert not record.is_locked(0)
        assert not record.is_expired(10 ** 15)
