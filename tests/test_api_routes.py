"""
Tests for the public API (v1) and API key authentication.
"""

from saveit.repositories.api_key_repository import ApiKeyRepository
from saveit.repositories.bookmark_repository import BookmarkRepository
from saveit.services.auth_service import ApiKeyService, hash_key


def bearer(key):
    return {'Authorization': f'Bearer {key}'}


class TestApiKeyAuthentication:
    """Requests without a usable API key never reach the handler"""

    def test_missing_header(self, client):
        response = client.get('/api/v1/bookmarks')

        assert response.status_code == 401
        result = response.get_json()
        assert result['error'] == 'Missing authorization header'
        assert result['error_code'] == 'UNAUTHORIZED'

    def test_wrong_scheme(self, client, pro_api_key):
        response = client.get('/api/v1/bookmarks', headers={'Authorization': f'Basic {pro_api_key}'})

        assert response.status_code == 401
        assert response.get_json()['error'] == 'Invalid authorization header format'

    def test_unknown_key(self, client, pro_api_key):
        response = client.get('/api/v1/bookmarks', headers=bearer('saveit_not-a-real-key'))

        assert response.status_code == 401
        assert response.get_json()['error'] == 'Invalid API key'

    def test_deleted_key(self, client, db_session, pro_api_key):
        repo = ApiKeyRepository(db_session)
        api_key = repo.get_by_hash(hash_key(pro_api_key))
        assert repo.soft_delete(api_key.id) is True

        response = client.get('/api/v1/bookmarks', headers=bearer(pro_api_key))

        assert response.status_code == 401
        assert response.get_json()['error'] == 'API key has been deleted'

    def test_free_plan_is_forbidden(self, client, db_session, user):
        key = ApiKeyService(db_session).create_api_key(user.id, 'free key').plaintext_key

        response = client.get('/api/v1/bookmarks', headers=bearer(key))

        assert response.status_code == 403
        result = response.get_json()
        assert result['error'] == 'Pro plan required'
        assert result['error_code'] == 'FORBIDDEN'

    def test_session_cookie_is_not_enough(self, authenticated_client):
        response = authenticated_client.get('/api/v1/bookmarks')

        assert response.status_code == 401

    def test_only_hash_is_stored(self, db_session, user):
        result = ApiKeyService(db_session).create_api_key(user.id, 'CLI')

        stored = ApiKeyRepository(db_session).get_by_hash(hash_key(result.plaintext_key))
        assert stored.id == result.key_id
        assert stored.key_hash != result.plaintext_key
        assert result.plaintext_key.startswith('saveit_')


class TestApiBookmarks:
    """Tests for /api/v1/bookmarks"""

    def test_create_and_list(self, client, pro_api_key, user):
        response = client.post(
            '/api/v1/bookmarks',
            json={'url': 'https://example.com/post?fbclid=1'},
            headers=bearer(pro_api_key)
        )

        assert response.status_code == 200
        result = response.get_json()
        assert result['success'] is True
        assert result['bookmark']['url'] == 'https://example.com/post'

        response = client.get('/api/v1/bookmarks', headers=bearer(pro_api_key))

        result = response.get_json()
        assert result['success'] is True
        assert [b['url'] for b in result['bookmarks']] == ['https://example.com/post']
        assert result['hasMore'] is False

    def test_invalid_url(self, client, db_session, pro_api_key, user):
        response = client.post('/api/v1/bookmarks', json={'url': 'nope'}, headers=bearer(pro_api_key))

        assert response.status_code == 400
        assert response.get_json()['details'][0]['field'] == 'url'
        assert BookmarkRepository(db_session).count_by_user(user.id) == 0

    def test_special_must_be_known(self, client, pro_api_key):
        response = client.get('/api/v1/bookmarks?special=BOGUS', headers=bearer(pro_api_key))

        assert response.status_code == 400
        assert response.get_json()['details'][0]['field'] == 'special'

    def test_api_limit_allows_up_to_100(self, client, pro_api_key):
        assert client.get('/api/v1/bookmarks?limit=100', headers=bearer(pro_api_key)).status_code == 200
        assert client.get('/api/v1/bookmarks?limit=101', headers=bearer(pro_api_key)).status_code == 400
