"""
Tests for the safe-route request pipeline.

Registers small probe routes on the testing app and checks that handlers
only run with an authenticated user and valid input.
"""

import pytest
from flask import Blueprint
from pydantic import BaseModel, Field

from saveit.exceptions import ApplicationError, StoreUnavailable
from saveit.safe_route import RouteClient, user_route


class VersionBody(BaseModel):
    version: str = Field(..., min_length=1)


class PageQuery(BaseModel):
    page: int = Field(1, ge=1)


class ItemParams(BaseModel):
    item_id: int


class EchoResponse(BaseModel):
    user_id: str
    version: str


@pytest.fixture
def calls():
    return []


@pytest.fixture
def probe_client(app, client, calls):
    """Client for an app with probe routes that record every handler call."""
    bp = Blueprint('probe', __name__)

    @bp.route('/probe/body', methods=['POST'])
    @user_route.body(VersionBody).handler
    def probe_body(request, args):
        calls.append(args)
        return {'version': args.body.version, 'userId': args.ctx.user.id}

    @bp.route('/probe/items/<item_id>', methods=['GET'])
    @user_route.params(ItemParams).query(PageQuery).handler
    def probe_items(request, args):
        calls.append(args)
        return {'itemId': args.params.item_id, 'page': args.query.page}

    @bp.route('/probe/model', methods=['POST'])
    @user_route.body(VersionBody).handler
    def probe_model(request, args):
        return EchoResponse(user_id=args.ctx.user.id, version=args.body.version)

    @bp.route('/probe/app-error', methods=['GET'])
    @user_route.handler
    def probe_app_error(request, args):
        raise ApplicationError('Nope', 'SOME_RULE')

    @bp.route('/probe/store-error', methods=['GET'])
    @user_route.handler
    def probe_store_error(request, args):
        raise StoreUnavailable('redis://secret-host:6379 refused')

    @bp.route('/probe/crash', methods=['GET'])
    @user_route.handler
    def probe_crash(request, args):
        raise RuntimeError('internal detail')

    @bp.route('/probe/empty', methods=['DELETE'])
    @user_route.handler
    def probe_empty(request, args):
        return None

    app.register_blueprint(bp)
    return client


@pytest.fixture
def signed_in(probe_client, user):
    with probe_client.session_transaction() as sess:
        sess['user_id'] = user.id
    return probe_client


class TestAuthentication:
    """Requests without a valid session never reach the handler"""

    def test_missing_session_is_unauthorized(self, probe_client, calls):
        response = probe_client.post('/probe/body', json={'version': '2.0'})

        assert response.status_code == 401
        result = response.get_json()
        assert result['success'] is False
        assert result['error_code'] == 'UNAUTHORIZED'
        assert calls == []

    def test_session_for_unknown_user_is_unauthorized(self, probe_client, calls):
        with probe_client.session_transaction() as sess:
            sess['user_id'] = 'does-not-exist'

        response = probe_client.post('/probe/body', json={'version': '2.0'})

        assert response.status_code == 401
        assert calls == []

    def test_authentication_runs_before_validation(self, probe_client, calls):
        response = probe_client.post('/probe/body', json={})

        assert response.status_code == 401
        assert response.get_json()['error_code'] == 'UNAUTHORIZED'
        assert calls == []


class TestValidation:
    """Requests failing a declared schema never reach the handler"""

    def test_invalid_body_reports_field(self, signed_in, calls):
        response = signed_in.post('/probe/body', json={'version': ''})

        assert response.status_code == 400
        result = response.get_json()
        assert result['error_code'] == 'INVALID_INPUT'
        assert [issue['field'] for issue in result['details']] == ['version']
        assert result['details'][0]['message']
        assert calls == []

    def test_missing_body_field(self, signed_in, calls):
        response = signed_in.post('/probe/body', json={'other': 1})

        assert response.status_code == 400
        assert response.get_json()['details'][0]['field'] == 'version'
        assert calls == []

    def test_non_json_body(self, signed_in, calls):
        response = signed_in.post('/probe/body', data='version=2.0')

        assert response.status_code == 400
        assert response.get_json()['details'][0]['field'] == 'body'
        assert calls == []

    def test_json_array_body(self, signed_in, calls):
        response = signed_in.post('/probe/body', json=['2.0'])

        assert response.status_code == 400
        assert response.get_json()['details'][0]['field'] == 'body'

    def test_all_failing_sources_are_reported(self, signed_in, calls):
        response = signed_in.get('/probe/items/abc?page=0')

        assert response.status_code == 400
        fields = {issue['field'] for issue in response.get_json()['details']}
        assert fields == {'item_id', 'page'}
        assert calls == []

    def test_valid_input_is_typed(self, signed_in, calls):
        response = signed_in.get('/probe/items/7?page=3')

        assert response.status_code == 200
        assert response.get_json() == {'itemId': 7, 'page': 3}
        assert isinstance(calls[0].params.item_id, int)
        assert calls[0].body is None


class TestHandlerResults:
    """Handler return values and errors become responses"""

    def test_handler_receives_user_and_body(self, signed_in, calls, user):
        response = signed_in.post('/probe/body', json={'version': '2.0'})

        assert response.status_code == 200
        assert response.get_json() == {'version': '2.0', 'userId': user.id}
        assert calls[0].ctx.user.id == user.id
        assert calls[0].query is None

    def test_pydantic_model_is_serialized(self, signed_in, user):
        response = signed_in.post('/probe/model', json={'version': '1.1'})

        assert response.get_json() == {'user_id': user.id, 'version': '1.1'}

    def test_none_is_no_content(self, signed_in):
        response = signed_in.delete('/probe/empty')

        assert response.status_code == 204

    def test_application_error_is_bad_request(self, signed_in):
        response = signed_in.get('/probe/app-error')

        assert response.status_code == 400
        result = response.get_json()
        assert result['error'] == 'Nope'
        assert result['error_code'] == 'SOME_RULE'

    def test_store_error_does_not_leak_details(self, signed_in):
        response = signed_in.get('/probe/store-error')

        assert response.status_code == 503
        result = response.get_json()
        assert result['error_code'] == 'STORE_UNAVAILABLE'
        assert 'secret-host' not in response.get_data(as_text=True)

    def test_unexpected_error_is_generic(self, signed_in):
        response = signed_in.get('/probe/crash')

        assert response.status_code == 500
        assert response.get_json()['error'] == 'An unexpected error occurred'
        assert 'internal detail' not in response.get_data(as_text=True)


class TestRouteClientBuilder:
    """Builder calls return new clients"""

    def test_builder_is_immutable(self):
        with_body = user_route.body(VersionBody)

        assert with_body is not user_route
        assert user_route.body_schema is None
        assert with_body.body_schema is VersionBody
        assert with_body.middlewares == user_route.middlewares

    def test_use_appends_middleware(self, app, client):
        seen = []

        def first(request, ctx):
            return {'user': 'someone'}

        def second(request, ctx):
            seen.append(dict(ctx))
            return {}

        route = RouteClient().use(first).use(second)

        @app.route('/probe/middleware')
        @route.handler
        def probe_middleware(request, args):
            return {'user': args.ctx.user}

        response = client.get('/probe/middleware')

        assert response.get_json() == {'user': 'someone'}
        assert seen == [{'user': 'someone'}]
