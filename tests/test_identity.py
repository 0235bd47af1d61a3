import datetime

import jwt

from promptduel.services.identity import StaticIdentity, issue_session_token, resolve_user_id

SECRET = 'test-jwt-secret'


def test_token_round_trip():
    token = issue_session_token('user-1', SECRET)
    assert resolve_user_id(token, SECRET) == 'user-1'


def test_wrong_secret_is_anonymous():
    token = issue_session_token('user-1', SECRET)
    assert resolve_user_id(token, 'other-secret') is None


def test_expired_token_is_anonymous():
    past = datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(days=2)
    token = jwt.encode({'user_id': 'user-1', 'iat': past, 'exp': past + datetime.timedelta(days=1)},
                       SECRET, algorithm='HS256')
    assert resolve_user_id(token, SECRET) is None


def test_missing_token_or_secret():
    assert resolve_user_id(None, SECRET) is None
    assert resolve_user_id('garbage', SECRET) is None
    assert resolve_user_id(issue_session_token('user-1', SECRET), None) is None


def test_static_identity():
    assert StaticIdentity('user-9').get_current_user_id() == 'user-9'
    assert StaticIdentity().get_current_user_id() is None
