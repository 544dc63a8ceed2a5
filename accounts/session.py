# accounts/session.py
"""
The logged-in user lives in the session as a plain dict under SESSION_USER_KEY
(signed-cookie sessions, no user table). Code that needs to know who is asking
takes an Actor computed here instead of reading the session itself.
"""
import enum

SESSION_AUTH_KEY = 'is_authenticated'
SESSION_USER_KEY = 'user'
SESSION_REDIRECT_KEY = 'redirect_url'
SESSION_LOGIN_SUCCESS_KEY = 'login_success'

ADMIN_ROLE = 'Admin'


class Actor(enum.Enum):
    ANONYMOUS = 'anonymous'
    MEMBER = 'member'
    ADMIN = 'admin'

    @property
    def is_authenticated(self):
        return self is not Actor.ANONYMOUS

    @property
    def is_admin(self):
        return self is Actor.ADMIN


def current_user(session):
    if not session.get(SESSION_AUTH_KEY):
        return None
    return session.get(SESSION_USER_KEY) or None


def actor_from_session(session) -> Actor:
    user = current_user(session)
    if not user:
        return Actor.ANONYMOUS
    # older backend builds send user_type instead of role
    if user.get('role') == ADMIN_ROLE or user.get('user_type') == ADMIN_ROLE:
        return Actor.ADMIN
    return Actor.MEMBER


def start_session(request, user):
    """Store the backend's user payload; cycles the session key against fixation."""
    request.session.cycle_key()
    request.session[SESSION_AUTH_KEY] = True
    request.session[SESSION_USER_KEY] = {
        'user_id': str(user.get('userId') or user.get('id') or ''),
        'email': user.get('email', ''),
        'forename': user.get('forename', ''),
        'surname': user.get('surname', ''),
        'role': user.get('role') or user.get('user_type') or '',
    }
