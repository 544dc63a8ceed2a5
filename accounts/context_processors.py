# accounts/context_processors.py
from .session import SESSION_LOGIN_SUCCESS_KEY, actor_from_session, current_user


def auth(request):
    """Login state for every template (navigation, admin links, flash message)."""
    session = getattr(request, 'session', None)
    if session is None:
        return {}
    actor = actor_from_session(session)
    return {
        'actor': actor,
        'is_authenticated': actor.is_authenticated,
        'is_admin': actor.is_admin,
        'current_user': current_user(session),
        'login_success': session.pop(SESSION_LOGIN_SUCCESS_KEY, None),
    }
