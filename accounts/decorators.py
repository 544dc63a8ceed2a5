# accounts/decorators.py
from functools import wraps

from django.http import JsonResponse
from django.shortcuts import redirect, render

from .session import SESSION_REDIRECT_KEY, actor_from_session


def _wants_json(request):
    return (
        request.headers.get('x-requested-with') == 'XMLHttpRequest'
        or 'application/json' in request.headers.get('accept', '')
    )


def _login_redirect(request):
    request.session[SESSION_REDIRECT_KEY] = request.get_full_path()
    if _wants_json(request):
        return JsonResponse({
            'error': 'Authentication required',
            'message': 'Please log in to access this resource',
            'redirectUrl': '/login/',
        }, status=401)
    return redirect('/login/?error=auth_required')


def login_required(view_func):
    """Any logged-in user (Admin or Applicant)."""
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not actor_from_session(request.session).is_authenticated:
            return _login_redirect(request)
        return view_func(request, *args, **kwargs)
    return _wrapped


def admin_required(view_func):
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        actor = actor_from_session(request.session)
        if not actor.is_authenticated:
            return _login_redirect(request)
        if not actor.is_admin:
            if _wants_json(request):
                return JsonResponse({
                    'error': 'Access forbidden',
                    'message': 'Admin access required for this resource',
                }, status=403)
            return render(request, 'error.html', {
                'message': 'Access Forbidden: Admin privileges required to access this resource.',
            }, status=403)
        return view_func(request, *args, **kwargs)
    return _wrapped
