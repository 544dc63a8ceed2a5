# jobs/tests/utils.py
from importlib import import_module
from unittest import mock

from django.conf import settings

from accounts.session import SESSION_AUTH_KEY, SESSION_USER_KEY
from jobs.api import JobRole, JobRolePage, JobRoleSummary, PageMeta


def log_in(client, role='Applicant', **user):
    """Put a logged-in user straight into the client's signed session cookie."""
    store = import_module(settings.SESSION_ENGINE).SessionStore()
    store[SESSION_AUTH_KEY] = True
    store[SESSION_USER_KEY] = {
        'user_id': '1',
        'email': 'jane@example.com',
        'forename': 'Jane',
        'surname': 'Doe',
        'role': role,
        **user,
    }
    store.save()
    client.cookies[settings.SESSION_COOKIE_NAME] = store.session_key


def make_job_role(**overrides):
    fields = dict(
        job_role_id=5,
        role_name='Software Engineer',
        location='Belfast, Northern Ireland',
        capability='Engineering',
        band='Mid',
        closing_date='2099-12-31',
        status='Open',
        number_of_open_positions=2,
        description='Builds and maintains services.',
        responsibilities='Write code and review pull requests.',
        job_spec_link='https://example.com/spec',
    )
    fields.update(overrides)
    return JobRole(**fields)


def make_page(roles=None, current_page=1, total_pages=1, limit=12, has_next=False):
    roles = roles if roles is not None else [
        JobRoleSummary(1, 'Data Analyst', 'Remote', 'Analytics', 'Junior', '2099-01-01', 'Open', 1),
    ]
    return JobRolePage(
        job_roles=roles,
        pagination=PageMeta(
            current_page=current_page,
            total_pages=total_pages,
            total_count=len(roles),
            limit=limit,
            has_next=has_next,
            has_previous=current_page > 1,
        ),
    )


def fake_response(status=200, body=None, headers=None, content=b''):
    response = mock.Mock()
    response.status_code = status
    response.ok = status < 400
    response.headers = headers or {}
    response.content = content
    if body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response
