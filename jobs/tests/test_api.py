# jobs/tests/test_api.py
from unittest import mock

import requests
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase

from jobs.api import (
    ApplicationService,
    BackendError,
    BackendUnavailable,
    JobRoleService,
    job_role_payload,
)
from jobs.constants import DEFAULT_JOB_ROLE_OPTIONS
from jobs.pagination import SearchParams

from .utils import fake_response

BASE = 'http://api.test'

ROLE = {
    'id': 3,
    'jobRoleName': 'Platform Engineer',
    'location': 'Remote',
    'capability': 'Engineering',
    'band': 'Senior',
    'closingDate': '2099-06-30',
    'status': 'on hold',
    'numberOfOpenPositions': 2,
    'description': 'Runs the platform.',
    'responsibilities': 'Keep it running.',
    'jobSpecLink': 'https://example.com/spec',
}

PAGINATION = {
    'currentPage': 2, 'totalPages': 4, 'totalCount': 40, 'limit': 12, 'hasNext': True, 'hasPrevious': True,
}


class JobRoleServiceTest(SimpleTestCase):
    def setUp(self):
        self.session = mock.Mock()
        self.service = JobRoleService(base_url=BASE + '/', timeout=5, session=self.session)

    def respond(self, *responses):
        self.session.request.side_effect = list(responses)

    def test_list_maps_fields_and_normalises_status(self):
        self.respond(fake_response(200, {'success': True, 'data': {'jobRoles': [ROLE], 'pagination': PAGINATION}}))
        page = self.service.list_job_roles(page=2, limit=12)

        self.session.request.assert_called_once_with(
            'GET', BASE + '/api/job-roles', params={'page': 2, 'limit': 12}, timeout=5,
        )
        role = page.job_roles[0]
        self.assertEqual(role.job_role_id, 3)
        self.assertEqual(role.role_name, 'Platform Engineer')
        self.assertEqual(role.status, 'Closed')
        self.assertEqual(page.pagination.total_pages, 4)
        self.assertTrue(page.pagination.has_next)

    def test_search_sends_only_filters(self):
        self.respond(fake_response(200, {'success': True, 'data': {'jobRoles': [], 'pagination': {}}}))
        self.service.search_job_roles(SearchParams(search='dev', band='  ', page=1, limit=12))
        _, kwargs = self.session.request.call_args
        self.assertEqual(kwargs['params'], {'page': 1, 'limit': 12, 'search': 'dev'})

    def test_detail_keeps_status_and_missing_is_none(self):
        self.respond(fake_response(200, {'success': True, 'data': ROLE}), fake_response(404, {'message': 'nope'}))
        role = self.service.get_job_role(3)
        self.assertEqual(role.status, 'on hold')
        self.assertEqual(role.job_spec_link, 'https://example.com/spec')
        self.assertIsNone(self.service.get_job_role(99))

    def test_error_message_from_body(self):
        self.respond(fake_response(500, {'message': 'database down'}))
        with self.assertRaises(BackendError) as ctx:
            self.service.list_job_roles()
        self.assertEqual(ctx.exception.message, 'database down')
        self.assertEqual(ctx.exception.status_code, 500)

    def test_connection_error_is_unavailable(self):
        self.session.request.side_effect = requests.ConnectionError('refused')
        with self.assertRaises(BackendUnavailable):
            self.service.get_job_role(1)

    def test_timeout_is_unavailable(self):
        self.session.request.side_effect = requests.Timeout()
        with self.assertRaises(BackendUnavailable):
            self.service.list_job_roles()

    def test_create_posts_payload(self):
        self.respond(fake_response(201, {'success': True, 'data': ROLE}))
        payload = job_role_payload('Platform Engineer', 'd', 'r', 'https://x.io', 'Remote',
                                   'Engineering', 'Senior', '2099-06-30', 'Open', 2)
        role = self.service.create_job_role(payload)
        self.assertEqual(role.job_role_id, 3)
        _, kwargs = self.session.request.call_args
        self.assertEqual(kwargs['json']['jobRoleName'], 'Platform Engineer')
        self.assertEqual(kwargs['json']['numberOfOpenPositions'], 2)

    def test_update_missing_raises_404(self):
        self.respond(fake_response(404, {}))
        with self.assertRaises(BackendError) as ctx:
            self.service.update_job_role(3, {})
        self.assertEqual(ctx.exception.status_code, 404)

    def test_delete(self):
        self.respond(fake_response(204), fake_response(404, {}))
        self.assertTrue(self.service.delete_job_role(3))
        self.assertFalse(self.service.delete_job_role(4))

    def test_filter_options_fall_back(self):
        self.session.request.side_effect = requests.ConnectionError()
        self.assertIs(self.service.get_filter_options(DEFAULT_JOB_ROLE_OPTIONS), DEFAULT_JOB_ROLE_OPTIONS)

    def test_filter_options_from_backend(self):
        self.respond(
            fake_response(200, {'success': True, 'data': ['Engineering']}),
            fake_response(200, {'success': True, 'data': ['Remote']}),
            fake_response(200, {'success': True, 'data': []}),
        )
        options = self.service.get_filter_options(DEFAULT_JOB_ROLE_OPTIONS)
        self.assertEqual(options.capabilities, ('Engineering',))
        self.assertEqual(options.locations, ('Remote',))
        self.assertEqual(options.bands, DEFAULT_JOB_ROLE_OPTIONS.bands)

    def test_export_walks_every_page(self):
        first = dict(PAGINATION, currentPage=1, hasNext=True)
        last = dict(PAGINATION, currentPage=2, hasNext=False)
        self.respond(
            fake_response(200, {'success': True, 'data': {'jobRoles': [ROLE], 'pagination': first}}),
            fake_response(200, {'success': True, 'data': {'jobRoles': [ROLE], 'pagination': last}}),
        )
        roles = self.service.get_all_job_roles_for_export()
        self.assertEqual(len(roles), 2)
        pages = [c.kwargs['params']['page'] for c in self.session.request.call_args_list]
        self.assertEqual(pages, [1, 2])


class ApplicationServiceTest(SimpleTestCase):
    def setUp(self):
        self.session = mock.Mock()
        self.service = ApplicationService(base_url=BASE, timeout=5, session=self.session)

    def test_submit_sends_multipart(self):
        self.session.request.return_value = fake_response(201, {'success': True, 'data': {
            'id': 11, 'jobRoleId': 3, 'applicantName': 'Jane Doe', 'applicantEmail': 'jane@example.com',
            'status': 'pending', 'submittedAt': '2025-01-01T10:00:00Z',
        }})
        cv = SimpleUploadedFile('cv.pdf', b'%PDF-1.4', content_type='application/pdf')
        application = self.service.submit_application(3, 'Jane Doe', 'jane@example.com', None, cv)

        self.assertEqual(application.application_id, 11)
        args, kwargs = self.session.request.call_args
        self.assertEqual(args, ('POST', BASE + '/api/applications'))
        self.assertEqual(kwargs['data'], {'jobRoleId': '3', 'applicantName': 'Jane Doe',
                                          'applicantEmail': 'jane@example.com'})
        self.assertEqual(kwargs['files']['cv'], ('cv.pdf', b'%PDF-1.4', 'application/pdf'))

    def test_submit_failure_includes_status(self):
        self.session.request.return_value = fake_response(400, {'message': 'Duplicate application'})
        cv = SimpleUploadedFile('cv.pdf', b'x', content_type='application/pdf')
        with self.assertRaises(BackendError) as ctx:
            self.service.submit_application(3, 'Jane Doe', 'jane@example.com', 'Hi', cv)
        self.assertEqual(ctx.exception.message, 'Backend API error (400): Duplicate application')

    def test_applicants_are_paged_locally(self):
        apps = [{'id': i, 'jobRoleId': 3, 'applicantName': f'A{i}', 'applicantEmail': 'a@example.com',
                 'status': 'pending', 'submittedAt': '', 'jobRole': {'id': 3, 'jobRoleName': 'Tester'}}
                for i in range(1, 26)]
        self.session.request.return_value = fake_response(200, {'success': True, 'data': apps})
        result = self.service.get_applicants(3, page=2, limit=10)

        self.assertEqual([a.application_id for a in result.applicants], list(range(11, 21)))
        self.assertEqual(result.pagination.total_pages, 3)
        self.assertTrue(result.pagination.has_next)
        self.assertTrue(result.pagination.has_previous)
        self.assertEqual(result.job_role['role_name'], 'Tester')

    def test_download_cv(self):
        self.session.request.return_value = fake_response(
            200,
            headers={'Content-Disposition': 'attachment; filename="jane.pdf"', 'Content-Type': 'application/pdf'},
            content=b'%PDF',
        )
        cv = self.service.download_cv(11)
        self.assertEqual((cv.file_name, cv.mime_type, cv.content), ('jane.pdf', 'application/pdf', b'%PDF'))

    def test_download_cv_missing(self):
        self.session.request.return_value = fake_response(404)
        with self.assertRaises(BackendError) as ctx:
            self.service.download_cv(11)
        self.assertEqual(ctx.exception.message, 'CV not found')

    def test_set_status(self):
        self.session.request.return_value = fake_response(200, {'success': True, 'data': {'id': 11}})
        self.service.set_applicant_status(11, 'accepted', 'Great fit')
        self.session.request.assert_called_once_with(
            'PUT', BASE + '/api/applications/11', json={'status': 'accepted', 'reason': 'Great fit'}, timeout=5,
        )
