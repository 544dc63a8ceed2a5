# jobs/api.py
"""
Client for the backend REST API that owns job roles and applications.

The backend wraps payloads as {"success": bool, "data": ...} and names the job
role fields differently (id / jobRoleName); everything is mapped to the view
models below before it reaches a view.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

import requests
from django.conf import settings

from .constants import STATUS_OPEN, JobRoleOptions
from .pagination import SearchParams

logger = logging.getLogger(__name__)

EXPORT_PAGE_SIZE = 100
EXPORT_MAX_PAGES = 1000


class BackendError(Exception):
    """The backend answered with an error, or could not be reached."""

    def __init__(self, message, status_code=None, details=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or []


class BackendUnavailable(BackendError):
    pass


# -------------------------
# View models
# -------------------------
@dataclass
class JobRoleSummary:
    job_role_id: int
    role_name: str
    location: str
    capability: str
    band: str
    closing_date: str
    status: str
    number_of_open_positions: int = 0


@dataclass
class JobRole(JobRoleSummary):
    description: str = ''
    responsibilities: str = ''
    job_spec_link: str = ''

    @property
    def is_accepting_applications(self):
        return self.number_of_open_positions > 0 and (self.status or '').lower() == 'open'


@dataclass
class PageMeta:
    current_page: int
    total_pages: int
    total_count: int
    limit: int
    has_next: bool
    has_previous: bool


@dataclass
class JobRolePage:
    job_roles: List[JobRoleSummary]
    pagination: PageMeta


@dataclass
class Application:
    application_id: int
    job_role_id: int
    applicant_name: str
    applicant_email: str
    status: str
    submitted_at: str
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class ApplicantsPage:
    applicants: List[Application]
    pagination: PageMeta
    job_role: dict = field(default_factory=dict)


@dataclass
class CvDownload:
    content: bytes
    file_name: str
    mime_type: str


def _listing_status(raw):
    return STATUS_OPEN if isinstance(raw, str) and raw.lower() == 'open' else 'Closed'


def _summary_from_backend(role):
    return JobRoleSummary(
        job_role_id=role['id'],
        role_name=role.get('jobRoleName', ''),
        location=role.get('location', ''),
        capability=role.get('capability', ''),
        band=role.get('band', ''),
        closing_date=role.get('closingDate', ''),
        status=_listing_status(role.get('status')),
        number_of_open_positions=role.get('numberOfOpenPositions') or 0,
    )


def _job_role_from_backend(role):
    return JobRole(
        job_role_id=role['id'],
        role_name=role.get('jobRoleName', ''),
        description=role.get('description', ''),
        responsibilities=role.get('responsibilities', ''),
        job_spec_link=role.get('jobSpecLink', ''),
        location=role.get('location', ''),
        capability=role.get('capability', ''),
        band=role.get('band', ''),
        closing_date=role.get('closingDate', ''),
        status=role.get('status', ''),
        number_of_open_positions=role.get('numberOfOpenPositions') or 0,
    )


def _application_from_backend(app):
    return Application(
        application_id=app['id'],
        job_role_id=app.get('jobRoleId'),
        applicant_name=app.get('applicantName', ''),
        applicant_email=app.get('applicantEmail', ''),
        status=app.get('status', ''),
        submitted_at=app.get('submittedAt', ''),
        cover_letter=app.get('coverLetter'),
        resume_url=app.get('resumeUrl'),
        updated_at=app.get('updatedAt'),
    )


def _page_meta(raw, page, limit):
    raw = raw or {}
    return PageMeta(
        current_page=raw.get('currentPage', page),
        total_pages=raw.get('totalPages', 0),
        total_count=raw.get('totalCount', 0),
        limit=raw.get('limit', limit),
        has_next=raw.get('hasNext', False),
        has_previous=raw.get('hasPrevious', False),
    )


def job_role_payload(role_name, description, responsibilities, job_spec_link, location,
                     capability, band, closing_date, status, number_of_open_positions):
    """Body for POST/PUT /api/job-roles in the backend's field names."""
    return {
        'jobRoleName': role_name,
        'description': description,
        'responsibilities': responsibilities,
        'jobSpecLink': job_spec_link,
        'location': location,
        'capability': capability,
        'band': band,
        'closingDate': closing_date,
        'status': status,
        'numberOfOpenPositions': number_of_open_positions,
    }


class BackendClient:
    def __init__(self, base_url=None, timeout=None, session=None):
        config = getattr(settings, 'BACKEND_API', {})
        self.base_url = (base_url or config.get('BASE_URL', 'http://localhost:8080')).rstrip('/')
        self.timeout = timeout if timeout is not None else config.get('TIMEOUT', 10)
        self.session = session or requests.Session()

    def _request(self, method, path, **kwargs):
        url = f"{self.base_url}{path}"
        kwargs.setdefault('timeout', self.timeout)
        try:
            return self.session.request(method, url, **kwargs)
        except requests.Timeout as e:
            logger.warning("Backend request timed out: %s %s", method, url)
            raise BackendUnavailable("Request timed out. The backend API may be slow or unresponsive.") from e
        except requests.ConnectionError as e:
            logger.warning("Backend unreachable: %s %s (%s)", method, url, e)
            raise BackendUnavailable(
                f"Unable to connect to the backend API. Please ensure the API server is running on {self.base_url}"
            ) from e
        except requests.RequestException as e:
            logger.warning("Backend request failed: %s %s (%s)", method, url, e)
            raise BackendError(str(e)) from e

    @staticmethod
    def _error_body(response):
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def _check(self, response, default_message):
        if response.ok:
            return
        body = self._error_body(response)
        message = body.get('message') or body.get('error') or default_message
        raise BackendError(message, status_code=response.status_code, details=body.get('details'))

    def _data(self, response, default_message):
        self._check(response, default_message)
        try:
            body = response.json()
        except ValueError as e:
            raise BackendError(f"{default_message}: invalid JSON from backend", response.status_code) from e
        if isinstance(body, dict) and body.get('success') is False:
            raise BackendError(body.get('message') or default_message, response.status_code)
        return body.get('data') if isinstance(body, dict) else body

    def ping(self):
        """Used by the health endpoint; returns the backend's status code."""
        return self._request('GET', '/api/job-roles', params={'limit': 1}).status_code


class JobRoleService(BackendClient):

    def _page(self, path, params, page, limit):
        response = self._request('GET', path, params=params)
        data = self._data(response, "Failed to fetch job roles") or {}
        return JobRolePage(
            job_roles=[_summary_from_backend(r) for r in data.get('jobRoles', [])],
            pagination=_page_meta(data.get('pagination'), page, limit),
        )

    def list_job_roles(self, page=1, limit=12):
        return self._page('/api/job-roles', {'page': page, 'limit': limit}, page, limit)

    def search_job_roles(self, params: SearchParams):
        page = params.page or 1
        limit = params.limit or 12
        query = {'page': page, 'limit': limit}
        query.update(params.filters())
        return self._page('/api/job-roles/search', query, page, limit)

    def get_job_role(self, job_role_id) -> Optional[JobRole]:
        response = self._request('GET', f'/api/job-roles/{job_role_id}')
        if response.status_code == 404:
            return None
        data = self._data(response, f"Failed to fetch job role {job_role_id}")
        return _job_role_from_backend(data) if data else None

    def create_job_role(self, payload) -> JobRole:
        response = self._request('POST', '/api/job-roles', json=payload)
        return _job_role_from_backend(self._data(response, "Failed to create job role"))

    def update_job_role(self, job_role_id, payload) -> JobRole:
        response = self._request('PUT', f'/api/job-roles/{job_role_id}', json=payload)
        if response.status_code == 404:
            raise BackendError("Job role not found", status_code=404)
        return _job_role_from_backend(self._data(response, "Failed to update job role"))

    def delete_job_role(self, job_role_id) -> bool:
        response = self._request('DELETE', f'/api/job-roles/{job_role_id}')
        if response.status_code == 404:
            return False
        self._check(response, "Failed to delete job role")
        return True

    def get_filter_options(self, defaults: JobRoleOptions) -> JobRoleOptions:
        """Dropdown values from the backend, or ``defaults`` if it cannot say."""
        try:
            capabilities = self._data(self._request('GET', '/api/job-roles/capabilities'), "capabilities")
            locations = self._data(self._request('GET', '/api/job-roles/locations'), "locations")
            bands = self._data(self._request('GET', '/api/job-roles/bands'), "bands")
        except BackendError as e:
            logger.warning("Falling back to default filter options: %s", e)
            return defaults
        return JobRoleOptions(
            locations=tuple(locations or defaults.locations),
            capabilities=tuple(capabilities or defaults.capabilities),
            bands=tuple(bands or defaults.bands),
            statuses=defaults.statuses,
        )

    def get_all_job_roles_for_export(self):
        roles = []
        page = 1
        while True:
            result = self.list_job_roles(page=page, limit=EXPORT_PAGE_SIZE)
            roles.extend(result.job_roles)
            if not result.pagination.has_next:
                break
            page += 1
            if page > EXPORT_MAX_PAGES:
                logger.warning("Stopped export after %s pages", EXPORT_MAX_PAGES)
                break
        return roles


class ApplicationService(BackendClient):

    def submit_application(self, job_role_id, applicant_name, applicant_email, cover_letter, cv) -> Application:
        """``cv`` is a Django UploadedFile; it is streamed to the backend as field "cv"."""
        data = {
            'jobRoleId': str(job_role_id),
            'applicantName': applicant_name,
            'applicantEmail': applicant_email,
        }
        if cover_letter:
            data['coverLetter'] = cover_letter
        files = {'cv': (cv.name, cv.read(), getattr(cv, 'content_type', None) or 'application/octet-stream')}
        response = self._request('POST', '/api/applications', data=data, files=files)
        if not response.ok:
            body = self._error_body(response)
            message = body.get('message') or body.get('error') or "Unknown error occurred"
            raise BackendError(f"Backend API error ({response.status_code}): {message}", response.status_code)
        return _application_from_backend(self._data(response, "Application submission failed"))

    def get_applicants(self, job_role_id, page=1, limit=10) -> ApplicantsPage:
        """The backend returns every application for the role; pages are cut here."""
        response = self._request('GET', f'/api/applications/job-role/{job_role_id}')
        if response.status_code == 404:
            raise BackendError("Job role not found", status_code=404)
        if response.status_code >= 500:
            raise BackendError("Backend server error. Please try again later.", response.status_code)
        everything = self._data(response, "Failed to fetch applicants") or []

        total = len(everything)
        total_pages = -(-total // limit)
        start = (page - 1) * limit
        first_role = (everything[0].get('jobRole') if everything else None) or {}
        return ApplicantsPage(
            applicants=[_application_from_backend(a) for a in everything[start:start + limit]],
            pagination=PageMeta(
                current_page=page,
                total_pages=total_pages,
                total_count=total,
                limit=limit,
                has_next=page < total_pages,
                has_previous=page > 1,
            ),
            job_role={
                'id': first_role.get('id', job_role_id),
                'role_name': first_role.get('jobRoleName', 'Unknown Job Role'),
                'status': first_role.get('status', 'unknown'),
            },
        )

    def download_cv(self, application_id) -> CvDownload:
        response = self._request('GET', f'/api/applications/{application_id}/cv')
        if response.status_code == 404:
            raise BackendError("CV not found", status_code=404)
        self._check(response, "Failed to download CV")
        disposition = response.headers.get('Content-Disposition', '')
        match = re.search(r'filename="?([^";]+)"?', disposition)
        return CvDownload(
            content=response.content,
            file_name=match.group(1) if match else f'application-{application_id}-cv',
            mime_type=response.headers.get('Content-Type', 'application/octet-stream'),
        )

    def set_applicant_status(self, application_id, status, reason=None):
        response = self._request(
            'PUT', f'/api/applications/{application_id}', json={'status': status, 'reason': reason},
        )
        if response.status_code == 404:
            raise BackendError("Application not found", status_code=404)
        return self._data(response, f"Failed to mark application as {status}")
