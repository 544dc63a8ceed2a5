# jobs/views.py
import logging

from django.conf import settings
from django.contrib import messages
from django.http import HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from accounts.decorators import admin_required, login_required

from .api import ApplicationService, BackendError, BackendUnavailable, JobRoleService
from .constants import DEFAULT_JOB_ROLE_OPTIONS, STATUS_OPEN
from .csv_export import generate_csv_filename, job_roles_to_csv
from .forms import ApplicationForm, JobRoleForm, check_cv_upload
from .pagination import SearchParams, build_pagination_urls, validate_pagination_params
from .validation import validate_id

logger = logging.getLogger(__name__)

INVALID_ID_MESSAGE = "Invalid job role ID provided. Please provide a valid numeric ID."
NOT_FOUND_MESSAGE = "Job role not found. The role you're looking for may have been removed or doesn't exist."
NOT_ACCEPTING_MESSAGE = (
    "This job role is not currently accepting applications. "
    "Please check back later or browse other opportunities."
)
APPLICANTS_MAX_LIMIT = 50


def get_job_role_service():
    return JobRoleService()


def get_application_service():
    return ApplicationService()


def _error(request, message, status, **extra):
    return render(request, 'error.html', {'message': message, **extra}, status=status)


def _options_context(options=DEFAULT_JOB_ROLE_OPTIONS):
    return {
        'locations': options.locations,
        'capabilities': options.capabilities,
        'bands': options.bands,
        'statuses': options.statuses,
    }


def home(request):
    return render(request, 'home.html', {'app_name': settings.APP_NAME})


@require_GET
def health(request):
    service = get_job_role_service()
    try:
        status_code = service.ping()
    except BackendError as e:
        return JsonResponse({
            'status': 'error',
            'backend': 'unreachable',
            'backendUrl': service.base_url,
            'message': e.message,
            'suggestion': f"Please ensure the backend API is running on {service.base_url}",
        }, status=503)
    if status_code >= 400:
        return JsonResponse({
            'status': 'error',
            'backend': 'error',
            'backendUrl': service.base_url,
            'statusCode': status_code,
            'message': f"Backend API returned status {status_code}",
        }, status=503)
    return JsonResponse({
        'status': 'ok',
        'backend': 'connected',
        'backendUrl': service.base_url,
        'message': 'Backend API is reachable',
    })


# -------------------------
# Browsing (public)
# -------------------------
@require_GET
def job_role_list(request):
    params = validate_pagination_params(request.GET.get('page'), request.GET.get('limit'))
    if not params.is_valid:
        return _error(request, params.error, 400)

    try:
        result = get_job_role_service().list_job_roles(page=params.page, limit=params.limit)
    except BackendError:
        logger.exception("Failed to load job roles page %s", params.page)
        return _error(request, "Sorry, we couldn't load the job roles at this time. Please try again later.", 500)

    pagination = None
    if result.pagination.total_pages > 0:
        pagination = build_pagination_urls(
            request.path, params.page, result.pagination.total_pages, params.limit,
        )
    return render(request, 'jobs/job_role_list.html', {
        'title': 'Available Job Roles',
        'job_roles': result.job_roles,
        'meta': result.pagination,
        'pagination': pagination,
    })


@require_GET
def job_role_search(request):
    params = validate_pagination_params(request.GET.get('page'), request.GET.get('limit'))
    if not params.is_valid:
        return _error(request, params.error, 400)

    search = SearchParams.from_query(request.GET, page=params.page, limit=params.limit)
    service = get_job_role_service()
    options = service.get_filter_options(DEFAULT_JOB_ROLE_OPTIONS)
    try:
        result = service.search_job_roles(search)
    except BackendError:
        logger.exception("Job role search failed for %s", search.filters())
        return _error(request, "Sorry, we couldn't search job roles at this time. Please try again later.", 500)

    pagination = None
    if result.pagination.total_pages > 0:
        pagination = build_pagination_urls(
            request.path, params.page, result.pagination.total_pages, params.limit, search,
        )
    return render(request, 'jobs/job_role_search.html', {
        'title': 'Search Job Roles',
        'job_roles': result.job_roles,
        'meta': result.pagination,
        'pagination': pagination,
        'search': search,
        **_options_context(options),
    })


@require_GET
def job_role_detail(request, job_role_id):
    role_id = validate_id(job_role_id)
    if role_id is None:
        return _error(request, INVALID_ID_MESSAGE, 400)
    try:
        job_role = get_job_role_service().get_job_role(role_id)
    except BackendError:
        logger.exception("Failed to load job role %s", role_id)
        return _error(request, "Sorry, we couldn't load the job role at this time. Please try again later.", 500)
    if job_role is None:
        return _error(request, NOT_FOUND_MESSAGE, 404)
    return render(request, 'jobs/job_role_detail.html', {
        'job_role': job_role,
        'created': request.GET.get('created') == 'true',
        'updated': request.GET.get('updated') == 'true',
    })


# -------------------------
# Admin: job role CRUD
# -------------------------
@admin_required
@require_http_methods(["GET", "POST"])
def job_role_create(request):
    context = {'title': 'Create Job Role', **_options_context()}
    if request.method == 'GET':
        return render(request, 'jobs/job_role_form.html', {**context, 'form': JobRoleForm()})

    data = request.POST.copy()
    # new roles always open, whatever the client sent
    data['status'] = STATUS_OPEN
    if not (data.get('numberOfOpenPositions') or '').strip():
        data['numberOfOpenPositions'] = '1'
    form = JobRoleForm(data)
    if not form.is_valid():
        return render(request, 'jobs/job_role_form.html', {**context, 'form': form, 'error': form.error}, status=400)

    try:
        job_role = get_job_role_service().create_job_role(form.backend_payload())
    except BackendError:
        logger.exception("Failed to create job role %r", form.cleaned_data.get('roleName'))
        return render(request, 'jobs/job_role_form.html', {
            **context,
            'form': form,
            'error': "Sorry, we couldn't create the job role at this time. Please try again later.",
        }, status=500)

    logger.info("Job role %s created", job_role.job_role_id)
    return redirect(f"/job-roles/{job_role.job_role_id}/?created=true")


@admin_required
@require_http_methods(["GET", "POST"])
def job_role_edit(request, job_role_id):
    role_id = validate_id(job_role_id)
    if role_id is None:
        return _error(request, INVALID_ID_MESSAGE, 400)

    service = get_job_role_service()
    context = {'title': 'Edit Job Role', 'job_role_id': role_id, 'is_update': True, **_options_context()}

    if request.method == 'GET':
        try:
            job_role = service.get_job_role(role_id)
        except BackendError:
            logger.exception("Failed to load job role %s for editing", role_id)
            return _error(
                request,
                "Sorry, we couldn't load the job role for editing at this time. Please try again later.",
                500,
            )
        if job_role is None:
            return _error(request, NOT_FOUND_MESSAGE, 404)
        form = JobRoleForm(initial=JobRoleForm.initial_from_job_role(job_role), is_update=True)
        return render(request, 'jobs/job_role_form.html', {**context, 'form': form, 'job_role': job_role})

    # past closing dates stay editable
    form = JobRoleForm(request.POST, is_update=True)
    if not form.is_valid():
        return render(request, 'jobs/job_role_form.html', {**context, 'form': form, 'error': form.error}, status=400)

    try:
        job_role = service.update_job_role(role_id, form.backend_payload())
    except BackendError as e:
        logger.exception("Failed to update job role %s", role_id)
        if e.status_code == 404:
            return _error(request, NOT_FOUND_MESSAGE, 404)
        return render(request, 'jobs/job_role_form.html', {
            **context,
            'form': form,
            'error': "Sorry, we couldn't update the job role at this time. Please try again later.",
        }, status=500)

    logger.info("Job role %s updated", role_id)
    return redirect(f"/job-roles/{job_role.job_role_id}/?updated=true")


@admin_required
@require_POST
def job_role_delete(request, job_role_id):
    role_id = validate_id(job_role_id)
    if role_id is None:
        return _error(request, INVALID_ID_MESSAGE, 400)
    try:
        deleted = get_job_role_service().delete_job_role(role_id)
    except BackendError:
        logger.exception("Failed to delete job role %s", role_id)
        return _error(request, "Sorry, we couldn't delete the job role at this time. Please try again later.", 500)
    if not deleted:
        return _error(request, NOT_FOUND_MESSAGE, 404)
    logger.info("Job role %s deleted", role_id)
    messages.success(request, "Job role deleted successfully.")
    return redirect('job_role_list')


@admin_required
@require_GET
def job_roles_export(request):
    try:
        job_roles = get_job_role_service().get_all_job_roles_for_export()
    except BackendError:
        logger.exception("Job role export failed")
        return _error(request, "Sorry, we couldn't generate the report at this time. Please try again later.", 500)
    if not job_roles:
        return _error(
            request,
            "No job roles available to export. Please ensure the backend is running and has data.",
            404,
        )

    logger.info("Exporting %s job role(s) to CSV", len(job_roles))
    response = HttpResponse(job_roles_to_csv(job_roles), content_type='text/csv')
    response['Content-Disposition'] = f'attachment; filename="{generate_csv_filename("job-roles-export")}"'
    return response


# -------------------------
# Applications
# -------------------------
@login_required
@require_http_methods(["GET", "POST"])
def apply(request, job_role_id):
    role_id = validate_id(job_role_id)
    if role_id is None:
        return _error(request, INVALID_ID_MESSAGE, 400)

    if request.method == 'POST':
        upload_error = check_cv_upload(request.FILES)
        if upload_error:
            return _error(request, upload_error, 400)

    try:
        job_role = get_job_role_service().get_job_role(role_id)
    except BackendError:
        logger.exception("Failed to load job role %s for application", role_id)
        return _error(
            request,
            "Sorry, we couldn't load the application form at this time. Please try again later.",
            500,
        )
    if job_role is None:
        return _error(request, NOT_FOUND_MESSAGE, 404)
    if not job_role.is_accepting_applications:
        logger.warning(
            "Application refused for job role %s (status=%s, positions=%s)",
            role_id, job_role.status, job_role.number_of_open_positions,
        )
        return _error(request, NOT_ACCEPTING_MESSAGE, 400)

    if request.method == 'GET':
        return render(request, 'jobs/apply.html', {'job_role': job_role, 'form': ApplicationForm()})

    form = ApplicationForm(request.POST, request.FILES)
    if not form.is_valid():
        return render(request, 'jobs/apply.html', {
            'job_role': job_role,
            'form': form,
            'error': form.error_summary(),
        }, status=400)

    data = form.cleaned_data
    try:
        application = get_application_service().submit_application(
            role_id,
            data['applicantName'],
            data['applicantEmail'],
            data.get('coverLetter') or None,
            data['cv'],
        )
    except BackendUnavailable as e:
        logger.exception("Application service unavailable")
        return _error(request, e.message, 500)
    except BackendError as e:
        logger.exception("Failed to submit application for job role %s", role_id)
        return _error(request, e.message or "Sorry, we couldn't submit your application at this time.", 500)

    logger.info("Application %s submitted for job role %s", application.application_id, role_id)
    return render(request, 'jobs/application_success.html', {'application': application, 'job_role': job_role})


@admin_required
@require_GET
def applicants(request, job_role_id):
    role_id = validate_id(job_role_id)
    if role_id is None:
        return _error(request, INVALID_ID_MESSAGE, 400)

    params = validate_pagination_params(request.GET.get('page'), request.GET.get('limit') or '10')
    if not params.is_valid or params.limit > APPLICANTS_MAX_LIMIT:
        return _error(request, "Invalid pagination parameters.", 400)

    try:
        job_role = get_job_role_service().get_job_role(role_id)
        if job_role is None:
            return _error(request, "Job role not found.", 404)
        result = get_application_service().get_applicants(role_id, page=params.page, limit=params.limit)
    except BackendUnavailable:
        logger.exception("Backend unavailable while listing applicants for %s", role_id)
        return _error(request, "Backend service is currently unavailable. Please try again later.", 500)
    except BackendError as e:
        logger.exception("Failed to list applicants for %s", role_id)
        return _error(request, e.message, 500)

    pagination = None
    if result.pagination.total_pages > 0:
        pagination = build_pagination_urls(request.path, params.page, result.pagination.total_pages, params.limit)
    return render(request, 'jobs/applicants.html', {
        'job_role': job_role,
        'applicants': result.applicants,
        'meta': result.pagination,
        'pagination': pagination,
    })


@admin_required
@require_GET
def download_cv(request, application_id):
    app_id = validate_id(application_id)
    if app_id is None:
        return _error(request, "Invalid application ID provided.", 400)
    try:
        cv = get_application_service().download_cv(app_id)
    except BackendError as e:
        if e.status_code == 404:
            return HttpResponse("CV not found for this application", status=404, content_type='text/plain')
        logger.exception("Failed to download CV for application %s", app_id)
        return HttpResponse(e.message, status=500, content_type='text/plain')

    response = HttpResponse(cv.content, content_type=cv.mime_type)
    response['Content-Disposition'] = f'attachment; filename="{cv.file_name}"'
    response['Content-Length'] = str(len(cv.content))
    return response


def _set_applicant_status(request, job_role_id, application_id, status):
    if validate_id(job_role_id) is None:
        return JsonResponse({'success': False, 'message': "Invalid job role ID provided."}, status=400)
    app_id = validate_id(application_id)
    if app_id is None:
        return JsonResponse({'success': False, 'message': "Invalid application ID provided."}, status=400)
    try:
        get_application_service().set_applicant_status(app_id, status, request.POST.get('reason') or None)
    except BackendError as e:
        logger.exception("Failed to mark application %s as %s", app_id, status)
        return JsonResponse({'success': False, 'message': e.message}, status=500)
    logger.info("Application %s marked %s", app_id, status)
    return JsonResponse({'success': True, 'message': f"Applicant {status} successfully"})


@admin_required
@require_POST
def accept_applicant(request, job_role_id, application_id):
    return _set_applicant_status(request, job_role_id, application_id, 'accepted')


@admin_required
@require_POST
def reject_applicant(request, job_role_id, application_id):
    return _set_applicant_status(request, job_role_id, application_id, 'rejected')
