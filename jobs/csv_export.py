# jobs/csv_export.py
from django.utils import timezone

CSV_HEADERS = ('Job Role ID', 'Role Name', 'Location', 'Capability', 'Band', 'Closing Date', 'Status')


def escape_csv_field(value):
    """Quote a field when it contains a comma, quote or newline; double inner quotes."""
    text = str(value)
    if ',' in text or '"' in text or '\n' in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def job_roles_to_csv(job_roles):
    rows = [CSV_HEADERS]
    for role in job_roles:
        rows.append((
            role.job_role_id, role.role_name, role.location, role.capability,
            role.band, role.closing_date, role.status,
        ))
    return '\n'.join(','.join(escape_csv_field(f) for f in row) for row in rows)


def generate_csv_filename(prefix='job-roles', now=None):
    now = now or timezone.now()
    return f"{prefix}-{now.strftime('%Y-%m-%d-%H%M%S')}.csv"
