# jobs/constants.py
from dataclasses import dataclass
from typing import Tuple

LOCATIONS = (
    'Belfast, Northern Ireland',
    'Birmingham, England',
    'Derry~Londonderry, Northern Ireland',
    'Dublin, Ireland',
    'London, England',
    'Gdansk, Poland',
    'Helsinki, Finland',
    'Paris, France',
    'Antwerp, Belgium',
    'Buenos Aires, Argentina',
    'Indianapolis, United States',
    'Nova Scotia, Canada',
    'Toronto, Canada',
    'Remote',
)

CAPABILITIES = (
    'Engineering',
    'Analytics',
    'Product',
    'Design',
    'Quality Assurance',
    'Documentation',
    'Testing',
)

BANDS = ('Junior', 'Mid', 'Senior')

STATUS_OPEN = 'Open'
STATUS_CLOSED = 'Closed'
STATUS_ON_HOLD = 'On Hold'
STATUSES = (STATUS_OPEN, STATUS_CLOSED, STATUS_ON_HOLD)

# CV upload gate
CV_MAX_SIZE_BYTES = 5 * 1024 * 1024
CV_ALLOWED_MIME_TYPES = frozenset({
    'application/pdf',
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
})


@dataclass(frozen=True)
class JobRoleOptions:
    """
    Allowed values for the job role dropdowns. Tuples keep the display order;
    membership checks are exact and case-sensitive.
    """
    locations: Tuple[str, ...] = LOCATIONS
    capabilities: Tuple[str, ...] = CAPABILITIES
    bands: Tuple[str, ...] = BANDS
    statuses: Tuple[str, ...] = STATUSES


DEFAULT_JOB_ROLE_OPTIONS = JobRoleOptions()
