import logging
from dataclasses import dataclass, asdict

from models.errors import ErrorKind, SalonApiError

logger = logging.getLogger(__name__)

ROLES = ('stylist', 'manager', 'admin')
ASSIGNABLE_ROLES = ('stylist', 'manager')


@dataclass
class StaffMember:
    id: str
    full_name: str
    role: str
    is_active: bool = True


@dataclass
class SessionUser:
    id: str
    full_name: str
    role: str

    def to_dict(self):
        return asdict(self)

    @staticmethod
    def from_dict(data):
        role = data['role']
        if role not in ROLES:
            raise ValueError(f'unknown role: {role}')
        return SessionUser(id=str(data['id']), full_name=str(data['full_name']), role=role)


@dataclass
class DutyChecklist:
    id: int
    name: str
    type: str = 'duty'


def list_active_staff(client):
    rows = client.select('staff', [
        ('select', 'id,full_name,role,is_active'),
        ('is_active', 'eq.true'),
        ('role', f'in.({",".join(ASSIGNABLE_ROLES)})'),
        ('order', 'full_name.asc'),
    ])
    return [
        StaffMember(
            id=str(row['id']),
            full_name=row.get('full_name') or '',
            role=row.get('role') or 'stylist',
            is_active=bool(row.get('is_active', True))
        )
        for row in rows
    ]


def pin_login(client, full_name, pin):
    """Name + PIN check, delegated to the pin_login rpc."""
    result = client.rpc('pin_login', {'p_full_name': full_name, 'p_pin': str(pin)})

    # rpc returning setof gives a list; a scalar record comes back as a dict
    if isinstance(result, list):
        row = result[0] if result else None
    else:
        row = result

    if not row:
        logger.info('PIN login rejected for %s', full_name)
        raise SalonApiError(ErrorKind.AUTH_FAILED, 'Invalid name + PIN combination')
    if not row.get('is_active', True) or row.get('role') not in ROLES:
        logger.info('PIN login for inactive or unknown user %s', full_name)
        raise SalonApiError(ErrorKind.AUTH_FAILED, 'User inactive or not found')

    return SessionUser(id=str(row['id']), full_name=row['full_name'], role=row['role'])


def list_duty_checklists(client):
    rows = client.select('checklists', [
        ('select', 'id,name,type,is_active'),
        ('is_active', 'eq.true'),
        ('type', 'eq.duty'),
        ('order', 'name.asc'),
    ])
    return [DutyChecklist(id=row['id'], name=row.get('name') or '', type=row.get('type') or 'duty') for row in rows]


def create_assignment_with_station(client, stylist_id, assignment_date, duty_checklist_id, created_by):
    """Create the day's duty assignment; the backend adds the matching station assignment."""
    assignment_id = client.rpc('create_daily_assignment_with_station', {
        'p_stylist_id': stylist_id,
        'p_assignment_date': assignment_date,
        'p_duty_checklist_id': duty_checklist_id,
        'p_created_by': created_by
    })
    logger.info('Assignment %s created: stylist=%s date=%s checklist=%s by=%s',
                assignment_id, stylist_id, assignment_date, duty_checklist_id, created_by)
    return assignment_id
